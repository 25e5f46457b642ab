# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Rendering types as source text for diagnostics and error payloads."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, List

from fragc.core.numbers import number_to_string

from .types import (
	AnonymousType,
	ArrayType,
	EnumLiteralType,
	EnumType,
	InterfaceType,
	IntersectionType,
	IntrinsicType,
	LiteralType,
	ObjectFlags,
	Signature,
	Symbol,
	SymbolFlags,
	Type,
	TypeFlags,
	TypeParameter,
	TypeReference,
	UnionType,
)

if TYPE_CHECKING:
	from .checker import TypeChecker

# Nesting depth past which object types print as `{ ...; }`.
_MAX_DEPTH = 3


class TypePrinter:
	def __init__(self, checker: "TypeChecker") -> None:
		self._checker = checker

	def type_to_string(self, t: Type) -> str:
		return self._write(t, 0)

	def signature_to_string(self, sig: Signature, depth: int = 0) -> str:
		return f"{self._params(sig, depth)} => {self._write(self._checker.get_return_type_of_signature(sig), depth)}"

	def _write(self, t: Type, depth: int) -> str:
		if t.alias_name is not None:
			return t.alias_name
		if isinstance(t, IntrinsicType):
			return t.intrinsic_name
		if isinstance(t, EnumLiteralType):
			return f"{t.base.symbol.name}.{t.symbol.name}"
		if isinstance(t, LiteralType):
			if t.flags & TypeFlags.STRING_LITERAL:
				return json.dumps(t.value, ensure_ascii=False)
			if t.flags & TypeFlags.BOOLEAN_LITERAL:
				return "true" if t.value else "false"
			return number_to_string(t.value)
		if isinstance(t, (EnumType, TypeParameter)):
			return t.symbol.name
		if isinstance(t, UnionType):
			# `undefined` goes last, the way people write optional types.
			ordered = sorted(t.types, key=lambda part: bool(part.flags & TypeFlags.UNDEFINED))
			return " | ".join(self._write_member(part, depth) for part in ordered)
		if isinstance(t, IntersectionType):
			return " & ".join(self._write_member(part, depth) for part in t.types)
		if isinstance(t, ArrayType):
			return f"{self._write_member(t.element_type, depth)}[]"
		if isinstance(t, TypeReference):
			args = ", ".join(self._write(arg, depth) for arg in t.type_arguments)
			return f"{t.symbol.name}<{args}>"
		if isinstance(t, InterfaceType):
			if t.type_parameters:
				return f"{t.symbol.name}<{', '.join(tp.symbol.name for tp in t.type_parameters)}>"
			return t.symbol.name
		if isinstance(t, AnonymousType):
			return self._write_anonymous(t, depth)
		return "?"

	def _write_member(self, t: Type, depth: int) -> str:
		text = self._write(t, depth)
		if t.alias_name is None and (
			isinstance(t, (UnionType, IntersectionType)) or self._is_function_type(t)
		):
			return f"({text})"
		return text

	def _is_function_type(self, t: Type) -> bool:
		if not isinstance(t, AnonymousType) or t.object_flags & ObjectFlags.ENUM_OBJECT:
			return False
		checker = self._checker
		return not checker.get_properties_of_type(t) and len(checker.get_signatures_of_type(t)) == 1

	def _write_anonymous(self, t: AnonymousType, depth: int) -> str:
		checker = self._checker
		if t.object_flags & ObjectFlags.ENUM_OBJECT and t.symbol is not None:
			return f"typeof {t.symbol.name}"
		properties = checker.get_properties_of_type(t)
		signatures = checker.get_signatures_of_type(t)
		if not properties and len(signatures) == 1:
			return self.signature_to_string(signatures[0], depth + 1)
		if not properties and not signatures:
			return "{}"
		if depth >= _MAX_DEPTH:
			return "{ ...; }"
		members: List[str] = []
		for sig in signatures:
			members.append(f"{self._params(sig, depth + 1)}: {self._write(checker.get_return_type_of_signature(sig), depth + 1)};")
		for prop in properties:
			members.extend(self._property(prop, depth + 1))
		return "{ " + " ".join(members) + " }"

	def _property(self, prop: Symbol, depth: int) -> List[str]:
		checker = self._checker
		mark = "?" if prop.is_optional else ""
		if prop.flags & SymbolFlags.METHOD:
			method_type = checker.get_non_optional_type_of_symbol(prop)
			return [
				f"{prop.name}{mark}{self._params(sig, depth)}: {self._write(checker.get_return_type_of_signature(sig), depth)};"
				for sig in checker.get_signatures_of_type(method_type)
			]
		return [f"{prop.name}{mark}: {self._write(checker.get_non_optional_type_of_symbol(prop), depth)};"]

	def _params(self, sig: Signature, depth: int) -> str:
		checker = self._checker
		parts: List[str] = []
		for index, param in enumerate(sig.parameters):
			rest = sig.has_rest_parameter and index == len(sig.parameters) - 1
			mark = "?" if param.is_optional else ""
			text = self._write(checker.get_non_optional_type_of_symbol(param), depth)
			parts.append(f"{'...' if rest else ''}{param.name}{mark}: {text}")
		return f"({', '.join(parts)})"


__all__ = ["TypePrinter"]
