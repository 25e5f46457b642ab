# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type model of the fragment checker.

Types are identity objects with a `flags` bit set; the flag values are the
ones TypeScript uses, so a type's classification (number, string literal,
union, ...) can be tested with the same masks people know from there.
Structured types resolve their members lazily through the checker, which
owns interning (literal, union, array and reference types are unique per
shape).

Symbols carry declarations plus the per-symbol "links" the checker fills in
(resolved type, declared type, enum value, instantiation origin).
"""

from __future__ import annotations

import itertools
from enum import IntFlag
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fragc.parser import ast


class TypeFlags(IntFlag):
	ANY = 1 << 0
	UNKNOWN = 1 << 1
	STRING = 1 << 2
	NUMBER = 1 << 3
	BOOLEAN = 1 << 4
	ENUM = 1 << 5
	STRING_LITERAL = 1 << 7
	NUMBER_LITERAL = 1 << 8
	BOOLEAN_LITERAL = 1 << 9
	ENUM_LITERAL = 1 << 10
	VOID = 1 << 14
	UNDEFINED = 1 << 15
	NEVER = 1 << 17
	TYPE_PARAMETER = 1 << 18
	OBJECT = 1 << 19
	UNION = 1 << 20
	INTERSECTION = 1 << 21

	ANY_OR_UNKNOWN = ANY | UNKNOWN
	LITERAL = STRING_LITERAL | NUMBER_LITERAL | BOOLEAN_LITERAL
	STRING_LIKE = STRING | STRING_LITERAL
	NUMBER_LIKE = NUMBER | NUMBER_LITERAL | ENUM | ENUM_LITERAL
	BOOLEAN_LIKE = BOOLEAN | BOOLEAN_LITERAL
	ENUM_LIKE = ENUM | ENUM_LITERAL
	VOID_LIKE = VOID | UNDEFINED
	PRIMITIVE = STRING | NUMBER | BOOLEAN | ENUM | LITERAL | ENUM_LITERAL | VOID | UNDEFINED
	UNION_OR_INTERSECTION = UNION | INTERSECTION
	STRUCTURED = OBJECT | UNION | INTERSECTION


class ObjectFlags(IntFlag):
	NONE = 0
	INTERFACE = 1 << 1
	REFERENCE = 1 << 2
	ANONYMOUS = 1 << 4
	OBJECT_LITERAL = 1 << 7
	ARRAY = 1 << 8
	ENUM_OBJECT = 1 << 9
	FRESH_LITERAL = 1 << 14


class SymbolFlags(IntFlag):
	NONE = 0
	FUNCTION_SCOPED_VARIABLE = 1 << 0
	BLOCK_SCOPED_VARIABLE = 1 << 1
	PROPERTY = 1 << 2
	ENUM_MEMBER = 1 << 3
	FUNCTION = 1 << 4
	INTERFACE = 1 << 6
	CONST_ENUM = 1 << 7
	REGULAR_ENUM = 1 << 8
	METHOD = 1 << 13
	TYPE_LITERAL = 1 << 11
	TYPE_PARAMETER = 1 << 18
	TYPE_ALIAS = 1 << 19
	OPTIONAL = 1 << 24
	TRANSIENT = 1 << 25

	VARIABLE = FUNCTION_SCOPED_VARIABLE | BLOCK_SCOPED_VARIABLE
	ENUM = CONST_ENUM | REGULAR_ENUM
	VALUE = VARIABLE | PROPERTY | ENUM_MEMBER | FUNCTION | ENUM | METHOD
	TYPE = INTERFACE | ENUM | TYPE_LITERAL | TYPE_PARAMETER | TYPE_ALIAS


_type_ids = itertools.count(1)
_symbol_ids = itertools.count(1)


class Symbol:
	"""A named entity: variable, parameter, property, function, interface, ..."""

	def __init__(self, flags: SymbolFlags, name: str, declarations: Optional[List[Any]] = None) -> None:
		self.id = next(_symbol_ids)
		self.flags = flags
		self.name = name
		self.declarations: List[Any] = list(declarations or [])
		self.value_declaration: Any = None
		self.parent: Optional[Symbol] = None
		self.is_const = False
		self.is_ambient = False
		# Checker links.
		self.type: Optional[Type] = None
		self.declared_type: Optional[Type] = None
		self.type_parameters: Optional[List[TypeParameter]] = None
		self.enum_value: Optional[float | int] = None
		self.target: Optional[Symbol] = None
		self.mapper: Optional[Dict["TypeParameter", "Type"]] = None
		# Type-parameter scope the declarations' type nodes resolve in.
		self.type_scope: Dict[str, "Type"] = {}

	@property
	def is_optional(self) -> bool:
		return bool(self.flags & SymbolFlags.OPTIONAL)

	def add_declaration(self, node: Any, flags: SymbolFlags) -> None:
		self.flags |= flags
		self.declarations.append(node)
		if flags & SymbolFlags.VALUE and self.value_declaration is None:
			self.value_declaration = node

	def __repr__(self) -> str:
		return f"Symbol({self.name!r}, {self.flags!r})"


class Type:
	flags: TypeFlags

	def __init__(self, flags: TypeFlags) -> None:
		self.id = next(_type_ids)
		self.flags = flags
		self.symbol: Optional[Symbol] = None
		self.alias_name: Optional[str] = None

	def __repr__(self) -> str:
		return f"{type(self).__name__}#{self.id}({self.flags!r})"


class IntrinsicType(Type):
	def __init__(self, flags: TypeFlags, name: str) -> None:
		super().__init__(flags)
		self.intrinsic_name = name


class LiteralType(Type):
	"""String, number or boolean literal type; `base` is what it widens to."""

	def __init__(self, flags: TypeFlags, value: Any, base: Type) -> None:
		super().__init__(flags)
		self.value = value
		self.base = base


class EnumType(Type):
	def __init__(self, symbol: Symbol) -> None:
		super().__init__(TypeFlags.ENUM)
		self.symbol = symbol
		self.members: List[Symbol] = []


class EnumLiteralType(LiteralType):
	def __init__(self, value: Any, enum_type: EnumType, member: Symbol) -> None:
		super().__init__(TypeFlags.ENUM_LITERAL | TypeFlags.NUMBER_LITERAL, value, enum_type)
		self.symbol = member


class TypeParameter(Type):
	def __init__(self, symbol: Symbol, constraint: Optional[Type] = None) -> None:
		super().__init__(TypeFlags.TYPE_PARAMETER)
		self.symbol = symbol
		self.constraint = constraint


class UnionType(Type):
	def __init__(self, types: Sequence[Type]) -> None:
		super().__init__(TypeFlags.UNION)
		self.types: Tuple[Type, ...] = tuple(types)


class IntersectionType(Type):
	def __init__(self, types: Sequence[Type]) -> None:
		super().__init__(TypeFlags.INTERSECTION)
		self.types: Tuple[Type, ...] = tuple(types)
		self.resolved: Optional[ResolvedMembers] = None


class ResolvedMembers:
	"""Properties (insertion ordered) and call signatures of a structured type."""

	def __init__(self, properties: Dict[str, Symbol], call_signatures: List["Signature"]) -> None:
		self.properties = properties
		self.call_signatures = call_signatures


class ObjectType(Type):
	def __init__(self, object_flags: ObjectFlags) -> None:
		super().__init__(TypeFlags.OBJECT)
		self.object_flags = object_flags
		self.resolved: Optional[ResolvedMembers] = None


class InterfaceType(ObjectType):
	"""Declared interface; generic interfaces are instantiated through `TypeReference`."""

	def __init__(self, symbol: Symbol, type_parameters: List[TypeParameter]) -> None:
		super().__init__(ObjectFlags.INTERFACE)
		self.symbol = symbol
		self.type_parameters = type_parameters
		self.instantiations: Dict[Tuple[int, ...], "TypeReference"] = {}


class TypeReference(ObjectType):
	def __init__(self, target: InterfaceType, type_arguments: Sequence[Type]) -> None:
		super().__init__(ObjectFlags.REFERENCE)
		self.target = target
		self.symbol = target.symbol
		self.type_arguments: Tuple[Type, ...] = tuple(type_arguments)


class ArrayType(ObjectType):
	def __init__(self, element_type: Type) -> None:
		super().__init__(ObjectFlags.ARRAY)
		self.element_type = element_type


class AnonymousType(ObjectType):
	"""
	Type literal, function type, object literal or an instantiation of one.

	Instantiated types keep `target` and `mapper` and resolve their members
	on first use.
	"""

	def __init__(
		self,
		object_flags: ObjectFlags = ObjectFlags.ANONYMOUS,
		*,
		symbol: Optional[Symbol] = None,
		declaration: Any = None,
		target: Optional["AnonymousType"] = None,
		mapper: Optional[Dict[TypeParameter, Type]] = None,
	) -> None:
		super().__init__(object_flags | ObjectFlags.ANONYMOUS)
		self.symbol = symbol
		self.declaration = declaration
		self.target = target
		self.mapper = mapper
		self.regular_type: Optional[AnonymousType] = None
		# Type-parameter scope of the declaring type node.
		self.type_scope: Dict[str, Type] = {}


class Signature:
	"""One call signature; the return type is resolved lazily by the checker."""

	def __init__(
		self,
		declaration: Any,
		parameters: List[Symbol],
		*,
		min_argument_count: int,
		has_rest_parameter: bool = False,
		return_type: Optional[Type] = None,
		target: Optional["Signature"] = None,
		mapper: Optional[Dict[TypeParameter, Type]] = None,
	) -> None:
		self.declaration = declaration
		self.parameters = parameters
		self.min_argument_count = min_argument_count
		self.has_rest_parameter = has_rest_parameter
		self.resolved_return_type = return_type
		self.target = target
		self.mapper = mapper
		self.type_scope: Dict[str, Type] = {}

	@property
	def is_async(self) -> bool:
		return bool(getattr(self.declaration, "is_async", False))

	def __repr__(self) -> str:
		names = ", ".join(p.name for p in self.parameters)
		return f"Signature({names})"


def is_function_like(node: Any) -> bool:
	return isinstance(node, (ast.ArrowFunction, ast.FunctionDecl))


__all__ = [
	"TypeFlags",
	"ObjectFlags",
	"SymbolFlags",
	"Symbol",
	"Type",
	"IntrinsicType",
	"LiteralType",
	"EnumType",
	"EnumLiteralType",
	"TypeParameter",
	"UnionType",
	"IntersectionType",
	"ResolvedMembers",
	"ObjectType",
	"InterfaceType",
	"TypeReference",
	"ArrayType",
	"AnonymousType",
	"Signature",
	"is_function_like",
]
