# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-04
"""
Type checker for fragments and declaration files.

The checker binds every file of a program into one global scope, then
checks files on demand (`get_diagnostics`). Types of symbols, signatures and
type annotations are resolved lazily and cached, so the order in which files
and expressions are visited does not matter; diagnostics are attributed to
the file the offending node lives in.

Function bodies are checked after the enclosing statement ("deferred"), once
the function's parameter types are known from annotations or from the
contextual type at the place the function is written.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from fragc.core.diagnostics import Diagnostic, sort_diagnostics
from fragc.core.numbers import normalize_number
from fragc.core.span import Span
from fragc.parser import ast

from . import messages as msg
from .binder import Binder, Scope
from .printer import TypePrinter
from .relations import TypeRelater, is_fresh_object_literal
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
	ObjectType,
	ResolvedMembers,
	Signature,
	Symbol,
	SymbolFlags,
	Type,
	TypeFlags,
	TypeParameter,
	TypeReference,
	UnionType,
)

logger = logging.getLogger(__name__)

# Global interfaces backing member access on primitives.
APPARENT_TYPE_NAMES = ("String", "Number", "Boolean")

_ARITHMETIC_OPERATORS = {"-", "*", "/", "%", "**"}
_RELATIONAL_OPERATORS = {"<", ">", "<=", ">="}
_EQUALITY_OPERATORS = {"===", "!==", "==", "!="}

Mapper = Dict[TypeParameter, Type]


class TypeChecker:
	def __init__(self, program: Any) -> None:
		self._program = program
		self._binder = Binder()
		for source_file in program.get_source_files():
			self._binder.bind_source_file(source_file)
		self._diagnostics = self._binder.diagnostics
		self._checked_files: Set[str] = set()
		self._global_diagnostics: Optional[List[Diagnostic]] = None

		self._node_types: Dict[Any, Type] = {}
		self._type_node_types: Dict[Any, Type] = {}
		self._resolved_symbols: Dict[Any, Symbol] = {}
		self._resolved_signatures: Dict[Any, Signature] = {}
		self._constant_values: Dict[Any, Any] = {}
		self._function_signatures: Dict[Any, Signature] = {}
		self._contextual_signatures: Dict[Any, Optional[Signature]] = {}
		self._deferred: List[Any] = []
		self._checked_bodies: Set[Any] = set()
		self._resolving_symbols: Set[int] = set()
		self._resolving_signatures: Set[int] = set()

		self._literal_types: Dict[Tuple[Any, ...], LiteralType] = {}
		self._union_types: Dict[Tuple[Any, ...], UnionType] = {}
		self._intersection_types: Dict[Tuple[int, ...], IntersectionType] = {}
		self._array_types: Dict[int, ArrayType] = {}
		self._instantiations: Dict[Tuple[Any, ...], Type] = {}
		self._union_properties: Dict[Tuple[int, str], Optional[Symbol]] = {}

		self.any_type = IntrinsicType(TypeFlags.ANY, "any")
		self.error_type = IntrinsicType(TypeFlags.ANY, "any")
		self.unknown_type = IntrinsicType(TypeFlags.UNKNOWN, "unknown")
		self.undefined_type = IntrinsicType(TypeFlags.UNDEFINED, "undefined")
		self.void_type = IntrinsicType(TypeFlags.VOID, "void")
		self.never_type = IntrinsicType(TypeFlags.NEVER, "never")
		self.string_type = IntrinsicType(TypeFlags.STRING, "string")
		self.number_type = IntrinsicType(TypeFlags.NUMBER, "number")
		self.boolean_type = IntrinsicType(TypeFlags.BOOLEAN, "boolean")
		self.false_type = self._literal(TypeFlags.BOOLEAN_LITERAL, False, self.boolean_type)
		self.true_type = self._literal(TypeFlags.BOOLEAN_LITERAL, True, self.boolean_type)
		self.empty_object_type = AnonymousType()
		self.empty_object_type.resolved = ResolvedMembers({}, [])
		self._intrinsics: Dict[str, Type] = {
			"any": self.any_type,
			"unknown": self.unknown_type,
			"undefined": self.undefined_type,
			"void": self.void_type,
			"never": self.never_type,
			"string": self.string_type,
			"number": self.number_type,
			"boolean": self.boolean_type,
		}
		self._binder.undefined_symbol.type = self.undefined_type

		self._relater = TypeRelater(self)
		self._printer = TypePrinter(self)

	# ================================================================ public API

	def get_global_diagnostics(self) -> List[Diagnostic]:
		if self._global_diagnostics is None:
			self._global_diagnostics = []
			for name in APPARENT_TYPE_NAMES:
				if self._get_global_type(name) is None:
					self._global_diagnostics.append(
						Diagnostic(
							message=msg.CANNOT_FIND_GLOBAL_TYPE.format(name),
							code=msg.CANNOT_FIND_GLOBAL_TYPE.tag,
							phase="typecheck",
							span=Span(),
						)
					)
		return list(self._global_diagnostics)

	def get_diagnostics(self, source_file: ast.SourceFile) -> List[Diagnostic]:
		self._check_source_file(source_file)
		return sort_diagnostics(self._diagnostics.get(source_file.file_name, []))

	def get_type_at_location(self, node: Any) -> Type:
		"""Type of an expression (or the declared type of a declaration node)."""
		file = self._binder.file_of.get(node)
		if file is not None:
			source_file = self._program.get_source_file(file)
			if source_file is not None:
				self._check_source_file(source_file)
		if isinstance(node, ast.Expr):
			return self._node_types.get(node) or self.check_expression(node)
		symbol = self._binder.symbol_of.get(node)
		if symbol is not None:
			return self.get_type_of_symbol(symbol)
		if isinstance(node, ast.TypeNode):
			return self.get_type_from_type_node(node)
		return self.error_type

	def get_symbol_at_location(self, node: Any) -> Optional[Symbol]:
		symbol = self._resolved_symbols.get(node)
		if symbol is None:
			symbol = self._binder.symbol_of.get(node)
		return symbol

	def get_symbol_of_declaration(self, node: Any) -> Optional[Symbol]:
		return self._binder.symbol_of.get(node)

	def get_file_of(self, node: Any) -> Optional[str]:
		return self._binder.file_of.get(node)

	@property
	def undefined_symbol(self) -> Symbol:
		return self._binder.undefined_symbol

	def get_resolved_signature(self, call: ast.Call) -> Optional[Signature]:
		return self._resolved_signatures.get(call)

	def get_signature_of_function(self, node: Any) -> Optional[Signature]:
		return self._function_signatures.get(node)

	def get_constant_value(self, node: Any) -> Optional[Any]:
		"""Value of an enum member access, which the code generator inlines."""
		return self._constant_values.get(node)

	def get_global_value_symbols(self) -> Dict[str, Symbol]:
		return {
			name: symbol for name, symbol in self._binder.globals.items() if symbol.flags & SymbolFlags.VALUE
		}

	def type_to_string(self, t: Type) -> str:
		return self._printer.type_to_string(t)

	def signature_to_string(self, sig: Signature) -> str:
		return self._printer.signature_to_string(sig)

	def is_array_type(self, t: Type) -> bool:
		return isinstance(t, ArrayType)

	def is_type_assignable_to(self, source: Type, target: Type) -> bool:
		return self._relater.is_assignable(source, target)

	# ================================================================ files

	def _check_source_file(self, source_file: ast.SourceFile) -> None:
		name = source_file.file_name
		if name in self._checked_files:
			return
		self._checked_files.add(name)
		logger.debug("checking %s", name)
		for stmt in source_file.statements:
			self._check_statement(stmt)
		self._check_deferred()

	def _check_deferred(self) -> None:
		while self._deferred:
			node = self._deferred.pop(0)
			self._check_function_body(node)

	# ================================================================ diagnostics

	def _error(self, node: Any, message: msg.Message, *args: object, notes: Sequence[str] = ()) -> None:
		file = self._binder.file_of.get(node)
		self._diagnostics.setdefault(file or "", []).append(
			Diagnostic(
				message=message.format(*args),
				code=message.tag,
				phase="typecheck",
				span=Span.from_loc(getattr(node, "loc", None), file=file),
				notes=list(notes),
			)
		)

	def _check_assignable(
		self,
		source: Type,
		target: Type,
		node: Any,
		message: msg.Message = msg.NOT_ASSIGNABLE,
	) -> bool:
		if self._relater.is_assignable(source, target):
			return True
		failure = self._relater.explain(source, target)
		if failure.excess_property is not None:
			prop = failure.excess_property
			where = prop.declarations[0] if prop.declarations else node
			self._error(
				where,
				msg.EXCESS_PROPERTY,
				prop.name,
				self.type_to_string(failure.excess_target or target),
			)
			return False
		self._error(
			node,
			message,
			self.type_to_string(self.get_regular_type(source)),
			self.type_to_string(target),
			notes=failure.notes,
		)
		return False

	# ================================================================ type construction

	def _literal(self, flags: TypeFlags, value: Any, base: Type) -> LiteralType:
		key = (int(flags), type(value).__name__ if flags & TypeFlags.BOOLEAN_LITERAL else "", value)
		existing = self._literal_types.get(key)
		if existing is None:
			existing = LiteralType(flags, value, base)
			self._literal_types[key] = existing
		return existing

	def get_number_literal_type(self, value: float | int) -> LiteralType:
		return self._literal(TypeFlags.NUMBER_LITERAL, normalize_number(value), self.number_type)

	def get_string_literal_type(self, value: str) -> LiteralType:
		return self._literal(TypeFlags.STRING_LITERAL, value, self.string_type)

	def get_boolean_literal_type(self, value: bool) -> LiteralType:
		return self.true_type if value else self.false_type

	def get_array_type(self, element: Type) -> ArrayType:
		existing = self._array_types.get(element.id)
		if existing is None:
			existing = ArrayType(element)
			self._array_types[element.id] = existing
		return existing

	def get_union_type(self, types: Iterable[Type], alias_name: Optional[str] = None) -> Type:
		flat: List[Type] = []
		seen: Set[int] = set()
		for t in types:
			for part in t.types if isinstance(t, UnionType) else (t,):
				if part.id not in seen:
					seen.add(part.id)
					flat.append(part)
		includes = TypeFlags(0)
		for t in flat:
			includes |= t.flags
		if includes & TypeFlags.ANY:
			return self.error_type if any(t is self.error_type for t in flat) else self.any_type
		if includes & TypeFlags.UNKNOWN:
			return self.unknown_type
		result: List[Type] = []
		for t in flat:
			f = t.flags
			if f & TypeFlags.NEVER:
				continue
			if f & TypeFlags.STRING_LITERAL and includes & TypeFlags.STRING:
				continue
			if f & TypeFlags.NUMBER_LITERAL and includes & TypeFlags.NUMBER:
				continue
			if f & TypeFlags.BOOLEAN_LITERAL and includes & TypeFlags.BOOLEAN:
				continue
			if f & TypeFlags.ENUM_LITERAL and any(other is t.base for other in flat):
				continue
			result.append(t)
		if self.true_type in result and self.false_type in result:
			result = [t for t in result if t is not self.true_type and t is not self.false_type]
			result.append(self.boolean_type)
		if not result:
			return self.never_type
		if len(result) == 1:
			return result[0]
		result.sort(key=lambda t: t.id)
		key: Tuple[Any, ...] = tuple(t.id for t in result) + ((alias_name,) if alias_name else ())
		existing = self._union_types.get(key)
		if existing is None:
			existing = UnionType(result)
			existing.alias_name = alias_name
			self._union_types[key] = existing
		return existing

	def get_intersection_type(self, types: Iterable[Type]) -> Type:
		flat: List[Type] = []
		for t in types:
			for part in t.types if isinstance(t, IntersectionType) else (t,):
				if part not in flat:
					flat.append(part)
		if any(t.flags & TypeFlags.NEVER for t in flat):
			return self.never_type
		if any(t.flags & TypeFlags.ANY for t in flat):
			return self.any_type
		flat = [t for t in flat if not t.flags & TypeFlags.UNKNOWN]
		primitive_kinds = {
			kind
			for t in flat
			for kind in (TypeFlags.STRING_LIKE, TypeFlags.NUMBER_LIKE, TypeFlags.BOOLEAN_LIKE, TypeFlags.VOID_LIKE)
			if t.flags & kind
		}
		if len(primitive_kinds) > 1:
			return self.never_type
		if not flat:
			return self.unknown_type
		if len(flat) == 1:
			return flat[0]
		key = tuple(sorted(t.id for t in flat))
		existing = self._intersection_types.get(key)
		if existing is None:
			existing = IntersectionType(flat)
			self._intersection_types[key] = existing
		return existing

	def get_type_reference(self, target: InterfaceType, args: Sequence[Type]) -> TypeReference:
		key = tuple(a.id for a in args)
		existing = target.instantiations.get(key)
		if existing is None:
			existing = TypeReference(target, args)
			target.instantiations[key] = existing
		return existing

	# ================================================================ widening and helpers

	def get_widened_literal_type(self, t: Type) -> Type:
		if isinstance(t, LiteralType):
			return t.base
		if isinstance(t, UnionType):
			return self.get_union_type(self.get_widened_literal_type(part) for part in t.types)
		return t

	def get_regular_type(self, t: Type) -> Type:
		"""The non-fresh version of an object literal type."""
		if not is_fresh_object_literal(t):
			return t
		if t.regular_type is None:
			regular = AnonymousType(t.object_flags & ~ObjectFlags.FRESH_LITERAL, symbol=t.symbol, declaration=t.declaration)
			regular.resolved = t.resolved
			t.regular_type = regular
		return t.regular_type

	def get_widened_type(self, t: Type) -> Type:
		return self.get_regular_type(self.get_widened_literal_type(t))

	def remove_undefined(self, t: Type) -> Type:
		if isinstance(t, UnionType):
			return self.get_union_type(part for part in t.types if not part.flags & TypeFlags.VOID_LIKE)
		return t

	def _contains_undefined(self, t: Type) -> bool:
		if isinstance(t, UnionType):
			return any(part.flags & TypeFlags.VOID_LIKE for part in t.types)
		return bool(t.flags & TypeFlags.VOID_LIKE)

	def _all_parts(self, t: Type, mask: TypeFlags) -> bool:
		if isinstance(t, UnionType):
			return all(part.flags & mask for part in t.types)
		return bool(t.flags & mask)

	def _some_part(self, t: Type, mask: TypeFlags) -> bool:
		if isinstance(t, UnionType):
			return any(part.flags & mask for part in t.types)
		return bool(t.flags & mask)

	def _is_literal_of_context(self, t: Type, contextual: Optional[Type]) -> bool:
		if contextual is None or not isinstance(t, LiteralType):
			return False
		if t.flags & TypeFlags.STRING_LITERAL:
			return self._some_part(contextual, TypeFlags.STRING_LITERAL)
		if t.flags & TypeFlags.NUMBER_LITERAL:
			return self._some_part(contextual, TypeFlags.NUMBER_LITERAL | TypeFlags.ENUM)
		return self._some_part(contextual, TypeFlags.BOOLEAN_LITERAL)

	def _widen_for_context(self, t: Type, contextual: Optional[Type]) -> Type:
		if isinstance(t, UnionType):
			return self.get_union_type(self._widen_for_context(part, contextual) for part in t.types)
		if self._is_literal_of_context(t, contextual):
			return t
		return self.get_widened_literal_type(t)

	# ================================================================ globals

	def _resolve_name(self, name: str, scope: Optional[Scope], meaning: SymbolFlags) -> Optional[Symbol]:
		current = scope if scope is not None else self._binder.global_scope
		while current is not None:
			symbol = current.locals.get(name)
			if symbol is not None and symbol.flags & meaning:
				return symbol
			current = current.parent
		return None

	def _get_global_type(self, name: str, arity: int = 0) -> Optional[Type]:
		symbol = self._binder.globals.get(name)
		if symbol is None or not symbol.flags & SymbolFlags.INTERFACE:
			return None
		declared = self.get_declared_type_of_symbol(symbol)
		if not isinstance(declared, InterfaceType) or len(declared.type_parameters) != arity:
			return None
		return declared

	def get_global_promise_type(self) -> Optional[InterfaceType]:
		return self._get_global_type("Promise", 1)

	def create_promise_type(self, t: Type) -> Type:
		promise = self.get_global_promise_type()
		if promise is None:
			return self.error_type
		return self.get_type_reference(promise, [t])

	def get_promised_type(self, t: Type) -> Optional[Type]:
		"""`T` for `Promise<T>` (the global Promise), otherwise None."""
		promise = self.get_global_promise_type()
		if promise is not None and isinstance(t, TypeReference) and t.target is promise:
			return t.type_arguments[0]
		return None

	def get_awaited_type(self, t: Type) -> Type:
		if isinstance(t, UnionType):
			return self.get_union_type(self.get_awaited_type(part) for part in t.types)
		promised = self.get_promised_type(t)
		if promised is not None:
			return self.get_awaited_type(promised)
		return t

	def get_apparent_type(self, t: Type) -> Type:
		if isinstance(t, TypeParameter):
			return self.get_apparent_type(t.constraint) if t.constraint is not None else self.empty_object_type
		if t.flags & TypeFlags.STRING_LIKE:
			return self._get_global_type("String") or self.empty_object_type
		if t.flags & TypeFlags.NUMBER_LIKE:
			return self._get_global_type("Number") or self.empty_object_type
		if t.flags & TypeFlags.BOOLEAN_LIKE:
			return self._get_global_type("Boolean") or self.empty_object_type
		return t

	# ================================================================ symbols

	def get_type_of_symbol(self, symbol: Symbol) -> Type:
		if symbol.type is not None:
			return symbol.type
		if symbol.id in self._resolving_symbols:
			return self.any_type
		self._resolving_symbols.add(symbol.id)
		try:
			t = self._compute_type_of_symbol(symbol)
		finally:
			self._resolving_symbols.discard(symbol.id)
		if symbol.type is None:
			symbol.type = t
		return symbol.type

	def get_non_optional_type_of_symbol(self, symbol: Symbol) -> Type:
		t = self.get_type_of_symbol(symbol)
		if symbol.is_optional and isinstance(t, UnionType):
			return self.get_union_type(part for part in t.types if not part.flags & TypeFlags.UNDEFINED)
		return t

	def _compute_type_of_symbol(self, symbol: Symbol) -> Type:
		if symbol.target is not None:
			return self.instantiate_type(self.get_type_of_symbol(symbol.target), symbol.mapper or {})
		if symbol.flags & SymbolFlags.ENUM_MEMBER:
			self.get_declared_type_of_symbol(symbol.parent)
			return symbol.type or self.error_type
		if symbol.flags & SymbolFlags.ENUM:
			return self._get_enum_object_type(symbol)
		if symbol.flags & SymbolFlags.FUNCTION:
			declarations = [d for d in symbol.declarations if isinstance(d, ast.FunctionDecl)]
			# An implementation is not callable through its overload list.
			overloads = [d for d in declarations if d.body is None]
			if overloads and len(overloads) < len(declarations):
				declarations = overloads
			fn_type = AnonymousType(symbol=symbol)
			fn_type.resolved = ResolvedMembers({}, [self._get_signature_of_declaration(d, {}) for d in declarations])
			return fn_type
		if symbol.flags & SymbolFlags.METHOD:
			method_type = AnonymousType(symbol=symbol)
			method_type.resolved = ResolvedMembers(
				{},
				[
					self._get_signature_of_declaration(d, symbol.type_scope)
					for d in symbol.declarations
					if isinstance(d, ast.MethodSignature)
				],
			)
			return self._add_optionality(method_type, symbol)
		declaration = symbol.value_declaration or (symbol.declarations[0] if symbol.declarations else None)
		if isinstance(declaration, ast.PropertySignature):
			return self._add_optionality(self.get_type_from_type_node(declaration.type, symbol.type_scope), symbol)
		if isinstance(declaration, ast.VarDeclarator):
			return self._get_type_of_variable(symbol, declaration)
		if isinstance(declaration, ast.Param):
			return self._get_type_of_parameter(symbol, declaration)
		return self.error_type

	def _add_optionality(self, t: Type, symbol: Symbol) -> Type:
		if symbol.is_optional:
			return self.get_union_type([t, self.undefined_type])
		return t

	def _get_type_of_variable(self, symbol: Symbol, declaration: ast.VarDeclarator) -> Type:
		if declaration.type is not None:
			return self.get_type_from_type_node(declaration.type)
		if declaration.init is None:
			return self.any_type
		init_type = self.check_expression(declaration.init)
		if symbol.is_const:
			return self.get_regular_type(init_type)
		return self.get_widened_type(init_type)

	def _get_type_of_parameter(self, symbol: Symbol, declaration: ast.Param) -> Type:
		if declaration.type is not None:
			t = self.get_type_from_type_node(declaration.type, symbol.type_scope)
		elif declaration.rest:
			t = self.get_array_type(self.any_type)
		else:
			t = self.any_type
		return self._add_optionality(t, symbol)

	def get_declared_type_of_symbol(self, symbol: Symbol) -> Type:
		if symbol.declared_type is not None:
			return symbol.declared_type
		if symbol.flags & SymbolFlags.INTERFACE:
			return self._get_declared_type_of_interface(symbol)
		if symbol.flags & SymbolFlags.ENUM:
			return self._get_declared_type_of_enum(symbol)
		if symbol.flags & SymbolFlags.TYPE_ALIAS:
			return self._get_declared_type_of_alias(symbol)
		return self.error_type

	def _create_type_parameters(self, params: List[ast.TypeParam], scope: Dict[str, Type]) -> List[TypeParameter]:
		result: List[TypeParameter] = []
		for param in params:
			tp_symbol = Symbol(SymbolFlags.TYPE_PARAMETER, param.name, [param])
			tp = TypeParameter(tp_symbol)
			tp_symbol.declared_type = tp
			scope[param.name] = tp
			result.append(tp)
		for param, tp in zip(params, result):
			if param.constraint is not None:
				tp.constraint = self.get_type_from_type_node(param.constraint, scope)
		return result

	def _get_declared_type_of_interface(self, symbol: Symbol) -> InterfaceType:
		first = next(d for d in symbol.declarations if isinstance(d, ast.InterfaceDecl))
		scope: Dict[str, Type] = {}
		interface = InterfaceType(symbol, [])
		symbol.declared_type = interface
		symbol.type_scope = scope
		interface.type_parameters = self._create_type_parameters(first.type_params, scope)
		symbol.type_parameters = interface.type_parameters
		return interface

	def _get_declared_type_of_alias(self, symbol: Symbol) -> Type:
		declaration = next(d for d in symbol.declarations if isinstance(d, ast.TypeAliasDecl))
		scope: Dict[str, Type] = {}
		symbol.type_scope = scope
		symbol.type_parameters = self._create_type_parameters(declaration.type_params, scope)
		symbol.declared_type = self.error_type
		if isinstance(declaration.type, ast.UnionTypeNode):
			t = self.get_union_type(
				[self.get_type_from_type_node(part, scope) for part in declaration.type.types], alias_name=symbol.name
			)
			self._type_node_types[declaration.type] = t
		else:
			t = self.get_type_from_type_node(declaration.type, scope)
			if isinstance(t, AnonymousType) and t.alias_name is None and t.declaration is declaration.type:
				t.alias_name = symbol.name
		symbol.declared_type = t
		return t

	def _get_declared_type_of_enum(self, symbol: Symbol) -> EnumType:
		enum_type = EnumType(symbol)
		symbol.declared_type = enum_type
		members: Dict[str, Symbol] = {}
		for declaration in symbol.declarations:
			if not isinstance(declaration, ast.EnumDecl):
				continue
			next_value: float | int = 0
			for member in declaration.members:
				if member.name in members:
					self._error(member, msg.DUPLICATE_IDENTIFIER, member.name)
					continue
				if member.init is not None:
					value = self._evaluate_constant(member.init, members, symbol)
					if value is None:
						self._error(member.init, msg.ENUM_INITIALIZER_NOT_CONSTANT)
						value = next_value
				else:
					value = next_value
				value = normalize_number(value)
				next_value = value + 1
				member_symbol = Symbol(SymbolFlags.ENUM_MEMBER, member.name, [member])
				member_symbol.value_declaration = member
				member_symbol.parent = symbol
				member_symbol.enum_value = value
				member_symbol.type = EnumLiteralType(value, enum_type, member_symbol)
				members[member.name] = member_symbol
				enum_type.members.append(member_symbol)
		return enum_type

	def _evaluate_constant(self, expr: ast.Expr, members: Dict[str, Symbol], enum_symbol: Symbol) -> Optional[float | int]:
		if isinstance(expr, ast.NumberLiteral):
			return expr.value
		if isinstance(expr, ast.Unary) and expr.op in ("-", "+"):
			operand = self._evaluate_constant(expr.operand, members, enum_symbol)
			if operand is None:
				return None
			return -operand if expr.op == "-" else operand
		if isinstance(expr, ast.Binary) and expr.op in ("+", "-", "*", "/", "%", "**"):
			left = self._evaluate_constant(expr.left, members, enum_symbol)
			right = self._evaluate_constant(expr.right, members, enum_symbol)
			if left is None or right is None:
				return None
			if expr.op == "+":
				return left + right
			if expr.op == "-":
				return left - right
			if expr.op == "*":
				return left * right
			if expr.op == "**":
				return left**right
			if right == 0:
				if expr.op == "%" or left == 0:
					return math.nan
				return math.copysign(math.inf, left)
			if expr.op == "/":
				return left / right
			return math.fmod(left, right)
		if isinstance(expr, ast.Identifier) and expr.name in members:
			return members[expr.name].enum_value
		if isinstance(expr, ast.Member) and isinstance(expr.target, ast.Identifier):
			other = self._binder.globals.get(expr.target.name)
			if other is not None and other.flags & SymbolFlags.ENUM:
				if other is enum_symbol:
					member = members.get(expr.name)
					return member.enum_value if member is not None else None
				other_type = self.get_declared_type_of_symbol(other)
				for member in getattr(other_type, "members", ()):
					if member.name == expr.name:
						return member.enum_value
		return None

	def _get_enum_object_type(self, symbol: Symbol) -> Type:
		enum_type = self.get_declared_type_of_symbol(symbol)
		obj = AnonymousType(ObjectFlags.ENUM_OBJECT, symbol=symbol)
		members = getattr(enum_type, "members", [])
		obj.resolved = ResolvedMembers({m.name: m for m in members}, [])
		return obj

	# ================================================================ type nodes

	def get_type_from_type_node(self, node: ast.TypeNode, scope: Optional[Dict[str, Type]] = None) -> Type:
		cached = self._type_node_types.get(node)
		if cached is not None:
			return cached
		t = self._compute_type_from_type_node(node, scope or {})
		self._type_node_types[node] = t
		return t

	def _compute_type_from_type_node(self, node: ast.TypeNode, scope: Dict[str, Type]) -> Type:
		if isinstance(node, ast.TypeRef):
			return self._get_type_from_type_reference(node, scope)
		if isinstance(node, ast.ArrayTypeNode):
			return self.get_array_type(self.get_type_from_type_node(node.element, scope))
		if isinstance(node, ast.UnionTypeNode):
			return self.get_union_type(self.get_type_from_type_node(part, scope) for part in node.types)
		if isinstance(node, ast.IntersectionTypeNode):
			return self.get_intersection_type(self.get_type_from_type_node(part, scope) for part in node.types)
		if isinstance(node, ast.LiteralTypeNode):
			if isinstance(node.value, bool):
				return self.get_boolean_literal_type(node.value)
			if isinstance(node.value, str):
				return self.get_string_literal_type(node.value)
			return self.get_number_literal_type(node.value)
		if isinstance(node, (ast.TypeLiteralNode, ast.FunctionTypeNode)):
			t = AnonymousType(declaration=node)
			t.type_scope = scope
			return t
		return self.error_type

	def _get_type_from_type_reference(self, node: ast.TypeRef, scope: Dict[str, Type]) -> Type:
		name = node.name
		if name in scope:
			if node.args:
				self._error(node, msg.TYPE_IS_NOT_GENERIC, name)
			return scope[name]
		intrinsic = self._intrinsics.get(name)
		if intrinsic is not None:
			if node.args:
				self._error(node, msg.TYPE_IS_NOT_GENERIC, name)
			return intrinsic
		symbol = self._resolve_name(name, None, SymbolFlags.TYPE)
		if symbol is None:
			value = self._resolve_name(name, None, SymbolFlags.VALUE)
			if value is not None:
				self._error(node, msg.REFERS_TO_A_VALUE, name)
			else:
				self._error(node, msg.CANNOT_FIND_NAME, name)
			return self.error_type
		declared = self.get_declared_type_of_symbol(symbol)
		params = symbol.type_parameters or []
		args = [self.get_type_from_type_node(arg, scope) for arg in node.args]
		if params:
			if len(args) != len(params):
				shown = f"{name}<{', '.join(p.symbol.name for p in params)}>"
				self._error(node, msg.GENERIC_TYPE_REQUIRES_ARGUMENTS, shown, len(params))
				return self.error_type
			if isinstance(declared, InterfaceType):
				return self.get_type_reference(declared, args)
			return self.instantiate_type(declared, dict(zip(params, args)))
		if args:
			self._error(node, msg.TYPE_IS_NOT_GENERIC, name)
			return self.error_type
		return declared

	# ================================================================ instantiation

	def instantiate_type(self, t: Type, mapper: Mapper) -> Type:
		if not mapper:
			return t
		if isinstance(t, TypeParameter):
			return mapper.get(t, t)
		if isinstance(t, UnionType):
			return self.get_union_type((self.instantiate_type(part, mapper) for part in t.types), t.alias_name)
		if isinstance(t, IntersectionType):
			return self.get_intersection_type(self.instantiate_type(part, mapper) for part in t.types)
		if isinstance(t, ArrayType):
			return self.get_array_type(self.instantiate_type(t.element_type, mapper))
		if isinstance(t, TypeReference):
			return self.get_type_reference(t.target, [self.instantiate_type(arg, mapper) for arg in t.type_arguments])
		if isinstance(t, AnonymousType) and not t.object_flags & (ObjectFlags.OBJECT_LITERAL | ObjectFlags.ENUM_OBJECT):
			if t.target is not None:
				target = t.target
				combined = {tp: self.instantiate_type(value, mapper) for tp, value in (t.mapper or {}).items()}
			else:
				target = t
				combined = dict(mapper)
			key = (target.id,) + tuple(sorted((tp.id, value.id) for tp, value in combined.items()))
			existing = self._instantiations.get(key)
			if existing is None:
				existing = AnonymousType(symbol=target.symbol, declaration=target.declaration, target=target, mapper=combined)
				existing.alias_name = target.alias_name
				self._instantiations[key] = existing
			return existing
		return t

	def _instantiate_symbol(self, symbol: Symbol, mapper: Mapper) -> Symbol:
		clone = Symbol(symbol.flags | SymbolFlags.TRANSIENT, symbol.name, symbol.declarations)
		clone.value_declaration = symbol.value_declaration
		clone.parent = symbol.parent
		clone.enum_value = symbol.enum_value
		clone.target = symbol
		clone.mapper = mapper
		return clone

	def _instantiate_signature(self, sig: Signature, mapper: Mapper) -> Signature:
		return Signature(
			sig.declaration,
			[self._instantiate_symbol(p, mapper) for p in sig.parameters],
			min_argument_count=sig.min_argument_count,
			has_rest_parameter=sig.has_rest_parameter,
			target=sig,
			mapper=mapper,
		)

	# ================================================================ members

	def resolve_structured_type_members(self, t: Type) -> ResolvedMembers:
		if isinstance(t, IntersectionType):
			if t.resolved is None:
				t.resolved = self._resolve_intersection_members(t)
			return t.resolved
		if not isinstance(t, ObjectType):
			return ResolvedMembers({}, [])
		if t.resolved is None:
			t.resolved = ResolvedMembers({}, [])
			t.resolved = self._compute_members(t)
		return t.resolved

	def _compute_members(self, t: ObjectType) -> ResolvedMembers:
		if isinstance(t, ArrayType):
			length = Symbol(SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT, "length")
			length.type = self.number_type
			return ResolvedMembers({"length": length}, [])
		if isinstance(t, InterfaceType):
			return self._resolve_interface_members(t)
		if isinstance(t, TypeReference):
			declared = self.resolve_structured_type_members(t.target)
			mapper = dict(zip(t.target.type_parameters, t.type_arguments))
			return ResolvedMembers(
				{name: self._instantiate_symbol(p, mapper) for name, p in declared.properties.items()},
				[self._instantiate_signature(s, mapper) for s in declared.call_signatures],
			)
		if isinstance(t, AnonymousType):
			if t.target is not None:
				declared = self.resolve_structured_type_members(t.target)
				mapper = t.mapper or {}
				return ResolvedMembers(
					{name: self._instantiate_symbol(p, mapper) for name, p in declared.properties.items()},
					[self._instantiate_signature(s, mapper) for s in declared.call_signatures],
				)
			scope = t.type_scope
			if isinstance(t.declaration, ast.FunctionTypeNode):
				return ResolvedMembers({}, [self._get_signature_of_declaration(t.declaration, scope)])
			if isinstance(t.declaration, ast.TypeLiteralNode):
				return self._resolve_declared_members([t.declaration.members], scope)
		return ResolvedMembers({}, [])

	def _resolve_declared_members(self, member_groups: Sequence[List[ast.TypeMember]], scope: Dict[str, Type]) -> ResolvedMembers:
		"""
		Members of one or more declaration bodies of the same type.

		Groups are in declaration order. Properties keep first-seen order;
		overloads from later groups come before those of earlier ones.
		"""
		properties: Dict[str, Symbol] = {}
		ranked: Dict[str, List[Tuple[int, Any]]] = {}
		for rank, group in enumerate(member_groups):
			seen: Set[str] = set()
			for member in group:
				if not isinstance(member, (ast.PropertySignature, ast.MethodSignature)):
					continue
				kind = SymbolFlags.METHOD if isinstance(member, ast.MethodSignature) else SymbolFlags.PROPERTY
				symbol = properties.get(member.name)
				if symbol is None:
					symbol = Symbol(kind, member.name)
					symbol.type_scope = scope
					properties[member.name] = symbol
					ranked[member.name] = []
				elif not symbol.flags & kind or (kind == SymbolFlags.PROPERTY and member.name in seen):
					self._error(member, msg.DUPLICATE_IDENTIFIER, member.name)
					continue
				seen.add(member.name)
				if member.optional:
					symbol.flags |= SymbolFlags.OPTIONAL
				ranked[member.name].append((-rank, member))
		for name, symbol in properties.items():
			entries = sorted(ranked[name], key=lambda entry: entry[0])
			symbol.declarations = [member for _, member in entries]
			symbol.value_declaration = symbol.declarations[0]
		call_signatures: List[Signature] = []
		for group in reversed(member_groups):
			for member in group:
				if isinstance(member, ast.CallSignatureNode):
					call_signatures.append(self._get_signature_of_declaration(member, scope))
		return ResolvedMembers(properties, call_signatures)

	def _resolve_interface_members(self, t: InterfaceType) -> ResolvedMembers:
		symbol = t.symbol
		declarations = [d for d in symbol.declarations if isinstance(d, ast.InterfaceDecl)]
		scope = symbol.type_scope
		own = self._resolve_declared_members([d.members for d in declarations], scope)
		properties = dict(own.properties)
		call_signatures = list(own.call_signatures)
		for base in self._get_base_types(t):
			inherited = self.resolve_structured_type_members(base)
			for name, prop in inherited.properties.items():
				properties.setdefault(name, prop)
			if not own.call_signatures:
				call_signatures.extend(inherited.call_signatures)
		return ResolvedMembers(properties, call_signatures)

	def _get_base_types(self, t: InterfaceType) -> List[Type]:
		bases: List[Type] = []
		for declaration in t.symbol.declarations:
			if not isinstance(declaration, ast.InterfaceDecl):
				continue
			for ref in declaration.extends:
				base = self.get_type_from_type_node(ref, t.symbol.type_scope)
				if base is t or (isinstance(base, TypeReference) and base.target is t):
					continue
				if isinstance(base, ObjectType):
					bases.append(base)
		return bases

	def _resolve_intersection_members(self, t: IntersectionType) -> ResolvedMembers:
		properties: Dict[str, Symbol] = {}
		signatures: List[Signature] = []
		for part in t.types:
			part = self.get_apparent_type(part)
			resolved = self.resolve_structured_type_members(part)
			signatures.extend(resolved.call_signatures)
			for name, prop in resolved.properties.items():
				existing = properties.get(name)
				if existing is None:
					properties[name] = prop
					continue
				merged = Symbol(SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT, name, existing.declarations + prop.declarations)
				if existing.is_optional and prop.is_optional:
					merged.flags |= SymbolFlags.OPTIONAL
				merged.type = self.get_intersection_type([self.get_type_of_symbol(existing), self.get_type_of_symbol(prop)])
				properties[name] = merged
		return ResolvedMembers(properties, signatures)

	def get_properties_of_type(self, t: Type) -> List[Symbol]:
		if isinstance(t, UnionType):
			first = self.get_properties_of_type(t.types[0])
			result = []
			for prop in first:
				union_prop = self.get_property_of_type(t, prop.name)
				if union_prop is not None:
					result.append(union_prop)
			return result
		return list(self.resolve_structured_type_members(t).properties.values())

	def get_property_of_type(self, t: Type, name: str) -> Optional[Symbol]:
		if isinstance(t, UnionType):
			return self._get_union_property(t, name)
		if t.flags & TypeFlags.PRIMITIVE:
			t = self.get_apparent_type(t)
		return self.resolve_structured_type_members(t).properties.get(name)

	def _get_union_property(self, t: UnionType, name: str) -> Optional[Symbol]:
		key = (t.id, name)
		if key in self._union_properties:
			return self._union_properties[key]
		props = []
		for part in t.types:
			prop = self.get_property_of_type(self.get_apparent_type(part), name)
			if prop is None:
				self._union_properties[key] = None
				return None
			props.append(prop)
		merged = Symbol(SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT, name, [d for p in props for d in p.declarations])
		if any(p.is_optional for p in props):
			merged.flags |= SymbolFlags.OPTIONAL
		merged.type = self.get_union_type(self.get_type_of_symbol(p) for p in props)
		self._union_properties[key] = merged
		return merged

	def get_signatures_of_type(self, t: Type) -> List[Signature]:
		if isinstance(t, UnionType):
			per_part = [self.get_signatures_of_type(part) for part in t.types]
			if all(len(sigs) == 1 for sigs in per_part) and len({len(sigs[0].parameters) for sigs in per_part}) == 1:
				return per_part[0]
			return []
		return list(self.resolve_structured_type_members(t).call_signatures)

	# ================================================================ signatures

	def _get_signature_of_declaration(self, node: Any, scope: Dict[str, Type]) -> Signature:
		existing = self._function_signatures.get(node)
		if existing is not None:
			return existing
		parameters: List[Symbol] = []
		min_count = 0
		has_rest = False
		for index, param in enumerate(node.params):
			symbol = self._binder.symbol_of.get(param)
			if symbol is None:
				flags = SymbolFlags.FUNCTION_SCOPED_VARIABLE
				if param.optional:
					flags |= SymbolFlags.OPTIONAL
				symbol = Symbol(flags, param.name, [param])
				symbol.value_declaration = param
			symbol.type_scope = scope
			parameters.append(symbol)
			if param.rest:
				has_rest = True
			elif not param.optional:
				min_count = index + 1
		sig = Signature(node, parameters, min_argument_count=min_count, has_rest_parameter=has_rest)
		sig.type_scope = scope
		self._function_signatures[node] = sig
		return sig

	def get_return_type_of_signature(self, sig: Signature) -> Type:
		if sig.resolved_return_type is not None:
			return sig.resolved_return_type
		if sig.target is not None:
			t = self.instantiate_type(self.get_return_type_of_signature(sig.target), sig.mapper or {})
			sig.resolved_return_type = t
			return t
		if id(sig) in self._resolving_signatures:
			return self.any_type
		self._resolving_signatures.add(id(sig))
		try:
			t = self._compute_return_type(sig)
		finally:
			self._resolving_signatures.discard(id(sig))
		sig.resolved_return_type = t
		return t

	def _compute_return_type(self, sig: Signature) -> Type:
		declaration = sig.declaration
		if declaration.return_type is not None:
			return self.get_type_from_type_node(declaration.return_type, sig.type_scope)
		body = getattr(declaration, "body", None)
		if body is None:
			return self.any_type
		return self._infer_return_type(declaration)

	def _get_type_at_position(self, sig: Signature, index: int) -> Optional[Type]:
		count = len(sig.parameters)
		if sig.has_rest_parameter and index >= count - 1:
			rest_type = self.get_type_of_symbol(sig.parameters[-1])
			if isinstance(rest_type, ArrayType):
				return rest_type.element_type
			return self.any_type
		if index < count:
			return self.get_type_of_symbol(sig.parameters[index])
		return None

	def _get_contextual_signature(self, contextual: Optional[Type]) -> Optional[Signature]:
		if contextual is None:
			return None
		contextual = self.remove_undefined(contextual)
		signatures = self.get_signatures_of_type(self.get_apparent_type(contextual))
		return signatures[0] if len(signatures) == 1 else None

	def _contextual_return_type(self, node: Any) -> Optional[Type]:
		sig = self._function_signatures.get(node)
		if sig is not None and node.return_type is not None:
			declared = self.get_return_type_of_signature(sig)
			if node.is_async:
				return self.get_promised_type(declared) or declared
			return declared
		contextual_sig = self._contextual_signatures.get(node)
		if contextual_sig is not None:
			t = self.get_return_type_of_signature(contextual_sig)
			if node.is_async:
				return self.get_awaited_type(t)
			return t
		return None

	def _reduce_subtypes(self, types: List[Type]) -> List[Type]:
		"""Drop object types assignable to another candidate; the first of two equivalent types wins."""
		kept: List[Type] = []
		for t in types:
			if t.flags & TypeFlags.OBJECT and any(self.is_type_assignable_to(t, k) for k in kept if k.flags & TypeFlags.OBJECT):
				continue
			if t.flags & TypeFlags.OBJECT:
				kept = [k for k in kept if not (k.flags & TypeFlags.OBJECT and self.is_type_assignable_to(k, t))]
			kept.append(t)
		return kept

	def _infer_return_type(self, node: Any) -> Type:
		contextual = self._contextual_return_type(node)
		body = node.body
		if isinstance(body, ast.Block):
			returns = list(_collect_returns(body))
			types = [self.check_expression(r.value, contextual) for r in returns if r.value is not None]
			if not types:
				result: Type = self.void_type
			else:
				if any(r.value is None for r in returns) or _end_reachable(body.statements):
					types.append(self.undefined_type)
				result = self.get_union_type(self._reduce_subtypes([self._widen_for_context(self.get_regular_type(t), contextual) for t in types]))
		else:
			result = self._widen_for_context(self.check_expression(body, contextual), contextual)
		if node.is_async:
			if self.get_global_promise_type() is None:
				return self.error_type
			return self.create_promise_type(self.get_awaited_type(result))
		return result

	# ================================================================ statements

	def _check_statement(self, stmt: ast.Stmt) -> None:
		if isinstance(stmt, ast.ExprStmt):
			self.check_expression(stmt.expr)
		elif isinstance(stmt, ast.VarStmt):
			self._check_variable_statement(stmt)
		elif isinstance(stmt, ast.ReturnStmt):
			self._check_return(stmt)
		elif isinstance(stmt, ast.Block):
			for inner in stmt.statements:
				self._check_statement(inner)
		elif isinstance(stmt, ast.IfStmt):
			self.check_expression(stmt.test)
			self._check_statement(stmt.then)
			if stmt.otherwise is not None:
				self._check_statement(stmt.otherwise)
		elif isinstance(stmt, ast.WhileStmt):
			self.check_expression(stmt.test)
			self._check_statement(stmt.body)
		elif isinstance(stmt, ast.FunctionDecl):
			self._check_function_declaration(stmt)
		elif isinstance(stmt, ast.TypeAliasDecl):
			symbol = self._binder.symbol_of.get(stmt)
			if symbol is not None:
				self.get_declared_type_of_symbol(symbol)
				self._check_type_nodes_of(stmt.type, symbol.type_scope)
		elif isinstance(stmt, ast.InterfaceDecl):
			self._check_interface(stmt)
		elif isinstance(stmt, ast.EnumDecl):
			symbol = self._binder.symbol_of.get(stmt)
			if symbol is not None:
				self.get_declared_type_of_symbol(symbol)
		elif isinstance(stmt, ast.ClassDecl):
			self._error(stmt, msg.CLASS_NOT_SUPPORTED)
		elif isinstance(stmt, ast.ImportDecl):
			self._error(stmt, msg.CANNOT_FIND_MODULE, stmt.module)

	def _check_variable_statement(self, stmt: ast.VarStmt) -> None:
		for decl in stmt.declarations:
			symbol = self._binder.symbol_of.get(decl)
			if decl.type is not None:
				self._check_type_nodes_of(decl.type, {})
			if symbol is None:
				continue
			declared = self.get_type_of_symbol(symbol)
			if stmt.kind == "const" and decl.init is None and not stmt.ambient:
				self._error(decl, msg.CONST_MUST_BE_INITIALIZED)
			if decl.type is not None and decl.init is not None:
				init_type = self.check_expression(decl.init, declared)
				self._check_assignable(init_type, declared, decl)
			elif decl.init is not None and symbol.value_declaration is not decl:
				self.check_expression(decl.init)

	def _check_return(self, stmt: ast.ReturnStmt) -> None:
		container = self._binder.container_of.get(stmt)
		if container is None:
			if stmt.value is not None:
				self.check_expression(stmt.value)
			return
		contextual = self._contextual_return_type(container)
		if stmt.value is None:
			return
		value_type = self.check_expression(stmt.value, contextual)
		if container.return_type is not None and contextual is not None:
			if container.is_async:
				value_type = self.get_awaited_type(value_type)
			self._check_assignable(value_type, contextual, stmt.value)

	def _check_function_declaration(self, node: ast.FunctionDecl) -> None:
		symbol = self._binder.symbol_of.get(node)
		sig = self._get_signature_of_declaration(node, {})
		for param in node.params:
			if param.type is not None:
				self._check_type_nodes_of(param.type, {})
			elif not node.ambient:
				self._error(param, msg.IMPLICIT_ANY_PARAMETER, param.name, "any[]" if param.rest else "any")
		if node.return_type is not None:
			self._check_type_nodes_of(node.return_type, {})
		if symbol is not None:
			self.get_type_of_symbol(symbol)
		if node.body is not None:
			self._check_async_signature(node, sig)
			self._deferred.append(node)

	def _check_interface(self, stmt: ast.InterfaceDecl) -> None:
		symbol = self._binder.symbol_of.get(stmt)
		if symbol is None:
			return
		declared = self.get_declared_type_of_symbol(symbol)
		scope = symbol.type_scope
		for ref in stmt.extends:
			self._check_type_nodes_of(ref, scope)
		self.resolve_structured_type_members(declared)
		for member in stmt.members:
			for param in getattr(member, "params", ()):
				if param.type is not None:
					self._check_type_nodes_of(param.type, scope)
			member_type = getattr(member, "type", None)
			if member_type is not None:
				self._check_type_nodes_of(member_type, scope)
			return_type = getattr(member, "return_type", None)
			if return_type is not None:
				self._check_type_nodes_of(return_type, scope)

	def _check_type_nodes_of(self, node: ast.TypeNode, scope: Dict[str, Type]) -> None:
		"""Resolve a type annotation and everything nested in it, reporting bad references."""
		self.get_type_from_type_node(node, scope)
		if isinstance(node, ast.TypeRef):
			for arg in node.args:
				self._check_type_nodes_of(arg, scope)
		elif isinstance(node, ast.ArrayTypeNode):
			self._check_type_nodes_of(node.element, scope)
		elif isinstance(node, (ast.UnionTypeNode, ast.IntersectionTypeNode)):
			for part in node.types:
				self._check_type_nodes_of(part, scope)
		elif isinstance(node, ast.FunctionTypeNode):
			for param in node.params:
				if param.type is not None:
					self._check_type_nodes_of(param.type, scope)
			self._check_type_nodes_of(node.return_type, scope)
		elif isinstance(node, ast.TypeLiteralNode):
			for member in node.members:
				for param in getattr(member, "params", ()):
					if param.type is not None:
						self._check_type_nodes_of(param.type, scope)
				for attr in ("type", "return_type"):
					child = getattr(member, attr, None)
					if child is not None:
						self._check_type_nodes_of(child, scope)

	def _check_async_signature(self, node: Any, sig: Signature) -> None:
		if not node.is_async:
			return
		if self.get_global_promise_type() is None:
			self._error(node, msg.ASYNC_REQUIRES_PROMISE)
			sig.resolved_return_type = self.error_type
			return
		if node.return_type is not None:
			declared = self.get_return_type_of_signature(sig)
			if declared is not self.error_type and self.get_promised_type(declared) is None:
				self._error(node.return_type, msg.ASYNC_RETURN_TYPE, self.type_to_string(declared))

	def _check_function_body(self, node: Any) -> None:
		if node in self._checked_bodies:
			return
		self._checked_bodies.add(node)
		sig = self._function_signatures.get(node)
		body = node.body
		if isinstance(body, ast.Block):
			for stmt in body.statements:
				self._check_statement(stmt)
			self._check_all_paths_return(node, body)
		else:
			contextual = self._contextual_return_type(node)
			value_type = self.check_expression(body, contextual)
			if node.return_type is not None and contextual is not None:
				if node.is_async:
					value_type = self.get_awaited_type(value_type)
				self._check_assignable(value_type, contextual, body)
		if sig is not None:
			self.get_return_type_of_signature(sig)

	def _check_all_paths_return(self, node: Any, body: ast.Block) -> None:
		returns = list(_collect_returns(body))
		has_value = any(r.value is not None for r in returns)
		declared: Optional[Type] = None
		if node.return_type is not None:
			declared = self._contextual_return_type(node)
			if declared is None or self._some_part(declared, TypeFlags.VOID | TypeFlags.ANY | TypeFlags.UNDEFINED):
				return
			if declared.flags & TypeFlags.NEVER:
				return
			if not has_value:
				self._error(node.return_type, msg.MUST_RETURN_A_VALUE)
				return
		if has_value and (_end_reachable(body.statements) or any(r.value is None for r in returns)):
			self._error(node.return_type if node.return_type is not None else node, msg.NOT_ALL_PATHS_RETURN)

	# ================================================================ expressions

	def check_expression(self, node: ast.Expr, contextual: Optional[Type] = None) -> Type:
		cached = self._node_types.get(node)
		if cached is not None:
			return cached
		t = self._compute_expression_type(node, contextual)
		self._node_types[node] = t
		return t

	def _compute_expression_type(self, node: ast.Expr, contextual: Optional[Type]) -> Type:
		if isinstance(node, ast.NumberLiteral):
			return self.get_number_literal_type(node.value)
		if isinstance(node, ast.StringLiteral):
			return self.get_string_literal_type(node.value)
		if isinstance(node, ast.BooleanLiteral):
			return self.get_boolean_literal_type(node.value)
		if isinstance(node, ast.Identifier):
			return self._check_identifier(node)
		if isinstance(node, ast.ObjectLiteral):
			return self._check_object_literal(node, contextual)
		if isinstance(node, ast.ArrayLiteral):
			return self._check_array_literal(node, contextual)
		if isinstance(node, ast.Member):
			return self._check_member(node)
		if isinstance(node, ast.Element):
			return self._check_element(node)
		if isinstance(node, ast.Call):
			return self._check_call(node)
		if isinstance(node, ast.Unary):
			return self._check_unary(node)
		if isinstance(node, ast.Await):
			return self._check_await(node)
		if isinstance(node, ast.Binary):
			return self._check_binary(node, contextual)
		if isinstance(node, ast.Conditional):
			self.check_expression(node.test)
			return self.get_union_type(
				[self.check_expression(node.then, contextual), self.check_expression(node.otherwise, contextual)]
			)
		if isinstance(node, ast.Assign):
			return self._check_assignment(node)
		if isinstance(node, ast.AsExpr):
			return self._check_as_expression(node)
		if isinstance(node, ast.ArrowFunction):
			return self._check_arrow_function(node, contextual)
		return self.error_type

	# ---------------------------------------------------------------- names

	def _check_identifier(self, node: ast.Identifier, *, in_access: bool = False) -> Type:
		scope = self._binder.scope_of.get(node)
		symbol = self._resolve_name(node.name, scope, SymbolFlags.VALUE)
		if symbol is None:
			if self._resolve_name(node.name, scope, SymbolFlags.TYPE) is not None:
				self._error(node, msg.ONLY_REFERS_TO_A_TYPE, node.name)
			else:
				self._error(node, msg.CANNOT_FIND_NAME, node.name)
			return self.error_type
		self._resolved_symbols[node] = symbol
		if symbol.flags & SymbolFlags.CONST_ENUM and not in_access:
			self._error(node, msg.CONST_ENUM_AS_VALUE)
		self._check_block_scoped_use(node, symbol)
		return self.get_type_of_symbol(symbol)

	def _check_block_scoped_use(self, node: ast.Identifier, symbol: Symbol) -> None:
		declaration = symbol.value_declaration
		if not symbol.flags & SymbolFlags.BLOCK_SCOPED_VARIABLE or not isinstance(declaration, ast.VarDeclarator):
			return
		binder = self._binder
		if binder.file_of.get(declaration) != binder.file_of.get(node):
			return
		if binder.container_of.get(declaration) is not binder.container_of.get(node):
			return
		end = (declaration.loc.end_line or declaration.loc.line, declaration.loc.end_column or declaration.loc.column)
		if (node.loc.line, node.loc.column) < end:
			self._error(node, msg.USED_BEFORE_DECLARATION, node.name)

	def _check_access_target(self, target: ast.Expr) -> Type:
		if isinstance(target, ast.Identifier):
			t = self._node_types.get(target)
			if t is None:
				t = self._check_identifier(target, in_access=True)
				self._node_types[target] = t
			return t
		return self.check_expression(target)

	def _check_non_nullable(self, t: Type, target: ast.Expr) -> Type:
		if t.flags & TypeFlags.VOID_LIKE or (isinstance(t, UnionType) and self._contains_undefined(t)):
			text = _expression_text(target)
			if text is not None and not t.flags & TypeFlags.VOID_LIKE:
				self._error(target, msg.POSSIBLY_UNDEFINED_NAMED, text)
			else:
				self._error(target, msg.OBJECT_POSSIBLY_UNDEFINED)
			stripped = self.remove_undefined(t)
			return self.error_type if stripped.flags & TypeFlags.NEVER else stripped
		return t

	# ---------------------------------------------------------------- access

	def _check_member(self, node: ast.Member) -> Type:
		target_type = self._check_access_target(node.target)
		if target_type.flags & TypeFlags.ANY:
			return target_type
		if target_type.flags & TypeFlags.UNKNOWN:
			self._error(node.target, msg.OBJECT_IS_UNKNOWN)
			return self.error_type
		target_type = self._check_non_nullable(target_type, node.target)
		if target_type.flags & TypeFlags.ANY:
			return target_type
		prop = self.get_property_of_type(self.get_apparent_type(target_type), node.name)
		if prop is None:
			self._error(node, msg.PROPERTY_DOES_NOT_EXIST, node.name, self.type_to_string(target_type))
			return self.error_type
		self._resolved_symbols[node] = prop
		if prop.flags & SymbolFlags.ENUM_MEMBER:
			self._constant_values[node] = prop.enum_value
		return self.get_type_of_symbol(prop)

	def _check_element(self, node: ast.Element) -> Type:
		target_type = self._check_access_target(node.target)
		index_type = self.check_expression(node.index)
		if target_type.flags & TypeFlags.ANY:
			return target_type
		if target_type.flags & TypeFlags.UNKNOWN:
			self._error(node.target, msg.OBJECT_IS_UNKNOWN)
			return self.error_type
		target_type = self._check_non_nullable(target_type, node.target)
		if target_type.flags & TypeFlags.ANY:
			return target_type
		if isinstance(index_type, LiteralType) and index_type.flags & TypeFlags.STRING_LITERAL:
			prop = self.get_property_of_type(self.get_apparent_type(target_type), index_type.value)
			if prop is not None:
				self._resolved_symbols[node] = prop
				if prop.flags & SymbolFlags.ENUM_MEMBER:
					self._constant_values[node] = prop.enum_value
				return self.get_type_of_symbol(prop)
		elif index_type.flags & TypeFlags.ANY or self._all_parts(index_type, TypeFlags.NUMBER_LIKE):
			if isinstance(target_type, ArrayType):
				return target_type.element_type
			if self._all_parts(target_type, TypeFlags.STRING_LIKE):
				return self.string_type
		self._error(
			node.index, msg.IMPLICIT_ANY_INDEX, self.type_to_string(index_type), self.type_to_string(target_type)
		)
		return self.error_type

	# ---------------------------------------------------------------- literals

	def _contextual_property_type(self, contextual: Optional[Type], name: str) -> Optional[Type]:
		if contextual is None:
			return None
		contextual = self.remove_undefined(contextual)
		if contextual.flags & TypeFlags.ANY_OR_UNKNOWN:
			return None
		parts = contextual.types if isinstance(contextual, UnionType) else (contextual,)
		found = []
		for part in parts:
			if part.flags & TypeFlags.STRUCTURED:
				prop = self.get_property_of_type(part, name)
				if prop is not None:
					found.append(self.get_type_of_symbol(prop))
		if not found:
			return None
		return self.get_union_type(found)

	def _check_object_literal(self, node: ast.ObjectLiteral, contextual: Optional[Type]) -> Type:
		properties: Dict[str, Symbol] = {}
		for prop in node.properties:
			if prop.name in properties:
				self._error(prop, msg.DUPLICATE_OBJECT_PROPERTY)
			prop_context = self._contextual_property_type(contextual, prop.name)
			value_type = self.check_expression(prop.value, prop_context)
			symbol = Symbol(SymbolFlags.PROPERTY | SymbolFlags.TRANSIENT, prop.name, [prop])
			symbol.value_declaration = prop
			symbol.type = self._widen_for_context(value_type, prop_context)
			properties[prop.name] = symbol
		t = AnonymousType(ObjectFlags.OBJECT_LITERAL | ObjectFlags.FRESH_LITERAL, declaration=node)
		t.resolved = ResolvedMembers(properties, [])
		return t

	def _check_array_literal(self, node: ast.ArrayLiteral, contextual: Optional[Type]) -> Type:
		element_context: Optional[Type] = None
		if contextual is not None:
			parts = contextual.types if isinstance(contextual, UnionType) else (contextual,)
			for part in parts:
				if isinstance(part, ArrayType):
					element_context = part.element_type
					break
		types = [
			self._widen_for_context(self.check_expression(element, element_context), element_context)
			for element in node.elements
		]
		if not types:
			return self.get_array_type(self.never_type)
		return self.get_array_type(self.get_union_type(types))

	# ---------------------------------------------------------------- calls

	def _check_call(self, node: ast.Call) -> Type:
		callee_type = self.check_expression(node.callee)
		if callee_type.flags & TypeFlags.ANY:
			for arg in node.args:
				self.check_expression(arg)
			return callee_type
		if self._contains_undefined(callee_type) and not callee_type.flags & TypeFlags.VOID_LIKE:
			self._error(node.callee, msg.INVOKE_POSSIBLY_UNDEFINED)
			callee_type = self.remove_undefined(callee_type)
		signatures = self.get_signatures_of_type(self.get_apparent_type(callee_type))
		if not signatures:
			self._error(
				node.callee,
				msg.NOT_CALLABLE,
				notes=[msg.NO_CALL_SIGNATURES.format(self.type_to_string(callee_type))],
			)
			for arg in node.args:
				self.check_expression(arg)
			return self.error_type
		sig = self._resolve_call(node, signatures)
		self._resolved_signatures[node] = sig
		return self.get_return_type_of_signature(sig)

	def _resolve_call(self, node: ast.Call, signatures: List[Signature]) -> Signature:
		args = node.args
		count = len(args)
		context_sensitive = [_is_context_sensitive(arg) for arg in args]
		candidates = [sig for sig in signatures if _has_correct_arity(sig, count)]
		if not candidates:
			self._report_arity_error(node, signatures)
			chosen = signatures[0]
			self._check_arguments_against(chosen, args, report=False)
			return chosen
		context = candidates[0]
		arg_types: List[Optional[Type]] = []
		for index, arg in enumerate(args):
			if context_sensitive[index]:
				arg_types.append(None)
			else:
				arg_types.append(self.check_expression(arg, self._get_type_at_position(context, index)))
		chosen: Optional[Signature] = None
		for sig in candidates:
			if all(
				arg_types[i] is None or self._relater.is_assignable(arg_types[i], self._parameter_type(sig, i))
				for i in range(count)
			):
				chosen = sig
				break
		if chosen is None:
			if len(candidates) == 1:
				chosen = candidates[0]
				self._check_arguments_against(chosen, args, report=True)
			else:
				self._error(node.callee, msg.NO_OVERLOAD_MATCHES)
				chosen = candidates[0]
				self._check_arguments_against(chosen, args, report=False)
			return chosen
		for index, arg in enumerate(args):
			if context_sensitive[index]:
				param_type = self._parameter_type(chosen, index)
				arg_type = self.check_expression(arg, param_type)
				self._check_assignable(arg_type, param_type, arg, msg.ARGUMENT_NOT_ASSIGNABLE)
		return chosen

	def _parameter_type(self, sig: Signature, index: int) -> Type:
		t = self._get_type_at_position(sig, index)
		return t if t is not None else self.any_type

	def _check_arguments_against(self, sig: Signature, args: List[ast.Expr], *, report: bool) -> None:
		reported = False
		for index, arg in enumerate(args):
			param_type = self._get_type_at_position(sig, index)
			arg_type = self.check_expression(arg, param_type)
			if report and not reported and param_type is not None:
				if not self._check_assignable(arg_type, param_type, arg, msg.ARGUMENT_NOT_ASSIGNABLE):
					reported = True

	def _report_arity_error(self, node: ast.Call, signatures: List[Signature]) -> None:
		count = len(node.args)
		min_count = min(sig.min_argument_count for sig in signatures)
		if any(sig.has_rest_parameter for sig in signatures):
			self._error(node, msg.EXPECTED_AT_LEAST_ARGUMENTS, min_count, count)
			return
		max_count = max(len(sig.parameters) for sig in signatures)
		expected = str(min_count) if min_count == max_count else f"{min_count}-{max_count}"
		self._error(node, msg.EXPECTED_ARGUMENTS, expected, count)

	# ---------------------------------------------------------------- operators

	def _check_unary(self, node: ast.Unary) -> Type:
		if node.op in ("-", "+") and isinstance(node.operand, ast.NumberLiteral):
			self.check_expression(node.operand)
			value = node.operand.value
			return self.get_number_literal_type(-value if node.op == "-" else value)
		self.check_expression(node.operand)
		if node.op == "!":
			return self.boolean_type
		if node.op == "typeof":
			return self.string_type
		return self.number_type

	def _check_await(self, node: ast.Await) -> Type:
		container = self._binder.container_of.get(node)
		if container is None or not container.is_async:
			self._error(node, msg.AWAIT_OUTSIDE_ASYNC)
		return self.get_awaited_type(self.check_expression(node.operand))

	def _check_binary(self, node: ast.Binary, contextual: Optional[Type]) -> Type:
		op = node.op
		if op in ("&&", "||"):
			left = self.check_expression(node.left, contextual)
			right = self.check_expression(node.right, contextual if contextual is not None else left)
			if op == "&&":
				return self.get_union_type([self._falsy_part(left), right])
			return self.get_union_type([self._truthy_part(left), right])
		left = self.check_expression(node.left)
		right = self.check_expression(node.right)
		return self._binary_result(op, left, right, node)

	def _binary_result(self, op: str, left: Type, right: Type, node: Any) -> Type:
		if left is self.error_type or right is self.error_type:
			return self.string_type if op == "+" and self._string_operand(left, right) else self.error_type
		if op == "+":
			if self._all_parts(left, TypeFlags.NUMBER_LIKE) and self._all_parts(right, TypeFlags.NUMBER_LIKE):
				return self.number_type
			if self._string_operand(left, right):
				return self.string_type
			if left.flags & TypeFlags.ANY or right.flags & TypeFlags.ANY:
				return self.any_type
			self._error(node, msg.OPERATOR_CANNOT_BE_APPLIED, op, self._display(left), self._display(right))
			return self.error_type
		if op in _ARITHMETIC_OPERATORS:
			ok = True
			if not (left.flags & TypeFlags.ANY or self._all_parts(left, TypeFlags.NUMBER_LIKE)):
				self._error(node.left if isinstance(node, ast.Binary) else node, msg.LEFT_ARITHMETIC_OPERAND)
				ok = False
			if not (right.flags & TypeFlags.ANY or self._all_parts(right, TypeFlags.NUMBER_LIKE)):
				self._error(node.right if isinstance(node, ast.Binary) else node, msg.RIGHT_ARITHMETIC_OPERAND)
				ok = False
			return self.number_type if ok else self.error_type
		if op in _RELATIONAL_OPERATORS:
			if left.flags & TypeFlags.ANY or right.flags & TypeFlags.ANY:
				return self.boolean_type
			both_numbers = self._all_parts(left, TypeFlags.NUMBER_LIKE) and self._all_parts(right, TypeFlags.NUMBER_LIKE)
			both_strings = self._all_parts(left, TypeFlags.STRING_LIKE) and self._all_parts(right, TypeFlags.STRING_LIKE)
			if not (both_numbers or both_strings):
				self._error(node, msg.OPERATOR_CANNOT_BE_APPLIED, op, self._display(left), self._display(right))
			return self.boolean_type
		if op in _EQUALITY_OPERATORS:
			# Comparing against undefined is always allowed.
			if left.flags & (TypeFlags.ANY | TypeFlags.VOID_LIKE) or right.flags & (TypeFlags.ANY | TypeFlags.VOID_LIKE):
				return self.boolean_type
			left_r, right_r = self.get_regular_type(left), self.get_regular_type(right)
			if not (self._relater.is_comparable(left_r, right_r) or self._relater.is_comparable(right_r, left_r)):
				self._error(node, msg.NO_OVERLAP, self._display(left), self._display(right))
			return self.boolean_type
		return self.error_type

	def _display(self, t: Type) -> str:
		return self.type_to_string(self.get_regular_type(t))

	def _string_operand(self, left: Type, right: Type) -> bool:
		return self._all_parts(left, TypeFlags.STRING_LIKE) or self._all_parts(right, TypeFlags.STRING_LIKE)

	def _falsy_part(self, t: Type) -> Type:
		parts = t.types if isinstance(t, UnionType) else (t,)
		result: List[Type] = []
		for part in parts:
			f = part.flags
			if f & TypeFlags.ANY_OR_UNKNOWN:
				return part
			if isinstance(part, LiteralType):
				if not part.value:
					result.append(part)
			elif f & TypeFlags.STRING:
				result.append(self.get_string_literal_type(""))
			elif f & (TypeFlags.NUMBER | TypeFlags.ENUM):
				result.append(self.get_number_literal_type(0))
			elif f & TypeFlags.BOOLEAN:
				result.append(self.false_type)
			elif f & TypeFlags.VOID_LIKE:
				result.append(part)
		return self.get_union_type(result)

	def _truthy_part(self, t: Type) -> Type:
		parts = t.types if isinstance(t, UnionType) else (t,)
		result: List[Type] = []
		for part in parts:
			f = part.flags
			if f & TypeFlags.VOID_LIKE:
				continue
			if isinstance(part, LiteralType) and not part.value:
				continue
			if f & TypeFlags.BOOLEAN:
				result.append(self.true_type)
				continue
			result.append(part)
		return self.get_union_type(result)

	# ---------------------------------------------------------------- assignment

	def _check_assignment(self, node: ast.Assign) -> Type:
		target = node.target
		target_type: Type = self.error_type
		if isinstance(target, ast.Identifier):
			target_type = self.check_expression(target)
			symbol = self._resolved_symbols.get(target)
			if symbol is not None:
				if symbol.is_const:
					self._error(target, msg.CANNOT_ASSIGN_TO_CONSTANT, target.name)
					target_type = self.error_type
				elif not symbol.flags & SymbolFlags.VARIABLE:
					self._error(target, msg.INVALID_ASSIGNMENT_TARGET)
					target_type = self.error_type
		elif isinstance(target, (ast.Member, ast.Element)):
			target_type = self.check_expression(target)
			prop = self._resolved_symbols.get(target)
			if prop is not None and prop.flags & SymbolFlags.ENUM_MEMBER:
				self._error(target, msg.CANNOT_ASSIGN_TO_READONLY, prop.name)
		else:
			self._error(target, msg.INVALID_ASSIGNMENT_TARGET)
			self.check_expression(target)
		if node.op == "=":
			value_type = self.check_expression(node.value, target_type)
			self._check_assignable(value_type, target_type, target)
			return value_type
		value_type = self.check_expression(node.value)
		result = self._binary_result(node.op[:-1], target_type, value_type, node)
		self._check_assignable(result, target_type, target)
		return result

	def _check_as_expression(self, node: ast.AsExpr) -> Type:
		self._check_type_nodes_of(node.type, {})
		target = self.get_type_from_type_node(node.type)
		source = self.get_widened_type(self.check_expression(node.expr, target))
		if not (self._relater.is_comparable(source, target) or self._relater.is_comparable(target, source)):
			self._error(node, msg.CONVERSION_MAY_BE_A_MISTAKE, self.type_to_string(source), self.type_to_string(target))
		return target

	# ---------------------------------------------------------------- functions

	def _check_arrow_function(self, node: ast.ArrowFunction, contextual: Optional[Type]) -> Type:
		contextual_sig = self._get_contextual_signature(contextual)
		self._contextual_signatures[node] = contextual_sig
		sig = self._get_signature_of_declaration(node, {})
		for index, param in enumerate(node.params):
			symbol = sig.parameters[index]
			if param.type is not None:
				self._check_type_nodes_of(param.type, {})
				t = self.get_type_from_type_node(param.type)
			elif contextual_sig is not None:
				if param.rest:
					rest_index = len(contextual_sig.parameters) - 1
					if contextual_sig.has_rest_parameter and index == rest_index:
						t = self.get_type_of_symbol(contextual_sig.parameters[rest_index])
					else:
						t = self.get_array_type(self._get_type_at_position(contextual_sig, index) or self.any_type)
				else:
					t = self._get_type_at_position(contextual_sig, index) or self.any_type
					if param.optional:
						t = self.remove_undefined(t)
			else:
				self._error(param, msg.IMPLICIT_ANY_PARAMETER, param.name, "any[]" if param.rest else "any")
				t = self.get_array_type(self.any_type) if param.rest else self.any_type
			symbol.type = self._add_optionality(t, symbol)
		if node.return_type is not None:
			self._check_type_nodes_of(node.return_type, {})
		self._check_async_signature(node, sig)
		fn_type = AnonymousType(declaration=node)
		fn_type.resolved = ResolvedMembers({}, [sig])
		self._deferred.append(node)
		return fn_type


# -------------------------------------------------------------------- helpers


def _expression_text(node: ast.Expr) -> Optional[str]:
	if isinstance(node, ast.Identifier):
		return node.name
	if isinstance(node, ast.Member):
		inner = _expression_text(node.target)
		return f"{inner}.{node.name}" if inner is not None else None
	return None


def _is_context_sensitive(node: ast.Expr) -> bool:
	if isinstance(node, ast.ArrowFunction):
		return any(param.type is None for param in node.params)
	if isinstance(node, ast.ObjectLiteral):
		return any(_is_context_sensitive(prop.value) for prop in node.properties)
	if isinstance(node, ast.ArrayLiteral):
		return any(_is_context_sensitive(element) for element in node.elements)
	if isinstance(node, ast.Conditional):
		return _is_context_sensitive(node.then) or _is_context_sensitive(node.otherwise)
	return False


def _has_correct_arity(sig: Signature, count: int) -> bool:
	if count < sig.min_argument_count:
		return False
	return sig.has_rest_parameter or count <= len(sig.parameters)


def _collect_returns(stmt: ast.Stmt) -> Iterable[ast.ReturnStmt]:
	"""Return statements of a function body, not descending into nested functions."""
	if isinstance(stmt, ast.ReturnStmt):
		yield stmt
	elif isinstance(stmt, ast.Block):
		for inner in stmt.statements:
			yield from _collect_returns(inner)
	elif isinstance(stmt, ast.IfStmt):
		yield from _collect_returns(stmt.then)
		if stmt.otherwise is not None:
			yield from _collect_returns(stmt.otherwise)
	elif isinstance(stmt, ast.WhileStmt):
		yield from _collect_returns(stmt.body)


def _end_reachable(statements: Sequence[ast.Stmt]) -> bool:
	"""Whether control can fall off the end of a statement list."""
	for stmt in statements:
		if not _completes_normally(stmt):
			return False
	return True


def _completes_normally(stmt: ast.Stmt) -> bool:
	if isinstance(stmt, (ast.ReturnStmt, ast.BreakStmt, ast.ContinueStmt)):
		return False
	if isinstance(stmt, ast.Block):
		return _end_reachable(stmt.statements)
	if isinstance(stmt, ast.IfStmt):
		if stmt.otherwise is None:
			return True
		return _completes_normally(stmt.then) or _completes_normally(stmt.otherwise)
	if isinstance(stmt, ast.WhileStmt):
		infinite = isinstance(stmt.test, ast.BooleanLiteral) and stmt.test.value
		return not infinite or _contains_break(stmt.body)
	return True


def _contains_break(stmt: ast.Stmt) -> bool:
	if isinstance(stmt, ast.BreakStmt):
		return True
	if isinstance(stmt, ast.Block):
		return any(_contains_break(inner) for inner in stmt.statements)
	if isinstance(stmt, ast.IfStmt):
		return _contains_break(stmt.then) or (stmt.otherwise is not None and _contains_break(stmt.otherwise))
	return False


__all__ = ["TypeChecker", "APPARENT_TYPE_NAMES"]
