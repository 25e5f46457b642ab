# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-08
"""
Lower a checked fragment source file to Python source text.

Values map directly: numbers are Python ints/floats, strings are `str`,
`undefined` is `None`, objects are dicts and arrays are lists. Anything whose
behavior differs between the two languages (truthiness, `+` on mixed
operands, division, member access on primitives) goes through the runtime
helper namespace `__rt`.

Arrow functions become nested `def`s emitted just before the statement that
contains them. Every declared name gets a module-unique Python name, so block
scoping never collides inside one Python function; assignments to names of
an enclosing function get `nonlocal`/`global` declarations from a pre-scan.
"""

from __future__ import annotations

import keyword
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from fragc.checker import ArrayType, Symbol, Type, TypeChecker, TypeFlags, UnionType
from fragc.core.errors import EmitError
from fragc.options import ModuleKind
from fragc.parser import ast

logger = logging.getLogger(__name__)

INDENT = "    "
RUNTIME = "__rt"
COMPLETION = "__completion__"
MODULE_FACTORY = "__module__"


def _sanitize(name: str) -> str:
	return name.replace("$", "_dollar_")


def number_literal(value: float | int) -> str:
	"""Python literal text for a number value (parenthesized when negative)."""
	if isinstance(value, float):
		if math.isnan(value):
			return "(1e999 * 0)"
		if math.isinf(value):
			return "1e999" if value > 0 else "(-1e999)"
		if value.is_integer() and abs(value) < 2**53:
			value = int(value)
	text = repr(value)
	return f"({text})" if text.startswith("-") else text


class _Names:
	"""Allocates module-unique Python names for symbols and temporaries."""

	def __init__(self, reserved: Iterable[str]) -> None:
		self._used: Set[str] = set(reserved)
		self._by_symbol: Dict[int, str] = {}
		self._counters: Dict[str, int] = {}

	def _is_free(self, name: str) -> bool:
		return name not in self._used and not keyword.iskeyword(name) and not name.startswith("__")

	def for_symbol(self, symbol: Symbol) -> str:
		existing = self._by_symbol.get(symbol.id)
		if existing is not None:
			return existing
		base = _sanitize(symbol.name)
		if base.startswith("__"):
			base = "u" + base
		name = base
		suffix = 0
		while not self._is_free(name):
			suffix += 1
			name = f"{base}_{suffix}"
		self._used.add(name)
		self._by_symbol[symbol.id] = name
		return name

	def temp(self, prefix: str) -> str:
		index = self._counters.get(prefix, 0)
		while True:
			index += 1
			name = f"__{prefix}{index}"
			if name not in self._used:
				break
		self._counters[prefix] = index
		self._used.add(name)
		return name


@dataclass
class _FunctionScope:
	"""Python function being emitted (None node: the module body)."""

	node: Any
	# Symbols bound by this Python function.
	declared: Set[int] = field(default_factory=set)


class PythonCodegen:
	def __init__(self, checker: TypeChecker, module_kind: ModuleKind) -> None:
		self.checker = checker
		self.module_kind = module_kind
		self.lines: List[str] = []
		self.depth = 0
		self._library_names: Set[str] = set()
		self._library_symbols: Set[int] = set()
		for name, symbol in checker.get_global_value_symbols().items():
			if symbol is checker.undefined_symbol:
				continue
			if symbol.declarations and all(self._in_library(d) for d in symbol.declarations):
				self._library_names.add(name)
				self._library_symbols.add(symbol.id)
		self.names = _Names(self._library_names | {RUNTIME, COMPLETION, MODULE_FACTORY})
		self._module_symbols: Set[int] = set()
		self._scopes: List[_FunctionScope] = []

	# ------------------------------------------------------------ output

	def line(self, text: str) -> None:
		self.lines.append(f"{INDENT * self.depth}{text}")

	def render(self) -> str:
		return "\n".join(self.lines) + "\n"

	def _in_library(self, node: Any) -> bool:
		file = self.checker.get_file_of(node)
		return file is not None and file.endswith(".d.ts")

	# ------------------------------------------------------------ entry

	def emit_source_file(self, source_file: ast.SourceFile) -> str:
		if source_file.is_declaration_file:
			raise EmitError(f"declaration file '{source_file.file_name}' has no output")
		self.line(f"# Generated by fragc from {source_file.file_name}.")
		module_scope = _FunctionScope(None)
		self._declared_in(source_file.statements, module_scope.declared)
		self._module_symbols = set(module_scope.declared)
		if self.module_kind is ModuleKind.CLOSURE:
			self.line(f"def {MODULE_FACTORY}():")
			self.depth += 1
			self._scopes.append(module_scope)
			self._binding_declarations(source_file.statements, module_scope)
			self.line(f"{COMPLETION} = None")
			self._hoist_vars(source_file.statements)
			self._statements(source_file.statements, top_level=True)
			self.line(f"return {COMPLETION}")
			self._scopes.pop()
			self.depth -= 1
			self.line(f"{COMPLETION} = {MODULE_FACTORY}()")
		else:
			self._scopes.append(module_scope)
			self.line(f"{COMPLETION} = None")
			self._hoist_vars(source_file.statements)
			self._statements(source_file.statements, top_level=True)
			self._scopes.pop()
		return self.render()

	# ------------------------------------------------------------ scanning

	def _symbol(self, node: Any) -> Optional[Symbol]:
		return self.checker.get_symbol_at_location(node)

	def _declared_in(self, statements: Iterable[ast.Stmt], out: Set[int]) -> None:
		"""Symbols declared by statements of one function body, not descending into nested functions."""
		for stmt in statements:
			if isinstance(stmt, ast.VarStmt):
				for decl in stmt.declarations:
					symbol = self.checker.get_symbol_of_declaration(decl)
					if symbol is not None:
						out.add(symbol.id)
			elif isinstance(stmt, ast.FunctionDecl):
				symbol = self.checker.get_symbol_of_declaration(stmt)
				if symbol is not None:
					out.add(symbol.id)
			elif isinstance(stmt, ast.EnumDecl):
				symbol = self.checker.get_symbol_of_declaration(stmt)
				if symbol is not None:
					out.add(symbol.id)
			elif isinstance(stmt, ast.Block):
				self._declared_in(stmt.statements, out)
			elif isinstance(stmt, ast.IfStmt):
				self._declared_in([stmt.then], out)
				if stmt.otherwise is not None:
					self._declared_in([stmt.otherwise], out)
			elif isinstance(stmt, ast.WhileStmt):
				self._declared_in([stmt.body], out)

	def _assigned_in(self, node: Any, out: Dict[int, Symbol]) -> None:
		"""Identifier assignment targets under `node`, not descending into nested functions."""
		if isinstance(node, (ast.ArrowFunction, ast.FunctionDecl)):
			return
		if isinstance(node, ast.Assign) and isinstance(node.target, ast.Identifier):
			symbol = self._symbol(node.target)
			if symbol is not None:
				out[symbol.id] = symbol
		for child in _children(node):
			self._assigned_in(child, out)

	def _binding_declarations(self, body: Iterable[Any], scope: _FunctionScope) -> None:
		assigned: Dict[int, Symbol] = {}
		for node in body:
			if isinstance(node, (ast.ArrowFunction, ast.FunctionDecl)):
				continue
			self._assigned_in(node, assigned)
		global_names: List[str] = []
		nonlocal_names: List[str] = []
		for symbol in assigned.values():
			if symbol.id in scope.declared or symbol is self.checker.undefined_symbol:
				continue
			name = self._name_of(symbol)
			if symbol.id in self._library_symbols:
				global_names.append(name)
			elif symbol.id in self._module_symbols and self.module_kind is ModuleKind.SCRIPT:
				global_names.append(name)
			else:
				nonlocal_names.append(name)
		if global_names:
			self.line(f"global {', '.join(sorted(global_names))}")
		if nonlocal_names:
			self.line(f"nonlocal {', '.join(sorted(nonlocal_names))}")

	def _name_of(self, symbol: Symbol) -> str:
		if symbol.id in self._library_symbols:
			return symbol.name
		return self.names.for_symbol(symbol)

	# ------------------------------------------------------------ statements

	def _statements(self, statements: List[ast.Stmt], *, top_level: bool = False) -> None:
		# Function declarations are hoisted to the top of their block.
		for stmt in statements:
			if isinstance(stmt, ast.FunctionDecl) and stmt.body is not None:
				self._function_declaration(stmt)
		for stmt in statements:
			if isinstance(stmt, ast.FunctionDecl):
				continue
			self._statement(stmt, top_level=top_level)

	def _suite(self, stmt: ast.Stmt) -> None:
		self.depth += 1
		start = len(self.lines)
		if isinstance(stmt, ast.Block):
			self._statements(stmt.statements)
		else:
			self._statements([stmt])
		if len(self.lines) == start:
			self.line("pass")
		self.depth -= 1

	def _statement(self, stmt: ast.Stmt, *, top_level: bool = False) -> None:
		if isinstance(stmt, ast.ExprStmt):
			if top_level:
				self.line(f"{COMPLETION} = {self.expr(stmt.expr)}")
			elif isinstance(stmt.expr, ast.Assign):
				self._assignment_statement(stmt.expr)
			else:
				self.line(self.expr(stmt.expr))
		elif isinstance(stmt, ast.VarStmt):
			if stmt.ambient:
				return
			for decl in stmt.declarations:
				symbol = self.checker.get_symbol_of_declaration(decl)
				if symbol is None:
					raise EmitError(f"declaration of '{decl.name}' has no symbol")
				if decl.init is None and stmt.kind == "var":
					continue
				value = self.expr(decl.init) if decl.init is not None else "None"
				self.line(f"{self._name_of(symbol)} = {value}")
		elif isinstance(stmt, ast.ReturnStmt):
			if stmt.value is None:
				self.line("return None")
			else:
				self.line(f"return {self._return_value(stmt.value)}")
		elif isinstance(stmt, ast.Block):
			self._statements(stmt.statements)
		elif isinstance(stmt, ast.IfStmt):
			self.line(f"if {self._condition(stmt.test)}:")
			self._suite(stmt.then)
			if stmt.otherwise is not None:
				self.line("else:")
				self._suite(stmt.otherwise)
		elif isinstance(stmt, ast.WhileStmt):
			self.line(f"while {self._condition(stmt.test)}:")
			self._suite(stmt.body)
		elif isinstance(stmt, ast.BreakStmt):
			self.line("break")
		elif isinstance(stmt, ast.ContinueStmt):
			self.line("continue")
		elif isinstance(stmt, ast.EnumDecl):
			self._enum_declaration(stmt)
		# Type-only declarations, empty statements and rejected constructs emit nothing.

	def _enum_declaration(self, stmt: ast.EnumDecl) -> None:
		if stmt.is_const or stmt.ambient:
			return
		symbol = self.checker.get_symbol_of_declaration(stmt)
		if symbol is None:
			return
		enum_type = self.checker.get_declared_type_of_symbol(symbol)
		entries = ", ".join(f"{member.name!r}: {number_literal(member.enum_value)}" for member in enum_type.members)
		self.line(f"{self._name_of(symbol)} = {{{entries}}}")

	def _hoist_vars(self, statements: List[ast.Stmt]) -> None:
		for name in self._var_names(statements):
			self.line(f"{name} = None")

	def _var_names(self, statements: Iterable[ast.Stmt]) -> List[str]:
		names: List[str] = []
		for stmt in statements:
			if isinstance(stmt, ast.VarStmt) and stmt.kind == "var" and not stmt.ambient:
				for decl in stmt.declarations:
					symbol = self.checker.get_symbol_of_declaration(decl)
					if symbol is not None:
						name = self._name_of(symbol)
						if name not in names:
							names.append(name)
			elif isinstance(stmt, ast.Block):
				names.extend(n for n in self._var_names(stmt.statements) if n not in names)
			elif isinstance(stmt, ast.IfStmt):
				branches = [stmt.then] + ([stmt.otherwise] if stmt.otherwise is not None else [])
				names.extend(n for n in self._var_names(branches) if n not in names)
			elif isinstance(stmt, ast.WhileStmt):
				names.extend(n for n in self._var_names([stmt.body]) if n not in names)
		return names

	# ------------------------------------------------------------ functions

	def _function_declaration(self, node: ast.FunctionDecl) -> None:
		symbol = self.checker.get_symbol_of_declaration(node)
		if symbol is None:
			raise EmitError(f"function '{node.name}' has no symbol")
		self._function(node, self._name_of(symbol))

	def _function(self, node: Any, name: str) -> None:
		params: List[str] = []
		rest_name: Optional[str] = None
		scope = _FunctionScope(node)
		for param in node.params:
			symbol = self.checker.get_symbol_of_declaration(param)
			if symbol is None:
				raise EmitError(f"parameter '{param.name}' has no symbol")
			scope.declared.add(symbol.id)
			py_name = self._name_of(symbol)
			if param.rest:
				params.append(f"*{py_name}")
				rest_name = py_name
			elif param.optional:
				params.append(f"{py_name}=None")
			else:
				params.append(py_name)
		body = node.body
		if isinstance(body, ast.Block):
			self._declared_in(body.statements, scope.declared)
		prefix = "async def" if node.is_async else "def"
		self.line(f"{prefix} {name}({', '.join(params)}):")
		self.depth += 1
		self._scopes.append(scope)
		start = len(self.lines)
		self._binding_declarations(body.statements if isinstance(body, ast.Block) else [body], scope)
		if rest_name is not None:
			self.line(f"{rest_name} = [*{rest_name}]")
		if isinstance(body, ast.Block):
			self._hoist_vars(body.statements)
			self._statements(body.statements)
		else:
			self.line(f"return {self._return_value(body)}")
		if len(self.lines) == start:
			self.line("pass")
		self._scopes.pop()
		self.depth -= 1

	def _return_value(self, value: ast.Expr) -> str:
		text = self.expr(value)
		container = self._scopes[-1].node if self._scopes else None
		if container is not None and getattr(container, "is_async", False):
			t = self.checker.get_type_at_location(value)
			if t.flags & TypeFlags.ANY or self.checker.get_promised_type(t) is not None:
				return f"(await {RUNTIME}.awaited({text}))"
		return text

	# ------------------------------------------------------------ expressions

	def _type(self, node: ast.Expr) -> Type:
		return self.checker.get_type_at_location(node)

	def _all(self, t: Type, mask: TypeFlags) -> bool:
		if isinstance(t, UnionType):
			return all(part.flags & mask for part in t.types)
		return bool(t.flags & mask)

	def _is_plain_object(self, t: Type) -> bool:
		parts = t.types if isinstance(t, UnionType) else (t,)
		return all(part.flags & TypeFlags.OBJECT and not isinstance(part, ArrayType) for part in parts)

	def _condition(self, node: ast.Expr) -> str:
		text = self.expr(node)
		if self._all(self._type(node), TypeFlags.BOOLEAN_LIKE):
			return text
		return f"{RUNTIME}.truthy({text})"

	def expr(self, node: ast.Expr) -> str:
		constant = self.checker.get_constant_value(node)
		if constant is not None:
			return number_literal(constant)
		if isinstance(node, ast.NumberLiteral):
			return number_literal(node.value)
		if isinstance(node, ast.StringLiteral):
			return repr(node.value)
		if isinstance(node, ast.BooleanLiteral):
			return "True" if node.value else "False"
		if isinstance(node, ast.Identifier):
			return self._identifier(node)
		if isinstance(node, ast.ObjectLiteral):
			entries = ", ".join(f"{prop.name!r}: {self.expr(prop.value)}" for prop in node.properties)
			return f"{{{entries}}}"
		if isinstance(node, ast.ArrayLiteral):
			return f"[{', '.join(self.expr(element) for element in node.elements)}]"
		if isinstance(node, ast.Member):
			return self._member(node)
		if isinstance(node, ast.Element):
			return self._element(node)
		if isinstance(node, ast.Call):
			args = ", ".join(self.expr(arg) for arg in node.args)
			return f"{self.expr(node.callee)}({args})"
		if isinstance(node, ast.Unary):
			return self._unary(node)
		if isinstance(node, ast.Await):
			return f"(await {RUNTIME}.awaited({self.expr(node.operand)}))"
		if isinstance(node, ast.Binary):
			return self._binary(node)
		if isinstance(node, ast.Conditional):
			test = self._condition(node.test)
			return f"({self.expr(node.then)} if {test} else {self.expr(node.otherwise)})"
		if isinstance(node, ast.Assign):
			return self._assignment_expression(node)
		if isinstance(node, ast.AsExpr):
			return self.expr(node.expr)
		if isinstance(node, ast.ArrowFunction):
			name = self.names.temp("fn_")
			self._function(node, name)
			return name
		raise EmitError(f"cannot emit expression {type(node).__name__}")

	def _identifier(self, node: ast.Identifier) -> str:
		symbol = self._symbol(node)
		if symbol is None:
			raise EmitError(f"unresolved name '{node.name}'")
		if symbol is self.checker.undefined_symbol:
			return "None"
		return self._name_of(symbol)

	def _member(self, node: ast.Member) -> str:
		target = self.expr(node.target)
		target_type = self._type(node.target)
		if node.name == "length" and (
			self._all(target_type, TypeFlags.STRING_LIKE) or isinstance(target_type, ArrayType)
		):
			return f"{RUNTIME}.length({target})"
		prop = self._symbol(node)
		if prop is not None and not prop.is_optional and self._is_plain_object(target_type):
			return f"{target}[{node.name!r}]"
		return f"{RUNTIME}.get_member({target}, {node.name!r})"

	def _element(self, node: ast.Element) -> str:
		target = self.expr(node.target)
		index = self.expr(node.index)
		prop = self._symbol(node)
		if (
			isinstance(node.index, ast.StringLiteral)
			and prop is not None
			and not prop.is_optional
			and self._is_plain_object(self._type(node.target))
		):
			return f"{target}[{index}]"
		return f"{RUNTIME}.index({target}, {index})"

	def _unary(self, node: ast.Unary) -> str:
		operand = self.expr(node.operand)
		operand_type = self._type(node.operand)
		if node.op == "!":
			if self._all(operand_type, TypeFlags.BOOLEAN_LIKE):
				return f"(not {operand})"
			return f"(not {RUNTIME}.truthy({operand}))"
		if node.op == "typeof":
			return f"{RUNTIME}.type_of({operand})"
		if not self._all(operand_type, TypeFlags.NUMBER_LIKE):
			operand = f"{RUNTIME}.to_number({operand})"
		if node.op == "-":
			return f"(-{operand})"
		return operand

	def _binary(self, node: ast.Binary) -> str:
		op = node.op
		left = self.expr(node.left)
		left_type = self._type(node.left)
		if op in ("&&", "||"):
			right = self.expr(node.right)
			if self._all(left_type, TypeFlags.BOOLEAN_LIKE):
				return f"({left} {'and' if op == '&&' else 'or'} {right})"
			temp = self.names.temp("t")
			if op == "&&":
				return f"({right} if {RUNTIME}.truthy({temp} := {left}) else {temp})"
			return f"({temp} if {RUNTIME}.truthy({temp} := {left}) else {right})"
		right = self.expr(node.right)
		return self._operator(op, left, left_type, right, self._type(node.right))

	def _operator(self, op: str, left: str, left_type: Type, right: str, right_type: Type) -> str:
		numbers = self._all(left_type, TypeFlags.NUMBER_LIKE) and self._all(right_type, TypeFlags.NUMBER_LIKE)
		if op == "+":
			if numbers:
				return f"({left} + {right})"
			if self._all(left_type, TypeFlags.STRING_LIKE) or self._all(right_type, TypeFlags.STRING_LIKE):
				return f"{RUNTIME}.concat({left}, {right})"
			return f"{RUNTIME}.add({left}, {right})"
		if op in ("-", "*"):
			if not numbers:
				left, right = f"{RUNTIME}.to_number({left})", f"{RUNTIME}.to_number({right})"
			return f"({left} {op} {right})"
		if op == "/":
			return f"{RUNTIME}.divide({left}, {right})"
		if op == "%":
			return f"{RUNTIME}.remainder({left}, {right})"
		if op == "**":
			return f"{RUNTIME}.power({left}, {right})"
		if op in ("<", ">", "<=", ">="):
			return f"({left} {op} {right})"
		if op in ("===", "!=="):
			same_kind = numbers or any(
				self._all(left_type, kind) and self._all(right_type, kind)
				for kind in (TypeFlags.STRING_LIKE, TypeFlags.BOOLEAN_LIKE)
			)
			if same_kind:
				return f"({left} {'==' if op == '===' else '!='} {right})"
			text = f"{RUNTIME}.strict_equals({left}, {right})"
			return text if op == "===" else f"(not {text})"
		if op in ("==", "!="):
			text = f"{RUNTIME}.loose_equals({left}, {right})"
			return text if op == "==" else f"(not {text})"
		raise EmitError(f"cannot emit operator '{op}'")

	# ------------------------------------------------------------ assignment

	def _assigned_value(self, node: ast.Assign, current: str) -> str:
		value = self.expr(node.value)
		if node.op == "=":
			return value
		return self._operator(node.op[:-1], current, self._type(node.target), value, self._type(node.value))

	def _assignment_statement(self, node: ast.Assign) -> None:
		if isinstance(node.target, ast.Identifier):
			name = self._identifier(node.target)
			self.line(f"{name} = {self._assigned_value(node, name)}")
			return
		self.line(self._assignment_expression(node))

	def _assignment_expression(self, node: ast.Assign) -> str:
		target = node.target
		if isinstance(target, ast.Identifier):
			name = self._identifier(target)
			return f"({name} := {self._assigned_value(node, name)})"
		if isinstance(target, ast.Member):
			obj = self.expr(target.target)
			key = repr(target.name)
		elif isinstance(target, ast.Element):
			obj = self.expr(target.target)
			key = self.expr(target.index)
		else:
			raise EmitError("invalid assignment target")
		if node.op == "=":
			return f"{RUNTIME}.set_member({obj}, {key}, {self.expr(node.value)})"
		obj_temp = self.names.temp("t")
		key_temp = self.names.temp("t")
		current = f"{RUNTIME}.index({obj_temp}, {key_temp})"
		value = self._assigned_value(node, current)
		return f"{RUNTIME}.set_member(({obj_temp} := {obj}), ({key_temp} := {key}), {value})"


def _children(node: Any) -> List[Any]:
	"""Statement and expression children of a node, in source order."""
	if isinstance(node, ast.ExprStmt):
		return [node.expr]
	if isinstance(node, ast.VarStmt):
		return [decl.init for decl in node.declarations if decl.init is not None]
	if isinstance(node, ast.ReturnStmt):
		return [node.value] if node.value is not None else []
	if isinstance(node, ast.Block):
		return list(node.statements)
	if isinstance(node, ast.IfStmt):
		return [node.test, node.then] + ([node.otherwise] if node.otherwise is not None else [])
	if isinstance(node, ast.WhileStmt):
		return [node.test, node.body]
	if isinstance(node, ast.ObjectLiteral):
		return [prop.value for prop in node.properties]
	if isinstance(node, ast.ArrayLiteral):
		return list(node.elements)
	if isinstance(node, ast.Member):
		return [node.target]
	if isinstance(node, ast.Element):
		return [node.target, node.index]
	if isinstance(node, ast.Call):
		return [node.callee] + list(node.args)
	if isinstance(node, (ast.Unary, ast.Await)):
		return [node.operand]
	if isinstance(node, ast.Binary):
		return [node.left, node.right]
	if isinstance(node, ast.Conditional):
		return [node.test, node.then, node.otherwise]
	if isinstance(node, ast.Assign):
		return [node.target, node.value]
	if isinstance(node, ast.AsExpr):
		return [node.expr]
	return []


def emit_source_file(source_file: ast.SourceFile, checker: TypeChecker, module_kind: ModuleKind) -> str:
	"""Python source for a checked, non-declaration source file."""
	# Name resolution and expression types come from a fully checked file.
	checker.get_diagnostics(source_file)
	code = PythonCodegen(checker, module_kind).emit_source_file(source_file)
	logger.debug("generated %d line(s) for %s", code.count("\n"), source_file.file_name)
	return code


__all__ = ["PythonCodegen", "emit_source_file", "number_literal", "RUNTIME", "COMPLETION", "MODULE_FACTORY"]
