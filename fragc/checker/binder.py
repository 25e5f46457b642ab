# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binder: declares symbols and records the scope of every name reference.

All files of a program share one global scope (fragments are scripts, so
their top-level declarations are globals too). Declarations with the same
name merge when their kinds allow it: interfaces with interfaces and with a
value of the same name, `declare function` overloads, `var` with `var`, enums
of the same constness. Anything else is a duplicate.

Functions get a scope holding their parameters and body declarations;
nested blocks get their own scope for `let`/`const`. Grammar-level problems
that need the enclosing context (`return` outside a function, `break`
outside a loop) are reported here as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from fragc.core.diagnostics import Diagnostic
from fragc.core.span import Span
from fragc.parser import ast

from . import messages as msg
from .types import Symbol, SymbolFlags

_EXCLUDES = {
	SymbolFlags.BLOCK_SCOPED_VARIABLE: SymbolFlags.VALUE,
	SymbolFlags.FUNCTION_SCOPED_VARIABLE: SymbolFlags.VALUE & ~SymbolFlags.FUNCTION_SCOPED_VARIABLE,
	SymbolFlags.FUNCTION: SymbolFlags.VALUE & ~SymbolFlags.FUNCTION,
	SymbolFlags.INTERFACE: SymbolFlags.TYPE & ~SymbolFlags.INTERFACE,
	SymbolFlags.TYPE_ALIAS: SymbolFlags.TYPE,
	SymbolFlags.CONST_ENUM: (SymbolFlags.VALUE | SymbolFlags.TYPE) & ~SymbolFlags.CONST_ENUM,
	SymbolFlags.REGULAR_ENUM: (SymbolFlags.VALUE | SymbolFlags.TYPE) & ~SymbolFlags.REGULAR_ENUM,
}


class Scope:
	def __init__(self, kind: str, parent: Optional["Scope"], container: Any = None) -> None:
		self.kind = kind  # "global", "function" or "block"
		self.parent = parent
		# Function-like node owning this scope (None at top level).
		self.container = container
		self.locals: Dict[str, Symbol] = {}

	def __repr__(self) -> str:
		return f"Scope({self.kind}, {sorted(self.locals)})"


@dataclass
class _Context:
	file: str
	container: Any = None
	in_loop: bool = False


class Binder:
	def __init__(self) -> None:
		self.global_scope = Scope("global", None)
		self.globals = self.global_scope.locals
		self.diagnostics: Dict[str, List[Diagnostic]] = {}
		self.file_of: Dict[Any, str] = {}
		self.scope_of: Dict[Any, Scope] = {}
		self.container_of: Dict[Any, Any] = {}
		self.function_scopes: Dict[Any, Scope] = {}
		self.symbol_of: Dict[Any, Symbol] = {}
		self.undefined_symbol = Symbol(SymbolFlags.FUNCTION_SCOPED_VARIABLE, "undefined")
		self.undefined_symbol.is_const = True
		self.undefined_symbol.is_ambient = True
		self.globals["undefined"] = self.undefined_symbol

	# ------------------------------------------------------------ reporting

	def error(self, node: Any, message: msg.Message, *args: object) -> None:
		file = self.file_of.get(node)
		self.diagnostics.setdefault(file or "", []).append(
			Diagnostic(
				message=message.format(*args),
				code=message.tag,
				phase="typecheck",
				span=Span.from_loc(getattr(node, "loc", None), file=file),
			)
		)

	# ------------------------------------------------------------ entry

	def bind_source_file(self, source_file: ast.SourceFile) -> None:
		ctx = _Context(file=source_file.file_name)
		self.diagnostics.setdefault(source_file.file_name, [])
		self._hoist_vars(source_file.statements, self.global_scope, ctx)
		self._bind_statements(source_file.statements, self.global_scope, ctx)

	# ------------------------------------------------------------ declarations

	def declare(self, scope: Scope, name: str, flags: SymbolFlags, node: Any, *, excludes: Optional[SymbolFlags] = None) -> Symbol:
		if excludes is None:
			excludes = _EXCLUDES.get(flags, SymbolFlags.NONE)
		existing = scope.locals.get(name)
		if existing is None:
			symbol = Symbol(SymbolFlags.NONE, name)
			symbol.add_declaration(node, flags)
			scope.locals[name] = symbol
			self.symbol_of[node] = symbol
			return symbol
		if existing.flags & excludes:
			if (flags | existing.flags) & SymbolFlags.BLOCK_SCOPED_VARIABLE and flags & SymbolFlags.VARIABLE:
				self.error(node, msg.CANNOT_REDECLARE_BLOCK_SCOPED, name)
			else:
				self.error(node, msg.DUPLICATE_IDENTIFIER, name)
			# The duplicate gets its own symbol so the declaration can still be checked.
			orphan = Symbol(flags, name, [node])
			orphan.value_declaration = node if flags & SymbolFlags.VALUE else None
			self.symbol_of[node] = orphan
			return orphan
		if flags & SymbolFlags.FUNCTION and existing.flags & SymbolFlags.FUNCTION:
			if getattr(node, "body", None) is not None and any(
				getattr(d, "body", None) is not None for d in existing.declarations if isinstance(d, ast.FunctionDecl)
			):
				self.error(node, msg.DUPLICATE_FUNCTION_IMPLEMENTATION)
		existing.add_declaration(node, flags)
		self.symbol_of[node] = existing
		return existing

	def _declare_statement(self, stmt: ast.Stmt, scope: Scope, ctx: _Context) -> None:
		if isinstance(stmt, ast.VarStmt):
			if stmt.kind == "var":
				return  # hoisted by _hoist_vars
			for decl in stmt.declarations:
				self._record(decl, ctx)
				symbol = self.declare(scope, decl.name, SymbolFlags.BLOCK_SCOPED_VARIABLE, decl)
				symbol.is_const = stmt.kind == "const"
				symbol.is_ambient = stmt.ambient
		elif isinstance(stmt, ast.FunctionDecl):
			self._record(stmt, ctx)
			symbol = self.declare(scope, stmt.name, SymbolFlags.FUNCTION, stmt)
			symbol.is_ambient = stmt.ambient
		elif isinstance(stmt, ast.InterfaceDecl):
			self._record(stmt, ctx)
			self.declare(scope, stmt.name, SymbolFlags.INTERFACE, stmt)
		elif isinstance(stmt, ast.TypeAliasDecl):
			self._record(stmt, ctx)
			self.declare(scope, stmt.name, SymbolFlags.TYPE_ALIAS, stmt)
		elif isinstance(stmt, ast.EnumDecl):
			self._record(stmt, ctx)
			flags = SymbolFlags.CONST_ENUM if stmt.is_const else SymbolFlags.REGULAR_ENUM
			symbol = self.declare(scope, stmt.name, flags, stmt)
			symbol.is_ambient = stmt.ambient

	def _hoist_vars(self, statements: Iterable[ast.Stmt], scope: Scope, ctx: _Context) -> None:
		"""Declare every `var` of a function body (or file) in its function scope."""
		for stmt in statements:
			if isinstance(stmt, ast.VarStmt) and stmt.kind == "var":
				for decl in stmt.declarations:
					self._record(decl, ctx)
					symbol = self.declare(scope, decl.name, SymbolFlags.FUNCTION_SCOPED_VARIABLE, decl)
					symbol.is_ambient = stmt.ambient
			elif isinstance(stmt, ast.Block):
				self._hoist_vars(stmt.statements, scope, ctx)
			elif isinstance(stmt, ast.IfStmt):
				self._hoist_vars([stmt.then], scope, ctx)
				if stmt.otherwise is not None:
					self._hoist_vars([stmt.otherwise], scope, ctx)
			elif isinstance(stmt, ast.WhileStmt):
				self._hoist_vars([stmt.body], scope, ctx)

	# ------------------------------------------------------------ statements

	def _bind_statements(self, statements: List[ast.Stmt], scope: Scope, ctx: _Context) -> None:
		for stmt in statements:
			self._declare_statement(stmt, scope, ctx)
		for stmt in statements:
			self._bind_stmt(stmt, scope, ctx)

	def _bind_nested(self, stmt: ast.Stmt, scope: Scope, ctx: _Context) -> None:
		if isinstance(stmt, ast.Block):
			self._bind_stmt(stmt, scope, ctx)
			return
		inner = Scope("block", scope, scope.container)
		self._bind_statements([stmt], inner, ctx)

	def _bind_stmt(self, stmt: ast.Stmt, scope: Scope, ctx: _Context) -> None:
		self._record(stmt, ctx)
		if isinstance(stmt, ast.ExprStmt):
			self._bind_expr(stmt.expr, scope, ctx)
		elif isinstance(stmt, ast.VarStmt):
			for decl in stmt.declarations:
				self._record(decl, ctx)
				self.scope_of[decl] = scope
				self.container_of[decl] = ctx.container
				if decl.type is not None:
					self._bind_type(decl.type, ctx)
				if decl.init is not None:
					self._bind_expr(decl.init, scope, ctx)
		elif isinstance(stmt, ast.ReturnStmt):
			self.container_of[stmt] = ctx.container
			if ctx.container is None:
				self.error(stmt, msg.RETURN_OUTSIDE_FUNCTION)
			if stmt.value is not None:
				self._bind_expr(stmt.value, scope, ctx)
		elif isinstance(stmt, ast.BreakStmt):
			if not ctx.in_loop:
				self.error(stmt, msg.BREAK_OUTSIDE_LOOP)
		elif isinstance(stmt, ast.ContinueStmt):
			if not ctx.in_loop:
				self.error(stmt, msg.CONTINUE_OUTSIDE_LOOP)
		elif isinstance(stmt, ast.Block):
			inner = Scope("block", scope, scope.container)
			self.scope_of[stmt] = inner
			self._bind_statements(stmt.statements, inner, ctx)
		elif isinstance(stmt, ast.IfStmt):
			self._bind_expr(stmt.test, scope, ctx)
			self._bind_nested(stmt.then, scope, ctx)
			if stmt.otherwise is not None:
				self._bind_nested(stmt.otherwise, scope, ctx)
		elif isinstance(stmt, ast.WhileStmt):
			self._bind_expr(stmt.test, scope, ctx)
			self._bind_nested(stmt.body, scope, _Context(ctx.file, ctx.container, in_loop=True))
		elif isinstance(stmt, ast.FunctionDecl):
			self.scope_of[stmt] = scope
			self.container_of[stmt] = ctx.container
			self._bind_function(stmt, scope, ctx)
		elif isinstance(stmt, ast.TypeAliasDecl):
			for param in stmt.type_params:
				self._record(param, ctx)
				if param.constraint is not None:
					self._bind_type(param.constraint, ctx)
			self._bind_type(stmt.type, ctx)
		elif isinstance(stmt, ast.InterfaceDecl):
			for param in stmt.type_params:
				self._record(param, ctx)
				if param.constraint is not None:
					self._bind_type(param.constraint, ctx)
			for ref in stmt.extends:
				self._bind_type(ref, ctx)
			self._bind_members(stmt.members, ctx)
		elif isinstance(stmt, ast.EnumDecl):
			for member in stmt.members:
				self._record(member, ctx)
				if member.init is not None:
					self._bind_expr(member.init, scope, ctx)

	# ------------------------------------------------------------ functions

	def _bind_function(self, node: Any, scope: Scope, ctx: _Context) -> None:
		fn_scope = Scope("function", scope, node)
		self.function_scopes[node] = fn_scope
		inner = _Context(ctx.file, container=node, in_loop=False)
		self._bind_params(node.params, fn_scope, inner)
		if node.return_type is not None:
			self._bind_type(node.return_type, inner)
		body = node.body
		if body is None:
			return
		if isinstance(body, ast.Block):
			self._record(body, inner)
			self.scope_of[body] = fn_scope
			self._hoist_vars(body.statements, fn_scope, inner)
			self._bind_statements(body.statements, fn_scope, inner)
		else:
			self._bind_expr(body, fn_scope, inner)

	def _bind_params(self, params: List[ast.Param], scope: Scope, ctx: _Context) -> None:
		for param in params:
			self._record(param, ctx)
			flags = SymbolFlags.FUNCTION_SCOPED_VARIABLE
			if param.optional:
				flags |= SymbolFlags.OPTIONAL
			self.declare(scope, param.name, flags, param, excludes=SymbolFlags.VALUE)
			if param.type is not None:
				self._bind_type(param.type, ctx)

	# ------------------------------------------------------------ expressions

	def _bind_expr(self, expr: ast.Expr, scope: Scope, ctx: _Context) -> None:
		self._record(expr, ctx)
		if isinstance(expr, ast.Identifier):
			self.scope_of[expr] = scope
			self.container_of[expr] = ctx.container
		elif isinstance(expr, ast.ObjectLiteral):
			for prop in expr.properties:
				self._record(prop, ctx)
				self._bind_expr(prop.value, scope, ctx)
		elif isinstance(expr, ast.ArrayLiteral):
			for element in expr.elements:
				self._bind_expr(element, scope, ctx)
		elif isinstance(expr, ast.Member):
			self._bind_expr(expr.target, scope, ctx)
		elif isinstance(expr, ast.Element):
			self._bind_expr(expr.target, scope, ctx)
			self._bind_expr(expr.index, scope, ctx)
		elif isinstance(expr, ast.Call):
			self._bind_expr(expr.callee, scope, ctx)
			for arg in expr.args:
				self._bind_expr(arg, scope, ctx)
		elif isinstance(expr, ast.Unary):
			self._bind_expr(expr.operand, scope, ctx)
		elif isinstance(expr, ast.Await):
			self.container_of[expr] = ctx.container
			self._bind_expr(expr.operand, scope, ctx)
		elif isinstance(expr, ast.Binary):
			self._bind_expr(expr.left, scope, ctx)
			self._bind_expr(expr.right, scope, ctx)
		elif isinstance(expr, ast.Conditional):
			self._bind_expr(expr.test, scope, ctx)
			self._bind_expr(expr.then, scope, ctx)
			self._bind_expr(expr.otherwise, scope, ctx)
		elif isinstance(expr, ast.Assign):
			self._bind_expr(expr.target, scope, ctx)
			self._bind_expr(expr.value, scope, ctx)
		elif isinstance(expr, ast.AsExpr):
			self._bind_expr(expr.expr, scope, ctx)
			self._bind_type(expr.type, ctx)
		elif isinstance(expr, ast.ArrowFunction):
			self.scope_of[expr] = scope
			self.container_of[expr] = ctx.container
			self._bind_function(expr, scope, ctx)

	# ------------------------------------------------------------ types

	def _bind_type(self, node: ast.TypeNode, ctx: _Context) -> None:
		self._record(node, ctx)
		if isinstance(node, ast.TypeRef):
			for arg in node.args:
				self._bind_type(arg, ctx)
		elif isinstance(node, ast.ArrayTypeNode):
			self._bind_type(node.element, ctx)
		elif isinstance(node, (ast.UnionTypeNode, ast.IntersectionTypeNode)):
			for part in node.types:
				self._bind_type(part, ctx)
		elif isinstance(node, ast.FunctionTypeNode):
			for param in node.params:
				self._record(param, ctx)
				if param.type is not None:
					self._bind_type(param.type, ctx)
			self._bind_type(node.return_type, ctx)
		elif isinstance(node, ast.TypeLiteralNode):
			self._bind_members(node.members, ctx)

	def _bind_members(self, members: List[ast.TypeMember], ctx: _Context) -> None:
		for member in members:
			self._record(member, ctx)
			for param in getattr(member, "params", ()):
				self._record(param, ctx)
				if param.type is not None:
					self._bind_type(param.type, ctx)
			member_type = getattr(member, "type", None)
			if member_type is not None:
				self._bind_type(member_type, ctx)
			return_type = getattr(member, "return_type", None)
			if return_type is not None:
				self._bind_type(return_type, ctx)

	def _record(self, node: Any, ctx: _Context) -> None:
		self.file_of[node] = ctx.file


__all__ = ["Binder", "Scope"]
