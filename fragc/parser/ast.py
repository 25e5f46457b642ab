# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax tree for fragment sources and library declaration files.

Nodes are plain dataclasses compared by identity (`eq=False`): the checker and
the code generator keep side tables keyed by node, and two structurally equal
expressions at different locations are different nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int
	end_line: Optional[int] = None
	end_column: Optional[int] = None


class Node:
	loc: Located


# --------------------------------------------------------------------- types


class TypeNode(Node):
	pass


@dataclass(eq=False)
class TypeRef(TypeNode):
	loc: Located
	name: str
	args: List[TypeNode] = field(default_factory=list)


@dataclass(eq=False)
class ArrayTypeNode(TypeNode):
	loc: Located
	element: TypeNode


@dataclass(eq=False)
class UnionTypeNode(TypeNode):
	loc: Located
	types: List[TypeNode]


@dataclass(eq=False)
class IntersectionTypeNode(TypeNode):
	loc: Located
	types: List[TypeNode]


@dataclass(eq=False)
class LiteralTypeNode(TypeNode):
	loc: Located
	value: Union[str, float, bool]


@dataclass(eq=False)
class FunctionTypeNode(TypeNode):
	loc: Located
	params: List["Param"]
	return_type: TypeNode


@dataclass(eq=False)
class TypeLiteralNode(TypeNode):
	loc: Located
	members: List["TypeMember"]


@dataclass(eq=False)
class TypeParam:
	loc: Located
	name: str
	constraint: Optional[TypeNode] = None


class TypeMember(Node):
	pass


@dataclass(eq=False)
class PropertySignature(TypeMember):
	loc: Located
	name: str
	type: TypeNode
	optional: bool = False


@dataclass(eq=False)
class MethodSignature(TypeMember):
	loc: Located
	name: str
	params: List["Param"]
	return_type: Optional[TypeNode]
	optional: bool = False


@dataclass(eq=False)
class CallSignatureNode(TypeMember):
	loc: Located
	params: List["Param"]
	return_type: Optional[TypeNode]


@dataclass(eq=False)
class Param(Node):
	loc: Located
	name: str
	type: Optional[TypeNode] = None
	optional: bool = False
	rest: bool = False


# --------------------------------------------------------------- expressions


class Expr(Node):
	pass


@dataclass(eq=False)
class NumberLiteral(Expr):
	loc: Located
	value: Union[int, float]
	text: str = ""


@dataclass(eq=False)
class StringLiteral(Expr):
	loc: Located
	value: str


@dataclass(eq=False)
class BooleanLiteral(Expr):
	loc: Located
	value: bool


@dataclass(eq=False)
class Identifier(Expr):
	loc: Located
	name: str


@dataclass(eq=False)
class PropertyAssignment(Node):
	loc: Located
	name: str
	value: Expr
	shorthand: bool = False


@dataclass(eq=False)
class ObjectLiteral(Expr):
	loc: Located
	properties: List[PropertyAssignment]


@dataclass(eq=False)
class ArrayLiteral(Expr):
	loc: Located
	elements: List[Expr]


@dataclass(eq=False)
class Member(Expr):
	loc: Located
	target: Expr
	name: str


@dataclass(eq=False)
class Element(Expr):
	loc: Located
	target: Expr
	index: Expr


@dataclass(eq=False)
class Call(Expr):
	loc: Located
	callee: Expr
	args: List[Expr]


@dataclass(eq=False)
class Unary(Expr):
	"""Prefix operator: `-`, `+`, `!` or `typeof`."""

	loc: Located
	op: str
	operand: Expr


@dataclass(eq=False)
class Await(Expr):
	loc: Located
	operand: Expr


@dataclass(eq=False)
class Binary(Expr):
	loc: Located
	op: str
	left: Expr
	right: Expr


@dataclass(eq=False)
class Conditional(Expr):
	loc: Located
	test: Expr
	then: Expr
	otherwise: Expr


@dataclass(eq=False)
class Assign(Expr):
	"""
	Assignment expression. `op` is `=` or a compound operator (`+=`, ...).

	Assignments are expressions, as in the source language; the code generator
	emits a plain Python assignment when the value is not used.
	"""

	loc: Located
	op: str
	target: Expr
	value: Expr


@dataclass(eq=False)
class AsExpr(Expr):
	loc: Located
	expr: Expr
	type: TypeNode


@dataclass(eq=False)
class ArrowFunction(Expr):
	loc: Located
	params: List[Param]
	body: Union["Block", Expr]
	return_type: Optional[TypeNode] = None
	is_async: bool = False


# ---------------------------------------------------------------- statements


class Stmt(Node):
	pass


@dataclass(eq=False)
class ExprStmt(Stmt):
	loc: Located
	expr: Expr


@dataclass(eq=False)
class VarDeclarator(Node):
	loc: Located
	name: str
	type: Optional[TypeNode] = None
	init: Optional[Expr] = None


@dataclass(eq=False)
class VarStmt(Stmt):
	loc: Located
	kind: str  # "const", "let" or "var"
	declarations: List[VarDeclarator]
	ambient: bool = False


@dataclass(eq=False)
class ReturnStmt(Stmt):
	loc: Located
	value: Optional[Expr]


@dataclass(eq=False)
class BreakStmt(Stmt):
	loc: Located


@dataclass(eq=False)
class ContinueStmt(Stmt):
	loc: Located


@dataclass(eq=False)
class EmptyStmt(Stmt):
	loc: Located


@dataclass(eq=False)
class Block(Stmt):
	loc: Located
	statements: List[Stmt]


@dataclass(eq=False)
class IfStmt(Stmt):
	loc: Located
	test: Expr
	then: Stmt
	otherwise: Optional[Stmt] = None


@dataclass(eq=False)
class WhileStmt(Stmt):
	loc: Located
	test: Expr
	body: Stmt


@dataclass(eq=False)
class FunctionDecl(Stmt):
	"""Function declaration; `body` is None for `declare function` overloads."""

	loc: Located
	name: str
	params: List[Param]
	return_type: Optional[TypeNode]
	body: Optional[Block]
	is_async: bool = False
	ambient: bool = False


@dataclass(eq=False)
class TypeAliasDecl(Stmt):
	loc: Located
	name: str
	type_params: List[TypeParam]
	type: TypeNode


@dataclass(eq=False)
class InterfaceDecl(Stmt):
	loc: Located
	name: str
	type_params: List[TypeParam]
	extends: List[TypeRef]
	members: List[TypeMember]


@dataclass(eq=False)
class EnumMember(Node):
	loc: Located
	name: str
	init: Optional[Expr] = None


@dataclass(eq=False)
class EnumDecl(Stmt):
	loc: Located
	name: str
	members: List[EnumMember]
	is_const: bool = False
	ambient: bool = False


@dataclass(eq=False)
class ClassDecl(Stmt):
	"""Parsed only so that it can be rejected with a precise diagnostic."""

	loc: Located
	name: str


@dataclass(eq=False)
class ImportDecl(Stmt):
	loc: Located
	module: str


# ---------------------------------------------------------------- source file


@dataclass(eq=False)
class SourceFile:
	"""
	One parsed file.

	`lib_references` holds the names from `/// <reference lib="..." />`
	directives at the head of the file, in order.
	"""

	file_name: str
	text: str
	statements: List[Stmt]
	lib_references: List[str] = field(default_factory=list)

	@property
	def is_declaration_file(self) -> bool:
		return self.file_name.endswith(".d.ts")


# Statement kind names used by the structural validator and in diagnostics.
STATEMENT_KINDS = {
	ExprStmt: "expression statement",
	VarStmt: "variable declaration",
	ReturnStmt: "return statement",
	BreakStmt: "break statement",
	ContinueStmt: "continue statement",
	EmptyStmt: "empty statement",
	Block: "block",
	IfStmt: "if statement",
	WhileStmt: "while statement",
	FunctionDecl: "function declaration",
	TypeAliasDecl: "type alias declaration",
	InterfaceDecl: "interface declaration",
	EnumDecl: "enum declaration",
	ClassDecl: "class declaration",
	ImportDecl: "import declaration",
}


def statement_kind(stmt: Stmt) -> str:
	return STATEMENT_KINDS.get(type(stmt), type(stmt).__name__)


