# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lark-based front end: grammar loading, token post-processing, tree -> AST.

The grammar is LALR(1); three context decisions that an LALR table cannot make
are taken by `FragmentPostLex` on the raw token stream instead:

- where a statement ends (explicit `;` or a newline after a token that can end
  a statement, unless the next token continues the expression),
- whether `{` opens a block or an object literal / type literal,
- whether `(` opens an arrow-function parameter list or a parenthesized
  expression.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from lark import Lark, Token, Tree

from .ast import (
	ArrayLiteral,
	ArrayTypeNode,
	ArrowFunction,
	AsExpr,
	Assign,
	Await,
	Binary,
	Block,
	BooleanLiteral,
	BreakStmt,
	Call,
	CallSignatureNode,
	ClassDecl,
	Conditional,
	ContinueStmt,
	Element,
	EmptyStmt,
	EnumDecl,
	EnumMember,
	Expr,
	ExprStmt,
	FunctionDecl,
	FunctionTypeNode,
	Identifier,
	IfStmt,
	ImportDecl,
	InterfaceDecl,
	IntersectionTypeNode,
	LiteralTypeNode,
	Located,
	Member,
	MethodSignature,
	NumberLiteral,
	ObjectLiteral,
	Param,
	PropertyAssignment,
	PropertySignature,
	ReturnStmt,
	SourceFile,
	Stmt,
	StringLiteral,
	TypeAliasDecl,
	TypeLiteralNode,
	TypeMember,
	TypeNode,
	TypeParam,
	TypeRef,
	Unary,
	UnionTypeNode,
	VarDeclarator,
	VarStmt,
	WhileStmt,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class FragmentSyntaxError(ValueError):
	"""
	Syntax error detected while building the AST (not by the grammar).

	The front end converts this into a parser-phase diagnostic, the same way it
	converts lark's `UnexpectedInput`.
	"""

	def __init__(self, message: str, *, loc: Located | None, code: str = "E1005") -> None:
		super().__init__(message)
		self.loc = loc
		self.code = code


class FragmentPostLex:
	"""Statement terminators, block braces and arrow parameter lists."""

	always_accept = ("NEWLINE", "SEMI")

	# Tokens after which a newline may end a statement.
	TERMINABLE = {
		"NAME",
		"NUMBER",
		"STRING",
		"TRUE",
		"FALSE",
		"VOID",
		"RPAR",
		"RSQB",
		"GT",
		"RETURN",
		"BREAK",
		"CONTINUE",
	}

	# Tokens that continue the previous line's expression: a pending newline
	# terminator is dropped when one of these comes next.
	CONTINUATION = {
		"DOT",
		"ARROW",
		"QMARK",
		"COLON",
		"COMMA",
		"AS",
		"EXTENDS",
		"BAR",
		"AMP",
		"LPAR",
		"LSQB",
		"RPAR",
		"RSQB",
		"EQUAL",
		"PLUS_EQ",
		"MINUS_EQ",
		"STAR_EQ",
		"SLASH_EQ",
		"PERCENT_EQ",
		"PLUS",
		"MINUS",
		"STAR",
		"SLASH",
		"PERCENT",
		"STARSTAR",
		"EQEQEQ",
		"NOTEQEQ",
		"EQEQ",
		"NOTEQ",
		"LT",
		"GT",
		"LTE",
		"GTE",
		"AND",
		"OR",
	}

	# Statements that hold only types: a type never continues with a call or an
	# index, so a newline before `(` or `[` still ends them.
	TYPE_STATEMENTS = {"TYPE", "DECLARE"}
	TYPE_BREAKS = {"LPAR", "LSQB"}

	# A `{` after one of these starts an object literal or a type literal;
	# anywhere else it starts a block.
	OBJECT_CONTEXT = {
		"COLON",
		"COMMA",
		"LPAR",
		"ARROW_LPAR",
		"LSQB",
		"LBRACE",
		"EQUAL",
		"PLUS_EQ",
		"MINUS_EQ",
		"STAR_EQ",
		"SLASH_EQ",
		"PERCENT_EQ",
		"RETURN",
		"QMARK",
		"PLUS",
		"MINUS",
		"STAR",
		"SLASH",
		"PERCENT",
		"STARSTAR",
		"EQEQEQ",
		"NOTEQEQ",
		"EQEQ",
		"NOTEQ",
		"LT",
		"GT",
		"LTE",
		"GTE",
		"AND",
		"OR",
		"BANG",
		"TYPEOF",
		"AWAIT",
		"DOTDOTDOT",
		"BAR",
		"AMP",
		"AS",
	}

	# A `(` after one of these is a call, never an arrow parameter list.
	CALLEE_END = {"NAME", "RPAR", "RSQB"}

	_OPENERS = {"LPAR", "LSQB", "LBRACE"}
	_CLOSERS = {"RPAR", "RSQB", "RBRACE"}

	def process(self, stream: Iterable[Token]) -> Iterator[Token]:
		# Arrow detection needs lookahead, and fragments are small: buffer the
		# whole stream up front.
		tokens = list(stream)
		stack: List[str] = []
		last: Optional[Token] = None
		closed_block = False
		pending: Optional[Token] = None
		head: Optional[str] = None

		for index, token in enumerate(tokens):
			ttype = token.type

			if ttype == "NEWLINE":
				if pending is None and self._newline_ends_statement(stack, last, closed_block):
					pending = token
				continue

			if ttype == "SEMI":
				pending = None
				last = Token.new_borrow_pos("TERMINATOR", token.value, token)
				closed_block = False
				yield last
				continue

			if pending is not None:
				if ttype not in self.CONTINUATION or (head in self.TYPE_STATEMENTS and ttype in self.TYPE_BREAKS):
					last = Token.new_borrow_pos("TERMINATOR", pending.value, pending)
					closed_block = False
					yield last
				pending = None

			if self._at_statement_start(stack, last, closed_block):
				head = ttype

			prev_type = last.type if last is not None else None
			if ttype == "LBRACE":
				if prev_type in self.OBJECT_CONTEXT:
					stack.append("object")
				else:
					stack.append("body" if prev_type == "ARROW" else "block")
					token = Token.new_borrow_pos("BLOCK_LBRACE", token.value, token)
			elif ttype == "LPAR":
				stack.append("paren")
				if prev_type not in self.CALLEE_END and self._starts_arrow_params(tokens, index):
					token = Token.new_borrow_pos("ARROW_LPAR", token.value, token)
			elif ttype == "LSQB":
				stack.append("bracket")
			elif ttype in ("RPAR", "RSQB"):
				if stack:
					stack.pop()
			elif ttype == "RBRACE":
				kind = stack.pop() if stack else "block"
				if kind in ("block", "body") and not closed_block and prev_type not in (None, "TERMINATOR", "BLOCK_LBRACE"):
					yield Token.new_borrow_pos("TERMINATOR", "", token)
				yield token
				last = token
				closed_block = kind == "block"
				continue

			yield token
			last = token
			closed_block = False

		if last is not None and last.type != "TERMINATOR" and not closed_block:
			yield Token.new_borrow_pos("TERMINATOR", "", last)

	def _at_statement_start(self, stack: List[str], last: Optional[Token], closed_block: bool) -> bool:
		if stack and stack[-1] not in ("block", "body"):
			return False
		return last is None or closed_block or last.type in ("TERMINATOR", "BLOCK_LBRACE")

	def _newline_ends_statement(self, stack: List[str], last: Optional[Token], closed_block: bool) -> bool:
		if stack and stack[-1] not in ("block", "body"):
			return False
		if last is None or closed_block:
			return False
		return last.type in self.TERMINABLE or last.type == "RBRACE"

	def _starts_arrow_params(self, tokens: List[Token], start: int) -> bool:
		"""
		Decide whether the `(` at `tokens[start]` opens arrow parameters.

		It does when its matching `)` is followed by `=>`, or by a `:` return
		annotation that is itself followed by `=>` at nesting depth zero.
		"""
		depth = 0
		index = start
		count = len(tokens)
		while index < count:
			ttype = tokens[index].type
			if ttype in self._OPENERS:
				depth += 1
			elif ttype in self._CLOSERS:
				depth -= 1
				if depth == 0:
					break
			index += 1
		else:
			return False

		index += 1
		if index >= count:
			return False
		follower = tokens[index].type
		if follower == "ARROW":
			return True
		if follower != "COLON":
			return False

		depth = 0
		for token in tokens[index + 1 :]:
			ttype = token.type
			if ttype in self._OPENERS or ttype == "LT":
				depth += 1
			elif ttype in self._CLOSERS or ttype == "GT":
				depth -= 1
				if depth < 0:
					return False
			elif depth == 0:
				if ttype == "ARROW":
					return True
				if ttype in ("SEMI", "NEWLINE", "EQUAL", "COMMA"):
					return False
		return False


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="source_file",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=FragmentPostLex(),
)


_LIB_REFERENCE_RE = re.compile(r"""^///\s*<reference\s+lib\s*=\s*["']([^"']+)["']\s*/>""")


def scan_lib_references(text: str) -> List[str]:
	"""
	Collect `/// <reference lib="..." />` names from the head of a file.

	Only the leading run of blank and `//` comment lines is scanned, matching
	where such directives are honored.
	"""
	names: List[str] = []
	for raw in text.splitlines():
		line = raw.strip()
		if not line:
			continue
		if not line.startswith("//"):
			break
		match = _LIB_REFERENCE_RE.match(line)
		if match:
			names.append(match.group(1).strip().lower())
	return names


def parse_source_file(text: str, file_name: str) -> SourceFile:
	"""
	Parse one file into a SourceFile.

	Raises lark's `UnexpectedInput` or `FragmentSyntaxError` on invalid input;
	`fragc.parser.parse` turns both into diagnostics.
	"""
	tree = _PARSER.parse(text)
	statements = [_build_stmt(child) for child in tree.children if isinstance(child, Tree)]
	return SourceFile(
		file_name=file_name,
		text=text,
		statements=statements,
		lib_references=scan_lib_references(text),
	)


# ------------------------------------------------------------------ literals

_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"b": "\b",
	"f": "\f",
	"v": "\v",
	"0": "\0",
	"\\": "\\",
	"'": "'",
	'"': '"',
	"\n": "",
}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.|\n)")


def _decode_string_token(tok: Token) -> str:
	"""Decode a quoted STRING token using the source language's escape rules."""

	def _replace(match: re.Match) -> str:
		body = match.group(1)
		if body.startswith("u{"):
			return chr(int(body[2:-1], 16))
		if body[0] in "ux" and len(body) > 1:
			return chr(int(body[1:], 16))
		return _ESCAPES.get(body, body)

	return _ESCAPE_RE.sub(_replace, tok.value[1:-1])


def _parse_number(text: str) -> int | float:
	if text[:2] in ("0x", "0X"):
		return int(text, 16)
	if any(ch in text for ch in ".eE"):
		return float(text)
	return int(text)


# ---------------------------------------------------------------- statements


def _build_stmt(tree: Tree) -> Stmt:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "expr_stmt":
		return ExprStmt(loc=loc, expr=_build_expr(_trees(tree)[0]))
	if kind == "var_stmt":
		return _build_var_decl_list(_trees(tree)[0], ambient=False)
	if kind == "ambient_var":
		return _build_var_decl_list(_trees(tree)[0], ambient=True)
	if kind == "return_stmt":
		trees = _trees(tree)
		return ReturnStmt(loc=loc, value=_build_expr(trees[0]) if trees else None)
	if kind == "break_stmt":
		return BreakStmt(loc=loc)
	if kind == "continue_stmt":
		return ContinueStmt(loc=loc)
	if kind == "empty_stmt":
		return EmptyStmt(loc=loc)
	if kind == "block":
		return _build_block(tree)
	if kind == "if_stmt":
		trees = _trees(tree)
		otherwise = _build_stmt(trees[2]) if len(trees) > 2 else None
		return IfStmt(loc=loc, test=_build_expr(trees[0]), then=_build_stmt(trees[1]), otherwise=otherwise)
	if kind == "while_stmt":
		trees = _trees(tree)
		return WhileStmt(loc=loc, test=_build_expr(trees[0]), body=_build_stmt(trees[1]))
	if kind == "function_decl":
		return _build_function(tree, ambient=False)
	if kind == "ambient_function":
		return _build_function(_trees(tree)[0], ambient=True)
	if kind == "type_alias":
		name_tok = _token(tree, "NAME")
		params_node = _child(tree, "type_params")
		return TypeAliasDecl(
			loc=loc,
			name=name_tok.value,
			type_params=_build_type_params(params_node),
			type=_build_type(_trees(tree)[-1]),
		)
	if kind == "interface_decl":
		return _build_interface(tree)
	if kind == "ambient_interface":
		return _build_interface(_trees(tree)[0])
	if kind == "enum_decl":
		return _build_enum(tree, ambient=False)
	if kind == "ambient_enum":
		return _build_enum(_trees(tree)[0], ambient=True)
	if kind == "class_decl":
		return ClassDecl(loc=loc, name=_token(tree, "NAME").value)
	if kind == "import_decl":
		return _build_import(tree)
	raise ValueError(f"Unsupported statement node: {kind}")


def _build_block(tree: Tree) -> Block:
	return Block(loc=_loc(tree), statements=[_build_stmt(child) for child in _trees(tree)])


def _build_var_decl_list(tree: Tree, *, ambient: bool) -> VarStmt:
	kind_tok = next(c for c in tree.children if isinstance(c, Token) and c.type in ("CONST", "LET", "VAR"))
	declarations = [_build_var_declarator(child) for child in _trees(tree)]
	return VarStmt(loc=_loc(tree), kind=kind_tok.value, declarations=declarations, ambient=ambient)


def _build_var_declarator(tree: Tree) -> VarDeclarator:
	name_tok = _token(tree, "NAME")
	type_node: Optional[TypeNode] = None
	init: Optional[Expr] = None
	for child in _trees(tree):
		if _name(child) == "type_ann":
			type_node = _build_type(_trees(child)[0])
		else:
			init = _build_expr(child)
	return VarDeclarator(loc=_loc(tree), name=name_tok.value, type=type_node, init=init)


def _build_function(tree: Tree, *, ambient: bool) -> FunctionDecl:
	params_node = _child(tree, "param_list")
	ret_node = _child(tree, "return_ann")
	body_node = _child(tree, "block")
	return FunctionDecl(
		loc=_loc(tree),
		name=_token(tree, "NAME").value,
		params=_build_params(params_node),
		return_type=_build_type(_trees(ret_node)[0]) if ret_node is not None else None,
		body=_build_block(body_node) if body_node is not None else None,
		is_async=_has_token(tree, "ASYNC"),
		ambient=ambient,
	)


def _build_interface(tree: Tree) -> InterfaceDecl:
	heritage = _child(tree, "heritage")
	body = _child(tree, "object_type_body")
	return InterfaceDecl(
		loc=_loc(tree),
		name=_token(tree, "NAME").value,
		type_params=_build_type_params(_child(tree, "type_params")),
		extends=[_build_type(ref) for ref in _trees(heritage)] if heritage is not None else [],
		members=_build_type_members(body),
	)


def _build_enum(tree: Tree, *, ambient: bool) -> EnumDecl:
	body = _child(tree, "enum_body")
	members: List[EnumMember] = []
	for member in _trees(body):
		init_nodes = _trees(member)
		members.append(
			EnumMember(
				loc=_loc(member),
				name=_token(member, "NAME").value,
				init=_build_expr(init_nodes[0]) if init_nodes else None,
			)
		)
	return EnumDecl(
		loc=_loc(tree),
		name=_token(tree, "NAME").value,
		members=members,
		is_const=_has_token(tree, "CONST"),
		ambient=ambient,
	)


def _build_import(tree: Tree) -> ImportDecl:
	# `import x from "m"`: the keyword `from` is an ordinary NAME in the grammar.
	clause = _child(tree, "import_clause")
	if clause is not None:
		from_tok = next(c for c in tree.children if isinstance(c, Token) and c.type == "NAME")
		if from_tok.value != "from":
			raise FragmentSyntaxError("'from' expected.", loc=_loc_from_token(from_tok))
	module_tok = _token(tree, "STRING")
	return ImportDecl(loc=_loc(tree), module=_decode_string_token(module_tok))


# --------------------------------------------------------------- parameters


def _build_params(tree: Optional[Tree]) -> List[Param]:
	if tree is None:
		return []
	params: List[Param] = []
	for node in _trees(tree):
		ann = _child(node, "type_ann")
		params.append(
			Param(
				loc=_loc(node),
				name=_token(node, "NAME").value,
				type=_build_type(_trees(ann)[0]) if ann is not None else None,
				optional=_has_token(node, "QMARK"),
				rest=_name(node) == "rest_param",
			)
		)
	return params


def _build_type_params(tree: Optional[Tree]) -> List[TypeParam]:
	if tree is None:
		return []
	result: List[TypeParam] = []
	for node in _trees(tree):
		constraint = _trees(node)
		result.append(
			TypeParam(
				loc=_loc(node),
				name=_token(node, "NAME").value,
				constraint=_build_type(constraint[0]) if constraint else None,
			)
		)
	return result


# -------------------------------------------------------------------- types


def _build_type(tree: Tree) -> TypeNode:
	kind = _name(tree)
	loc = _loc(tree)
	if kind == "type_ref":
		args_node = _child(tree, "type_args")
		args = [_build_type(arg) for arg in _trees(args_node)] if args_node is not None else []
		return TypeRef(loc=loc, name=_token(tree, "NAME").value, args=args)
	if kind == "array_type":
		return ArrayTypeNode(loc=loc, element=_build_type(_trees(tree)[0]))
	if kind == "union":
		types: List[TypeNode] = []
		for part in _trees(tree):
			built = _build_type(part)
			types.extend(built.types if isinstance(built, UnionTypeNode) else [built])
		return UnionTypeNode(loc=loc, types=types)
	if kind == "intersection":
		parts: List[TypeNode] = []
		for part in _trees(tree):
			built = _build_type(part)
			parts.extend(built.types if isinstance(built, IntersectionTypeNode) else [built])
		return IntersectionTypeNode(loc=loc, types=parts)
	if kind == "literal_type":
		tok = tree.children[0]
		if tok.type == "STRING":
			value: str | int | float | bool = _decode_string_token(tok)
		elif tok.type == "NUMBER":
			value = _parse_number(tok.value)
		else:
			value = tok.type == "TRUE"
		return LiteralTypeNode(loc=loc, value=value)
	if kind == "void_type":
		return TypeRef(loc=loc, name="void")
	if kind == "type_literal":
		return TypeLiteralNode(loc=loc, members=_build_type_members(_trees(tree)[0]))
	if kind == "fn_type":
		params_node = _child(tree, "param_list")
		return FunctionTypeNode(loc=loc, params=_build_params(params_node), return_type=_build_type(_trees(tree)[-1]))
	if kind == "primary_type":
		# Parenthesized type.
		return _build_type(_trees(tree)[0])
	raise ValueError(f"Unsupported type node: {kind}")


def _build_type_members(tree: Tree) -> List[TypeMember]:
	members: List[TypeMember] = []
	for node in _trees(tree):
		kind = _name(node)
		loc = _loc(node)
		params_node = _child(node, "param_list")
		ret_node = _child(node, "return_ann")
		return_type = _build_type(_trees(ret_node)[0]) if ret_node is not None else None
		if kind == "property_sig":
			members.append(
				PropertySignature(
					loc=loc,
					name=_token(node, "NAME").value,
					type=_build_type(_trees(node)[-1]),
					optional=_has_token(node, "QMARK"),
				)
			)
		elif kind == "method_sig":
			members.append(
				MethodSignature(
					loc=loc,
					name=_token(node, "NAME").value,
					params=_build_params(params_node),
					return_type=return_type,
					optional=_has_token(node, "QMARK"),
				)
			)
		elif kind == "call_sig":
			members.append(CallSignatureNode(loc=loc, params=_build_params(params_node), return_type=return_type))
		else:
			raise ValueError(f"Unsupported type member: {kind}")
	return members


# -------------------------------------------------------------- expressions


def _build_expr(tree: Tree) -> Expr:
	kind = _name(tree)
	loc = _loc(tree)
	children = tree.children
	if kind == "number_lit":
		return NumberLiteral(loc=loc, value=_parse_number(children[0].value), text=children[0].value)
	if kind == "string_lit":
		return StringLiteral(loc=loc, value=_decode_string_token(children[0]))
	if kind == "true_lit":
		return BooleanLiteral(loc=loc, value=True)
	if kind == "false_lit":
		return BooleanLiteral(loc=loc, value=False)
	if kind == "name_ref":
		return Identifier(loc=loc, name=children[0].value)
	if kind == "paren":
		return _build_expr(_trees(tree)[0])
	if kind == "object_literal":
		return ObjectLiteral(loc=loc, properties=[_build_property(p) for p in _trees(tree)])
	if kind == "array_literal":
		return ArrayLiteral(loc=loc, elements=[_build_expr(e) for e in _trees(tree)])
	if kind == "member":
		name_tok = children[-1]
		return Member(loc=_loc_from_token(name_tok), target=_build_expr(children[0]), name=name_tok.value)
	if kind == "element":
		trees = _trees(tree)
		return Element(loc=loc, target=_build_expr(trees[0]), index=_build_expr(trees[1]))
	if kind == "call":
		trees = _trees(tree)
		args = [_build_expr(a) for a in _trees(trees[1])] if len(trees) > 1 else []
		return Call(loc=loc, callee=_build_expr(trees[0]), args=args)
	if kind == "unary_op":
		op_tok = children[0]
		return Unary(loc=loc, op=op_tok.value, operand=_build_expr(children[1]))
	if kind == "await_expr":
		return Await(loc=loc, operand=_build_expr(children[1]))
	if kind == "binary":
		left, op_tok, right = children
		return Binary(loc=_loc_from_token(op_tok), op=op_tok.value, left=_build_expr(left), right=_build_expr(right))
	if kind == "cond_expr":
		test, then, otherwise = _trees(tree)
		return Conditional(loc=loc, test=_build_expr(test), then=_build_expr(then), otherwise=_build_expr(otherwise))
	if kind == "assign":
		target, op_tok, value = children
		return Assign(loc=loc, op=op_tok.value, target=_build_expr(target), value=_build_expr(value))
	if kind == "as_expr":
		trees = _trees(tree)
		return AsExpr(loc=loc, expr=_build_expr(trees[0]), type=_build_type(trees[1]))
	if kind == "arrow_function":
		return _build_arrow(tree)
	raise ValueError(f"Unsupported expression node: {kind}")


def _build_property(tree: Tree) -> PropertyAssignment:
	key_tok = tree.children[0]
	name = _decode_string_token(key_tok) if key_tok.type == "STRING" else key_tok.value
	if _name(tree) == "prop_shorthand":
		ident = Identifier(loc=_loc_from_token(key_tok), name=name)
		return PropertyAssignment(loc=_loc(tree), name=name, value=ident, shorthand=True)
	return PropertyAssignment(loc=_loc(tree), name=name, value=_build_expr(_trees(tree)[0]))


def _build_arrow(tree: Tree) -> ArrowFunction:
	params_node, body_node = _trees(tree)
	single = next((c for c in params_node.children if isinstance(c, Token) and c.type == "NAME"), None)
	if single is not None:
		params = [Param(loc=_loc_from_token(single), name=single.value)]
		return_type = None
	else:
		params = _build_params(_child(params_node, "param_list"))
		ret_node = _child(params_node, "return_ann")
		return_type = _build_type(_trees(ret_node)[0]) if ret_node is not None else None
	body: Block | Expr
	if _name(body_node) == "block":
		body = _build_block(body_node)
	else:
		body = _build_expr(body_node)
	return ArrowFunction(
		loc=_loc(tree),
		params=params,
		body=body,
		return_type=return_type,
		is_async=_has_token(tree, "ASYNC"),
	)


# ------------------------------------------------------------------ helpers


def _trees(tree: Optional[Tree]) -> List[Tree]:
	if tree is None:
		return []
	return [c for c in tree.children if isinstance(c, Tree)]


def _child(tree: Tree, name: str) -> Optional[Tree]:
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == name), None)


def _token(tree: Tree, ttype: str) -> Token:
	tok = next((c for c in tree.children if isinstance(c, Token) and c.type == ttype), None)
	if tok is None:
		raise ValueError(f"{_name(tree)} node missing {ttype} token")
	return tok


def _has_token(tree: Tree, ttype: str) -> bool:
	return any(isinstance(c, Token) and c.type == ttype for c in tree.children)


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	if getattr(meta, "empty", True):
		return Located(line=1, column=1)
	return Located(line=meta.line, column=meta.column, end_line=meta.end_line, end_column=meta.end_column)


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column, end_line=token.end_line, end_column=token.end_column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)
