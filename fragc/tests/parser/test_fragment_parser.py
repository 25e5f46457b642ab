from __future__ import annotations

import pytest

from fragc.parser import ast, parse, scan_lib_references


def _parse_ok(text: str) -> ast.SourceFile:
	source_file, diagnostics = parse(text, "/fragment.ts")
	assert diagnostics == []
	assert source_file is not None
	return source_file


def _only_expr(text: str) -> ast.Expr:
	sf = _parse_ok(text)
	assert len(sf.statements) == 1
	stmt = sf.statements[0]
	assert isinstance(stmt, ast.ExprStmt)
	return stmt.expr


def _parse_error(text: str):
	source_file, diagnostics = parse(text, "/fragment.ts")
	assert source_file is None
	assert len(diagnostics) == 1
	diag = diagnostics[0]
	assert diag.phase == "parser"
	assert diag.span.file == "/fragment.ts"
	return diag


def test_single_name_arrow() -> None:
	expr = _only_expr("x => x")
	assert isinstance(expr, ast.ArrowFunction)
	assert [p.name for p in expr.params] == ["x"]
	assert expr.params[0].type is None
	assert isinstance(expr.body, ast.Identifier)


def test_parenthesized_arrow_with_object_body() -> None:
	expr = _only_expr("(x: number, y: number) => ({ sum: x + y })")
	assert isinstance(expr, ast.ArrowFunction)
	assert [p.name for p in expr.params] == ["x", "y"]
	assert all(isinstance(p.type, ast.TypeRef) and p.type.name == "number" for p in expr.params)
	assert isinstance(expr.body, ast.ObjectLiteral)
	(prop,) = expr.body.properties
	assert prop.name == "sum"
	assert isinstance(prop.value, ast.Binary) and prop.value.op == "+"


def test_brace_after_arrow_is_a_function_body() -> None:
	expr = _only_expr("(x: number) => { return { v: x } }")
	assert isinstance(expr, ast.ArrowFunction)
	assert isinstance(expr.body, ast.Block)
	(ret,) = expr.body.statements
	assert isinstance(ret, ast.ReturnStmt)
	assert isinstance(ret.value, ast.ObjectLiteral)


def test_optional_and_rest_parameters() -> None:
	expr = _only_expr("(a: number, b?: string, ...rest: number[]) => a")
	assert isinstance(expr, ast.ArrowFunction)
	a, b, rest = expr.params
	assert not a.optional and not a.rest
	assert b.optional
	assert rest.rest and isinstance(rest.type, ast.ArrayTypeNode)


def test_async_arrow_with_return_annotation() -> None:
	expr = _only_expr("async (t: number): Promise<{ y: number }> => ({ y: t })")
	assert isinstance(expr, ast.ArrowFunction)
	assert expr.is_async
	assert isinstance(expr.return_type, ast.TypeRef)
	assert expr.return_type.name == "Promise"
	assert isinstance(expr.return_type.args[0], ast.TypeLiteralNode)


def test_parenthesized_expression_is_not_an_arrow() -> None:
	expr = _only_expr("(1 + 2) * 3")
	assert isinstance(expr, ast.Binary)
	assert expr.op == "*"
	assert isinstance(expr.left, ast.Binary)


def test_newline_ends_statements() -> None:
	sf = _parse_ok("const a = 1\nconst b = 2\na + b")
	assert [ast.statement_kind(s) for s in sf.statements] == [
		"variable declaration",
		"variable declaration",
		"expression statement",
	]


def test_operator_on_next_line_continues_the_expression() -> None:
	expr = _only_expr("1\n+ 2")
	assert isinstance(expr, ast.Binary)
	assert expr.op == "+"


def test_paren_on_next_line_continues_a_call() -> None:
	expr = _only_expr("f\n(1)")
	assert isinstance(expr, ast.Call)


@pytest.mark.parametrize(
	"text",
	[
		"type Id = number | string\n(id: Id) => ({ n: 1 })",
		"type Row = number[]\n[1, 2]",
		"declare const k: number\n(k)",
	],
)
def test_newline_ends_a_type_statement_before_parens_and_brackets(text: str) -> None:
	sf = _parse_ok(text)
	assert len(sf.statements) == 2
	assert isinstance(sf.statements[1], ast.ExprStmt)


def test_newline_ends_a_type_alias_inside_a_body() -> None:
	expr = _only_expr("(x: number) => {\n\ttype P = { v: number }\n\t(x)\n\treturn { v: x }\n}")
	assert isinstance(expr, ast.ArrowFunction)
	assert [ast.statement_kind(s) for s in expr.body.statements if not isinstance(s, ast.EmptyStmt)] == [
		"type alias declaration",
		"expression statement",
		"return statement",
	]


def test_newline_inside_parentheses_does_not_terminate() -> None:
	expr = _only_expr("f(1,\n2)")
	assert isinstance(expr, ast.Call)
	assert len(expr.args) == 2


def test_semicolons_terminate_statements() -> None:
	sf = _parse_ok("let a = 1; a;")
	assert len(sf.statements) == 2


def test_top_level_brace_is_a_block() -> None:
	sf = _parse_ok("{ const a = 1 }")
	(stmt,) = sf.statements
	assert isinstance(stmt, ast.Block)
	assert isinstance(stmt.statements[0], ast.VarStmt)


def test_function_declaration_and_if_else() -> None:
	sf = _parse_ok("function f(a: number): number {\n\tif (a > 0) {\n\t\treturn a\n\t} else {\n\t\treturn -a\n\t}\n}")
	(fn,) = sf.statements
	assert isinstance(fn, ast.FunctionDecl)
	assert fn.name == "f"
	(if_stmt,) = fn.body.statements
	assert isinstance(if_stmt, ast.IfStmt)
	assert isinstance(if_stmt.otherwise, ast.Block)


def test_literals_decode() -> None:
	expr = _only_expr("[0x1F, 1.5e3, 'a\\nb', \"\\u0041\", true]")
	assert isinstance(expr, ast.ArrayLiteral)
	values = [e.value for e in expr.elements]
	assert values == [31, 1500.0, "a\nb", "A", True]


def test_declarations_parse() -> None:
	sf = _parse_ok("interface Box<T> { value: T; label?: string }\ntype N = number | string\nenum Color { Red, Green = 4 }")
	# A newline after a generic interface body reads as an empty statement.
	interface, alias, enum = [s for s in sf.statements if not isinstance(s, ast.EmptyStmt)]
	assert isinstance(interface, ast.InterfaceDecl)
	assert [tp.name for tp in interface.type_params] == ["T"]
	assert [m.name for m in interface.members] == ["value", "label"]
	assert interface.members[1].optional
	assert isinstance(alias, ast.TypeAliasDecl) and isinstance(alias.type, ast.UnionTypeNode)
	assert isinstance(enum, ast.EnumDecl)
	assert [m.name for m in enum.members] == ["Red", "Green"]


def test_statement_kinds() -> None:
	sf = _parse_ok("class C {}\nimport x from 'y'\nwhile (false) {}\n;")
	assert [ast.statement_kind(s) for s in sf.statements] == [
		"class declaration",
		"import declaration",
		"while statement",
		"empty statement",
	]


def test_missing_arrow_body_is_expression_expected() -> None:
	diag = _parse_error("(x: number) =>")
	assert diag.code == "E1109"
	assert diag.message == "Expression expected."


def test_unclosed_call_reports_missing_paren() -> None:
	diag = _parse_error("f(1, 2")
	assert diag.code == "E1005"
	assert diag.message == "')' expected."


def test_unterminated_string() -> None:
	diag = _parse_error("'abc")
	assert diag.code == "E1002"


def test_invalid_character() -> None:
	diag = _parse_error("x => x # 1")
	assert diag.code == "E1127"
	assert diag.span.line == 1


def test_error_positions_are_one_based() -> None:
	diag = _parse_error("1 +\n\n)")
	assert diag.span.line == 3
	assert diag.span.column == 1


@pytest.mark.parametrize(
	"text, names",
	[
		('/// <reference lib="es2015" />\n', ["es2015"]),
		("// header\n\n/// <reference lib='DOM' />\n/// <reference lib=\"es5\"/>\n", ["dom", "es5"]),
		('declare var x: number\n/// <reference lib="es5" />\n', []),
	],
)
def test_scan_lib_references_reads_only_the_leading_comments(text, names) -> None:
	assert scan_lib_references(text) == names


def test_source_file_records_lib_references() -> None:
	source_file, _ = parse('/// <reference lib="es5" />\ndeclare var q: number\n', "/lib/lib.q.d.ts")
	assert source_file is not None
	assert source_file.lib_references == ["es5"]
	assert source_file.is_declaration_file
