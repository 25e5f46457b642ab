import pytest

from fragc.core.errors import DiagnosticsError, EmitError, StructuralError
from fragc.declarations import BundledDeclarationProvider
from fragc.diagnostics_collector import ensure_no_diagnostics, get_pre_emit_diagnostics
from fragc.evaluator import evaluate
from fragc.host import VirtualFileSystem
from fragc.options import ROOT_FILE_NAME, CompilerOptions
from fragc.parser import ast
from fragc.program import Program, create_program
from fragc.runtime import HELPERS
from fragc.validate import validate_fragment


def _program(source: str, **raw) -> Program:
	options = CompilerOptions.from_mapping(raw)
	host = VirtualFileSystem.for_fragment(source, BundledDeclarationProvider().load(options))
	return create_program([ROOT_FILE_NAME], options, host)


def _codes(program: Program) -> list:
	return [d.code for d in get_pre_emit_diagnostics(program)]


def test_validate_returns_the_expression_statement() -> None:
	root = _program("(x: number) => ({ y: x })").get_source_file(ROOT_FILE_NAME)
	stmt = validate_fragment(root)
	assert isinstance(stmt, ast.ExprStmt)
	assert isinstance(stmt.expr, ast.ArrowFunction)


def test_validate_reports_the_statement_kind() -> None:
	root = _program("while (false) { }").get_source_file(ROOT_FILE_NAME)
	with pytest.raises(StructuralError) as info:
		validate_fragment(root)
	assert info.value.statement_kind == "while statement"
	assert info.value.to_json()["statementKind"] == "while statement"
	assert (info.value.span.line, info.value.span.column) == (1, 1)


def test_clean_program_has_no_diagnostics() -> None:
	program = _program("(x: number) => ({ y: x })")
	assert get_pre_emit_diagnostics(program) == []
	ensure_no_diagnostics(program)


def test_syntax_errors_suppress_semantic_checking() -> None:
	codes = _codes(_program("nope(1 +"))
	assert codes
	assert "E2304" not in codes


def test_option_diagnostics_come_first() -> None:
	codes = _codes(_program("(x: number) => ({ y: missing })", colour=True))
	assert codes == ["E5023", "E2304"]


def test_ensure_no_diagnostics_aggregates() -> None:
	with pytest.raises(DiagnosticsError) as info:
		ensure_no_diagnostics(_program("(x: number) => ({ y: a + b })"))
	assert [d.code for d in info.value.diagnostics] == ["E2304", "E2304"]
	assert str(info.value).startswith("2 diagnostics:\n")
	assert info.value.rendered.count("\n") == 1


def test_evaluate_returns_the_completion_value() -> None:
	assert evaluate("__completion__ = 42\n", []) == 42


def test_evaluate_exposes_only_runtime_and_libraries() -> None:
	assert evaluate("__completion__ = __rt\n", []) is HELPERS
	assert evaluate("__completion__ = NaN\n", ["es5"]) != evaluate("__completion__ = NaN\n", ["es5"])
	with pytest.raises(NameError):
		evaluate("__completion__ = len\n", [])
	with pytest.raises(NameError):
		evaluate("__completion__ = Math\n", [])


def test_evaluate_rejects_broken_code() -> None:
	with pytest.raises(EmitError, match="does not compile"):
		evaluate("__completion__ = (\n", [])
	with pytest.raises(EmitError, match="completion"):
		evaluate("value = 1\n", [])
