from __future__ import annotations

from fragc.core.diagnostics import Diagnostic, format_diagnostics, has_errors, sort_diagnostics
from fragc.core.errors import (
	DiagnosticsError,
	ParameterTypeError,
	ResultFieldTypeError,
	ReturnShapeError,
	SignatureError,
	StructuralError,
)
from fragc.core.span import Span


def _diag(message: str, line: int | None = None, column: int | None = None, code: str | None = "E2304") -> Diagnostic:
	return Diagnostic(message=message, code=code, phase="typecheck", span=Span("/fragment.ts", line, column))


def test_render_uses_file_line_column_prefix() -> None:
	diag = _diag("Cannot find name 'q'.", 1, 7)
	assert diag.render() == "/fragment.ts:1:7 - error E2304: Cannot find name 'q'."


def test_render_marks_unknown_positions() -> None:
	diag = Diagnostic(message="boom", span=Span())
	assert diag.render() == "<unknown>:?:? - error: boom"


def test_render_appends_notes() -> None:
	diag = _diag("bad", 2, 3)
	diag.notes.append("see here")
	assert diag.render().splitlines()[1] == "  note: see here"


def test_to_json_shape() -> None:
	payload = _diag("bad", 4, 5).to_json()
	assert payload == {
		"phase": "typecheck",
		"message": "bad",
		"severity": "error",
		"code": "E2304",
		"file": "/fragment.ts",
		"line": 4,
		"column": 5,
		"notes": [],
	}


def test_none_span_becomes_unknown() -> None:
	diag = Diagnostic(message="x", span=None)  # type: ignore[arg-type]
	assert diag.span == Span()


def test_sort_places_unknown_positions_last_within_a_file() -> None:
	late = _diag("late", None, None)
	first = _diag("first", 1, 1)
	second = _diag("second", 3, 1)
	assert [d.message for d in sort_diagnostics([late, second, first])] == ["first", "second", "late"]


def test_has_errors_ignores_warnings() -> None:
	warning = Diagnostic(message="w", severity="warning")
	assert not has_errors([warning])
	assert has_errors([warning, _diag("e")])


def test_diagnostics_error_message_lists_every_diagnostic() -> None:
	diags = [_diag("one", 1, 1), _diag("two", 2, 1)]
	err = DiagnosticsError(diags)
	assert str(err).startswith("2 diagnostics:\n")
	assert err.rendered == format_diagnostics(diags)
	assert err.diagnostics == tuple(diags)
	assert [d["message"] for d in err.to_json()["diagnostics"]] == ["one", "two"]


def test_single_diagnostic_message_is_singular() -> None:
	assert str(DiagnosticsError([_diag("one")])).startswith("1 diagnostic:\n")


def test_error_payloads_carry_structured_context() -> None:
	assert ParameterTypeError("x", "boolean").to_json() == {
		"kind": "parameter-type",
		"message": "parameter 'x' has type 'boolean'; only 'number' and 'string' are supported",
		"parameter": "x",
		"type": "boolean",
	}
	assert ResultFieldTypeError("label", "string").to_json()["field"] == "label"
	assert ReturnShapeError("number").to_json()["type"] == "number"
	assert SignatureError("number", 0).to_json()["signatureCount"] == 0
	assert "is not callable" in str(SignatureError("number", 0))
	assert "has 2 call signatures" in str(SignatureError("F", 2))


def test_structural_error_payload() -> None:
	err = StructuralError("source must be an expression, found variable declaration", statement_kind="variable declaration", span=Span("/fragment.ts", 1, 1))
	payload = err.to_json()
	assert payload["kind"] == "structural"
	assert payload["statementKind"] == "variable declaration"
	assert (payload["line"], payload["column"]) == (1, 1)
