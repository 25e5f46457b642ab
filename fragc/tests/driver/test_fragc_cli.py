import json
import logging

import pytest

from fragc.fragc import build_parser, main
from fragc.logging_config import setup_logging

SUM = "(x: number, y: number) => ({ sum: x + y })"


def _run_json(capsys, argv) -> tuple:
	code = main(argv + ["--json"])
	out = json.loads(capsys.readouterr().out)
	assert out["exit_code"] == code
	return code, out


def test_signature_as_json(capsys) -> None:
	code, out = _run_json(capsys, ["-e", SUM])
	assert code == 0
	assert out == {
		"exit_code": 0,
		"diagnostics": [],
		"result": {
			"parameters": [{"name": "x", "kind": "numeric"}, {"name": "y", "kind": "numeric"}],
			"resultShape": {"sum": "numeric"},
		},
	}


def test_signature_as_text(capsys) -> None:
	assert main(["-e", "(label: string) => ({ n: label.length })"]) == 0
	out = json.loads(capsys.readouterr().out)
	assert out == {"parameters": [{"name": "label", "kind": "textual"}], "resultShape": {"n": "numeric"}}


def test_source_file(tmp_path, capsys) -> None:
	path = tmp_path / "sum.ts"
	path.write_text(SUM + "\n", encoding="utf-8")
	code, out = _run_json(capsys, [str(path)])
	assert code == 0
	assert out["result"]["resultShape"] == {"sum": "numeric"}


def test_missing_source_file(tmp_path, capsys) -> None:
	path = tmp_path / "missing.ts"
	code, out = _run_json(capsys, [str(path)])
	assert code == 1
	[diag] = out["diagnostics"]
	assert diag["phase"] == "driver"
	assert diag["file"] == str(path)
	assert diag["message"].startswith("cannot read source")


def test_call(capsys) -> None:
	code, out = _run_json(capsys, ["-e", SUM, "--call", "2", "3"])
	assert code == 0
	assert out["result"] == {"sum": 5}


def test_call_with_fractions_and_text(capsys) -> None:
	code, out = _run_json(capsys, ["-e", "(s: string, k: number) => ({ n: s.length * k })", "--call", "abc", "1.5"])
	assert code == 0
	assert out["result"] == {"n": 4.5}


def test_call_async_fragment(capsys) -> None:
	code, out = _run_json(capsys, ["-e", "async (x: number) => ({ y: x * 2 })", "--call", "4"])
	assert code == 0
	assert out["result"] == {"y": 8}


@pytest.mark.parametrize(
	"args, message",
	[
		(["2"], "expected 2 argument(s), got 1"),
		(["two", "3"], "'two' is not a number"),
	],
)
def test_call_argument_errors(capsys, args, message) -> None:
	code, out = _run_json(capsys, ["-e", SUM, "--call", *args])
	assert code == 1
	[diag] = out["diagnostics"]
	assert (diag["phase"], diag["message"]) == ("driver", message)


def test_emit(capsys) -> None:
	assert main(["-e", SUM, "--emit"]) == 0
	out = capsys.readouterr().out
	assert out.startswith("# Generated by fragc from /fragment.ts.\n")
	assert "def __fn_1(x, y):" in out


def test_emit_closure_as_json(capsys) -> None:
	code, out = _run_json(capsys, ["-e", SUM, "--emit", "--module", "closure"])
	assert code == 0
	assert "def __module__():" in out["result"]


def test_type_errors_as_json(capsys) -> None:
	code, out = _run_json(capsys, ["-e", "(x: number) => ({ y: nope(x) })"])
	assert code == 1
	[diag] = out["diagnostics"]
	assert diag["code"] == "E2304"
	assert diag["phase"] == "typecheck"
	assert (diag["file"], diag["line"]) == ("/fragment.ts", 1)


def test_type_errors_as_text(capsys) -> None:
	assert main(["-e", "(x: number) => ({ y: nope(x) })"]) == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert "error E2304: Cannot find name 'nope'." in captured.err


@pytest.mark.parametrize(
	"source, phase",
	[
		("(x: number) => x", "return-shape"),
		("(x: boolean) => ({ y: 1 })", "parameter-type"),
		("(x: number) => ({ s: 'a' })", "result-field-type"),
		("Math", "signature"),
		("const a = 1", "structural"),
	],
)
def test_pipeline_errors_as_json(capsys, source, phase) -> None:
	code, out = _run_json(capsys, ["-e", source])
	assert code == 1
	[diag] = out["diagnostics"]
	assert diag["phase"] == phase
	assert diag["file"] == "/fragment.ts"


def test_library_selection(capsys) -> None:
	code, out = _run_json(capsys, ["-e", "(x: number) => ({ y: process.pid + x })", "--lib", "es2017", "--lib", "host"])
	assert code == 0
	code, out = _run_json(capsys, ["-e", "(x: number) => ({ y: process.pid + x })"])
	assert code == 1
	assert [d["code"] for d in out["diagnostics"]] == ["E2304"]


def test_invalid_options_are_reported(capsys) -> None:
	code, out = _run_json(capsys, ["-e", SUM, "--lib", "es5", "--lib", "bogus"])
	assert code == 1
	assert "E6046" in [d["code"] for d in out["diagnostics"]]


def test_target_without_promise(capsys) -> None:
	code, out = _run_json(capsys, ["-e", "async (x: number) => ({ y: x })", "--target", "es5", "--lib", "es5"])
	assert code == 1
	assert "E2705" in [d["code"] for d in out["diagnostics"]]


def test_source_is_required() -> None:
	with pytest.raises(SystemExit):
		build_parser().parse_args([])


def test_setup_logging_levels() -> None:
	setup_logging("INFO")
	setup_logging("DEBUG")
	assert logging.getLogger().level == logging.DEBUG
	setup_logging("warning")
	assert logging.getLogger().level == logging.WARNING
	with pytest.raises(ValueError):
		setup_logging("chatty")
