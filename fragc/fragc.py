# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-02
"""
fragc command-line driver.

Compiles one fragment (from a file or `-e TEXT`) and prints its signature,
the generated Python (`--emit`) or the result of calling it (`--call`).
Any compilation failure exits with 1; with --json, diagnostics are printed as
structured records (phase/message/severity/code/file/line/column) alongside
an exit_code, otherwise as human-readable lines on stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import inspect
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from fragc.core.diagnostics import Diagnostic
from fragc.core.errors import DiagnosticsError, FragmentError, StructuralError
from fragc.core.span import Span
from fragc.declarations import default_declaration_cache
from fragc.logging_config import setup_logging
from fragc.options import LIBRARY_FILES, ROOT_FILE_NAME, CompilerOptions, ModuleKind, ScriptTarget
from fragc.parameters import ParameterKind
from fragc.pipeline import EvalResult, compile_fragment, compile_to_python

logger = logging.getLogger(__name__)


def _error_diagnostics(err: FragmentError) -> List[Diagnostic]:
	"""Diagnostics describing a pipeline failure."""
	if isinstance(err, DiagnosticsError):
		return list(err.diagnostics)
	span = err.span if isinstance(err, StructuralError) else Span(file=ROOT_FILE_NAME)
	if span.file is None:
		span = Span(ROOT_FILE_NAME, span.line, span.column)
	return [Diagnostic(message=str(err), code=None, phase=err.kind, span=span)]


def _report(diagnostics: Sequence[Diagnostic], *, as_json: bool) -> int:
	if as_json:
		print(json.dumps({"exit_code": 1, "diagnostics": [d.to_json() for d in diagnostics]}))
	else:
		for diag in diagnostics:
			print(diag.render(), file=sys.stderr)
	return 1


def _success(payload: Any, *, as_json: bool) -> int:
	if as_json:
		print(json.dumps({"exit_code": 0, "diagnostics": [], "result": payload}))
	elif isinstance(payload, str):
		sys.stdout.write(payload)
	else:
		print(json.dumps(payload, indent=2))
	return 0


def _coerce_argument(text: str, kind: ParameterKind) -> Any:
	if kind is ParameterKind.TEXTUAL:
		return text
	try:
		value = float(text)
	except ValueError:
		raise ValueError(f"'{text}' is not a number") from None
	return int(value) if value.is_integer() else value


def _call(result: EvalResult, raw: Sequence[str]) -> Any:
	if len(raw) != len(result.parameters):
		raise ValueError(f"expected {len(result.parameters)} argument(s), got {len(raw)}")
	args = [_coerce_argument(text, param.kind) for text, param in zip(raw, result.parameters)]
	value = result.callable(*args)
	if inspect.isawaitable(value):
		value = asyncio.run(_await(value))
	return value


async def _await(value: Any) -> Any:
	return await value


def _options_mapping(args: argparse.Namespace) -> Dict[str, Any]:
	raw: Dict[str, Any] = {}
	if args.module is not None:
		raw["module"] = args.module
	if args.target is not None:
		raw["target"] = args.target
	if args.lib:
		raw["lib"] = list(args.lib)
	return raw


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="fragc", description="Compile a typed function fragment to a Python callable")
	source = parser.add_mutually_exclusive_group(required=True)
	source.add_argument("source", type=Path, nargs="?", help="Path to a fragment source file")
	source.add_argument("-e", "--eval", dest="text", help="Fragment source text")
	parser.add_argument(
		"--target",
		help=f"Language level selecting the default libraries ({', '.join(t.value for t in ScriptTarget)})",
	)
	parser.add_argument(
		"--lib",
		action="append",
		help=f"Declaration library (repeatable; {', '.join(LIBRARY_FILES)})",
	)
	parser.add_argument("--module", help=f"Emitted code shape ({', '.join(m.value for m in ModuleKind)})")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/code/file/line/column)",
	)
	parser.add_argument("--emit", action="store_true", help="Print the generated Python instead of the signature")
	parser.add_argument("--call", nargs="*", metavar="ARG", help="Call the compiled fragment with these arguments")
	parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	setup_logging(args.log_level)

	if args.text is not None:
		text = args.text
	else:
		try:
			text = args.source.read_text(encoding="utf-8")
		except OSError as err:
			diag = Diagnostic(message=f"cannot read source: {err.strerror}", phase="driver", span=Span(file=str(args.source)))
			return _report([diag], as_json=args.json)

	options = CompilerOptions.from_mapping(_options_mapping(args))
	logger.debug("compiling with %s", options)
	try:
		declarations = default_declaration_cache().load_sync(options)
		if args.emit:
			return _success(compile_to_python(text, options, declarations), as_json=args.json)
		result = compile_fragment(text, options, declarations)
	except FragmentError as err:
		return _report(_error_diagnostics(err), as_json=args.json)

	if args.call is None:
		return _success(result.describe(), as_json=args.json)
	try:
		value = _call(result, args.call)
	except ValueError as err:
		diag = Diagnostic(message=str(err), phase="driver", span=Span(file=ROOT_FILE_NAME))
		return _report([diag], as_json=args.json)
	return _success(value, as_json=args.json)


if __name__ == "__main__":
	sys.exit(main())
