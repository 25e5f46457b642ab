# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-02
"""
Fragment front end.

`parse()` is the entry point the program builder uses: it never raises for
bad input, it returns the syntax diagnostics instead.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from fragc.core.diagnostics import Diagnostic
from fragc.core.span import Span

from . import ast
from .parser import FragmentSyntaxError, parse_source_file, scan_lib_references

# Display text for terminals named in "'x' expected." diagnostics, in the order
# they are preferred when several terminals would have been accepted.
_EXPECTED_DISPLAY = (
	("RPAR", ")"),
	("RSQB", "]"),
	("RBRACE", "}"),
	("GT", ">"),
	("COLON", ":"),
	("ARROW", "=>"),
	("EQUAL", "="),
	("LPAR", "("),
	("TERMINATOR", ";"),
	("COMMA", ","),
)

_EXPRESSION_START = {"NAME", "NUMBER", "STRING", "LPAR", "ARROW_LPAR", "LBRACE", "LSQB"}


def parse(text: str, file_name: str) -> Tuple[Optional[ast.SourceFile], List[Diagnostic]]:
	"""Parse `text`; on failure return `(None, [diagnostic])`."""
	try:
		return parse_source_file(text, file_name), []
	except FragmentSyntaxError as err:
		return None, [
			Diagnostic(
				message=str(err),
				code=err.code,
				phase="parser",
				span=Span.from_loc(err.loc, file=file_name),
			)
		]
	except UnexpectedInput as err:
		return None, [_diagnostic_from_unexpected(err, file_name)]


def _diagnostic_from_unexpected(err: UnexpectedInput, file_name: str) -> Diagnostic:
	span = Span(file=file_name, line=getattr(err, "line", None), column=getattr(err, "column", None))
	if isinstance(err, UnexpectedCharacters):
		if err.char in "\"'":
			return Diagnostic(message="Unterminated string literal.", code="E1002", phase="parser", span=span)
		return Diagnostic(message="Invalid character.", code="E1127", phase="parser", span=span)

	expected = set(getattr(err, "expected", None) or ())
	token = getattr(err, "token", None)
	if isinstance(err, UnexpectedToken) and token is not None and token.type != "$END":
		span = Span(file=file_name, line=token.line, column=token.column)
	if expected & _EXPRESSION_START and not expected & {"RPAR", "RSQB", "RBRACE"}:
		return Diagnostic(message="Expression expected.", code="E1109", phase="parser", span=span)
	for name, display in _EXPECTED_DISPLAY:
		if name in expected:
			return Diagnostic(message=f"'{display}' expected.", code="E1005", phase="parser", span=span)
	return Diagnostic(message="Declaration or statement expected.", code="E1128", phase="parser", span=span)


__all__ = ["ast", "parse", "parse_source_file", "scan_lib_references", "FragmentSyntaxError"]
