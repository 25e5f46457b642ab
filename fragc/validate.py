# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Structural checks on the root fragment: exactly one expression statement."""

from __future__ import annotations

from fragc.core.errors import StructuralError
from fragc.core.span import Span
from fragc.parser import ast


def validate_fragment(source_file: ast.SourceFile) -> ast.ExprStmt:
	"""Return the fragment's only statement, or raise `StructuralError`."""
	statements = source_file.statements
	if len(statements) != 1:
		span = Span(file=source_file.file_name)
		if len(statements) > 1:
			span = Span.from_loc(statements[1].loc, file=source_file.file_name)
		raise StructuralError("source must be a single expression", span=span)
	stmt = statements[0]
	if not isinstance(stmt, ast.ExprStmt):
		kind = ast.statement_kind(stmt)
		raise StructuralError(
			f"source must be an expression, found {kind}",
			statement_kind=kind,
			span=Span.from_loc(stmt.loc, file=source_file.file_name),
		)
	return stmt


__all__ = ["validate_fragment"]
