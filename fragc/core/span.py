# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries best-effort file/line/column info for a diagnostic. Lines and
columns are 1-based, matching what lark reports for tokens and tree metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser location object.

		If `loc` is already a Span it is returned unchanged (with `file` filled
		in when it was missing); otherwise the common location fields are copied.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if loc.file is None and file is not None:
				return cls(file, loc.line, loc.column, loc.end_line, loc.end_column)
			return loc
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
		)

	def short(self) -> str:
		"""Format as `file:line:column`, with `?` for unknown parts."""
		f = self.file or "<unknown>"
		l = self.line if self.line is not None else "?"
		c = self.column if self.column is not None else "?"
		return f"{f}:{l}:{c}"


__all__ = ["Span"]
