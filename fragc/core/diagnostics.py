# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-02
"""
Common diagnostic structure for parser/checker/driver passes.

A diagnostic is a message plus a span and a stable code. Codes follow the
`E<number>` scheme; checker codes reuse the numbers TypeScript uses for the
same condition so messages are familiar to people who write the fragments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Phase label: "options", "parser", "typecheck". The driver prints it in
	# JSON output so hosts can tell syntax errors from type errors.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self) -> str:
		"""Human-readable one-line form: `file:line:column - error CODE: message`."""
		code = f" {self.code}" if self.code else ""
		text = f"{self.span.short()} - {self.severity}{code}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text

	def to_json(self) -> dict:
		return {
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"code": self.code,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
	return any(d.severity == "error" for d in diagnostics)


def format_diagnostics(diagnostics: Sequence[Diagnostic]) -> str:
	"""Render diagnostics in order, one per line."""
	lines: List[str] = [d.render() for d in diagnostics]
	return "\n".join(lines)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
	"""Stable sort by file then position; unknown positions sort last in a file."""

	def _key(d: Diagnostic) -> tuple:
		span = d.span
		return (
			span.file or "",
			span.line if span.line is not None else 1 << 30,
			span.column if span.column is not None else 1 << 30,
		)

	return sorted(diagnostics, key=_key)


__all__ = ["Diagnostic", "has_errors", "format_diagnostics", "sort_diagnostics"]
