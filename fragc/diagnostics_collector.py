# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Pre-emit diagnostics of a whole program."""

from __future__ import annotations

import logging
from typing import List

from fragc.core.diagnostics import Diagnostic
from fragc.core.errors import DiagnosticsError
from fragc.program import Program

logger = logging.getLogger(__name__)


def get_pre_emit_diagnostics(program: Program) -> List[Diagnostic]:
	"""
	Options, syntactic, global and semantic diagnostics, in that order.

	Semantic checking is skipped when any file failed to parse: the checker
	needs complete trees, and the syntax errors are what the user must fix.
	"""
	diagnostics: List[Diagnostic] = list(program.get_options_diagnostics())
	syntactic = program.get_syntactic_diagnostics()
	diagnostics.extend(syntactic)
	if not syntactic:
		diagnostics.extend(program.get_global_diagnostics())
		diagnostics.extend(program.get_semantic_diagnostics())
	return diagnostics


def ensure_no_diagnostics(program: Program) -> None:
	diagnostics = get_pre_emit_diagnostics(program)
	if diagnostics:
		logger.debug("%d pre-emit diagnostic(s)", len(diagnostics))
		raise DiagnosticsError(diagnostics)


__all__ = ["get_pre_emit_diagnostics", "ensure_no_diagnostics"]
