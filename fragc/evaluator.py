# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-08
"""
Evaluation of generated fragment code.

The code runs in a fresh namespace with empty `__builtins__`: the only names
it can reach are the runtime helpers and the value bindings of the libraries
the program was checked against. The callable it produces is not sandboxed;
calling it runs with the host's privileges.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from fragc.codegen import COMPLETION, RUNTIME
from fragc.core.errors import EmitError
from fragc.options import OUTPUT_FILE_NAME
from fragc.runtime import HELPERS, RuntimeContext, bind_libraries

logger = logging.getLogger(__name__)


def evaluate(
	code: str,
	library_names: Iterable[str],
	*,
	file_name: str = OUTPUT_FILE_NAME,
	ctx: Optional[RuntimeContext] = None,
) -> Any:
	"""Run `code` and return the value it bound to the completion name."""
	try:
		compiled = compile(code, file_name, "exec")
	except SyntaxError as err:
		raise EmitError(f"generated code does not compile: {err.msg} (line {err.lineno})") from err
	namespace: Dict[str, Any] = {"__builtins__": {}, RUNTIME: HELPERS}
	namespace.update(bind_libraries(library_names, ctx))
	exec(compiled, namespace)
	if COMPLETION not in namespace:
		raise EmitError("generated code did not produce a completion value")
	value = namespace[COMPLETION]
	logger.debug("evaluated %s to %s", file_name, type(value).__name__)
	return value


__all__ = ["evaluate"]
