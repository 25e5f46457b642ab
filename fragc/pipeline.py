# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-02
"""
Fragment compilation pipeline.

    source -> virtual file system -> program -> structural check
           -> diagnostics -> signature -> emit -> structural re-check
           -> evaluation -> EvalResult

The signature is extracted before the generated code is evaluated, so no
fragment code runs before its type has been accepted. Every failure raises
one of the `FragmentError` subclasses and no partial result is returned.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from fragc.core.errors import EmitError
from fragc.declarations import DeclarationCache, default_declaration_cache
from fragc.diagnostics_collector import ensure_no_diagnostics
from fragc.evaluator import evaluate
from fragc.host import VirtualFileSystem
from fragc.options import OUTPUT_FILE_NAME, ROOT_FILE_NAME, CompilerOptions, lib_name_from_path
from fragc.parameters import Parameter, ParameterKind
from fragc.parser import ast
from fragc.program import Program, create_program
from fragc.runtime import RuntimeContext
from fragc.signature import extract_signature
from fragc.validate import validate_fragment

logger = logging.getLogger(__name__)

Config = Union[CompilerOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class EvalResult:
	callable: Callable[..., Any]
	parameters: Tuple[Parameter, ...]
	result_shape: Mapping[str, ParameterKind] = field(default_factory=lambda: MappingProxyType({}))

	def describe(self) -> dict:
		"""Wire form without the callable (what a host stores or logs)."""
		return {
			"parameters": [p.to_wire() for p in self.parameters],
			"resultShape": {name: kind.value for name, kind in self.result_shape.items()},
		}

	def to_wire(self) -> dict:
		return {"callable": self.callable, **self.describe()}


def resolve_options(config: Config) -> CompilerOptions:
	if isinstance(config, CompilerOptions):
		return config
	return CompilerOptions.from_mapping(config)


def _build_program(source: str, options: CompilerOptions, declaration_files: Mapping[str, str]) -> Program:
	host = VirtualFileSystem.for_fragment(source, declaration_files)
	return create_program([ROOT_FILE_NAME], options, host)


def _root_statement(program: Program) -> Tuple[ast.SourceFile, ast.ExprStmt]:
	"""Structural check, then diagnostics; returns the root file and its expression statement."""
	root = program.get_source_file(ROOT_FILE_NAME)
	if root is not None:
		validate_fragment(root)
	ensure_no_diagnostics(program)
	if root is None:
		raise EmitError("root file has no syntax tree but reported no diagnostics")
	return root, validate_fragment(root)


def _emit(program: Program) -> str:
	outputs: List[Tuple[str, str]] = []

	def write_file(path: str, text: str) -> None:
		outputs.append((path, text))

	result = program.emit(write_file)
	if result.emit_skipped:
		raise EmitError("emit was skipped")
	if len(outputs) != 1:
		raise EmitError(f"expected exactly one output, got {len(outputs)}")
	path, code = outputs[0]
	if path != OUTPUT_FILE_NAME:
		raise EmitError(f"unexpected output path '{path}'")
	return code


def _loaded_libraries(program: Program) -> List[str]:
	names = (lib_name_from_path(path) for path in program.get_file_names())
	return [name for name in names if name is not None]


def compile_to_python(source: str, options: CompilerOptions, declaration_files: Mapping[str, str]) -> str:
	"""Generated Python for a fragment that passes the structural and diagnostics checks."""
	program = _build_program(source, options, declaration_files)
	_root_statement(program)
	return _emit(program)


def compile_fragment(
	source: str,
	options: CompilerOptions,
	declaration_files: Mapping[str, str],
	*,
	ctx: Optional[RuntimeContext] = None,
) -> EvalResult:
	"""Synchronous core of `compile_and_evaluate`."""
	program = _build_program(source, options, declaration_files)
	root, stmt = _root_statement(program)
	signature = extract_signature(program.get_type_checker(), stmt.expr)
	code = _emit(program)
	validate_fragment(root)
	value = evaluate(code, _loaded_libraries(program), ctx=ctx)
	if not callable(value):
		raise EmitError(f"fragment evaluated to a non-callable {type(value).__name__}")
	logger.debug("compiled fragment with %d parameter(s)", len(signature.parameters))
	return EvalResult(value, signature.parameters, signature.result_shape)


async def compile_and_evaluate(
	source: str,
	config: Config = None,
	*,
	declarations: Optional[DeclarationCache] = None,
	ctx: Optional[RuntimeContext] = None,
) -> EvalResult:
	"""Compile `source` into a callable plus its parameter and result description."""
	options = resolve_options(config)
	cache = declarations if declarations is not None else default_declaration_cache()
	declaration_files = await cache.load(options)
	# Hand control back once before the synchronous compile.
	await asyncio.sleep(0)
	return compile_fragment(source, options, declaration_files, ctx=ctx)


__all__ = [
	"EvalResult",
	"compile_and_evaluate",
	"compile_fragment",
	"compile_to_python",
	"resolve_options",
]
