# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-03
"""
Program builder.

A `Program` is one compilation unit: the root fragment plus every declaration
file the configuration pulls in. All file access goes through the host, so a
`VirtualFileSystem` decides what the compiler can see.

Library files are immutable, so their parsed trees are shared between
programs (keyed by path and text); the root file is parsed fresh each time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from fragc.core.diagnostics import Diagnostic
from fragc.core.errors import EmitError
from fragc.core.span import Span
from fragc.host import VirtualFileSystem
from fragc.options import LIBRARY_FILES, OUTPUT_FILE_NAME, ROOT_FILE_NAME, CompilerOptions, lib_path
from fragc.parser import ast, parse

logger = logging.getLogger(__name__)

WriteFile = Callable[[str, str], None]


@lru_cache(maxsize=64)
def _parse_library(path: str, text: str) -> Tuple[Optional[ast.SourceFile], Tuple[Diagnostic, ...]]:
	source_file, diagnostics = parse(text, path)
	logger.debug("parsed library %s (%d statement(s))", path, len(source_file.statements) if source_file else 0)
	return source_file, tuple(diagnostics)


def output_path_for(file_name: str) -> str:
	"""Companion output path of a source file (`/fragment.ts` -> `/fragment.py`)."""
	if file_name.endswith(".ts"):
		return file_name[: -len(".ts")] + ".py"
	return file_name + ".py"


@dataclass
class EmitResult:
	emit_skipped: bool
	diagnostics: List[Diagnostic] = field(default_factory=list)
	emitted_files: List[str] = field(default_factory=list)


class Program:
	"""Parsed files of one compilation plus lazy access to the type checker."""

	def __init__(
		self,
		root_names: Sequence[str],
		options: CompilerOptions,
		host: VirtualFileSystem,
		*,
		config_diagnostics: Iterable[Diagnostic] = (),
	) -> None:
		self.options = options
		self.host = host
		self.root_names: Tuple[str, ...] = tuple(root_names)
		self._files: Dict[str, ast.SourceFile] = {}
		self._order: List[str] = []
		self._syntactic: Dict[str, List[Diagnostic]] = {}
		self._processing_diagnostics: List[Diagnostic] = list(config_diagnostics)
		self._checker = None
		self._load()

	# ------------------------------------------------------------ loading

	def _load(self) -> None:
		queue: List[str] = [lib_path(name) for name in self.options.library_names()]
		seen = set()
		while queue:
			path = queue.pop(0)
			if path in seen:
				continue
			seen.add(path)
			source_file = self._read(path, library=True)
			if source_file is None:
				continue
			for name in source_file.lib_references:
				if name not in LIBRARY_FILES:
					self._processing_diagnostics.append(
						Diagnostic(
							message=f"Cannot find lib definition for '{name}'.",
							code="E2726",
							phase="program",
							span=Span(file=path, line=1, column=1),
						)
					)
					continue
				queue.append(lib_path(name))
		for root in self.root_names:
			self._read(root, library=False)
		logger.debug("program has %d file(s): %s", len(self._order), ", ".join(self._order))

	def _read(self, path: str, *, library: bool) -> Optional[ast.SourceFile]:
		self.host.file_exists(path)
		text = self.host.read_file(path)
		if library:
			source_file, diagnostics = _parse_library(path, text)
			diagnostics = list(diagnostics)
		else:
			source_file, diagnostics = parse(text, path)
		self._order.append(path)
		self._syntactic[path] = diagnostics
		if source_file is not None:
			self._files[path] = source_file
		return source_file

	# ------------------------------------------------------------ queries

	def get_root_file_names(self) -> Tuple[str, ...]:
		return self.root_names

	def get_source_file(self, file_name: str) -> Optional[ast.SourceFile]:
		return self._files.get(file_name)

	def get_source_files(self) -> List[ast.SourceFile]:
		"""Parsed files, declaration files first, in load order."""
		return [self._files[path] for path in self._order if path in self._files]

	def get_file_names(self) -> List[str]:
		return list(self._order)

	def get_options_diagnostics(self) -> List[Diagnostic]:
		return list(self.options.diagnostics) + list(self._processing_diagnostics)

	def get_syntactic_diagnostics(self, source_file: Optional[str] = None) -> List[Diagnostic]:
		if source_file is not None:
			return list(self._syntactic.get(source_file, ()))
		result: List[Diagnostic] = []
		for path in self._order:
			result.extend(self._syntactic[path])
		return result

	def get_type_checker(self):
		if self._checker is None:
			from fragc.checker import TypeChecker

			self._checker = TypeChecker(self)
		return self._checker

	def get_global_diagnostics(self) -> List[Diagnostic]:
		return self.get_type_checker().get_global_diagnostics()

	def get_semantic_diagnostics(self, source_file: Optional[ast.SourceFile] = None) -> List[Diagnostic]:
		checker = self.get_type_checker()
		if source_file is not None:
			return checker.get_diagnostics(source_file)
		result: List[Diagnostic] = []
		for sf in self.get_source_files():
			result.extend(checker.get_diagnostics(sf))
		return result

	# --------------------------------------------------------------- emit

	def emit(self, write_file: Optional[WriteFile] = None) -> EmitResult:
		"""
		Generate Python for every non-declaration root file.

		Outputs go through `write_file`, defaulting to the host, which refuses
		every write: callers that want the code pass their own writer.
		"""
		from fragc.codegen import emit_source_file

		writer = write_file if write_file is not None else self.host.write_file
		emitted: List[str] = []
		for root in self.root_names:
			source_file = self._files.get(root)
			if source_file is None:
				logger.debug("skipping emit for %s: file did not parse", root)
				return EmitResult(emit_skipped=True, diagnostics=self.get_syntactic_diagnostics(root))
			if source_file.is_declaration_file:
				continue
			code = emit_source_file(source_file, self.get_type_checker(), self.options.module)
			output = output_path_for(root)
			logger.debug("emitting %s (%d chars)", output, len(code))
			writer(output, code)
			emitted.append(output)
		return EmitResult(emit_skipped=False, emitted_files=emitted)


def create_program(
	root_names: Sequence[str],
	options: CompilerOptions,
	host: VirtualFileSystem,
	*,
	config_diagnostics: Iterable[Diagnostic] = (),
) -> Program:
	if not root_names:
		raise EmitError("a program needs at least one root file")
	return Program(root_names, options, host, config_diagnostics=config_diagnostics)


__all__ = ["Program", "EmitResult", "create_program", "output_path_for", "ROOT_FILE_NAME", "OUTPUT_FILE_NAME"]
