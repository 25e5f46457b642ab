# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-03
"""
Sandboxed compiler host.

The program builder never touches the real file system: every existence
check and read goes through a `VirtualFileSystem` built fresh for one request
from the fragment and its declaration files. Requests for any other path mean
the compiler is reaching outside the sandbox and raise `EmitError`; writes are
always refused.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Mapping

from fragc.core.errors import EmitError
from fragc.options import ROOT_FILE_NAME

logger = logging.getLogger(__name__)


class VirtualFileSystem:
	"""Read-only path -> text mapping answering the compiler's file requests."""

	def __init__(self, files: Mapping[str, str]) -> None:
		self._files: Mapping[str, str] = MappingProxyType(dict(files))

	@classmethod
	def for_fragment(cls, source: str, declaration_files: Mapping[str, str]) -> "VirtualFileSystem":
		files: Dict[str, str] = dict(declaration_files)
		files[ROOT_FILE_NAME] = source
		return cls(files)

	@property
	def paths(self) -> tuple:
		return tuple(self._files)

	def file_exists(self, path: str) -> bool:
		if path not in self._files:
			raise EmitError(f"compiler requested unknown path '{path}'")
		return True

	def read_file(self, path: str) -> str:
		try:
			return self._files[path]
		except KeyError:
			raise EmitError(f"compiler requested unknown path '{path}'") from None

	def write_file(self, path: str, text: str) -> None:
		logger.debug("refused write to %s (%d chars)", path, len(text))
		raise EmitError(f"compiler attempted to write '{path}'")


__all__ = ["VirtualFileSystem"]
