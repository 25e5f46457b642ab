# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-05
"""
Declaration provider and the shared declaration cache.

A provider maps a configuration to the declaration files it needs
(`/lib/lib.<name>.d.ts` -> text), following `/// <reference lib>` directives.
The cache sits in front of a provider and populates each distinct
configuration at most once, even when several requests ask for it at the same
time; the cached mappings are read-only and shared by every request.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from importlib import resources
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from fragc.options import LIBRARY_FILES, CompilerOptions, lib_path
from fragc.parser import scan_lib_references

logger = logging.getLogger(__name__)


class DeclarationProvider(Protocol):
	def load(self, options: CompilerOptions) -> Mapping[str, str]:
		...


def read_bundled_library(name: str) -> str:
	"""Text of a bundled `lib.<name>.d.ts` file."""
	return resources.files("fragc.lib").joinpath(LIBRARY_FILES[name]).read_text(encoding="utf-8")


class BundledDeclarationProvider:
	"""Serves the declaration files shipped in `fragc/lib`."""

	def load(self, options: CompilerOptions) -> Mapping[str, str]:
		files: Dict[str, str] = {}
		queue: List[str] = list(options.library_names())
		while queue:
			name = queue.pop(0)
			path = lib_path(name)
			if path in files:
				continue
			text = read_bundled_library(name)
			files[path] = text
			for referenced in scan_lib_references(text):
				if referenced in LIBRARY_FILES:
					queue.append(referenced)
		logger.debug("loaded %d declaration file(s) for %s", len(files), ",".join(options.library_names()))
		return files


class DeclarationCache:
	"""
	Load-once cache of declaration mappings, keyed by configuration.

	Usage::

		cache = DeclarationCache()
		files = await cache.load(options)

	Concurrent first loads of one key on an event loop share a single
	in-flight load. Loads racing from different event loops (or threads) may
	both run, but only the first published mapping is kept, so every caller
	sees the same cached value.
	"""

	def __init__(self, provider: Optional[DeclarationProvider] = None) -> None:
		self._provider = provider if provider is not None else BundledDeclarationProvider()
		self._lock = threading.Lock()
		self._values: Dict[Tuple[str, ...], Mapping[str, str]] = {}
		self._in_flight: Dict[Tuple[Tuple[str, ...], asyncio.AbstractEventLoop], asyncio.Task] = {}

	async def load(self, options: CompilerOptions) -> Mapping[str, str]:
		key = options.declaration_key()
		loop = asyncio.get_running_loop()
		with self._lock:
			cached = self._values.get(key)
			if cached is not None:
				logger.debug("declaration cache hit for %s", ",".join(key))
				return cached
			task = self._in_flight.get((key, loop))
			if task is None:
				logger.debug("declaration cache miss for %s", ",".join(key))
				task = loop.create_task(self._populate(key, loop, options))
				self._in_flight[(key, loop)] = task
		# Cancelling one caller only abandons its own wait; the shared load
		# keeps running for the others.
		return await asyncio.shield(task)

	async def _populate(
		self, key: Tuple[str, ...], loop: asyncio.AbstractEventLoop, options: CompilerOptions
	) -> Mapping[str, str]:
		try:
			files = await asyncio.to_thread(self._provider.load, options)
			frozen = MappingProxyType(dict(files))
			with self._lock:
				return self._values.setdefault(key, frozen)
		finally:
			with self._lock:
				self._in_flight.pop((key, loop), None)

	def get(self, options: CompilerOptions) -> Optional[Mapping[str, str]]:
		"""Cached mapping for `options`, or None if it was never loaded."""
		with self._lock:
			return self._values.get(options.declaration_key())

	def load_sync(self, options: CompilerOptions) -> Mapping[str, str]:
		"""Blocking variant for callers without an event loop."""
		key = options.declaration_key()
		with self._lock:
			cached = self._values.get(key)
		if cached is not None:
			return cached
		frozen = MappingProxyType(dict(self._provider.load(options)))
		with self._lock:
			return self._values.setdefault(key, frozen)

	@property
	def cached_keys(self) -> List[Tuple[str, ...]]:
		with self._lock:
			return list(self._values.keys())


_default_cache: Optional[DeclarationCache] = None
_default_cache_lock = threading.Lock()


def default_declaration_cache() -> DeclarationCache:
	"""The process-wide cache, created on first use."""
	global _default_cache
	with _default_cache_lock:
		if _default_cache is None:
			_default_cache = DeclarationCache()
		return _default_cache


__all__ = [
	"DeclarationProvider",
	"BundledDeclarationProvider",
	"DeclarationCache",
	"default_declaration_cache",
	"read_bundled_library",
]
