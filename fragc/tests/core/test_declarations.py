from __future__ import annotations

import asyncio
import threading
from typing import Mapping

import pytest

from fragc.declarations import BundledDeclarationProvider, DeclarationCache, read_bundled_library
from fragc.options import CompilerOptions


class CountingProvider:
	"""Bundled provider that counts loads and can be held open."""

	def __init__(self) -> None:
		self.calls = 0
		self.release = threading.Event()
		self.release.set()
		self._inner = BundledDeclarationProvider()

	def load(self, options: CompilerOptions) -> Mapping[str, str]:
		self.calls += 1
		self.release.wait(timeout=5)
		return self._inner.load(options)


class FailingProvider:
	def __init__(self) -> None:
		self.calls = 0

	def load(self, options: CompilerOptions) -> Mapping[str, str]:
		self.calls += 1
		raise OSError("declarations unavailable")


def test_bundled_provider_follows_lib_references() -> None:
	files = BundledDeclarationProvider().load(CompilerOptions())
	assert set(files) == {
		"/lib/lib.es2017.d.ts",
		"/lib/lib.es2015.d.ts",
		"/lib/lib.es5.d.ts",
		"/lib/lib.dom.d.ts",
	}
	assert files["/lib/lib.es5.d.ts"] == read_bundled_library("es5")


def test_bundled_provider_es5_only() -> None:
	files = BundledDeclarationProvider().load(CompilerOptions(lib=["es5"]))
	assert list(files) == ["/lib/lib.es5.d.ts"]


@pytest.mark.asyncio
async def test_concurrent_first_loads_share_one_provider_call() -> None:
	provider = CountingProvider()
	provider.release.clear()
	cache = DeclarationCache(provider)
	options = CompilerOptions()

	tasks = [asyncio.create_task(cache.load(options)) for _ in range(5)]
	await asyncio.sleep(0.05)
	provider.release.set()
	results = await asyncio.gather(*tasks)

	assert provider.calls == 1
	assert all(result is results[0] for result in results)


@pytest.mark.asyncio
async def test_cached_value_is_reused_and_read_only() -> None:
	provider = CountingProvider()
	cache = DeclarationCache(provider)
	options = CompilerOptions(lib=["es5"])
	first = await cache.load(options)
	second = await cache.load(CompilerOptions(lib=["es5"], module="closure"))
	assert first is second
	assert provider.calls == 1
	assert cache.get(options) is first
	with pytest.raises(TypeError):
		first["/lib/extra.d.ts"] = ""  # type: ignore[index]


@pytest.mark.asyncio
async def test_distinct_configurations_load_separately() -> None:
	provider = CountingProvider()
	cache = DeclarationCache(provider)
	await asyncio.gather(cache.load(CompilerOptions(lib=["es5"])), cache.load(CompilerOptions(lib=["es2015"])))
	assert provider.calls == 2
	assert sorted(cache.cached_keys) == [("es2015",), ("es5",)]


@pytest.mark.asyncio
async def test_failed_load_is_not_cached() -> None:
	provider = FailingProvider()
	cache = DeclarationCache(provider)
	with pytest.raises(OSError):
		await cache.load(CompilerOptions())
	with pytest.raises(OSError):
		await cache.load(CompilerOptions())
	assert provider.calls == 2
	assert cache.get(CompilerOptions()) is None


def test_load_sync_populates_the_same_cache() -> None:
	provider = CountingProvider()
	cache = DeclarationCache(provider)
	options = CompilerOptions(lib=["es5", "host"])
	first = cache.load_sync(options)
	assert cache.load_sync(options) is first
	assert asyncio.run(cache.load(options)) is first
	assert provider.calls == 1


@pytest.mark.asyncio
async def test_cancelled_caller_does_not_cancel_other_waiters() -> None:
	provider = CountingProvider()
	provider.release.clear()
	cache = DeclarationCache(provider)
	options = CompilerOptions()

	leader = asyncio.create_task(cache.load(options))
	waiter = asyncio.create_task(cache.load(options))
	await asyncio.sleep(0.05)
	leader.cancel()
	with pytest.raises(asyncio.CancelledError):
		await leader
	provider.release.set()

	files = await waiter
	assert "/lib/lib.es5.d.ts" in files
	assert provider.calls == 1
	assert cache.get(options) is files


@pytest.mark.asyncio
async def test_cancelled_only_caller_still_fills_the_cache() -> None:
	provider = CountingProvider()
	provider.release.clear()
	cache = DeclarationCache(provider)
	options = CompilerOptions(lib=["es5"])

	task = asyncio.create_task(cache.load(options))
	await asyncio.sleep(0.05)
	task.cancel()
	provider.release.set()
	with pytest.raises(asyncio.CancelledError):
		await task

	files = await cache.load(options)
	assert list(files) == ["/lib/lib.es5.d.ts"]
	assert provider.calls == 1
