# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-09
"""
Value bindings for the declaration libraries.

Every value a bundled `lib.<name>.d.ts` declares has a Python counterpart
here. `bind_libraries()` builds a fresh set of bindings for one evaluation,
so a fragment that mutates `Math` or `console` cannot affect another one.
Objects are dicts because generated code reads required properties of
object types with subscripts.
"""

from __future__ import annotations

import math
import os
import random
import re
import sys
import time
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .helpers import INF, NAN, power, to_integer, to_number, to_string

Bindings = Dict[str, Any]


class RuntimeContext:
	"""Where host-level library objects write and what they report."""

	def __init__(self, stdout=None, *, started: Optional[float] = None) -> None:
		self.stdout = stdout
		self.started = time.monotonic() if started is None else started

	def write(self, text: str) -> None:
		stream = self.stdout if self.stdout is not None else sys.stdout
		stream.write(text + "\n")
		stream.flush()


def _number_result(value: float) -> float | int:
	if not math.isnan(value) and not math.isinf(value) and value.is_integer() and abs(value) < 2**53:
		return int(value)
	return value


def _unary(fn: Callable[[float], float]) -> Callable[[Any], float | int]:
	def apply(x: Any = None) -> float | int:
		try:
			return _number_result(float(fn(float(to_number(x)))))
		except ValueError:
			return NAN
		except OverflowError:
			return INF

	return apply


def _round(x: Any = None) -> float | int:
	value = float(to_number(x))
	if math.isnan(value) or math.isinf(value):
		return value
	# Halves round towards +Infinity.
	return int(math.floor(value + 0.5))


def _sign(x: Any = None) -> float | int:
	value = to_number(x)
	if math.isnan(value) or value == 0:
		return value
	return 1 if value > 0 else -1


def _max(*values: Any) -> float | int:
	numbers = [to_number(v) for v in values]
	if any(math.isnan(n) for n in numbers):
		return NAN
	return max(numbers, default=-INF)


def _min(*values: Any) -> float | int:
	numbers = [to_number(v) for v in values]
	if any(math.isnan(n) for n in numbers):
		return NAN
	return min(numbers, default=INF)


def _hypot(*values: Any) -> float | int:
	numbers = [to_number(v) for v in values]
	if any(math.isinf(n) for n in numbers):
		return INF
	return _number_result(math.hypot(*numbers))


def _atan2(y: Any = None, x: Any = None) -> float | int:
	return _number_result(math.atan2(float(to_number(y)), float(to_number(x))))


def _pow(x: Any = None, y: Any = None) -> float | int:
	return power(x, y)


def _log(fn: Callable[[float], float]) -> Callable[[Any], float | int]:
	def apply(x: Any = None) -> float | int:
		value = float(to_number(x))
		if math.isnan(value) or value < 0:
			return NAN
		if value == 0:
			return -INF
		if math.isinf(value):
			return INF
		return _number_result(fn(value))

	return apply


_LEADING_FLOAT = re.compile(r"[+-]?(Infinity|\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?)")


def parse_float(text: Any = None) -> float | int:
	match = _LEADING_FLOAT.match(to_string(text).lstrip())
	if match is None:
		return NAN
	return to_number(match.group(0))


def parse_int(text: Any = None, radix: Any = None) -> float | int:
	source = to_string(text).strip()
	negative = source.startswith("-")
	if source[:1] in "+-":
		source = source[1:]
	base = to_integer(radix)
	if base == 0:
		base = 10
		if source[:2].lower() == "0x":
			base, source = 16, source[2:]
	elif base == 16 and source[:2].lower() == "0x":
		source = source[2:]
	if base < 2 or base > 36:
		return NAN
	digits = "0123456789abcdefghijklmnopqrstuvwxyz"[: int(base)]
	end = 0
	while end < len(source) and source[end].lower() in digits:
		end += 1
	if end == 0:
		return NAN
	value = int(source[:end], int(base))
	return -value if negative else value


def _is_nan(value: Any = None) -> bool:
	return math.isnan(to_number(value))


def _is_finite(value: Any = None) -> bool:
	number = to_number(value)
	return not (math.isnan(number) or math.isinf(number))


# ---------------------------------------------------------------- installers


def _install_es5(bindings: Bindings, ctx: RuntimeContext) -> None:
	bindings["NaN"] = NAN
	bindings["Infinity"] = INF
	bindings["parseFloat"] = parse_float
	bindings["parseInt"] = parse_int
	bindings["isNaN"] = _is_nan
	bindings["isFinite"] = _is_finite
	bindings["Math"] = {
		"E": math.e,
		"LN10": math.log(10),
		"LN2": math.log(2),
		"LOG2E": 1 / math.log(2),
		"LOG10E": 1 / math.log(10),
		"PI": math.pi,
		"SQRT1_2": math.sqrt(0.5),
		"SQRT2": math.sqrt(2),
		"abs": _unary(abs),
		"acos": _unary(math.acos),
		"asin": _unary(math.asin),
		"atan": _unary(math.atan),
		"atan2": _atan2,
		"ceil": _unary(math.ceil),
		"cos": _unary(math.cos),
		"exp": _unary(math.exp),
		"floor": _unary(math.floor),
		"log": _log(math.log),
		"max": _max,
		"min": _min,
		"pow": _pow,
		"random": random.random,
		"round": _round,
		"sin": _unary(math.sin),
		"sqrt": _unary(math.sqrt),
		"tan": _unary(math.tan),
	}


def _install_es2015(bindings: Bindings, ctx: RuntimeContext) -> None:
	# Extends the es5 Math object when that library is loaded too.
	bindings.setdefault("Math", {}).update(
		{
			"acosh": _unary(math.acosh),
			"asinh": _unary(math.asinh),
			"atanh": _unary(math.atanh),
			"cbrt": _unary(lambda x: math.copysign(abs(x) ** (1 / 3), x)),
			"cosh": _unary(math.cosh),
			"expm1": _unary(math.expm1),
			"hypot": _hypot,
			"log10": _log(math.log10),
			"log1p": _unary(math.log1p),
			"log2": _log(math.log2),
			"sign": _sign,
			"sinh": _unary(math.sinh),
			"tanh": _unary(math.tanh),
			"trunc": _unary(math.trunc),
		}
	)


def _install_dom(bindings: Bindings, ctx: RuntimeContext) -> None:
	bindings["performance"] = {"now": lambda: (time.monotonic() - ctx.started) * 1000.0}
	bindings["devicePixelRatio"] = 1
	bindings["innerWidth"] = 1024
	bindings["innerHeight"] = 768


def _console_writer(ctx: RuntimeContext) -> Callable[..., None]:
	def write(*data: Any) -> None:
		ctx.write(" ".join(to_string(item) for item in data))

	return write


def _install_host(bindings: Bindings, ctx: RuntimeContext) -> None:
	write = _console_writer(ctx)
	bindings["console"] = {"log": write, "info": write, "warn": write, "error": write}
	bindings["process"] = {
		"pid": os.getpid(),
		"platform": sys.platform,
		"uptime": lambda: time.monotonic() - ctx.started,
	}


def _install_nothing(bindings: Bindings, ctx: RuntimeContext) -> None:
	"""Libraries that only declare types (or const enums, which are inlined)."""


# Installed in this order regardless of the order libraries were requested.
INSTALLERS: Mapping[str, Callable[[Bindings, RuntimeContext], None]] = {
	"es5": _install_es5,
	"es2015": _install_es2015,
	"es2017": _install_nothing,
	"es2019": _install_nothing,
	"es2021": _install_nothing,
	"esnext": _install_nothing,
	"dom": _install_dom,
	"host": _install_host,
}


def bind_libraries(names: Iterable[str], ctx: Optional[RuntimeContext] = None) -> Bindings:
	"""Fresh value bindings for the given loaded library names."""
	wanted = set(names)
	unknown = wanted - set(INSTALLERS)
	if unknown:
		raise KeyError(f"no runtime bindings for library {sorted(unknown)[0]!r}")
	ctx = ctx or RuntimeContext()
	bindings: Bindings = {}
	for name, install in INSTALLERS.items():
		if name in wanted:
			install(bindings, ctx)
	return bindings


__all__ = ["RuntimeContext", "INSTALLERS", "bind_libraries", "parse_float", "parse_int"]
