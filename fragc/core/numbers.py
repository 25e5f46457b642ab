# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Number formatting with the source language's `Number.prototype.toString` rules."""

from __future__ import annotations

import math


def number_to_string(value: float | int) -> str:
	"""
	Shortest round-tripping decimal text, as the source language prints numbers.

	Integral values print without a fraction (`3`, not `3.0`); fixed notation is
	used for decimal exponents in (-7, 21], exponential notation otherwise
	(`1e+21`, `1.5e-7`).
	"""
	if isinstance(value, int) and abs(value) < 10**21:
		return str(value)
	value = float(value)
	if math.isnan(value):
		return "NaN"
	if math.isinf(value):
		return "Infinity" if value > 0 else "-Infinity"
	if value == 0:
		return "0"
	sign = "-" if value < 0 else ""
	mantissa, _, exp = repr(abs(value)).partition("e")
	int_part, _, frac = mantissa.partition(".")
	all_digits = int_part + frac
	point = len(int_part) + (int(exp) if exp else 0)
	stripped = all_digits.lstrip("0")
	point -= len(all_digits) - len(stripped)
	digits = stripped.rstrip("0") or "0"
	k, n = len(digits), point
	if k <= n <= 21:
		return sign + digits + "0" * (n - k)
	if 0 < n <= 21:
		return sign + digits[:n] + "." + digits[n:]
	if -6 < n <= 0:
		return sign + "0." + "0" * (-n) + digits
	e = n - 1
	exponent = ("+" if e >= 0 else "-") + str(abs(e))
	if k == 1:
		return f"{sign}{digits}e{exponent}"
	return f"{sign}{digits[0]}.{digits[1:]}e{exponent}"


def normalize_number(value: float | int) -> float | int:
	"""Integral finite floats become ints so `1` and `1.0` are one value."""
	if isinstance(value, bool):
		return int(value)
	if isinstance(value, float) and value.is_integer():
		return int(value)
	return value


__all__ = ["number_to_string", "normalize_number"]
