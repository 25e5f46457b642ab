from __future__ import annotations

import pytest

from fragc.core.numbers import normalize_number, number_to_string


@pytest.mark.parametrize(
	"value, text",
	[
		(0, "0"),
		(-0.0, "0"),
		(3, "3"),
		(3.0, "3"),
		(0.1, "0.1"),
		(0.1 + 0.2, "0.30000000000000004"),
		(-2.5, "-2.5"),
		(1e21, "1e+21"),
		(1e20, "100000000000000000000"),
		(1.5e-7, "1.5e-7"),
		(0.000001, "0.000001"),
		(123456789.125, "123456789.125"),
		(float("nan"), "NaN"),
		(float("inf"), "Infinity"),
		(float("-inf"), "-Infinity"),
	],
)
def test_number_to_string_matches_source_language_printing(value, text) -> None:
	assert number_to_string(value) == text


def test_normalize_number_folds_integral_floats() -> None:
	assert normalize_number(2.0) == 2
	assert isinstance(normalize_number(2.0), int)
	assert normalize_number(2.5) == 2.5
	assert normalize_number(True) == 1 and type(normalize_number(True)) is int
