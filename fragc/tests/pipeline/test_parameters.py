import math

import pytest

from fragc.parameters import (
	LiteralValue,
	NumberRange,
	Parameter,
	ParameterKind,
	default_value,
	from_wire,
	is_valid,
	to_wire,
)

NUMERIC = Parameter("x", ParameterKind.NUMERIC)
TEXTUAL = Parameter("label", ParameterKind.TEXTUAL)


def test_default_values() -> None:
	assert default_value(NUMERIC) == LiteralValue(0)
	assert default_value(TEXTUAL) == LiteralValue("")


@pytest.mark.parametrize("n", [0, -1, 2.5, 1e300, math.inf])
def test_numeric_accepts_number_literals(n) -> None:
	assert is_valid(NUMERIC, LiteralValue(n))


def test_numeric_accepts_ranges_without_reordering() -> None:
	assert is_valid(NUMERIC, NumberRange(0, 10))
	assert is_valid(NUMERIC, NumberRange(3, 3))
	backwards = NumberRange(10, 0)
	assert is_valid(NUMERIC, backwards)
	assert (backwards.min, backwards.max) == (10, 0)


def test_numeric_rejects_text_and_booleans() -> None:
	assert not is_valid(NUMERIC, LiteralValue("1"))
	assert not is_valid(NUMERIC, LiteralValue(True))


@pytest.mark.parametrize("s", ["", "abc", "0"])
def test_textual_accepts_string_literals(s: str) -> None:
	assert is_valid(TEXTUAL, LiteralValue(s))


def test_textual_rejects_ranges_and_numbers() -> None:
	assert not is_valid(TEXTUAL, NumberRange(0, 1))
	assert not is_valid(TEXTUAL, NumberRange(1, 0))
	assert not is_valid(TEXTUAL, LiteralValue(1))


def test_parameter_wire_form() -> None:
	assert NUMERIC.to_wire() == {"name": "x", "kind": "numeric"}
	assert TEXTUAL.to_wire() == {"name": "label", "kind": "textual"}


def test_value_wire_form() -> None:
	assert to_wire(LiteralValue(1.5)) == ["literal", 1.5]
	assert to_wire(LiteralValue("a")) == ["literal", "a"]
	assert to_wire(NumberRange(-1, 1)) == ["number-range", -1, 1]
	assert from_wire(["literal", "a"]) == LiteralValue("a")
	assert from_wire(("number-range", 5, 2)) == NumberRange(5, 2)


@pytest.mark.parametrize(
	"data",
	[
		[],
		"literal",
		None,
		["choice", 1],
		["literal"],
		["literal", 1, 2],
		["literal", None],
		["literal", False],
		["number-range", 1],
		["number-range", "0", 1],
		["number-range", 0, math.nan],
	],
)
def test_from_wire_rejects_malformed_values(data) -> None:
	with pytest.raises(ValueError):
		from_wire(data)
