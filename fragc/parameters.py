# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-06
"""
Parameter model consumed by hosts that render controls for a fragment.

Independent of the compiler: a `Parameter` names a fragment argument and its
kind, a `ParameterValue` is what a control currently holds (a fixed literal
or a numeric range to sweep).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence, Union


class ParameterKind(Enum):
	NUMERIC = "numeric"
	TEXTUAL = "textual"


@dataclass(frozen=True)
class Parameter:
	name: str
	kind: ParameterKind

	def to_wire(self) -> dict:
		return {"name": self.name, "kind": self.kind.value}


@dataclass(frozen=True)
class LiteralValue:
	value: Union[float, int, str]


@dataclass(frozen=True)
class NumberRange:
	"""Numeric range; `min > max` is kept as given, not reordered."""

	min: Union[float, int]
	max: Union[float, int]


ParameterValue = Union[LiteralValue, NumberRange]

LITERAL_TAG = "literal"
NUMBER_RANGE_TAG = "number-range"


def _is_numeric(value: Any) -> bool:
	return isinstance(value, (int, float)) and not isinstance(value, bool)


def default_value(parameter: Parameter) -> LiteralValue:
	if parameter.kind is ParameterKind.NUMERIC:
		return LiteralValue(0)
	return LiteralValue("")


def is_valid(parameter: Parameter, value: ParameterValue) -> bool:
	if parameter.kind is ParameterKind.NUMERIC:
		if isinstance(value, NumberRange):
			return _is_numeric(value.min) and _is_numeric(value.max)
		return isinstance(value, LiteralValue) and _is_numeric(value.value)
	return isinstance(value, LiteralValue) and isinstance(value.value, str)


def to_wire(value: ParameterValue) -> List[Any]:
	if isinstance(value, NumberRange):
		return [NUMBER_RANGE_TAG, value.min, value.max]
	return [LITERAL_TAG, value.value]


def from_wire(data: Sequence[Any]) -> ParameterValue:
	"""Parse `["literal", v]` or `["number-range", lo, hi]`."""
	if isinstance(data, (str, bytes)) or not isinstance(data, Sequence) or not data:
		raise ValueError(f"parameter value must be a tagged sequence, got {data!r}")
	tag = data[0]
	if tag == LITERAL_TAG:
		if len(data) != 2:
			raise ValueError(f"'{LITERAL_TAG}' takes exactly one value, got {len(data) - 1}")
		literal = data[1]
		if not (_is_numeric(literal) or isinstance(literal, str)):
			raise ValueError(f"literal value must be a number or a string, got {literal!r}")
		return LiteralValue(literal)
	if tag == NUMBER_RANGE_TAG:
		if len(data) != 3:
			raise ValueError(f"'{NUMBER_RANGE_TAG}' takes a minimum and a maximum, got {len(data) - 1} value(s)")
		low, high = data[1], data[2]
		if not (_is_numeric(low) and _is_numeric(high)):
			raise ValueError(f"range bounds must be numbers, got {low!r} and {high!r}")
		if math.isnan(low) or math.isnan(high):
			raise ValueError("range bounds must not be NaN")
		return NumberRange(low, high)
	raise ValueError(f"unknown parameter value tag {tag!r}")


__all__ = [
	"ParameterKind",
	"Parameter",
	"LiteralValue",
	"NumberRange",
	"ParameterValue",
	"default_value",
	"is_valid",
	"to_wire",
	"from_wire",
]
