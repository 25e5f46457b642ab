from __future__ import annotations

import asyncio
import math

import pytest

from fragc.runtime import helpers as rt


@pytest.mark.parametrize(
	"value, text",
	[
		(None, "undefined"),
		(True, "true"),
		(False, "false"),
		(1.0, "1"),
		(0.5, "0.5"),
		([1, None, "a"], "1,,a"),
		([[1, 2], 3], "1,2,3"),
		({"a": 1}, "[object Object]"),
	],
)
def test_to_string(value, text) -> None:
	assert rt.to_string(value) == text


@pytest.mark.parametrize(
	"value, number",
	[
		("", 0),
		("  42 ", 42),
		("-7", -7),
		("1.5e2", 150.0),
		(".5", 0.5),
		("0x1f", 31),
		("0b101", 5),
		("Infinity", math.inf),
		("-Infinity", -math.inf),
		(True, 1),
		([], 0),
		(["3"], 3),
	],
)
def test_to_number(value, number) -> None:
	assert rt.to_number(value) == number


@pytest.mark.parametrize("value", [None, "abc", "1e", "0x", {"a": 1}, [1, 2]])
def test_to_number_nan(value) -> None:
	assert math.isnan(rt.to_number(value))


def test_truthiness() -> None:
	falsy = [None, False, 0, 0.0, math.nan, ""]
	truthy = [True, 1, -0.5, "0", " ", [], {}]
	assert not any(rt.truthy(v) for v in falsy)
	assert all(rt.truthy(v) for v in truthy)


def test_type_of() -> None:
	assert [rt.type_of(v) for v in (None, True, 1, "s", [], {}, len)] == [
		"undefined",
		"boolean",
		"number",
		"string",
		"object",
		"object",
		"function",
	]


def test_add_and_concat() -> None:
	assert rt.add(1, 2) == 3
	assert rt.add("a", 1) == "a1"
	assert rt.add(1, "a") == "1a"
	assert rt.add(True, 1) == 2
	assert rt.add([1, 2], 3) == "1,23"
	assert rt.concat("x", None) == "xundefined"
	assert rt.concat(2.0, "px") == "2px"


def test_division_follows_ieee_rules() -> None:
	assert rt.divide(1, 2) == 0.5
	assert rt.divide(1, 0) == math.inf
	assert rt.divide(-1, 0) == -math.inf
	assert rt.divide(1, -0.0) == -math.inf
	assert math.isnan(rt.divide(0, 0))


def test_remainder_keeps_the_dividend_sign() -> None:
	assert rt.remainder(7, 3) == 1
	assert rt.remainder(-7, 3) == -1
	assert rt.remainder(7, -3) == 1
	assert rt.remainder(5.5, 2) == 1.5
	assert math.isnan(rt.remainder(1, 0))
	assert rt.remainder(3, math.inf) == 3


def test_power() -> None:
	assert rt.power(2, 10) == 1024
	assert isinstance(rt.power(2, 10), int)
	assert rt.power(2, -1) == 0.5
	assert rt.power(math.nan, 0) == 1
	assert math.isnan(rt.power(1, math.inf))
	assert rt.power(0, -1) == math.inf
	assert rt.power(10, 400) == math.inf


def test_equality() -> None:
	assert rt.strict_equals(1, 1.0)
	assert not rt.strict_equals(1, "1")
	assert not rt.strict_equals(math.nan, math.nan)
	obj = {}
	assert rt.strict_equals(obj, obj)
	assert not rt.strict_equals({}, {})
	assert rt.loose_equals(1, "1")
	assert rt.loose_equals(None, None)
	assert not rt.loose_equals(None, 0)
	assert rt.loose_equals(True, 1)
	assert rt.loose_equals([1], "1")


def test_string_members() -> None:
	s = "Hello, world"
	get = lambda name: rt.get_member(s, name)  # noqa: E731
	assert get("length") == 12
	assert get("charAt")(4) == "o"
	assert get("charAt")(99) == ""
	assert math.isnan(get("charCodeAt")(99))
	assert get("indexOf")("o") == 4
	assert get("lastIndexOf")("o") == 8
	assert get("slice")(-5) == "world"
	assert get("substring")(5, 0) == "Hello"
	assert get("split")(", ") == ["Hello", "world"]
	assert get("split")("") == list(s)
	assert get("replace")("l", "L") == "HeLlo, world"
	assert get("replaceAll")("l", "L") == "HeLLo, worLd"
	assert get("toUpperCase")() == "HELLO, WORLD"
	assert get("startsWith")("world", 7)
	assert get("endsWith")("Hello", 5)
	assert get("includes")("lo, w")
	assert get("padStart")(15, "*") == "***Hello, world"
	assert get("padEnd")(14) == "Hello, world  "
	assert rt.get_member("ab", "repeat")(3) == "ababab"
	assert rt.get_member("  x ", "trim")() == "x"


def test_number_members() -> None:
	assert rt.get_member(3.14159, "toFixed")(2) == "3.14"
	assert rt.get_member(-0.0001, "toFixed")(2) == "0.00"
	assert rt.get_member(255, "toString")(16) == "ff"
	assert rt.get_member(255, "toString")() == "255"
	assert rt.get_member(0.5, "toString")(2) == "0.1"
	assert rt.get_member(True, "toString")() == "true"


def test_member_access_on_containers() -> None:
	assert rt.get_member({"a": 1}, "a") == 1
	assert rt.get_member({"a": 1}, "b") is None
	assert rt.get_member([1, 2, 3], "length") == 3
	assert rt.index([1, 2, 3], 1) == 2
	assert rt.index([1, 2, 3], 5) is None
	assert rt.index("abc", 1.0) == "b"
	assert rt.index({"1": "one"}, 1) == "one"
	with pytest.raises(TypeError, match="reading 'x'"):
		rt.get_member(None, "x")


def test_set_member() -> None:
	obj = {}
	assert rt.set_member(obj, "k", 5) == 5
	assert obj == {"k": 5}
	arr = [1]
	rt.set_member(arr, 3, "x")
	assert arr == [1, None, None, "x"]
	rt.set_member(arr, "length", 2)
	assert arr == [1, None]
	assert rt.set_member("str", "x", 1) == 1
	with pytest.raises(TypeError):
		rt.set_member(None, "x", 1)


def test_awaited_unwraps_nested_awaitables() -> None:
	async def inner() -> int:
		return 7

	async def outer():
		return inner()

	assert asyncio.run(rt.awaited(outer())) == 7
	assert asyncio.run(rt.awaited(3)) == 3
