# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-09
"""
Helpers the generated code calls through `__rt`.

Generated code uses plain Python operators wherever the checker proved both
operands are numbers (or both strings); every operation whose semantics
differ between the fragment language and Python comes here instead. Values
are the Python ones the code generator produces: `None` for `undefined`,
`bool`, `int`/`float`, `str`, `list` for arrays and `dict` for objects.
"""

from __future__ import annotations

import inspect
import math
import re
from functools import partial
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

from fragc.core.numbers import number_to_string

NAN = float("nan")
INF = float("inf")

# Numeric text the source language accepts in `Number("...")` conversions.
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?)")
_INTEGER = re.compile(r"[+-]?\d+")
_RADIX_PREFIX = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def is_number(value: Any) -> bool:
	return isinstance(value, (int, float)) and not isinstance(value, bool)


# ---------------------------------------------------------------- conversions


def to_string(value: Any) -> str:
	if value is None:
		return "undefined"
	if value is True:
		return "true"
	if value is False:
		return "false"
	if isinstance(value, str):
		return value
	if is_number(value):
		return number_to_string(value)
	if isinstance(value, list):
		return ",".join("" if item is None else to_string(item) for item in value)
	if isinstance(value, dict):
		return "[object Object]"
	if callable(value):
		return "function () { [native code] }"
	return str(value)


def to_number(value: Any) -> float | int:
	if value is None:
		return NAN
	if isinstance(value, bool):
		return int(value)
	if is_number(value):
		return value
	if isinstance(value, str):
		text = value.strip()
		if not text:
			return 0
		if text in ("Infinity", "+Infinity"):
			return INF
		if text == "-Infinity":
			return -INF
		prefixed = _RADIX_PREFIX.fullmatch(text)
		if prefixed is not None:
			base = {"x": 16, "o": 8, "b": 2}[prefixed.group(1).lower()]
			try:
				return int(prefixed.group(2), base)
			except ValueError:
				return NAN
		if _DECIMAL.fullmatch(text) is None:
			return NAN
		if _INTEGER.fullmatch(text) is not None:
			return int(text)
		return float(text)
	if isinstance(value, list):
		return to_number(to_string(value))
	return NAN


def to_integer(value: Any, default: int = 0) -> float | int:
	"""Truncated integer conversion; `undefined` means `default`, NaN means 0."""
	if value is None:
		return default
	number = to_number(value)
	if math.isnan(number):
		return 0
	if math.isinf(number):
		return number
	return int(number)


def truthy(value: Any) -> bool:
	if value is None or value is False:
		return False
	if value is True:
		return True
	if is_number(value):
		return not (value == 0 or math.isnan(value))
	if isinstance(value, str):
		return value != ""
	return True


def type_of(value: Any) -> str:
	if value is None:
		return "undefined"
	if isinstance(value, bool):
		return "boolean"
	if is_number(value):
		return "number"
	if isinstance(value, str):
		return "string"
	if callable(value):
		return "function"
	return "object"


def _to_primitive(value: Any) -> Any:
	if isinstance(value, (list, dict)) or callable(value):
		return to_string(value)
	return value


# ---------------------------------------------------------------- arithmetic


def concat(left: Any, right: Any) -> str:
	return to_string(_to_primitive(left)) + to_string(_to_primitive(right))


def add(left: Any, right: Any) -> Any:
	left, right = _to_primitive(left), _to_primitive(right)
	if isinstance(left, str) or isinstance(right, str):
		return to_string(left) + to_string(right)
	return to_number(left) + to_number(right)


def divide(left: Any, right: Any) -> float:
	left, right = float(to_number(left)), float(to_number(right))
	if right == 0:
		if left == 0 or math.isnan(left):
			return NAN
		negative = (left < 0) != (math.copysign(1.0, right) < 0)
		return -INF if negative else INF
	return left / right


def remainder(left: Any, right: Any) -> float | int:
	left, right = to_number(left), to_number(right)
	if math.isnan(left) or math.isnan(right) or math.isinf(left) or right == 0:
		return NAN
	if math.isinf(right):
		return left
	if isinstance(left, int) and isinstance(right, int):
		result = abs(left) % abs(right)
		return -result if left < 0 else result
	return math.fmod(left, right)


def power(base: Any, exponent: Any) -> float | int:
	base, exponent = to_number(base), to_number(exponent)
	if math.isnan(exponent):
		return NAN
	if exponent == 0:
		return 1
	if math.isnan(base):
		return NAN
	if abs(base) == 1 and math.isinf(exponent):
		return NAN
	if isinstance(base, int) and isinstance(exponent, int) and 0 <= exponent <= 1074:
		result = base**exponent
		if abs(result) <= 2**53:
			return result
	if base == 0 and exponent < 0:
		odd = float(exponent).is_integer() and int(exponent) % 2 == 1
		return -INF if odd and math.copysign(1.0, base) < 0 else INF
	try:
		return math.pow(base, exponent)
	except ValueError:
		return NAN
	except OverflowError:
		odd = float(exponent).is_integer() and int(exponent) % 2 == 1
		return -INF if base < 0 and odd else INF


# ---------------------------------------------------------------- equality


def strict_equals(left: Any, right: Any) -> bool:
	if is_number(left) and is_number(right):
		return left == right
	if type_of(left) != type_of(right):
		return False
	if left is None or isinstance(left, (bool, str)):
		return left == right
	return left is right


def loose_equals(left: Any, right: Any) -> bool:
	if left is None or right is None:
		return left is None and right is None
	if type_of(left) == type_of(right):
		return strict_equals(left, right)
	if isinstance(left, bool):
		return loose_equals(int(left), right)
	if isinstance(right, bool):
		return loose_equals(left, int(right))
	if is_number(left) and isinstance(right, str):
		return left == to_number(right)
	if isinstance(left, str) and is_number(right):
		return to_number(left) == right
	if isinstance(left, (list, dict)) and not isinstance(right, (list, dict)):
		return loose_equals(_to_primitive(left), right)
	if isinstance(right, (list, dict)) and not isinstance(left, (list, dict)):
		return loose_equals(left, _to_primitive(right))
	return False


# ---------------------------------------------------------------- string members


def _string_char_at(s: str, pos: Any = None) -> str:
	index = to_integer(pos)
	return s[index] if 0 <= index < len(s) else ""


def _string_char_code_at(s: str, index: Any = None) -> float | int:
	index = to_integer(index)
	return ord(s[index]) if 0 <= index < len(s) else NAN


def _string_concat(s: str, *strings: Any) -> str:
	return s + "".join(to_string(item) for item in strings)


def _clamp(value: Any, default: int, length: int) -> int:
	index = to_integer(value, default)
	return int(min(max(index, 0), length))


def _string_index_of(s: str, search: Any, position: Any = None) -> int:
	return s.find(to_string(search), _clamp(position, 0, len(s)))


def _string_last_index_of(s: str, search: Any, position: Any = None) -> int:
	needle = to_string(search)
	if position is None or math.isnan(to_number(position)):
		start = len(s)
	else:
		start = _clamp(position, len(s), len(s))
	return s.rfind(needle, 0, start + len(needle))


def _string_replace(s: str, search: Any, replacement: Any) -> str:
	return s.replace(to_string(search), to_string(replacement), 1)


def _string_replace_all(s: str, search: Any, replacement: Any) -> str:
	needle, text = to_string(search), to_string(replacement)
	if needle == "":
		return text + text.join(s) + text if s else text
	return s.replace(needle, text)


def _relative_index(value: Any, default: int, length: int) -> int:
	index = to_integer(value, default)
	if index < 0:
		return int(max(length + index, 0))
	return int(min(index, length))


def _string_slice(s: str, start: Any = None, end: Any = None) -> str:
	begin = _relative_index(start, 0, len(s))
	stop = _relative_index(end, len(s), len(s))
	return s[begin:stop]


def _string_substring(s: str, start: Any, end: Any = None) -> str:
	begin = _clamp(start, 0, len(s))
	stop = _clamp(end, len(s), len(s))
	if begin > stop:
		begin, stop = stop, begin
	return s[begin:stop]


def _string_split(s: str, separator: Any = None, limit: Any = None) -> List[str]:
	if separator is None:
		parts = [s]
	else:
		needle = to_string(separator)
		if needle == "":
			parts = list(s)
		else:
			parts = s.split(needle)
	if limit is not None:
		count = to_integer(limit)
		parts = parts[: max(int(min(count, len(parts))), 0)]
	return parts


def _string_starts_with(s: str, search: Any, position: Any = None) -> bool:
	return s.startswith(to_string(search), _clamp(position, 0, len(s)))


def _string_ends_with(s: str, search: Any, end_position: Any = None) -> bool:
	return s[: _clamp(end_position, len(s), len(s))].endswith(to_string(search))


def _string_includes(s: str, search: Any, position: Any = None) -> bool:
	return to_string(search) in s[_clamp(position, 0, len(s)) :]


def _string_repeat(s: str, count: Any) -> str:
	times = to_integer(count)
	if times < 0 or math.isinf(times):
		raise ValueError(f"Invalid count value: {to_string(count)}")
	return s * int(times)


def _pad(s: str, max_length: Any, fill: Any, *, at_start: bool) -> str:
	target = to_integer(max_length)
	filler = " " if fill is None else to_string(fill)
	if target <= len(s) or filler == "":
		return s
	missing = int(target) - len(s)
	padding = (filler * (missing // len(filler) + 1))[:missing]
	return padding + s if at_start else s + padding


STRING_MEMBERS: Dict[str, Callable[..., Any]] = {
	"charAt": _string_char_at,
	"charCodeAt": _string_char_code_at,
	"concat": _string_concat,
	"indexOf": _string_index_of,
	"lastIndexOf": _string_last_index_of,
	"replace": _string_replace,
	"replaceAll": _string_replace_all,
	"slice": _string_slice,
	"split": _string_split,
	"substring": _string_substring,
	"toLowerCase": lambda s: s.lower(),
	"toUpperCase": lambda s: s.upper(),
	"trim": lambda s: s.strip(),
	"trimStart": lambda s: s.lstrip(),
	"trimEnd": lambda s: s.rstrip(),
	"toString": lambda s: s,
	"valueOf": lambda s: s,
	"startsWith": _string_starts_with,
	"endsWith": _string_ends_with,
	"includes": _string_includes,
	"repeat": _string_repeat,
	"padStart": lambda s, max_length, fill=None: _pad(s, max_length, fill, at_start=True),
	"padEnd": lambda s, max_length, fill=None: _pad(s, max_length, fill, at_start=False),
}


# ---------------------------------------------------------------- number members


def _number_to_fixed(n: float | int, digits: Any = None) -> str:
	places = to_integer(digits)
	if places < 0 or places > 100:
		raise ValueError("toFixed() digits argument must be between 0 and 100")
	if math.isnan(n) or math.isinf(n) or abs(n) >= 1e21:
		return number_to_string(n)
	text = f"{n:.{int(places)}f}"
	# -0 prints without a sign.
	if text.startswith("-") and float(text) == 0:
		text = text[1:]
	return text


def _number_to_string(n: float | int, radix: Any = None) -> str:
	base = 10 if radix is None else to_integer(radix)
	if base < 2 or base > 36:
		raise ValueError("toString() radix must be between 2 and 36")
	if base == 10 or math.isnan(n) or math.isinf(n):
		return number_to_string(n)
	negative = n < 0
	n = abs(n)
	whole = int(n)
	fraction = n - whole
	digits = ""
	while True:
		whole, digit = divmod(whole, int(base))
		digits = _DIGITS[digit] + digits
		if whole == 0:
			break
	if fraction:
		digits += "."
		for _ in range(52):
			fraction *= base
			digit = int(fraction)
			digits += _DIGITS[digit]
			fraction -= digit
			if not fraction:
				break
	return ("-" if negative else "") + digits


NUMBER_MEMBERS: Dict[str, Callable[..., Any]] = {
	"toFixed": _number_to_fixed,
	"toString": _number_to_string,
	"valueOf": lambda n: n,
}

BOOLEAN_MEMBERS: Dict[str, Callable[..., Any]] = {
	"toString": to_string,
	"valueOf": lambda b: b,
}


# ---------------------------------------------------------------- members


def _property_key(key: Any) -> str:
	return key if isinstance(key, str) else to_string(key)


def _array_index(key: Any) -> Optional[int]:
	if is_number(key) and not math.isnan(key) and not math.isinf(key) and key == int(key):
		return int(key)
	if isinstance(key, str) and key.isdigit():
		return int(key)
	return None


def get_member(target: Any, key: str) -> Any:
	if target is None:
		raise TypeError(f"Cannot read properties of undefined (reading '{key}')")
	if isinstance(target, dict):
		return target.get(key)
	if isinstance(target, str):
		if key == "length":
			return len(target)
		member = STRING_MEMBERS.get(key)
		if member is not None:
			return partial(member, target)
		position = _array_index(key)
		return target[position] if position is not None and position < len(target) else None
	if isinstance(target, bool):
		member = BOOLEAN_MEMBERS.get(key)
		return partial(member, target) if member is not None else None
	if is_number(target):
		member = NUMBER_MEMBERS.get(key)
		return partial(member, target) if member is not None else None
	if isinstance(target, list):
		if key == "length":
			return len(target)
		position = _array_index(key)
		return target[position] if position is not None and position < len(target) else None
	return None


def index(target: Any, key: Any) -> Any:
	if isinstance(target, (list, str)):
		position = _array_index(key)
		if position is not None:
			return target[position] if position < len(target) else None
	return get_member(target, _property_key(key))


def set_member(target: Any, key: Any, value: Any) -> Any:
	"""Assign `target[key] = value`; the value is the assignment's result."""
	if target is None:
		raise TypeError(f"Cannot set properties of undefined (setting '{_property_key(key)}')")
	if isinstance(target, dict):
		target[_property_key(key)] = value
		return value
	if isinstance(target, list):
		if key == "length":
			size = to_integer(value)
			del target[int(size) :]
			target.extend([None] * (int(size) - len(target)))
			return value
		position = _array_index(key)
		if position is None:
			raise TypeError(f"Cannot set property '{_property_key(key)}' of an array")
		if position >= len(target):
			target.extend([None] * (position + 1 - len(target)))
		target[position] = value
		return value
	# Assignments to members of primitives are silently dropped.
	return value


def length(value: Any) -> int:
	return len(value)


async def awaited(value: Any) -> Any:
	while inspect.isawaitable(value):
		value = await value
	return value


HELPERS = SimpleNamespace(
	to_string=to_string,
	to_number=to_number,
	truthy=truthy,
	type_of=type_of,
	concat=concat,
	add=add,
	divide=divide,
	remainder=remainder,
	power=power,
	strict_equals=strict_equals,
	loose_equals=loose_equals,
	get_member=get_member,
	set_member=set_member,
	index=index,
	length=length,
	awaited=awaited,
)


__all__ = [
	"HELPERS",
	"STRING_MEMBERS",
	"NUMBER_MEMBERS",
	"BOOLEAN_MEMBERS",
	"is_number",
	"to_string",
	"to_number",
	"to_integer",
	"truthy",
	"type_of",
	"concat",
	"add",
	"divide",
	"remainder",
	"power",
	"strict_equals",
	"loose_equals",
	"get_member",
	"set_member",
	"index",
	"length",
	"awaited",
]
