from __future__ import annotations

import io
import math
import re

import pytest

from fragc.declarations import read_bundled_library
from fragc.options import LIBRARY_FILES
from fragc.runtime import INSTALLERS, RuntimeContext, bind_libraries
from fragc.runtime.globals import parse_float, parse_int

_DECLARED_VALUE = re.compile(r"^declare (?:var|const|function) (?!enum\b)(\w+)", re.MULTILINE)
_MEMBER = re.compile(r"^\t(\w+)\??[(:]", re.MULTILINE)


def _declared_values(name: str) -> set:
	return set(_DECLARED_VALUE.findall(read_bundled_library(name)))


def test_every_library_has_an_installer() -> None:
	assert set(INSTALLERS) == set(LIBRARY_FILES)


@pytest.mark.parametrize("name", sorted(LIBRARY_FILES))
def test_every_declared_value_is_bound(name: str) -> None:
	bindings = bind_libraries(["es5", "es2015", name])
	missing = _declared_values(name) - set(bindings)
	assert not missing


def test_math_has_every_declared_member() -> None:
	bindings = bind_libraries(["es5", "es2015"])
	declared = set()
	for lib in ("es5", "es2015"):
		text = read_bundled_library(lib)
		body = text[text.index("interface Math {") :]
		body = body[: body.index("\n}")]
		declared |= set(_MEMBER.findall(body))
	assert declared - set(bindings["Math"]) == set()


def test_es2015_math_extends_es5_math() -> None:
	bindings = bind_libraries(["es2015", "es5"])
	assert bindings["Math"]["PI"] == math.pi
	assert bindings["Math"]["trunc"](-1.7) == -1
	assert "trunc" not in bind_libraries(["es5"])["Math"]


def test_math_functions() -> None:
	m = bind_libraries(["es5", "es2015"])["Math"]
	assert m["floor"](2.7) == 2 and isinstance(m["floor"](2.7), int)
	assert m["round"](2.5) == 3
	assert m["round"](-2.5) == -2
	assert m["max"]() == -math.inf
	assert math.isnan(m["max"](1, math.nan))
	assert m["min"](3, 1, 2) == 1
	assert math.isnan(m["sqrt"](-1))
	assert m["log"](0) == -math.inf
	assert m["sign"](-3) == -1
	assert m["hypot"](3, 4) == 5
	assert m["cbrt"](-8) == pytest.approx(-2)
	assert m["pow"](2, 3) == 8


def test_bindings_are_fresh_per_call() -> None:
	first = bind_libraries(["es5"])
	first["Math"]["PI"] = 3
	assert bind_libraries(["es5"])["Math"]["PI"] == math.pi


def test_unknown_library_is_rejected() -> None:
	with pytest.raises(KeyError):
		bind_libraries(["es5", "webgl"])


def test_console_writes_through_the_context() -> None:
	out = io.StringIO()
	console = bind_libraries(["host"], RuntimeContext(out))["console"]
	console["log"]("a", 1, None, [1, 2])
	console["error"]("b")
	assert out.getvalue() == "a 1 undefined 1,2\nb\n"


def test_dom_values() -> None:
	dom = bind_libraries(["dom"], RuntimeContext(started=0.0))
	assert (dom["devicePixelRatio"], dom["innerWidth"], dom["innerHeight"]) == (1, 1024, 768)
	assert dom["performance"]["now"]() > 0


def test_parse_float_and_int() -> None:
	assert parse_float("3.5px") == 3.5
	assert parse_float("  -1e3") == -1000
	assert math.isnan(parse_float("px"))
	assert parse_float("Infinityx") == math.inf
	assert parse_int("42abc") == 42
	assert parse_int("-0x1A") == -26
	assert parse_int("ff", 16) == 255
	assert parse_int("12", 2) == 1
	assert math.isnan(parse_int("z"))
	assert math.isnan(parse_int("1", 40))
