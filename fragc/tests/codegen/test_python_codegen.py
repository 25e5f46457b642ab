from __future__ import annotations

import asyncio
import io
import math
from typing import Any, Callable

import pytest

from fragc.codegen import number_literal
from fragc.declarations import BundledDeclarationProvider
from fragc.evaluator import evaluate
from fragc.options import CompilerOptions
from fragc.pipeline import compile_to_python
from fragc.runtime import RuntimeContext


def _emit(source: str, **options) -> str:
	opts = CompilerOptions(**options)
	return compile_to_python(source, opts, BundledDeclarationProvider().load(opts))


def _callable(source: str, libs=("es5", "es2015", "es2017", "dom"), **options) -> Callable[..., Any]:
	value = evaluate(_emit(source, **options), libs)
	assert callable(value)
	return value


def test_script_output_shape() -> None:
	assert _emit("(x: number, y: number) => ({ sum: x + y })") == (
		"# Generated by fragc from /fragment.ts.\n"
		"__completion__ = None\n"
		"def __fn_1(x, y):\n"
		"    return {'sum': (x + y)}\n"
		"__completion__ = __fn_1\n"
	)


def test_closure_output_shape() -> None:
	assert _emit("(x: number, y: number) => ({ sum: x + y })", module="closure") == (
		"# Generated by fragc from /fragment.ts.\n"
		"def __module__():\n"
		"    __completion__ = None\n"
		"    def __fn_1(x, y):\n"
		"        return {'sum': (x + y)}\n"
		"    __completion__ = __fn_1\n"
		"    return __completion__\n"
		"__completion__ = __module__()\n"
	)


_CASES = [
	("(x: number, y: number) => ({ sum: x + y })", (2, 3), {"sum": 5}),
	("(a: number, b: number) => ({ q: a / b })", (1, 0), {"q": math.inf}),
	("(a: number, b: number) => ({ q: a / b, r: a % b })", (7, 2), {"q": 3.5, "r": 1}),
	("(s: string) => ({ n: s.length, i: s.indexOf('b') })", ("abc",), {"n": 3, "i": 1}),
	("(a: number) => ({ n: ('x' + a).length })", (12,), {"n": 3}),
	("(x: number) => ({ v: x || 5, w: x && 5 })", (0,), {"v": 5, "w": 0}),
	("(x: number) => ({ v: x > 1 ? x : -x, same: x === 2 ? 1 : 0 })", (-3,), {"v": 3, "same": 0}),
	("(x: number) => ({ r: Math.max(x, 10) + Math.floor(2.5) })", (4,), {"r": 12}),
	("(lambda: number) => ({ v: lambda * 2 })", (4,), {"v": 8}),
	("(x: number) => ({ n: (typeof x).length })", (1,), {"n": 6}),
	("(x: number) => ({ p: 2 ** x, neg: -x })", (3,), {"p": 8, "neg": -3}),
	(
		"(n: number) => { let total = 0; let i = 0; while (i < n) { total += i; i = i + 1 } return { total } }",
		(5,),
		{"total": 10},
	),
	(
		"(n: number) => { let count = 0; const bump = (k: number) => { count = count + k; return count }; bump(n); bump(n); return { count } }",
		(3,),
		{"count": 6},
	),
	(
		"(x: number) => { let r = 0; if (x > 0) { const r = 1; return { r } } return { r } }",
		(1,),
		{"r": 1},
	),
	(
		"(x: number) => { const xs = [x, x * 2]; return { second: xs[1], n: xs.length } }",
		(4,),
		{"second": 8, "n": 2},
	),
	("(x: number) => { const o = { v: x }; o.v += 1; return o }", (1,), {"v": 2}),
	(
		"(x: number) => { function sq(n: number): number { return n * n } return { y: sq(x) } }",
		(3,),
		{"y": 9},
	),
	("(x: number, label?: string) => ({ y: label === undefined ? x : 0 })", (3,), {"y": 3}),
	("(...xs: number[]) => ({ n: xs.length })", (1, 2, 3), {"n": 3}),
]


@pytest.mark.parametrize("source, args, expected", _CASES)
@pytest.mark.parametrize("module", ["script", "closure"])
def test_generated_code_runs_the_same_in_both_shapes(source, args, expected, module) -> None:
	fn = _callable(source, module=module)
	assert fn(*args) == expected


def test_async_fragment_becomes_a_coroutine_function() -> None:
	code = _emit("async (t: number) => ({ y: t * 2 })")
	assert "async def __fn_1(t):" in code
	fn = evaluate(code, ["es5", "es2015", "es2017", "dom"])
	assert asyncio.run(fn(4)) == {"y": 8}


def test_await_inside_async_fragment() -> None:
	source = "async (t: number) => { const inner = async (n: number) => ({ v: n + 1 }); const r = await inner(t); return { y: r.v } }"
	fn = _callable(source)
	assert asyncio.run(fn(1)) == {"y": 2}


def test_const_enum_members_are_inlined() -> None:
	code = _emit("(x: number) => ({ v: x + Axis.Z })", lib=["es5", "host"])
	assert "Axis" not in code
	assert "(x + 2)" in code


def test_regular_enums_are_emitted_as_objects() -> None:
	code = _emit("(x: number) => { enum Mode { Off, On = 3 } return { v: x + Mode.On } }")
	assert "{'Off': 0, 'On': 3}" in code
	assert "(x + 3)" in code


def test_required_object_properties_use_subscripts() -> None:
	code = _emit("(x: number) => ({ r: Math.sqrt(x) })")
	assert "Math['sqrt'](x)" in code


def test_string_members_go_through_the_runtime() -> None:
	code = _emit("(s: string) => ({ n: s.length, u: s.toUpperCase().length })")
	assert "__rt.length(s)" in code
	assert "__rt.get_member(s, 'toUpperCase')()" in code


def test_non_boolean_conditions_use_truthiness() -> None:
	code = _emit("(x: number) => { if (x) { return { v: 1 } } return { v: 0 } }")
	assert "if __rt.truthy(x):" in code


def test_console_output_goes_to_the_runtime_context() -> None:
	out = io.StringIO()
	code = _emit("(x: number) => { console.log('x is', x); return { x } }", lib=["es5", "host"])
	fn = evaluate(code, ["es5", "host"], ctx=RuntimeContext(out))
	assert fn(2) == {"x": 2}
	assert out.getvalue() == "x is 2\n"


@pytest.mark.parametrize(
	"value, text",
	[(1, "1"), (2.0, "2"), (0.5, "0.5"), (-3, "(-3)"), (math.inf, "1e999"), (-math.inf, "(-1e999)"), (math.nan, "(1e999 * 0)")],
)
def test_number_literal(value, text) -> None:
	assert number_literal(value) == text
