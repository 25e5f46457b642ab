from io import StringIO
from typing import Mapping

import pytest

from fragc.core.errors import (
	DiagnosticsError,
	ParameterTypeError,
	ResultFieldTypeError,
	ReturnShapeError,
	SignatureError,
	StructuralError,
)
from fragc.declarations import BundledDeclarationProvider, DeclarationCache
from fragc.options import CompilerOptions
from fragc.parameters import Parameter, ParameterKind
from fragc.pipeline import EvalResult, compile_and_evaluate, compile_fragment, compile_to_python, resolve_options
from fragc.runtime import RuntimeContext

SUM = "(x: number, y: number) => ({ sum: x + y })"


def _files(options: CompilerOptions) -> Mapping[str, str]:
	return BundledDeclarationProvider().load(options)


def _compile(source: str, **raw) -> EvalResult:
	options = CompilerOptions.from_mapping(raw)
	return compile_fragment(source, options, _files(options))


def test_sum_fragment_round_trip() -> None:
	result = _compile(SUM)
	assert result.parameters == (
		Parameter("x", ParameterKind.NUMERIC),
		Parameter("y", ParameterKind.NUMERIC),
	)
	assert dict(result.result_shape) == {"sum": ParameterKind.NUMERIC}
	assert result.callable(2, 3) == {"sum": 5}


def test_textual_parameter() -> None:
	result = _compile("(label: string) => ({ length: label.length })")
	assert result.describe() == {
		"parameters": [{"name": "label", "kind": "textual"}],
		"resultShape": {"length": "numeric"},
	}
	assert result.callable("hello") == {"length": 5}


def test_wire_form_carries_the_callable() -> None:
	result = _compile(SUM)
	wire = result.to_wire()
	assert wire["callable"] is result.callable
	assert wire["parameters"] == [{"name": "x", "kind": "numeric"}, {"name": "y", "kind": "numeric"}]
	assert wire["resultShape"] == {"sum": "numeric"}


def test_block_body_with_branches() -> None:
	result = _compile("(x: number) => { if (x > 0) { return { v: x } } return { v: 0 - x } }")
	assert dict(result.result_shape) == {"v": ParameterKind.NUMERIC}
	assert result.callable(-4) == {"v": 4}


def test_enum_result_field_is_numeric() -> None:
	result = _compile("(x: number) => ({ axis: Axis.Y, x: x })", lib=["es2017", "host"])
	assert dict(result.result_shape) == {"axis": ParameterKind.NUMERIC, "x": ParameterKind.NUMERIC}
	assert result.callable(7) == {"axis": 1, "x": 7}


def test_console_writes_to_the_context() -> None:
	options = CompilerOptions(lib=("es2017", "host"))
	out = StringIO()
	result = compile_fragment(
		"(x: number) => { console.log('x is', x); return { x: x } }",
		options,
		_files(options),
		ctx=RuntimeContext(out),
	)
	assert result.callable(3) == {"x": 3}
	assert out.getvalue() == "x is 3\n"


@pytest.mark.parametrize("source", ["const x = 1\nx", "1\n2", "(x: number) => ({ y: x }); 3"])
def test_several_statements_are_rejected(source: str) -> None:
	with pytest.raises(StructuralError, match="single expression"):
		_compile(source)


def test_type_alias_before_the_fragment_is_a_second_statement() -> None:
	with pytest.raises(StructuralError, match="single expression") as info:
		_compile("type Id = number | string\n(id: Id) => ({ n: 1 })")
	assert (info.value.span.line, info.value.span.column) == (2, 1)


@pytest.mark.asyncio
async def test_type_alias_before_the_fragment_through_compile_and_evaluate() -> None:
	with pytest.raises(StructuralError):
		await compile_and_evaluate("type Id = number\n(id: Id) => ({ n: id })", declarations=DeclarationCache())


def test_second_statement_is_located() -> None:
	with pytest.raises(StructuralError) as info:
		_compile("const x = 1\nx")
	assert (info.value.span.line, info.value.span.column) == (2, 1)


def test_empty_source_is_rejected() -> None:
	with pytest.raises(StructuralError, match="single expression"):
		_compile("")


@pytest.mark.parametrize(
	"source, kind",
	[
		("const f = (x: number) => ({ y: x })", "variable declaration"),
		("function f(x: number) { return { y: x } }", "function declaration"),
		("if (true) { }", "if statement"),
	],
)
def test_non_expression_statement_is_rejected(source: str, kind: str) -> None:
	with pytest.raises(StructuralError) as info:
		_compile(source)
	assert info.value.statement_kind == kind
	assert str(info.value) == f"source must be an expression, found {kind}"


def test_non_object_return_is_rejected() -> None:
	with pytest.raises(ReturnShapeError) as info:
		_compile("(x: number) => x")
	assert info.value.type_text == "number"


def test_array_return_is_rejected() -> None:
	with pytest.raises(ReturnShapeError):
		_compile("(x: number) => [x]")


def test_union_parameter_is_rejected() -> None:
	with pytest.raises(ParameterTypeError) as info:
		_compile("(x: number | string) => ({ y: x })")
	assert info.value.parameter_name == "x"
	assert info.value.type_text == "string | number"


@pytest.mark.parametrize(
	"source",
	[
		"(x: boolean) => ({ y: 1 })",
		"(x: number[]) => ({ y: 1 })",
		"(x: { n: number }) => ({ y: x.n })",
	],
)
def test_non_primitive_parameters_are_rejected(source: str) -> None:
	with pytest.raises(ParameterTypeError) as info:
		_compile(source)
	assert info.value.parameter_name == "x"


def test_textual_result_field_is_rejected() -> None:
	with pytest.raises(ResultFieldTypeError) as info:
		_compile("(x: number) => ({ y: x, name: 'a' })")
	assert info.value.field_name == "name"
	assert info.value.type_text == "string"


@pytest.mark.parametrize("source", ["1", "Math", "'text'"])
def test_values_without_call_signatures_are_rejected(source: str) -> None:
	with pytest.raises(SignatureError) as info:
		_compile(source)
	assert info.value.signature_count == 0


def test_undefined_function_is_a_diagnostics_error() -> None:
	with pytest.raises(DiagnosticsError) as info:
		_compile("(x: number) => ({ y: nope(x) })")
	assert [d.code for d in info.value.diagnostics] == ["E2304"]
	assert "Cannot find name 'nope'" in info.value.rendered


def test_syntax_error_is_a_diagnostics_error() -> None:
	with pytest.raises(DiagnosticsError) as info:
		_compile("(x: number) => ({ y: x ")
	assert info.value.diagnostics
	assert all(d.phase == "parser" for d in info.value.diagnostics)


def test_option_errors_are_diagnostics() -> None:
	with pytest.raises(DiagnosticsError) as info:
		_compile(SUM, module="amd")
	assert [d.code for d in info.value.diagnostics] == ["E6046"]


def test_runtime_errors_propagate_unchanged() -> None:
	result = _compile(SUM)
	with pytest.raises(TypeError):
		result.callable(1)


def test_compile_to_python_returns_the_code() -> None:
	options = CompilerOptions()
	code = compile_to_python(SUM, options, _files(options))
	assert "def __fn_1(x, y):" in code


def test_resolve_options() -> None:
	options = CompilerOptions(target="es5")
	assert resolve_options(options) is options
	assert resolve_options(None) == CompilerOptions()
	assert resolve_options({"target": "es5"}) == options


@pytest.mark.asyncio
async def test_compile_and_evaluate() -> None:
	result = await compile_and_evaluate(SUM, declarations=DeclarationCache())
	assert result.callable(2, 3) == {"sum": 5}
	assert result.describe()["resultShape"] == {"sum": "numeric"}


@pytest.mark.asyncio
async def test_async_fragment_matches_the_synchronous_one() -> None:
	cache = DeclarationCache()
	sync = await compile_and_evaluate("(x: number) => ({ y: x })", declarations=cache)
	deferred = await compile_and_evaluate("async (x: number) => ({ y: x })", declarations=cache)
	assert deferred.describe() == sync.describe()
	assert await deferred.callable(4) == {"y": 4}


@pytest.mark.asyncio
async def test_async_fragment_needs_promise_declarations() -> None:
	with pytest.raises(DiagnosticsError) as info:
		await compile_and_evaluate(
			"async (x: number) => ({ y: x })",
			{"target": "es5", "lib": ["es5"]},
			declarations=DeclarationCache(),
		)
	assert "E2705" in [d.code for d in info.value.diagnostics]


@pytest.mark.asyncio
async def test_compile_and_evaluate_populates_the_cache_once() -> None:
	cache = DeclarationCache()
	await compile_and_evaluate(SUM, {"target": "es2015"}, declarations=cache)
	await compile_and_evaluate("(s: string) => ({ n: s.length })", {"target": "es2015"}, declarations=cache)
	assert cache.cached_keys == [("es2015", "dom")]
