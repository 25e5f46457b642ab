from __future__ import annotations

from fragc.checker import ArrayType, TypeFlags
from fragc.declarations import BundledDeclarationProvider
from fragc.host import VirtualFileSystem
from fragc.options import ROOT_FILE_NAME, CompilerOptions
from fragc.program import create_program


def _root_type(source: str, **options):
	opts = CompilerOptions(**options)
	host = VirtualFileSystem.for_fragment(source, BundledDeclarationProvider().load(opts))
	program = create_program([ROOT_FILE_NAME], opts, host)
	root = program.get_source_file(ROOT_FILE_NAME)
	checker = program.get_type_checker()
	assert checker.get_diagnostics(root) == []
	return checker, checker.get_type_at_location(root.statements[-1].expr)


def test_arrow_type_prints_with_inferred_result() -> None:
	checker, t = _root_type("(x: number, y: number) => ({ sum: x + y })")
	assert checker.type_to_string(t) == "(x: number, y: number) => { sum: number; }"


def test_literal_results_widen() -> None:
	checker, t = _root_type("(s: string) => ({ n: 1, label: 'a' })")
	assert checker.type_to_string(t) == "(s: string) => { n: number; label: string; }"


def test_async_arrow_returns_a_promise() -> None:
	checker, t = _root_type("async (t: number) => ({ y: t })")
	(sig,) = checker.get_signatures_of_type(t)
	result = checker.get_return_type_of_signature(sig)
	assert checker.type_to_string(result) == "Promise<{ y: number; }>"
	promised = checker.get_promised_type(result)
	assert promised is not None
	assert checker.type_to_string(promised) == "{ y: number; }"
	assert checker.get_promised_type(promised) is None


def test_await_unwraps_promises() -> None:
	checker, t = _root_type(
		"declare function later(n: number): Promise<number>\nasync (t: number) => ({ y: await later(t) })"
	)
	(sig,) = checker.get_signatures_of_type(t)
	promised = checker.get_promised_type(checker.get_return_type_of_signature(sig))
	assert checker.type_to_string(promised) == "{ y: number; }"


def test_branch_returns_of_the_same_shape_reduce_to_one_type() -> None:
	checker, t = _root_type("(x: number) => { if (x > 0) { return { v: x } } return { v: 0 } }")
	(sig,) = checker.get_signatures_of_type(t)
	assert checker.type_to_string(checker.get_return_type_of_signature(sig)) == "{ v: number; }"


def test_primitive_and_array_types() -> None:
	checker, t = _root_type("const xs = [1, 2]\nxs")
	assert isinstance(t, ArrayType)
	assert checker.type_to_string(t) == "number[]"
	checker, t = _root_type("'a'.length")
	assert t.flags == TypeFlags.NUMBER


def test_type_alias_names_are_kept_for_unions() -> None:
	checker, t = _root_type("type Id = number | string\n(id: Id) => ({ n: 1 })")
	(sig,) = checker.get_signatures_of_type(t)
	param_type = checker.get_type_of_symbol(sig.parameters[0])
	assert checker.type_to_string(param_type) == "Id"
	assert param_type.flags & TypeFlags.UNION


def test_enum_member_access_is_a_constant() -> None:
	source = "enum Mode { Off, On = 3 }\nMode.On"
	opts = CompilerOptions()
	host = VirtualFileSystem.for_fragment(source, BundledDeclarationProvider().load(opts))
	program = create_program([ROOT_FILE_NAME], opts, host)
	root = program.get_source_file(ROOT_FILE_NAME)
	checker = program.get_type_checker()
	assert checker.get_diagnostics(root) == []
	access = root.statements[-1].expr
	assert checker.get_constant_value(access) == 3
	assert checker.type_to_string(checker.get_type_at_location(access)) == "Mode.On"
