from __future__ import annotations

import pytest

from fragc.options import CompilerOptions, ModuleKind, ScriptTarget, lib_name_from_path, lib_path


def test_defaults_are_script_es2017_with_dom() -> None:
	opts = CompilerOptions()
	assert opts.module is ModuleKind.SCRIPT
	assert opts.target is ScriptTarget.ES2017
	assert opts.library_names() == ("es2017", "dom")
	assert opts.default_lib_file_names() == ["/lib/lib.es2017.d.ts", "/lib/lib.dom.d.ts"]


def test_explicit_lib_replaces_target_default() -> None:
	opts = CompilerOptions(target="es5", lib=["ES2015", "host"])
	assert opts.library_names() == ("es2015", "host")
	assert opts.declaration_key() == ("es2015", "host")


def test_enum_values_accept_strings_case_insensitively() -> None:
	opts = CompilerOptions(module="Closure", target="ESNext")
	assert opts.module is ModuleKind.CLOSURE
	assert opts.target is ScriptTarget.ESNEXT


def test_direct_construction_rejects_bad_values() -> None:
	with pytest.raises(ValueError):
		CompilerOptions(target="es3")
	with pytest.raises(ValueError, match="unknown library"):
		CompilerOptions(lib=["es5", "webworker"])
	with pytest.raises(ValueError):
		CompilerOptions(lib="es5")  # type: ignore[arg-type]


def test_from_mapping_reports_problems_as_diagnostics() -> None:
	opts = CompilerOptions.from_mapping({"target": "es3", "strict": True, "module": "closure"})
	assert opts.target is ScriptTarget.ES2017
	assert opts.module is ModuleKind.CLOSURE
	assert sorted(d.code for d in opts.diagnostics) == ["E5023", "E6046"]
	assert all(d.phase == "options" for d in opts.diagnostics)


def test_from_mapping_lib_must_be_a_list() -> None:
	opts = CompilerOptions.from_mapping({"lib": "es5"})
	assert [d.code for d in opts.diagnostics] == ["E5024"]
	assert opts.lib is None


def test_from_mapping_drops_unknown_lib_entries() -> None:
	opts = CompilerOptions.from_mapping({"lib": ["es5", "nope"]})
	assert opts.lib == ("es5",)
	assert [d.code for d in opts.diagnostics] == ["E6046"]


def test_diagnostics_are_not_part_of_identity() -> None:
	assert CompilerOptions.from_mapping({"bogus": 1}) == CompilerOptions()


def test_lib_paths_round_trip() -> None:
	assert lib_path("dom") == "/lib/lib.dom.d.ts"
	assert lib_name_from_path("/lib/lib.es2015.d.ts") == "es2015"
	assert lib_name_from_path("/fragment.ts") is None
