# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-03
"""
Compilation configuration.

`CompilerOptions` is owned by the caller and passed through unmodified. The
module format only changes the shape of the emitted code; the target and the
explicit library list decide which declaration files are in scope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from fragc.core.diagnostics import Diagnostic


class ModuleKind(Enum):
	SCRIPT = "script"
	CLOSURE = "closure"


class ScriptTarget(Enum):
	ES5 = "es5"
	ES2015 = "es2015"
	ES2017 = "es2017"
	ES2019 = "es2019"
	ES2021 = "es2021"
	ESNEXT = "esnext"


# Library names and the file each one lives in.
LIBRARY_FILES = {
	"es5": "lib.es5.d.ts",
	"es2015": "lib.es2015.d.ts",
	"es2017": "lib.es2017.d.ts",
	"es2019": "lib.es2019.d.ts",
	"es2021": "lib.es2021.d.ts",
	"esnext": "lib.esnext.d.ts",
	"dom": "lib.dom.d.ts",
	"host": "lib.host.d.ts",
}

LIB_DIRECTORY = "/lib"
ROOT_FILE_NAME = "/fragment.ts"
OUTPUT_FILE_NAME = "/fragment.py"


def lib_path(name: str) -> str:
	return f"{LIB_DIRECTORY}/{LIBRARY_FILES[name]}"


def lib_name_from_path(path: str) -> Optional[str]:
	for name, file_name in LIBRARY_FILES.items():
		if path == lib_path(name):
			return name
	return None


def _coerce_enum(enum_cls, value):
	if isinstance(value, enum_cls):
		return value
	if isinstance(value, str):
		try:
			return enum_cls(value.lower())
		except ValueError:
			pass
	raise ValueError(f"invalid value for {enum_cls.__name__}: {value!r}")


@dataclass(frozen=True)
class CompilerOptions:
	module: ModuleKind = ModuleKind.SCRIPT
	target: ScriptTarget = ScriptTarget.ES2017
	lib: Optional[Tuple[str, ...]] = None
	# Diagnostics produced while converting a raw mapping; not part of the
	# configuration's identity.
	diagnostics: Tuple[Diagnostic, ...] = field(default=(), compare=False, repr=False)

	def __post_init__(self) -> None:
		object.__setattr__(self, "module", _coerce_enum(ModuleKind, self.module))
		object.__setattr__(self, "target", _coerce_enum(ScriptTarget, self.target))
		if self.lib is not None:
			if isinstance(self.lib, str):
				raise ValueError("lib must be a sequence of library names")
			names = tuple(str(name).lower() for name in self.lib)
			unknown = [name for name in names if name not in LIBRARY_FILES]
			if unknown:
				raise ValueError(f"unknown library: {unknown[0]!r}")
			object.__setattr__(self, "lib", names)

	def library_names(self) -> Tuple[str, ...]:
		"""Libraries requested by this configuration (before references are followed)."""
		if self.lib is not None:
			return self.lib
		return (self.target.value, "dom")

	def declaration_key(self) -> Tuple[str, ...]:
		"""Identity of the declaration set this configuration needs."""
		return self.library_names()

	def default_lib_file_names(self) -> List[str]:
		return [lib_path(name) for name in self.library_names()]

	@classmethod
	def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "CompilerOptions":
		"""
		Build options from a JSON-like mapping.

		Invalid entries do not raise: each one is reported as a diagnostic on
		the returned options (`.diagnostics`) and the default is kept, so the
		compiler can report every configuration problem alongside the others.
		"""
		diagnostics: List[Diagnostic] = []
		values: dict = {}
		for key, value in (raw or {}).items():
			if key == "module":
				values["module"] = _option_enum(ModuleKind, key, value, diagnostics)
			elif key == "target":
				values["target"] = _option_enum(ScriptTarget, key, value, diagnostics)
			elif key == "lib":
				values["lib"] = _option_lib(value, diagnostics)
			else:
				diagnostics.append(
					Diagnostic(message=f"Unknown compiler option '{key}'.", code="E5023", phase="options")
				)
		kwargs = {k: v for k, v in values.items() if v is not None}
		return cls(**kwargs, diagnostics=tuple(diagnostics))


def _option_enum(enum_cls, key: str, value: Any, diagnostics: List[Diagnostic]):
	try:
		return _coerce_enum(enum_cls, value)
	except ValueError:
		allowed = ", ".join(f"'{member.value}'" for member in enum_cls)
		diagnostics.append(
			Diagnostic(
				message=f"Argument for '--{key}' option must be: {allowed}.",
				code="E6046",
				phase="options",
			)
		)
		return None


def _option_lib(value: Any, diagnostics: List[Diagnostic]) -> Optional[Tuple[str, ...]]:
	if isinstance(value, str) or not isinstance(value, Sequence):
		diagnostics.append(
			Diagnostic(message="Compiler option 'lib' requires a value of type list.", code="E5024", phase="options")
		)
		return None
	names: List[str] = []
	allowed = ", ".join(f"'{name}'" for name in LIBRARY_FILES)
	for item in value:
		name = str(item).lower()
		if name not in LIBRARY_FILES:
			diagnostics.append(
				Diagnostic(message=f"Argument for '--lib' option must be: {allowed}.", code="E6046", phase="options")
			)
			continue
		names.append(name)
	return tuple(names)


__all__ = [
	"CompilerOptions",
	"ModuleKind",
	"ScriptTarget",
	"LIBRARY_FILES",
	"ROOT_FILE_NAME",
	"OUTPUT_FILE_NAME",
	"lib_path",
	"lib_name_from_path",
]
