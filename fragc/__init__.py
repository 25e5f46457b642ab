# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
fragc: compile a typed function fragment into a Python callable.

`compile_and_evaluate()` is the entry point; it returns an `EvalResult`
holding the callable plus the description of its parameters and result.
"""

from fragc.core.errors import (
	DiagnosticsError,
	EmitError,
	FragmentError,
	ParameterTypeError,
	ResultFieldTypeError,
	ReturnShapeError,
	SignatureError,
	StructuralError,
)
from fragc.declarations import BundledDeclarationProvider, DeclarationCache, default_declaration_cache
from fragc.options import CompilerOptions, ModuleKind, ScriptTarget
from fragc.parameters import (
	LiteralValue,
	NumberRange,
	Parameter,
	ParameterKind,
	default_value,
	is_valid,
)
from fragc.pipeline import EvalResult, compile_and_evaluate, compile_fragment

__all__ = [
	"compile_and_evaluate",
	"compile_fragment",
	"EvalResult",
	"CompilerOptions",
	"ModuleKind",
	"ScriptTarget",
	"DeclarationCache",
	"BundledDeclarationProvider",
	"default_declaration_cache",
	"Parameter",
	"ParameterKind",
	"LiteralValue",
	"NumberRange",
	"default_value",
	"is_valid",
	"FragmentError",
	"StructuralError",
	"SignatureError",
	"ParameterTypeError",
	"ReturnShapeError",
	"ResultFieldTypeError",
	"DiagnosticsError",
	"EmitError",
]
