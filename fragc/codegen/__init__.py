# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Python code generation for checked fragment programs."""

from .python_codegen import COMPLETION, MODULE_FACTORY, RUNTIME, PythonCodegen, emit_source_file, number_literal

__all__ = ["PythonCodegen", "emit_source_file", "number_literal", "RUNTIME", "COMPLETION", "MODULE_FACTORY"]
