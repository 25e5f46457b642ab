# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-02
"""
Error taxonomy of the fragment compilation pipeline.

Every error aborts the whole request; there is no partial result. Each error
carries the structured context a host needs to render an actionable message
(offending name, resolved type text, diagnostic list) and can be serialized
with `to_json()`.

Errors raised by the produced callable when the host invokes it are not part
of this taxonomy: they propagate unchanged to whoever calls the callable.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .diagnostics import Diagnostic, format_diagnostics
from .span import Span


class FragmentError(Exception):
	"""Base class for all compilation request failures."""

	kind = "fragment"

	def to_json(self) -> dict:
		return {"kind": self.kind, "message": str(self)}


class StructuralError(FragmentError):
	"""The fragment is not exactly one expression statement."""

	kind = "structural"

	def __init__(self, message: str, *, statement_kind: Optional[str] = None, span: Optional[Span] = None) -> None:
		super().__init__(message)
		self.statement_kind = statement_kind
		self.span = span or Span()

	def to_json(self) -> dict:
		payload = super().to_json()
		payload["statementKind"] = self.statement_kind
		payload["line"] = self.span.line
		payload["column"] = self.span.column
		return payload


class SignatureError(FragmentError):
	"""The fragment's type has zero or several call signatures."""

	kind = "signature"

	def __init__(self, type_text: str, signature_count: int) -> None:
		if signature_count == 0:
			message = f"fragment of type '{type_text}' is not callable"
		else:
			message = f"fragment of type '{type_text}' has {signature_count} call signatures; exactly one is required"
		super().__init__(message)
		self.type_text = type_text
		self.signature_count = signature_count

	def to_json(self) -> dict:
		payload = super().to_json()
		payload["type"] = self.type_text
		payload["signatureCount"] = self.signature_count
		return payload


class ParameterTypeError(FragmentError):
	"""A parameter's type is not exactly `number` or exactly `string`."""

	kind = "parameter-type"

	def __init__(self, parameter_name: str, type_text: str) -> None:
		super().__init__(
			f"parameter '{parameter_name}' has type '{type_text}'; only 'number' and 'string' are supported"
		)
		self.parameter_name = parameter_name
		self.type_text = type_text

	def to_json(self) -> dict:
		payload = super().to_json()
		payload["parameter"] = self.parameter_name
		payload["type"] = self.type_text
		return payload


class ReturnShapeError(FragmentError):
	"""The result type (after one Promise unwrap) is not a plain object type."""

	kind = "return-shape"

	def __init__(self, type_text: str) -> None:
		super().__init__(f"fragment must return an object of numeric fields, not '{type_text}'")
		self.type_text = type_text

	def to_json(self) -> dict:
		payload = super().to_json()
		payload["type"] = self.type_text
		return payload


class ResultFieldTypeError(FragmentError):
	"""A field of the result object is not numeric."""

	kind = "result-field-type"

	def __init__(self, field_name: str, type_text: str) -> None:
		super().__init__(f"result field '{field_name}' has type '{type_text}'; result fields must be numeric")
		self.field_name = field_name
		self.type_text = type_text

	def to_json(self) -> dict:
		payload = super().to_json()
		payload["field"] = self.field_name
		payload["type"] = self.type_text
		return payload


class DiagnosticsError(FragmentError):
	"""Compiler diagnostics were reported before emission."""

	kind = "diagnostics"

	def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
		self.diagnostics: Tuple[Diagnostic, ...] = tuple(diagnostics)
		self.rendered = format_diagnostics(self.diagnostics)
		count = len(self.diagnostics)
		plural = "" if count == 1 else "s"
		super().__init__(f"{count} diagnostic{plural}:\n{self.rendered}")

	def to_json(self) -> dict:
		payload = super().to_json()
		payload["diagnostics"] = [d.to_json() for d in self.diagnostics]
		return payload


class EmitError(FragmentError):
	"""
	Internal invariant violation: wrong or missing emit output, or the compiler
	asked the sandboxed host for a path it does not serve (or tried to write).
	"""

	kind = "emit"


__all__ = [
	"FragmentError",
	"StructuralError",
	"SignatureError",
	"ParameterTypeError",
	"ReturnShapeError",
	"ResultFieldTypeError",
	"DiagnosticsError",
	"EmitError",
]
