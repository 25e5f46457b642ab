# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-06
"""
Signature extraction for a checked fragment.

Parameters are classified by exact type flags: only a type that is exactly
`number` or exactly `string` qualifies, with no assignability matching.
Result fields are looser and accept anything number-like, enums included.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from fragc.checker import ArrayType, Signature, Type, TypeChecker, TypeFlags
from fragc.core.errors import ParameterTypeError, ResultFieldTypeError, ReturnShapeError, SignatureError
from fragc.parameters import Parameter, ParameterKind
from fragc.parser import ast

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallSignature:
	parameters: Tuple[Parameter, ...]
	result_shape: Mapping[str, ParameterKind]


def classify_parameter_type(t: Type) -> ParameterKind | None:
	if t.flags == TypeFlags.NUMBER:
		return ParameterKind.NUMERIC
	if t.flags == TypeFlags.STRING:
		return ParameterKind.TEXTUAL
	return None


def get_single_signature(checker: TypeChecker, expr: ast.Expr) -> Signature:
	t = checker.get_type_at_location(expr)
	signatures = checker.get_signatures_of_type(t)
	if len(signatures) != 1:
		raise SignatureError(checker.type_to_string(t), len(signatures))
	return signatures[0]


def extract_parameters(checker: TypeChecker, signature: Signature) -> Tuple[Parameter, ...]:
	parameters = []
	for symbol in signature.parameters:
		t = checker.get_type_of_symbol(symbol)
		kind = classify_parameter_type(t)
		if kind is None:
			raise ParameterTypeError(symbol.name, checker.type_to_string(t))
		parameters.append(Parameter(symbol.name, kind))
	return tuple(parameters)


def _is_plain_object(checker: TypeChecker, t: Type) -> bool:
	if not t.flags & TypeFlags.OBJECT or isinstance(t, ArrayType):
		return False
	if checker.get_signatures_of_type(t):
		return False
	return checker.get_promised_type(t) is None


def extract_result_shape(checker: TypeChecker, signature: Signature) -> Mapping[str, ParameterKind]:
	result = checker.get_return_type_of_signature(signature)
	# One level of Promise only; Promise<Promise<T>> is rejected below.
	promised = checker.get_promised_type(result)
	if promised is not None:
		result = promised
	if not _is_plain_object(checker, result):
		raise ReturnShapeError(checker.type_to_string(result))
	shape = {}
	for prop in checker.get_properties_of_type(result):
		t = checker.get_type_of_symbol(prop)
		if not t.flags & TypeFlags.NUMBER_LIKE:
			raise ResultFieldTypeError(prop.name, checker.type_to_string(t))
		shape[prop.name] = ParameterKind.NUMERIC
	return MappingProxyType(shape)


def extract_signature(checker: TypeChecker, expr: ast.Expr) -> CallSignature:
	signature = get_single_signature(checker, expr)
	parameters = extract_parameters(checker, signature)
	shape = extract_result_shape(checker, signature)
	logger.debug("signature: %d parameter(s), %d result field(s)", len(parameters), len(shape))
	return CallSignature(parameters, shape)


__all__ = [
	"CallSignature",
	"classify_parameter_type",
	"extract_signature",
	"extract_parameters",
	"extract_result_shape",
	"get_single_signature",
]
