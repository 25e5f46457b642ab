# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: fragc developers; created: 2026-10-07
"""
Type relations: assignability and comparability.

Relations are structural. Primitive and literal cases are decided by flags;
object types compare property by property and signature by signature, and two
references to the same generic interface compare their type arguments
covariantly. Fresh object literals additionally fail when they specify a
property the target does not know about.

`explain()` re-runs a failed check while recording why it failed, so the
checker can attach the elaboration as diagnostic notes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

from . import messages as msg
from .types import (
	AnonymousType,
	ArrayType,
	IntersectionType,
	ObjectFlags,
	ObjectType,
	Signature,
	Symbol,
	Type,
	TypeFlags,
	TypeParameter,
	TypeReference,
	UnionType,
)

if TYPE_CHECKING:
	from .checker import TypeChecker

ASSIGNABLE = "assignable"
COMPARABLE = "comparable"


@dataclass
class RelationFailure:
	notes: List[str] = field(default_factory=list)
	# Set when a fresh object literal names a property the target lacks.
	excess_property: Optional[Symbol] = None
	excess_target: Optional[Type] = None


def is_fresh_object_literal(t: Type) -> bool:
	return isinstance(t, AnonymousType) and bool(t.object_flags & ObjectFlags.FRESH_LITERAL)


class TypeRelater:
	def __init__(self, checker: "TypeChecker") -> None:
		self._checker = checker
		self._cache: Dict[Tuple[str, int, int], bool] = {}
		self._in_progress: Set[Tuple[str, int, int]] = set()

	def is_assignable(self, source: Type, target: Type) -> bool:
		return self._related(source, target, ASSIGNABLE, None)

	def is_comparable(self, source: Type, target: Type) -> bool:
		return self._related(source, target, COMPARABLE, None)

	def explain(self, source: Type, target: Type) -> RelationFailure:
		failure = RelationFailure()
		self._related(source, target, ASSIGNABLE, failure)
		return failure

	# ------------------------------------------------------------ core

	def _related(self, source: Type, target: Type, relation: str, failure: Optional[RelationFailure]) -> bool:
		if source is target:
			return True
		simple = self._simple_related(source, target, relation)
		if simple is not None:
			return simple
		if relation == ASSIGNABLE and is_fresh_object_literal(source):
			if self._has_excess_properties(source, target, failure):
				return False
		key = (relation, source.id, target.id)
		if failure is None:
			cached = self._cache.get(key)
			if cached is not None:
				return cached
		if key in self._in_progress:
			return True
		self._in_progress.add(key)
		try:
			result = self._structured_related(source, target, relation, failure)
		finally:
			self._in_progress.discard(key)
		if failure is None:
			self._cache[key] = result
		return result

	def _simple_related(self, source: Type, target: Type, relation: str) -> Optional[bool]:
		s, t = source.flags, target.flags
		if t & TypeFlags.ANY_OR_UNKNOWN or s & TypeFlags.NEVER:
			return True
		if t & TypeFlags.NEVER:
			return False
		if s & TypeFlags.ANY:
			return True
		if s & TypeFlags.UNKNOWN:
			return False
		if s & TypeFlags.UNION or t & TypeFlags.UNION:
			return None
		if s & TypeFlags.TYPE_PARAMETER or t & TypeFlags.TYPE_PARAMETER:
			return None
		if s & TypeFlags.STRING_LIKE and t & TypeFlags.STRING:
			return True
		if s & TypeFlags.ENUM_LITERAL:
			if t & TypeFlags.ENUM_LITERAL:
				return source.base is target.base and source.value == target.value
			if t & TypeFlags.ENUM:
				return source.base is target
			if t & TypeFlags.NUMBER:
				return True
			if t & TypeFlags.NUMBER_LITERAL:
				return relation == COMPARABLE and source.value == target.value
		elif s & TypeFlags.NUMBER_LITERAL:
			if t & TypeFlags.NUMBER:
				return True
			if t & TypeFlags.NUMBER_LITERAL:
				return source.value == target.value
			if t & TypeFlags.ENUM:
				return any(m.enum_value == source.value for m in target.members)
		if s & TypeFlags.NUMBER:
			if t & (TypeFlags.NUMBER | TypeFlags.ENUM):
				return True
			if t & TypeFlags.NUMBER_LITERAL:
				return relation == COMPARABLE
		if s & TypeFlags.ENUM and t & TypeFlags.NUMBER:
			return True
		if s & TypeFlags.ENUM and t & TypeFlags.ENUM_LITERAL:
			return relation == COMPARABLE and target.base is source
		if s & TypeFlags.BOOLEAN_LIKE and t & TypeFlags.BOOLEAN:
			return True
		if s & TypeFlags.BOOLEAN and t & TypeFlags.BOOLEAN_LITERAL:
			return relation == COMPARABLE
		if s & TypeFlags.STRING and t & TypeFlags.STRING_LITERAL:
			return relation == COMPARABLE
		if s & TypeFlags.UNDEFINED and t & TypeFlags.VOID_LIKE:
			return True
		if s & TypeFlags.VOID and t & TypeFlags.VOID:
			return True
		if s & TypeFlags.PRIMITIVE and t & TypeFlags.PRIMITIVE:
			return False
		if s & TypeFlags.OBJECT and t & TypeFlags.PRIMITIVE:
			return False
		if s & TypeFlags.VOID_LIKE:
			return False
		return None

	def _structured_related(self, source: Type, target: Type, relation: str, failure: Optional[RelationFailure]) -> bool:
		checker = self._checker
		if isinstance(source, UnionType):
			if relation == COMPARABLE:
				return any(self._related(s, target, relation, None) for s in source.types)
			for s in source.types:
				if not self._related(s, target, relation, failure):
					return False
			return True
		if isinstance(target, UnionType):
			if any(self._related(source, t, relation, None) for t in target.types):
				return True
			if failure is not None:
				failure.notes.append(msg.NOT_ASSIGNABLE.format(checker.type_to_string(source), checker.type_to_string(target)))
			return False
		if isinstance(target, TypeParameter) or isinstance(source, TypeParameter):
			if isinstance(source, TypeParameter) and source.constraint is not None:
				return self._related(source.constraint, target, relation, failure)
			return False
		if isinstance(target, IntersectionType):
			return all(self._related(source, t, relation, failure) for t in target.types)
		if isinstance(source, IntersectionType):
			if any(self._related(s, target, relation, None) for s in source.types):
				return True
			return self._object_related(source, target, relation, failure)
		if not target.flags & TypeFlags.OBJECT:
			return False
		if source.flags & TypeFlags.PRIMITIVE:
			apparent = checker.get_apparent_type(source)
			if apparent is source:
				return False
			return self._object_related(apparent, target, relation, failure)
		if source.flags & TypeFlags.OBJECT:
			return self._object_related(source, target, relation, failure)
		return False

	# ------------------------------------------------------------ objects

	def _object_related(self, source: Type, target: Type, relation: str, failure: Optional[RelationFailure]) -> bool:
		checker = self._checker
		if isinstance(source, TypeReference) and isinstance(target, TypeReference) and source.target is target.target:
			for s_arg, t_arg in zip(source.type_arguments, target.type_arguments):
				if not self._related(s_arg, t_arg, relation, failure):
					if failure is not None:
						failure.notes.append(
							msg.NOT_ASSIGNABLE.format(checker.type_to_string(source), checker.type_to_string(target))
						)
					return False
			return True
		if isinstance(target, ArrayType):
			if isinstance(source, ArrayType):
				return self._related(source.element_type, target.element_type, relation, failure)
			return False
		for target_prop in checker.get_properties_of_type(target):
			source_prop = checker.get_property_of_type(source, target_prop.name)
			if source_prop is None:
				if target_prop.is_optional:
					continue
				if failure is not None:
					failure.notes.append(
						msg.PROPERTY_MISSING.format(
							target_prop.name, checker.type_to_string(source), checker.type_to_string(target)
						)
					)
				return False
			if source_prop.is_optional and not target_prop.is_optional and relation == ASSIGNABLE:
				if failure is not None:
					failure.notes.append(
						msg.PROPERTY_OPTIONAL_IN_SOURCE.format(
							target_prop.name, checker.type_to_string(source), checker.type_to_string(target)
						)
					)
				return False
			source_type = checker.get_type_of_symbol(source_prop)
			target_type = checker.get_type_of_symbol(target_prop)
			if not self._related(source_type, target_type, relation, None):
				if failure is not None:
					failure.notes.append(msg.TYPES_OF_PROPERTY_INCOMPATIBLE.format(target_prop.name))
					self._related(source_type, target_type, relation, failure)
					failure.notes.append(
						msg.NOT_ASSIGNABLE.format(checker.type_to_string(source_type), checker.type_to_string(target_type))
					)
				return False
		target_signatures = checker.get_signatures_of_type(target)
		if target_signatures:
			source_signatures = checker.get_signatures_of_type(source)
			for target_sig in target_signatures:
				if not any(self._signature_related(s, target_sig, relation) for s in source_signatures):
					if failure is not None:
						failure.notes.append(
							msg.NOT_ASSIGNABLE.format(checker.type_to_string(source), checker.type_to_string(target))
						)
					return False
		return True

	def _signature_related(self, source: Signature, target: Signature, relation: str) -> bool:
		checker = self._checker
		target_max = len(target.parameters)
		if not target.has_rest_parameter and source.min_argument_count > target_max:
			return False
		for index in range(min(len(source.parameters), len(target.parameters))):
			source_type = checker.get_type_of_symbol(source.parameters[index])
			target_type = checker.get_type_of_symbol(target.parameters[index])
			# Parameters compare bivariantly, as for methods.
			if not (
				self._related(target_type, source_type, relation, None)
				or self._related(source_type, target_type, relation, None)
			):
				return False
		target_return = checker.get_return_type_of_signature(target)
		if target_return.flags & TypeFlags.VOID:
			return True
		return self._related(checker.get_return_type_of_signature(source), target_return, relation, None)

	def _has_excess_properties(self, source: AnonymousType, target: Type, failure: Optional[RelationFailure]) -> bool:
		checker = self._checker
		if not self._is_excess_property_check_target(target):
			return False
		for prop in checker.get_properties_of_type(source):
			if not self._is_known_property(target, prop.name):
				if failure is not None:
					failure.excess_property = prop
					failure.excess_target = target
				return True
		return False

	def _is_excess_property_check_target(self, target: Type) -> bool:
		if isinstance(target, (UnionType, IntersectionType)):
			return all(self._is_excess_property_check_target(t) for t in target.types if not t.flags & TypeFlags.VOID_LIKE)
		if not isinstance(target, ObjectType) or isinstance(target, ArrayType):
			return False
		checker = self._checker
		# `{}` and pure function types accept anything.
		return bool(checker.get_properties_of_type(target)) or not checker.get_signatures_of_type(target)

	def _is_known_property(self, target: Type, name: str) -> bool:
		if isinstance(target, (UnionType, IntersectionType)):
			return any(self._is_known_property(t, name) for t in target.types)
		if isinstance(target, ObjectType):
			if not self._checker.get_properties_of_type(target) and not self._checker.get_signatures_of_type(target):
				return True
			return self._checker.get_property_of_type(target, name) is not None
		return False


__all__ = ["TypeRelater", "RelationFailure", "is_fresh_object_literal", "ASSIGNABLE", "COMPARABLE"]
