# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type checker for the fragment language.

The binder declares symbols for every file of a program; `TypeChecker`
resolves types lazily on top of it and reports diagnostics per file.
"""

from .checker import APPARENT_TYPE_NAMES, TypeChecker
from .types import (
	AnonymousType,
	ArrayType,
	EnumLiteralType,
	EnumType,
	InterfaceType,
	IntersectionType,
	IntrinsicType,
	LiteralType,
	ObjectFlags,
	ObjectType,
	Signature,
	Symbol,
	SymbolFlags,
	Type,
	TypeFlags,
	TypeParameter,
	TypeReference,
	UnionType,
)

__all__ = [
	"TypeChecker",
	"APPARENT_TYPE_NAMES",
	"AnonymousType",
	"ArrayType",
	"EnumLiteralType",
	"EnumType",
	"InterfaceType",
	"IntersectionType",
	"IntrinsicType",
	"LiteralType",
	"ObjectFlags",
	"ObjectType",
	"Signature",
	"Symbol",
	"SymbolFlags",
	"Type",
	"TypeFlags",
	"TypeParameter",
	"TypeReference",
	"UnionType",
]
