# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Checker diagnostic catalog.

Codes and wording follow TypeScript's diagnostics for the same condition;
`{0}`, `{1}` are positional arguments.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
	code: int
	text: str

	@property
	def tag(self) -> str:
		return f"E{self.code}"

	def format(self, *args: object) -> str:
		return self.text.format(*args)


# Names and declarations.
CANNOT_FIND_NAME = Message(2304, "Cannot find name '{0}'.")
ONLY_REFERS_TO_A_TYPE = Message(2693, "'{0}' only refers to a type, but is being used as a value here.")
REFERS_TO_A_VALUE = Message(2749, "'{0}' refers to a value, but is being used as a type here. Did you mean 'typeof {0}'?")
DUPLICATE_IDENTIFIER = Message(2300, "Duplicate identifier '{0}'.")
CANNOT_REDECLARE_BLOCK_SCOPED = Message(2451, "Cannot redeclare block-scoped variable '{0}'.")
DUPLICATE_FUNCTION_IMPLEMENTATION = Message(2393, "Duplicate function implementation.")
USED_BEFORE_DECLARATION = Message(2448, "Block-scoped variable '{0}' used before its declaration.")
CANNOT_FIND_GLOBAL_TYPE = Message(2318, "Cannot find global type '{0}'.")
CANNOT_FIND_MODULE = Message(2307, "Cannot find module '{0}' or its corresponding type declarations.")
CLASS_NOT_SUPPORTED = Message(9001, "Class declarations are not supported.")
CONST_ENUM_AS_VALUE = Message(
	2475,
	"'const' enums can only be used in property or index access expressions or the right hand side of an import "
	"declaration or export assignment or type query.",
)
ENUM_INITIALIZER_NOT_CONSTANT = Message(2474, "const enum member initializers must be constant expressions.")

# Types.
GENERIC_TYPE_REQUIRES_ARGUMENTS = Message(2314, "Generic type '{0}' requires {1} type argument(s).")
TYPE_IS_NOT_GENERIC = Message(2315, "Type '{0}' is not generic.")
NOT_ASSIGNABLE = Message(2322, "Type '{0}' is not assignable to type '{1}'.")
PROPERTY_MISSING = Message(2741, "Property '{0}' is missing in type '{1}' but required in type '{2}'.")
PROPERTY_OPTIONAL_IN_SOURCE = Message(2322, "Property '{0}' is optional in type '{1}' but required in type '{2}'.")
TYPES_OF_PROPERTY_INCOMPATIBLE = Message(2322, "Types of property '{0}' are incompatible.")
EXCESS_PROPERTY = Message(
	2353, "Object literal may only specify known properties, and '{0}' does not exist in type '{1}'."
)
DUPLICATE_OBJECT_PROPERTY = Message(1117, "An object literal cannot have multiple properties with the same name.")
CONVERSION_MAY_BE_A_MISTAKE = Message(
	2352,
	"Conversion of type '{0}' to type '{1}' may be a mistake because neither type sufficiently overlaps with the "
	"other. If this was intentional, convert the expression to 'unknown' first.",
)

# Property and element access.
PROPERTY_DOES_NOT_EXIST = Message(2339, "Property '{0}' does not exist on type '{1}'.")
POSSIBLY_UNDEFINED_NAMED = Message(18048, "'{0}' is possibly 'undefined'.")
OBJECT_POSSIBLY_UNDEFINED = Message(2532, "Object is possibly 'undefined'.")
OBJECT_IS_UNKNOWN = Message(2571, "Object is of type 'unknown'.")
IMPLICIT_ANY_INDEX = Message(
	7053, "Element implicitly has an 'any' type because expression of type '{0}' can't be used to index type '{1}'."
)

# Calls.
NOT_CALLABLE = Message(2349, "This expression is not callable.")
NO_CALL_SIGNATURES = Message(2349, "Type '{0}' has no call signatures.")
INVOKE_POSSIBLY_UNDEFINED = Message(2722, "Cannot invoke an object which is possibly 'undefined'.")
ARGUMENT_NOT_ASSIGNABLE = Message(2345, "Argument of type '{0}' is not assignable to parameter of type '{1}'.")
EXPECTED_ARGUMENTS = Message(2554, "Expected {0} arguments, but got {1}.")
EXPECTED_AT_LEAST_ARGUMENTS = Message(2555, "Expected at least {0} arguments, but got {1}.")
NO_OVERLOAD_MATCHES = Message(2769, "No overload matches this call.")

# Assignment and declarations.
CANNOT_ASSIGN_TO_CONSTANT = Message(2588, "Cannot assign to '{0}' because it is a constant.")
CANNOT_ASSIGN_TO_READONLY = Message(2540, "Cannot assign to '{0}' because it is a read-only property.")
INVALID_ASSIGNMENT_TARGET = Message(
	2364, "The left-hand side of an assignment expression must be a variable or a property access."
)
CONST_MUST_BE_INITIALIZED = Message(1155, "'const' declarations must be initialized.")

# Operators.
LEFT_ARITHMETIC_OPERAND = Message(
	2362, "The left-hand side of an arithmetic operation must be of type 'any', 'number', 'bigint' or an enum type."
)
RIGHT_ARITHMETIC_OPERAND = Message(
	2363, "The right-hand side of an arithmetic operation must be of type 'any', 'number', 'bigint' or an enum type."
)
OPERATOR_CANNOT_BE_APPLIED = Message(2365, "Operator '{0}' cannot be applied to types '{1}' and '{2}'.")
NO_OVERLAP = Message(
	2367, "This comparison appears to be unintentional because the types '{0}' and '{1}' have no overlap."
)

# Functions.
IMPLICIT_ANY_PARAMETER = Message(7006, "Parameter '{0}' implicitly has an '{1}' type.")
ASYNC_REQUIRES_PROMISE = Message(
	2705,
	"An async function or method in ES5 requires the 'Promise' constructor. Make sure you have a declaration for "
	"the 'Promise' constructor or include 'ES2015' in your '--lib' option.",
)
AWAIT_OUTSIDE_ASYNC = Message(
	1308, "'await' expressions are only allowed within async functions and at the top levels of modules."
)
ASYNC_RETURN_TYPE = Message(
	1064,
	"The return type of an async function or method must be the global Promise<T> type. Did you mean to write "
	"'Promise<{0}>'?",
)
MUST_RETURN_A_VALUE = Message(
	2355, "A function whose declared type is neither 'undefined', 'void', nor 'any' must return a value."
)
NOT_ALL_PATHS_RETURN = Message(7030, "Not all code paths return a value.")
RETURN_OUTSIDE_FUNCTION = Message(1108, "A 'return' statement can only be used within a function body.")
CONTINUE_OUTSIDE_LOOP = Message(1104, "A 'continue' statement can only be used within an enclosing iteration statement.")
BREAK_OUTSIDE_LOOP = Message(
	1105, "A 'break' statement can only be used within an enclosing iteration or switch statement."
)
