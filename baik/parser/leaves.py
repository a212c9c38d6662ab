# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Leaf converters: one lark rule (or a small family of rules) -> one leaf value.

Each converter accepts exactly the rule tags listed in its docstring and raises
`AstGeneration` for anything else. Literal text is normalized here so nothing
downstream ever looks at raw source again.
"""

from __future__ import annotations

from lark import Token, Tree

from baik.core.span import InputLocation, location_of

from .ast import (
	Atom,
	Binary,
	BinaryOperator,
	Boolean,
	Float,
	Identifier,
	Integer,
	Local,
	String,
	Ty,
	TypeSpec,
	Unary,
	UnaryOperator,
)
from .errors import AstGeneration


def rule_name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def mismatch(node: Tree | Token) -> AstGeneration:
	"""Build the error for a node that reached the wrong converter."""
	if isinstance(node, Tree) and node.meta.empty:
		return AstGeneration(rule_name(node), InputLocation.pos(0))
	return AstGeneration(rule_name(node), location_of(node))


def _token(node: Tree) -> Token:
	tok = next((c for c in node.children if isinstance(c, Token)), None)
	if tok is None:
		raise mismatch(node)
	return tok


def _inner(node: Tree) -> Tree:
	inner = next((c for c in node.children if isinstance(c, Tree)), None)
	if inner is None:
		raise mismatch(node)
	return inner


def build_atom(node: Tree) -> Atom:
	"""`atom` (`:name`) or a map key written as `keyword` (`name:`)."""
	name = rule_name(node)
	if name == "atom":
		return Atom(value=_token(node).value[1:], location=location_of(node))
	if name == "keyword":
		return Atom(value=_token(node).value[:-1], location=location_of(node))
	raise mismatch(node)


def build_boolean(node: Tree) -> Boolean:
	"""`boolean`; the location is that of the nested `boolean_true` / `boolean_false`."""
	if rule_name(node) != "boolean":
		raise mismatch(node)
	inner = _inner(node)
	kind = rule_name(inner)
	if kind == "boolean_true":
		return Boolean(value=True, location=location_of(inner))
	if kind == "boolean_false":
		return Boolean(value=False, location=location_of(inner))
	raise mismatch(inner)


_INTEGER_RADIX = {
	"integer_hexadecimal": 16,
	"integer_octal": 8,
	"integer_binary": 2,
	"integer_decimal": 10,
	"integer_zero": 10,
}


def build_integer(node: Tree) -> Integer:
	"""`integer`: radix prefix dropped, `_` separators ignored."""
	if rule_name(node) != "integer":
		raise mismatch(node)
	inner = _inner(node)
	radix = _INTEGER_RADIX.get(rule_name(inner))
	if radix is None:
		raise mismatch(inner)
	digits = _token(inner).value.replace("_", "")
	if radix != 10:
		digits = digits[2:]
	return Integer(value=int(digits, radix), radix=radix, location=location_of(node))


def build_float(node: Tree) -> Float:
	if rule_name(node) != "float":
		raise mismatch(node)
	return Float(value=float(_token(node).value.replace("_", "")), location=location_of(node))


def build_string(node: Tree) -> String:
	"""`string`: contents between the quotes, both quote styles alike."""
	if rule_name(node) != "string":
		raise mismatch(node)
	return String(value=_token(node).value[1:-1], location=location_of(node))


def build_local(node: Tree) -> Local:
	if rule_name(node) != "local":
		raise mismatch(node)
	return Local(value=_token(node).value, location=location_of(node))


def build_ty(node: Tree) -> Ty:
	if rule_name(node) != "typename":
		raise mismatch(node)
	return Ty(value=_token(node).value, location=location_of(node))


def build_identifier(node: Tree) -> Identifier:
	"""
	Identifier from any of the name-bearing rules:

	- `ident`, `methodname`: verbatim
	- `keyword`: trailing `:` dropped
	- `methodnamewithpredicate`: kept whole, flagged with `has_predicate`
	- `property_get`: leading `@` dropped
	"""
	name = rule_name(node)
	loc = location_of(node)
	if name in {"ident", "methodname"}:
		return Identifier(value=_token(node).value, location=loc)
	if name == "keyword":
		return Identifier(value=_token(node).value[:-1], location=loc)
	if name == "methodnamewithpredicate":
		return Identifier(value=_token(node).value, location=loc, has_predicate=True)
	if name == "property_get":
		return Identifier(value=_token(node).value[1:], location=loc)
	raise mismatch(node)


def build_typespec(node: Tree) -> TypeSpec:
	if rule_name(node) != "typespec":
		raise mismatch(node)
	types = tuple(build_ty(c) for c in node.children if isinstance(c, Tree))
	return TypeSpec(types=types, location=location_of(node))


_BINARY_RULES = {op.name.lower(): op for op in BinaryOperator}
_UNARY_RULES = {op.name.lower(): op for op in UnaryOperator}


def build_binary(node: Tree) -> Binary:
	op = _BINARY_RULES.get(rule_name(node))
	if op is None:
		raise mismatch(node)
	return Binary(value=op, location=location_of(node))


def build_unary(node: Tree) -> Unary:
	op = _UNARY_RULES.get(rule_name(node))
	if op is None:
		raise mismatch(node)
	return Unary(value=op, location=location_of(node))


def is_binary_operator(node: Tree | Token) -> bool:
	return isinstance(node, Tree) and rule_name(node) in _BINARY_RULES


__all__ = [
	"build_atom",
	"build_binary",
	"build_boolean",
	"build_float",
	"build_identifier",
	"build_integer",
	"build_local",
	"build_string",
	"build_ty",
	"build_typespec",
	"build_unary",
	"is_binary_operator",
	"mismatch",
	"rule_name",
]
