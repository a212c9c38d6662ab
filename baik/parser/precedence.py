# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Operator precedence climbing for flat `infix` nodes.

The grammar parses `a + b * c - d` as one flat `infix` node whose children
alternate operand, operator, operand, ... This module folds that sequence into
nested Binary Terms using the table below (lowest binding power first).
"""

from __future__ import annotations

from collections import deque
from enum import Enum, auto
from typing import TYPE_CHECKING, Deque, Dict, Tuple

from lark import Token, Tree

from .ast import BinaryNode, Term
from .leaves import build_binary, is_binary_operator, mismatch, rule_name

if TYPE_CHECKING:
	from .builder import TermBuilder


class Assoc(Enum):
	LEFT = auto()
	RIGHT = auto()


_TIERS: Tuple[Tuple[Tuple[str, ...], Assoc], ...] = (
	(("logical_or",), Assoc.LEFT),
	(("logical_and",), Assoc.LEFT),
	(("equal", "not_equal"), Assoc.RIGHT),
	(("greater_than_or_equal", "less_than_or_equal", "greater_than", "less_than"), Assoc.LEFT),
	(("bitwise_xor", "bitwise_or"), Assoc.LEFT),
	(("bitwise_and",), Assoc.LEFT),
	(("shift_right", "shift_left"), Assoc.LEFT),
	(("plus", "minus"), Assoc.LEFT),
	(("modulus", "divide", "multiply"), Assoc.LEFT),
	(("exponent",), Assoc.RIGHT),
)

# rule name -> (binding power, associativity); binding power starts at 1.
PRECEDENCE: Dict[str, Tuple[int, Assoc]] = {
	rule: (level, assoc) for level, (rules, assoc) in enumerate(_TIERS, start=1) for rule in rules
}


def climb(node: Tree, builder: "TermBuilder") -> Term:
	"""
	Fold an `infix` node into a single Binary Term.

	Operands are converted by `builder` (nested `infix` nodes re-enter this
	function). Every Binary Term is located at its operator and claims one
	nesting level from the builder until the enclosing fold returns, so both
	long flat chains and right-associative recursion stay within
	`builder.max_depth`.
	"""
	if rule_name(node) != "infix":
		raise mismatch(node)
	items: Deque[Tree | Token] = deque(node.children)
	if not items:
		raise mismatch(node)
	lhs = builder.build(items.popleft())
	return _climb(lhs, 0, items, builder)


def _peek_precedence(items: Deque[Tree | Token]) -> Tuple[int, Assoc] | None:
	if not items:
		return None
	head = items[0]
	if not is_binary_operator(head):
		raise mismatch(head)
	return PRECEDENCE[rule_name(head)]


def _climb(lhs: Term, min_prec: int, items: Deque[Tree | Token], builder: "TermBuilder") -> Term:
	folds = 0
	try:
		while True:
			current = _peek_precedence(items)
			if current is None or current[0] < min_prec:
				return lhs
			prec = current[0]
			op_node = items.popleft()
			op = build_binary(op_node)
			if not items:
				raise mismatch(op_node)
			builder.enter(op.location)
			folds += 1
			rhs = builder.build(items.popleft())
			while True:
				ahead = _peek_precedence(items)
				if ahead is None:
					break
				next_prec, next_assoc = ahead
				if next_prec > prec or (next_prec == prec and next_assoc is Assoc.RIGHT):
					rhs = _climb(rhs, next_prec, items, builder)
				else:
					break
			lhs = Term(BinaryNode(op=op, lhs=lhs, rhs=rhs), op.location)
	finally:
		builder.leave(folds)


__all__ = ["PRECEDENCE", "Assoc", "climb"]
