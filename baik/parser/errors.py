# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parse errors raised by the BAIK front end.

Every failure carries an `InputLocation` into the parsed source:

- `GrammarMismatch` is the only error a malformed script produces; it wraps a
  lark failure (expected vs. unexpected terminals).
- `NestingTooDeep` reports input nested past the builder's depth ceiling.
- `AstGeneration` means a converter was handed a node it has no rule for. That
  is an internal contract violation, never a user error.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Tuple

from baik.core.span import InputLocation


class ParseError(Exception):
	"""Base class for everything `parse_input` / `parse_file` raise."""

	def __init__(self, message: str, *, location: InputLocation) -> None:
		super().__init__(message)
		self.message = message
		self.location = location

	def line_col(self, source: str) -> Tuple[int, int]:
		return self.location.line_col(source)

	def describe(self, source: str) -> str:
		line, column = self.line_col(source)
		return f"{line}:{column}: {self.message}"


class GrammarMismatch(ParseError):
	"""The source does not match the grammar at `location`."""

	def __init__(self, positives: Iterable[str], negatives: Iterable[str], location: InputLocation) -> None:
		self.positives: FrozenSet[str] = frozenset(positives)
		self.negatives: FrozenSet[str] = frozenset(negatives)
		super().__init__(self._format(), location=location)

	def _format(self) -> str:
		found = ", ".join(sorted(self.negatives)) or "input"
		if not self.positives:
			return f"unexpected {found}"
		return f"unexpected {found}; expected one of: {', '.join(sorted(self.positives))}"


class AstGeneration(ParseError):
	"""A converter received a parse-tree node tagged `rule` that it cannot handle."""

	def __init__(self, rule: str, location: InputLocation) -> None:
		self.rule = rule
		super().__init__(f"cannot build AST from rule '{rule}'", location=location)


class NestingTooDeep(ParseError):
	"""The source nests expressions deeper than `limit` levels."""

	def __init__(self, limit: int, location: InputLocation) -> None:
		self.limit = limit
		super().__init__(f"expression nesting exceeds the limit of {limit} levels", location=location)


__all__ = ["AstGeneration", "GrammarMismatch", "NestingTooDeep", "ParseError"]
