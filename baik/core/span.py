# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source locations for BAIK parse results.

Two shapes live here:

- `InputLocation` is what every AST node and leaf value carries: either a single
  character offset or a half-open `[start, end)` span into the source string.
- `Span` is the rendered form used by diagnostics: best-effort file/line/column
  plus the raw location object it was derived from.

Offsets are character offsets into the Python `str` that was parsed (the same
values lark reports as `start_pos` / `end_pos`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from lark import Token, Tree


@dataclass(frozen=True)
class InputLocation:
	"""A single offset (`end is None`) or a half-open span of the source."""

	start: int
	end: Optional[int] = None

	@classmethod
	def pos(cls, pos: int) -> "InputLocation":
		return cls(start=pos)

	@classmethod
	def span(cls, start: int, end: int) -> "InputLocation":
		return cls(start=start, end=end)

	@property
	def is_span(self) -> bool:
		return self.end is not None

	def line_col(self, source: str) -> Tuple[int, int]:
		"""1-based (line, column) of the first character."""
		return line_col(source, self.start)

	def end_line_col(self, source: str) -> Tuple[int, int]:
		"""1-based (line, column) just past the last character of a span."""
		return line_col(source, self.start if self.end is None else self.end)

	def __str__(self) -> str:
		if self.end is None:
			return f"{self.start}"
		return f"{self.start}:{self.end}"


def line_col(source: str, offset: int) -> Tuple[int, int]:
	"""Convert a character offset into a 1-based (line, column) pair."""
	offset = max(0, min(offset, len(source)))
	line = source.count("\n", 0, offset) + 1
	column = offset - (source.rfind("\n", 0, offset) + 1) + 1
	return line, column


def location_of(node: Tree | Token) -> InputLocation:
	"""
	Span covered by a lark node.

	Trees rely on `propagate_positions=True`; a tree that matched nothing has
	an empty meta and no position at all, which is reported as a ValueError.
	"""
	if isinstance(node, Token):
		return InputLocation.span(node.start_pos, node.end_pos)
	if isinstance(node, Tree):
		meta = node.meta
		if meta.empty:
			raise ValueError(f"node '{node.data}' carries no source position")
		return InputLocation.span(meta.start_pos, meta.end_pos)
	raise TypeError(f"Expected lark Tree or Token, got {type(node)}")


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw location)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_location(cls, loc: Optional[InputLocation], source: str, *, file: Optional[str] = None) -> "Span":
		"""
		Render an InputLocation against the text it was computed from.

		Single offsets produce a span with no end; the raw InputLocation is kept
		so JSON output can still report character offsets.
		"""
		if loc is None:
			return cls(file=file)
		line, column = loc.line_col(source)
		end_line: Optional[int] = None
		end_column: Optional[int] = None
		if loc.is_span:
			end_line, end_column = loc.end_line_col(source)
		return cls(
			file=file,
			line=line,
			column=column,
			end_line=end_line,
			end_column=end_column,
			raw=loc,
		)


__all__ = ["InputLocation", "Span", "line_col", "location_of"]
