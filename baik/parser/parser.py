# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
BAIK source -> list of Terms.

The lark parser is built once at import time from `grammar.lark` next to this
module and shared by every call. This is the only place lark is invoked; its
failures are translated into `GrammarMismatch` here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from baik.core.span import InputLocation

from .ast import Term
from .builder import DEFAULT_MAX_DEPTH, TermBuilder
from .errors import GrammarMismatch

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start=["input", "file"],
	propagate_positions=True,
	maybe_placeholders=False,
)


def _terminal_display(name: str) -> str:
	"""
	Readable form of a terminal name for error messages.

	Anonymous literal terminals (`"("`, `"=>"`, keywords) are shown as the
	literal itself; named pattern terminals keep their name.
	"""
	if name == "$END":
		return "end of input"
	try:
		term = _PARSER.get_terminal(name)
	except KeyError:
		return name
	if term.pattern.type == "str":
		return f'"{term.pattern.value}"'
	return name


_IGNORED = frozenset(_PARSER.ignore_tokens)


def _displays(names: Iterable[str]) -> frozenset[str]:
	return frozenset(_terminal_display(n) for n in names if n not in _IGNORED)


def _grammar_mismatch(err: UnexpectedInput, source: str) -> GrammarMismatch:
	if isinstance(err, UnexpectedToken):
		token = err.token
		if token.type == "$END":
			location = InputLocation.pos(len(source))
		else:
			location = InputLocation.span(token.start_pos, token.end_pos)
		return GrammarMismatch(_displays(err.expected), _displays([token.type]), location)
	if isinstance(err, UnexpectedCharacters):
		found = source[err.pos_in_stream] if err.pos_in_stream < len(source) else "end of input"
		return GrammarMismatch(
			_displays(err.allowed or ()),
			frozenset({repr(found)}),
			InputLocation.pos(err.pos_in_stream),
		)
	if isinstance(err, UnexpectedEOF):
		return GrammarMismatch(_displays(err.expected), frozenset({"end of input"}), InputLocation.pos(len(source)))
	return GrammarMismatch((), (), InputLocation.pos(getattr(err, "pos_in_stream", None) or 0))


def _parse(source: str, start: str, max_depth: int) -> List[Term]:
	try:
		tree = _PARSER.parse(source, start=start)
	except UnexpectedInput as err:
		raise _grammar_mismatch(err, source) from err
	if not isinstance(tree, Tree):
		raise TypeError(f"lark returned {type(tree)} for start rule '{start}'")
	builder = TermBuilder(max_depth=max_depth)
	return [builder.build(child) for child in tree.children]


def parse_input(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> List[Term]:
	"""Parse an interactive statement stream (expressions only)."""
	return _parse(source, "input", max_depth)


def parse_file(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> List[Term]:
	"""Parse a whole source file: expressions plus `type` / `trait` definitions."""
	return _parse(source, "file", max_depth)


__all__ = ["parse_file", "parse_input"]
