# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
BAIK parser: source text -> typed `Term` list.

`parse_input` / `parse_file` raise `ParseError` subclasses on the first
problem. `parse_source_to_diagnostics` is the collecting variant used by tools:
it returns whatever Terms were produced together with structured diagnostics
and never raises for parse errors.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from baik.core.diagnostics import Diagnostic

from .ast import NodeType, Term
from .builder import DEFAULT_MAX_DEPTH, TermBuilder
from .errors import AstGeneration, GrammarMismatch, NestingTooDeep, ParseError
from .parser import parse_file, parse_input

_MODES = {"input": parse_input, "file": parse_file}


def parse_source_to_diagnostics(
	source: str,
	*,
	mode: str = "file",
	file: Optional[str] = None,
	max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tuple[List[Term], List[Diagnostic]]:
	"""
	Parse `source` with the `input` or `file` start rule.

	Returns `(terms, [])` on success and `([], [diagnostic])` on failure; a
	failed parse never yields a partial AST.
	"""
	try:
		parse = _MODES[mode]
	except KeyError:
		raise ValueError(f"unknown parse mode '{mode}' (expected one of: {', '.join(sorted(_MODES))})") from None
	try:
		return parse(source, max_depth=max_depth), []
	except ParseError as err:
		return [], [Diagnostic.from_parse_error(err, source, file=file)]


__all__ = [
	"AstGeneration",
	"DEFAULT_MAX_DEPTH",
	"GrammarMismatch",
	"NestingTooDeep",
	"NodeType",
	"ParseError",
	"Term",
	"TermBuilder",
	"parse_file",
	"parse_input",
	"parse_source_to_diagnostics",
]
