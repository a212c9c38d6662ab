# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the BAIK front end.

A diagnostic is a message plus a rendered source span and a few labels
(code/phase/severity). Parse errors are converted here so tools and the CLI
never need to know the ParseError hierarchy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .span import Span

if TYPE_CHECKING:
	from baik.parser.errors import ParseError


@dataclass
class Diagnostic:
	"""Represents a front-end diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@classmethod
	def from_parse_error(cls, err: "ParseError", source: str, *, file: Optional[str] = None) -> "Diagnostic":
		"""
		Convert a ParseError raised while parsing `source`.

		Codes: `E-PARSE` for grammar mismatches, `E-NESTING` for the depth
		ceiling, `E-INTERNAL` for converter contract violations.
		"""
		from baik.parser.errors import AstGeneration, GrammarMismatch, NestingTooDeep

		notes: list[str] = []
		if isinstance(err, GrammarMismatch):
			code = "E-PARSE"
		elif isinstance(err, NestingTooDeep):
			code = "E-NESTING"
			notes.append("raise the limit with --max-depth")
		elif isinstance(err, AstGeneration):
			code = "E-INTERNAL"
			notes.append(f"unhandled grammar rule: {err.rule}")
		else:
			code = "E-PARSE"
		return cls(
			message=err.message,
			code=code,
			phase="parser",
			severity="error",
			span=Span.from_location(err.location, source, file=file),
			notes=notes,
		)

	@property
	def is_internal(self) -> bool:
		return self.code == "E-INTERNAL"


__all__ = ["Diagnostic"]
