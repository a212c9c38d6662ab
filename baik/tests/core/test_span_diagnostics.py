# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark import Token, Tree

from baik.core.diagnostics import Diagnostic
from baik.core.span import InputLocation, Span, line_col, location_of
from baik.parser import parse_source_to_diagnostics
from baik.parser.errors import AstGeneration, GrammarMismatch, NestingTooDeep


def test_line_col_is_one_based() -> None:
	source = "ab\ncd\n"
	assert line_col(source, 0) == (1, 1)
	assert line_col(source, 1) == (1, 2)
	assert line_col(source, 3) == (2, 1)
	assert line_col(source, 6) == (3, 1)
	assert line_col(source, 99) == (3, 1)


def test_input_location_shapes() -> None:
	assert str(InputLocation.pos(3)) == "3"
	assert str(InputLocation.span(0, 5)) == "0:5"
	assert not InputLocation.pos(3).is_span
	assert InputLocation.span(0, 5).is_span
	assert InputLocation.span(3, 5).end_line_col("ab\ncd") == (2, 3)


def test_location_of_token_and_tree() -> None:
	token = Token("IDENT", "abc", start_pos=4, end_pos=7)
	assert location_of(token) == InputLocation.span(4, 7)
	with pytest.raises(ValueError):
		location_of(Tree("empty", []))
	with pytest.raises(TypeError):
		location_of("abc")  # type: ignore[arg-type]


def test_span_from_position() -> None:
	span = Span.from_location(InputLocation.pos(4), "ab\ncd", file="x.baik")
	assert (span.file, span.line, span.column) == ("x.baik", 2, 2)
	assert span.end_line is None
	assert span.raw == InputLocation.pos(4)


def test_span_from_range() -> None:
	span = Span.from_location(InputLocation.span(0, 4), "ab\ncd")
	assert (span.line, span.column, span.end_line, span.end_column) == (1, 1, 2, 2)
	assert Span.from_location(None, "ab") == Span()


def test_diagnostic_codes() -> None:
	source = "1 +"
	mismatch = GrammarMismatch(["DECIMAL"], ["end of input"], InputLocation.pos(3))
	diag = Diagnostic.from_parse_error(mismatch, source, file="a.baik")
	assert (diag.code, diag.phase, diag.severity) == ("E-PARSE", "parser", "error")
	assert (diag.span.file, diag.span.line, diag.span.column) == ("a.baik", 1, 4)
	assert not diag.is_internal

	nesting = Diagnostic.from_parse_error(NestingTooDeep(3, InputLocation.span(0, 1)), source)
	assert nesting.code == "E-NESTING"
	assert nesting.notes == ["raise the limit with --max-depth"]

	internal = Diagnostic.from_parse_error(AstGeneration("bogus", InputLocation.pos(0)), source)
	assert internal.code == "E-INTERNAL"
	assert internal.is_internal
	assert internal.notes == ["unhandled grammar rule: bogus"]


def test_parse_source_to_diagnostics_success() -> None:
	terms, diags = parse_source_to_diagnostics("x = 1\nx", mode="input")
	assert diags == []
	assert len(terms) == 2


def test_parse_source_to_diagnostics_failure_has_no_terms() -> None:
	terms, diags = parse_source_to_diagnostics("x = [1,\n", file="bad.baik")
	assert terms == []
	assert len(diags) == 1
	assert diags[0].code == "E-PARSE"
	assert diags[0].span.file == "bad.baik"
	assert diags[0].span.line == 2


def test_parse_source_to_diagnostics_defaults_to_file_mode() -> None:
	terms, diags = parse_source_to_diagnostics("type Unit")
	assert diags == []
	assert terms[0].typedef() is not None


def test_parse_source_to_diagnostics_rejects_unknown_mode() -> None:
	with pytest.raises(ValueError):
		parse_source_to_diagnostics("1", mode="repl")
