# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
baikc: command-line front end for the BAIK parser.

Parses one or more source files (or a snippet given with `-e`) and reports
syntax diagnostics. With `--dump` the resulting AST is printed as JSON; with
`--json` diagnostics are emitted as a structured payload on stdout instead of
human-readable lines on stderr.

Exit codes: 0 success, 1 user diagnostics (syntax, nesting, unreadable file),
2 internal conversion errors.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from baik.core.diagnostics import Diagnostic
from baik.core.span import Span
from baik.parser import DEFAULT_MAX_DEPTH, parse_source_to_diagnostics
from baik.parser.dump import terms_to_data

EVAL_LABEL = "<eval>"


@dataclass
class _Unit:
	"""One thing to parse: a file on disk or the `-e` snippet."""

	label: str
	text: str
	mode: str


def _diag_to_json(diag: Diagnostic, phase: str, source: str) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	span = diag.span
	file = getattr(span, "file", None) or source
	return {
		"phase": diag.phase or phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": file,
		"line": span.line,
		"column": span.column,
		"end_line": span.end_line,
		"end_column": span.end_column,
		"notes": list(diag.notes),
	}


def _read_units(args: argparse.Namespace) -> tuple[list[_Unit], list[Diagnostic]]:
	if args.eval_source is not None:
		return [_Unit(label=EVAL_LABEL, text=args.eval_source, mode=args.mode or "input")], []
	units: list[_Unit] = []
	diagnostics: list[Diagnostic] = []
	for path in args.source:
		try:
			text = path.read_text(encoding="utf-8")
		except OSError as err:
			diagnostics.append(
				Diagnostic(
					message=f"cannot read source file: {err.strerror or err}",
					code="E-IO",
					phase="driver",
					span=Span(file=str(path)),
				)
			)
			continue
		units.append(_Unit(label=str(path), text=text, mode=args.mode or "file"))
	return units, diagnostics


def _exit_code(diagnostics: List[Diagnostic]) -> int:
	if any(d.is_internal for d in diagnostics):
		return 2
	if any(d.severity == "error" for d in diagnostics):
		return 1
	return 0


def main(argv: list[str] | None = None) -> int:
	"""
	Parse BAIK sources and report diagnostics.

	With --json, prints `{"exit_code": ..., "diagnostics": [...]}` (plus `ast`
	when --dump is given); otherwise prints human-readable messages to stderr
	and, with --dump, the AST as indented JSON on stdout.
	"""
	parser = argparse.ArgumentParser(prog="baikc", description="BAIK parser front end")
	parser.add_argument("source", type=Path, nargs="*", help="Path(s) to BAIK source file(s)")
	parser.add_argument("-e", "--eval", dest="eval_source", metavar="TEXT", help="Parse TEXT instead of files")
	parser.add_argument(
		"--mode",
		choices=("input", "file"),
		default=None,
		help="Start rule: 'file' (default for paths) also accepts type/trait definitions; 'input' is the default for --eval",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)",
	)
	parser.add_argument("--dump", action="store_true", help="Print the parsed AST as JSON")
	parser.add_argument(
		"--max-depth",
		type=int,
		default=DEFAULT_MAX_DEPTH,
		help=f"Maximum expression nesting depth (default: {DEFAULT_MAX_DEPTH})",
	)
	args = parser.parse_args(argv)

	if args.eval_source is not None and args.source:
		parser.error("give source files or --eval, not both")
	if args.eval_source is None and not args.source:
		parser.error("no input: give source files or --eval TEXT")
	if args.max_depth < 1:
		parser.error("--max-depth must be at least 1")

	units, diagnostics = _read_units(args)
	ast: Dict[str, Any] = {}
	for unit in units:
		terms, diags = parse_source_to_diagnostics(
			unit.text,
			mode=unit.mode,
			file=unit.label,
			max_depth=args.max_depth,
		)
		diagnostics.extend(diags)
		if not diags:
			ast[unit.label] = terms_to_data(terms)

	exit_code = _exit_code(diagnostics)
	if args.json:
		payload: Dict[str, Any] = {
			"exit_code": exit_code,
			"diagnostics": [_diag_to_json(d, "parser", EVAL_LABEL) for d in diagnostics],
		}
		if args.dump:
			payload["ast"] = ast
		print(json.dumps(payload))
		return exit_code

	for d in diagnostics:
		loc = f"{d.span.line or '?'}:{d.span.column or '?'}"
		print(f"{d.span.file or EVAL_LABEL}:{loc}: {d.severity}: {d.message}", file=sys.stderr)
		for note in d.notes:
			print(f"  note: {note}", file=sys.stderr)
	if args.dump and ast:
		print(json.dumps(ast if len(ast) > 1 else next(iter(ast.values())), indent=2))
	return exit_code


__all__ = ["main"]
