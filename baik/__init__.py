# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
baik package: front end of the BAIK scripting language.

Packages:
  core: source locations and diagnostics
  parser: grammar, parse tree -> typed Term conversion, AST dump

Entry point: `baikc` (also `python -m baik`).
"""

__version__ = "0.1.0"
