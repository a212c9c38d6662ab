"""
baik.core: source locations and diagnostics shared by the front end and tools.

Modules:
  - span: InputLocation (offsets attached to AST nodes) and Span (rendered)
  - diagnostics: Diagnostic records built from parse errors
"""

__all__ = [
    "diagnostics",
    "span",
]
