"""The DAL schema language: grammar, parser, diagnostics and compile pipeline.

This package provides:
- A Lark grammar for DAL declarations
- A parser that turns source text into the Schema model
- A diagnostic accumulator and plain-text diagnostic rendering
- Pydantic models for diagnostics and compile results
- A compile pipeline combining parsing and rendering

Architecture:
- Grammar engine: parse_tree() - source text -> Lark parse tree
- Builder: build_schema() - parse tree -> Schema (structural checks + diagnostics)
- Parser: parse() - both of the above (PRIMARY function)
- Reporting: render_diagnostics() - diagnostics -> terminal text
- Pipeline: compile_source() / compile_file() - parse + render in one call
"""

from .builder import build_schema
from .context import DiagnosticContext
from .grammar import DAL_GRAMMAR
from .models import CompileResult, Diagnostic, Label, LabelStyle, Severity, Span
from .parser import parse, parse_tree
from .pipeline import check_source, compile_file, compile_source
from .reporting import line_col, render_diagnostic, render_diagnostics

__all__ = [
    # Grammar / parser
    "DAL_GRAMMAR",
    "parse",
    "parse_tree",
    "build_schema",
    # Diagnostics
    "DiagnosticContext",
    "Diagnostic",
    "Label",
    "LabelStyle",
    "Severity",
    "Span",
    "line_col",
    "render_diagnostic",
    "render_diagnostics",
    # Pipeline
    "CompileResult",
    "check_source",
    "compile_file",
    "compile_source",
]
