"""dalgen: compile DAL schema declarations into SQL DDL and Rust types.

Architecture:
- ir/: Schema model and type/default/action vocabulary
- utils/dsl/: Lark grammar, tree-to-model builder, diagnostics, compile pipeline
- generators/: one renderer per output format (mysql, postgresql, sqlite, rust)
- config/: YAML defaults and environment settings
- cli.py: the `dalgen` command
"""

from dalgen.errors import (
    DALError,
    GrammarError,
    InvalidAction,
    InvalidFormat,
    ParseError,
    RenderError,
    UnexpectedEOS,
    UnexpectedPair,
)
from dalgen.generators import FormatType, RustOptions, render, render_to_string
from dalgen.utils.dsl import DiagnosticContext, compile_file, compile_source, parse

__version__ = "0.1.0"

__all__ = [
    "DALError",
    "DiagnosticContext",
    "FormatType",
    "GrammarError",
    "InvalidAction",
    "InvalidFormat",
    "ParseError",
    "RenderError",
    "RustOptions",
    "UnexpectedEOS",
    "UnexpectedPair",
    "compile_file",
    "compile_source",
    "parse",
    "render",
    "render_to_string",
]
