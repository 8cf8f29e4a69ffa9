"""Compile pipeline: parse DAL source and render it in one call.

Stages:
1. Resolve the format selector (InvalidFormat is raised, not reported)
2. Parse into a Schema, collecting diagnostics (parser.parse)
3. Render into memory (generators.render_to_string)

Parse failures never raise out of the pipeline: they come back as a
CompileResult with `success=False`, the error response and every diagnostic
collected before the failure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from dalgen.errors import ParseError
from dalgen.generators import FormatType, RustOptions, render_to_string
from dalgen.utils.error_handling import ErrorContext, handle_compile_error
from dalgen.utils.logging import get_logger

from .context import DiagnosticContext
from .models import CompileResult
from .parser import parse

logger = get_logger(__name__)


def _parse_stage(source: str, file_name: str, fmt: Optional[str]):
    """Returns (schema, None) on success, (None, failed CompileResult) on parse failure."""
    ctx = DiagnosticContext()
    try:
        schema = parse(ctx, source)
    except ParseError as e:
        diagnostics = ctx.diagnostics()
        error_response = handle_compile_error(
            e,
            ErrorContext(stage="parse", file_name=file_name, format=fmt),
            diagnostics=diagnostics,
            log_level="warning",
        )
        return None, CompileResult(
            success=False,
            format=fmt,
            file_name=file_name,
            error=error_response,
            diagnostics=list(diagnostics),
        )
    return schema, None


def check_source(source: str, file_name: str = "<inline>") -> CompileResult:
    """Parse only. The result carries no output."""
    schema, failure = _parse_stage(source, file_name, None)
    if failure is not None:
        return failure

    logger.debug(f"{file_name}: {len(schema.items)} item(s) parsed")
    return CompileResult(success=True, file_name=file_name, item_count=len(schema.items))


def compile_source(
    source: str,
    fmt: Union[str, FormatType],
    file_name: str = "<inline>",
    options: Optional[RustOptions] = None,
) -> CompileResult:
    """Parse `source` and render it as `fmt`.

    Args:
        source: DAL schema text
        fmt: Output format selector (mysql, postgres, postgresql, sqlite, rust)
        file_name: Name used for the source in diagnostics and error responses
        options: Rust render options (ignored by SQL formats)

    Returns:
        CompileResult with `output` set on success, or `error` and
        `diagnostics` set on parse failure

    Raises:
        InvalidFormat: `fmt` is not a known selector (checked before parsing)

    Example:
        >>> result = compile_source("table T { id int [primary key] }", "sqlite")
        >>> print(result.output)
        CREATE TABLE T (
          id INTEGER NOT NULL,
          PRIMARY KEY (id)
        );
    """
    format_type = fmt if isinstance(fmt, FormatType) else FormatType.parse(fmt)
    selector = fmt.value if isinstance(fmt, FormatType) else fmt

    schema, failure = _parse_stage(source, file_name, selector)
    if failure is not None:
        return failure

    output = render_to_string(schema, format_type, options)
    return CompileResult(
        success=True,
        format=selector,
        file_name=file_name,
        output=output,
        item_count=len(schema.items),
    )


def compile_file(
    path: Union[str, Path],
    fmt: Union[str, FormatType],
    options: Optional[RustOptions] = None,
) -> CompileResult:
    """Read a UTF-8 schema file and compile it. OSError from reading propagates."""
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    return compile_source(source, fmt, file_name=str(path), options=options)

