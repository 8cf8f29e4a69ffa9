"""Dialect renderers for DAL schemas.

One renderer class per output target, selected by name:

- mysql              -> MySQLRenderer
- postgres/postgresql -> PostgreSQLRenderer
- sqlite             -> SQLiteRenderer
- rust               -> RustRenderer (accepts RustOptions)

Usage:
    with open("schema.sql", "w", encoding="utf-8") as sink:
        render(schema, sink, "postgres")

    text = render_to_string(schema, "rust", RustOptions(serde=True))
"""

from __future__ import annotations

import io
from enum import Enum
from typing import Optional, TextIO, Union

from dalgen.errors import InvalidFormat
from dalgen.ir.models import Schema

from .base import SQLRenderer
from .mysql import MySQLRenderer
from .postgresql import PostgreSQLRenderer
from .rust import RustOptions, RustRenderer
from .sqlite import SQLiteRenderer


class FormatType(str, Enum):
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    RUST = "rust"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, name: str) -> FormatType:
        """Resolve a format selector. Raises InvalidFormat for unknown names."""
        if name == "postgres":
            return cls.POSTGRESQL
        for member in cls:
            if member.value == name:
                return member
        raise InvalidFormat(name)


FORMAT_NAMES = ("mysql", "postgres", "postgresql", "sqlite", "rust")

Renderer = Union[SQLRenderer, RustRenderer]


def get_renderer(fmt: Union[str, FormatType], options: Optional[RustOptions] = None) -> Renderer:
    """Build the renderer for a format. `options` only affects the rust target."""
    if not isinstance(fmt, FormatType):
        fmt = FormatType.parse(fmt)

    if fmt == FormatType.MYSQL:
        return MySQLRenderer()
    if fmt == FormatType.POSTGRESQL:
        return PostgreSQLRenderer()
    if fmt == FormatType.SQLITE:
        return SQLiteRenderer()
    return RustRenderer(options)


def render(
    schema: Schema,
    sink: TextIO,
    fmt: Union[str, FormatType],
    options: Optional[RustOptions] = None,
) -> None:
    """Write `schema` to `sink` in the selected format.

    Raises:
        InvalidFormat: `fmt` is not a known selector (nothing is written)
        Any exception raised by `sink.write`, unchanged
    """
    get_renderer(fmt, options).write_schema(schema, sink)


def render_to_string(
    schema: Schema,
    fmt: Union[str, FormatType],
    options: Optional[RustOptions] = None,
) -> str:
    """Render into memory and return the text."""
    buffer = io.StringIO()
    render(schema, buffer, fmt, options)
    return buffer.getvalue()


__all__ = [
    "FORMAT_NAMES",
    "FormatType",
    "MySQLRenderer",
    "PostgreSQLRenderer",
    "Renderer",
    "RustOptions",
    "RustRenderer",
    "SQLRenderer",
    "SQLiteRenderer",
    "get_renderer",
    "render",
    "render_to_string",
]
