"""Shared SQL DDL writer.

Each SQL dialect is a subclass of SQLRenderer that supplies:
- TYPE_MAP: canonical scalar type -> dialect keyword
- NOW_EXPRESSION: the dialect's "current UTC timestamp" default
- supports_enums: whether enums render as CREATE TYPE or are skipped

Table layout is identical across dialects:

    CREATE TABLE [IF NOT EXISTS] name (
      col TYPE[ NOT NULL][ DEFAULT expr],
      ...
      PRIMARY KEY (a, b)[,
      FOREIGN KEY (x) REFERENCES t(y) ON UPDATE A ON DELETE B][,
      UNIQUE (c)]
    );

Everything is written straight to the caller's sink. Sink exceptions are
never caught; a fault mid-render leaves whatever was already written.
"""

from __future__ import annotations

from typing import ClassVar, Dict, TextIO

from dalgen.ir.models import (
    Column,
    ColumnDefault,
    Default,
    EnumDecl,
    ForeignKey,
    Item,
    RawDefault,
    RawType,
    ScalarType,
    Schema,
    TableDecl,
    Types,
)
from dalgen.utils.logging import get_logger

logger = get_logger(__name__)


class SQLRenderer:
    """Render a Schema as SQL DDL for one dialect."""

    name: ClassVar[str] = "sql"
    TYPE_MAP: ClassVar[Dict[ScalarType, str]] = {}
    NOW_EXPRESSION: ClassVar[str] = ""
    supports_enums: ClassVar[bool] = False

    def write_schema(self, schema: Schema, sink: TextIO) -> None:
        logger.info(f"Rendering {len(schema.items)} item(s) as {self.name}")

        last = len(schema.items) - 1
        for i, item in enumerate(schema.items):
            self.write_item(item, sink)
            sink.write("\n")
            if i != last:
                sink.write("\n")

    def write_item(self, item: Item, sink: TextIO) -> None:
        if isinstance(item, EnumDecl):
            self.write_enum(item, sink)
        else:
            self.write_table(item, sink)

    def write_enum(self, decl: EnumDecl, sink: TextIO) -> None:
        if not self.supports_enums:
            logger.debug(f"Skipping enum {decl.name}: {self.name} has no native enum type")
            return

        sink.write(f"CREATE TYPE {decl.name} AS ENUM (\n")
        last = len(decl.variants) - 1
        for i, variant in enumerate(decl.variants):
            sink.write(f"  '{variant}'")
            if i != last:
                sink.write(",")
            sink.write("\n")
        sink.write(");")

    def write_table(self, decl: TableDecl, sink: TextIO) -> None:
        sink.write("CREATE TABLE")
        if decl.not_exists:
            sink.write(" IF NOT EXISTS")
        sink.write(f" {decl.name} (\n")

        for column in decl.columns:
            self.write_column(column, sink)
            sink.write(",\n")

        sink.write(f"  PRIMARY KEY ({', '.join(decl.primary_keys)})")

        # Each clause ends its own line only when nothing follows it.
        if decl.foreign_keys:
            sink.write(",\n")
            last = len(decl.foreign_keys) - 1
            for i, foreign_key in enumerate(decl.foreign_keys):
                self.write_foreign_key(foreign_key, sink)
                if i != last:
                    sink.write(",\n")
            if not decl.unique_keys:
                sink.write("\n")
        elif not decl.unique_keys:
            sink.write("\n")

        if decl.unique_keys:
            sink.write(",\n")
            sink.write(f"  UNIQUE ({', '.join(decl.unique_keys)})\n")

        sink.write(");")

    def write_column(self, column: Column, sink: TextIO) -> None:
        sink.write(f"  {column.name} {self.format_type(column.typ)}")
        if not column.null:
            sink.write(" NOT NULL")
        sink.write(self.format_default(column.default))

    def format_type(self, typ: Types) -> str:
        if isinstance(typ, RawType):
            return typ.value
        return self.TYPE_MAP[typ]

    def format_default(self, default: Default) -> str:
        """Return the ` DEFAULT ...` suffix for a column, or "" for no default."""
        if isinstance(default, RawDefault):
            return f" DEFAULT {default.value}"
        if default == ColumnDefault.NOW:
            return f" DEFAULT {self.NOW_EXPRESSION}"
        if default == ColumnDefault.NULL:
            return " DEFAULT NULL"
        return ""

    def write_foreign_key(self, foreign_key: ForeignKey, sink: TextIO) -> None:
        sink.write(
            f"  FOREIGN KEY ({foreign_key.local}) REFERENCES {foreign_key.table}({foreign_key.foreign})"
            f" ON UPDATE {foreign_key.update.sql} ON DELETE {foreign_key.delete.sql}"
        )
