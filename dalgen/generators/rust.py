"""Rust data-structure renderer.

Enums become `pub enum`, tables become `pub struct` with one lowercased
`pub` field per column. Every item derives Clone, Debug, Hash and the four
comparison traits. RustOptions switches on extra glue:

- serde:   serde::Deserialize / serde::Serialize derives
- juniper: juniper::GraphQLEnum / juniper::GraphQLObject derives
- sqlite:  rewryte::sqlite::FromRow impls for structs, rusqlite
           ToSql / FromSql impls for enums (variants stored kebab-case)
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, TextIO

from pydantic import BaseModel, ConfigDict, Field

from dalgen.ir.models import Column, EnumDecl, RawType, ScalarType, Schema, TableDecl
from dalgen.utils.logging import get_logger

logger = get_logger(__name__)

INDENT = "    "

BASE_DERIVES = ["Clone", "Debug", "Hash", "PartialEq", "Eq", "PartialOrd", "Ord"]
SERDE_DERIVES = ["serde::Deserialize", "serde::Serialize"]

TYPE_MAP: Dict[ScalarType, str] = {
    ScalarType.CHAR: "char",
    ScalarType.VARCHAR: "String",
    ScalarType.TEXT: "String",
    ScalarType.NUMBER: "i32",
    ScalarType.INT: "i32",
    ScalarType.SERIAL: "i32",
    ScalarType.MEDIUM_INT: "i32",
    ScalarType.SMALL_INT: "i16",
    ScalarType.BIG_INT: "i64",
    ScalarType.FLOAT: "f64",
    ScalarType.REAL: "f64",
    ScalarType.NUMERIC: "f64",
    ScalarType.DECIMAL: "f64",
    ScalarType.DATE_TIME: "chrono::DateTime<chrono::Utc>",
    ScalarType.BOOLEAN: "bool",
}


class RustOptions(BaseModel):
    """Optional glue emitted alongside the generated Rust types."""

    serde: bool = Field(False, description="Derive serde::Deserialize and serde::Serialize")
    juniper: bool = Field(False, description="Derive juniper GraphQL traits")
    sqlite: bool = Field(False, description="Emit rusqlite/rewryte row-mapping impls")

    model_config = ConfigDict(frozen=True)


def _to_kebab_case(name: str) -> str:
    """`SetNull` -> `set-null`, `HTTPServer` -> `http-server`, `snake_case` -> `snake-case`."""
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name)
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1-\2", text)
    text = re.sub(r"[-_\s]+", "-", text)
    return text.strip("-").lower()


class RustRenderer:
    """Render a Schema as Rust type declarations."""

    name = "rust"

    def __init__(self, options: Optional[RustOptions] = None):
        self.options = options or RustOptions()

    def write_schema(self, schema: Schema, sink: TextIO) -> None:
        logger.info(
            f"Rendering {len(schema.items)} item(s) as {self.name} "
            f"(serde={self.options.serde}, juniper={self.options.juniper}, sqlite={self.options.sqlite})"
        )

        blocks: List[str] = []
        if self.options.sqlite and schema.tables:
            blocks.append("use anyhow::Context;")

        for item in schema.items:
            if isinstance(item, EnumDecl):
                blocks.extend(self.enum_blocks(item))
            else:
                blocks.extend(self.table_blocks(item))

        sink.write("\n\n".join(blocks))
        if blocks:
            sink.write("\n")

    # ------------------------------------------------------------------
    # Enums
    # ------------------------------------------------------------------

    def enum_blocks(self, decl: EnumDecl) -> List[str]:
        derives = list(BASE_DERIVES)
        if self.options.serde:
            derives.extend(SERDE_DERIVES)
        if self.options.juniper:
            derives.append("juniper::GraphQLEnum")

        lines = [f"#[derive({', '.join(derives)})]", f"pub enum {decl.name} {{"]
        lines.extend(f"{INDENT}{variant}," for variant in decl.variants)
        lines.append("}")

        blocks = ["\n".join(lines)]
        if self.options.sqlite:
            blocks.append(self._to_sql_impl(decl))
            blocks.append(self._from_sql_impl(decl))
        return blocks

    def _to_sql_impl(self, decl: EnumDecl) -> str:
        i2, i3 = INDENT * 2, INDENT * 3
        lines = [
            f"impl rusqlite::types::ToSql for {decl.name} {{",
            f"{INDENT}fn to_sql(&self) -> rusqlite::Result<rusqlite::types::ToSqlOutput<'_>> {{",
            f"{i2}match self {{",
        ]
        for variant in decl.variants:
            lines.append(f'{i3}{decl.name}::{variant} => Ok("{_to_kebab_case(variant)}".into()),')
        lines.extend([f"{i2}}}", f"{INDENT}}}", "}"])
        return "\n".join(lines)

    def _from_sql_impl(self, decl: EnumDecl) -> str:
        i2, i3 = INDENT * 2, INDENT * 3
        lines = [
            f"impl rusqlite::types::FromSql for {decl.name} {{",
            f"{INDENT}fn column_result(value: rusqlite::types::ValueRef<'_>) -> rusqlite::types::FromSqlResult<Self> {{",
            f"{i2}value.as_str().and_then(|s| match s {{",
        ]
        for variant in decl.variants:
            lines.append(f'{i3}"{_to_kebab_case(variant)}" => Ok({decl.name}::{variant}),')
        lines.extend([
            f"{i3}_ => Err(rusqlite::types::FromSqlError::InvalidType),",
            f"{i2}}})",
            f"{INDENT}}}",
            "}",
        ])
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def table_blocks(self, decl: TableDecl) -> List[str]:
        derives = list(BASE_DERIVES)
        if self.options.serde:
            derives.extend(SERDE_DERIVES)
        if self.options.juniper:
            derives.append("juniper::GraphQLObject")

        lines = [f"#[derive({', '.join(derives)})]", f"pub struct {decl.name} {{"]
        lines.extend(
            f"{INDENT}pub {column.name.lower()}: {self.field_type(column)},"
            for column in decl.columns
        )
        lines.append("}")

        blocks = ["\n".join(lines)]
        if self.options.sqlite:
            blocks.append(self._from_row_impl(decl))
        return blocks

    def field_type(self, column: Column) -> str:
        if isinstance(column.typ, RawType):
            typ = column.typ.value
        else:
            typ = TYPE_MAP[column.typ]
        if column.null:
            return f"std::option::Option<{typ}>"
        return typ

    def _from_row_impl(self, decl: TableDecl) -> str:
        i2, i3 = INDENT * 2, INDENT * 3
        lines = [
            f"impl rewryte::sqlite::FromRow for {decl.name} {{",
            f"{INDENT}fn from_row(row: &rusqlite::Row<'_>) -> anyhow::Result<Self>",
            f"{INDENT}where",
            f"{i2}Self: Sized,",
            f"{INDENT}{{",
            f"{i2}Ok(Self {{",
        ]
        for i, column in enumerate(decl.columns):
            field = column.name.lower()
            lines.append(
                f'{i3}{field}: row.get({i}).context("Failed to get data for row index {i} ({field})")?,'
            )
        lines.extend([f"{i2}}})", f"{INDENT}}}", "}"])
        return "\n".join(lines)
