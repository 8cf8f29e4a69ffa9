"""PostgreSQL DDL renderer.

The only SQL dialect here with a native enum type: enums render as
`CREATE TYPE name AS ENUM (...)`. PostgreSQL has no `CREATE TYPE IF NOT
EXISTS`, so an enum's `[exists]` flag is ignored.
"""

from __future__ import annotations

from dalgen.ir.models import ScalarType

from .base import SQLRenderer


class PostgreSQLRenderer(SQLRenderer):
    name = "postgresql"
    supports_enums = True
    NOW_EXPRESSION = "(timezone('utc', now()))"
    TYPE_MAP = {
        ScalarType.BOOLEAN: "BOOL",
        ScalarType.CHAR: '"char"',
        ScalarType.VARCHAR: "VARCHAR",
        ScalarType.TEXT: "TEXT",
        ScalarType.SMALL_INT: "SMALLINT",
        ScalarType.NUMBER: "INT",
        ScalarType.INT: "INT",
        ScalarType.MEDIUM_INT: "INT",
        ScalarType.SERIAL: "INT",
        ScalarType.BIG_INT: "BIGINT",
        ScalarType.FLOAT: "REAL",
        ScalarType.REAL: "REAL",
        ScalarType.NUMERIC: "NUMERIC",
        ScalarType.DECIMAL: "DECIMAL",
        ScalarType.DATE_TIME: "TIMESTAMP WITH TIME ZONE",
    }
