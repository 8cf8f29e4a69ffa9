"""SQLite DDL renderer. SQLite has no enum type; enums are skipped silently."""

from __future__ import annotations

from dalgen.ir.models import ScalarType

from .base import SQLRenderer


class SQLiteRenderer(SQLRenderer):
    name = "sqlite"
    supports_enums = False
    NOW_EXPRESSION = "(DATETIME('now', 'utc'))"
    TYPE_MAP = {
        ScalarType.BOOLEAN: "BOOLEAN",
        ScalarType.CHAR: "TEXT",
        ScalarType.TEXT: "TEXT",
        ScalarType.VARCHAR: "VARCHAR",
        ScalarType.NUMBER: "INTEGER",
        ScalarType.SMALL_INT: "INTEGER",
        ScalarType.MEDIUM_INT: "INTEGER",
        ScalarType.INT: "INTEGER",
        ScalarType.SERIAL: "INTEGER",
        ScalarType.BIG_INT: "BIGINT",
        ScalarType.FLOAT: "REAL",
        ScalarType.REAL: "REAL",
        ScalarType.NUMERIC: "REAL",
        ScalarType.DECIMAL: "DECIMAL",
        ScalarType.DATE_TIME: "DATETIME",
    }
