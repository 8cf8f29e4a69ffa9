"""MySQL DDL renderer.

MySQL enums are column-level (`ENUM('a', 'b')`), not named types, so named
enum declarations are skipped the same way SQLite skips them. A bare
`VARCHAR` is not valid MySQL; varchar columns get a 255 character limit.
"""

from __future__ import annotations

from dalgen.ir.models import ScalarType

from .base import SQLRenderer


class MySQLRenderer(SQLRenderer):
    name = "mysql"
    supports_enums = False
    NOW_EXPRESSION = "(UTC_TIMESTAMP())"
    TYPE_MAP = {
        ScalarType.BOOLEAN: "BOOLEAN",
        ScalarType.CHAR: "CHAR",
        ScalarType.VARCHAR: "VARCHAR(255)",
        ScalarType.TEXT: "TEXT",
        ScalarType.SMALL_INT: "SMALLINT",
        ScalarType.MEDIUM_INT: "MEDIUMINT",
        ScalarType.NUMBER: "INT",
        ScalarType.INT: "INT",
        ScalarType.SERIAL: "SERIAL",
        ScalarType.BIG_INT: "BIGINT",
        ScalarType.FLOAT: "FLOAT",
        ScalarType.REAL: "DOUBLE",
        ScalarType.NUMERIC: "NUMERIC",
        ScalarType.DECIMAL: "DECIMAL",
        ScalarType.DATE_TIME: "DATETIME",
    }
