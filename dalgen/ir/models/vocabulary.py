"""Canonical vocabulary for DAL column types, column defaults and referential actions.

Each vocabulary is a closed enum plus, where the language allows it, one open
"raw" variant that carries the author's text through untouched:

- Types: ScalarType | RawType   (unknown type spellings are never an error)
- Defaults: ColumnDefault | RawDefault
- Actions: Action               (closed; unknown phrases raise InvalidAction)
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from dalgen.errors import InvalidAction


class ScalarType(str, Enum):
    """Known column types. Values are the canonical DAL spellings."""

    BOOLEAN = "boolean"

    # Text
    CHAR = "char"
    VARCHAR = "varchar"
    TEXT = "text"

    # Numbers
    NUMBER = "number"
    SMALL_INT = "smallInt"
    MEDIUM_INT = "mediumInt"
    BIG_INT = "bigInt"
    INT = "int"
    SERIAL = "serial"

    # Floats
    FLOAT = "float"
    REAL = "real"
    NUMERIC = "numeric"
    DECIMAL = "decimal"

    # Date/Time
    DATE_TIME = "dateTime"


class RawType(BaseModel):
    """A type spelling outside the known vocabulary, emitted verbatim by every renderer."""

    value: str = Field(description="Type text exactly as written in the schema source")

    model_config = ConfigDict(frozen=True)


Types = Union[ScalarType, RawType]


# Exact, case-sensitive spellings. `bool` is the only alias.
_TYPE_SPELLINGS: Dict[str, ScalarType] = {member.value: member for member in ScalarType}
_TYPE_SPELLINGS["bool"] = ScalarType.BOOLEAN


def parse_type(token: str) -> Types:
    """Map a column type token onto the vocabulary. Total: never fails."""
    known = _TYPE_SPELLINGS.get(token)
    if known is not None:
        return known
    return RawType(value=token)


class ColumnDefault(str, Enum):
    """Known default kinds. `NOW` is translated per dialect, `NULL` is `DEFAULT NULL`."""

    NONE = "none"
    NOW = "now"
    NULL = "null"


class RawDefault(BaseModel):
    """A default expression passed through to every dialect without translation."""

    value: str = Field(description="Default literal exactly as written in the schema source")

    model_config = ConfigDict(frozen=True)


Default = Union[ColumnDefault, RawDefault]


def parse_default(literal: str) -> Default:
    """Resolve a `[default: ...]` literal. Only `now()` and `null` are special."""
    if literal == "now()":
        return ColumnDefault.NOW
    if literal == "null":
        return ColumnDefault.NULL
    return RawDefault(value=literal)


class Action(str, Enum):
    """Foreign key referential action. Values are the DAL source phrases."""

    NO_ACTION = "no action"
    RESTRICT = "restrict"
    SET_NULL = "set null"
    SET_DEFAULT = "set default"
    CASCADE = "cascade"

    @classmethod
    def parse(cls, token: str) -> Action:
        """Parse a source phrase (exact, lowercase). Raises InvalidAction otherwise."""
        for member in cls:
            if member.value == token:
                return member
        raise InvalidAction(token)

    @property
    def sql(self) -> str:
        """Keyword form used in `ON UPDATE` / `ON DELETE` clauses."""
        return self.value.upper()
