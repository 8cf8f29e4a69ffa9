"""Schema model and vocabulary for DAL declarations."""

from .vocabulary import (
    Action,
    ColumnDefault,
    Default,
    RawDefault,
    RawType,
    ScalarType,
    Types,
    parse_default,
    parse_type,
)
from .schema import Column, EnumDecl, ForeignKey, Item, Schema, TableDecl

__all__ = [
    # Vocabulary
    "Action",
    "ColumnDefault",
    "Default",
    "RawDefault",
    "RawType",
    "ScalarType",
    "Types",
    "parse_default",
    "parse_type",
    # Schema model
    "Column",
    "EnumDecl",
    "ForeignKey",
    "Item",
    "Schema",
    "TableDecl",
]
