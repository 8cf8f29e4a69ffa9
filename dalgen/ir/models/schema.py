"""Pydantic models for a parsed DAL schema.

All models are frozen: the builder constructs them once and renderers only
read them. Sequences are tuples and keep source order.
"""

from __future__ import annotations

from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .vocabulary import Action, ColumnDefault, Default, Types


class Column(BaseModel):
    name: str
    typ: Types
    null: bool = False
    default: Default = ColumnDefault.NONE

    model_config = ConfigDict(frozen=True)


class ForeignKey(BaseModel):
    local: str = Field(description="Column on the declaring table")
    table: str = Field(description="Referenced table")
    foreign: str = Field(description="Referenced column")
    delete: Action = Action.NO_ACTION
    update: Action = Action.NO_ACTION

    model_config = ConfigDict(frozen=True)


class EnumDecl(BaseModel):
    kind: Literal["enum"] = "enum"
    name: str
    not_exists: bool = False
    variants: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class TableDecl(BaseModel):
    """A table declaration.

    Key lists hold column names as written; they are not checked against
    `columns`, and foreign key targets are not checked against other items.
    """

    kind: Literal["table"] = "table"
    name: str
    not_exists: bool = False
    columns: Tuple[Column, ...] = ()
    primary_keys: Tuple[str, ...] = ()
    foreign_keys: Tuple[ForeignKey, ...] = ()
    unique_keys: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


Item = Union[EnumDecl, TableDecl]


class Schema(BaseModel):
    items: Tuple[Item, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def enums(self) -> Tuple[EnumDecl, ...]:
        return tuple(item for item in self.items if isinstance(item, EnumDecl))

    @property
    def tables(self) -> Tuple[TableDecl, ...]:
        return tuple(item for item in self.items if isinstance(item, TableDecl))
