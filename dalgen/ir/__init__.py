"""Intermediate representation of a parsed DAL schema."""

from .models import Column, EnumDecl, ForeignKey, Item, Schema, TableDecl

__all__ = ["Column", "EnumDecl", "ForeignKey", "Item", "Schema", "TableDecl"]
