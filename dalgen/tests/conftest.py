"""Shared fixtures for the dalgen test suite."""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dalgen.ir.models import Column, ScalarType, TableDecl
from dalgen.utils.dsl import DiagnosticContext


RATING_ENUM = """enum Rating {
    Explicit
    Mature
    Teen
    General
}"""

SETTINGS_TABLE = """table Settings {
    key text [primary key]
    value text
    created dateTime [default: now()]
    updated dateTime [default: now()]
}"""

BLOG_SCHEMA = """// Blog schema
enum Rating [exists] {
    Explicit
    General
}

table User [exists] {
    id      text     [primary key]
    email   varchar  [unique]
    joined  dateTime [default: now()]
}

table Post [exists] {
    id      serial   [primary key]
    author  text     [ref: User.id (delete: cascade)]
    title   text
    body    text!
    rating  Rating   [default: 'General']
}
"""


@pytest.fixture
def ctx():
    """Fresh diagnostic context for one parse."""
    return DiagnosticContext()


@pytest.fixture
def example_table():
    """`table Example [exists] { Id text [primary key] Name text }` as a model."""
    return TableDecl(
        name="Example",
        not_exists=True,
        columns=(
            Column(name="Id", typ=ScalarType.TEXT),
            Column(name="Name", typ=ScalarType.TEXT),
        ),
        primary_keys=("Id",),
    )


@pytest.fixture
def blog_source():
    return BLOG_SCHEMA


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI reconfigures the root logger; put it back after every test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
