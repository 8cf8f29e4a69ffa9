"""Tests for the tree-to-model builder on hand-built parse trees.

The grammar never produces most of these shapes; they exercise the
builder's own structural checks.
"""

import pytest
from lark import Token, Tree

from dalgen.errors import InvalidAction, UnexpectedEOS, UnexpectedPair
from dalgen.ir.models import Action, ColumnDefault, ScalarType
from dalgen.utils.dsl import Span, build_schema


def _tree(data, children, start=None, end=None):
    tree = Tree(data, children)
    if start is not None:
        tree.meta.empty = False
        tree.meta.start_pos = start
        tree.meta.end_pos = end
    return tree


def _ident(value, start):
    return Tree("ident", [Token("IDENT", value, start, end_pos=start + len(value))])


def _column(name, typ, start, *rest):
    return Tree("column", [
        _ident(name, start),
        Tree("column_type", [Token("COLUMN_TYPE", typ, start + len(name) + 1,
                                   end_pos=start + len(name) + 1 + len(typ))]),
        *rest,
    ])


class TestWellFormedTrees:
    def test_table_with_modifiers(self, ctx):
        modifiers = Tree("modifiers", [
            Tree("modifier_primary", []),
            Tree("modifier_default", [Tree("modifier_default_value", [Token("DEFAULT_VALUE", "now()")])]),
            Tree("modifier_ref", [
                _ident("Other", 0),
                _ident("id", 0),
                Tree("ref_action", [
                    Tree("ref_action_delete", [Tree("action", [Token("ACTION", "set default")])]),
                ]),
            ]),
            Tree("modifier_unique", []),
        ])
        tree = Tree("schema", [
            Tree("comment", [Token("COMMENT", "// hi")]),
            Tree("decl_table", [
                _ident("T", 6),
                Tree("exists", []),
                _column("at", "dateTime", 10, Tree("null", []), modifiers),
            ]),
        ])

        schema = build_schema(ctx, tree)

        table = schema.items[0]
        assert table.not_exists is True
        assert table.columns[0].typ == ScalarType.DATE_TIME
        assert table.columns[0].null is True
        assert table.columns[0].default == ColumnDefault.NOW
        assert table.primary_keys == ("at",)
        assert table.unique_keys == ("at",)
        assert table.foreign_keys[0].delete == Action.SET_DEFAULT
        assert table.foreign_keys[0].update == Action.NO_ACTION
        assert len(ctx) == 0

    def test_optional_nodes_left_in_place(self, ctx):
        """A column without `!` still reads its modifiers."""
        tree = Tree("schema", [
            Tree("decl_table", [
                _ident("T", 6),
                _column("a", "int", 10, Tree("modifiers", [Tree("modifier_unique", [])])),
            ]),
        ])

        table = build_schema(ctx, tree).items[0]

        assert table.not_exists is False
        assert table.columns[0].null is False
        assert table.unique_keys == ("a",)


class TestStructuralErrors:
    def test_wrong_root(self, ctx):
        with pytest.raises(UnexpectedPair):
            build_schema(ctx, Tree("decl_table", []))

        assert "expected `schema`" in ctx.diagnostics()[0].labels[0].note

    def test_unknown_top_level_item(self, ctx):
        tree = Tree("schema", [Tree("bogus", [Token("IDENT", "x", 3, end_pos=4)])])

        with pytest.raises(UnexpectedPair) as exc_info:
            build_schema(ctx, tree)

        assert exc_info.value.span.start == 3
        assert exc_info.value.span.end == 4
        assert exc_info.value.span.value == "x"
        diagnostic = ctx.diagnostics()[0]
        assert diagnostic.message == "Unexpected token"
        assert diagnostic.labels[0].span == Span.point(3)
        assert diagnostic.labels[0].note.endswith("found `bogus`")

    def test_span_value_comes_from_source(self, ctx):
        source = "abc xyz"
        tree = Tree("schema", [Tree("bogus", [Token("IDENT", "ignored", 4, end_pos=7)])])

        with pytest.raises(UnexpectedPair) as exc_info:
            build_schema(ctx, tree, source)

        assert exc_info.value.span.value == "xyz"

    def test_missing_name_is_end_of_stream(self, ctx):
        tree = Tree("schema", [_tree("decl_table", [], start=0, end=9)])

        with pytest.raises(UnexpectedEOS):
            build_schema(ctx, tree)

        diagnostic = ctx.diagnostics()[0]
        assert diagnostic.message == "Unexpected end of stream"
        assert diagnostic.labels[0].span == Span.point(9)
        assert diagnostic.labels[0].note == "here"

    def test_name_of_wrong_category(self, ctx):
        tree = Tree("schema", [
            Tree("decl_enum", [Tree("variant", [Token("IDENT", "A", 5, end_pos=6)])]),
        ])

        with pytest.raises(UnexpectedPair):
            build_schema(ctx, tree)

        note = ctx.diagnostics()[0].labels[0].note
        assert note == "expected `ident`, found `variant`"

    def test_unexpected_enum_member(self, ctx):
        tree = Tree("schema", [
            Tree("decl_enum", [_ident("E", 5), Tree("column", [Token("IDENT", "x", 9, end_pos=10)])]),
        ])

        with pytest.raises(UnexpectedPair):
            build_schema(ctx, tree)

        assert ctx.diagnostics()[0].labels[0].note == "expected `variant`, found `column`"

    def test_column_missing_type(self, ctx):
        column = _tree("column", [_ident("a", 10)], start=10, end=11)
        tree = Tree("schema", [Tree("decl_table", [_ident("T", 6), column])])

        with pytest.raises(UnexpectedEOS):
            build_schema(ctx, tree)

        assert ctx.diagnostics()[0].labels[0].span == Span.point(11)

    def test_unknown_modifier(self, ctx):
        modifiers = Tree("modifiers", [Tree("modifier_check", [Token("X", "x", 20, end_pos=21)])])
        tree = Tree("schema", [Tree("decl_table", [_ident("T", 6), _column("a", "int", 10, modifiers)])])

        with pytest.raises(UnexpectedPair):
            build_schema(ctx, tree)

        assert "`modifier unique`" in ctx.diagnostics()[0].labels[0].note

    def test_default_without_value(self, ctx):
        default = _tree("modifier_default", [], start=15, end=23)
        modifiers = Tree("modifiers", [default])
        tree = Tree("schema", [Tree("decl_table", [_ident("T", 6), _column("a", "int", 10, modifiers)])])

        with pytest.raises(UnexpectedEOS):
            build_schema(ctx, tree)

        assert ctx.diagnostics()[0].labels[0].span == Span.point(23)

    def test_reference_with_bad_trailer(self, ctx):
        ref = Tree("modifier_ref", [
            _ident("B", 20), _ident("id", 22), Tree("comment", [Token("COMMENT", "//", 25, end_pos=27)]),
        ])
        tree = Tree("schema", [
            Tree("decl_table", [_ident("T", 6), _column("a", "int", 10, Tree("modifiers", [ref]))]),
        ])

        with pytest.raises(UnexpectedPair):
            build_schema(ctx, tree)

        assert ctx.diagnostics()[0].labels[0].note.startswith("expected `modifier reference action(s)`")

    def test_invalid_action_reports_token(self, ctx):
        action = Tree("action", [Token("ACTION", "explode", 30, end_pos=37)])
        ref = Tree("modifier_ref", [
            _ident("B", 20), _ident("id", 22),
            Tree("ref_action", [Tree("ref_action_update", [action])]),
        ])
        tree = Tree("schema", [
            Tree("decl_table", [_ident("T", 6), _column("a", "int", 10, Tree("modifiers", [ref]))]),
        ])

        with pytest.raises(InvalidAction):
            build_schema(ctx, tree)

        label = ctx.diagnostics()[0].labels[0]
        assert label.span == Span(start=30, end=37)
        assert "found `explode`" in label.note
