"""Tree-to-model builder for DAL schemas.

Walks the Lark parse tree depth-first, checks that every node has the
grammar category the declaration shape requires, and builds the Schema
model. Every mismatch is recorded in the DiagnosticContext before the walk
stops:

- missing required node -> "Unexpected end of stream" at the end of the
  parent's span, raises UnexpectedEOS
- node of the wrong kind -> "Unexpected token" at the start of the node,
  raises UnexpectedPair

Optional nodes (`[exists]`, the `!` nullability marker) are read with a
one-node lookahead and left in place when they do not match.

Column modifiers are folded left to right: the last default wins, while
primary key, unique and reference modifiers append to the table's key lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from lark import Token, Tree

from dalgen.errors import ErrorSpan, InvalidAction, UnexpectedEOS, UnexpectedPair
from dalgen.ir.models import (
    Action,
    Column,
    ColumnDefault,
    Default,
    EnumDecl,
    ForeignKey,
    Item,
    Schema,
    TableDecl,
    Types,
    parse_default,
    parse_type,
)
from dalgen.utils.logging import get_logger

from .context import DiagnosticContext
from .models import Span

logger = get_logger(__name__)

Node = Union[Tree, Token]


# ============================================================================
# Intermediate results
# ============================================================================

@dataclass(frozen=True)
class _ColumnPartial:
    name: str
    typ: Types
    null: bool


@dataclass(frozen=True)
class _DefaultModifier:
    value: Default


@dataclass(frozen=True)
class _PrimaryKeyModifier:
    pass


@dataclass(frozen=True)
class _UniqueModifier:
    pass


@dataclass(frozen=True)
class _ReferenceModifier:
    table: str
    column: str
    delete: Action
    update: Action


_Modifier = Union[_DefaultModifier, _PrimaryKeyModifier, _UniqueModifier, _ReferenceModifier]


# ============================================================================
# Node helpers
# ============================================================================

def _category(node: Node) -> str:
    if isinstance(node, Tree):
        return str(node.data)
    return node.type


def _span(node: Node) -> Tuple[int, int]:
    if isinstance(node, Token):
        start = node.start_pos if node.start_pos is not None else 0
        end = node.end_pos if node.end_pos is not None else start + len(node.value)
        return start, end
    meta = node.meta
    if not meta.empty:
        return meta.start_pos, meta.end_pos
    # Trees built by hand carry no meta; fall back to their leaves.
    spans = [_span(child) for child in node.children]
    if spans:
        return spans[0][0], spans[-1][1]
    return 0, 0


def _leaf_text(node: Node) -> str:
    if isinstance(node, Token):
        return str(node.value)
    return " ".join(_leaf_text(child) for child in node.children)


class _Children:
    """Cursor over a node's children supporting one-node lookahead."""

    def __init__(self, tree: Tree):
        self._nodes: List[Node] = list(tree.children)
        self._index = 0

    def peek(self) -> Optional[Node]:
        if self._index < len(self._nodes):
            return self._nodes[self._index]
        return None

    def next(self) -> Optional[Node]:
        node = self.peek()
        if node is not None:
            self._index += 1
        return node

    def __iter__(self) -> Iterator[Node]:
        while True:
            node = self.next()
            if node is None:
                return
            yield node


# ============================================================================
# Builder
# ============================================================================

class _SchemaBuilder:
    def __init__(self, ctx: DiagnosticContext, source: str):
        self.ctx = ctx
        self.source = source

    # -- errors --------------------------------------------------------------

    def _text(self, node: Node) -> str:
        start, end = _span(node)
        if self.source and 0 <= start <= end <= len(self.source):
            return self.source[start:end]
        return _leaf_text(node)

    def _unexpected(self, node: Node, expected: str) -> UnexpectedPair:
        start, end = _span(node)
        self.ctx.error(
            "Unexpected token",
            Span.point(start),
            note=f"expected {expected}, found `{_category(node)}`",
        )
        return UnexpectedPair(ErrorSpan(value=self._text(node), start=start, end=end))

    def _end_of_stream(self, parent: Node) -> UnexpectedEOS:
        _, end = _span(parent)
        self.ctx.error("Unexpected end of stream", Span.point(end), note="here")
        return UnexpectedEOS()

    # -- cursor helpers ------------------------------------------------------

    def _expect(self, children: _Children, parent: Node, category: str, expected: str) -> Node:
        node = children.next()
        if node is None:
            raise self._end_of_stream(parent)
        if _category(node) != category:
            raise self._unexpected(node, expected)
        return node

    def _accept(self, children: _Children, category: str) -> bool:
        node = children.peek()
        if node is not None and _category(node) == category:
            children.next()
            return True
        return False

    def _ident(self, children: _Children, parent: Node) -> str:
        return _leaf_text(self._expect(children, parent, "ident", "`ident`"))

    # -- productions ---------------------------------------------------------

    def build(self, tree: Node) -> Schema:
        if _category(tree) != "schema":
            raise self._unexpected(tree, "`schema`")

        items: List[Item] = []
        for node in tree.children:
            category = _category(node)
            if category == "decl_enum":
                items.append(self._enum(node))
            elif category == "decl_table":
                items.append(self._table(node))
            elif category == "comment":
                continue
            else:
                raise self._unexpected(
                    node, "`enum declaration`, `table declaration`, or `comment`"
                )

        return Schema(items=tuple(items))

    def _enum(self, node: Tree) -> EnumDecl:
        children = _Children(node)
        name = self._ident(children, node)
        not_exists = self._accept(children, "exists")

        variants: List[str] = []
        for child in children:
            category = _category(child)
            if category == "variant":
                variants.append(_leaf_text(child))
            elif category == "comment":
                continue
            else:
                raise self._unexpected(child, "`variant`")

        logger.debug(f"Built enum {name} with {len(variants)} variant(s)")
        return EnumDecl(name=name, not_exists=not_exists, variants=tuple(variants))

    def _table(self, node: Tree) -> TableDecl:
        children = _Children(node)
        name = self._ident(children, node)
        not_exists = self._accept(children, "exists")

        columns: List[Column] = []
        primary_keys: List[str] = []
        foreign_keys: List[ForeignKey] = []
        unique_keys: List[str] = []

        for child in children:
            category = _category(child)
            if category == "comment":
                continue
            if category != "column":
                raise self._unexpected(child, "`column` or `comment`")

            partial, modifiers = self._column(child)
            default: Default = ColumnDefault.NONE

            for modifier in modifiers:
                if isinstance(modifier, _DefaultModifier):
                    default = modifier.value
                elif isinstance(modifier, _PrimaryKeyModifier):
                    primary_keys.append(partial.name)
                elif isinstance(modifier, _ReferenceModifier):
                    foreign_keys.append(
                        ForeignKey(
                            local=partial.name,
                            table=modifier.table,
                            foreign=modifier.column,
                            delete=modifier.delete,
                            update=modifier.update,
                        )
                    )
                elif isinstance(modifier, _UniqueModifier):
                    unique_keys.append(partial.name)

            columns.append(
                Column(name=partial.name, typ=partial.typ, null=partial.null, default=default)
            )

        logger.debug(
            f"Built table {name}: {len(columns)} column(s), {len(primary_keys)} primary, "
            f"{len(foreign_keys)} foreign, {len(unique_keys)} unique key(s)"
        )
        return TableDecl(
            name=name,
            not_exists=not_exists,
            columns=tuple(columns),
            primary_keys=tuple(primary_keys),
            foreign_keys=tuple(foreign_keys),
            unique_keys=tuple(unique_keys),
        )

    def _column(self, node: Tree) -> Tuple[_ColumnPartial, List[_Modifier]]:
        children = _Children(node)
        name = self._ident(children, node)
        typ = parse_type(_leaf_text(self._expect(children, node, "column_type", "`column type`")))
        null = self._accept(children, "null")

        modifiers: List[_Modifier] = []
        child = children.next()
        if child is not None:
            if _category(child) != "modifiers":
                raise self._unexpected(child, "`modifiers`")
            modifiers = self._modifiers(child)

        return _ColumnPartial(name=name, typ=typ, null=null), modifiers

    def _modifiers(self, node: Tree) -> List[_Modifier]:
        modifiers: List[_Modifier] = []

        for child in _Children(node):
            category = _category(child)
            if category == "modifier_default":
                value = self._expect(
                    _Children(child), child, "modifier_default_value", "`modifier default value`"
                )
                modifiers.append(_DefaultModifier(parse_default(_leaf_text(value))))
            elif category == "modifier_primary":
                modifiers.append(_PrimaryKeyModifier())
            elif category == "modifier_ref":
                modifiers.append(self._modifier_ref(child))
            elif category == "modifier_unique":
                modifiers.append(_UniqueModifier())
            else:
                raise self._unexpected(
                    child,
                    "`modifier default`, `modifier primary`, `modifier reference`, or `modifier unique`",
                )

        return modifiers

    def _modifier_ref(self, node: Tree) -> _ReferenceModifier:
        children = _Children(node)
        table = self._ident(children, node)
        column = self._ident(children, node)

        delete, update = Action.NO_ACTION, Action.NO_ACTION
        child = children.next()
        if child is not None:
            if _category(child) != "ref_action":
                raise self._unexpected(child, "`modifier reference action(s)`")
            delete, update = self._ref_action(child)

        return _ReferenceModifier(table=table, column=column, delete=delete, update=update)

    def _ref_action(self, node: Tree) -> Tuple[Action, Action]:
        delete, update = Action.NO_ACTION, Action.NO_ACTION

        for child in _Children(node):
            category = _category(child)
            if category not in ("ref_action_delete", "ref_action_update"):
                raise self._unexpected(
                    child,
                    "`modifier reference action delete`, or `modifier reference action update`",
                )

            action = self._action(self._expect(_Children(child), child, "action", "`action`"))
            if category == "ref_action_delete":
                delete = action
            else:
                update = action

        return delete, update

    def _action(self, node: Node) -> Action:
        token = _leaf_text(node)
        try:
            return Action.parse(token)
        except InvalidAction:
            start, end = _span(node)
            valid = ", ".join(f"`{member.value}`" for member in Action)
            self.ctx.error(
                "Invalid referential action",
                Span(start=start, end=end),
                note=f"expected one of {valid}, found `{token}`",
            )
            raise


def build_schema(ctx: DiagnosticContext, tree: Node, source: str = "") -> Schema:
    """Build a Schema from a DAL parse tree.

    Args:
        ctx: Diagnostic accumulator for the file being parsed
        tree: Root of the parse tree (a `schema` node)
        source: Original source text, used for error span values

    Raises:
        UnexpectedPair, UnexpectedEOS, InvalidAction
    """
    return _SchemaBuilder(ctx, source).build(tree)
