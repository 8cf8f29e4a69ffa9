"""Parser for DAL schemas using Lark.

Two stages:
- parse_tree(): source text -> Lark parse tree (grammar engine)
- parse():      parse_tree() + build_schema() -> Schema

Grammar-engine failures are reported through the DiagnosticContext and
raised as the same errors the tree builder uses, so callers only deal with
one error taxonomy:

- unexpected token       -> UnexpectedPair
- input ended too early  -> UnexpectedEOS
- unlexable character    -> GrammarError
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from lark import Lark, Token, Tree, UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from dalgen.errors import ErrorSpan, GrammarError, UnexpectedEOS, UnexpectedPair
from dalgen.ir.models import Schema
from dalgen.utils.logging import get_logger

from .builder import build_schema
from .context import DiagnosticContext
from .grammar import DAL_GRAMMAR
from .models import Span

logger = get_logger(__name__)

_PARSER: Optional[Lark] = None


def _get_parser() -> Lark:
    # Built once; the grammar is fixed.
    global _PARSER
    if _PARSER is None:
        _PARSER = Lark(
            DAL_GRAMMAR,
            parser="lalr",
            lexer="contextual",
            start="schema",
            propagate_positions=True,
            maybe_placeholders=False,
        )
    return _PARSER


def _describe_terminals(names: Iterable[str]) -> List[str]:
    """Turn terminal names into what a schema author would type."""
    parser = _get_parser()
    described = set()
    for name in names:
        if name == "$END":
            described.add("end of input")
            continue
        try:
            terminal = parser.get_terminal(name)
        except KeyError:
            described.add(name)
            continue
        if terminal.pattern.type == "str":
            described.add(f"`{terminal.pattern.value}`")
        else:
            described.add(name.lower().replace("_", " "))
    return sorted(described)


def parse_tree(ctx: DiagnosticContext, source: str) -> Tree:
    """Run the grammar engine over `source`.

    Raises:
        UnexpectedPair: a token appeared where the grammar does not allow it
        UnexpectedEOS: the input ended in the middle of a declaration
        GrammarError: the input contains text no terminal can match
    """
    try:
        return _get_parser().parse(source)
    except UnexpectedToken as e:
        token: Token = e.token
        expected = _describe_terminals(e.expected or e.accepts or ())
        if token.type == "$END":
            logger.debug(f"Grammar engine hit end of input; expected {expected}")
            ctx.error("Unexpected end of stream", Span.point(len(source)), note="here")
            raise UnexpectedEOS() from e

        start = token.start_pos if token.start_pos is not None else 0
        end = token.end_pos if token.end_pos is not None else start + len(token.value)
        logger.debug(f"Grammar engine rejected {token.value!r} at {start}; expected {expected}")
        ctx.error(
            "Unexpected token",
            Span(start=start, end=end),
            note=f"expected {', '.join(expected)}, found `{token.value}`",
        )
        raise UnexpectedPair(ErrorSpan(value=str(token.value), start=start, end=end)) from e
    except UnexpectedEOF as e:
        ctx.error("Unexpected end of stream", Span.point(len(source)), note="here")
        raise UnexpectedEOS() from e
    except UnexpectedCharacters as e:
        pos = e.pos_in_stream
        found = source[pos] if 0 <= pos < len(source) else None
        expected = _describe_terminals(e.allowed or ())
        logger.debug(f"Grammar engine could not lex {found!r} at {pos}")
        ctx.error(
            "Unexpected character",
            Span(start=pos, end=min(pos + 1, len(source))),
            note=f"expected {', '.join(expected)}" if expected else "",
        )
        raise GrammarError(
            "Unexpected character",
            line=e.line,
            column=e.column,
            found=found,
            expected=expected or None,
        ) from e


def parse(ctx: DiagnosticContext, source: str) -> Schema:
    """Parse DAL source text into a Schema.

    Every diagnostic observed before a failure is left in `ctx`; no partial
    Schema is ever returned.
    """
    tree = parse_tree(ctx, source)
    return build_schema(ctx, tree, source)
