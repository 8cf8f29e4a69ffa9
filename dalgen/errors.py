"""Error taxonomy for parsing and rendering DAL schemas.

Parse errors:
- UnexpectedEOS: a required node was missing (input ended early)
- UnexpectedPair: a node of the wrong grammar category was found
- InvalidAction: a referential action phrase is not recognised
- GrammarError: the grammar engine could not lex the input

Render errors:
- InvalidFormat: an unknown output format selector

Sink failures are not wrapped: whatever the sink raises (usually OSError)
reaches the caller unchanged.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorSpan(BaseModel):
    """The offending source text and its half-open byte range."""

    value: str = Field(description="Source text covered by the span")
    start: int = Field(description="Start byte offset (inclusive)")
    end: int = Field(description="End byte offset (exclusive)")

    model_config = ConfigDict(frozen=True)


class DALError(Exception):
    """Base class for every error raised by dalgen."""


class ParseError(DALError):
    """Fatal error while turning source text into a Schema."""


class UnexpectedEOS(ParseError):
    def __init__(self) -> None:
        super().__init__("Unexpected end of stream")


class UnexpectedPair(ParseError):
    def __init__(self, span: ErrorSpan):
        self.span = span
        super().__init__(
            f"Unexpected pair in stream: `{span.value}` at {span.start}..{span.end}"
        )


class InvalidAction(ParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"`{token}` is not a valid action")


class GrammarError(ParseError):
    """Raised when the grammar engine rejects the input outright (e.g. an unlexable character)."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        found: Optional[str] = None,
        expected: Optional[List[str]] = None,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.found = found
        self.expected = expected
        super().__init__(self.format_message())

    def format_message(self) -> str:
        parts = [f"Parse error: {self.message}"]
        if self.line is not None and self.column is not None:
            parts.append(f"Location: line {self.line}, column {self.column}")
        if self.found:
            parts.append(f"Found: {self.found!r}")
        if self.expected:
            parts.append(f"Expected one of: {', '.join(self.expected)}")
        return "\n".join(parts)


class RenderError(DALError):
    """Rendering failed for a reason other than the output sink."""


class InvalidFormat(RenderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"`{name}` is not a valid format type")
