"""Pydantic models for diagnostics and compile results.

Diagnostics are structured records only. Turning them into terminal text is
done separately (see reporting.py) so that any span-aware renderer can
consume them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Diagnostics
# ============================================================================

class Severity(str, Enum):
    """Severity levels for diagnostics (highest first)."""
    BUG = "bug"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"


class Span(BaseModel):
    """Half-open byte range into the source text."""

    start: int = Field(description="Start byte offset (inclusive)")
    end: int = Field(description="End byte offset (exclusive)")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def point(cls, offset: int) -> Span:
        """Zero-width span at `offset`."""
        return cls(start=offset, end=offset)


class LabelStyle(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class Label(BaseModel):
    """A span inside one file with an optional note attached to it."""

    file_id: int = Field(description="Identifier of the file the span points into")
    span: Span = Field(description="Byte range the label covers")
    note: str = Field("", description="Short message shown next to the span")
    style: LabelStyle = Field(LabelStyle.PRIMARY, description="Primary or secondary label")

    model_config = ConfigDict(frozen=True)


class Diagnostic(BaseModel):
    """A single span-located problem found while parsing."""

    severity: Severity = Field(description="Severity of the diagnostic")
    message: str = Field(description="Headline message")
    labels: List[Label] = Field(default_factory=list, description="Source locations involved")
    notes: List[str] = Field(default_factory=list, description="Additional free-form notes")

    @property
    def primary_label(self) -> Optional[Label]:
        for label in self.labels:
            if label.style == LabelStyle.PRIMARY:
                return label
        return self.labels[0] if self.labels else None


# ============================================================================
# Pipeline Models
# ============================================================================

class CompileResult(BaseModel):
    """Result of parsing a source and rendering it into one output format."""

    success: bool = Field(description="Whether parsing and rendering succeeded")
    format: Optional[str] = Field(None, description="Output format selector that was requested (None for a syntax check)")
    file_name: str = Field(description="Name used for the source in diagnostics")
    output: Optional[str] = Field(None, description="Rendered text (only if successful)")
    error: Optional[Dict[str, Any]] = Field(None, description="Error response if compilation failed")
    diagnostics: List[Diagnostic] = Field(default_factory=list, description="Diagnostics collected while parsing")
    item_count: int = Field(0, description="Number of declarations in the parsed schema")
    timestamp: datetime = Field(default_factory=datetime.now, description="When compilation was performed")

    def get_summary(self) -> str:
        """Human-readable one-line summary."""
        if self.success and self.format is None:
            return f"{self.file_name}: {self.item_count} item(s) parsed"
        if self.success:
            return f"{self.file_name}: {self.item_count} item(s) rendered as {self.format}"
        message = (self.error or {}).get("error", {}).get("message", "unknown error")
        return f"{self.file_name}: failed ({len(self.diagnostics)} diagnostic(s)): {message}"
