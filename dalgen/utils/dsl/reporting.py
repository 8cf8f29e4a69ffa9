"""Plain-text rendering of diagnostics with source snippets.

Output for one diagnostic:

    error: Unexpected token
     --> schema.dal:1:7
      |
    1 | table { }
      |       ^ expected `ident`, found `{`
      = note: ...

Offsets are string indices into the source as parsed.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .models import Diagnostic, Label, LabelStyle


def line_col(source: str, offset: int) -> Tuple[int, int]:
    """1-based (line, column) of `offset`, clamped to the source length."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def _line_text(source: str, line: int) -> str:
    lines = source.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1].rstrip("\r")
    return ""


def _render_label(label: Label, source: str, gutter: int) -> List[str]:
    line, column = line_col(source, label.span.start)
    text = _line_text(source, line)

    # Underline stops at the end of the first line of the span.
    line_end = len(text) + 1
    end_line, end_column = line_col(source, label.span.end)
    last_column = end_column if end_line == line else line_end
    width = max(1, last_column - column)

    marker = "^" if label.style == LabelStyle.PRIMARY else "-"
    underline = " " * (column - 1) + marker * width
    if label.note:
        underline = f"{underline} {label.note}"

    pad = " " * gutter
    return [
        f"{pad} |",
        f"{str(line).rjust(gutter)} | {text}",
        f"{pad} | {underline}",
    ]


def render_diagnostic(diagnostic: Diagnostic, source: str, file_name: str) -> str:
    labels = diagnostic.labels
    gutter = max(
        (len(str(line_col(source, label.span.start)[0])) for label in labels),
        default=1,
    )
    pad = " " * gutter

    out = [f"{diagnostic.severity.value}: {diagnostic.message}"]
    primary = diagnostic.primary_label
    if primary is not None:
        line, column = line_col(source, primary.span.start)
        out.append(f"{pad}--> {file_name}:{line}:{column}")

    for label in labels:
        out.extend(_render_label(label, source, gutter))

    for note in diagnostic.notes:
        out.append(f"{pad} = note: {note}")

    return "\n".join(out)


def render_diagnostics(diagnostics: Sequence[Diagnostic], source: str, file_name: str) -> str:
    """Render every diagnostic, separated by blank lines."""
    return "\n\n".join(render_diagnostic(d, source, file_name) for d in diagnostics)
