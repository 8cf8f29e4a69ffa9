"""Tests for the compile pipeline and diagnostic reporting."""

import pytest

from dalgen.errors import InvalidFormat
from dalgen.generators import FormatType, RustOptions
from dalgen.utils.dsl import (
    Diagnostic,
    Label,
    Severity,
    Span,
    check_source,
    compile_file,
    compile_source,
    line_col,
    render_diagnostics,
)


class TestCompileSource:
    def test_success(self):
        result = compile_source("table T { id int [primary key] }", "sqlite")

        assert result.success is True
        assert result.format == "sqlite"
        assert result.file_name == "<inline>"
        assert result.item_count == 1
        assert result.error is None
        assert result.output == "CREATE TABLE T (\n  id INTEGER NOT NULL,\n  PRIMARY KEY (id)\n);\n"

    def test_accepts_format_type(self):
        result = compile_source("enum E { A }", FormatType.POSTGRESQL)

        assert result.format == "postgresql"
        assert result.output.startswith("CREATE TYPE E AS ENUM (")

    def test_rust_options_forwarded(self):
        result = compile_source("table T { id int }", "rust", options=RustOptions(serde=True))

        assert "serde::Serialize" in result.output

    def test_parse_failure(self):
        result = compile_source("table { }", "postgres", file_name="bad.dal")

        assert result.success is False
        assert result.output is None
        assert len(result.diagnostics) == 1
        error = result.error["error"]
        assert result.error["success"] is False
        assert error["type"] == "UnexpectedPair"
        assert error["stage"] == "parse"
        assert error["file_name"] == "bad.dal"
        assert error["format"] == "postgres"
        assert error["span"] == {"value": "{", "start": 6, "end": 7}
        assert error["diagnostics"][0]["message"] == "Unexpected token"

    def test_invalid_format_is_raised_before_parsing(self):
        with pytest.raises(InvalidFormat):
            compile_source("this is not a schema", "oracle")

    def test_blog_schema_all_formats(self, blog_source):
        for fmt in ("mysql", "postgres", "sqlite", "rust"):
            result = compile_source(blog_source, fmt)
            assert result.success, result.get_summary()
            assert result.item_count == 3


class TestCheckAndFile:
    def test_check_source(self, blog_source):
        result = check_source(blog_source, file_name="blog.dal")

        assert result.success is True
        assert result.format is None
        assert result.output is None
        assert result.item_count == 3

    def test_check_source_failure(self):
        result = check_source("table Foo {")

        assert result.success is False
        assert result.error["error"]["type"] == "UnexpectedEOS"

    def test_compile_file(self, tmp_path):
        path = tmp_path / "schema.dal"
        path.write_text("table T { id int [primary key] }", encoding="utf-8")

        result = compile_file(path, "mysql")

        assert result.success is True
        assert result.file_name == str(path)
        assert "  id INT NOT NULL," in result.output

    def test_compile_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            compile_file(tmp_path / "missing.dal", "sqlite")


class TestReporting:
    @pytest.mark.parametrize(
        "offset,expected",
        [
            (0, (1, 1)),
            (2, (1, 3)),
            (3, (2, 1)),
            (5, (2, 3)),
            (100, (2, 3)),
        ],
    )
    def test_line_col(self, offset, expected):
        assert line_col("ab\ncd", offset) == expected

    def test_single_diagnostic(self):
        diagnostic = Diagnostic(
            severity=Severity.ERROR,
            message="Unexpected token",
            labels=[Label(file_id=0, span=Span(start=6, end=7), note="expected ident, found `{`")],
        )

        text = render_diagnostics([diagnostic], "table { }", "schema.dal")

        assert text == (
            "error: Unexpected token\n"
            " --> schema.dal:1:7\n"
            "  |\n"
            "1 | table { }\n"
            "  |       ^ expected ident, found `{`"
        )

    def test_multi_character_span_and_notes(self):
        source = "table T {\n  a text [ref: B.c (delete: explode)]\n}"
        start = source.index("explode")
        diagnostic = Diagnostic(
            severity=Severity.ERROR,
            message="Invalid referential action",
            labels=[Label(file_id=0, span=Span(start=start, end=start + 7))],
            notes=["see the docs"],
        )

        lines = render_diagnostics([diagnostic], source, "s.dal").split("\n")

        assert lines[1] == f" --> s.dal:2:{start - source.index(chr(10))}"
        assert lines[3] == "2 |   a text [ref: B.c (delete: explode)]"
        assert lines[4].endswith("^^^^^^^")
        assert lines[5] == "  = note: see the docs"

    def test_end_of_input_label(self):
        source = "table Foo {"
        result = check_source(source, file_name="eof.dal")

        text = render_diagnostics(result.diagnostics, source, "eof.dal")

        assert " --> eof.dal:1:12" in text
        assert text.endswith("            ^ here")

    def test_diagnostics_separated_by_blank_line(self):
        diagnostic = Diagnostic(
            severity=Severity.WARNING,
            message="w",
            labels=[Label(file_id=0, span=Span.point(0))],
        )

        text = render_diagnostics([diagnostic, diagnostic], "x", "f")

        assert text.count("warning: w") == 2
        assert "\n\nwarning: w" in text
