"""Unit tests for the schema model, diagnostic records and DiagnosticContext."""

import pytest
from pydantic import ValidationError

from dalgen.ir.models import (
    Action,
    Column,
    ColumnDefault,
    EnumDecl,
    ForeignKey,
    Schema,
    ScalarType,
    TableDecl,
)
from dalgen.utils.dsl import (
    CompileResult,
    Diagnostic,
    DiagnosticContext,
    Label,
    LabelStyle,
    Severity,
    Span,
)


class TestSchemaModel:
    """Test the frozen schema models."""

    def test_column_defaults(self):
        column = Column(name="id", typ=ScalarType.TEXT)

        assert column.null is False
        assert column.default == ColumnDefault.NONE

    def test_foreign_key_actions_default_to_no_action(self):
        fk = ForeignKey(local="author", table="User", foreign="id")

        assert fk.delete == Action.NO_ACTION
        assert fk.update == Action.NO_ACTION

    def test_models_are_frozen(self):
        column = Column(name="id", typ=ScalarType.TEXT)

        with pytest.raises(ValidationError):
            column.name = "other"

    def test_schema_preserves_item_order(self, example_table):
        rating = EnumDecl(name="Rating", variants=("A", "B"))
        schema = Schema(items=(example_table, rating))

        assert schema.items == (example_table, rating)
        assert schema.tables == (example_table,)
        assert schema.enums == (rating,)

    def test_key_lists_are_not_validated(self):
        """Key lists may name columns that do not exist."""
        table = TableDecl(
            name="T",
            columns=(Column(name="a", typ=ScalarType.INT),),
            primary_keys=("missing",),
            foreign_keys=(ForeignKey(local="nope", table="Nowhere", foreign="x"),),
        )

        assert table.primary_keys == ("missing",)

    def test_equality(self, example_table):
        copy = TableDecl(**example_table.model_dump())

        assert copy == example_table


class TestDiagnosticContext:
    """Test the per-parse diagnostic accumulator."""

    def test_starts_empty(self):
        ctx = DiagnosticContext(file_id=3)

        assert len(ctx) == 0
        assert ctx.diagnostics() == ()
        assert not ctx.has_errors()

    def test_push_appends_in_order(self):
        ctx = DiagnosticContext(file_id=3)
        ctx.push(Severity.WARNING, "first", Span(start=0, end=1))
        ctx.error("second", Span.point(5), note="here")

        first, second = ctx.diagnostics()
        assert first.message == "first"
        assert first.severity == Severity.WARNING
        assert second.severity == Severity.ERROR
        assert second.labels == [Label(file_id=3, span=Span(start=5, end=5), note="here")]
        assert ctx.has_errors()

    def test_diagnostics_snapshot_is_immutable(self):
        ctx = DiagnosticContext()
        snapshot = ctx.diagnostics()
        ctx.error("later", Span.point(0))

        assert snapshot == ()
        assert len(ctx.diagnostics()) == 1

    def test_contexts_are_independent(self):
        a, b = DiagnosticContext(), DiagnosticContext()
        a.error("only in a", Span.point(0))

        assert len(a) == 1
        assert len(b) == 0


class TestDiagnosticModels:
    """Test Diagnostic and CompileResult records."""

    def test_primary_label_prefers_primary_style(self):
        secondary = Label(file_id=0, span=Span(start=0, end=1), style=LabelStyle.SECONDARY)
        primary = Label(file_id=0, span=Span(start=4, end=6))
        diagnostic = Diagnostic(severity=Severity.ERROR, message="m", labels=[secondary, primary])

        assert diagnostic.primary_label == primary

    def test_primary_label_none_without_labels(self):
        assert Diagnostic(severity=Severity.NOTE, message="m").primary_label is None

    def test_compile_result_summary(self):
        ok = CompileResult(success=True, format="sqlite", file_name="a.dal", item_count=2)
        checked = CompileResult(success=True, file_name="a.dal", item_count=1)
        failed = CompileResult(
            success=False,
            format="rust",
            file_name="b.dal",
            error={"success": False, "error": {"message": "Unexpected end of stream"}},
        )

        assert ok.get_summary() == "a.dal: 2 item(s) rendered as sqlite"
        assert checked.get_summary() == "a.dal: 1 item(s) parsed"
        assert failed.get_summary() == "b.dal: failed (0 diagnostic(s)): Unexpected end of stream"
