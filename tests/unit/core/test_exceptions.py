"""
Tests for the export exception hierarchy
"""
import pytest

from core.exceptions import ExportError, RenderError, ReportExportError, ValidationError

pytestmark = pytest.mark.unit


class TestReportExportError:
    def test_defaults(self):
        error = ReportExportError("Something broke")

        assert str(error) == "Something broke"
        assert error.error_code == "ReportExportError"
        assert error.details == {}

    def test_add_context_keeps_existing_details(self):
        error = ReportExportError("x", details={"format": "pdf"})

        returned = error.add_context(format="tabular", data_type="orders")

        assert returned is error
        assert error.details == {"format": "pdf", "data_type": "orders"}

    def test_to_dict(self):
        error = ValidationError("No data provided for export", field="payload")

        assert error.to_dict() == {
            "error": "VALIDATION_ERROR",
            "message": "No data provided for export",
            "details": {"field": "payload"},
        }


class TestSubclasses:
    def test_all_share_base(self):
        for error in (ValidationError("a"), RenderError("b"), ExportError("c")):
            assert isinstance(error, ReportExportError)

    def test_render_error_is_retryable(self):
        error = RenderError("Playwright not available", stage="rendering")

        assert error.retryable is True
        assert error.error_code == "RENDER_ERROR"
        assert error.details == {"stage": "rendering"}

    def test_validation_error_without_field(self):
        assert ValidationError("bad").details == {}

    def test_export_error_context(self):
        error = ExportError("disk full", export_format="tabular", data_type="orders")

        assert error.error_code == "EXPORT_ERROR"
        assert error.details == {"format": "tabular", "data_type": "orders"}
