"""
Tests for export metrics collection
"""
import pytest

from core.metrics import REGISTRY, MetricsCollector, get_metrics_collector, get_metrics_response

pytestmark = pytest.mark.unit


def sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetricsCollector:
    def test_track_export_success(self):
        collector = MetricsCollector()
        collector.enabled = True
        before = sample("report_exports_total", format="tabular", data_type="orders", status="success")

        collector.track_export("tabular", "orders", 0.2, success=True, size=512)

        after = sample("report_exports_total", format="tabular", data_type="orders", status="success")
        assert after == before + 1

    def test_track_error(self):
        collector = MetricsCollector()
        collector.enabled = True
        before = sample("report_export_errors_total", error_type="RENDER_ERROR", format="document")

        collector.track_error("RENDER_ERROR", "document")

        assert sample("report_export_errors_total", error_type="RENDER_ERROR", format="document") == before + 1

    def test_disabled_collector_records_nothing(self):
        collector = MetricsCollector()
        collector.enabled = False
        before = sample("report_exports_total", format="document", data_type="vendors", status="failed")

        collector.track_export("document", "vendors", 1.0, success=False)

        assert sample("report_exports_total", format="document", data_type="vendors", status="failed") == before

    def test_metrics_response(self):
        body, content_type = get_metrics_response()

        assert b"report_exports_total" in body
        assert content_type.startswith("text/plain")
        assert get_metrics_collector() is get_metrics_collector()
