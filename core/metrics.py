"""
Core metrics collection for report exports using Prometheus
"""
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, Info, generate_latest

from core.config import settings
from core.logging import get_logger

# Create a global registry for the application
REGISTRY = CollectorRegistry()

# Application info
app_info = Info("report_exports_app", "Report export engine information", registry=REGISTRY)

# Export metrics
exports_total = Counter(
    "report_exports_total",
    "Total export calls",
    ["format", "data_type", "status"],
    registry=REGISTRY,
)

export_duration = Histogram(
    "report_export_duration_seconds",
    "Export call duration in seconds",
    ["format"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)

artifact_size = Histogram(
    "report_export_artifact_bytes",
    "Size of produced export artifacts",
    ["format"],
    buckets=(1e3, 1e4, 1e5, 5e5, 1e6, 5e6, 1e7),
    registry=REGISTRY,
)

# Error metrics
error_count = Counter(
    "report_export_errors_total",
    "Total number of export errors",
    ["error_type", "format"],
    registry=REGISTRY,
)


class MetricsCollector:
    """Helper class for collecting metrics"""

    def __init__(self):
        self.logger = get_logger(__name__, domain="metrics")
        self.enabled = settings.prometheus_enabled
        app_info.info({"name": settings.app_name, "version": settings.app_version})

    def track_export(
        self,
        export_format: str,
        data_type: str,
        duration: float,
        success: bool = True,
        size: int = 0,
    ):
        """Record the outcome of one export call"""
        if not self.enabled:
            return
        status = "success" if success else "failed"
        exports_total.labels(format=export_format, data_type=data_type, status=status).inc()
        export_duration.labels(format=export_format).observe(duration)
        if success:
            artifact_size.labels(format=export_format).observe(size)

    def track_error(self, error_type: str, export_format: str):
        if not self.enabled:
            return
        error_count.labels(error_type=error_type, format=export_format).inc()

    def get_metrics(self) -> bytes:
        """Get current metrics in Prometheus format"""
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance"""
    return metrics


def get_metrics_response() -> tuple[bytes, str]:
    """Get metrics response for a Prometheus scrape"""
    return metrics.get_metrics(), CONTENT_TYPE_LATEST
