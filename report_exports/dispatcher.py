"""
Export Dispatcher

Public entry point of the export engine. Validates the requested
(payload, format, data type) combination, routes it to the tabular writer,
the interchange serializer or the template builder and print renderer, and
reports progress through fixed milestones:

    0    preparing
    25   validating
    50   generating
    100  completed

On failure the last milestone is (0, "Export failed: <cause>") and no
artifact is returned.
"""

import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from core.exceptions import ExportError, ReportExportError, ValidationError
from core.logging import get_logger
from core.metrics import MetricsCollector, get_metrics_collector

from .interchange import serialize
from .models import ExportArtifact, ExportFormat, GenerationProgress, ReportDataType, build_filename
from .print_renderer import PrintRenderer
from .projector import columns_for, project, validate_shape
from .tabular_writer import TabularWriter
from .template_builder import ReportTemplateBuilder, validate_document_payload

logger = get_logger(__name__, domain="report_exports")

ProgressCallback = Callable[[int, str], Any]
DeliveryCallback = Callable[[ExportArtifact], Any]


class ProgressReporter:
    """Emits monotonic progress milestones; callback failures never reach the export"""

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.history: List[GenerationProgress] = []

    @property
    def percent(self) -> int:
        return self.history[-1].percent if self.history else 0

    def emit(self, percent: int, message: str) -> None:
        if self.history and percent < self.percent:
            raise ValueError(f"Progress cannot go back from {self.percent} to {percent}")
        self._publish(GenerationProgress(percent, message))

    def fail(self, message: str) -> None:
        self._publish(GenerationProgress(0, f"Export failed: {message}"))

    def _publish(self, progress: GenerationProgress) -> None:
        self.history.append(progress)
        if self.callback is None:
            return
        try:
            self.callback(progress.percent, progress.message)
        except Exception as e:
            logger.warning(f"Progress callback failed at {progress.percent}%: {e}")


def _is_empty(payload: Any) -> bool:
    if payload is None:
        return True
    try:
        return len(payload) == 0
    except TypeError:
        return False


def validate_export_data(payload: Any, export_format: Union[str, ExportFormat, None]) -> ExportFormat:
    """
    Validate that a payload is present and the format is supported

    Returns:
        The resolved ExportFormat

    Raises:
        ValidationError: If the payload is missing/empty or the format unsupported
    """
    if _is_empty(payload):
        raise ValidationError("No data provided for export", field="payload")

    resolved = ExportFormat.parse(export_format)
    if resolved is None:
        raise ValidationError(f"Unsupported export format: {export_format}", field="format")
    return resolved


def get_available_export_formats() -> List[Dict[str, str]]:
    """Catalog of supported export formats"""
    return [
        {
            "value": export_format.extension,
            "label": export_format.label,
            "description": export_format.description,
            "extension": export_format.extension,
            "media_type": export_format.media_type,
        }
        for export_format in ExportFormat
    ]


class ExportDispatcher:
    """Routes export requests to the writer, serializer or renderer"""

    def __init__(
        self,
        writer: Optional[TabularWriter] = None,
        template_builder: Optional[ReportTemplateBuilder] = None,
        renderer: Optional[PrintRenderer] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.writer = writer or TabularWriter()
        self.template_builder = template_builder or ReportTemplateBuilder()
        self.renderer = renderer
        self.metrics = metrics or get_metrics_collector()

    def _get_renderer(self) -> PrintRenderer:
        if self.renderer is None:
            self.renderer = PrintRenderer()
        return self.renderer

    def _validate_payload(self, payload: Any, export_format: ExportFormat, data_type: ReportDataType) -> None:
        if export_format == ExportFormat.TABULAR:
            if data_type == ReportDataType.GENERIC:
                raise ValidationError(
                    "Tabular export is not supported for generic data",
                    field="data_type",
                )
            validate_shape(data_type, payload)
        elif export_format == ExportFormat.DOCUMENT:
            validate_document_payload(data_type, payload)

    def _text_artifact(
        self,
        text: str,
        role: str,
        export_format: ExportFormat,
        data_type: ReportDataType,
        generated_at: datetime,
    ) -> ExportArtifact:
        return ExportArtifact(
            content=text.encode("utf-8"),
            filename=build_filename(role, data_type, export_format, generated_at),
            media_type=export_format.media_type,
            export_format=export_format,
            data_type=data_type,
            generated_at=generated_at,
        )

    async def _generate(
        self,
        payload: Any,
        export_format: ExportFormat,
        data_type: ReportDataType,
        role: str,
        progress: ProgressReporter,
    ) -> ExportArtifact:
        generated_at = datetime.now(timezone.utc)
        label = export_format.label

        if export_format == ExportFormat.TABULAR:
            records = project(data_type, payload)
            keys = columns_for(data_type, records)
            progress.emit(50, f"Generating {label}...")
            text = self.writer.write(keys, records)
            return self._text_artifact(text, role, export_format, data_type, generated_at)

        if export_format == ExportFormat.INTERCHANGE:
            progress.emit(50, f"Generating {label}...")
            text = serialize(payload)
            return self._text_artifact(text, role, export_format, data_type, generated_at)

        if export_format == ExportFormat.DOCUMENT:
            document = self.template_builder.build(data_type, payload, role=role, generated_at=generated_at)
            progress.emit(50, f"Generating {label}...")
            return await self._get_renderer().render(document)

        raise ValidationError(f"Unsupported export format: {export_format}", field="format")

    async def export(
        self,
        payload: Any,
        export_format: Union[str, ExportFormat],
        data_type: Union[str, ReportDataType, None],
        filename_hint: str,
        on_progress: Optional[ProgressCallback] = None,
        deliver: Optional[DeliveryCallback] = None,
    ) -> ExportArtifact:
        """
        Export business data as a downloadable artifact

        Args:
            payload: Aggregate object or sequence of records; never mutated
            export_format: "tabular"/"csv", "interchange"/"json" or "document"/"pdf"
            data_type: Business data type; unknown names are treated as generic
            filename_hint: Role of the requesting user, used in the filename
            on_progress: Optional (percent, message) callback
            deliver: Optional delivery collaborator, called once on success

        Returns:
            ExportArtifact

        Raises:
            ValidationError: Missing payload, unsupported format or shape mismatch
            RenderError: Document rendering dependency unavailable or failed
            ExportError: Any other failure, with format and data type attached
        """
        start_time = time.monotonic()
        progress = ProgressReporter(on_progress)
        resolved_type = ReportDataType.parse(data_type)
        role = filename_hint or "user"
        format_name = export_format.value if isinstance(export_format, ExportFormat) else str(export_format)

        logger.info(
            f"Starting {format_name} export of {resolved_type.value} data",
            extra={"format": format_name, "data_type": resolved_type.value},
        )

        try:
            progress.emit(0, "Preparing data...")
            resolved_format = validate_export_data(payload, export_format)
            format_name = resolved_format.value

            progress.emit(25, "Validating data...")
            self._validate_payload(payload, resolved_format, resolved_type)

            artifact = await self._generate(payload, resolved_format, resolved_type, role, progress)

            if deliver is not None:
                deliver(artifact)

            progress.emit(100, f"{resolved_format.label} export completed")
        except ReportExportError as e:
            e.add_context(format=format_name, data_type=resolved_type.value)
            self._record_failure(e, format_name, resolved_type, progress, start_time)
            raise
        except Exception as e:
            wrapped = ExportError(str(e), export_format=format_name, data_type=resolved_type.value)
            self._record_failure(wrapped, format_name, resolved_type, progress, start_time)
            raise wrapped from e

        duration = time.monotonic() - start_time
        self.metrics.track_export(format_name, resolved_type.value, duration, success=True, size=artifact.size)
        logger.info(
            f"Export completed: {artifact.filename} ({artifact.size} bytes) in {duration * 1000:.1f}ms",
            extra={"format": format_name, "data_type": resolved_type.value, "size": artifact.size},
        )
        return artifact

    def _record_failure(
        self,
        error: ReportExportError,
        format_name: str,
        data_type: ReportDataType,
        progress: ProgressReporter,
        start_time: float,
    ) -> None:
        progress.fail(error.message)
        self.metrics.track_error(error.error_code, format_name)
        self.metrics.track_export(format_name, data_type.value, time.monotonic() - start_time, success=False)
        logger.error(
            f"Export failed: {error.message}",
            extra={
                "format": format_name,
                "data_type": data_type.value,
                "error_code": error.error_code,
                "details": error.details,
            },
        )


async def export_data(
    payload: Any,
    export_format: Union[str, ExportFormat],
    data_type: Union[str, ReportDataType, None],
    filename_hint: str,
    on_progress: Optional[ProgressCallback] = None,
    deliver: Optional[DeliveryCallback] = None,
) -> ExportArtifact:
    """Convenience function using a default dispatcher"""
    return await ExportDispatcher().export(
        payload,
        export_format,
        data_type,
        filename_hint,
        on_progress=on_progress,
        deliver=deliver,
    )
