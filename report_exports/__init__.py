"""
Report Exports Module

Turns marketplace business data (revenue trends, orders, products, customers,
spending, vendors, dashboard overviews) into downloadable CSV, JSON or
print-quality PDF artifacts, reporting progress while it works.
"""

from .dispatcher import (
    ExportDispatcher,
    ProgressReporter,
    export_data,
    get_available_export_formats,
    validate_export_data,
)
from .interchange import deserialize, serialize
from .models import (
    Column,
    ColumnSpec,
    ExportArtifact,
    ExportFormat,
    GenerationProgress,
    Metric,
    ReportDataType,
    ReportDocument,
    Section,
    SectionKind,
    TableContent,
)
from .pdf_converter import PDFConverter, PDFOptions, PDFResult, html_to_pdf
from .print_renderer import PrintRenderer, RenderJob, RenderState
from .projector import column_spec, project
from .tabular_writer import TabularWriter, write_tabular
from .template_builder import ReportTemplateBuilder, build_report_document
from .template_engine import TemplateEngine

__version__ = "0.1.0"

__all__ = [
    # Models
    "ExportFormat",
    "ReportDataType",
    "SectionKind",
    "Column",
    "ColumnSpec",
    "Metric",
    "TableContent",
    "Section",
    "ReportDocument",
    "GenerationProgress",
    "ExportArtifact",
    # Dispatch
    "ExportDispatcher",
    "ProgressReporter",
    "export_data",
    "get_available_export_formats",
    "validate_export_data",
    # Projection and writers
    "column_spec",
    "project",
    "TabularWriter",
    "write_tabular",
    "serialize",
    "deserialize",
    # Documents
    "ReportTemplateBuilder",
    "build_report_document",
    "TemplateEngine",
    "PrintRenderer",
    "RenderJob",
    "RenderState",
    # PDF Conversion
    "PDFConverter",
    "PDFOptions",
    "PDFResult",
    "html_to_pdf",
]
