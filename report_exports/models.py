"""
Report Exports Models

Data structures shared by the export engine: the closed set of output formats
and business data types, the column specifications used for projection, the
composed report document and the final downloadable artifact.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

# Orders shown in a document before the list is truncated with a footnote
MAX_DOCUMENT_ORDERS = 50

# Placeholder for optional fields the source record does not provide
NOT_AVAILABLE = "N/A"

# Status used for customers and vendors without an explicit one
DEFAULT_STATUS = "active"


class ExportFormat(Enum):
    """Output format enumeration"""

    TABULAR = "tabular"
    INTERCHANGE = "interchange"
    DOCUMENT = "document"

    @classmethod
    def parse(cls, value: Union[str, "ExportFormat", None]) -> Optional["ExportFormat"]:
        """Resolve a format name or file-extension alias, None when unsupported"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _FORMAT_ALIASES.get(value.strip().lower())

    @property
    def extension(self) -> str:
        return _FORMAT_DETAILS[self]["extension"]

    @property
    def media_type(self) -> str:
        return _FORMAT_DETAILS[self]["media_type"]

    @property
    def label(self) -> str:
        return _FORMAT_DETAILS[self]["label"]

    @property
    def description(self) -> str:
        return _FORMAT_DETAILS[self]["description"]


_FORMAT_DETAILS: Dict[ExportFormat, Dict[str, str]] = {
    ExportFormat.TABULAR: {
        "extension": "csv",
        "media_type": "text/csv;charset=utf-8",
        "label": "CSV",
        "description": "Comma-separated values for spreadsheets",
    },
    ExportFormat.INTERCHANGE: {
        "extension": "json",
        "media_type": "application/json;charset=utf-8",
        "label": "JSON",
        "description": "JavaScript Object Notation for data backup",
    },
    ExportFormat.DOCUMENT: {
        "extension": "pdf",
        "media_type": "application/pdf",
        "label": "PDF",
        "description": "Portable Document Format for reports",
    },
}

_FORMAT_ALIASES: Dict[str, ExportFormat] = {
    "tabular": ExportFormat.TABULAR,
    "csv": ExportFormat.TABULAR,
    "interchange": ExportFormat.INTERCHANGE,
    "json": ExportFormat.INTERCHANGE,
    "document": ExportFormat.DOCUMENT,
    "pdf": ExportFormat.DOCUMENT,
}


class ReportDataType(Enum):
    """Business data type enumeration"""

    OVERVIEW = "overview"
    REVENUE = "revenue"
    ORDERS = "orders"
    PRODUCTS = "products"
    CUSTOMERS = "customers"
    SPENDING = "spending"
    VENDORS = "vendors"
    GENERIC = "generic"

    @classmethod
    def parse(cls, value: Union[str, "ReportDataType", None]) -> "ReportDataType":
        """Resolve a data type name; unknown names fall back to GENERIC"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.GENERIC
        name = value.strip().lower()
        if name == "listings":
            return cls.PRODUCTS
        try:
            return cls(name)
        except ValueError:
            return cls.GENERIC

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class SectionKind(Enum):
    """Kinds of blocks a report document is composed of"""

    HEADER = "header"
    TABLE = "table"
    METRIC_GRID = "metric_grid"
    RAW_DUMP = "raw_dump"
    NOTE = "note"
    FOOTER = "footer"


@dataclass(frozen=True)
class Column:
    """One output column: record key and human-readable label"""

    key: str
    label: str


@dataclass(frozen=True)
class ColumnSpec:
    """Ordered columns a data type projects to"""

    columns: Tuple[Column, ...]

    @property
    def keys(self) -> List[str]:
        return [column.key for column in self.columns]

    @property
    def labels(self) -> List[str]:
        return [column.label for column in self.columns]

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class Metric:
    """Labelled value shown in a metric grid or header"""

    label: str
    value: str


@dataclass
class TableContent:
    """Column labels plus already-formatted cell rows"""

    columns: List[str]
    rows: List[List[str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass
class Section:
    """One block of a report document"""

    heading: str
    kind: SectionKind
    content: Union[TableContent, List[Metric], List[str], str]

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.content, TableContent):
            content: Any = {"columns": self.content.columns, "rows": self.content.rows}
        elif isinstance(self.content, list) and self.content and isinstance(self.content[0], Metric):
            content = [{"label": m.label, "value": m.value} for m in self.content]
        else:
            content = self.content
        return {"heading": self.heading, "kind": self.kind.value, "content": content}


@dataclass
class ReportDocument:
    """Composed, renderer-independent description of a printable report"""

    title: str
    generated_at: datetime
    metadata: Dict[str, Any]
    sections: List[Section] = field(default_factory=list)

    def sections_of(self, kind: SectionKind) -> List[Section]:
        return [section for section in self.sections if section.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "title": self.title,
            "generated_at": self.generated_at.isoformat(),
            "metadata": self.metadata,
            "sections": [section.to_dict() for section in self.sections],
        }


@dataclass(frozen=True)
class GenerationProgress:
    """Progress milestone emitted during one export call"""

    percent: int
    message: str

    def __post_init__(self):
        if not 0 <= self.percent <= 100:
            raise ValueError(f"Progress percent must be within 0-100, got {self.percent}")


def build_filename(role: str, data_type: ReportDataType, export_format: ExportFormat, generated_at: datetime) -> str:
    """Suggested download name: {role}_{type}_{YYYY-MM-DD}.{ext}"""
    return f"{role}_{data_type.value}_{generated_at.date().isoformat()}.{export_format.extension}"


@dataclass
class ExportArtifact:
    """Finished export payload handed to the caller"""

    content: bytes
    filename: str
    media_type: str
    export_format: ExportFormat
    data_type: ReportDataType
    generated_at: datetime

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def text(self) -> str:
        """Decoded content for the text formats"""
        if self.export_format == ExportFormat.DOCUMENT:
            raise TypeError("Document artifacts are binary")
        return self.content.decode("utf-8")

    def to_dict(self) -> Dict[str, Any]:
        """Artifact metadata without the payload bytes"""
        return {
            "filename": self.filename,
            "media_type": self.media_type,
            "format": self.export_format.value,
            "data_type": self.data_type.value,
            "generated_at": self.generated_at.isoformat(),
            "size": self.size,
        }
