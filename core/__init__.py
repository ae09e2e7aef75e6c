"""Core utilities and configuration for report exports"""
from core.config import settings
from core.exceptions import ExportError, RenderError, ReportExportError, ValidationError
from core.logging import get_logger

__all__ = [
    "settings",
    "get_logger",
    "ReportExportError",
    "ValidationError",
    "RenderError",
    "ExportError",
]
