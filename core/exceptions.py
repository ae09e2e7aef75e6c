"""
Custom exceptions for report exports
Provides structured error handling across the export engine
"""
from typing import Any, Dict, Optional


class ReportExportError(Exception):
    """Base exception for all report export errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def add_context(self, **context) -> "ReportExportError":
        """Merge export context (format, data type, ...) into details"""
        for key, value in context.items():
            self.details.setdefault(key, value)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for callers and logs"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(ReportExportError):
    """Raised when the export request or payload fails validation"""

    def __init__(self, message: str, field: Optional[str] = None, **details):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **details} if field else details,
        )


class RenderError(ReportExportError):
    """Raised when the document rendering dependency is unavailable or fails"""

    retryable = True

    def __init__(self, message: str, stage: Optional[str] = None, **details):
        super().__init__(
            message=message,
            error_code="RENDER_ERROR",
            details={"stage": stage, **details} if stage else details,
        )


class ExportError(ReportExportError):
    """Wraps an unexpected failure with the export context it happened in"""

    def __init__(
        self,
        message: str,
        export_format: Optional[str] = None,
        data_type: Optional[str] = None,
        **details,
    ):
        super().__init__(
            message=message,
            error_code="EXPORT_ERROR",
            details={"format": export_format, "data_type": data_type, **details},
        )
