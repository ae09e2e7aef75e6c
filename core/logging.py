"""
Structured logging configuration
Supports both JSON and text formats for different environments

Logging is configured by the entry point (``report-export``), never on import,
so embedding the export engine leaves the host's handlers in place.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from core.config import settings

HANDLER_NAME = "report_exports.console"

# Keys passed through ``extra=`` that describe the export being logged
EXPORT_CONTEXT_FIELDS = ("domain", "format", "data_type", "size", "error_code")

# Libraries that are chatty at INFO while a document renders
QUIET_LOGGERS = ("asyncio", "playwright")


def export_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Export context attached to a log record, in a stable order"""
    context = {}
    for field in EXPORT_CONTEXT_FIELDS:
        value = getattr(record, field, None)
        if value is not None:
            context[field] = value
    return context


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding app, environment and export context fields"""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["app"] = settings.app_name
        log_record["environment"] = settings.environment
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record.update(export_context(record))

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


class ExportContextFormatter(logging.Formatter):
    """Plain text formatter that appends export context as key=value pairs"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = export_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{line} [{pairs}]"


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", timestamp=True)
    return ExportContextFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """
    Install the console handler on the root logger

    Only a handler previously installed by this function is replaced; other
    root handlers are left alone. Level and format default to settings.

    Returns:
        The installed handler
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or settings.log_level).upper()))

    for handler in root_logger.handlers[:]:
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.set_name(HANDLER_NAME)
    console_handler.setFormatter(build_formatter(log_format or settings.log_format))
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return console_handler


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter to add context to all log messages"""

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        # Per-call extra wins over the adapter's bound context
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context) -> "LoggerAdapter":
        """Create a new logger with additional context"""
        return LoggerAdapter(self.logger, {**self.extra, **context})


def get_logger(name: str, **context) -> LoggerAdapter:
    """
    Get a logger instance with optional context

    Args:
        name: Logger name (usually __name__)
        **context: Context included in every record, e.g. domain="report_exports"

    Example:
        logger = get_logger(__name__, domain="report_exports")
        logger.info("Export completed", extra={"format": "csv", "size": 1024})
    """
    return LoggerAdapter(logging.getLogger(name), context)
