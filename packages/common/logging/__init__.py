"""JSON structured logging for the OpenIE server.

Provides structured logging with correlation IDs, severity levels, and contextual metadata.
Uses python-json-logger for JSON formatting.
"""

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from packages.common.config import get_config


class CorrelationIdFilter(logging.Filter):
    """Logging filter that injects correlation ID into log records.

    The correlation ID is stored in a context variable and automatically
    added to all log records for request tracing.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject correlation ID into the log record.

        Args:
            record: The log record to modify.

        Returns:
            bool: Always True (doesn't filter out records).
        """
        # Import here to avoid circular dependency
        from packages.common.tracing import get_correlation_id

        record.correlation_id = get_correlation_id()
        return True


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with additional fields.

    Adds timestamp, level, module, and correlation_id to all log records.
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the JSON log record.

        Args:
            log_record: The dictionary that will be serialized to JSON.
            record: The original logging.LogRecord.
            message_dict: Dictionary from the log message.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if getattr(record, "correlation_id", None) is not None:
            log_record["correlation_id"] = record.correlation_id


def setup_logging(level: str | None = None) -> None:
    """Configure JSON structured logging for the application.

    Sets up:
    - JSON formatter with correlation IDs
    - Console handler writing to stdout
    - Log level from config or parameter

    Args:
        level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, uses OPENIE_LOG_LEVEL from config.

    Example:
        >>> setup_logging("DEBUG")
        >>> logger = get_logger(__name__)
        >>> logger.info("Extracting", extra={"text_length": 42})
    """
    log_level = (level or get_config().log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    )
    console_handler.addFilter(CorrelationIdFilter())

    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module.

    Args:
        name: The logger name (typically __name__ from the calling module).

    Returns:
        logging.Logger: Configured logger instance.
    """
    return logging.getLogger(name)


# Export public API
__all__ = ["CorrelationIdFilter", "CustomJsonFormatter", "get_logger", "setup_logging"]
