"""Logging setup with optional JSON output and step context."""
import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from flow_migrate.config import Settings, get_settings

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class StepContextFilter(logging.Filter):
    """Add step context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add default step context fields if not present."""
        if not hasattr(record, "step"):
            record.step = None
        if not hasattr(record, "target"):
            record.target = None
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with standardized field names."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        # Drop empty step context so plain library logs stay compact
        for field in ("step", "target"):
            if not getattr(record, field, None):
                log_record.pop(field, None)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure logging for a CLI run.

    Logs go to stderr; stdout is reserved for progress and failure messages.
    """
    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_json:
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)
    handler.setFormatter(formatter)
    handler.addFilter(StepContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    # asyncio reports slow callbacks and unclosed transports at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> logging.LoggerAdapter:
    """
    Get a logger bound to step context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields passed to with_step_context

    Returns:
        LoggerAdapter that stamps the context onto every record
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, extra=with_step_context(**context))


def with_step_context(
    step: str | None = None,
    target: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create an extra dict with step context for logging.

    Args:
        step: Title of the running step
        target: Package directory being migrated
        **kwargs: Additional context fields

    Returns:
        Dict to pass as extra parameter to logger methods
    """
    extra = kwargs.copy()
    if step:
        extra["step"] = step
    if target:
        extra["target"] = target
    return extra
