"""
Logging configuration.

Console lines are human-readable; errors are also appended to a JSON file.
Both show the fields of the author operation in progress (operation name,
author id), which AuthorLifecycle sets through set_log_context.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any

from author_manager.settings import app_settings

# Fields of the author operation running in the current task
log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """
    Add fields to the log context of the current task.

    Example:
        >>> set_log_context(operation="delete_author", author_id=2)
        >>> logger.info("Deleting author")  # line shows both fields
    """
    log_context.set({**log_context.get(), **kwargs})


def get_log_context() -> dict[str, Any]:
    return log_context.get()


def clear_log_context() -> None:
    log_context.set({})


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record: level, source, message and context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "environment": app_settings.ENVIRONMENT,
            **get_log_context(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Console formatter prefixing each line with the log context."""

    FMT = "%(asctime)s - [%(context)s] %(levelname)s: %(message)s"

    def __init__(self) -> None:
        super().__init__(self.FMT, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        record.context = (
            " ".join(f"{key}={value}" for key, value in get_log_context().items())
            or "-"
        )
        return super().format(record)


def setup_logging() -> logging.Logger:
    """
    Configure the root logger.

    - Console handler with human-readable format
    - File handler for errors (JSON format)

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, app_settings.LOG_LEVEL.upper()))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    try:
        file_handler = logging.FileHandler(app_settings.LOG_FILE_PATH)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(StructuredJSONFormatter())
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Could not create file handler: {e}")

    # Disable logging during pytest runs
    if sys.argv[0].split("/")[-1] in ["pytest"]:
        logging.disable(logging.ERROR)

    return logger


# Create default logger instance
logger = setup_logging()
