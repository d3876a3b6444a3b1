"""
Structured logging for the SMS ingestion pipeline.

Console logs go to stdout as JSON (python-json-logger) or plain text for
local runs. File loggers write one JSON object per line and back the
unprocessed-message log.
"""
import logging
import os
import sys
import time
from pathlib import Path

from pythonjsonlogger import jsonlogger

DEFAULT_LOGGER_NAME = "momo-pipeline"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that adds timestamp, level and source location fields.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["thread_id"] = record.thread


def _json_formatter() -> CustomJsonFormatter:
    return CustomJsonFormatter(
        fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a console logger

    Args:
        name: Logger name
        level: Log level (defaults to env var LOG_LEVEL, then INFO)
        format_type: "json" or "text" (defaults to env var LOG_FORMAT, then json)

    Returns:
        Configured logger instance
    """
    log_level_str = level or os.getenv("LOG_LEVEL", "INFO")
    log_level = LOG_LEVELS.get(log_level_str.upper(), logging.INFO)
    format_type = format_type or os.getenv("LOG_FORMAT", "json")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format_type == "json":
        handler.setFormatter(_json_formatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance, configuring it on first use

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        return setup_logger(name)

    return logger


def configure_logging(level: str | None = None, format_type: str | None = None) -> None:
    """
    Reconfigure every console logger of the package.

    Args:
        level: Log level applied to all package loggers
        format_type: "json" or "text"
    """
    for name, existing in list(logging.root.manager.loggerDict.items()):
        if not isinstance(existing, logging.Logger):
            continue
        if name.startswith("momo_pipeline") or name == DEFAULT_LOGGER_NAME:
            setup_logger(name, level=level, format_type=format_type)


def setup_file_logger(
    name: str,
    file_path: str | Path,
    handler: logging.FileHandler | None = None,
) -> logging.Logger:
    """
    Configure a logger that appends JSON lines to a file.

    Args:
        name: Logger name (one logger per file)
        file_path: Destination file; parent directories are created
        handler: File handler to attach instead of a plain FileHandler on file_path

    Returns:
        Logger writing WARNING and above to file_path only
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.WARNING)

    for existing in list(logger.handlers):
        existing.close()
        logger.removeHandler(existing)

    if handler is None:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(_json_formatter())
    logger.addHandler(handler)
    logger.propagate = False

    return logger


class log_operation:
    """
    Context manager for logging operation duration

    Usage:
        with log_operation("Processing batch", logger=logger, batch_index=3):
            # do work
            pass
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        self.logger.debug(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields}
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.time() - self.start_time

        if exc_type is None:
            self.logger.debug(
                f"Completed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(duration, 3),
                    "status": "success",
                    **self.extra_fields
                }
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(duration, 3),
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **self.extra_fields
                },
                exc_info=True
            )
        return False  # Don't suppress exceptions
