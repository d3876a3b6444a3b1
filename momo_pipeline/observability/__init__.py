"""
Logging and metrics for the ingestion pipeline.
"""

from .logger import configure_logging, get_logger, log_operation, setup_file_logger, setup_logger
from .metrics import MetricsCollector

__all__ = [
    "configure_logging",
    "get_logger",
    "log_operation",
    "setup_file_logger",
    "setup_logger",
    "MetricsCollector",
]
