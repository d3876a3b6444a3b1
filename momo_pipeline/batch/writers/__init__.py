"""
Run output writers: unprocessed-message log and run report.
"""

from .report_writer import RunReportWriter
from .unprocessed_writer import UnprocessedLogWriter

__all__ = [
    "RunReportWriter",
    "UnprocessedLogWriter",
]
