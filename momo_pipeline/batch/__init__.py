"""
Batch ingestion of SMS archives.
"""

from .pipeline import DEFAULT_BATCH_SIZE, SmsBatchPipeline
from .readers import ArchiveReader, JSONArchiveReader, XMLArchiveReader
from .writers import RunReportWriter, UnprocessedLogWriter

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "SmsBatchPipeline",
    "ArchiveReader",
    "JSONArchiveReader",
    "XMLArchiveReader",
    "RunReportWriter",
    "UnprocessedLogWriter",
]
