"""
Core data models for the SMS ingestion pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .raw_message import RawMessage
from .run_summary import BatchRunSummary
from .transaction_record import TransactionCategory, TransactionRecord
from .unprocessed_entry import UnprocessedEntry

__all__ = [
    "RawMessage",
    "TransactionCategory",
    "TransactionRecord",
    "BatchRunSummary",
    "UnprocessedEntry",
]
