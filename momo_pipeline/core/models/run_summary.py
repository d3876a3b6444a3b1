"""
BatchRunSummary model holding the outcome counters of one ingestion run.
"""

import threading
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr


class BatchRunSummary(BaseModel):
    """
    Aggregate outcome of one ingestion run.

    Created with zero counts when a run starts and updated by the batch
    orchestrator as messages resolve. Counter updates go through
    record_processed()/record_ignored(), which hold a lock so concurrent
    workers never lose an increment.

    Attributes:
        total_messages: Number of messages in the archive
        processed_count: Messages persisted successfully
        ignored_count: Messages that failed to build or persist
        timestamp: When the summary was finalized
    """

    total_messages: int = Field(0, ge=0)
    processed_count: int = Field(0, ge=0)
    ignored_count: int = Field(0, ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def record_processed(self) -> None:
        with self._lock:
            self.processed_count += 1

    def record_ignored(self) -> None:
        with self._lock:
            self.ignored_count += 1

    @property
    def resolved_count(self) -> int:
        """Messages resolved so far, successfully or not."""
        with self._lock:
            return self.processed_count + self.ignored_count

    @property
    def is_complete(self) -> bool:
        return self.resolved_count == self.total_messages

    def finalize(self) -> "BatchRunSummary":
        """
        Stamp the summary with the completion time.

        Raises:
            ValueError: If processed + ignored does not equal total
        """
        if not self.is_complete:
            raise ValueError(
                f"Run summary is inconsistent: processed ({self.processed_count}) + "
                f"ignored ({self.ignored_count}) != total ({self.total_messages})"
            )
        self.timestamp = datetime.now(timezone.utc)
        return self

    def to_report(self) -> dict[str, Any]:
        """Return the run report document."""
        return {
            "ignored": self.ignored_count,
            "processed": self.processed_count,
            "total": self.total_messages,
            "timestamp": self.timestamp.isoformat(),
        }
