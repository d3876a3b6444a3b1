"""
Unprocessed-message log.

Appends one JSON line per message that could not be ingested, holding the
original SMS attributes and the failure reason.
"""

import logging
from pathlib import Path

from momo_pipeline.core.models import RawMessage, UnprocessedEntry
from momo_pipeline.observability.logger import get_logger, setup_file_logger

logger = get_logger(__name__)


class CountingFileHandler(logging.FileHandler):
    """
    FileHandler that counts the records it actually wrote.

    FileHandler reports write failures through handleError instead of
    raising, so a record only counts once emit() finished without one.
    """

    def __init__(self, filename: str | Path):
        super().__init__(filename, encoding="utf-8", delay=True)
        self.written = 0
        self._emit_failed = False

    def emit(self, record: logging.LogRecord) -> None:
        # Called under the handler lock
        self._emit_failed = False
        super().emit(record)
        if not self._emit_failed:
            self.written += 1

    def handleError(self, record: logging.LogRecord) -> None:
        self._emit_failed = True
        super().handleError(record)


class UnprocessedLogWriter:
    """
    Append-only sink for failed messages.

    Safe to call from concurrent workers: the underlying logging handler
    serializes writes. log() never raises back to the caller.
    """

    def __init__(self, log_path: str | Path = "logs/unprocessed.log"):
        """
        Initialize the unprocessed log.

        Args:
            log_path: JSON-lines file to append to (created on first entry)
        """
        self.log_path = Path(log_path)
        self._handler = CountingFileHandler(self.log_path)
        self._file_logger = setup_file_logger(
            f"momo-pipeline.unprocessed.{self.log_path.resolve()}",
            self.log_path,
            handler=self._handler,
        )

    @property
    def entries_logged(self) -> int:
        """Number of entries that reached the log file."""
        return self._handler.written

    def log(self, message: RawMessage, reason: str) -> None:
        """
        Record a message that was not ingested.

        Args:
            message: The original message
            reason: Why it was not ingested
        """
        try:
            entry = UnprocessedEntry(sms=dict(message.attributes), error=reason or "Unknown error")
            self._file_logger.warning(
                "Unprocessed SMS",
                extra={"sms": entry.sms, "error": entry.error},
            )
        except Exception as e:
            logger.error(f"Could not write unprocessed entry: {e}", exc_info=True)

    def close(self) -> None:
        """Flush and close the log file."""
        for handler in list(self._file_logger.handlers):
            handler.close()
            self._file_logger.removeHandler(handler)
