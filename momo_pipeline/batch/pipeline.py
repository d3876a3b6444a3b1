"""
Batch ingestion pipeline orchestration.

Coordinates the flow: read archive → batch → build + persist (concurrently
within a batch) → count → report
"""

import time
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path

from momo_pipeline.batch.readers import ArchiveReader
from momo_pipeline.batch.writers import RunReportWriter, UnprocessedLogWriter
from momo_pipeline.core.models import BatchRunSummary, RawMessage
from momo_pipeline.core.record_builder import RecordBuilder
from momo_pipeline.observability.logger import get_logger, log_operation
from momo_pipeline.observability.metrics import MetricsCollector
from momo_pipeline.warehouse import TransactionStore

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 50
FAILED_SAVE_REASON = "Failed to create transaction"


class SmsBatchPipeline:
    """
    Orchestrates one ingestion run over an SMS archive.

    Flow:
    1. Read the whole archive (a missing or malformed archive aborts the run)
    2. Split messages into fixed-size batches, in archive order
    3. Build and save every message of a batch concurrently
    4. Wait for the whole batch before starting the next one
    5. Log failed messages to the unprocessed log and count them as ignored
    6. Write the run report

    Runs are not idempotent: every run inserts every message again, so
    callers should only ingest into an empty store (see populate_if_empty).
    """

    def __init__(
        self,
        store: TransactionStore,
        unprocessed_log: UnprocessedLogWriter,
        report_writer: RunReportWriter | None = None,
        builder: RecordBuilder | None = None,
        reader: ArchiveReader | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the batch pipeline.

        Args:
            store: Where built records are persisted
            unprocessed_log: Sink for messages that fail to build or persist
            report_writer: Writes the run report (skipped when None)
            builder: Record builder (default settings when None)
            reader: Archive reader (XML/JSON when None)
            batch_size: Messages per batch, which is also the concurrency limit
            metrics: Metrics collector

        Raises:
            ValueError: If batch_size is not positive
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")

        self.store = store
        self.unprocessed_log = unprocessed_log
        self.report_writer = report_writer
        self.builder = builder or RecordBuilder()
        self.reader = reader or ArchiveReader()
        self.batch_size = batch_size
        self.metrics = metrics or MetricsCollector()

    def run(self, archive_path: str | Path, file_format: str | None = None) -> BatchRunSummary:
        """
        Ingest every message of an archive.

        Args:
            archive_path: Path to the SMS archive
            file_format: "xml" or "json" (inferred from the suffix when None)

        Returns:
            Finalized BatchRunSummary

        Raises:
            ArchiveReadError: If the archive is missing or malformed
        """
        logger.info(f"Reading SMS archive: {archive_path}")
        messages = self.reader.read(archive_path, file_format=file_format)
        total = len(messages)
        logger.info(f"Read {total} messages")

        summary = BatchRunSummary(total_messages=total)

        with ThreadPoolExecutor(
            max_workers=self.batch_size, thread_name_prefix="sms-ingest"
        ) as executor:
            for batch_index, start in enumerate(range(0, total, self.batch_size)):
                batch = messages[start:start + self.batch_size]
                self._process_batch(executor, batch, batch_index, summary)
                logger.info(f"Processed {start + len(batch)} of {total} messages...")

        summary.finalize()
        logger.info(
            f"SMS Processing complete. Processed: {summary.processed_count}, "
            f"Ignored: {summary.ignored_count}"
        )

        if self.report_writer is not None:
            report_path = self.report_writer.write(summary)
            logger.info(f"Run report written to {report_path}")

        return summary

    def populate_if_empty(
        self, archive_path: str | Path, file_format: str | None = None
    ) -> BatchRunSummary | None:
        """
        Ingest the archive only if the store holds no transactions yet.

        Args:
            archive_path: Path to the SMS archive
            file_format: "xml" or "json" (inferred from the suffix when None)

        Returns:
            Run summary, or None if the store was already populated
        """
        existing = self.store.count()
        if existing > 0:
            logger.info(f"Store already contains {existing} transactions, skipping ingestion")
            return None

        logger.info("No transactions found in store. Processing SMS archive...")
        return self.run(archive_path, file_format=file_format)

    def _process_batch(
        self,
        executor: ThreadPoolExecutor,
        batch: list[RawMessage],
        batch_index: int,
        summary: BatchRunSummary,
    ) -> None:
        """Submit one batch and block until every message has resolved."""
        start_time = time.monotonic()
        with log_operation("Processing batch", logger=logger, batch_index=batch_index, batch_size=len(batch)):
            futures = [executor.submit(self._process_message, message, summary) for message in batch]
            wait(futures)
            for future in futures:
                # Re-raises anything that escaped the per-message boundary
                future.result()
        self.metrics.record_batch(time.monotonic() - start_time)

    def _process_message(self, message: RawMessage, summary: BatchRunSummary) -> bool:
        """
        Build and save one message, recording the outcome.

        Returns:
            True if the record was persisted
        """
        category = None
        try:
            record = self.builder.build(message)
            category = record.category.value
            saved, error = self.store.save(record)
        except Exception as e:
            saved, error = False, str(e) or type(e).__name__

        if saved:
            self.metrics.record_store_write(True)
            self.metrics.record_message(True, category)
            summary.record_processed()
            return True

        if category is not None:
            self.metrics.record_store_write(False)
        reason = error or FAILED_SAVE_REASON
        logger.warning(
            f"Ignoring message: {reason}",
            extra={"address": message.address, "error": reason},
        )
        self.unprocessed_log.log(message, reason)
        self.metrics.record_message(False, category)
        summary.record_ignored()
        return False
