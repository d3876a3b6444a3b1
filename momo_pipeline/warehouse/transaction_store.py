"""
Transaction stores: where built records are persisted.

The pipeline only ever calls save() and count(). save() reports a rejected
write as (False, reason) instead of raising; anything it does raise is
treated by the pipeline as a per-message failure.
"""

import json
import threading
from abc import ABC, abstractmethod

import psycopg

from momo_pipeline.core.models import TransactionRecord
from momo_pipeline.observability.logger import get_logger

from .connection import DatabaseConnectionPool
from .schema_mgmt import TRANSACTIONS_TABLE, SchemaManager

logger = get_logger(__name__)


class TransactionStore(ABC):
    """
    Persistence contract used by the batch pipeline.

    Implementations must be safe to call from several worker threads at once.
    """

    @abstractmethod
    def save(self, record: TransactionRecord) -> tuple[bool, str | None]:
        """
        Persist one record.

        Args:
            record: Record to persist

        Returns:
            (True, None) on success, (False, reason) if the write was rejected
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of persisted records."""
        pass


class InMemoryTransactionStore(TransactionStore):
    """
    Keeps records in a list. Used for dry runs and tests.
    """

    def __init__(self):
        self._records: list[TransactionRecord] = []
        self._lock = threading.Lock()

    def save(self, record: TransactionRecord) -> tuple[bool, str | None]:
        with self._lock:
            self._records.append(record)
        return True, None

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    @property
    def records(self) -> list[TransactionRecord]:
        """Snapshot of the stored records."""
        with self._lock:
            return list(self._records)


class PostgresTransactionStore(TransactionStore):
    """
    Inserts records into the PostgreSQL transactions table.

    Every save is a plain INSERT; there is no deduplication, so ingesting
    the same archive twice stores every message twice.
    """

    INSERT_QUERY = f"""
        INSERT INTO {TRANSACTIONS_TABLE} (
            sms_address, sms_date, sms_type, sms_body, transaction_type,
            amount, currency, sender, receiver, balance, fee,
            transaction_id, external_transaction_id, readable_date,
            contact_name, raw_json
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
    """

    def __init__(self, pool: DatabaseConnectionPool, ensure_schema: bool = True):
        """
        Initialize the store.

        Args:
            pool: Open database connection pool
            ensure_schema: Create the transactions table if it is missing
        """
        self.pool = pool
        self.schema_manager = SchemaManager(pool)
        if ensure_schema:
            self.schema_manager.ensure_schema()

    def save(self, record: TransactionRecord) -> tuple[bool, str | None]:
        try:
            rowcount = self.pool.execute_command(
                self.INSERT_QUERY,
                (
                    record.address,
                    record.occurred_at,
                    record.message_type,
                    record.raw_body,
                    record.category.value,
                    record.amount,
                    record.currency,
                    record.sender,
                    record.receiver,
                    record.balance,
                    record.fee,
                    record.transaction_id,
                    record.external_transaction_id,
                    record.readable_date,
                    record.contact_name,
                    json.dumps(record.source_message, default=str),
                ),
            )
        except psycopg.Error as e:
            logger.debug(f"Insert rejected: {e}")
            return False, str(e)

        if rowcount != 1:
            return False, "Failed to create transaction"
        return True, None

    def count(self) -> int:
        rows = self.pool.execute_query(f"SELECT COUNT(*) AS total FROM {TRANSACTIONS_TABLE}")
        return int(rows[0]["total"]) if rows else 0
