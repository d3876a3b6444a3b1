"""
Table management for the transactions store.

Creates the transactions table on demand. There is no migration logic:
the table is created if missing and otherwise left as is.
"""

from .connection import DatabaseConnectionPool

TRANSACTIONS_TABLE = "transactions"

CREATE_TRANSACTIONS_TABLE = f"""
    CREATE TABLE IF NOT EXISTS {TRANSACTIONS_TABLE} (
        id SERIAL PRIMARY KEY,
        sms_address VARCHAR(255) NOT NULL,
        sms_date TIMESTAMPTZ NOT NULL,
        sms_type VARCHAR(255) NOT NULL,
        sms_body TEXT NOT NULL,
        transaction_type VARCHAR(255) NOT NULL,
        amount BIGINT NOT NULL CHECK (amount >= 0),
        currency VARCHAR(16) NOT NULL DEFAULT 'RWF',
        sender VARCHAR(255),
        receiver VARCHAR(255),
        balance BIGINT CHECK (balance >= 0),
        fee BIGINT NOT NULL DEFAULT 0 CHECK (fee >= 0),
        transaction_id VARCHAR(255),
        external_transaction_id VARCHAR(255),
        readable_date VARCHAR(255),
        contact_name VARCHAR(255),
        raw_json JSONB NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""


class SchemaManager:
    """
    Creates and clears the transactions table.
    """

    def __init__(self, pool: DatabaseConnectionPool):
        """
        Initialize schema manager.

        Args:
            pool: Database connection pool
        """
        self.pool = pool

    def ensure_schema(self) -> None:
        """Create the transactions table if it does not exist."""
        self.pool.execute_command(CREATE_TRANSACTIONS_TABLE)

    def truncate(self) -> None:
        """Remove every stored transaction (used before a fresh ingestion)."""
        self.pool.execute_command(f"TRUNCATE TABLE {TRANSACTIONS_TABLE} RESTART IDENTITY")
