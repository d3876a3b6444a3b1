"""
Persistence for built transaction records.
"""

from .connection import DatabaseConnectionPool
from .schema_mgmt import SchemaManager
from .transaction_store import (
    InMemoryTransactionStore,
    PostgresTransactionStore,
    TransactionStore,
)

__all__ = [
    "DatabaseConnectionPool",
    "SchemaManager",
    "TransactionStore",
    "InMemoryTransactionStore",
    "PostgresTransactionStore",
]
