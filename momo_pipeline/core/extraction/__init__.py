"""
Pattern-based extraction of typed fields from SMS bodies.
"""

from .counterparty import Counterparty, resolve_counterparty
from .fields import (
    DEFAULT_CURRENCY,
    extract_amount,
    extract_balance,
    extract_date,
    extract_external_transaction_id,
    extract_fee,
    extract_transaction_id,
    parse_readable_date,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "Counterparty",
    "resolve_counterparty",
    "extract_amount",
    "extract_balance",
    "extract_date",
    "extract_external_transaction_id",
    "extract_fee",
    "extract_transaction_id",
    "parse_readable_date",
]
