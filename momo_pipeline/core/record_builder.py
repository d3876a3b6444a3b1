"""
Record builder: turns one RawMessage into one TransactionRecord.

The builder is a pure transform. It never fails on message content; every
field that cannot be extracted falls back to its documented default.
"""

from datetime import datetime, timezone
from typing import Callable

from momo_pipeline.core.extraction import (
    DEFAULT_CURRENCY,
    extract_amount,
    extract_balance,
    extract_date,
    extract_external_transaction_id,
    extract_fee,
    extract_transaction_id,
    parse_readable_date,
    resolve_counterparty,
)
from momo_pipeline.core.models import RawMessage, TransactionRecord
from momo_pipeline.core.rules.classifier import DEFAULT_ACCOUNT_LABEL, classify

MISSING_BODY_PLACEHOLDER = "No Body provided"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordBuilder:
    """
    Builds structured transaction records from raw SMS messages.

    Usage:
        builder = RecordBuilder()
        record = builder.build(raw_message)
    """

    def __init__(
        self,
        currency: str = DEFAULT_CURRENCY,
        account_label: str = DEFAULT_ACCOUNT_LABEL,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the record builder.

        Args:
            currency: Currency code stamped on every record and used as the
                      amount/fee/balance marker
            account_label: Wallet name used by the third-party rule
            clock: Source of the ingestion time fallback for occurred_at
        """
        self.currency = currency
        self.account_label = account_label
        self.clock = clock

    def build(self, raw: RawMessage) -> TransactionRecord:
        """
        Build a TransactionRecord from a RawMessage.

        Args:
            raw: Message read from the archive

        Returns:
            TransactionRecord with every extractable field populated
        """
        category = classify(raw.body, self.account_label)
        body = raw.body or MISSING_BODY_PLACEHOLDER
        counterparty = resolve_counterparty(body, category)

        return TransactionRecord(
            category=category,
            amount=extract_amount(body, self.currency) or 0,
            currency=self.currency,
            occurred_at=self._occurred_at(body, raw.readable_date),
            sender=counterparty.sender,
            receiver=counterparty.receiver,
            balance=extract_balance(body, self.currency),
            fee=extract_fee(body, self.currency) or 0,
            transaction_id=extract_transaction_id(body),
            external_transaction_id=extract_external_transaction_id(body),
            raw_body=body,
            source_message=dict(raw.attributes),
            address=raw.address,
            message_type=raw.type or "unknown",
            readable_date=raw.readable_date,
            contact_name=raw.contact_name,
        )

    def _occurred_at(self, body: str, readable_date: str | None) -> datetime:
        """Body date token, then readable_date, then ingestion time."""
        return (
            extract_date(body)
            or parse_readable_date(readable_date)
            or self.clock()
        )
