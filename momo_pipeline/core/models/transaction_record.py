"""
TransactionRecord model, the structured output of the ingestion pipeline.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class TransactionCategory(str, Enum):
    """
    Closed set of transaction categories.

    Values are persisted and reported verbatim, so their spelling is part
    of the storage contract.
    """

    INCOMING_MONEY = "Incoming Money"
    BANK_TRANSFER = "Bank Transfers"
    PAYMENT_TO_CODE_HOLDER = "Payments to Code Holders"
    TRANSFER_TO_MOBILE_NUMBER = "Transfers to Mobile Numbers"
    BANK_DEPOSIT = "Bank Deposits"
    AIRTIME_BILL_PAYMENT = "Airtime Bill Payments"
    CASH_POWER_BILL_PAYMENT = "Cash Power Bill Payments"
    AGENT_WITHDRAWAL = "Withdrawals from Agents"
    BUNDLE_PURCHASE = "Internet and Voice Bundle Purchases"
    THIRD_PARTY_TRANSACTION = "Transactions Initiated by Third Parties"
    OTHER = "Other"
    UNKNOWN = "Unknown"


class TransactionRecord(BaseModel):
    """
    One structured transaction derived from a single SMS.

    Attributes:
        category: Transaction category (always set)
        amount: Transaction amount in whole currency units (0 if not found)
        currency: Deployment currency code
        occurred_at: When the transaction happened (UTC)
        sender: Counterparty that sent money (Incoming Money only)
        receiver: Counterparty that received money (payments/transfers only)
        balance: Account balance after the transaction, if stated
        fee: Transaction fee (0 if not stated)
        transaction_id: Provider transaction id, if stated
        external_transaction_id: External (bank) transaction id, if stated
        raw_body: Message body the record was built from
        source_message: Full original transport attributes
        address: SMS sender address
        message_type: Transport-level message tag
        readable_date: Exporter-supplied human-readable date
        contact_name: Exporter-supplied contact name
    """

    category: TransactionCategory
    amount: int = Field(0, ge=0)
    currency: str = Field(..., min_length=1)
    occurred_at: datetime
    sender: str | None = None
    receiver: str | None = None
    balance: int | None = Field(None, ge=0)
    fee: int = Field(0, ge=0)
    transaction_id: str | None = None
    external_transaction_id: str | None = None
    raw_body: str
    source_message: dict[str, Any] = Field(default_factory=dict)
    address: str = ""
    message_type: str = "unknown"
    readable_date: str | None = None
    contact_name: str | None = None

    @model_validator(mode="after")
    def check_single_counterparty(self) -> "TransactionRecord":
        """Validate that sender and receiver are never both populated."""
        if self.sender is not None and self.receiver is not None:
            raise ValueError("sender and receiver are mutually exclusive")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "category": "Incoming Money",
                "amount": 2000,
                "currency": "RWF",
                "occurred_at": "2024-05-10T16:30:51Z",
                "sender": "Jane Smith",
                "receiver": None,
                "balance": 2000,
                "fee": 0,
                "transaction_id": "76662021700",
                "external_transaction_id": None,
                "address": "M-Money",
                "message_type": "1",
            }
        }
