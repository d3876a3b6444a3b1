"""
UnprocessedEntry model representing an SMS that could not be ingested.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class UnprocessedEntry(BaseModel):
    """
    A message that failed to build or persist, with the failure reason.

    Attributes:
        sms: Original transport attributes of the message
        error: Why the message was not ingested
        logged_at: When the failure was recorded
    """

    sms: dict[str, Any]
    error: str = Field(..., min_length=1)
    logged_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        json_schema_extra = {
            "example": {
                "sms": {
                    "address": "M-Money",
                    "body": "You have received 2000 RWF from Jane Smith ...",
                    "readable_date": "10 May 2024 4:30:58 PM",
                },
                "error": "Failed to create transaction",
            }
        }
