"""
RawMessage model representing one SMS entry read from the archive (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawMessage(BaseModel):
    """
    One ingested SMS as it appears in the archive.

    Note: RawMessage is immutable. The pipeline reads it but never mutates it,
    and the full attribute bag is carried into the persisted record for audit.

    Attributes:
        address: Sender address of the SMS (e.g. "M-Money")
        body: Free-text message body, the primary parsing target
        type: Transport-level message tag (informational only)
        readable_date: Human-formatted timestamp supplied by the exporter
        contact_name: Contact name supplied by the exporter
        attributes: Every transport attribute, preserved verbatim
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "address": "M-Money",
                "body": "You have received 2000 RWF from Jane Smith (*********013) "
                        "on your mobile money account at 2024-05-10 16:30:51. "
                        "Your new balance:2000 RWF. Financial Transaction Id: 76662021700.",
                "type": "1",
                "readable_date": "10 May 2024 4:30:58 PM",
                "contact_name": "(Unknown)",
                "attributes": {"protocol": "0", "date": "1715351458724"},
            }
        },
    )

    address: str = ""
    body: str | None = None
    type: str = ""
    readable_date: str | None = None
    contact_name: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_attributes(cls, attributes: dict[str, Any]) -> "RawMessage":
        """
        Build a RawMessage from a flat attribute mapping.

        Args:
            attributes: Attribute name/value pairs as exported

        Returns:
            RawMessage with the known attributes lifted out and the
            full mapping kept in ``attributes``
        """
        return cls(
            address=_text(attributes.get("address")) or "",
            body=_text(attributes.get("body")),
            type=_text(attributes.get("type")) or "",
            readable_date=_text(attributes.get("readable_date")),
            contact_name=_text(attributes.get("contact_name")),
            attributes=dict(attributes),
        )


def _text(value: Any) -> str | None:
    """Coerce an exported attribute to text; empty values become None."""
    if value is None or value == "":
        return None
    return str(value)
