"""
Field extractors for mobile-money SMS bodies.

Each extractor pulls one typed value out of a message body and returns
None when the body does not contain it. Extractors never raise on
malformed text; a miss is normal and the record builder applies the
field default.
"""

import re
from datetime import datetime, timezone

from dateutil import parser as date_parser

DEFAULT_CURRENCY = "RWF"

DATE_TOKEN_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
DATE_TOKEN_FORMAT = "%Y-%m-%d %H:%M:%S"

TRANSACTION_ID_PATTERNS = (
    re.compile(r"Transaction Id:?\s*(\d+)", re.IGNORECASE),
    re.compile(r"TxId:?\s*(\d+)", re.IGNORECASE),
)
EXTERNAL_TRANSACTION_ID_PATTERN = re.compile(
    r"External Transaction Id:?\s*([\w-]+)", re.IGNORECASE
)


def _currency(currency: str) -> str:
    return re.escape(currency)


def _parse_grouped_number(token: str) -> int:
    """Parse a number written with thousands separators, e.g. '1,500'."""
    return int(token.replace(",", ""))


def extract_amount(body: str | None, currency: str = DEFAULT_CURRENCY) -> int | None:
    """
    Extract the first amount followed by the currency marker.

    Thousands separators are removed from the whole body before matching,
    so '2,000 RWF' yields 2000 and '200RWF' yields 200.

    Args:
        body: Message body
        currency: Currency marker that follows the amount

    Returns:
        Amount in whole currency units, or None if no amount is present
    """
    if not body:
        return None

    match = re.search(rf"(\d+)\s*{_currency(currency)}", body.replace(",", ""))
    if not match:
        return None

    return int(match.group(1))


def extract_date(body: str | None) -> datetime | None:
    """
    Extract the first 'YYYY-MM-DD HH:MM:SS' token as a UTC timestamp.

    Args:
        body: Message body

    Returns:
        Timezone-aware UTC datetime, or None if no valid token is present
    """
    if not body:
        return None

    match = DATE_TOKEN_PATTERN.search(body)
    if not match:
        return None

    try:
        parsed = datetime.strptime(match.group(0), DATE_TOKEN_FORMAT)
    except ValueError:
        # Token has the right shape but is not a real date (e.g. month 13)
        return None

    return parsed.replace(tzinfo=timezone.utc)


def parse_readable_date(readable_date: str | None) -> datetime | None:
    """
    Parse the exporter's human-readable date, e.g. '10 May 2024 4:30:58 PM'.

    Naive values are interpreted as UTC.

    Args:
        readable_date: Exporter-supplied date string

    Returns:
        Timezone-aware datetime, or None if the string cannot be parsed
    """
    if not readable_date:
        return None

    try:
        parsed = date_parser.parse(readable_date)
    except (ValueError, OverflowError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def extract_fee(body: str | None, currency: str = DEFAULT_CURRENCY) -> int | None:
    """
    Extract the fee stated as 'Fee was: 100 RWF' or 'Fee paid: 1,000 RWF'.

    The label is matched case-insensitively.

    Args:
        body: Message body
        currency: Currency marker that follows the fee

    Returns:
        Fee in whole currency units, or None if no fee is stated
    """
    if not body:
        return None

    match = re.search(
        rf"(?i:Fee (?:was|paid)):?\s*(\d[\d,]*)\s*{_currency(currency)}", body
    )
    if not match:
        return None

    return _parse_grouped_number(match.group(1))


def extract_balance(body: str | None, currency: str = DEFAULT_CURRENCY) -> int | None:
    """
    Extract the post-transaction balance, e.g. 'Your new balance: 2,000 RWF'.

    Args:
        body: Message body
        currency: Currency marker that follows the balance

    Returns:
        Balance in whole currency units, or None if no balance is stated
    """
    if not body:
        return None

    match = re.search(
        rf"balance:?\s*(\d[\d,]*)\s*{_currency(currency)}", body, re.IGNORECASE
    )
    if not match:
        return None

    return _parse_grouped_number(match.group(1))


def extract_transaction_id(body: str | None) -> str | None:
    """
    Extract the provider transaction id.

    'Transaction Id' is tried first, then the short 'TxId' label.

    Args:
        body: Message body

    Returns:
        Digit string, or None if no id is stated
    """
    if not body:
        return None

    for pattern in TRANSACTION_ID_PATTERNS:
        match = pattern.search(body)
        if match:
            return match.group(1)

    return None


def extract_external_transaction_id(body: str | None) -> str | None:
    """
    Extract the external (bank side) transaction id.

    Args:
        body: Message body

    Returns:
        Identifier made of word characters and hyphens, or None
    """
    if not body:
        return None

    match = EXTERNAL_TRANSACTION_ID_PATTERN.search(body)
    return match.group(1) if match else None
