"""
Counterparty resolution for classified SMS bodies.

Which side of the transaction a message names depends on its category:
incoming money names the sender, payments and transfers name the receiver,
everything else names neither.
"""

import re
from typing import NamedTuple

from momo_pipeline.core.models import TransactionCategory

SENDER_PATTERN = re.compile(r"from ([^(]+) \(")
RECEIVER_PATTERN = re.compile(r"to ([^\d(]+) ?(?:\d+|\()")

RECEIVER_CATEGORIES = frozenset({
    TransactionCategory.PAYMENT_TO_CODE_HOLDER,
    TransactionCategory.TRANSFER_TO_MOBILE_NUMBER,
})


class Counterparty(NamedTuple):
    sender: str | None
    receiver: str | None


def _clean(match: re.Match | None) -> str | None:
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


def resolve_counterparty(body: str, category: TransactionCategory) -> Counterparty:
    """
    Extract at most one of sender/receiver for a classified body.

    Args:
        body: Message body
        category: Category already assigned by the classifier

    Returns:
        Counterparty with at most one populated side
    """
    if category == TransactionCategory.INCOMING_MONEY:
        return Counterparty(sender=_clean(SENDER_PATTERN.search(body)), receiver=None)

    if category in RECEIVER_CATEGORIES:
        return Counterparty(sender=None, receiver=_clean(RECEIVER_PATTERN.search(body)))

    return Counterparty(sender=None, receiver=None)
