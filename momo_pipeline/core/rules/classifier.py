"""
Rule-based SMS classifier.

Assigns every message body exactly one TransactionCategory by walking an
ordered list of rules; the first rule whose predicate matches wins and
no match yields OTHER. Rule order is the classifier's only tie-break:
a body that both reports money received "from" someone and carries an
External Transaction Id is Incoming Money because that rule comes first.
"""

import re
from typing import Callable, NamedTuple

from momo_pipeline.core.models import TransactionCategory

DEFAULT_ACCOUNT_LABEL = "MOMO"

BUNDLE_PATTERN = re.compile(r"Bundles and Packs|internet|voice bundle", re.IGNORECASE)


class CategoryRule(NamedTuple):
    name: str
    matches: Callable[[str, str], bool]
    category: TransactionCategory


def _contains_all(*needles: str) -> Callable[[str, str], bool]:
    """Build a case-sensitive predicate requiring every needle."""
    def predicate(body: str, account_label: str) -> bool:
        return all(needle in body for needle in needles)
    return predicate


def _third_party(body: str, account_label: str) -> bool:
    return "by" in body and f"on your {account_label} account" in body


def _bundle(body: str, account_label: str) -> bool:
    return BUNDLE_PATTERN.search(body) is not None


# Evaluated top to bottom; do not reorder.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("incoming_money", _contains_all("received", "from"),
                 TransactionCategory.INCOMING_MONEY),
    CategoryRule("payment_to_code_holder", _contains_all("payment of", "to"),
                 TransactionCategory.PAYMENT_TO_CODE_HOLDER),
    CategoryRule("transfer_to_mobile_number", _contains_all("transferred to", "from"),
                 TransactionCategory.TRANSFER_TO_MOBILE_NUMBER),
    CategoryRule("bank_deposit", _contains_all("bank deposit"),
                 TransactionCategory.BANK_DEPOSIT),
    CategoryRule("airtime_bill_payment", _contains_all("Airtime"),
                 TransactionCategory.AIRTIME_BILL_PAYMENT),
    CategoryRule("cash_power_bill_payment", _contains_all("Cash Power"),
                 TransactionCategory.CASH_POWER_BILL_PAYMENT),
    CategoryRule("third_party_transaction", _third_party,
                 TransactionCategory.THIRD_PARTY_TRANSACTION),
    CategoryRule("agent_withdrawal", _contains_all("withdrawn", "agent"),
                 TransactionCategory.AGENT_WITHDRAWAL),
    CategoryRule("bank_transfer", _contains_all("External Transaction Id"),
                 TransactionCategory.BANK_TRANSFER),
    CategoryRule("bundle_purchase", _bundle,
                 TransactionCategory.BUNDLE_PURCHASE),
)


def classify(body: str | None, account_label: str = DEFAULT_ACCOUNT_LABEL) -> TransactionCategory:
    """
    Classify a message body.

    Args:
        body: Message body (None or empty when the SMS had no body)
        account_label: Wallet name used in third-party notices
                       ("... on your MOMO account ...")

    Returns:
        UNKNOWN for an absent body, the first matching rule's category,
        or OTHER when no rule matches
    """
    if not body:
        return TransactionCategory.UNKNOWN

    for rule in CATEGORY_RULES:
        if rule.matches(body, account_label):
            return rule.category

    return TransactionCategory.OTHER


def classification_rules() -> list[dict[str, str]]:
    """Return the rules in evaluation order, for audit and reporting."""
    return [
        {"rule_name": rule.name, "category": rule.category.value}
        for rule in CATEGORY_RULES
    ]
