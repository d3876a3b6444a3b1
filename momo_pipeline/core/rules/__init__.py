"""
Ordered classification rules.
"""

from .classifier import CATEGORY_RULES, CategoryRule, classification_rules, classify

__all__ = [
    "CATEGORY_RULES",
    "CategoryRule",
    "classify",
    "classification_rules",
]
