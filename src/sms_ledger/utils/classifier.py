"""Transaction direction and spending category classification.

Both decisions are driven by ordered keyword tables. Matching is a
case-insensitive substring test and the first entry that matches wins, so
the order of each table is its priority order:

- A message mentioning both "Debited" and "Credited" is a DEBIT
- A merchant mentioning both "grocery" and "shop" is "Groceries"
"""

import logging
from typing import List, Optional, Tuple

from ..models.core import TransactionType


logger = logging.getLogger(__name__)


# Keywords that decide the direction of a transaction, highest priority first
DIRECTION_KEYWORDS: List[Tuple[str, TransactionType]] = [
    ('debited', TransactionType.DEBIT),
    ('credited', TransactionType.CREDIT),
]

# Merchant keywords mapped to spending categories, highest priority first
CATEGORY_RULES: List[Tuple[str, str]] = [
    ('grocery', 'Groceries'),
    ('fuel', 'Fuel'),
    ('airtime', 'Airtime'),
    ('electricity', 'Utilities'),
    ('restaurant', 'Dining'),
    ('shop', 'Shopping'),
]

UNKNOWN_CATEGORY = 'Unknown'
DEFAULT_CATEGORY = 'Others'


class TransactionClassifier:
    """Derives transaction direction and category from message text."""

    def __init__(self,
                 direction_keywords: Optional[List[Tuple[str, TransactionType]]] = None,
                 category_rules: Optional[List[Tuple[str, str]]] = None):
        self.direction_keywords = DIRECTION_KEYWORDS if direction_keywords is None else direction_keywords
        self.category_rules = CATEGORY_RULES if category_rules is None else category_rules

    def detect_direction(self, message: str) -> Optional[TransactionType]:
        """Detect whether a message reports a debit or a credit.

        Args:
            message: Raw SMS text

        Returns:
            TransactionType of the first keyword in table order found in the
            message, or None if none of them occur
        """
        message_lower = message.lower()

        for keyword, transaction_type in self.direction_keywords:
            if keyword in message_lower:
                return transaction_type

        logger.debug("No direction keyword found in message")
        return None

    def categorize(self, merchant: Optional[str]) -> str:
        """Map merchant text to a spending category.

        Args:
            merchant: Merchant description, or None if it was not extracted

        Returns:
            Category name; "Unknown" for a missing merchant and "Others"
            when no keyword matches
        """
        if merchant is None:
            return UNKNOWN_CATEGORY

        merchant_lower = merchant.lower()

        for keyword, category in self.category_rules:
            if keyword in merchant_lower:
                return category

        return DEFAULT_CATEGORY
