"""Abstract base classes and interfaces for message parsers."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from ..models.core import ParserConfig, TransactionInfo, render_optional


class MessageParser(ABC):
    """Abstract base class for all message parsers"""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

    @abstractmethod
    def parse(self, message: str) -> TransactionInfo:
        """Parse the message and return the transaction it describes"""
        pass

    @abstractmethod
    def can_parse(self, message: str) -> bool:
        """Check whether the message carries any recognisable transaction field"""
        pass

    def parse_many(self, messages: Iterable[str]) -> List[TransactionInfo]:
        """Parse messages one at a time, keeping input order"""
        return [self.parse(message) for message in messages]


class DataTransformer:
    """Normalizes extracted substrings before they go into records"""

    THOUSANDS_SEPARATOR = ','

    def normalize_amount(self, amount_str: Optional[str]) -> Optional[str]:
        """Strip thousands separators from a matched amount.

        Args:
            amount_str: Matched amount text such as "1,500.00", or None

        Returns:
            The amount without separators ("1500.00"), or None if absent
        """
        if amount_str is None:
            return None
        return amount_str.replace(self.THOUSANDS_SEPARATOR, '')

    def compose_amount(self, currency: Optional[str], amount: Optional[str]) -> str:
        """Join currency and amount with a single space.

        Either part may be absent, in which case it is rendered as ``null``;
        the result is always a string ("USD 15.00", "null null").
        """
        return f"{render_optional(currency)} {render_optional(amount)}"
