"""Field extraction from free-text SMS notifications."""

import logging
import re
from typing import Optional

from .base import DataTransformer
from ..models.core import ExtractedFields


logger = logging.getLogger(__name__)


# Currency codes recognised in amount and balance clauses
CURRENCY_CODES = ['USD', 'EUR', 'GBP', 'ZAR', 'JPY', 'CAD', 'ZWG', 'ZWL']

# Symbols only accepted in front of the transaction amount
CURRENCY_SYMBOLS = ['$', '€']

_CODES = '|'.join(CURRENCY_CODES)
_SYMBOLS = '|'.join(re.escape(symbol) for symbol in CURRENCY_SYMBOLS)
_AMOUNT = r'([\d,]+\.\d{2})'
_DATE = r'\d{2}-\w{3}-\d{2}'

# Digits, word and space classes are ASCII-only
ACCOUNT_PATTERN = re.compile(r'ac (\d{3}\*\*\d{3})', re.ASCII)
AMOUNT_PATTERN = re.compile(rf'({_CODES}|{_SYMBOLS})\s?{_AMOUNT}', re.ASCII)
REFERENCE_PATTERN = re.compile(r'REF:(\S+)', re.ASCII)
MERCHANT_PATTERN = re.compile(rf'REF:\S+\s+(.*?)\s+on {_DATE}', re.ASCII)
DATE_PATTERN = re.compile(rf'on ({_DATE})', re.ASCII)
BALANCE_PATTERN = re.compile(rf'Available Balance is ({_CODES}) {_AMOUNT}', re.ASCII)


class FieldExtractor:
    """Pulls candidate field values out of a raw message.

    Every field has its own pattern, applied to the whole message; only the
    first match is used. A field whose pattern does not match is left as
    None, and no field depends on another having matched.
    """

    def __init__(self, transformer: Optional[DataTransformer] = None):
        self.transformer = transformer or DataTransformer()

    def extract(self, message: str) -> ExtractedFields:
        """Extract all fields from a message.

        Args:
            message: Raw SMS text

        Returns:
            ExtractedFields with None for every field that did not match
        """
        amount_match = AMOUNT_PATTERN.search(message)
        balance_match = BALANCE_PATTERN.search(message)

        fields = ExtractedFields(
            account_number=self._first_group(ACCOUNT_PATTERN, message),
            currency=amount_match.group(1) if amount_match else None,
            amount=self.transformer.normalize_amount(amount_match.group(2)) if amount_match else None,
            reference_no=self._first_group(REFERENCE_PATTERN, message),
            merchant=self._first_group(MERCHANT_PATTERN, message),
            date=self._first_group(DATE_PATTERN, message),
            balance_currency=balance_match.group(1) if balance_match else None,
            balance_amount=self.transformer.normalize_amount(balance_match.group(2)) if balance_match else None,
        )

        missing = [name for name, value in vars(fields).items() if value is None]
        if missing:
            logger.debug(f"No match for fields: {', '.join(missing)}")

        return fields

    def extract_account_number(self, message: str) -> Optional[str]:
        return self._first_group(ACCOUNT_PATTERN, message)

    def extract_reference(self, message: str) -> Optional[str]:
        return self._first_group(REFERENCE_PATTERN, message)

    def extract_merchant(self, message: str) -> Optional[str]:
        """Merchant text sits between the reference token and the date clause"""
        return self._first_group(MERCHANT_PATTERN, message)

    def extract_date(self, message: str) -> Optional[str]:
        return self._first_group(DATE_PATTERN, message)

    @staticmethod
    def _first_group(pattern: re.Pattern, message: str) -> Optional[str]:
        match = pattern.search(message)
        return match.group(1) if match else None
