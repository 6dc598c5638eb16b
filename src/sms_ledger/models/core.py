"""Core data models for the SMS transaction parser."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


# Text used wherever an absent field is rendered (composite strings, CSV, report)
NULL_TEXT = "null"


class AccountType(Enum):
    """Kind of account a message refers to.

    CARD and WALLET are reserved; extraction currently only yields
    ACCOUNT or UNKNOWN.
    """
    CARD = "CARD"
    WALLET = "WALLET"
    ACCOUNT = "ACCOUNT"
    UNKNOWN = "UNKNOWN"


class TransactionType(Enum):
    """Direction of money movement"""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


def render_optional(value: Any) -> str:
    """Render a possibly-absent field as text.

    Absent values become ``null`` and enums render as their value, so
    ``render_optional(None) == "null"`` while ``render_optional("") == ""``.
    """
    if value is None:
        return NULL_TEXT
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class ExtractedFields:
    """Raw substrings pulled out of a message, one optional value per field.

    Attributes:
        account_number: Masked account identifier (e.g. "123**456")
        currency: Currency token preceding the transaction amount
        amount: Transaction amount with thousands separators removed
        reference_no: Token following "REF:"
        merchant: Text between the reference token and the date clause
        date: Date in DD-MMM-YY form
        balance_currency: Currency token of the available balance
        balance_amount: Available balance with thousands separators removed
    """
    account_number: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[str] = None
    reference_no: Optional[str] = None
    merchant: Optional[str] = None
    date: Optional[str] = None
    balance_currency: Optional[str] = None
    balance_amount: Optional[str] = None


@dataclass(frozen=True)
class AccountInfo:
    """Account a transaction was made against"""
    type: AccountType
    number: Optional[str]
    name: Optional[str] = None


@dataclass(frozen=True)
class Balance:
    """Balance reported alongside a transaction"""
    available: str
    outstanding: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction details extracted from a single message.

    ``amount`` always holds "<currency> <value>" text, even when either part
    is absent (rendered as ``null``). ``category`` is always populated.
    """
    type: Optional[TransactionType]
    amount: str
    reference_no: Optional[str]
    merchant: Optional[str]
    currency: Optional[str]
    date: Optional[str]
    category: str


@dataclass(frozen=True)
class TransactionInfo:
    """Everything parsed out of one message"""
    account: AccountInfo
    balance: Optional[Balance]
    transaction: Transaction

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'account': {
                'type': self.account.type.value,
                'number': self.account.number,
                'name': self.account.name,
            },
            'balance': {
                'available': self.balance.available,
                'outstanding': self.balance.outstanding,
            } if self.balance is not None else None,
            'transaction': {
                'type': self.transaction.type.value if self.transaction.type else None,
                'amount': self.transaction.amount,
                'reference_no': self.transaction.reference_no,
                'merchant': self.transaction.merchant,
                'currency': self.transaction.currency,
                'date': self.transaction.date,
                'category': self.transaction.category,
            },
        }


@dataclass
class ParserConfig:
    """Configuration for a ledger run"""
    transactions_file: str = "transactions.csv"
    report_file: str = "transaction_report.txt"
    alert_threshold: Decimal = Decimal("1000")
    log_directory: str = "logs"
    console_alerts: bool = True

    def __post_init__(self):
        if not isinstance(self.alert_threshold, Decimal):
            self.alert_threshold = Decimal(str(self.alert_threshold))
