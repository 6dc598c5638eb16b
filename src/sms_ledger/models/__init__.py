"""Data models and structures"""

from .core import (
    NULL_TEXT,
    AccountInfo,
    AccountType,
    Balance,
    ExtractedFields,
    ParserConfig,
    Transaction,
    TransactionInfo,
    TransactionType,
    render_optional,
)

__all__ = [
    'NULL_TEXT',
    'AccountInfo',
    'AccountType',
    'Balance',
    'ExtractedFields',
    'ParserConfig',
    'Transaction',
    'TransactionInfo',
    'TransactionType',
    'render_optional',
]
