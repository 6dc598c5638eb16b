"""SMS transaction parser: assembles extracted fields into records."""

import logging
from typing import Optional

from .base import MessageParser, DataTransformer
from .field_extractor import FieldExtractor
from ..models.core import (
    AccountInfo,
    AccountType,
    Balance,
    ExtractedFields,
    ParserConfig,
    Transaction,
    TransactionInfo,
)
from ..utils.alerts import AlertDispatcher, LargeDebitRule
from ..utils.classifier import TransactionClassifier


logger = logging.getLogger(__name__)


class SmsParser(MessageParser):
    """Parser for bank SMS notifications.

    Each call works on one message and shares no state with other calls;
    the caller owns any list the resulting records are collected into.
    """

    def __init__(self,
                 config: Optional[ParserConfig] = None,
                 extractor: Optional[FieldExtractor] = None,
                 classifier: Optional[TransactionClassifier] = None,
                 alert_dispatcher: Optional[AlertDispatcher] = None):
        super().__init__(config)
        self.transformer = DataTransformer()
        self.extractor = extractor or FieldExtractor(self.transformer)
        self.classifier = classifier or TransactionClassifier()
        self.alert_dispatcher = alert_dispatcher or AlertDispatcher(
            LargeDebitRule(self.config.alert_threshold)
        )

    def parse(self, message: str) -> TransactionInfo:
        return self.get_transaction_info(message)

    def can_parse(self, message: str) -> bool:
        fields = self.extractor.extract(message)
        if any(value is not None for value in vars(fields).values()):
            return True
        return self.classifier.detect_direction(message) is not None

    def get_transaction_info(self, message: str) -> TransactionInfo:
        """Parse a message into account, balance and transaction details.

        Fields that cannot be found degrade to None (or to "null" inside the
        composed amount and balance strings); parsing never fails. Large
        debits are reported through the alert dispatcher and do not change
        the returned record.

        Args:
            message: Raw SMS text, never blank

        Returns:
            TransactionInfo for the message
        """
        fields = self.extractor.extract(message)

        account = self._build_account(fields)
        balance = Balance(
            available=self.transformer.compose_amount(fields.balance_currency, fields.balance_amount)
        )
        transaction = Transaction(
            type=self.classifier.detect_direction(message),
            amount=self.transformer.compose_amount(fields.currency, fields.amount),
            reference_no=fields.reference_no,
            merchant=fields.merchant,
            currency=fields.currency,
            date=fields.date,
            category=self.classifier.categorize(fields.merchant),
        )

        self.alert_dispatcher.check(transaction)

        logger.debug(
            f"Parsed message: account={account.type.value} "
            f"type={transaction.type.value if transaction.type else None} "
            f"amount={transaction.amount} category={transaction.category}"
        )

        return TransactionInfo(account=account, balance=balance, transaction=transaction)

    @staticmethod
    def _build_account(fields: ExtractedFields) -> AccountInfo:
        if fields.account_number is not None:
            return AccountInfo(type=AccountType.ACCOUNT, number=fields.account_number)
        return AccountInfo(type=AccountType.UNKNOWN, number=None)
