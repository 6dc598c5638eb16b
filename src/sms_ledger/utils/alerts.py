"""Large-debit alert rule and notification sinks.

The rule only decides; delivering the notification is the job of the
sinks handed to AlertDispatcher, so the channel (log, console, collector)
can change without touching extraction or classification.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Union

import click

from ..models.core import Transaction, TransactionType, render_optional


logger = logging.getLogger(__name__)


DEFAULT_ALERT_THRESHOLD = Decimal('1000')

_NUMBER_PATTERN = re.compile(r'\d+(?:\.\d+)?', re.ASCII)


def parse_amount_value(amount: Optional[str]) -> Decimal:
    """Numeric value of an amount string such as "USD 1,500.00".

    Currency tokens and thousands separators are ignored. Anything that does
    not contain a number ("null null", None, "") is worth zero.
    """
    if not amount:
        return Decimal('0')

    numbers = _NUMBER_PATTERN.findall(amount.replace(',', ''))
    if not numbers:
        return Decimal('0')

    try:
        return Decimal(numbers[-1])
    except InvalidOperation:
        return Decimal('0')


@dataclass(frozen=True)
class LargeDebitAlert:
    """Notification raised for a debit above the threshold"""
    amount: str
    merchant: Optional[str]

    @property
    def message(self) -> str:
        return f"ALERT: Large debit transaction detected: {self.amount} from {render_optional(self.merchant)}"


class LargeDebitRule:
    """Decides whether a transaction is a large debit"""

    def __init__(self, threshold: Union[Decimal, int, str] = DEFAULT_ALERT_THRESHOLD):
        self.threshold = Decimal(str(threshold))

    def is_triggered(self, transaction: Transaction) -> bool:
        """True for a DEBIT whose amount is strictly above the threshold"""
        if transaction.type is not TransactionType.DEBIT:
            return False
        return parse_amount_value(transaction.amount) > self.threshold


class AlertSink(ABC):
    """Destination for large-debit notifications"""

    @abstractmethod
    def notify(self, alert: LargeDebitAlert) -> None:
        pass


class LoggingAlertSink(AlertSink):
    """Writes alerts to the package log"""

    def notify(self, alert: LargeDebitAlert) -> None:
        logger.warning(alert.message)


class ConsoleAlertSink(AlertSink):
    """Prints alerts to the terminal"""

    def notify(self, alert: LargeDebitAlert) -> None:
        click.echo(alert.message)


class CollectingAlertSink(AlertSink):
    """Keeps every alert it receives"""

    def __init__(self):
        self.alerts: List[LargeDebitAlert] = []

    def notify(self, alert: LargeDebitAlert) -> None:
        self.alerts.append(alert)


class AlertDispatcher:
    """Evaluates the rule for each transaction and fans alerts out to sinks"""

    def __init__(self,
                 rule: Optional[LargeDebitRule] = None,
                 sinks: Optional[Iterable[AlertSink]] = None):
        self.rule = rule or LargeDebitRule()
        self.sinks: List[AlertSink] = list(sinks) if sinks is not None else [LoggingAlertSink()]

    def add_sink(self, sink: AlertSink) -> None:
        self.sinks.append(sink)

    def check(self, transaction: Transaction) -> Optional[LargeDebitAlert]:
        """Notify every sink if the transaction is a large debit.

        Returns:
            The alert that was sent, or None if the rule did not trigger
        """
        if not self.rule.is_triggered(transaction):
            return None

        alert = LargeDebitAlert(amount=transaction.amount, merchant=transaction.merchant)
        for sink in self.sinks:
            sink.notify(alert)
        return alert
