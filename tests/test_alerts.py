"""Tests for the large-debit alert rule and sinks."""

import logging
from decimal import Decimal

import pytest

from sms_ledger.models.core import Transaction, TransactionType
from sms_ledger.utils.alerts import (
    AlertDispatcher,
    CollectingAlertSink,
    ConsoleAlertSink,
    LargeDebitAlert,
    LargeDebitRule,
    LoggingAlertSink,
    parse_amount_value,
)


def create_transaction(amount: str, transaction_type=TransactionType.DEBIT, merchant="Fuel Station") -> Transaction:
    """Helper to create test transactions"""
    return Transaction(
        type=transaction_type,
        amount=amount,
        reference_no="REF1",
        merchant=merchant,
        currency=amount.split(" ")[0],
        date="15-Mar-24",
        category="Fuel"
    )


class TestParseAmountValue:

    @pytest.mark.parametrize("amount, expected", [
        ("USD 1500.00", Decimal("1500.00")),
        ("USD 1,500.00", Decimal("1500.00")),
        ("$ 12.50", Decimal("12.50")),
        ("1500.00", Decimal("1500.00")),
        ("null null", Decimal("0")),
        ("USD null", Decimal("0")),
        ("", Decimal("0")),
        (None, Decimal("0")),
        ("USD ٥٠٠٠.٠٠", Decimal("0")),
    ])
    def test_values(self, amount, expected):
        assert parse_amount_value(amount) == expected


class TestLargeDebitRule:

    def setup_method(self):
        self.rule = LargeDebitRule()

    def test_large_debit_triggers(self):
        assert self.rule.is_triggered(create_transaction("USD 1500.00"))

    def test_small_debit_does_not_trigger(self):
        assert not self.rule.is_triggered(create_transaction("USD 999.99"))

    def test_threshold_is_exclusive(self):
        assert not self.rule.is_triggered(create_transaction("USD 1000.00"))
        assert self.rule.is_triggered(create_transaction("USD 1000.01"))

    def test_credit_never_triggers(self):
        assert not self.rule.is_triggered(create_transaction("USD 5000.00", TransactionType.CREDIT))

    def test_missing_direction_never_triggers(self):
        assert not self.rule.is_triggered(create_transaction("USD 5000.00", None))

    def test_unparsable_amount_is_zero(self):
        assert not self.rule.is_triggered(create_transaction("null null"))

    def test_currency_is_ignored(self):
        assert self.rule.is_triggered(create_transaction("JPY 1001.00"))
        assert self.rule.is_triggered(create_transaction("€ 1001.00"))

    def test_custom_threshold(self):
        rule = LargeDebitRule(threshold=100)

        assert rule.is_triggered(create_transaction("USD 150.00"))
        assert not rule.is_triggered(create_transaction("USD 50.00"))


class TestAlertDispatcher:

    def setup_method(self):
        self.sink = CollectingAlertSink()
        self.dispatcher = AlertDispatcher(LargeDebitRule(), [self.sink])

    def test_alert_sent_to_sinks(self):
        transaction = create_transaction("USD 1500.00")

        alert = self.dispatcher.check(transaction)

        assert alert == LargeDebitAlert(amount="USD 1500.00", merchant="Fuel Station")
        assert self.sink.alerts == [alert]

    def test_no_alert_for_small_debit(self):
        assert self.dispatcher.check(create_transaction("USD 999.99")) is None
        assert self.sink.alerts == []

    def test_transaction_left_unchanged(self):
        transaction = create_transaction("USD 1500.00")
        before = (transaction.type, transaction.amount, transaction.merchant, transaction.category)

        self.dispatcher.check(transaction)

        assert (transaction.type, transaction.amount, transaction.merchant, transaction.category) == before

    def test_every_sink_notified(self):
        other = CollectingAlertSink()
        self.dispatcher.add_sink(other)

        self.dispatcher.check(create_transaction("USD 2000.00"))

        assert len(self.sink.alerts) == 1
        assert len(other.alerts) == 1


class TestAlertSinks:

    def test_alert_message(self):
        alert = LargeDebitAlert(amount="USD 1500.00", merchant="Fuel Station Purchase")
        assert alert.message == "ALERT: Large debit transaction detected: USD 1500.00 from Fuel Station Purchase"

    def test_alert_message_without_merchant(self):
        alert = LargeDebitAlert(amount="USD 1500.00", merchant=None)
        assert alert.message.endswith("from null")

    def test_logging_sink(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sms_ledger.utils.alerts"):
            LoggingAlertSink().notify(LargeDebitAlert(amount="USD 1500.00", merchant="Shop"))

        assert "Large debit transaction detected: USD 1500.00 from Shop" in caplog.text

    def test_console_sink(self, capsys):
        ConsoleAlertSink().notify(LargeDebitAlert(amount="USD 1500.00", merchant="Shop"))

        captured = capsys.readouterr()
        assert captured.out == "ALERT: Large debit transaction detected: USD 1500.00 from Shop\n"
