"""Tests for CSV output and its validation."""

import os

import pytest

from sms_ledger.parsers.sms_parser import SmsParser
from sms_ledger.utils.alerts import AlertDispatcher
from sms_ledger.utils.csv_writer import TransactionCSVWriter
from sms_ledger.utils.error_handler import OutputWriteError
from sms_ledger.utils.validation import MessageValidator


HEADER = "Account Type,Account Number,Transaction Type,Amount,Merchant,Date,Category"


class TestTransactionCSVWriter:
    """Test cases for TransactionCSVWriter"""

    @pytest.fixture(autouse=True)
    def setup(self, tmp_path):
        self.output_path = str(tmp_path / "out" / "transactions.csv")
        self.writer = TransactionCSVWriter(self.output_path)
        self.parser = SmsParser(alert_dispatcher=AlertDispatcher(sinks=[]))

    def _read_lines(self):
        with open(self.output_path, encoding='utf-8') as f:
            return f.read().splitlines()

    def test_header_and_row(self, fuel_debit_message):
        self.writer.write_transactions([self.parser.parse(fuel_debit_message)])

        assert self._read_lines() == [
            HEADER,
            "ACCOUNT,123**456,DEBIT,USD 1500.00,Fuel Station Purchase,15-Mar-24,Fuel",
        ]

    def test_absent_fields_written_as_null(self):
        self.writer.write_transactions([self.parser.parse("Hello, how are you?")])

        assert self._read_lines()[1] == "UNKNOWN,null,null,null null,null,null,Unknown"

    def test_empty_list_writes_header_only(self):
        self.writer.write_transactions([])

        assert self._read_lines() == [HEADER]

    def test_rewrite_keeps_order_without_duplicates(self, fuel_debit_message, grocery_credit_message):
        transactions = [self.parser.parse(fuel_debit_message)]
        self.writer.write_transactions(transactions)

        transactions.append(self.parser.parse(grocery_credit_message))
        self.writer.write_transactions(transactions)

        lines = self._read_lines()
        assert len(lines) == 3
        assert lines[1].startswith("ACCOUNT,123**456,DEBIT")
        assert lines[2].startswith("ACCOUNT,987**654,CREDIT")

    def test_commas_are_not_escaped(self):
        info = self.parser.parse("Debited USD 5.00 REF:Z1 Bread, Milk on 01-Jan-24")
        self.writer.write_transactions([info])

        assert self._read_lines()[1] == "UNKNOWN,null,DEBIT,USD 5.00,Bread, Milk,01-Jan-24,Others"

    def test_read_rows(self, fuel_debit_message):
        self.writer.write_transactions([self.parser.parse(fuel_debit_message)])

        rows = self.writer.read_rows()
        assert rows[0] == TransactionCSVWriter.HEADERS
        assert rows[1][1] == "123**456"

    def test_write_failure_raises(self, tmp_path, fuel_debit_message):
        # A directory where the file should be
        blocked = tmp_path / "blocked.csv"
        blocked.mkdir()
        writer = TransactionCSVWriter(str(blocked))

        with pytest.raises(OutputWriteError) as exc_info:
            writer.write_transactions([self.parser.parse(fuel_debit_message)])

        assert exc_info.value.file_path == str(blocked)
        assert isinstance(exc_info.value.__cause__, OSError)


class TestMessageValidator:
    """Test cases for MessageValidator"""

    def setup_method(self):
        self.validator = MessageValidator()

    @pytest.mark.parametrize("message", [None, "", "   ", "\t\n"])
    def test_blank(self, message):
        assert self.validator.is_blank(message)

    def test_not_blank(self):
        assert not self.validator.is_blank("Debited USD 5.00")

    @pytest.mark.parametrize("message", ["exit", "EXIT", " Exit "])
    def test_exit_command(self, message):
        assert self.validator.is_exit_command(message)

    def test_not_exit_command(self):
        assert not self.validator.is_exit_command("exit now")
        assert not self.validator.is_exit_command(None)

    def test_validate_written_csv(self, tmp_path, fuel_debit_message):
        path = str(tmp_path / "transactions.csv")
        parser = SmsParser(alert_dispatcher=AlertDispatcher(sinks=[]))
        TransactionCSVWriter(path).write_transactions([parser.parse(fuel_debit_message)])

        assert self.validator.validate_csv_output(path) == []

    def test_validate_reports_shifted_columns(self, tmp_path):
        path = str(tmp_path / "transactions.csv")
        parser = SmsParser(alert_dispatcher=AlertDispatcher(sinks=[]))
        info = parser.parse("Debited USD 5.00 REF:Z1 Bread, Milk on 01-Jan-24")
        TransactionCSVWriter(path).write_transactions([info])

        errors = self.validator.validate_csv_output(path)
        assert errors == ["Row 2: expected 7 columns, got 8"]

    def test_validate_missing_file(self, tmp_path):
        path = str(tmp_path / "missing.csv")
        assert self.validator.validate_csv_output(path) == [f"CSV file does not exist: {path}"]

    def test_validate_bad_header(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("a,b,c\n", encoding='utf-8')

        errors = self.validator.validate_csv_output(str(path))
        assert len(errors) == 1
        assert errors[0].startswith("Invalid CSV headers")
