"""Human-readable transaction report."""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from ..models.core import TransactionInfo, TransactionType, render_optional
from .alerts import parse_amount_value
from .error_handler import OutputWriteError


logger = logging.getLogger(__name__)


@dataclass
class ReportSummary:
    """Totals over a list of transactions"""
    total_debit: Decimal
    total_credit: Decimal
    debit_count: int
    credit_count: int
    transaction_count: int

    @property
    def net(self) -> Decimal:
        return self.total_credit - self.total_debit


class TransactionReportWriter:
    """Builds and writes the plain-text transaction report"""

    TITLE = "Transaction Report"

    def __init__(self, output_path: str = "transaction_report.txt"):
        self.output_path = output_path

    def build_summary(self, transactions: List[TransactionInfo]) -> ReportSummary:
        debits = [t for t in transactions if t.transaction.type is TransactionType.DEBIT]
        credits = [t for t in transactions if t.transaction.type is TransactionType.CREDIT]

        return ReportSummary(
            total_debit=sum((parse_amount_value(t.transaction.amount) for t in debits), Decimal('0')),
            total_credit=sum((parse_amount_value(t.transaction.amount) for t in credits), Decimal('0')),
            debit_count=len(debits),
            credit_count=len(credits),
            transaction_count=len(transactions),
        )

    @staticmethod
    def format_detail(index: int, info: TransactionInfo) -> str:
        """One numbered line of the details section, numbering starts at 1"""
        transaction = info.transaction
        return (
            f"{index}. {render_optional(transaction.type)} of {transaction.amount} "
            f"at {render_optional(transaction.merchant)} on {render_optional(transaction.date)} "
            f"in category {transaction.category}"
        )

    def render(self, transactions: List[TransactionInfo]) -> str:
        summary = self.build_summary(transactions)

        lines = [
            self.TITLE,
            "",
            f"Total Debit: ${summary.total_debit:.2f}",
            f"Total Credit: ${summary.total_credit:.2f}",
            "",
            "Transaction Details:",
        ]
        lines.extend(self.format_detail(i, info) for i, info in enumerate(transactions, 1))
        return '\n'.join(lines) + '\n'

    def write_report(self, transactions: List[TransactionInfo]) -> str:
        """Rewrite the report file for the given transactions.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        content = self.render(transactions)
        output_dir = os.path.dirname(self.output_path)

        try:
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)
            with open(self.output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise OutputWriteError(f"Cannot write {self.output_path}: {e}", self.output_path) from e

        logger.info(f"Transaction report created at {self.output_path}")
        return self.output_path
