"""Delimited-text output of parsed transactions."""

import logging
import os
from typing import List

from ..models.core import TransactionInfo, render_optional
from .error_handler import OutputWriteError


logger = logging.getLogger(__name__)


class TransactionCSVWriter:
    """Writes transactions as comma separated rows.

    Values are written as-is, without quoting or escaping, so a merchant
    containing a comma spills into the next column.
    """

    HEADERS = [
        'Account Type',
        'Account Number',
        'Transaction Type',
        'Amount',
        'Merchant',
        'Date',
        'Category',
    ]
    DELIMITER = ','

    def __init__(self, output_path: str = "transactions.csv"):
        self.output_path = output_path

    def format_row(self, info: TransactionInfo) -> str:
        """Render one record as a delimited line (without newline)"""
        values = [
            info.account.type,
            info.account.number,
            info.transaction.type,
            info.transaction.amount,
            info.transaction.merchant,
            info.transaction.date,
            info.transaction.category,
        ]
        return self.DELIMITER.join(render_optional(value) for value in values)

    def write_transactions(self, transactions: List[TransactionInfo]) -> str:
        """
        Write the header and every transaction, in list order

        Args:
            transactions: All records collected so far

        Returns:
            Path of the written file

        Raises:
            OutputWriteError: If the file cannot be written
        """
        output_dir = os.path.dirname(self.output_path)

        try:
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)

            with open(self.output_path, 'w', newline='', encoding='utf-8') as csvfile:
                csvfile.write(self.DELIMITER.join(self.HEADERS) + '\n')
                for info in transactions:
                    csvfile.write(self.format_row(info) + '\n')

        except OSError as e:
            raise OutputWriteError(f"Cannot write {self.output_path}: {e}", self.output_path) from e

        logger.info(f"Wrote {len(transactions)} transactions to {self.output_path}")
        return self.output_path

    def read_rows(self, path: str = None) -> List[List[str]]:
        """Read a written file back as lists of column values, header included"""
        with open(path or self.output_path, 'r', encoding='utf-8') as csvfile:
            return [line.rstrip('\n').split(self.DELIMITER) for line in csvfile if line.strip()]
