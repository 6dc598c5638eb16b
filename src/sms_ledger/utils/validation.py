"""Validation of incoming messages and written CSV output."""

import os
from typing import List, Optional

from .csv_writer import TransactionCSVWriter


class MessageValidator:
    """Checks input before it reaches the parser and output after it is written"""

    EXIT_COMMAND = 'exit'

    def __init__(self):
        self.csv_headers = list(TransactionCSVWriter.HEADERS)

    @staticmethod
    def is_blank(message: Optional[str]) -> bool:
        return message is None or not message.strip()

    def is_exit_command(self, message: Optional[str]) -> bool:
        return message is not None and message.strip().lower() == self.EXIT_COMMAND

    def validate_csv_output(self, csv_path: str) -> List[str]:
        """Validate generated CSV file for data integrity"""
        errors = []

        if not os.path.exists(csv_path):
            errors.append(f"CSV file does not exist: {csv_path}")
            return errors

        if os.path.getsize(csv_path) == 0:
            errors.append(f"CSV file is empty: {csv_path}")
            return errors

        try:
            rows = TransactionCSVWriter(csv_path).read_rows()
        except UnicodeDecodeError:
            errors.append(f"CSV file encoding error: {csv_path}")
            return errors

        header, data_rows = rows[0], rows[1:]
        if header != self.csv_headers:
            errors.append(f"Invalid CSV headers. Expected: {self.csv_headers}, Got: {header}")

        for row_num, row in enumerate(data_rows, start=2):  # Start at 2 because of header
            # Unescaped commas in merchant text shift the remaining columns
            if len(row) != len(self.csv_headers):
                errors.append(
                    f"Row {row_num}: expected {len(self.csv_headers)} columns, got {len(row)}"
                )

        return errors
