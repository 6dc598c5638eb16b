"""Utility functions and helpers"""

from .classifier import TransactionClassifier
from .alerts import (
    AlertDispatcher,
    AlertSink,
    CollectingAlertSink,
    ConsoleAlertSink,
    LargeDebitAlert,
    LargeDebitRule,
    LoggingAlertSink,
    parse_amount_value,
)
from .csv_writer import TransactionCSVWriter
from .report_writer import TransactionReportWriter, ReportSummary
from .validation import MessageValidator
from .config_manager import ConfigManager
from .error_handler import (
    EmptyMessageError,
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    OutputWriteError,
    SmsLedgerError,
    handle_output_error,
)

__all__ = [
    'TransactionClassifier',
    'AlertDispatcher',
    'AlertSink',
    'CollectingAlertSink',
    'ConsoleAlertSink',
    'LargeDebitAlert',
    'LargeDebitRule',
    'LoggingAlertSink',
    'parse_amount_value',
    'TransactionCSVWriter',
    'TransactionReportWriter',
    'ReportSummary',
    'MessageValidator',
    'ConfigManager',
    'EmptyMessageError',
    'ErrorCategory',
    'ErrorHandler',
    'ErrorSeverity',
    'OutputWriteError',
    'SmsLedgerError',
    'handle_output_error',
]
