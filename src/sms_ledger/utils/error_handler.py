"""Error handling and structured logging for the SMS ledger."""

import json
import logging
import sys
import traceback
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any


class SmsLedgerError(Exception):
    """Base class for errors raised by the ledger"""


class EmptyMessageError(SmsLedgerError):
    """Raised when a blank message reaches the ledger"""


class OutputWriteError(SmsLedgerError):
    """Raised when the CSV or report file cannot be written"""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class ErrorSeverity(Enum):
    """Error severity levels"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    INPUT = "input"
    OUTPUT = "output"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


@dataclass
class ErrorDetail:
    """Detailed error information"""
    timestamp: str
    severity: str
    category: str
    error_code: str
    message: str
    file_path: Optional[str] = None
    raw_value: Optional[str] = None
    stack_trace: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add extra fields if present
        for field in ('error_code', 'file_path', 'category', 'context'):
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


class ErrorHandler:
    """Collects errors and warnings and writes them as JSON lines"""

    LOGGER_NAME = 'sms_ledger_events'

    # Error code mappings
    ERROR_CODES = {
        # Input errors
        "EMPTY_MESSAGE": "I001",
        "INPUT_READ_ERROR": "I002",

        # Output errors
        "OUTPUT_WRITE_ERROR": "O001",
        "OUTPUT_PERMISSION_DENIED": "O002",

        # System errors
        "UNEXPECTED_ERROR": "S999"
    }

    def __init__(self, log_directory: str = "logs", enable_console: bool = False):
        self.log_directory = Path(log_directory)
        self.log_directory.mkdir(parents=True, exist_ok=True)

        self.errors: List[ErrorDetail] = []
        self.warnings: List[ErrorDetail] = []

        self._setup_logging(enable_console)

    def _setup_logging(self, enable_console: bool):
        """Set up structured JSON logging"""
        self.logger = logging.getLogger(self.LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # Close handlers left over from a previous instance
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        day = datetime.now().strftime('%Y%m%d')

        file_handler = logging.FileHandler(self.log_directory / f"ledger_{day}.jsonl", encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(file_handler)

        # Console handler for human-readable logs
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
            self.logger.addHandler(console_handler)

        # Error file handler for errors only
        error_handler = logging.FileHandler(self.log_directory / f"errors_{day}.jsonl", encoding='utf-8')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(error_handler)

    def log_error(self,
                  message: str,
                  error_type: str,
                  category: ErrorCategory = ErrorCategory.SYSTEM,
                  file_path: Optional[str] = None,
                  raw_value: Optional[str] = None,
                  exception: Optional[BaseException] = None,
                  context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log an error with detailed information"""
        error_code = self.ERROR_CODES.get(error_type, "S999")
        stack_trace = None

        if exception:
            stack_trace = ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            ))

        error_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.ERROR.value,
            category=category.value,
            error_code=error_code,
            message=message,
            file_path=file_path,
            raw_value=raw_value,
            stack_trace=stack_trace,
            context=context or {}
        )
        self.errors.append(error_detail)

        self.logger.error(
            message,
            extra={
                'error_code': error_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )
        return error_detail

    def log_warning(self,
                    message: str,
                    warning_type: str,
                    category: ErrorCategory = ErrorCategory.SYSTEM,
                    raw_value: Optional[str] = None,
                    context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log a warning with detailed information"""
        warning_code = self.ERROR_CODES.get(warning_type, "W999")

        warning_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.WARNING.value,
            category=category.value,
            error_code=warning_code,
            message=message,
            raw_value=raw_value,
            context=context or {}
        )
        self.warnings.append(warning_detail)

        self.logger.warning(
            message,
            extra={
                'error_code': warning_code,
                'category': category.value,
                'context': context or {}
            }
        )
        return warning_detail

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log informational message"""
        self.logger.info(message, extra={'context': context or {}})

    def log_debug(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log debug message"""
        self.logger.debug(message, extra={'context': context or {}})

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors and warnings"""
        errors_by_category: Dict[str, int] = {}
        warnings_by_category: Dict[str, int] = {}

        for error in self.errors:
            errors_by_category[error.category] = errors_by_category.get(error.category, 0) + 1
        for warning in self.warnings:
            warnings_by_category[warning.category] = warnings_by_category.get(warning.category, 0) + 1

        return {
            'total_errors': len(self.errors),
            'total_warnings': len(self.warnings),
            'errors_by_category': errors_by_category,
            'warnings_by_category': warnings_by_category,
            'files_with_errors': len(set(e.file_path for e in self.errors if e.file_path)),
        }

    def clear_errors(self):
        """Clear all accumulated errors and warnings"""
        self.errors.clear()
        self.warnings.clear()
        self.log_info("Error history cleared")

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def close(self):
        """Release the log file handles"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)


def handle_output_error(error_handler: ErrorHandler,
                        file_path: str,
                        exception: BaseException) -> ErrorDetail:
    """Record a failure to write an output file"""
    cause = exception.__cause__ if isinstance(exception, OutputWriteError) else exception

    if isinstance(cause, PermissionError):
        return error_handler.log_error(
            f"Permission denied writing file: {file_path}",
            "OUTPUT_PERMISSION_DENIED",
            ErrorCategory.OUTPUT,
            file_path=file_path,
            exception=exception
        )
    return error_handler.log_error(
        f"Failed to write output file {file_path}: {exception}",
        "OUTPUT_WRITE_ERROR",
        ErrorCategory.OUTPUT,
        file_path=file_path,
        exception=exception
    )
