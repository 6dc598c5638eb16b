"""Command-line interface for the SMS ledger."""

import json
import sys
import click
from typing import Iterable, List, Optional, Dict, Any
import logging

from .utils.config_manager import ConfigManager
from .utils.error_handler import (
    EmptyMessageError,
    ErrorCategory,
    ErrorHandler,
    OutputWriteError,
    handle_output_error,
)
from .utils.alerts import (
    AlertDispatcher,
    AlertSink,
    CollectingAlertSink,
    ConsoleAlertSink,
    LargeDebitRule,
    LoggingAlertSink,
)
from .utils.csv_writer import TransactionCSVWriter
from .utils.report_writer import TransactionReportWriter
from .utils.validation import MessageValidator
from .parsers.sms_parser import SmsParser
from .models.core import ParserConfig, TransactionInfo, render_optional


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


PROMPT = "Please paste the transaction SMS (or type 'exit' to quit):"


def format_transaction_info(info: TransactionInfo) -> List[str]:
    """Console lines describing one parsed record"""
    account = info.account
    transaction = info.transaction
    available = info.balance.available if info.balance is not None else None

    return [
        "Parsed Transaction Information:",
        f"Account Info: Type = {account.type.value}, Number = {render_optional(account.number)}",
        f"Available Balance: {render_optional(available)}",
        (
            f"Transaction Details: Type = {render_optional(transaction.type)}, "
            f"Amount = {transaction.amount}, "
            f"Reference No = {render_optional(transaction.reference_no)}, "
            f"Merchant = {render_optional(transaction.merchant)}, "
            f"Date = {render_optional(transaction.date)}, "
            f"Category = {transaction.category}"
        ),
    ]


class SmsLedgerCLI:
    """Holds the state of one ledger session.

    ``transactions`` is the append-only list of records parsed so far. It is
    written in full to the CSV file and the report after every change.
    """

    def __init__(self,
                 config_path: Optional[str] = None,
                 config: Optional[ParserConfig] = None,
                 alert_sinks: Optional[Iterable[AlertSink]] = None):
        """Initialize CLI with configuration"""
        self.config_manager = ConfigManager(config_path)
        self.config = config or self.config_manager.load_config()
        self.error_handler = ErrorHandler(self.config.log_directory)
        self.validator = MessageValidator()

        self.session_alerts = CollectingAlertSink()
        if alert_sinks is None:
            # One channel only, both end up on the terminal
            if self.config.console_alerts:
                alert_sinks = [ConsoleAlertSink()]
            else:
                alert_sinks = [LoggingAlertSink()]
        dispatcher = AlertDispatcher(
            LargeDebitRule(self.config.alert_threshold),
            list(alert_sinks) + [self.session_alerts]
        )

        self.parser = SmsParser(self.config, alert_dispatcher=dispatcher)
        self.csv_writer = TransactionCSVWriter(self.config.transactions_file)
        self.report_writer = TransactionReportWriter(self.config.report_file)

        self.transactions: List[TransactionInfo] = []

    def process_message(self, message: str, save: bool = True) -> TransactionInfo:
        """Parse one message, add it to the session and refresh the outputs

        Raises:
            EmptyMessageError: If the message is blank
        """
        if self.validator.is_blank(message):
            self.error_handler.log_warning(
                "Blank message rejected",
                "EMPTY_MESSAGE",
                ErrorCategory.INPUT
            )
            raise EmptyMessageError("No input provided or input is empty")

        info = self.parser.get_transaction_info(message)
        self.transactions.append(info)
        self.error_handler.log_debug(
            f"Parsed message {len(self.transactions)}",
            context=info.to_dict()
        )

        if save:
            self.save_outputs()
        return info

    def process_messages(self, messages: Iterable[str]) -> Dict[str, Any]:
        """Process several messages, skipping blank ones, then write outputs once"""
        parsed = 0
        skipped = 0

        for line_number, message in enumerate(messages, 1):
            try:
                self.process_message(message, save=False)
                parsed += 1
            except EmptyMessageError:
                skipped += 1
                logger.debug(f"Skipping blank line {line_number}")

        output_errors = self.save_outputs()

        return {
            'success': not output_errors,
            'messages_parsed': parsed,
            'messages_skipped': skipped,
            'alerts': len(self.session_alerts.alerts),
            'errors': output_errors,
        }

    def save_outputs(self) -> List[str]:
        """Write the CSV file and the report for all session transactions

        Returns:
            Error messages for outputs that could not be written
        """
        errors = []

        for writer, write in (
            (self.csv_writer, self.csv_writer.write_transactions),
            (self.report_writer, self.report_writer.write_report),
        ):
            try:
                write(self.transactions)
            except OutputWriteError as e:
                handle_output_error(self.error_handler, writer.output_path, e)
                errors.append(str(e))

        return errors

    def generate_config_template(self, output_path: str) -> bool:
        """Generate configuration template file"""
        try:
            self.config_manager.save_config_template(output_path)
            return True
        except OSError as e:
            self.error_handler.log_error(
                f"Failed to generate config template: {str(e)}",
                "OUTPUT_WRITE_ERROR",
                ErrorCategory.CONFIGURATION,
                file_path=output_path,
                exception=e
            )
            return False


def _echo_info(info: TransactionInfo) -> None:
    click.echo()
    for line in format_transaction_info(info):
        click.echo(line)


# CLI Commands using Click
@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """SMS Ledger - Extract transactions from bank SMS notifications"""

    # Set up logging level
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Initialize CLI instance
    ctx.ensure_object(dict)
    ctx.obj['cli'] = SmsLedgerCLI(config)


@cli.command()
@click.pass_context
def interactive(ctx):
    """Paste messages one at a time until 'exit'"""

    cli_instance = ctx.obj['cli']
    validator = cli_instance.validator

    while True:
        try:
            user_input = click.prompt(PROMPT, default='', show_default=False, prompt_suffix='\n')
        except click.Abort:
            # End of input
            user_input = None

        if user_input is None or validator.is_exit_command(user_input):
            click.echo("Exiting the program.")
            break

        try:
            info = cli_instance.process_message(user_input, save=False)
        except EmptyMessageError:
            click.echo("No input provided or input is empty. Please try again.")
            continue

        _echo_info(info)

        errors = cli_instance.save_outputs()
        for error in errors:
            click.echo(f"✗ {error}")
        if not errors:
            click.echo(f"Transaction added to {cli_instance.csv_writer.output_path}")
            click.echo(f"Transaction report created at {cli_instance.report_writer.output_path}")


@cli.command()
@click.argument('message')
@click.option('--json', 'as_json', is_flag=True, help='Print the parsed record as JSON')
@click.pass_context
def parse(ctx, message, as_json):
    """Parse a single message without writing any files"""

    cli_instance = ctx.obj['cli']

    if cli_instance.validator.is_blank(message):
        click.echo("✗ No input provided or input is empty.")
        sys.exit(1)

    info = cli_instance.parser.get_transaction_info(message)

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
    else:
        for line in format_transaction_info(info):
            click.echo(line)


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def process(ctx, input_file):
    """Process a file holding one message per line"""

    cli_instance = ctx.obj['cli']

    click.echo(f"Processing messages from {input_file}...")

    try:
        with open(input_file, 'r', encoding='utf-8') as f:
            result = cli_instance.process_messages(line.rstrip('\n') for line in f)
    except (UnicodeDecodeError, OSError) as e:
        cli_instance.error_handler.log_error(
            f"Failed to read {input_file}: {str(e)}",
            "INPUT_READ_ERROR",
            ErrorCategory.INPUT,
            file_path=input_file,
            exception=e
        )
        # Keep whatever was parsed before the bad line
        cli_instance.save_outputs()
        click.echo(f"✗ Failed to read {input_file}: {str(e)}")
        click.echo(f"  Messages parsed before the error: {len(cli_instance.transactions)}")
        sys.exit(1)

    summary = cli_instance.report_writer.build_summary(cli_instance.transactions)

    if result['success']:
        click.echo("✓ Processing completed successfully")
    else:
        click.echo("✗ Processing completed with output errors")
        for error in result['errors']:
            click.echo(f"  {error}")

    click.echo(f"  Messages parsed: {result['messages_parsed']}")
    if result['messages_skipped'] > 0:
        click.echo(f"  Blank lines skipped: {result['messages_skipped']}")
    click.echo(f"  Large debit alerts: {result['alerts']}")
    click.echo(f"  Total debit: {summary.total_debit:.2f}")
    click.echo(f"  Total credit: {summary.total_credit:.2f}")
    click.echo(f"  CSV: {cli_instance.csv_writer.output_path}")
    click.echo(f"  Report: {cli_instance.report_writer.output_path}")

    if not result['success']:
        sys.exit(1)


@cli.command()
@click.argument('output_path', default='sms_ledger.json')
@click.option('--format', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
@click.pass_context
def init_config(ctx, output_path, format):
    """Generate configuration template file"""

    cli_instance = ctx.obj['cli']

    # Adjust extension based on format
    if format == 'yaml' and not output_path.endswith(('.yml', '.yaml')):
        output_path = output_path.replace('.json', '.yml')
    elif format == 'json' and not output_path.endswith('.json'):
        output_path = output_path.replace('.yml', '.json').replace('.yaml', '.json')

    if cli_instance.generate_config_template(output_path):
        click.echo(f"✓ Configuration template generated: {output_path}")
    else:
        click.echo("✗ Failed to generate configuration template")
        sys.exit(1)


if __name__ == '__main__':
    cli()
