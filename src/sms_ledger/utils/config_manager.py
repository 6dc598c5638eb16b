"""Configuration management for the SMS ledger."""

import json
import os
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, Optional
import logging

import yaml

from ..models.core import ParserConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages loading and validation of ledger configuration"""

    SEARCH_PATHS = [
        'sms_ledger.json',
        'sms_ledger.yml',
        'sms_ledger.yaml',
        'config/sms_ledger.json',
        'config/sms_ledger.yml',
        'config/sms_ledger.yaml',
        '~/.sms_ledger/config.json',
        '~/.sms_ledger/config.yml',
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
        """
        self.config_path = config_path
        self._config_cache: Optional[ParserConfig] = None

    def load_config(self, force_reload: bool = False) -> ParserConfig:
        """Load configuration from file or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            ParserConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config_data = self._load_config_file()
        defaults = ParserConfig()

        try:
            self._config_cache = ParserConfig(
                transactions_file=config_data.get('transactions_file', defaults.transactions_file),
                report_file=config_data.get('report_file', defaults.report_file),
                alert_threshold=Decimal(str(config_data.get('alert_threshold', defaults.alert_threshold))),
                log_directory=config_data.get('log_directory', defaults.log_directory),
                console_alerts=config_data.get('console_alerts', defaults.console_alerts),
            )
            logger.info(f"Configuration loaded successfully from {self.config_path or 'defaults'}")
            return self._config_cache

        except (InvalidOperation, TypeError, ValueError) as e:
            logger.warning(f"Error loading configuration: {e}. Using defaults.")
            self._config_cache = defaults
            return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no file found
        """
        config_file = self._find_config_file()

        if not config_file or not os.path.exists(config_file):
            logger.info("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    return {}

            self._validate_config_data(data)
            logger.info(f"Configuration loaded from {config_file}")
            return data

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error reading configuration file {config_file}: {e}")
            return {}

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations"""
        if self.config_path:
            return self.config_path

        for path in self.SEARCH_PATHS:
            path = os.path.expanduser(path)
            if os.path.exists(path):
                return path

        return None

    def _validate_config_data(self, data: Dict[str, Any]) -> None:
        """Validate configuration data structure

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        for path_key in ['transactions_file', 'report_file', 'log_directory']:
            if path_key in data:
                if not isinstance(data[path_key], str):
                    raise ValueError(f"{path_key} must be a string")
                if not data[path_key].strip():
                    raise ValueError(f"{path_key} cannot be empty")

        if 'console_alerts' in data and not isinstance(data['console_alerts'], bool):
            raise ValueError("console_alerts must be a boolean")

        if 'alert_threshold' in data:
            threshold = data['alert_threshold']
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float, str)):
                raise ValueError("alert_threshold must be a number")
            try:
                value = Decimal(str(threshold))
            except InvalidOperation:
                raise ValueError(f"alert_threshold is not a number: {threshold}")
            if not value.is_finite() or value < 0:
                raise ValueError("alert_threshold must be a non-negative number")

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        template = {
            "transactions_file": "transactions.csv",
            "report_file": "transaction_report.txt",
            "alert_threshold": 1000,
            "log_directory": "logs",
            "console_alerts": True
        }

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if output_path.endswith(('.yml', '.yaml')):
                yaml.dump(template, f, default_flow_style=False, indent=2)
            else:
                json.dump(template, f, indent=2)

        logger.info(f"Configuration template saved to {output_path}")

    def update_config(self, updates: Dict[str, Any]) -> None:
        """Update configuration with new values"""
        if self._config_cache is None:
            self.load_config()

        for key, value in updates.items():
            if hasattr(self._config_cache, key):
                if key == 'alert_threshold':
                    value = Decimal(str(value))
                setattr(self._config_cache, key, value)
                logger.debug(f"Updated configuration: {key} = {value}")
            else:
                logger.warning(f"Unknown configuration key: {key}")

    def reset_config(self) -> None:
        """Reset configuration cache, forcing reload on next access"""
        self._config_cache = None
        logger.debug("Configuration cache reset")

