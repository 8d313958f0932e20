"""Configuration management system."""

from __future__ import annotations

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from .constants import (
    DEFAULT_MARKET_FEED_URL,
    DEFAULT_INVESTMENT_FEED_URL,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_CACHE_TTL_SECONDS,
    MARKET_OPEN_HOUR,
    MARKET_CLOSE_HOUR,
    DEFAULT_TIMEZONE_NAME,
    MARKET_VIEW_CURRENCY,
    INVESTMENT_VIEW_CURRENCY,
    DEFAULT_VIEW,
    LOG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_FORMAT,
)

logger = logging.getLogger(__name__)


class Settings:
    """Configuration management class for the dashboard.

    Holds feed endpoints, fetch and cache timing, market hours and
    display preferences. Values come from built-in defaults, an optional
    JSON file and environment variables, in that order.
    """

    def __init__(self, config_file: Optional[str] = None):
        """Initialize settings.

        Args:
            config_file: Optional path to configuration file
        """
        self._config: Dict[str, Any] = {}
        self._config_file = config_file
        self._load_default_config()

        if config_file:
            self.load_from_file(config_file)

        # Load from environment variables
        self._load_from_environment()

    def _load_default_config(self) -> None:
        """Load default configuration values."""
        self._config = {
            'feeds': {
                'market_url': DEFAULT_MARKET_FEED_URL,
                'investment_url': DEFAULT_INVESTMENT_FEED_URL,
                'timeout_seconds': DEFAULT_FETCH_TIMEOUT_SECONDS,
                'cache_ttl_seconds': DEFAULT_CACHE_TTL_SECONDS,
            },
            'market_hours': {
                'timezone': DEFAULT_TIMEZONE_NAME,
                'open_hour': MARKET_OPEN_HOUR,
                'close_hour': MARKET_CLOSE_HOUR,
                'weekdays_only': True,
            },
            'dashboard': {
                'default_view': DEFAULT_VIEW,
                'market_currency': MARKET_VIEW_CURRENCY,
                'investment_currency': INVESTMENT_VIEW_CURRENCY,
            },
            'logging': {
                'level': DEFAULT_LOG_LEVEL,
                'file': LOG_FILE,
                'format': DEFAULT_LOG_FORMAT,
            },
        }

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        if os.getenv('MARKET_FEED_URL'):
            self._config['feeds']['market_url'] = os.getenv('MARKET_FEED_URL')

        if os.getenv('INVESTMENT_FEED_URL'):
            self._config['feeds']['investment_url'] = os.getenv('INVESTMENT_FEED_URL')

        if os.getenv('DASHBOARD_FETCH_TIMEOUT'):
            self._config['feeds']['timeout_seconds'] = float(os.getenv('DASHBOARD_FETCH_TIMEOUT'))

        if os.getenv('DASHBOARD_CACHE_TTL'):
            self._config['feeds']['cache_ttl_seconds'] = int(os.getenv('DASHBOARD_CACHE_TTL'))

        if os.getenv('DASHBOARD_TIMEZONE'):
            self._config['market_hours']['timezone'] = os.getenv('DASHBOARD_TIMEZONE')

        if os.getenv('DASHBOARD_DEFAULT_VIEW'):
            self._config['dashboard']['default_view'] = os.getenv('DASHBOARD_DEFAULT_VIEW').lower()

        # Development mode
        if os.getenv('DASHBOARD_DEV', 'false').lower() == 'true':
            self._config['logging']['level'] = 'DEBUG'

    def load_from_file(self, config_file: str) -> None:
        """Load configuration from JSON file.

        Args:
            config_file: Path to configuration file
        """
        config_path = Path(config_file)

        if not config_path.exists():
            logger.warning(f"Configuration file not found: {config_file}")
            return

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load configuration file {config_file}: {e}")
            return

        # Merge with existing configuration
        self._merge_config(self._config, file_config)
        logger.info(f"Loaded configuration from: {config_file}")

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation, e.g., 'feeds.market_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by key.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split('.')
        config = self._config

        # Navigate to the parent dictionary
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_market_feed_url(self) -> str:
        return self.get('feeds.market_url', DEFAULT_MARKET_FEED_URL)

    def get_investment_feed_url(self) -> str:
        return self.get('feeds.investment_url', DEFAULT_INVESTMENT_FEED_URL)

    def get_fetch_timeout(self) -> float:
        return float(self.get('feeds.timeout_seconds', DEFAULT_FETCH_TIMEOUT_SECONDS))

    def get_cache_ttl(self) -> int:
        return int(self.get('feeds.cache_ttl_seconds', DEFAULT_CACHE_TTL_SECONDS))

    def get_market_hours_config(self) -> Dict[str, Any]:
        """Get market hours configuration.

        Returns:
            Dictionary with timezone, open_hour, close_hour and weekdays_only
        """
        return self.get('market_hours', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.

        Returns:
            Logging configuration dictionary
        """
        return self.get('logging', {})


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_system(config_file: Optional[str] = None) -> Settings:
    """Configure the system with settings.

    Args:
        config_file: Optional path to configuration file

    Returns:
        Configured settings instance
    """
    global _settings
    _settings = Settings(config_file)
    return _settings
