"""
Market hours for the dashboard status badge.

This module provides the MarketHours class for deciding whether the
exchange is currently trading. Hours and timezone come from settings.
"""

import logging
from datetime import datetime
from typing import Optional

import pytz

from config.settings import Settings, get_settings
from config.constants import MARKET_OPEN_HOUR, MARKET_CLOSE_HOUR, DEFAULT_TIMEZONE_NAME

logger = logging.getLogger(__name__)


class MarketHours:
    """
    Market open/closed detection.

    The session runs from open_hour (inclusive) to close_hour (exclusive)
    in the configured trading timezone.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize market hours calculator.

        Args:
            settings: Optional settings instance for configuration
        """
        self.settings = settings or get_settings()
        config = self.settings.get_market_hours_config()
        self.open_hour = int(config.get('open_hour', MARKET_OPEN_HOUR))
        self.close_hour = int(config.get('close_hour', MARKET_CLOSE_HOUR))
        self.weekdays_only = bool(config.get('weekdays_only', True))
        self._timezone_name = config.get('timezone', DEFAULT_TIMEZONE_NAME)
        self._timezone = None

    def get_trading_timezone(self):
        """Get the configured trading timezone."""
        if self._timezone is None:
            try:
                self._timezone = pytz.timezone(self._timezone_name)
            except pytz.UnknownTimeZoneError:
                logger.warning(f"Unknown timezone '{self._timezone_name}', using {DEFAULT_TIMEZONE_NAME}")
                self._timezone = pytz.timezone(DEFAULT_TIMEZONE_NAME)
        return self._timezone

    def is_market_open(self, target_time: Optional[datetime] = None) -> bool:
        """
        Check if the market is open.

        Args:
            target_time: Optional specific time to check (defaults to now).
                Naive datetimes are taken as trading-timezone local time.

        Returns:
            True if market is open, False otherwise
        """
        tz = self.get_trading_timezone()
        now = target_time or datetime.now(tz)

        if now.tzinfo is None:
            now = tz.localize(now)
        else:
            now = now.astimezone(tz)

        if self.weekdays_only and now.weekday() >= 5:
            return False

        return self.open_hour <= now.hour < self.close_hour

    def get_market_status(self, target_time: Optional[datetime] = None) -> str:
        """Return "Open" or "Closed" for the status badge."""
        return "Open" if self.is_market_open(target_time) else "Closed"
