"""
Market data feed fetcher.

This module provides the MarketDataFetcher class that loads the dashboard's
JSON market-data feed over HTTP. A feed is a JSON object whose keys are sheet
names ("Assets", "TimeSeries", "Stocks", ...) and whose values are arrays of
loosely-typed records.

Two loading modes are supported:
1. Strict: any failure raises MarketDataError (market and sheet views)
2. With fallback: failures are logged and a fallback feed is returned
   (investment view, which falls back to the embedded mock feed)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

Feed = Dict[str, Any]


class MarketDataError(Exception):
    """Raised when the market data feed cannot be loaded."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


@dataclass
class FetchResult:
    """Result of a feed fetch operation."""
    data: Feed
    source: str  # "remote" | "mock"
    url: Optional[str] = None
    fetched_at: datetime = field(default_factory=datetime.now)
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source != "remote"

    def sheet(self, name: str) -> List[Dict[str, Any]]:
        """Return a sheet's records, or an empty list when absent."""
        value = self.data.get(name)
        return value if isinstance(value, list) else []


class MarketDataFetcher:
    """
    Fetches the dashboard's JSON feed with optional fallback data.

    A single GET per load; no retries. The requests session can be injected
    for testing.
    """

    def __init__(self, settings: Optional[Any] = None, session: Optional[requests.Session] = None):
        """
        Initialize the market data fetcher.

        Args:
            settings: Optional settings instance (defaults to global settings)
            session: Optional requests session used for HTTP calls
        """
        if settings is None:
            from config.settings import get_settings  # lazy import to avoid cycles
            settings = get_settings()
        self.settings = settings
        self.session = session

    def fetch_feed(
        self,
        url: Optional[str] = None,
        fallback: Optional[Callable[[], Feed]] = None,
        timeout: Optional[float] = None,
    ) -> FetchResult:
        """
        Fetch a feed document.

        Args:
            url: Feed URL (defaults to the configured market feed)
            fallback: Optional callable returning a feed to use on failure
            timeout: Request timeout in seconds (defaults to configured value)

        Returns:
            FetchResult with the parsed feed and its source

        Raises:
            MarketDataError: If the fetch fails and no fallback is given
        """
        url = url or self.settings.get_market_feed_url()
        timeout = timeout if timeout is not None else self.settings.get_fetch_timeout()

        try:
            data = self._get_json(url, timeout)
        except MarketDataError as e:
            if fallback is None:
                logger.error(f"Feed fetch failed for {url}: {e}")
                raise
            logger.warning(f"Feed fetch failed for {url}, using fallback data: {e}")
            return FetchResult(fallback(), "mock", url=url, error=str(e))

        logger.info(f"Loaded feed from {url} ({len(data)} keys)")
        return FetchResult(data, "remote", url=url)

    def fetch_market_feed(self) -> FetchResult:
        """Fetch the market feed; raises MarketDataError on failure."""
        return self.fetch_feed(self.settings.get_market_feed_url())

    def fetch_investment_feed(self) -> FetchResult:
        """Fetch the investment feed, falling back to the embedded mock feed."""
        from .mock_data import get_mock_feed

        return self.fetch_feed(self.settings.get_investment_feed_url(), fallback=get_mock_feed)

    def _get_json(self, url: str, timeout: float) -> Feed:
        """GET a URL and return its JSON object body."""
        getter = self.session.get if self.session is not None else requests.get

        try:
            response = getter(url, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise MarketDataError(f"Failed to fetch market data: {e}", url=url) from e

        if not response.ok:
            raise MarketDataError(
                f"Failed to fetch market data: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MarketDataError(f"Invalid market data payload: {e}", url=url) from e

        if not isinstance(data, dict):
            raise MarketDataError(
                f"Invalid market data payload: expected object, got {type(data).__name__}",
                url=url,
            )

        return data
