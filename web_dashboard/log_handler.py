#!/usr/bin/env python3
"""
Logging setup for the dashboard app.
Writes app logs to logs/app.log and keeps a thread-safe circular buffer of
recent records for display in the UI.
"""

import functools
import logging
import os
import threading
import time
from collections import deque
from datetime import datetime
from typing import Dict, List, Optional

import pytz

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Application loggers that receive our handlers
APP_MODULES = [
    'streamlit_utils',
    'chart_utils',
    'views',
    'market_data',
    'analytics',
    'config',
    'log_handler',
    '__main__',
]


class MarketTimeFormatter(logging.Formatter):
    """Formatter that displays timestamps in the market's timezone."""

    def __init__(self, fmt=None, datefmt=None, timezone_name: str = "Asia/Shanghai"):
        super().__init__(fmt, datefmt)
        try:
            self.tz = pytz.timezone(timezone_name)
        except pytz.UnknownTimeZoneError:
            self.tz = pytz.utc

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.tz)
        return dt.strftime(datefmt or LOG_DATE_FORMAT)


class InMemoryLogHandler(logging.Handler):
    """Custom logging handler that stores recent log messages in memory.

    Thread-safe circular buffer with configurable size.
    """

    def __init__(self, maxlen=500, timezone_name: str = "Asia/Shanghai"):
        super().__init__()
        self.log_records = deque(maxlen=maxlen)
        self.lock = threading.Lock()
        self.setFormatter(MarketTimeFormatter(LOG_FORMAT, LOG_DATE_FORMAT, timezone_name))

    def emit(self, record):
        """Store formatted log record in buffer."""
        try:
            msg = self.format(record)
            with self.lock:
                self.log_records.append({
                    'timestamp': datetime.fromtimestamp(record.created),
                    'level': record.levelname,
                    'module': record.name,
                    'message': record.getMessage(),
                    'formatted': msg
                })
        except Exception:
            self.handleError(record)

    def get_logs(self, n=None, level=None, module=None, search=None) -> List[Dict]:
        """Get recent log records with optional filtering.

        Args:
            n: Number of recent logs to return (None = all)
            level: Filter by log level (e.g., 'INFO', 'ERROR')
            module: Filter by module name (partial match)
            search: Filter by message text (case-insensitive)

        Returns:
            List of log record dictionaries
        """
        with self.lock:
            logs = list(self.log_records)

        if level:
            logs = [log for log in logs if log['level'] == level]

        if module:
            logs = [log for log in logs if module.lower() in log['module'].lower()]

        if search:
            search_lower = search.lower()
            logs = [log for log in logs if search_lower in log['message'].lower()]

        if n:
            logs = logs[-n:]

        return logs

    def get_formatted_logs(self, n=None, level=None, module=None, search=None) -> List[str]:
        """Get formatted log strings (for download/display)."""
        logs = self.get_logs(n=n, level=level, module=module, search=search)
        return [log['formatted'] for log in logs]

    def clear(self):
        """Clear all log records."""
        with self.lock:
            self.log_records.clear()


# Global handler instance
_log_handler: Optional[InMemoryLogHandler] = None
_configured = False


def get_log_handler() -> InMemoryLogHandler:
    """Get the global in-memory log handler instance."""
    global _log_handler
    if _log_handler is None:
        _log_handler = InMemoryLogHandler(maxlen=500)
    return _log_handler


def setup_logging(level=logging.INFO, timezone_name: str = "Asia/Shanghai", log_dir: Optional[str] = None):
    """Setup logging with file and in-memory handlers for app modules.

    Handlers are attached to app-specific loggers only, not the root logger.
    Safe to call on every Streamlit rerun.

    Args:
        level: Log level (default: INFO)
        timezone_name: Timezone for log timestamps
        log_dir: Directory for app.log (defaults to ./logs beside this file)
    """
    global _configured
    if _configured:
        return

    log_dir = log_dir or os.path.join(os.path.dirname(__file__), 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'app.log')

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(MarketTimeFormatter(LOG_FORMAT, LOG_DATE_FORMAT, timezone_name))
    file_handler.setLevel(level)

    memory_handler = get_log_handler()

    for module_name in APP_MODULES:
        logger = logging.getLogger(module_name)

        # Remove existing handlers to avoid duplicates
        for h in logger.handlers[:]:
            logger.removeHandler(h)

        logger.addHandler(file_handler)
        logger.addHandler(memory_handler)
        logger.setLevel(level)

        # Disable propagation to prevent Streamlit interference
        logger.propagate = False

    _configured = True


def log_message(message: str, level: str = 'INFO', module: str = 'app'):
    """Convenience function to log a message."""
    logger = logging.getLogger(module)
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.log(log_level, message)


def log_execution_time(module_name=None):
    """Decorator to log execution time of functions.

    Args:
        module_name: Optional module name for log record.
                    If None, uses function's module.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.time() - start_time
                mod = module_name or func.__module__

                # Use INFO for slow ops (>1s), DEBUG for fast ones
                level = 'INFO' if duration > 1.0 else 'DEBUG'
                log_message(f"PERF: {func.__name__} took {duration:.3f}s", level=level, module=mod)
        return wrapper
    return decorator
