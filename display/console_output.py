"""Console output module for colored messages and formatting.

This module provides colored console output functions built on Rich, with a
colorama plain-text mode for terminals where Rich rendering is disabled.
"""

import os
import sys

from colorama import init, Fore, Back, Style
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

init(autoreset=True)

console = Console()

_FORCE_FALLBACK = os.environ.get("FORCE_PLAIN_OUTPUT", "").lower() in ("true", "1", "yes", "on")

_EMOJI_FALLBACKS = {
    "📊": "[S]",
    "📈": "[^]",
    "📉": "[v]",
    "✅": "OK",
    "❌": "X",
    "⚠️": "!",
    "ℹ️": "i",
    "🔷": "*",
    "🔄": "~",
    "💰": "$",
    "🟢": "[OPEN]",
    "🔴": "[CLOSED]",
}


def _safe_emoji(emoji: str) -> str:
    """Return emoji if the console can encode it, otherwise a safe alternative."""
    try:
        emoji.encode(sys.stdout.encoding or 'utf-8')
        return emoji
    except (UnicodeEncodeError, LookupError):
        return _EMOJI_FALLBACKS.get(emoji, "*")


def set_force_fallback(force_fallback: bool = True) -> None:
    """Force plain colorama output (used by tests and --plain).

    Args:
        force_fallback: If True, disable Rich rendering
    """
    global _FORCE_FALLBACK
    _FORCE_FALLBACK = force_fallback


def _print(message: str, emoji: str, rich_style: str, color: str, label: str) -> None:
    safe_emoji = _safe_emoji(emoji)
    if has_rich_support():
        try:
            console.print(f"{safe_emoji} {message}", style=rich_style)
        except UnicodeEncodeError:
            print(f"{label}: {message}")
    else:
        print(f"{color}{safe_emoji} {message}{Style.RESET_ALL}")


def print_success(message: str, emoji: str = "✅") -> None:
    """Print a success message with green color and emoji."""
    _print(message, emoji, "bold green", Fore.GREEN, "SUCCESS")


def print_error(message: str, emoji: str = "❌") -> None:
    """Print an error message with red color and emoji."""
    _print(message, emoji, "bold red", Fore.RED, "ERROR")


def print_warning(message: str, emoji: str = "⚠️") -> None:
    """Print a warning message with yellow color and emoji."""
    _print(message, emoji, "bold yellow", Fore.YELLOW, "WARNING")


def print_info(message: str, emoji: str = "ℹ️") -> None:
    """Print an info message with blue color and emoji."""
    _print(message, emoji, "bold blue", Fore.BLUE, "INFO")


def print_header(title: str, emoji: str = "🔷", width: int = 60) -> None:
    """Print a formatted header panel.

    Args:
        title: The header title to display
        emoji: The emoji to display with the title
        width: The width of the plain-text header line
    """
    safe_emoji = _safe_emoji(emoji)
    header_text = f"{safe_emoji} {title} {safe_emoji}"

    if has_rich_support():
        console.print(Panel(
            Text(header_text, style="bold bright_white", justify="center"),
            style="bright_cyan",
            padding=(0, 1),
        ))
    else:
        print(f"{Fore.CYAN}{Style.BRIGHT}{'=' * width}{Style.RESET_ALL}")
        print(f"{Back.CYAN}{Fore.WHITE}{Style.BRIGHT}{header_text:^{width}}{Style.RESET_ALL}")
        print(f"{Fore.CYAN}{Style.BRIGHT}{'=' * width}{Style.RESET_ALL}")


def get_console():
    """Get the Rich console instance, or None in plain mode."""
    if has_rich_support():
        return console
    return None


def has_rich_support() -> bool:
    """Check if Rich formatting is enabled."""
    return not _FORCE_FALLBACK
