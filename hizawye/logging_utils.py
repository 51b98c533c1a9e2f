"""Logging utilities for Hizawye simulations.

Provides color-coded output so each event severity is distinguishable at a glance.
"""

import os
from enum import Enum

from .schemas import LogEntry, Severity


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Info
    GREEN = "\033[92m"     # Success
    YELLOW = "\033[93m"    # Warnings (rejected thoughts, unresolved goals)
    RED = "\033[91m"       # Critical thresholds
    CYAN = "\033[96m"      # Metadata (drives, goals)

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if HIZAWYE_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("HIZAWYE_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


# Markers for severities (color-blind accessible)
LOG_TAG_INFO = "[i]"
LOG_TAG_SUCCESS = "[ok]"
LOG_TAG_WARN = "[!]"
LOG_TAG_CRITICAL = "[!!]"

SEVERITY_STYLE = {
    Severity.INFO: (LOG_TAG_INFO, Color.BLUE),
    Severity.SUCCESS: (LOG_TAG_SUCCESS, Color.GREEN),
    Severity.WARN: (LOG_TAG_WARN, Color.YELLOW),
    Severity.CRITICAL: (LOG_TAG_CRITICAL, Color.RED),
}


def format_entry(entry: LogEntry) -> str:
    """Render a log entry as a tagged, colorized line."""
    tag, color = SEVERITY_STYLE[entry.severity]
    return colored(f"{tag} {entry.message}", color, bold=entry.severity == Severity.CRITICAL)


def log_entry(entry: LogEntry) -> None:
    """Print a single log entry."""
    print(format_entry(entry))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(message, Color.RED))
