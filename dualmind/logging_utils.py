"""Logging utilities for DualMind agents.

Provides color-coded output to distinguish the reflexive (cache) path from the
deliberative (LLM) path.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Reflexive path (cache lookups, dispatch)
    YELLOW = "\033[93m"    # Deliberative path (reasoning calls)
    RED = "\033[91m"       # Errors and warnings
    GREEN = "\033[92m"     # Commits
    CYAN = "\033[96m"      # Info/metadata

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
        Colorized text if DUALMIND_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("DUALMIND_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


# Markers for operation types (color-blind accessible)
LOG_TAG_REFLEX = "[•]"      # Cache lookup / deterministic dispatch
LOG_TAG_LLM = "[AI]"        # Reasoning backend call
LOG_TAG_ERROR = "[!]"       # Error/warning
LOG_TAG_SUCCESS = "[✓]"     # Commit
LOG_TAG_INFO = "[i]"        # Information


def log_reflex(message: str) -> None:
    """Log a reflexive-path operation (blue)."""
    print(colored(f"{LOG_TAG_REFLEX} {message}", Color.BLUE))


def log_llm(message: str) -> None:
    """Log a deliberative-path operation (yellow)."""
    print(colored(f"{LOG_TAG_LLM} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_warning(message: str) -> None:
    """Log a non-fatal warning (red, not bold)."""
    print(colored(f"{LOG_TAG_ERROR} WARNING: {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


def debug_llm_enabled() -> bool:
    """Return True when DEBUG_LLM asks for prompts and raw responses to be printed."""
    return os.getenv("DEBUG_LLM", "").lower() in ("1", "true", "yes")
