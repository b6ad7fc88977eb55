"""Utility functions."""
import re
from typing import Optional

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9_\-\s.]", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")


def to_int(s: Optional[str]) -> Optional[int]:
    """Convert a digit run to int, None if missing or too long to convert."""
    if s is None:
        return None
    try:
        return int(s)
    except ValueError:
        return None


def to_float(s) -> float:
    """Convert a numeral to float, returning NaN if conversion fails."""
    try:
        return float(s)
    except (TypeError, ValueError):
        return float("nan")


def safe_filename(name: str, extension: str = ".zwo") -> str:
    """Turn a workout name into a download-safe filename.

    Characters outside letters, digits, underscore, dash, dot and whitespace
    become underscores, then whitespace runs collapse to one underscore.
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", name or "")
    cleaned = _WHITESPACE_RUN.sub("_", cleaned)
    return f"{cleaned}{extension}"
