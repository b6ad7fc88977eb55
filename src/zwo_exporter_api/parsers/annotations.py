"""
Numeric Annotation Reader

Reads the two channels of a fragment: the ordered power annotations, and
the cadence mentioned in its display text.
"""

import re
from typing import List, Optional, Tuple

from zwo_exporter_api.models import Fragment
from zwo_exporter_api.utils import to_int

# Line breaks count as the same structural delimiter as a comma
LINE_BREAK_PATTERN = re.compile(r'<br\s*/?>|\r?\n', re.IGNORECASE)
DELIMITER = ','

CADENCE_PATTERN = re.compile(r'\b(\d+)\s*rpm\b', re.IGNORECASE)


def read_annotations(fragment: Fragment) -> List[float]:
    """Return the raw annotation magnitudes (percent of FTP) in document order."""
    return [annotation.raw_value for annotation in fragment.annotations]


def normalize_breaks(text: str) -> str:
    """Replace <br> tags and newlines with the comma delimiter."""
    return LINE_BREAK_PATTERN.sub(DELIMITER, text or '')


def read_cadence(text: Optional[str]) -> Optional[int]:
    """Return the first "<N>rpm" value in the text, or None if there is none or it is unreadable."""
    if not text:
        return None
    match = CADENCE_PATTERN.search(normalize_breaks(text))
    return to_int(match.group(1)) if match else None


def split_phases(text: str) -> Tuple[str, str]:
    """
    Split interval text into its on and off halves at the first delimiter.

    "5x 1min @ 70rpm, 252W,<br> 3min @ 90rpm, 211W" becomes
    ("5x 1min @ 70rpm", " 252W,, 3min @ 90rpm, 211W"). The off half is empty
    when there is no delimiter.
    """
    on_half, _, off_half = normalize_breaks(text).partition(DELIMITER)
    return on_half, off_half
