"""
Duration Parser

Converts duration phrases such as "10min", "90sec", "2.5min" or
"7min 30sec" into whole seconds.
"""

import math
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

MINUTES_PATTERN = re.compile(r'([\d.]+)\s*min', re.IGNORECASE)
SECONDS_PATTERN = re.compile(r'([\d.]+)\s*sec', re.IGNORECASE)


def _token_value(pattern: re.Pattern, text: str) -> float:
    match = pattern.search(text)
    if not match:
        return 0.0
    try:
        return float(match.group(1))
    except ValueError:
        # "1.2.3min" and friends
        return math.nan


def parse_duration(text: Optional[str]) -> int:
    """
    Parse a duration phrase into whole seconds.

    Minute and second tokens are additive when both are present. Returns 0
    when the phrase is empty, has no unit token, or carries a malformed or
    negative value. Halves round away from zero (15.5sec -> 16).
    """
    if not text:
        return 0

    if not MINUTES_PATTERN.search(text) and not SECONDS_PATTERN.search(text):
        return 0

    duration = _token_value(MINUTES_PATTERN, text) * 60 + _token_value(SECONDS_PATTERN, text)

    if not math.isfinite(duration) or duration < 0:
        logger.warning(f"Could not parse duration: {text!r}")
        return 0

    return int(math.floor(duration + 0.5))
