"""
Segment Parser

Classifies a single workout fragment into a typed segment by trying an
ordered list of rules. Each rule matches a prefix grammar on the display
text, checks the number of power annotations it needs, and re-validates
every number it derives. The first rule that returns a segment wins; if
none does, the fragment is Unparsed.

Recognised shapes:
- "15min free ride"
- "8min from 60 to 85% FTP", "10min @ 90rpm, from 50 to 70% FTP"
- "10min @ 80% FTP", "5min @ 85rpm, 75% FTP"
- "6x 3min @ 105% FTP,<br>1min @ 50% FTP"
- "12min 65% FTP" (no "@" separator)
"""

import math
import re
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .annotations import read_annotations, read_cadence, split_phases
from .duration import parse_duration
from zwo_exporter_api.models import (
    Fragment,
    FreeRideSegment,
    IntervalsSegment,
    RampSegment,
    Segment,
    SteadyStateSegment,
    UnparsedSegment,
)
from zwo_exporter_api.utils import to_int

logger = logging.getLogger(__name__)

# "10min", "90sec", "2.5min", "7min 30sec"
DURATION = r'(?P<duration>\d+(?:\.\d+)?\s*(?:min|sec)(?:\s*\d+(?:\.\d+)?\s*sec)?)'
DURATION_PATTERN = re.compile(DURATION, re.IGNORECASE)


def to_fraction(raw_value: float) -> Optional[float]:
    """Convert a percent-of-FTP annotation to a fraction, None if unusable."""
    value = raw_value / 100
    if not math.isfinite(value) or value <= 0:
        return None
    return value


class SegmentRule(ABC):
    """One shape in the classification cascade."""

    name: str = "rule"
    pattern: re.Pattern
    # None means any number of annotations is acceptable
    expected_annotations: Optional[int] = None

    def apply(self, text: str, annotations: Sequence[float]) -> Optional[Segment]:
        """Return a segment if this rule recognises the text, else None."""
        if self.expected_annotations is not None and len(annotations) != self.expected_annotations:
            return None
        match = self.pattern.match(text)
        if not match:
            return None
        try:
            return self.build(match, text, annotations)
        except ValidationError as e:
            logger.debug(f"Rule '{self.name}' built an invalid segment: {e}")
            return None

    @abstractmethod
    def build(self, match: re.Match, text: str, annotations: Sequence[float]) -> Optional[Segment]:
        """
        Build the segment from a structural match.

        Returns None when a derived value is invalid, so the cascade moves
        on to the next rule instead of emitting a half-filled segment.
        """
        pass


class FreeRideRule(SegmentRule):
    name = "free_ride"
    pattern = re.compile(rf'^{DURATION}\s+free\s+ride', re.IGNORECASE)

    def build(self, match, text, annotations):
        duration = parse_duration(match.group('duration'))
        if duration <= 0:
            return None
        return FreeRideSegment(duration=duration, cadence=read_cadence(text))


class RampRule(SegmentRule):
    name = "ramp"
    pattern = re.compile(
        rf'^{DURATION}\s+'
        r'(?:@\s*\d+\s*rpm\s*,\s*)?'  # Optional cadence: "@ 90rpm,"
        r'from\s',
        re.IGNORECASE
    )
    expected_annotations = 2

    def build(self, match, text, annotations):
        duration = parse_duration(match.group('duration'))
        power_low = to_fraction(annotations[0])
        power_high = to_fraction(annotations[1])
        if duration <= 0 or power_low is None or power_high is None:
            return None
        return RampSegment(
            duration=duration,
            power_low=power_low,
            power_high=power_high,
            cadence=read_cadence(text),
        )


class SteadyStateRule(SegmentRule):
    name = "steady_state"
    pattern = re.compile(rf'^{DURATION}\s+@', re.IGNORECASE)
    expected_annotations = 1

    def build(self, match, text, annotations):
        duration = parse_duration(match.group('duration'))
        power = to_fraction(annotations[0])
        if duration <= 0 or power is None:
            return None
        return SteadyStateSegment(duration=duration, power=power, cadence=read_cadence(text))


class IntervalsRule(SegmentRule):
    name = "intervals"
    pattern = re.compile(rf'^(?P<repeat>\d+)\s*[x×]\s*{DURATION}\s+@', re.IGNORECASE)
    expected_annotations = 2

    def build(self, match, text, annotations):
        repeat = to_int(match.group('repeat'))
        on_duration = parse_duration(match.group('duration'))
        on_power = to_fraction(annotations[0])
        off_power = to_fraction(annotations[1])

        on_half, off_half = split_phases(text)
        off_match = DURATION_PATTERN.search(off_half)
        off_duration = parse_duration(off_match.group('duration')) if off_match else 0

        if repeat is None or repeat <= 0 or on_duration <= 0 or off_duration <= 0:
            return None
        if on_power is None or off_power is None:
            return None

        return IntervalsSegment(
            repeat=repeat,
            on_duration=on_duration,
            on_power=on_power,
            off_duration=off_duration,
            off_power=off_power,
            on_cadence=read_cadence(on_half),
            off_cadence=read_cadence(off_half),
        )


class BareSteadyStateRule(SteadyStateRule):
    """Steady state written without the "@" separator, e.g. "12min 65% FTP"."""
    name = "bare_steady_state"
    pattern = re.compile(rf'^{DURATION}', re.IGNORECASE)


def default_rules() -> List[SegmentRule]:
    """The cascade in priority order; free ride must precede steady state."""
    return [
        FreeRideRule(),
        RampRule(),
        SteadyStateRule(),
        IntervalsRule(),
        BareSteadyStateRule(),
    ]


class SegmentClassifier:
    """Runs fragments through an ordered rule cascade"""

    def __init__(self, rules: Optional[Sequence[SegmentRule]] = None):
        self.rules: List[SegmentRule] = list(rules) if rules is not None else default_rules()

    def classify(self, fragment: Fragment) -> Segment:
        """
        Classify one fragment.

        Never raises for bad input: every failure path ends in UnparsedSegment.
        """
        text = (fragment.text or '').strip()
        annotations = read_annotations(fragment)

        for rule in self.rules:
            segment = rule.apply(text, annotations)
            if segment is not None:
                logger.debug(f"Rule '{rule.name}' matched: {text!r}")
                return segment

        logger.warning(f"Could not parse segment: {text!r}")
        return UnparsedSegment()


_default_classifier = SegmentClassifier()


def classify_segment(fragment: Fragment) -> Segment:
    """Classify a fragment with the default rule cascade."""
    return _default_classifier.classify(fragment)
