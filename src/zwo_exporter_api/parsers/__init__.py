"""Fragment parsing: durations, annotations and segment classification."""
from .annotations import normalize_breaks, read_annotations, read_cadence, split_phases
from .duration import parse_duration
from .segment_parser import (
    SegmentClassifier,
    SegmentRule,
    classify_segment,
    default_rules,
)

__all__ = [
    "SegmentClassifier",
    "SegmentRule",
    "classify_segment",
    "default_rules",
    "normalize_breaks",
    "parse_duration",
    "read_annotations",
    "read_cadence",
    "split_phases",
]
