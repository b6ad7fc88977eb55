"""Export pipeline: fragments in, ZWO document out.

Classifies every fragment of a workout page, drops the ones that match no
rule, and renders the rest. Decides what to do when nothing is usable.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from zwo_exporter_api.config import settings
from zwo_exporter_api.models import (
    AnnotatedWorkout,
    ExportResult,
    Fragment,
    Segment,
    SegmentKind,
    SkippedFragment,
)
from zwo_exporter_api.parsers.segment_parser import SegmentClassifier
from zwo_exporter_api.services.zwo_export_service import ZwoExportService
from zwo_exporter_api.utils import safe_filename

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Base error for export requests that cannot produce a file."""


class NoFragmentsError(ExportError):
    """The request contained no fragments at all."""

    def __init__(self):
        super().__init__("Could not find any workout segments.")


class NoSegmentsParsedError(ExportError):
    """Fragments were supplied but none of them could be classified."""

    def __init__(self, skipped: List[SkippedFragment]):
        self.skipped = skipped
        super().__init__("Failed to parse any workout segments. Cannot generate ZWO file.")


class WorkoutExportService:
    """Runs the classify -> render pipeline for one export request."""

    def __init__(self, classifier: Optional[SegmentClassifier] = None):
        self.classifier = classifier or SegmentClassifier()

    @staticmethod
    def workout_name(name: Optional[str]) -> str:
        """Trimmed workout name, or the configured default when blank."""
        return (name or "").strip() or settings.DEFAULT_WORKOUT_NAME

    @staticmethod
    def description(source_url: Optional[str]) -> str:
        """Description text pointing back at the page the workout came from."""
        if source_url:
            return f"{settings.DESCRIPTION_PREFIX}{source_url}"
        return settings.DESCRIPTION_PREFIX.rstrip(": ").strip()

    def classify_fragments(
        self, fragments: Sequence[Fragment]
    ) -> Tuple[List[Segment], List[SkippedFragment]]:
        """Classify fragments in order, separating usable segments from skipped ones."""
        segments: List[Segment] = []
        skipped: List[SkippedFragment] = []

        for index, fragment in enumerate(fragments, 1):
            segment = self.classifier.classify(fragment)
            if segment.kind == SegmentKind.UNPARSED:
                logger.warning(f"Skipping unparsable segment #{index}: {fragment.text!r}")
                skipped.append(SkippedFragment(index=index, text=fragment.text))
                continue
            segments.append(segment)

        return segments, skipped

    def build_workout(
        self,
        fragments: Sequence[Fragment],
        name: Optional[str] = None,
        source_url: Optional[str] = None,
    ) -> Tuple[AnnotatedWorkout, List[SkippedFragment]]:
        """
        Build the workout to serialize.

        Raises:
            NoFragmentsError: If fragments is empty
            NoSegmentsParsedError: If no fragment could be classified
        """
        if not fragments:
            raise NoFragmentsError()

        segments, skipped = self.classify_fragments(fragments)
        if not segments:
            raise NoSegmentsParsedError(skipped)

        if skipped:
            logger.warning(
                f"{len(skipped)} segment(s) could not be parsed and were skipped; "
                f"the generated ZWO file might be incomplete."
            )

        workout = AnnotatedWorkout(
            name=self.workout_name(name),
            source_ref=self.description(source_url),
            segments=segments,
        )
        return workout, skipped

    def export(
        self,
        fragments: Sequence[Fragment],
        name: Optional[str] = None,
        source_url: Optional[str] = None,
    ) -> ExportResult:
        """Classify fragments and render the ZWO document."""
        workout, skipped = self.build_workout(fragments, name=name, source_url=source_url)
        xml = ZwoExportService.render_workout(workout)
        logger.info(f"Exported '{workout.name}' with {len(workout.segments)} segment(s)")

        return ExportResult(
            name=workout.name,
            filename=safe_filename(workout.name),
            xml=xml,
            segments=list(workout.segments),
            skipped=skipped,
        )
