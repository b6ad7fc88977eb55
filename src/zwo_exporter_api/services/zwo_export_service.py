"""ZWO (Zwift workout) rendering for classified segments."""
import logging
import re
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from zwo_exporter_api.config import settings
from zwo_exporter_api.models import AnnotatedWorkout, SegmentKind

logger = logging.getLogger(__name__)

LEAD_TAG = "Warmup"
TRAIL_TAG = "Cooldown"
FALLBACK_TAG = SegmentKind.STEADY_STATE.value
FALLBACK_DURATION = 60
FALLBACK_POWER = 0.5

# Control characters XML 1.0 does not allow, even as references
XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

_KNOWN_KINDS = {
    SegmentKind.STEADY_STATE.value,
    SegmentKind.RAMP.value,
    SegmentKind.INTERVALS.value,
    SegmentKind.FREE_RIDE.value,
}

Attributes = List[Tuple[str, str]]


class BoundaryRole(str, Enum):
    """Structural position of a segment inside the <workout> element."""
    LEAD = "lead"
    BODY = "body"
    TRAIL = "trail"


def _power(value: float) -> str:
    return f"{value:.2f}"


def _add_optional(attrs: Attributes, name: str, value: Optional[int]) -> None:
    # Falsy check: a cadence of 0 is written the same as no cadence
    if value:
        attrs.append((name, str(value)))


class ZwoExportService:
    """Service for rendering workouts as .zwo files."""

    @staticmethod
    def boundary_role(index: int, count: int) -> BoundaryRole:
        """First element leads; the last one trails only when there is more than one."""
        if index == 0:
            return BoundaryRole.LEAD
        if index == count - 1 and count > 1:
            return BoundaryRole.TRAIL
        return BoundaryRole.BODY

    @staticmethod
    def element_tag(kind: Any, role: BoundaryRole) -> str:
        """
        Element name for a segment of the given kind at the given position.

        Boundary roles override the kind. Kinds without a ZWO element fall
        back to SteadyState.
        """
        if role is BoundaryRole.LEAD:
            return LEAD_TAG
        if role is BoundaryRole.TRAIL:
            return TRAIL_TAG
        kind = getattr(kind, "value", kind)
        if kind in _KNOWN_KINDS:
            return kind
        return FALLBACK_TAG

    @staticmethod
    def segment_attributes(segment: Any) -> Attributes:
        """
        Attribute list for a segment, chosen by its intrinsic kind.

        Works on any object with a ``kind`` attribute so that unexpected
        kinds degrade to a 50% steady state instead of failing the export.
        """
        kind = getattr(segment, "kind", None)
        attrs: Attributes = []

        if kind == SegmentKind.STEADY_STATE:
            attrs.append(("Duration", str(segment.duration)))
            attrs.append(("Power", _power(segment.power)))
            _add_optional(attrs, "Cadence", segment.cadence)
        elif kind == SegmentKind.RAMP:
            attrs.append(("Duration", str(segment.duration)))
            attrs.append(("PowerLow", _power(segment.power_low)))
            attrs.append(("PowerHigh", _power(segment.power_high)))
            _add_optional(attrs, "Cadence", segment.cadence)
        elif kind == SegmentKind.INTERVALS:
            attrs.append(("Repeat", str(segment.repeat)))
            attrs.append(("OnDuration", str(segment.on_duration)))
            attrs.append(("OnPower", _power(segment.on_power)))
            attrs.append(("OffDuration", str(segment.off_duration)))
            attrs.append(("OffPower", _power(segment.off_power)))
            _add_optional(attrs, "OnCadence", segment.on_cadence)
            _add_optional(attrs, "OffCadence", segment.off_cadence)
        elif kind == SegmentKind.FREE_RIDE:
            attrs.append(("Duration", str(segment.duration)))
            attrs.append(("FlatRoad", str(getattr(segment, "flat_road", None) or 1)))
            _add_optional(attrs, "Cadence", segment.cadence)
        else:
            logger.warning(f"Unhandled segment type for ZWO generation: {kind!r}")
            duration = getattr(segment, "duration", None)
            if duration:
                attrs.append(("Duration", str(duration)))
                attrs.append(("Power", _power(FALLBACK_POWER)))
                _add_optional(attrs, "Cadence", getattr(segment, "cadence", None))
            else:
                attrs.append(("Duration", str(FALLBACK_DURATION)))
                attrs.append(("Power", _power(FALLBACK_POWER)))

        return attrs

    @staticmethod
    def render_segments(segments: Sequence[Any]) -> List[str]:
        """Render each segment as a self-closing element line."""
        count = len(segments)
        lines = []
        for index, segment in enumerate(segments):
            role = ZwoExportService.boundary_role(index, count)
            tag = ZwoExportService.element_tag(getattr(segment, "kind", None), role)
            attrs = " ".join(f'{name}="{value}"' for name, value in ZwoExportService.segment_attributes(segment))
            lines.append(f"<{tag} {attrs} />")
        return lines

    @staticmethod
    def render_zwo(
        name: str,
        source_ref: str,
        segments: Sequence[Any],
        author: Optional[str] = None,
    ) -> str:
        """
        Render a complete ZWO document.

        Args:
            name: Workout name, written as text of <name>
            source_ref: Written as text of <description>
            segments: Classified segments in workout order
            author: Defaults to settings.ZWO_AUTHOR

        Returns:
            ZWO XML string
        """
        def esc(x: str) -> str:
            x = XML_INVALID_CHARS.sub("", x or "")
            return x.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

        body = "\n".join(f"        {line}" for line in ZwoExportService.render_segments(segments))
        if body:
            body += "\n"

        zwo = f"""<workout_file>
    <author>{esc(author if author is not None else settings.ZWO_AUTHOR)}</author>
    <name>{esc(name)}</name>
    <description>{esc(source_ref)}</description>
    <sportType>bike</sportType>
    <tags/>
    <workout>
{body}    </workout>
</workout_file>
"""
        return zwo

    @staticmethod
    def render_workout(workout: AnnotatedWorkout, author: Optional[str] = None) -> str:
        """Render an AnnotatedWorkout."""
        return ZwoExportService.render_zwo(workout.name, workout.source_ref, workout.segments, author=author)

