"""Data models for segment classification and ZWO export."""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from zwo_exporter_api.utils import to_float


class SegmentKind(str, Enum):
    """Intrinsic segment kinds; values double as ZWO element names."""
    STEADY_STATE = "SteadyState"
    RAMP = "Ramp"
    INTERVALS = "IntervalsT"
    FREE_RIDE = "FreeRide"
    UNPARSED = "Unparsed"


class PowerAnnotation(BaseModel):
    """A structured power value embedded in a fragment.

    ``raw_value`` is percent of FTP exactly as found in the markup. ``display``
    is whatever the page showed next to it (often watts) and is informational only.
    """
    raw_value: float = Field(..., description="Percent of FTP, unscaled")
    display: Optional[str] = None
    unit: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("raw_value", mode="before")
    @classmethod
    def _coerce_raw_value(cls, v):
        # Malformed values stay representable so rules can reject them
        return to_float(v)


class Fragment(BaseModel):
    """One workout segment as scraped from a page: display text plus annotations."""
    text: str = ""
    annotations: List[PowerAnnotation] = Field(default_factory=list)
    style: Optional[str] = None  # Unused by current rules

    class Config:
        frozen = True
        extra = "ignore"


class SteadyStateSegment(BaseModel):
    """Constant power for a duration."""
    kind: Literal["SteadyState"] = "SteadyState"
    duration: int = Field(..., gt=0, description="Seconds")
    power: float = Field(..., gt=0, description="Fraction of FTP")
    cadence: Optional[int] = Field(default=None, ge=0)

    class Config:
        frozen = True


class RampSegment(BaseModel):
    """Linear power change from power_low to power_high (no ordering enforced)."""
    kind: Literal["Ramp"] = "Ramp"
    duration: int = Field(..., gt=0)
    power_low: float = Field(..., gt=0)
    power_high: float = Field(..., gt=0)
    cadence: Optional[int] = Field(default=None, ge=0)

    class Config:
        frozen = True


class IntervalsSegment(BaseModel):
    """Repeated on/off pairs."""
    kind: Literal["IntervalsT"] = "IntervalsT"
    repeat: int = Field(..., gt=0)
    on_duration: int = Field(..., gt=0)
    on_power: float = Field(..., gt=0)
    off_duration: int = Field(..., gt=0)
    off_power: float = Field(..., gt=0)
    on_cadence: Optional[int] = Field(default=None, ge=0)
    off_cadence: Optional[int] = Field(default=None, ge=0)

    class Config:
        frozen = True


class FreeRideSegment(BaseModel):
    """Unstructured riding for a duration."""
    kind: Literal["FreeRide"] = "FreeRide"
    duration: int = Field(..., gt=0)
    flat_road: Literal[1] = 1
    cadence: Optional[int] = Field(default=None, ge=0)

    class Config:
        frozen = True


class UnparsedSegment(BaseModel):
    """A fragment no rule recognised. Callers drop these before export."""
    kind: Literal["Unparsed"] = "Unparsed"

    class Config:
        frozen = True


Segment = Annotated[
    Union[
        SteadyStateSegment,
        RampSegment,
        IntervalsSegment,
        FreeRideSegment,
        UnparsedSegment,
    ],
    Field(discriminator="kind"),
]


class AnnotatedWorkout(BaseModel):
    """Everything the serializer needs for one export."""
    name: str
    source_ref: str = ""
    segments: List[Segment] = Field(default_factory=list)

    class Config:
        frozen = True


class SkippedFragment(BaseModel):
    """A fragment dropped from an export because it could not be classified."""
    index: int = Field(..., description="1-based position on the page")
    text: str


class ExportResult(BaseModel):
    """Outcome of a successful export."""
    name: str
    filename: str
    xml: str
    segments: List[Segment] = Field(default_factory=list)
    skipped: List[SkippedFragment] = Field(default_factory=list)
