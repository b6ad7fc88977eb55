"""Export services."""
from .workout_export_service import (
    ExportError,
    NoFragmentsError,
    NoSegmentsParsedError,
    WorkoutExportService,
)
from .zwo_export_service import BoundaryRole, ZwoExportService

__all__ = [
    "BoundaryRole",
    "ExportError",
    "NoFragmentsError",
    "NoSegmentsParsedError",
    "WorkoutExportService",
    "ZwoExportService",
]
