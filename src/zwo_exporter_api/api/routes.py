"""API routes for segment parsing and ZWO export."""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from zwo_exporter_api.models import Fragment, Segment, SkippedFragment
from zwo_exporter_api.parsers.segment_parser import classify_segment
from zwo_exporter_api.services.workout_export_service import (
    NoFragmentsError,
    NoSegmentsParsedError,
    WorkoutExportService,
)

logger = logging.getLogger(__name__)

BUILD_TIMESTAMP = datetime.now().isoformat()

router = APIRouter()

# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------


class FragmentsRequest(BaseModel):
    """Request model for POST /parse/segments"""
    fragments: List[Fragment] = Field(default_factory=list)


class ParseSegmentsResponse(BaseModel):
    """Response model for POST /parse/segments"""
    segments: List[Segment] = Field(default_factory=list)
    skipped: List[SkippedFragment] = Field(default_factory=list)


class ExportZwoRequest(BaseModel):
    """Request model for POST /export/zwo"""
    name: Optional[str] = Field(default=None, max_length=200, description="Workout title from the page")
    source_url: Optional[str] = Field(default=None, max_length=2000, description="Page the workout came from")
    fragments: List[Fragment] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Version / health
# ---------------------------------------------------------------------------


@router.get("/version")
async def get_version():
    """Get API version and build information."""
    return JSONResponse({
        "service": "zwo-exporter-api",
        "build_timestamp": BUILD_TIMESTAMP,
    })


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}


# ---------------------------------------------------------------------------
# Parse routes
# ---------------------------------------------------------------------------


@router.post("/parse/segment", response_model=Segment)
def parse_segment(fragment: Fragment):
    """Classify a single fragment. Unrecognised text comes back as kind=Unparsed."""
    return classify_segment(fragment)


@router.post("/parse/segments", response_model=ParseSegmentsResponse)
def parse_segments(payload: FragmentsRequest):
    """Classify fragments in order, listing the ones that were skipped."""
    segments, skipped = WorkoutExportService().classify_fragments(payload.fragments)
    return ParseSegmentsResponse(segments=segments, skipped=skipped)


# ---------------------------------------------------------------------------
# Export routes
# ---------------------------------------------------------------------------


@router.post("/export/zwo")
def export_zwo(payload: ExportZwoRequest):
    """Export fragments as a Zwift workout (.zwo) file."""
    try:
        result = WorkoutExportService().export(
            payload.fragments,
            name=payload.name,
            source_url=payload.source_url,
        )
    except NoFragmentsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoSegmentsParsedError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "skipped": [s.model_dump() for s in e.skipped],
            },
        )

    return Response(
        content=result.xml,
        media_type="application/xml",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Skipped-Segments": str(len(result.skipped)),
        },
    )
