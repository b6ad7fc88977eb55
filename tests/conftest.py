"""
Test fixtures for zwo-exporter-api.

Provides an API client and small builders for fragments so tests can
describe a page segment as text plus its power annotations.
"""

import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest
from fastapi.testclient import TestClient

# Repo root: .../zwo-exporter-api
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import zwo_exporter_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from zwo_exporter_api.main import app
from zwo_exporter_api.models import Fragment, PowerAnnotation


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    """Per-test FastAPI TestClient."""
    return TestClient(app)


# ---------------------------------------------------------------------------
# Fragment builders
# ---------------------------------------------------------------------------


def build_fragment(text: str, values: Optional[List] = None, style: Optional[str] = None) -> Fragment:
    """Fragment with one %FTP annotation per entry in values."""
    return Fragment(
        text=text,
        annotations=[PowerAnnotation(raw_value=v, unit="relpow") for v in (values or [])],
        style=style,
    )


@pytest.fixture
def make_fragment() -> Callable[..., Fragment]:
    return build_fragment


@pytest.fixture
def sample_fragments() -> List[Fragment]:
    """A typical page: steady warmup, ramp, intervals, steady cooldown."""
    return [
        build_fragment("10min @ 80% FTP", [80]),
        build_fragment("8min from 60 to 85% FTP", [60, 85]),
        build_fragment("2x 30sec @ 110rpm, 110% FTP,\n 30sec @ 85rpm, 55% FTP", [110, 55]),
        build_fragment("5min @ 85rpm, 75% FTP", [75]),
    ]


@pytest.fixture
def sample_fragments_payload(sample_fragments) -> List[dict]:
    """sample_fragments as JSON request data."""
    return [f.model_dump(mode="json") for f in sample_fragments]
