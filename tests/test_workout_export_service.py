"""Unit tests for the export pipeline."""
import xml.etree.ElementTree as ET

import pytest

from zwo_exporter_api.models import SegmentKind, SteadyStateSegment
from zwo_exporter_api.parsers.segment_parser import SegmentClassifier
from zwo_exporter_api.services.workout_export_service import (
    ExportError,
    NoFragmentsError,
    NoSegmentsParsedError,
    WorkoutExportService,
)


@pytest.fixture
def service() -> WorkoutExportService:
    return WorkoutExportService()


class TestClassifyFragments:
    """Test cases for classify_fragments."""

    def test_keeps_order(self, service, sample_fragments):
        """Test segments come back in page order."""
        segments, skipped = service.classify_fragments(sample_fragments)
        assert [s.kind for s in segments] == ["SteadyState", "Ramp", "IntervalsT", "SteadyState"]
        assert skipped == []

    def test_drops_unparsed(self, service, make_fragment):
        """Test unparsed fragments are reported with their 1-based position."""
        fragments = [
            make_fragment("10min @ 80% FTP", [80]),
            make_fragment("Just some random text"),
            make_fragment("15min Free Ride"),
        ]
        segments, skipped = service.classify_fragments(fragments)

        assert [s.kind for s in segments] == ["SteadyState", "FreeRide"]
        assert len(skipped) == 1
        assert skipped[0].index == 2
        assert skipped[0].text == "Just some random text"
        assert all(s.kind != SegmentKind.UNPARSED for s in segments)

    def test_uses_injected_classifier(self, make_fragment):
        """Test a custom classifier is used."""
        service = WorkoutExportService(classifier=SegmentClassifier(rules=[]))
        segments, skipped = service.classify_fragments([make_fragment("10min @ 80% FTP", [80])])
        assert segments == []
        assert len(skipped) == 1


class TestExport:
    """Test cases for export."""

    def test_export(self, service, sample_fragments):
        """Test a full export."""
        result = service.export(sample_fragments, name="Sweet Spot", source_url="https://example.com/ss")

        assert result.name == "Sweet Spot"
        assert result.filename == "Sweet_Spot.zwo"
        assert result.skipped == []
        assert len(result.segments) == 4

        root = ET.fromstring(result.xml)
        assert root.findtext("name") == "Sweet Spot"
        assert root.findtext("description") == "Workout exported from WhatsOnZwift: https://example.com/ss"
        assert [el.tag for el in root.find("workout")] == ["Warmup", "Ramp", "IntervalsT", "Cooldown"]

    def test_default_name(self, service, sample_fragments):
        """Test blank names fall back to the configured default."""
        result = service.export(sample_fragments, name="   ")
        assert result.name == "Zwift Workout"
        assert result.filename == "Zwift_Workout.zwo"

    def test_description_without_url(self, service):
        """Test the description when no page URL is known."""
        assert service.description(None) == "Workout exported from WhatsOnZwift"

    def test_skipped_fragments_are_reported(self, service, make_fragment, caplog):
        """Test partial exports carry the skipped list and warn."""
        fragments = [make_fragment("10min @ 80% FTP", [80]), make_fragment("???")]
        with caplog.at_level("WARNING"):
            result = service.export(fragments, name="Partial")

        assert len(result.segments) == 1
        assert [s.index for s in result.skipped] == [2]
        assert "could not be parsed and were skipped" in caplog.text

    def test_single_segment_export(self, service, make_fragment):
        """Test the only segment becomes Warmup."""
        result = service.export([make_fragment("10min @ 90rpm, from 50 to 70% FTP", [50, 70])])
        root = ET.fromstring(result.xml)
        (element,) = list(root.find("workout"))
        assert element.tag == "Warmup"
        assert element.attrib == {
            "Duration": "600", "PowerLow": "0.50", "PowerHigh": "0.70", "Cadence": "90",
        }

    def test_no_fragments(self, service):
        """Test an empty page is rejected."""
        with pytest.raises(NoFragmentsError):
            service.export([])

    def test_nothing_parsed(self, service, make_fragment):
        """Test that a page with no usable fragment is rejected."""
        fragments = [make_fragment("Just some random text"), make_fragment("")]
        with pytest.raises(NoSegmentsParsedError) as exc_info:
            service.export(fragments)

        assert [s.index for s in exc_info.value.skipped] == [1, 2]
        assert isinstance(exc_info.value, ExportError)

    def test_build_workout(self, service, make_fragment):
        """Test the intermediate workout model."""
        workout, skipped = service.build_workout([make_fragment("10min @ 80% FTP", [80])], name="W")
        assert workout.name == "W"
        assert workout.segments == [SteadyStateSegment(duration=600, power=0.8)]
        assert skipped == []
