"""
Tests for row <-> record conversion.

Run with: pytest tests/test_models.py -v
"""
import json

import pytest

from models import (
    DocumentStatus,
    LidarData,
    Location,
    Pothole,
    PotholeDocument,
    Severity,
    Status,
    display_name,
    parse_filter,
)
from models.converters import lidar_from_json, lidar_to_json, safe_float, safe_int


def _row(**overrides):
    row = {
        "id": "abc",
        "road_id": "R-17",
        "pothole_number": 4,
        "latitude": 40.71,
        "longitude": -74.0,
        "address": None,
        "severity": "high",
        "status": "in-progress",
        "detection_accuracy": 92,
        "report_date": "2025-04-15T08:30:00Z",
        "scheduled_repair_date": None,
        "completion_date": None,
        "description": "Deep one",
        "reported_by": "Road Inspector",
        "image_url": "https://img.example/1.jpg",
        "lidar_data": None,
        "created_at": "2025-04-15T08:31:00Z",
    }
    row.update(overrides)
    return row


class TestPotholeFromStorage:
    def test_accuracy_percent_becomes_fraction(self):
        assert Pothole.from_storage(_row()).detection_accuracy == pytest.approx(0.92)

    def test_address_falls_back_to_road_id(self):
        p = Pothole.from_storage(_row(address=None))
        assert p.location.address == "Road ID: R-17"

    def test_address_kept_when_present(self):
        p = Pothole.from_storage(_row(address="1 Main St"))
        assert p.location.address == "1 Main St"

    def test_no_address_and_no_road_id(self):
        p = Pothole.from_storage(_row(address="", road_id=""))
        assert p.location.address is None

    def test_image_url_becomes_list(self):
        assert Pothole.from_storage(_row()).images == ["https://img.example/1.jpg"]
        assert Pothole.from_storage(_row(image_url=None)).images == []

    def test_enums(self):
        p = Pothole.from_storage(_row())
        assert p.severity is Severity.HIGH
        assert p.status is Status.IN_PROGRESS

    def test_unknown_enum_raises(self):
        with pytest.raises(ValueError):
            Pothole.from_storage(_row(severity="catastrophic"))

    def test_report_date_falls_back_to_created_at(self):
        p = Pothole.from_storage(_row(report_date=None))
        assert p.report_date == "2025-04-15T08:31:00Z"

    def test_lidar_json_string(self):
        raw = json.dumps({
            "pointCloud": {"points": "1200", "density": 310.5, "accuracy": 0.9},
            "classification": {"confidence": 88, "model": "PotholeNet", "scan_date": "2025-04-01"},
        })
        lidar = Pothole.from_storage(_row(lidar_data=raw)).lidar_data
        assert lidar.point_cloud.points == 1200
        assert lidar.surface is None
        assert lidar.classification.model == "PotholeNet"


class TestPotholeToStorage:
    def test_round_trip_of_demo_record(self, potholes):
        ph = next(p for p in potholes if p.lidar_data is not None)
        row = ph.to_storage()
        assert row["detection_accuracy"] == pytest.approx(95.0)
        assert row["lidar_data"]["pointCloud"]["points"] == 184320
        assert Pothole.from_storage(row) == ph

    def test_only_first_image_is_stored(self, potholes):
        ph = potholes[0].with_changes(images=["a.jpg", "b.jpg"])
        assert ph.to_storage()["image_url"] == "a.jpg"

    def test_validate_rejects_bad_latitude(self, potholes):
        bad = potholes[0].with_changes(location=Location(lat=91.0, lng=0.0))
        with pytest.raises(ValueError):
            bad.validate()

    def test_validate_rejects_bad_accuracy(self, potholes):
        with pytest.raises(ValueError):
            potholes[0].with_changes(detection_accuracy=1.5).validate()


class TestConverters:
    def test_safe_float(self):
        assert safe_float("3.5") == 3.5
        assert safe_float("", 0.0) == 0.0
        assert safe_float("nan", 1.0) == 1.0
        assert safe_float("abc") is None

    def test_safe_int(self):
        assert safe_int("3.0") == 3
        assert safe_int(None, 7) == 7

    def test_lidar_garbage_is_none(self):
        assert lidar_from_json("{not json") is None
        assert lidar_from_json("[1, 2]") is None
        assert lidar_from_json(None) is None

    def test_lidar_to_json_skips_missing_blocks(self):
        assert lidar_to_json(LidarData()) is None
        assert lidar_to_json(None) is None


class TestEnums:
    def test_display_name(self):
        assert display_name(Status.IN_PROGRESS) == "In Progress"
        assert display_name(Severity.CRITICAL) == "Critical"

    def test_parse_filter(self):
        assert parse_filter(Status, None) is None
        assert parse_filter(Status, "all") is None
        assert parse_filter(Status, " ALL ") is None
        assert parse_filter(Status, "Completed") is Status.COMPLETED
        with pytest.raises(ValueError):
            parse_filter(Status, "done")


class TestDocumentRecord:
    def test_from_storage(self):
        doc = PotholeDocument.from_storage({
            "id": "d1",
            "title": "Permit",
            "type": "permit",
            "status": "in-progress",
            "priority": "low",
            "due_date": "2025-06-30",
            "assigned_to": "Admin User",
            "pothole_id": None,
            "created_at": "2025-04-01T00:00:00Z",
        })
        assert doc.status is DocumentStatus.IN_PROGRESS
        assert doc.pothole_id is None
        assert doc.to_storage()["type"] == "permit"
