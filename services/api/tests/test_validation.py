"""
Tests for validation functions.

Run with: pytest tests/test_validation.py -v
"""
import pytest
from fastapi import HTTPException

from core.validation import coerce_filter, ensure_not_completed, validate_status_transition
from models import Severity, Status


class TestCoerceFilter:
    """Query-string filters."""

    def test_empty_and_all(self):
        assert coerce_filter(Severity, None, "severity") is None
        assert coerce_filter(Severity, "", "severity") is None
        assert coerce_filter(Severity, "all", "severity") is None

    def test_valid_value(self):
        assert coerce_filter(Status, "in-progress", "status") is Status.IN_PROGRESS

    def test_invalid_value(self):
        with pytest.raises(HTTPException) as exc:
            coerce_filter(Severity, "severe", "severity")
        assert exc.value.status_code == 422
        assert "critical" in exc.value.detail


class TestStatusTransition:
    """Only the single next status may be requested."""

    def test_next_is_allowed(self):
        validate_status_transition(Status.REPORTED, Status.INSPECTED)
        validate_status_transition(Status.IN_PROGRESS, Status.COMPLETED)

    def test_same_status_rejected(self):
        with pytest.raises(HTTPException) as exc:
            validate_status_transition(Status.SCHEDULED, Status.SCHEDULED)
        assert exc.value.status_code == 409

    def test_backwards_rejected(self):
        with pytest.raises(HTTPException) as exc:
            validate_status_transition(Status.SCHEDULED, Status.REPORTED)
        assert exc.value.status_code == 409
        assert exc.value.detail.startswith("INVALID_STATUS_TRANSITION")

    def test_skip_rejected(self):
        with pytest.raises(HTTPException):
            validate_status_transition(Status.REPORTED, Status.SCHEDULED)

    def test_from_completed(self):
        with pytest.raises(HTTPException) as exc:
            validate_status_transition(Status.COMPLETED, Status.REPORTED)
        assert exc.value.detail == "POTHOLE_ALREADY_COMPLETED"

    def test_ensure_not_completed_returns_target(self):
        assert ensure_not_completed(Status.INSPECTED) is Status.SCHEDULED
