"""
Tests for the repair lifecycle.

Run with: pytest tests/test_lifecycle.py -v
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.lifecycle import (
    NEXT_STATUS,
    action_label,
    advance,
    is_terminal,
    next_status,
    status_update_fields,
)
from models import Status

NOW = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestNextStatus:
    @pytest.mark.parametrize(
        "current,expected",
        [
            (Status.REPORTED, Status.INSPECTED),
            (Status.INSPECTED, Status.SCHEDULED),
            (Status.SCHEDULED, Status.IN_PROGRESS),
            (Status.IN_PROGRESS, Status.COMPLETED),
        ],
    )
    def test_chain(self, current, expected):
        assert next_status(current) == expected

    def test_completed_is_terminal(self):
        assert next_status(Status.COMPLETED) is None
        assert is_terminal(Status.COMPLETED)
        assert not is_terminal(Status.REPORTED)

    def test_accepts_string_values(self):
        assert next_status("in-progress") == Status.COMPLETED

    def test_every_non_terminal_status_has_one_successor(self):
        assert set(NEXT_STATUS) == set(Status) - {Status.COMPLETED}

    def test_action_labels(self):
        assert action_label(Status.REPORTED) == "Mark as Inspected"
        assert action_label(Status.INSPECTED) == "Schedule Repair"
        assert action_label(Status.SCHEDULED) == "Start Repair"
        assert action_label(Status.IN_PROGRESS) == "Mark as Completed"
        assert action_label(Status.COMPLETED) is None


class TestStatusUpdateFields:
    def test_plain_status(self):
        assert status_update_fields(Status.INSPECTED, now=NOW) == {"status": "inspected"}

    def test_scheduled_stamps_repair_date_seven_days_out(self):
        fields = status_update_fields(Status.SCHEDULED, now=NOW)
        assert fields["status"] == "scheduled"
        assert fields["scheduled_repair_date"] == (NOW + timedelta(days=7)).isoformat()
        assert "completion_date" not in fields

    def test_custom_lead_time(self):
        fields = status_update_fields(Status.SCHEDULED, now=NOW, lead_days=3)
        assert fields["scheduled_repair_date"] == (NOW + timedelta(days=3)).isoformat()

    def test_completed_stamps_completion_date(self):
        fields = status_update_fields(Status.COMPLETED, now=NOW)
        assert fields == {"status": "completed", "completion_date": NOW.isoformat()}


class TestAdvance:
    def test_reported_to_inspected(self, potholes):
        ph = potholes[0]
        out = advance(ph, now=NOW)
        assert out.status == Status.INSPECTED
        assert out.scheduled_repair_date is None
        assert ph.status == Status.REPORTED  # input record untouched

    def test_inspected_to_scheduled_sets_date(self, potholes):
        ph = next(p for p in potholes if p.status == Status.INSPECTED)
        out = advance(ph, now=NOW)
        assert out.status == Status.SCHEDULED
        assert out.scheduled_repair_date == (NOW + timedelta(days=7)).isoformat()

    def test_in_progress_to_completed_sets_date(self, potholes):
        ph = next(p for p in potholes if p.status == Status.IN_PROGRESS)
        out = advance(ph, now=NOW)
        assert out.status == Status.COMPLETED
        assert out.completion_date == NOW.isoformat()
        # earlier stamps are kept
        assert out.scheduled_repair_date == ph.scheduled_repair_date

    def test_completed_is_noop(self, potholes):
        ph = next(p for p in potholes if p.status == Status.COMPLETED)
        assert advance(ph, now=NOW) == ph

    def test_full_walk(self, potholes):
        ph = potholes[0]
        seen = [ph.status]
        while not is_terminal(ph.status):
            ph = advance(ph, now=NOW)
            seen.append(ph.status)
        assert seen == list(Status)
        assert ph.completion_date == NOW.isoformat()
