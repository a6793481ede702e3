"""
Tests for the pothole list filter.

Run with: pytest tests/test_filters.py -v
"""
import itertools

import pytest

from core.filters import filter_potholes
from models import Severity, Status


class TestFilterPotholes:
    """Severity / status constraints over the demo list."""

    def test_no_constraints_is_identity(self, potholes):
        result = filter_potholes(potholes)
        assert [p.id for p in result] == [p.id for p in potholes]

    def test_all_is_identity(self, potholes):
        result = filter_potholes(potholes, severity="all", status="all")
        assert [p.id for p in result] == [p.id for p in potholes]

    def test_severity_only(self, potholes):
        result = filter_potholes(potholes, severity=Severity.HIGH)
        assert [p.id for p in result] == ["ph-001", "ph-005"]

    def test_status_only(self, potholes):
        result = filter_potholes(potholes, status=Status.REPORTED)
        assert [p.id for p in result] == ["ph-001", "ph-006"]

    def test_both_constraints(self, potholes):
        result = filter_potholes(potholes, severity="medium", status="reported")
        assert [p.id for p in result] == ["ph-006"]

    def test_string_values_are_accepted(self, potholes):
        result = filter_potholes(potholes, status="in-progress")
        assert [p.id for p in result] == ["ph-003"]

    def test_no_match_gives_empty_list(self, potholes):
        assert filter_potholes(potholes, severity="critical", status="completed") == []

    def test_empty_input(self):
        assert filter_potholes([], severity="low") == []

    def test_unknown_value_raises(self, potholes):
        with pytest.raises(ValueError):
            filter_potholes(potholes, severity="catastrophic")

    def test_input_not_mutated(self, potholes):
        before = [p.id for p in potholes]
        filter_potholes(potholes, severity="low")
        assert [p.id for p in potholes] == before

    @pytest.mark.parametrize(
        "severity,status",
        list(itertools.product(["all"] + [s.value for s in Severity], ["all"] + [s.value for s in Status])),
    )
    def test_exact_membership_and_idempotence(self, potholes, severity, status):
        once = filter_potholes(potholes, severity=severity, status=status)
        expected = [
            p for p in potholes
            if (severity == "all" or p.severity.value == severity)
            and (status == "all" or p.status.value == status)
        ]
        assert once == expected
        assert filter_potholes(once, severity=severity, status=status) == once
