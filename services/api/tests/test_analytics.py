"""
Tests for the analytics summary.

Run with: pytest tests/test_analytics.py -v
"""
from core.analytics import summarize
from models import Severity, Status


class TestSummarize:
    def test_counts_over_demo_data(self, potholes):
        summary = summarize(potholes)
        assert summary["total"] == 6

        by_sev = {b["key"]: b["count"] for b in summary["by_severity"]}
        assert by_sev == {"low": 1, "medium": 2, "high": 2, "critical": 1}

        by_status = {b["key"]: b["count"] for b in summary["by_status"]}
        assert by_status == {
            "reported": 2,
            "inspected": 1,
            "scheduled": 1,
            "in-progress": 1,
            "completed": 1,
        }

    def test_buckets_follow_enum_order(self, potholes):
        summary = summarize(potholes)
        assert [b["key"] for b in summary["by_severity"]] == [s.value for s in Severity]
        assert [b["key"] for b in summary["by_status"]] == [s.value for s in Status]

    def test_display_names(self, potholes):
        names = [b["name"] for b in summarize(potholes)["by_status"]]
        assert names == ["Reported", "Inspected", "Scheduled", "In Progress", "Completed"]

    def test_percentages(self, potholes):
        summary = summarize(potholes)
        medium = next(b for b in summary["by_severity"] if b["key"] == "medium")
        assert medium["percent"] == 33.33
        assert round(sum(b["percent"] for b in summary["by_status"])) == 100

    def test_empty_list_is_zero_filled(self):
        summary = summarize([])
        assert summary["total"] == 0
        assert len(summary["by_severity"]) == len(Severity)
        assert all(b["count"] == 0 and b["percent"] == 0.0 for b in summary["by_severity"])
        assert all(b["count"] == 0 for b in summary["by_status"])
