"""
Repair lifecycle: reported -> inspected -> scheduled -> in-progress -> completed.

Each non-terminal status has exactly one successor. Entering "scheduled"
stamps a scheduled repair date (default 7 days out); entering "completed"
stamps the completion date.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from models import Pothole, Status

DEFAULT_LEAD_DAYS = 7

NEXT_STATUS: Dict[Status, Status] = {
    Status.REPORTED: Status.INSPECTED,
    Status.INSPECTED: Status.SCHEDULED,
    Status.SCHEDULED: Status.IN_PROGRESS,
    Status.IN_PROGRESS: Status.COMPLETED,
}

# Button text staff see for the transition out of each status
ACTION_LABELS: Dict[Status, str] = {
    Status.REPORTED: "Mark as Inspected",
    Status.INSPECTED: "Schedule Repair",
    Status.SCHEDULED: "Start Repair",
    Status.IN_PROGRESS: "Mark as Completed",
}


def next_status(status: Status) -> Optional[Status]:
    """Single permitted successor, or None for the terminal status."""
    return NEXT_STATUS.get(Status(status))


def action_label(status: Status) -> Optional[str]:
    return ACTION_LABELS.get(Status(status))


def is_terminal(status: Status) -> bool:
    return next_status(status) is None


def status_update_fields(
    new_status: Status,
    now: Optional[datetime] = None,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> Dict[str, Any]:
    """
    Column patch for entering `new_status`.

    Returns:
        {"status": ...} plus scheduled_repair_date / completion_date when
        the new status requires one.
    """
    new_status = Status(new_status)
    now = now or datetime.now(timezone.utc)

    fields: Dict[str, Any] = {"status": new_status.value}
    if new_status == Status.SCHEDULED:
        fields["scheduled_repair_date"] = (now + timedelta(days=lead_days)).isoformat()
    elif new_status == Status.COMPLETED:
        fields["completion_date"] = now.isoformat()
    return fields


def apply_fields(pothole: Pothole, fields: Dict[str, Any]) -> Pothole:
    """Return a copy of `pothole` with a status patch applied."""
    return pothole.with_changes(
        status=Status(fields.get("status", pothole.status)),
        scheduled_repair_date=fields.get("scheduled_repair_date", pothole.scheduled_repair_date),
        completion_date=fields.get("completion_date", pothole.completion_date),
    )


def advance(
    pothole: Pothole,
    now: Optional[datetime] = None,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> Pothole:
    """
    Move a pothole to its next status.
    A completed pothole is returned unchanged.
    """
    target = next_status(pothole.status)
    if target is None:
        return pothole
    return apply_fields(pothole, status_update_fields(target, now=now, lead_days=lead_days))
