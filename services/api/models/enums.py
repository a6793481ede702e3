# services/api/models/enums.py
"""
Closed enumerations shared by storage rows, domain records and API schemas.

Member order is meaningful: severities and priorities are listed from least
to most urgent, statuses in repair-lifecycle order.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Physical urgency of a defect."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Status(str, Enum):
    """Position of a defect in the repair lifecycle."""

    REPORTED = "reported"
    INSPECTED = "inspected"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class DocumentType(str, Enum):
    WORK_ORDER = "work_order"
    INSPECTION_REPORT = "inspection_report"
    REPAIR_ESTIMATE = "repair_estimate"
    PERMIT = "permit"
    INVOICE = "invoice"
    CITIZEN_COMPLAINT = "citizen_complaint"


class DocumentStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class UserRole(str, Enum):
    ADMIN = "admin"
    MAINTENANCE = "maintenance"
    INSPECTOR = "inspector"
    REPORTER = "reporter"


# Sentinel accepted by list filters meaning "no constraint"
ALL = "all"


def display_name(value: Enum) -> str:
    """'in-progress' -> 'In Progress', 'work_order' -> 'Work Order'."""
    words = str(value.value).replace("-", " ").replace("_", " ").split()
    return " ".join(w.capitalize() for w in words)


def parse_filter(enum_cls, raw: Optional[str]):
    """
    Turn a query-string filter into an enum member, or None for "all".

    Raises ValueError for values outside the enumeration.
    """
    if raw is None:
        return None
    s = str(raw).strip().lower()
    if s in ("", ALL):
        return None
    return enum_cls(s)
