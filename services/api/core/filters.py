"""
Client-side style filtering of the pothole list.

Both constraints are optional; a missing constraint (None or "all") is the
identity filter. Input order is preserved.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Union

from models import Pothole, Severity, Status, parse_filter

SeverityFilter = Union[Severity, str, None]
StatusFilter = Union[Status, str, None]


def _constraint(enum_cls, value):
    if value is None or isinstance(value, enum_cls):
        return value
    return parse_filter(enum_cls, value)


def filter_potholes(
    potholes: Iterable[Pothole],
    severity: SeverityFilter = None,
    status: StatusFilter = None,
) -> List[Pothole]:
    """
    Return the potholes whose severity and status equal each present
    constraint. Applying the same constraints twice gives the same list.
    """
    sev: Optional[Severity] = _constraint(Severity, severity)
    st: Optional[Status] = _constraint(Status, status)

    filtered = list(potholes)
    if sev is not None:
        filtered = [p for p in filtered if p.severity == sev]
    if st is not None:
        filtered = [p for p in filtered if p.status == st]
    return filtered
