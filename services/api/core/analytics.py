"""
Aggregate counts behind the dashboard's "By Severity" / "By Status" tabs.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Type

from models import Pothole, Severity, Status, display_name


def _buckets(enum_cls: Type, counts: Counter, total: int) -> List[Dict[str, Any]]:
    # Every member appears, zero counts included, in enum order
    return [
        {
            "key": member.value,
            "name": display_name(member),
            "count": counts.get(member, 0),
            "percent": round(counts.get(member, 0) / total * 100, 2) if total else 0.0,
        }
        for member in enum_cls
    ]


def summarize(potholes: Iterable[Pothole]) -> Dict[str, Any]:
    items = list(potholes)
    total = len(items)
    return {
        "total": total,
        "by_severity": _buckets(Severity, Counter(p.severity for p in items), total),
        "by_status": _buckets(Status, Counter(p.status for p in items), total),
    }
