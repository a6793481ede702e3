from __future__ import annotations

from .enums import (
    ALL,
    DocumentStatus,
    DocumentType,
    Priority,
    Severity,
    Status,
    UserRole,
    display_name,
    parse_filter,
)
from .pothole import Classification, LidarData, Location, PointCloud, Pothole, Surface
from .document import PotholeDocument
from .user import User

__all__ = [
    "ALL",
    "Classification",
    "DocumentStatus",
    "DocumentType",
    "LidarData",
    "Location",
    "PointCloud",
    "Pothole",
    "PotholeDocument",
    "Priority",
    "Severity",
    "Status",
    "Surface",
    "User",
    "UserRole",
    "display_name",
    "parse_filter",
]
