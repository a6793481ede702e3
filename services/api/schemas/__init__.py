"""
Pydantic schemas for API request/response validation.
"""
from typing import Optional

from pydantic import BaseModel

from .analytics import AnalyticsSummary, Bucket
from .document import DocumentCreate, DocumentOut, DocumentPatch
from .pothole import (
    ClassificationSchema,
    LidarDataSchema,
    LocationSchema,
    PointCloudSchema,
    PotholeCreate,
    PotholeListOut,
    PotholeOut,
    StatusUpdate,
    SurfaceSchema,
)
from .user import UserOut


# ============ Health Check ============


class HealthCheck(BaseModel):
    """Health check response."""
    status: str = "healthy"
    backend: Optional[str] = None
    version: Optional[str] = None


# Re-export all
__all__ = [
    "AnalyticsSummary",
    "Bucket",
    "ClassificationSchema",
    "DocumentCreate",
    "DocumentOut",
    "DocumentPatch",
    "HealthCheck",
    "LidarDataSchema",
    "LocationSchema",
    "PointCloudSchema",
    "PotholeCreate",
    "PotholeListOut",
    "PotholeOut",
    "StatusUpdate",
    "SurfaceSchema",
    "UserOut",
]
