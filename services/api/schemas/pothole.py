"""
Pydantic schemas for defect records.
"""
from dataclasses import asdict
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.lifecycle import action_label, next_status
from models import Pothole, Severity, Status


class LocationSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude (WGS84)")
    lng: float = Field(..., ge=-180.0, le=180.0, description="Longitude (WGS84)")
    address: Optional[str] = None


class PointCloudSchema(BaseModel):
    points: int = 0
    density: float = Field(0.0, description="Points per m²")
    accuracy: float = Field(0.0, description="Fraction 0..1")


class SurfaceSchema(BaseModel):
    depth: float = Field(0.0, description="cm")
    width: float = Field(0.0, description="cm")
    area: float = Field(0.0, description="m²")


class ClassificationSchema(BaseModel):
    confidence: float = Field(0.0, description="Percent 0..100")
    model: str = ""
    scan_date: str = ""


class LidarDataSchema(BaseModel):
    """Sensor summary; every block may be missing."""
    point_cloud: Optional[PointCloudSchema] = None
    surface: Optional[SurfaceSchema] = None
    classification: Optional[ClassificationSchema] = None


class PotholeCreate(BaseModel):
    """
    Report a new defect. New records always start as "reported";
    the server assigns id, pothole_number and report_date.
    """
    location: LocationSchema
    severity: Severity
    detection_accuracy: float = Field(0.0, ge=0.0, le=1.0, description="Fraction 0..1")
    description: Optional[str] = Field(None, max_length=2000)
    reported_by: Optional[str] = Field(None, max_length=200)
    images: List[str] = Field(default_factory=list, max_length=20)
    road_id: Optional[str] = Field(None, max_length=100)
    lidar_data: Optional[LidarDataSchema] = None

    @field_validator("images")
    @classmethod
    def strip_blank_images(cls, v: List[str]) -> List[str]:
        return [s.strip() for s in v if s and s.strip()]


class StatusUpdate(BaseModel):
    """Explicit status change; must name the single next status."""
    status: Status


class PotholeOut(BaseModel):
    id: str
    pothole_number: Optional[int] = None
    road_id: Optional[str] = None
    location: LocationSchema
    severity: Severity
    status: Status
    detection_accuracy: float
    report_date: str
    scheduled_repair_date: Optional[str] = None
    completion_date: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    reported_by: Optional[str] = None
    lidar_data: Optional[LidarDataSchema] = None

    # Derived from the lifecycle table
    next_status: Optional[Status] = None
    next_action: Optional[str] = None

    @classmethod
    def from_domain(cls, p: Pothole) -> "PotholeOut":
        data = asdict(p)
        data["next_status"] = next_status(p.status)
        data["next_action"] = action_label(p.status)
        return cls.model_validate(data)


class PotholeListOut(BaseModel):
    """Filtered list plus the "Showing N of M" counts."""
    total: int = Field(..., description="Records before filtering")
    filtered: int = Field(..., description="Records after filtering")
    severity: Optional[Severity] = None
    status: Optional[Status] = None
    items: List[PotholeOut]
