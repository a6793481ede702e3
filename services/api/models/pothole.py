# services/api/models/pothole.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .converters import lidar_from_json, lidar_to_json, safe_float, safe_int, safe_str
from .enums import Severity, Status


def _gen_id() -> str:
    return str(uuid4())


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Location:
    lat: float
    lng: float
    address: Optional[str] = None


@dataclass
class PointCloud:
    points: int = 0
    density: float = 0.0       # pts/m²
    accuracy: float = 0.0      # fraction 0..1


@dataclass
class Surface:
    depth: float = 0.0         # cm
    width: float = 0.0         # cm
    area: float = 0.0          # m²


@dataclass
class Classification:
    confidence: float = 0.0    # percent 0..100
    model: str = ""
    scan_date: str = ""


@dataclass
class LidarData:
    """
    Sensor summary captured for a defect.
    Every block is optional; scans often carry only some of them.
    """
    point_cloud: Optional[PointCloud] = None
    surface: Optional[Surface] = None
    classification: Optional[Classification] = None


@dataclass
class Pothole:
    """
    Domain model for a reported road defect.

    `detection_accuracy` is a fraction (0..1). The store keeps it as a
    percentage; conversion happens in from_storage / to_storage.
    """
    id: str = field(default_factory=_gen_id)
    location: Location = field(default_factory=lambda: Location(lat=0.0, lng=0.0))

    severity: Severity = Severity.LOW
    status: Status = Status.REPORTED
    detection_accuracy: float = 0.0

    report_date: str = field(default_factory=_utc_iso)
    scheduled_repair_date: Optional[str] = None
    completion_date: Optional[str] = None

    images: List[str] = field(default_factory=list)
    description: Optional[str] = None
    reported_by: Optional[str] = None
    lidar_data: Optional[LidarData] = None

    road_id: Optional[str] = None
    pothole_number: Optional[int] = None

    # --------------------
    # Validation
    # --------------------
    def validate(self) -> None:
        """
        Raises ValueError if any invariant is broken.
        """
        if not (-90.0 <= self.location.lat <= 90.0):
            raise ValueError(f"lat must be in [-90, 90], got {self.location.lat}")
        if not (-180.0 <= self.location.lng <= 180.0):
            raise ValueError(f"lng must be in [-180, 180], got {self.location.lng}")
        if not (0.0 <= self.detection_accuracy <= 1.0):
            raise ValueError(
                f"detection_accuracy must be in [0, 1], got {self.detection_accuracy}"
            )
        # Enum coercion raises ValueError for unknown values
        self.severity = Severity(self.severity)
        self.status = Status(self.status)

    def with_changes(self, **changes: Any) -> "Pothole":
        return replace(self, **changes)

    # --------------------
    # Conversions – storage layer (JSON/SQL/Supabase rows)
    # --------------------
    @classmethod
    def from_storage(cls, row: Dict[str, Any]) -> "Pothole":
        """
        Build from a `potholes` row.

        - detection_accuracy: stored 0..100, exposed 0..1
        - address falls back to "Road ID: <road_id>"
        - image_url becomes a one-element images list
        - lidar_data JSON (camelCase) is parsed block by block
        """
        road_id = safe_str(row.get("road_id"))
        address = safe_str(row.get("address"))
        if not address and road_id:
            address = f"Road ID: {road_id}"

        image_url = safe_str(row.get("image_url"))

        pothole = cls(
            id=str(row.get("id") or _gen_id()),
            location=Location(
                lat=safe_float(row.get("latitude"), 0.0),
                lng=safe_float(row.get("longitude"), 0.0),
                address=address,
            ),
            severity=Severity(str(row.get("severity") or "").strip().lower()),
            status=Status(str(row.get("status") or "").strip().lower()),
            detection_accuracy=safe_float(row.get("detection_accuracy"), 0.0) / 100.0,
            report_date=safe_str(row.get("report_date")) or safe_str(row.get("created_at")) or "",
            scheduled_repair_date=safe_str(row.get("scheduled_repair_date")),
            completion_date=safe_str(row.get("completion_date")),
            images=[image_url] if image_url else [],
            description=safe_str(row.get("description")),
            reported_by=safe_str(row.get("reported_by")),
            lidar_data=lidar_from_json(row.get("lidar_data")),
            road_id=road_id,
            pothole_number=safe_int(row.get("pothole_number")),
        )
        return pothole

    def to_storage(self) -> Dict[str, Any]:
        """
        Convert to a flat dict suitable for the storage adapters.
        Only the first image is persisted (the store has one image_url column).
        """
        self.validate()
        return {
            "id": self.id,
            "road_id": self.road_id or "",
            "pothole_number": self.pothole_number or 0,
            "latitude": self.location.lat,
            "longitude": self.location.lng,
            "address": self.location.address,
            "severity": self.severity.value,
            "status": self.status.value,
            "detection_accuracy": round(self.detection_accuracy * 100.0, 4),
            "report_date": self.report_date,
            "scheduled_repair_date": self.scheduled_repair_date,
            "completion_date": self.completion_date,
            "description": self.description,
            "reported_by": self.reported_by,
            "image_url": self.images[0] if self.images else None,
            "lidar_data": lidar_to_json(self.lidar_data),
        }
