from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .pothole import LidarData

logger = logging.getLogger(__name__)


def safe_float(v: Any, default: Optional[float] = None) -> Optional[float]:
    try:
        if v is None:
            return default
        s = str(v).strip().lower()
        if s in ("", "nan", "null", "none"):
            return default
        return float(s)
    except (TypeError, ValueError):
        return default


def safe_int(v: Any, default: Optional[int] = None) -> Optional[int]:
    try:
        if v is None:
            return default
        s = str(v).strip()
        if s == "":
            return default
        # allow "3.0" etc
        return int(float(s))
    except (TypeError, ValueError):
        return default


def safe_str(v: Any) -> Optional[str]:
    """None / blank cells become None; everything else a stripped string."""
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _as_dict(raw: Any) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str):
        if not raw.strip():
            return None
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unparseable lidar_data: %r", raw[:80])
            return None
        return parsed if isinstance(parsed, dict) else None
    return None


def lidar_from_json(raw: Any) -> Optional["LidarData"]:
    """
    Parse the `lidar_data` column (JSON object with camelCase keys) into a
    LidarData. Numeric fields are coerced to numbers, text fields to str.
    Blocks that are missing stay None.
    """
    from .pothole import Classification, LidarData, PointCloud, Surface

    data = _as_dict(raw)
    if not data:
        return None

    pc = data.get("pointCloud") or data.get("point_cloud")
    surface = data.get("surface")
    cls_ = data.get("classification")

    return LidarData(
        point_cloud=PointCloud(
            points=safe_int(pc.get("points"), 0),
            density=safe_float(pc.get("density"), 0.0),
            accuracy=safe_float(pc.get("accuracy"), 0.0),
        ) if isinstance(pc, dict) else None,
        surface=Surface(
            depth=safe_float(surface.get("depth"), 0.0),
            width=safe_float(surface.get("width"), 0.0),
            area=safe_float(surface.get("area"), 0.0),
        ) if isinstance(surface, dict) else None,
        classification=Classification(
            confidence=safe_float(cls_.get("confidence"), 0.0),
            model=str(cls_.get("model") or ""),
            scan_date=str(cls_.get("scan_date") or ""),
        ) if isinstance(cls_, dict) else None,
    )


def lidar_to_json(lidar: Optional["LidarData"]) -> Optional[Dict[str, Any]]:
    """Inverse of lidar_from_json, emitting the store's camelCase keys."""
    if lidar is None:
        return None

    out: Dict[str, Any] = {}
    if lidar.point_cloud is not None:
        out["pointCloud"] = {
            "points": lidar.point_cloud.points,
            "density": lidar.point_cloud.density,
            "accuracy": lidar.point_cloud.accuracy,
        }
    if lidar.surface is not None:
        out["surface"] = {
            "depth": lidar.surface.depth,
            "width": lidar.surface.width,
            "area": lidar.surface.area,
        }
    if lidar.classification is not None:
        out["classification"] = {
            "confidence": lidar.classification.confidence,
            "model": lidar.classification.model,
            "scan_date": lidar.classification.scan_date,
        }
    return out or None
