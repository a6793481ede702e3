# services/api/routers/potholes.py
from __future__ import annotations

import io
import logging
from typing import Annotated, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from adapters import StorageError
from core import snapshot
from core.analytics import summarize
from core.export import MEDIA_TYPES, export_filename, to_csv, to_geojson, to_xlsx
from core.filters import filter_potholes
from core.lifecycle import status_update_fields
from core.validation import coerce_filter, ensure_not_completed, validate_status_transition
from models import Location, Pothole, Severity, Status
from models.converters import lidar_from_json
from schemas import PotholeCreate, PotholeListOut, PotholeOut, StatusUpdate
from settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/potholes", tags=["potholes"])

LOAD_FAILED = "Could not load potholes data. Please try again later."
SAVE_FAILED = "Could not save pothole. Please try again later."
UPDATE_FAILED = "Could not update pothole status. Please try again later."


def get_storage():
    """
    DI helper: the adapter lives in main.py (imported lazily so that
    routers can be imported before the app is built).
    """
    from main import get_storage_adapter

    return get_storage_adapter()


Storage = Annotated[object, Depends(get_storage)]


def _load_all(storage) -> List[Pothole]:
    try:
        return snapshot.load_potholes(storage)
    except StorageError as e:
        logger.error(f"Loading potholes failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=LOAD_FAILED)


def _get_or_404(storage, pothole_id: str) -> Tuple[Pothole, str]:
    """
    The record plus its status exactly as stored. Rows the list would skip
    answer 404 here too.
    """
    try:
        row = storage.get_pothole(pothole_id)
    except StorageError as e:
        logger.error(f"Loading pothole {pothole_id} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=LOAD_FAILED)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="POTHOLE_NOT_FOUND")
    try:
        pothole = Pothole.from_storage(row)
        pothole.validate()
    except ValueError as e:
        logger.warning(f"Pothole row {pothole_id!r} is not usable: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="POTHOLE_NOT_FOUND")
    return pothole, row.get("status")


def _write_status(storage, current: Pothole, stored_status: str, target: Status) -> PotholeOut:
    """
    Compare-and-set: the write only lands while the stored status is still
    the one this request read.
    """
    fields = status_update_fields(
        target, lead_days=get_settings().scheduled_repair_lead_days
    )
    try:
        row = storage.update_pothole(current.id, fields, expected_status=stored_status)
    except StorageError as e:
        logger.error(f"Updating pothole {current.id} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=UPDATE_FAILED)

    if row is None:
        snapshot.invalidate()
        logger.info(
            f"Pothole {current.id} changed concurrently (expected {stored_status!r})"
        )
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="STATUS_CONFLICT")

    updated = Pothole.from_storage(row)
    snapshot.patch_pothole(updated)
    logger.info(f"Pothole {updated.id}: {current.status.value} -> {updated.status.value}")
    return PotholeOut.from_domain(updated)


# ---------- list / export ----------


@router.get("", response_model=PotholeListOut)
async def list_potholes(
    storage: Storage,
    severity: Optional[str] = Query(None, description="low|medium|high|critical|all"),
    status_: Optional[str] = Query(
        None, alias="status", description="reported|inspected|scheduled|in-progress|completed|all"
    ),
):
    """
    All defects matching the optional severity / status constraints,
    with total and filtered counts ("Showing N of M").
    """
    sev = coerce_filter(Severity, severity, "severity")
    st = coerce_filter(Status, status_, "status")

    everything = _load_all(storage)
    filtered = filter_potholes(everything, severity=sev, status=st)
    return PotholeListOut(
        total=len(everything),
        filtered=len(filtered),
        severity=sev,
        status=st,
        items=[PotholeOut.from_domain(p) for p in filtered],
    )


@router.get("/export")
async def export_potholes(
    storage: Storage,
    fmt: str = Query("csv", alias="format", pattern="^(csv|geojson|xlsx)$"),
    severity: Optional[str] = Query(None),
    status_: Optional[str] = Query(None, alias="status"),
):
    """Download the (filtered) list as CSV, GeoJSON or an Excel workbook."""
    sev = coerce_filter(Severity, severity, "severity")
    st = coerce_filter(Status, status_, "status")

    rows = filter_potholes(_load_all(storage), severity=sev, status=st)
    limit = get_settings().max_export_rows
    if len(rows) > limit:
        logger.warning(f"Export truncated to {limit} of {len(rows)} rows")
        rows = rows[:limit]

    headers = {"Content-Disposition": f'attachment; filename="{export_filename(fmt)}"'}

    if fmt == "geojson":
        return JSONResponse(
            content=to_geojson(rows), media_type=MEDIA_TYPES["geojson"], headers=headers
        )

    if fmt == "xlsx":
        data = to_xlsx(rows, summarize(rows))
        return StreamingResponse(
            io.BytesIO(data), media_type=MEDIA_TYPES["xlsx"], headers=headers
        )

    return Response(content=to_csv(rows), media_type=MEDIA_TYPES["csv"], headers=headers)


# ---------- single record ----------


@router.post("", response_model=PotholeOut, status_code=status.HTTP_201_CREATED)
async def create_pothole(body: PotholeCreate, storage: Storage):
    """Report a new defect; it always enters the lifecycle as "reported"."""
    lidar = lidar_from_json(body.lidar_data.model_dump()) if body.lidar_data else None
    pothole = Pothole(
        location=Location(
            lat=body.location.lat,
            lng=body.location.lng,
            address=body.location.address,
        ),
        severity=body.severity,
        status=Status.REPORTED,
        detection_accuracy=body.detection_accuracy,
        images=list(body.images),
        description=body.description,
        reported_by=body.reported_by,
        road_id=body.road_id,
        lidar_data=lidar,
    )

    try:
        row = storage.create_pothole(pothole.to_storage())
    except StorageError as e:
        logger.error(f"Creating pothole failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=SAVE_FAILED)

    snapshot.invalidate()
    created = Pothole.from_storage(row)
    logger.info(f"Pothole {created.id} reported (#{created.pothole_number})")
    return PotholeOut.from_domain(created)


@router.get("/{pothole_id}", response_model=PotholeOut)
async def get_pothole(pothole_id: str, storage: Storage):
    pothole, _ = _get_or_404(storage, pothole_id)
    return PotholeOut.from_domain(pothole)


@router.post("/{pothole_id}/advance", response_model=PotholeOut)
async def advance_pothole(pothole_id: str, storage: Storage):
    """
    Move the defect to its single next status.
    Entering "scheduled" stamps the repair date; entering "completed"
    stamps the completion date.
    """
    current, stored_status = _get_or_404(storage, pothole_id)
    target = ensure_not_completed(current.status)
    return _write_status(storage, current, stored_status, target)


@router.patch("/{pothole_id}/status", response_model=PotholeOut)
async def set_pothole_status(pothole_id: str, body: StatusUpdate, storage: Storage):
    """Set an explicit status. Only the single next status is accepted."""
    current, stored_status = _get_or_404(storage, pothole_id)
    validate_status_transition(current.status, body.status)
    return _write_status(storage, current, stored_status, body.status)
