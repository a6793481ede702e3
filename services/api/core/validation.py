"""
Validation utilities for Pothole Pulse.
Turn lifecycle and filter violations into HTTP errors with stable codes.
"""
from typing import Optional

from fastapi import HTTPException

from core.lifecycle import next_status
from models import Status, parse_filter


def coerce_filter(enum_cls, raw: Optional[str], name: str):
    """
    Parse an optional query filter ("all" / empty means no constraint).

    Raises:
        HTTPException: 422 for values outside the enumeration
    """
    try:
        return parse_filter(enum_cls, raw)
    except ValueError:
        allowed = ", ".join(["all"] + [m.value for m in enum_cls])
        raise HTTPException(
            status_code=422,
            detail=f"{name} must be one of: {allowed}; got {raw!r}",
        )


def ensure_not_completed(current: Status) -> Status:
    """
    Return the single next status for `current`.

    Raises:
        HTTPException: 409 POTHOLE_ALREADY_COMPLETED for the terminal status
    """
    target = next_status(current)
    if target is None:
        raise HTTPException(status_code=409, detail="POTHOLE_ALREADY_COMPLETED")
    return target


def validate_status_transition(current: Status, requested: Status) -> None:
    """
    Only the single next status may be requested.

    Rules:
    - completed has no successor (POTHOLE_ALREADY_COMPLETED)
    - going back, skipping ahead or repeating the current status is
      INVALID_STATUS_TRANSITION

    Raises:
        HTTPException: 409 if validation fails
    """
    target = ensure_not_completed(current)
    if Status(requested) != target:
        raise HTTPException(
            status_code=409,
            detail=(
                f"INVALID_STATUS_TRANSITION: {Status(current).value} -> "
                f"{Status(requested).value} (expected {target.value})"
            ),
        )
