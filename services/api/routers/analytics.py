# services/api/routers/analytics.py
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from adapters import StorageError
from core import snapshot
from core.analytics import summarize
from schemas import AnalyticsSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_storage():
    from main import get_storage_adapter

    return get_storage_adapter()


Storage = Annotated[object, Depends(get_storage)]


@router.get("/summary", response_model=AnalyticsSummary)
async def analytics_summary(storage: Storage):
    """
    Per-severity and per-status counts over all defects.
    Every severity and status appears, zero counts included.
    """
    try:
        potholes = snapshot.load_potholes(storage)
    except StorageError as e:
        logger.error(f"Loading potholes for analytics failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not load potholes data. Please try again later.",
        )
    return summarize(potholes)
