# services/api/core/snapshot.py
"""
Possibly-stale in-memory copy of the pothole list.

Filled on the first read, served until the TTL expires, patched in place
after a successful update and dropped after an insert or a failed
compare-and-set.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from cachetools import TTLCache

from models import Pothole
from settings import get_settings

logger = logging.getLogger(__name__)

_KEY = "potholes"
_lock = threading.Lock()
_cache: Optional[TTLCache] = None

stats = {"hits": 0, "misses": 0}


def _get_cache() -> Optional[TTLCache]:
    global _cache
    ttl = get_settings().snapshot_ttl_s
    if ttl <= 0:
        return None
    if _cache is None:
        _cache = TTLCache(maxsize=1, ttl=ttl)
    return _cache


def potholes_from_rows(rows: Iterable[Dict[str, Any]]) -> List[Pothole]:
    """Convert storage rows, skipping (and logging) rows that fail validation."""
    out: List[Pothole] = []
    for row in rows:
        try:
            pothole = Pothole.from_storage(row)
            pothole.validate()
            out.append(pothole)
        except ValueError as e:
            logger.warning(f"Skipping pothole row {row.get('id')!r}: {e}")
    return out


def load_potholes(storage) -> List[Pothole]:
    """
    Return the pothole list, from the snapshot when fresh.
    StorageError from the adapter propagates to the caller.
    """
    cache = _get_cache()
    if cache is not None:
        with _lock:
            cached = cache.get(_KEY)
        if cached is not None:
            stats["hits"] += 1
            return list(cached)

    stats["misses"] += 1
    potholes = potholes_from_rows(storage.list_potholes())
    logger.info(f"Loaded {len(potholes)} potholes from storage")

    if cache is not None:
        with _lock:
            cache[_KEY] = list(potholes)
    return potholes


def patch_pothole(pothole: Pothole) -> None:
    """Replace the cached copy of `pothole` (matched by id), if cached."""
    cache = _get_cache()
    if cache is None:
        return
    with _lock:
        cached = cache.get(_KEY)
        if cached is None:
            return
        cache[_KEY] = [pothole if p.id == pothole.id else p for p in cached]


def invalidate() -> None:
    global _cache
    with _lock:
        if _cache is not None:
            _cache.clear()


def reset() -> None:
    """Forget the snapshot and its TTL (used when settings change, e.g. tests)."""
    global _cache
    with _lock:
        _cache = None
        stats["hits"] = 0
        stats["misses"] = 0
