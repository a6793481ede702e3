"""
Storage adapter interface for Pothole Pulse.
Defines the contract that all storage backends must implement.
"""

import uuid
from datetime import datetime, timezone
from typing import Protocol, List, Dict, Any, Optional

# Columns an update may touch; ids and creation stamps are immutable
POTHOLE_MUTABLE_COLUMNS = frozenset({
    "road_id",
    "pothole_number",
    "latitude",
    "longitude",
    "address",
    "severity",
    "status",
    "detection_accuracy",
    "report_date",
    "scheduled_repair_date",
    "completion_date",
    "description",
    "reported_by",
    "image_url",
    "lidar_data",
})

DOCUMENT_MUTABLE_COLUMNS = frozenset({
    "title",
    "type",
    "status",
    "priority",
    "due_date",
    "assigned_to",
    "pothole_id",
})


class StorageError(Exception):
    """
    Raised by every adapter when a backend call fails (network, driver,
    corrupt file...). Routers catch it at the call site and answer 502.
    """


def utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def fill_pothole_defaults(row: Dict[str, Any], next_number: int) -> Dict[str, Any]:
    """Return a copy of `row` with id / number / timestamps filled in."""
    now = utc_iso()
    out = dict(row)
    out["id"] = out.get("id") or str(uuid.uuid4())
    if not out.get("pothole_number"):
        out["pothole_number"] = next_number
    out["report_date"] = out.get("report_date") or now
    out["created_at"] = out.get("created_at") or now
    return out


def fill_document_defaults(row: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(row)
    out["id"] = out.get("id") or str(uuid.uuid4())
    out["created_at"] = out.get("created_at") or utc_iso()
    return out


def only_columns(updates: Dict[str, Any], allowed: frozenset) -> Dict[str, Any]:
    return {k: v for k, v in updates.items() if k in allowed}


class StorageAdapter(Protocol):
    """
    Protocol defining the interface for all storage adapters.

    This allows swapping between JSON files, SQLite, PostgreSQL and the
    hosted Supabase data API without changing the router or business
    logic code.

    Rows are plain dicts shaped like the hosted schema
    (`potholes` and `pothole_documents` tables).
    """

    # ========== Potholes ==========

    def list_potholes(self) -> List[Dict[str, Any]]:
        """
        Return all pothole rows.
        Ordering is backend-defined; callers must not rely on it.
        """
        ...

    def get_pothole(self, pothole_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a pothole row by id.

        Returns:
            Dict with pothole columns, or None if not found.
        """
        ...

    def create_pothole(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a pothole row.

        Implementations should:
            - generate `id` when missing
            - assign `pothole_number` (max + 1) when missing or 0
            - stamp `created_at` (and `report_date` when missing)

        Returns:
            The stored row.
        """
        ...

    def update_pothole(
        self,
        pothole_id: str,
        updates: Dict[str, Any],
        expected_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Overwrite only the provided columns on a pothole row.

        Args:
            pothole_id: Row id
            updates: Column -> new value
            expected_status: If given, the update only applies while the
                stored status still equals this value (compare-and-set).

        Returns:
            Updated row, or None when no row matched (missing id or the
            status precondition failed).
        """
        ...

    # ========== Documents ==========

    def list_documents(self, pothole_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Return document rows, optionally only those linked to `pothole_id`.
        """
        ...

    def get_document(self, document_id: str) -> Optional[Dict[str, Any]]:
        ...

    def create_document(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a document row (id / created_at generated when missing).

        Returns:
            The stored row.
        """
        ...

    def update_document(self, document_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Overwrite only the provided columns.

        Returns:
            Updated row, or None if not found.
        """
        ...

    # ========== Health ==========

    def ping(self) -> None:
        """
        Cheap connectivity check used by /health and /readyz.
        Raises StorageError when the backend is unreachable.
        """
        ...
