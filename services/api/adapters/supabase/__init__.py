# services/api/adapters/supabase/__init__.py
"""
Supabase storage adapter for Pothole Pulse.

Talks to the hosted Postgres through its PostgREST data API
(`<SUPABASE_URL>/rest/v1/<table>`) with generic select / insert / update
calls. No retries: a failed call surfaces as StorageError.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..base import (
    DOCUMENT_MUTABLE_COLUMNS,
    POTHOLE_MUTABLE_COLUMNS,
    StorageError,
    fill_document_defaults,
    fill_pothole_defaults,
    only_columns,
)

logger = logging.getLogger(__name__)

POTHOLES_TABLE = "potholes"
DOCUMENTS_TABLE = "pothole_documents"

# Columns of the hosted potholes table; it has no address column
HOSTED_POTHOLE_COLUMNS = frozenset({
    "id",
    "road_id",
    "pothole_number",
    "latitude",
    "longitude",
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
    "created_at",
})


def _eq(value: Any) -> str:
    return f"eq.{value}"


class SupabaseAdapter:
    """
    PostgREST-backed storage adapter.

    Args:
        url: Project URL, e.g. https://<project>.supabase.co
        key: anon or service-role API key
        timeout_s: Per-request timeout
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        url: str,
        key: str,
        timeout_s: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not url or not key:
            raise ValueError("Supabase requires SUPABASE_URL and SUPABASE_KEY")

        self.client = httpx.Client(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=timeout_s,
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    # ---------- low-level ----------

    def _request(
        self,
        method: str,
        table: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
        returning: bool = False,
    ) -> Any:
        headers = {"Prefer": "return=representation"} if returning else None
        try:
            response = self.client.request(
                method, f"/{table}", params=params, json=json_body, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Supabase {method} {table} failed: {e}")
            raise StorageError(f"{method} {table} failed: {e}") from e

        if response.status_code >= 400:
            logger.error(
                f"Supabase {method} {table} returned HTTP {response.status_code}: {response.text[:200]}"
            )
            raise StorageError(f"{method} {table} returned HTTP {response.status_code}")

        if not response.content:
            return None
        return response.json()

    def _select(self, table: str, **filters: Any) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"select": "*"}
        params.update({k: _eq(v) for k, v in filters.items()})
        return self._request("GET", table, params=params) or []

    def _select_one(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        rows = self._select(table, id=row_id)
        return rows[0] if rows else None

    def _insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        rows = self._request("POST", table, json_body=row, returning=True) or []
        return rows[0] if rows else row

    def _update(self, table: str, values: Dict[str, Any], **filters: Any) -> Optional[Dict[str, Any]]:
        params = {k: _eq(v) for k, v in filters.items()}
        rows = self._request("PATCH", table, params=params, json_body=values, returning=True) or []
        return rows[0] if rows else None

    # ========== Potholes ==========

    def list_potholes(self) -> List[Dict[str, Any]]:
        return self._select(POTHOLES_TABLE)

    def get_pothole(self, pothole_id: str) -> Optional[Dict[str, Any]]:
        return self._select_one(POTHOLES_TABLE, pothole_id)

    def _next_pothole_number(self) -> int:
        rows = self._request(
            "GET",
            POTHOLES_TABLE,
            params={"select": "pothole_number", "order": "pothole_number.desc", "limit": 1},
        ) or []
        current = rows[0].get("pothole_number") if rows else 0
        return int(current or 0) + 1

    def create_pothole(self, row: Dict[str, Any]) -> Dict[str, Any]:
        next_number = 0 if row.get("pothole_number") else self._next_pothole_number()
        row = fill_pothole_defaults(row, next_number)
        return self._insert(POTHOLES_TABLE, only_columns(row, HOSTED_POTHOLE_COLUMNS))

    def update_pothole(
        self,
        pothole_id: str,
        updates: Dict[str, Any],
        expected_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        values = only_columns(
            only_columns(updates, POTHOLE_MUTABLE_COLUMNS), HOSTED_POTHOLE_COLUMNS
        )
        filters: Dict[str, Any] = {"id": pothole_id}
        if expected_status is not None:
            filters["status"] = expected_status
        if not values:
            rows = self._select(POTHOLES_TABLE, **filters)
            return rows[0] if rows else None
        return self._update(POTHOLES_TABLE, values, **filters)

    # ========== Documents ==========

    def list_documents(self, pothole_id: Optional[str] = None) -> List[Dict[str, Any]]:
        if pothole_id is not None:
            return self._select(DOCUMENTS_TABLE, pothole_id=pothole_id)
        return self._select(DOCUMENTS_TABLE)

    def get_document(self, document_id: str) -> Optional[Dict[str, Any]]:
        return self._select_one(DOCUMENTS_TABLE, document_id)

    def create_document(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(DOCUMENTS_TABLE, fill_document_defaults(row))

    def update_document(self, document_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        values = only_columns(updates, DOCUMENT_MUTABLE_COLUMNS)
        if not values:
            return self.get_document(document_id)
        return self._update(DOCUMENTS_TABLE, values, id=document_id)

    # ========== Health ==========

    def ping(self) -> None:
        self._request("GET", POTHOLES_TABLE, params={"select": "id", "limit": 1})
