"""
JSON file storage adapter for Pothole Pulse.
Simple file-based storage for quick demos and testing.
Not production-ready (single-process lock only, not suitable for several workers).
"""
import json
import logging
import threading
from typing import List, Dict, Any, Optional
from pathlib import Path

from ..base import (
    DOCUMENT_MUTABLE_COLUMNS,
    POTHOLE_MUTABLE_COLUMNS,
    StorageError,
    fill_document_defaults,
    fill_pothole_defaults,
    only_columns,
)

logger = logging.getLogger(__name__)


class JsonAdapter:
    """
    JSON file-based storage adapter.
    Stores each table in its own JSON file under the data directory.
    Uses atomic file replacement for basic consistency.
    """

    def __init__(self, data_dir: str = "data"):
        """
        Initialize the JSON adapter.

        Args:
            data_dir: Directory to store JSON files
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # File paths
        self.potholes_file = self.data_dir / "potholes.json"
        self.documents_file = self.data_dir / "pothole_documents.json"

        self._lock = threading.RLock()

        # Initialize files if they don't exist
        for file in [self.potholes_file, self.documents_file]:
            if not file.exists():
                self._write_file(file, [])

    def _read_file(self, filepath: Path) -> List[Dict[str, Any]]:
        """Read and parse a JSON file."""
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {filepath.name}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"{filepath.name} does not contain a JSON list")
        return data

    def _write_file(self, filepath: Path, data: List[Dict[str, Any]]) -> None:
        """Write data to a JSON file atomically."""
        # Write to temporary file first
        tmp_file = filepath.with_suffix(".tmp")
        try:
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            # Atomic rename
            tmp_file.replace(filepath)
        except OSError as e:
            raise StorageError(f"Could not write {filepath.name}: {e}") from e

    # ========== Potholes ==========

    def list_potholes(self) -> List[Dict[str, Any]]:
        with self._lock:
            return self._read_file(self.potholes_file)

    def get_pothole(self, pothole_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            rows = self._read_file(self.potholes_file)
        return next((p for p in rows if p.get("id") == pothole_id), None)

    def create_pothole(self, row: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            rows = self._read_file(self.potholes_file)
            next_number = max((int(p.get("pothole_number") or 0) for p in rows), default=0) + 1
            stored = fill_pothole_defaults(row, next_number)
            if any(p.get("id") == stored["id"] for p in rows):
                raise StorageError(f"Pothole {stored['id']} already exists")
            rows.append(stored)
            self._write_file(self.potholes_file, rows)
        return stored

    def update_pothole(
        self,
        pothole_id: str,
        updates: Dict[str, Any],
        expected_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            rows = self._read_file(self.potholes_file)
            row = next((p for p in rows if p.get("id") == pothole_id), None)
            if row is None:
                return None
            if expected_status is not None and row.get("status") != expected_status:
                logger.info(
                    f"Pothole {pothole_id} status is {row.get('status')}, "
                    f"expected {expected_status}; update skipped"
                )
                return None

            row.update(only_columns(updates, POTHOLE_MUTABLE_COLUMNS))
            self._write_file(self.potholes_file, rows)
            return dict(row)

    # ========== Documents ==========

    def list_documents(self, pothole_id: Optional[str] = None) -> List[Dict[str, Any]]:
        with self._lock:
            rows = self._read_file(self.documents_file)
        if pothole_id is not None:
            rows = [d for d in rows if d.get("pothole_id") == pothole_id]
        return rows

    def get_document(self, document_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            rows = self._read_file(self.documents_file)
        return next((d for d in rows if d.get("id") == document_id), None)

    def create_document(self, row: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            rows = self._read_file(self.documents_file)
            stored = fill_document_defaults(row)
            rows.append(stored)
            self._write_file(self.documents_file, rows)
        return stored

    def update_document(self, document_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            rows = self._read_file(self.documents_file)
            row = next((d for d in rows if d.get("id") == document_id), None)
            if row is None:
                return None
            row.update(only_columns(updates, DOCUMENT_MUTABLE_COLUMNS))
            self._write_file(self.documents_file, rows)
            return dict(row)

    # ========== Health ==========

    def ping(self) -> None:
        with self._lock:
            self._read_file(self.potholes_file)
