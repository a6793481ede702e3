# services/api/adapters/sqlite/__init__.py
from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import (
    JSON,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    event,
    func,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..base import (
    DOCUMENT_MUTABLE_COLUMNS,
    POTHOLE_MUTABLE_COLUMNS,
    StorageError,
    fill_document_defaults,
    fill_pothole_defaults,
    only_columns,
)

logger = logging.getLogger(__name__)

# ---- Engine (SQLite) with WAL & pragmas -------------------------------------

def _ensure_dir(path: str):
    d = os.path.dirname(path)
    if d and not os.path.isdir(d):
        os.makedirs(d, exist_ok=True)

def make_engine(db_url: str) -> Engine:
    # Create data dir if sqlite file
    if db_url.startswith("sqlite:///"):
        file_path = db_url.replace("sqlite:///", "", 1)
        _ensure_dir(file_path)

    engine = create_engine(db_url, future=True, pool_pre_ping=True)

    # Apply pragmas per-connection
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore
        if isinstance(dbapi_connection, sqlite3.Connection):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA synchronous=NORMAL;")
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.close()

    return engine

# ---- Schema via SQLAlchemy Core ---------------------------------------------
# Timestamps are kept as ISO-8601 text so every backend returns the same shape.

metadata = MetaData()

potholes = Table(
    "potholes",
    metadata,
    Column("id", String, primary_key=True),
    Column("road_id", String, nullable=False, default=""),
    Column("pothole_number", Integer, nullable=False),
    Column("latitude", Float, nullable=False),
    Column("longitude", Float, nullable=False),
    Column("address", Text),
    Column("severity", String, nullable=False),
    Column("status", String, nullable=False),
    Column("detection_accuracy", Float, nullable=False),  # percent 0..100
    Column("report_date", String, nullable=False),
    Column("scheduled_repair_date", String),
    Column("completion_date", String),
    Column("description", Text),
    Column("reported_by", String),
    Column("image_url", Text),
    Column("lidar_data", JSON),
    Column("created_at", String, nullable=False),
)

pothole_documents = Table(
    "pothole_documents",
    metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False),
    Column("type", String, nullable=False),
    Column("status", String, nullable=False),
    Column("priority", String, nullable=False),
    Column("due_date", String, nullable=False),
    Column("assigned_to", String, nullable=False),
    Column("pothole_id", String, ForeignKey("potholes.id", ondelete="SET NULL")),
    Column("created_at", String, nullable=False),
)

Index("idx_potholes_severity", potholes.c.severity)
Index("idx_potholes_status", potholes.c.status)
Index("idx_documents_pothole", pothole_documents.c.pothole_id)

_POTHOLE_COLUMNS = {c.name for c in potholes.columns}
_DOCUMENT_COLUMNS = {c.name for c in pothole_documents.columns}

# ---- Adapter implementation --------------------------------------------------

@dataclass(frozen=True)
class SqliteAdapter:
    engine: Engine

    @classmethod
    def from_url(cls, db_url: str = "sqlite:///data/potholes.db") -> "SqliteAdapter":
        eng = make_engine(db_url)
        metadata.create_all(eng)
        return cls(engine=eng)

    @contextmanager
    def _begin(self) -> Iterator[Connection]:
        """Transaction scope; driver errors surface as StorageError."""
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.error(f"Database error: {str(e)}")
            raise StorageError(str(e)) from e

    # Potholes
    def list_potholes(self) -> List[Dict[str, Any]]:
        with self._begin() as conn:
            rows = conn.execute(
                select(potholes).order_by(potholes.c.pothole_number.asc())
            ).mappings().all()
            return [dict(r) for r in rows]

    def get_pothole(self, pothole_id: str) -> Optional[Dict[str, Any]]:
        with self._begin() as conn:
            return self._get_pothole(conn, pothole_id)

    def _get_pothole(self, conn: Connection, pothole_id: str) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            select(potholes).where(potholes.c.id == pothole_id)
        ).mappings().first()
        return dict(row) if row else None

    def create_pothole(self, row: Dict[str, Any]) -> Dict[str, Any]:
        with self._begin() as conn:
            current_max = conn.execute(select(func.max(potholes.c.pothole_number))).scalar()
            stored = fill_pothole_defaults(row, (current_max or 0) + 1)
            values = {k: v for k, v in stored.items() if k in _POTHOLE_COLUMNS}
            conn.execute(insert(potholes).values(**values))
            return self._get_pothole(conn, values["id"]) or values

    def update_pothole(
        self,
        pothole_id: str,
        updates: Dict[str, Any],
        expected_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        values = only_columns(updates, POTHOLE_MUTABLE_COLUMNS)
        with self._begin() as conn:
            stmt = update(potholes).where(potholes.c.id == pothole_id)
            if expected_status is not None:
                stmt = stmt.where(potholes.c.status == expected_status)
            if values:
                res = conn.execute(stmt.values(**values))
                if res.rowcount == 0:
                    return None
                return self._get_pothole(conn, pothole_id)

            # nothing to write: still honour the lookup / precondition
            row = self._get_pothole(conn, pothole_id)
            if row is None or (expected_status is not None and row["status"] != expected_status):
                return None
            return row

    # Documents
    def list_documents(self, pothole_id: Optional[str] = None) -> List[Dict[str, Any]]:
        q = select(pothole_documents).order_by(pothole_documents.c.due_date.asc())
        if pothole_id is not None:
            q = q.where(pothole_documents.c.pothole_id == pothole_id)
        with self._begin() as conn:
            return [dict(r) for r in conn.execute(q).mappings().all()]

    def get_document(self, document_id: str) -> Optional[Dict[str, Any]]:
        with self._begin() as conn:
            return self._get_document(conn, document_id)

    def _get_document(self, conn: Connection, document_id: str) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            select(pothole_documents).where(pothole_documents.c.id == document_id)
        ).mappings().first()
        return dict(row) if row else None

    def create_document(self, row: Dict[str, Any]) -> Dict[str, Any]:
        stored = fill_document_defaults(row)
        values = {k: v for k, v in stored.items() if k in _DOCUMENT_COLUMNS}
        with self._begin() as conn:
            conn.execute(insert(pothole_documents).values(**values))
            return self._get_document(conn, values["id"]) or values

    def update_document(self, document_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        values = only_columns(updates, DOCUMENT_MUTABLE_COLUMNS)
        with self._begin() as conn:
            if values:
                res = conn.execute(
                    update(pothole_documents)
                    .where(pothole_documents.c.id == document_id)
                    .values(**values)
                )
                if res.rowcount == 0:
                    return None
            return self._get_document(conn, document_id)

    # Health
    def ping(self) -> None:
        with self._begin() as conn:
            conn.execute(text("SELECT 1")).fetchone()

    def close(self) -> None:
        self.engine.dispose()
