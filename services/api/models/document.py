from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from .converters import safe_str
from .enums import DocumentStatus, DocumentType, Priority


@dataclass
class PotholeDocument:
    """
    Domain model for a piece of repair paperwork (work order, permit, ...).

    This is a pure data object that is easy to map:
      - from storage rows (`pothole_documents` table)
      - to Pydantic schemas (DocumentOut, etc.)
    """
    title: str
    type: DocumentType
    status: DocumentStatus
    priority: Priority
    due_date: str
    assigned_to: str

    id: str = field(default_factory=lambda: str(uuid4()))
    pothole_id: Optional[str] = None      # optional link to a defect record
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def from_storage(cls, row: Dict[str, Any]) -> "PotholeDocument":
        return cls(
            id=str(row.get("id") or ""),
            title=row.get("title") or "",
            type=DocumentType(str(row.get("type") or "").strip().lower()),
            status=DocumentStatus(str(row.get("status") or "").strip().lower()),
            priority=Priority(str(row.get("priority") or "").strip().lower()),
            due_date=safe_str(row.get("due_date")) or "",
            assigned_to=row.get("assigned_to") or "",
            pothole_id=safe_str(row.get("pothole_id")),
            created_at=safe_str(row.get("created_at")) or "",
        )

    def to_storage(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": DocumentType(self.type).value,
            "status": DocumentStatus(self.status).value,
            "priority": Priority(self.priority).value,
            "due_date": self.due_date,
            "assigned_to": self.assigned_to,
            "pothole_id": self.pothole_id,
            "created_at": self.created_at,
        }
