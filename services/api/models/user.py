from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import UserRole


@dataclass(frozen=True)
class User:
    """Staff member shown in the dashboard header and as document assignee."""
    id: str
    name: str
    email: str
    role: UserRole
    avatar: Optional[str] = None
