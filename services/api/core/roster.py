"""
Fixed staff roster. There is no login; the first user is treated as the
current user.
"""
from __future__ import annotations

from typing import List, Optional

from models import User, UserRole

DEFAULT_AVATAR = "/placeholder.svg"

USERS: List[User] = [
    User(id="u-001", name="Admin User", email="admin@potholepulse.com",
         role=UserRole.ADMIN, avatar=DEFAULT_AVATAR),
    User(id="u-002", name="Maintenance Crew", email="crew@potholepulse.com",
         role=UserRole.MAINTENANCE, avatar=DEFAULT_AVATAR),
    User(id="u-003", name="Road Inspector", email="inspector@potholepulse.com",
         role=UserRole.INSPECTOR, avatar=DEFAULT_AVATAR),
]


def list_users(role: Optional[UserRole] = None) -> List[User]:
    if role is None:
        return list(USERS)
    return [u for u in USERS if u.role == role]


def get_user(user_id: str) -> Optional[User]:
    for u in USERS:
        if u.id == user_id:
            return u
    return None
