"""
Pydantic schemas for the staff roster.
"""
from typing import Optional

from pydantic import BaseModel

from models import User, UserRole


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    avatar: Optional[str] = None

    @classmethod
    def from_domain(cls, u: User) -> "UserOut":
        return cls(id=u.id, name=u.name, email=u.email, role=u.role, avatar=u.avatar)
