# services/api/routers/users.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from core.roster import get_user, list_users
from core.validation import coerce_filter
from models import UserRole
from schemas import UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut])
async def get_users(role: Optional[str] = Query(None, description="admin|maintenance|inspector|reporter|all")):
    """Fixed staff roster (no login; the first entry is the current user)."""
    wanted = coerce_filter(UserRole, role, "role")
    return [UserOut.from_domain(u) for u in list_users(wanted)]


@router.get("/{user_id}", response_model=UserOut)
async def get_user_by_id(user_id: str):
    user = get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="USER_NOT_FOUND")
    return UserOut.from_domain(user)
