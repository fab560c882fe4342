"""Admin dashboard endpoints."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import AdminStats, AdminUserSummary, RoleUpdateRequest
from ..services import get_optional_user, list_users, load_admin_stats, update_user_role

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStats)
async def admin_stats_endpoint(
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> AdminStats:
    return load_admin_stats(db, actor=current_user)


@router.get("/users", response_model=list[AdminUserSummary])
async def admin_users_endpoint(
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> list[AdminUserSummary]:
    return [AdminUserSummary.model_validate(user) for user in list_users(db, actor=current_user)]


@router.patch("/users/{user_id}/role", response_model=AdminUserSummary)
async def admin_role_update_endpoint(
    user_id: UUID,
    payload: RoleUpdateRequest,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> AdminUserSummary:
    user = update_user_role(db, actor=current_user, target_user_id=user_id, new_role=payload.role)
    return AdminUserSummary.model_validate(user)


__all__ = ["router"]
