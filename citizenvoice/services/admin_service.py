"""Admin dashboard statistics and user role management."""
from __future__ import annotations

import logging
from typing import cast
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import ASSIGNABLE_ROLES, FACT_CHECK_VERDICTS, REPORT_STATUSES
from ..models import FactCheck, Report, User
from ..schemas import AdminStats
from ..security.policies import ensure_admin, is_super_admin, user_role

logger = logging.getLogger(__name__)


def load_admin_stats(db: Session, *, actor: User | None) -> AdminStats:
    """Return user totals plus report and fact-check counts per state."""

    ensure_admin(actor, table="users")

    total_users = int(db.scalar(select(func.count(User.id))) or 0)

    reports_by_status = {value: 0 for value in REPORT_STATUSES}
    for value, count in db.execute(select(Report.status, func.count(Report.id)).group_by(Report.status)):
        reports_by_status[value] = int(count)

    fact_checks_by_verdict = {value: 0 for value in FACT_CHECK_VERDICTS}
    for value, count in db.execute(select(FactCheck.verdict, func.count(FactCheck.id)).group_by(FactCheck.verdict)):
        fact_checks_by_verdict[value] = int(count)

    return AdminStats(
        total_users=total_users,
        reports_by_status=reports_by_status,
        fact_checks_by_verdict=fact_checks_by_verdict,
        pending_reports=reports_by_status["pending"],
        fact_checks_awaiting_review=fact_checks_by_verdict["queued"] + fact_checks_by_verdict["needs-review"],
    )


def list_users(db: Session, *, actor: User | None) -> list[User]:
    ensure_admin(actor, table="users")
    return list(db.scalars(select(User).order_by(User.created_at.desc())))


def update_user_role(db: Session, *, actor: User | None, target_user_id: UUID, new_role: str) -> User:
    """Let an admin promote or demote another account."""

    admin = ensure_admin(actor, table="users")

    desired_role = (new_role or "user").strip().lower()
    if desired_role not in ASSIGNABLE_ROLES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown role")

    target = db.get(User, target_user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if cast(UUID, target.id) == cast(UUID, admin.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Admins cannot change their own role")
    if is_super_admin(target):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Super admin roles cannot be changed")

    previous = user_role(target)
    target.role = desired_role
    try:
        db.add(target)
        db.commit()
        db.refresh(target)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update role for user %s", target_user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to update role") from exc

    logger.info("User %s role changed from %s to %s by %s", target.id, previous, desired_role, admin.id)
    return target


__all__ = ["load_admin_stats", "list_users", "update_user_role"]
