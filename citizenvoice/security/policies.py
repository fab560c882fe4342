"""Row-level access policies evaluated on every read and write.

These checks are the enforcement boundary. Client-side role hints (user
metadata) are never consulted here.
"""
from __future__ import annotations

from typing import cast
from uuid import UUID

from fastapi import HTTPException, status

from ..constants import ADMIN_ONLY_BUCKETS, ADMIN_ROLES, RLS_VIOLATION_CODE, rls_violation_message
from ..models import Report, User


def user_role(user: User | None) -> str:
    if user is None:
        return "anon"
    return (cast(str | None, getattr(user, "role", None)) or "user").strip().lower()


def is_admin(user: User | None) -> bool:
    """Authoritative admin check backing the ``is_admin`` procedure."""

    return user_role(user) in ADMIN_ROLES


def is_super_admin(user: User | None) -> bool:
    return user_role(user) == "super_admin"


def row_level_security_error(table: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail={"message": rls_violation_message(table), "code": RLS_VIOLATION_CODE},
    )


def ensure_admin(user: User | None, *, table: str) -> User:
    if user is None or not is_admin(user):
        raise row_level_security_error(table)
    return user


def _owns(user: User | None, owner_id: UUID | None) -> bool:
    return user is not None and owner_id is not None and cast(UUID, user.id) == owner_id


def can_view_report(user: User | None, report: Report) -> bool:
    if report.status == "approved":
        return True
    if is_admin(user):
        return True
    return _owns(user, cast(UUID | None, report.user_id))


def can_attach_to_report(user: User | None, report: Report) -> bool:
    if is_admin(user):
        return True
    if _owns(user, cast(UUID | None, report.user_id)):
        return True
    # Anonymous submitters have no identity to match, so only a fresh report accepts files.
    return bool(report.is_anonymous) and report.status == "pending"


def can_upload_to_bucket(user: User | None, bucket: str) -> bool:
    if bucket in ADMIN_ONLY_BUCKETS:
        return is_admin(user)
    return True


__all__ = [
    "user_role",
    "is_admin",
    "is_super_admin",
    "row_level_security_error",
    "ensure_admin",
    "can_view_report",
    "can_attach_to_report",
    "can_upload_to_bucket",
]
