"""Client-side admin gate.

The server decides what an admin may do. These helpers only choose which
screens to show, so every failure path answers "not an admin".
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from ..constants import ADMIN_ROLES
from ..schemas import UserResponse
from .transport import ApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AdminUser:
    id: UUID
    email: str
    role: str
    permissions: tuple[str, ...] = ()
    user_metadata: dict[str, Any] = field(default_factory=dict)


def _metadata_role(user: UserResponse) -> str | None:
    role = (user.user_metadata or {}).get("role")
    return role if isinstance(role, str) else None


def _looks_like_admin(user: UserResponse, admin_email_domain: str) -> bool:
    if _metadata_role(user) in ADMIN_ROLES:
        return True
    domain = admin_email_domain.strip().lstrip("@").lower()
    return bool(domain) and user.email.lower().endswith(f"@{domain}")


def is_admin(client: ApiClient) -> bool:
    """Ask the server first; fall back to metadata hints only when the RPC is unusable."""

    try:
        user_result = client.auth.get_user()
        user = user_result.data
        if user_result.error is not None or user is None:
            return False

        rpc_result = client.rpc("is_admin")
        if rpc_result.error is None and isinstance(rpc_result.data, bool):
            return rpc_result.data

        logger.warning(
            "is_admin RPC unavailable (%s); falling back to user metadata",
            rpc_result.error or "non-boolean response",
        )
        return _looks_like_admin(user, client.settings.admin_email_domain)
    except Exception:
        logger.exception("Error checking admin status")
        return False


def get_admin_user(client: ApiClient) -> AdminUser | None:
    try:
        result = client.auth.get_user()
        user = result.data
        if result.error is not None or user is None:
            return None
        if not _looks_like_admin(user, client.settings.admin_email_domain):
            return None

        metadata = dict(user.user_metadata or {})
        raw_permissions = metadata.get("permissions")
        permissions = (
            tuple(str(item) for item in raw_permissions) if isinstance(raw_permissions, (list, tuple)) else ()
        )
        return AdminUser(
            id=user.id,
            email=user.email,
            role=_metadata_role(user) or "user",
            permissions=permissions,
            user_metadata=metadata,
        )
    except Exception:
        logger.exception("Error getting admin user")
        return None


def has_permission(client: ApiClient, permission: str) -> bool:
    admin = get_admin_user(client)
    if admin is None:
        return False
    if admin.role == "super_admin":
        return True
    return permission in admin.permissions


__all__ = ["AdminUser", "is_admin", "get_admin_user", "has_permission"]
