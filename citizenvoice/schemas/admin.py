"""Schemas describing the admin dashboard and user management."""
from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AdminStats(BaseModel):
    total_users: int
    reports_by_status: dict[str, int]
    fact_checks_by_verdict: dict[str, int]
    pending_reports: int
    fact_checks_awaiting_review: int


class AdminUserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: str
    created_at: datetime


class RoleUpdateRequest(BaseModel):
    role: Literal["user", "moderator", "admin"]


__all__ = ["AdminStats", "AdminUserSummary", "RoleUpdateRequest"]
