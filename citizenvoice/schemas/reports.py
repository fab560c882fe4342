"""Schemas for citizen reports."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..constants import AttachmentType, ReportStatus


class ReportCreateRequest(BaseModel):
    title: str
    description: str
    location: str | None = None
    is_anonymous: bool = False


class ReportAttachmentIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    path: str = Field(min_length=1, max_length=1024)
    type: AttachmentType


class ReportAttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    report_id: UUID
    name: str
    path: str
    type: str
    created_at: datetime


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    location: str | None = None
    user_id: UUID | None = None
    is_anonymous: bool
    status: str
    created_at: datetime
    updated_at: datetime | None = None
    attachments: list[ReportAttachmentResponse] = Field(default_factory=list)


class ReportStatusUpdateRequest(BaseModel):
    status: ReportStatus


__all__ = [
    "ReportCreateRequest",
    "ReportAttachmentIn",
    "ReportAttachmentResponse",
    "ReportResponse",
    "ReportStatusUpdateRequest",
]
