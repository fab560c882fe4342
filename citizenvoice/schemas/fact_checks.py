"""Schemas for fact-check submissions."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..constants import AttachmentType, FactCheckVerdict


class FactCheckAttachment(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    path: str = Field(min_length=1, max_length=1024)
    type: AttachmentType


class FactCheckCreateRequest(BaseModel):
    title: str
    description: str | None = None
    attachments: list[FactCheckAttachment] = Field(default_factory=list)


class FactCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    verdict: str
    user_id: UUID | None = None
    attachments: list[FactCheckAttachment] | None = None
    created_at: datetime
    updated_at: datetime | None = None


class FactCheckVerdictUpdateRequest(BaseModel):
    verdict: FactCheckVerdict


__all__ = [
    "FactCheckAttachment",
    "FactCheckCreateRequest",
    "FactCheckResponse",
    "FactCheckVerdictUpdateRequest",
]
