"""Schemas for news, civic services and opportunities."""
from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NewsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    summary: str
    content: str | None = None
    date: datetime
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class NewsCreateRequest(BaseModel):
    title: str = Field(min_length=3, max_length=200)
    summary: str = Field(min_length=1)
    content: str | None = None
    date: datetime | None = None
    image_url: str | None = Field(default=None, max_length=1024)


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    icon: str | None = None
    category: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class OpportunityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    organization: str
    deadline: date
    category: str | None = None
    link: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


__all__ = ["NewsResponse", "NewsCreateRequest", "ServiceResponse", "OpportunityResponse"]
