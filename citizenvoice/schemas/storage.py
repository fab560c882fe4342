"""Schemas for object storage uploads."""
from __future__ import annotations

from pydantic import BaseModel


class StoredObjectResponse(BaseModel):
    bucket: str
    path: str
    public_url: str
    content_type: str


__all__ = ["StoredObjectResponse"]
