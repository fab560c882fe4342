"""Pydantic schemas for authentication endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class PasswordGrantRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class UserUpdateRequest(BaseModel):
    user_metadata: dict[str, Any]


__all__ = [
    "SignUpRequest",
    "PasswordGrantRequest",
    "UserResponse",
    "SessionResponse",
    "UserUpdateRequest",
]
