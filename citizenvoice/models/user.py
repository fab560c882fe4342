"""SQLAlchemy ORM model for application users."""
from __future__ import annotations

import uuid

from sqlalchemy import JSON, Column, String
from sqlalchemy.dialects.postgresql import UUID

from citizenvoice.database import Base
from .base import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Server-owned; the only input to the authoritative admin check.
    role = Column(String(32), nullable=False, server_default="user", default="user")

    # Client-writable profile claims (full_name, language, role hints, ...).
    user_metadata = Column(JSON, nullable=False, default=dict)


__all__ = ["User"]
