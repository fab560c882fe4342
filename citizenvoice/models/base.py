"""Timestamp mixins shared by the CitizenVoice tables."""
from __future__ import annotations

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class CreatedAtMixin:
    """Insert time only, for append-only rows such as attachment links."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TimestampMixin(CreatedAtMixin):
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


__all__ = ["CreatedAtMixin", "TimestampMixin"]
