"""SQLAlchemy ORM model for fact-check submissions."""
from __future__ import annotations

import uuid

from sqlalchemy import JSON, Column, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID

from citizenvoice.database import Base
from .base import TimestampMixin


class FactCheck(TimestampMixin, Base):
    __tablename__ = "fact_checks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    # "queued" | "in-progress" | "verified" | "disputed" | "needs-review"
    verdict = Column(String(32), nullable=False, server_default="queued", default="queued", index=True)

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Embedded list of {"name", "path", "type"} dictionaries.
    attachments = Column(JSON, nullable=True)


__all__ = ["FactCheck"]
