"""SQLAlchemy ORM models for citizen reports and their attachments."""
from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from citizenvoice.database import Base
from .base import CreatedAtMixin, TimestampMixin


class Report(TimestampMixin, Base):
    __tablename__ = "reports"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(Text, nullable=True)

    # Null for anonymous submissions.
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    is_anonymous = Column(Boolean, nullable=False, server_default=expression.false(), default=False)

    # "pending" | "approved" | "rejected" | "in_progress"
    status = Column(String(32), nullable=False, server_default="pending", default="pending", index=True)

    attachments = relationship(
        "ReportAttachment",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="ReportAttachment.created_at",
    )


class ReportAttachment(CreatedAtMixin, Base):
    __tablename__ = "report_attachments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    report_id = Column(UUID(as_uuid=True), ForeignKey("reports.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    path = Column(String(1024), nullable=False)
    # "document" | "image" | "video" | "audio"
    type = Column(String(16), nullable=False)

    report = relationship("Report", back_populates="attachments")


__all__ = ["Report", "ReportAttachment"]
