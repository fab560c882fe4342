"""Read-mostly reference content: news, civic services and opportunities."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, Date, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID

from citizenvoice.database import Base
from .base import TimestampMixin


class News(TimestampMixin, Base):
    __tablename__ = "news"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    summary = Column(Text, nullable=False)
    content = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    image_url = Column(String(1024), nullable=True)


class Service(TimestampMixin, Base):
    __tablename__ = "services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=False)
    icon = Column(String(64), nullable=True)
    category = Column(String(64), nullable=True)


class Opportunity(TimestampMixin, Base):
    __tablename__ = "opportunities"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    organization = Column(String(200), nullable=False)
    deadline = Column(Date, nullable=False, index=True)
    category = Column(String(64), nullable=True)
    link = Column(String(1024), nullable=True)


__all__ = ["News", "Service", "Opportunity"]
