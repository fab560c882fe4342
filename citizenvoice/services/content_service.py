"""Services for the reference content tables (news, services, opportunities)."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import News, Opportunity, Service, User
from ..security.policies import ensure_admin

logger = logging.getLogger(__name__)


def list_news(db: Session) -> list[News]:
    return list(db.scalars(select(News).order_by(News.date.desc())))


def list_services(db: Session) -> list[Service]:
    return list(db.scalars(select(Service).order_by(Service.name.asc())))


def list_opportunities(db: Session) -> list[Opportunity]:
    return list(db.scalars(select(Opportunity).order_by(Opportunity.deadline.asc())))


def _get_or_404(db: Session, model: Any, row_id: UUID, label: str) -> Any:
    row = db.get(model, row_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return row


def get_news(db: Session, news_id: UUID) -> News:
    return _get_or_404(db, News, news_id, "News item")


def get_service(db: Session, service_id: UUID) -> Service:
    return _get_or_404(db, Service, service_id, "Service")


def get_opportunity(db: Session, opportunity_id: UUID) -> Opportunity:
    return _get_or_404(db, Opportunity, opportunity_id, "Opportunity")


def create_news(
    db: Session,
    *,
    actor: User | None,
    title: str,
    summary: str,
    content: str | None,
    date: datetime | None,
    image_url: str | None,
) -> News:
    ensure_admin(actor, table="news")

    item = News(
        title=title.strip(),
        summary=summary.strip(),
        content=content,
        date=date or datetime.now(timezone.utc),
        image_url=image_url,
    )
    try:
        db.add(item)
        db.commit()
        db.refresh(item)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create news item")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to create news item") from exc
    return item


def delete_news(db: Session, *, actor: User | None, news_id: UUID) -> None:
    ensure_admin(actor, table="news")
    item = get_news(db, news_id)
    try:
        db.delete(item)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete news item %s", news_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to delete news item") from exc


__all__ = [
    "list_news",
    "list_services",
    "list_opportunities",
    "get_news",
    "get_service",
    "get_opportunity",
    "create_news",
    "delete_news",
]
