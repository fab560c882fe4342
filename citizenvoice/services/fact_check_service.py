"""Services for fact-check submissions and verdict moderation."""
from __future__ import annotations

import logging
from typing import Sequence, cast
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import DEFAULT_FACT_CHECK_LIMIT
from ..models import FactCheck, User
from ..schemas import FactCheckAttachment
from ..security.policies import ensure_admin
from ..domain.validation import unescape_text, validate_fact_check_claim
from ..domain.verdicts import can_transition_verdict, is_final_verdict

logger = logging.getLogger(__name__)

MAX_FACT_CHECK_LIMIT = 100


def create_fact_check(
    db: Session,
    *,
    submitter: User | None,
    title: str,
    description: str | None,
    attachments: Sequence[FactCheckAttachment],
) -> FactCheck:
    result = validate_fact_check_claim(unescape_text(title))
    if not result.is_valid:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.error)

    fact_check = FactCheck(
        title=title.strip(),
        description=(description or "").strip() or None,
        verdict="queued",
        user_id=cast(UUID, submitter.id) if submitter is not None else None,
        attachments=[item.model_dump() for item in attachments] or None,
    )

    try:
        db.add(fact_check)
        db.commit()
        db.refresh(fact_check)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create fact check")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to create fact check") from exc
    return fact_check


def list_fact_checks(
    db: Session,
    *,
    verdict: str | None = None,
    limit: int | None = DEFAULT_FACT_CHECK_LIMIT,
) -> list[FactCheck]:
    query = select(FactCheck)
    if verdict:
        query = query.where(FactCheck.verdict == verdict)
    query = query.order_by(FactCheck.created_at.desc())
    if limit is not None:
        query = query.limit(max(1, min(int(limit), MAX_FACT_CHECK_LIMIT)))
    return list(db.scalars(query))


def update_verdict(db: Session, *, actor: User | None, fact_check_id: UUID, new_verdict: str) -> FactCheck:
    """Apply a verdict transition; terminal verdicts never change."""

    ensure_admin(actor, table="fact_checks")

    fact_check = db.get(FactCheck, fact_check_id)
    if fact_check is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fact check not found")

    current = cast(str, fact_check.verdict)
    if is_final_verdict(current):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Fact check verdict {current} is final and cannot be changed",
        )
    if not can_transition_verdict(current, new_verdict):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot change fact check verdict from {current} to {new_verdict}",
        )

    fact_check.verdict = new_verdict
    try:
        db.add(fact_check)
        db.commit()
        db.refresh(fact_check)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update fact check %s", fact_check_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to update fact check") from exc

    logger.info("Fact check %s moved from %s to %s by %s", fact_check.id, current, new_verdict, actor.id)
    return fact_check


__all__ = ["create_fact_check", "list_fact_checks", "update_verdict", "MAX_FACT_CHECK_LIMIT"]
