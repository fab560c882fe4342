"""Fact-check submission, feed and verdict endpoints."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..constants import DEFAULT_FACT_CHECK_LIMIT, FactCheckVerdict
from ..database import get_session
from ..models import User
from ..schemas import FactCheckCreateRequest, FactCheckResponse, FactCheckVerdictUpdateRequest
from ..services import create_fact_check, get_optional_user, list_fact_checks, update_verdict
from ..services.fact_check_service import MAX_FACT_CHECK_LIMIT

router = APIRouter(prefix="/fact-checks", tags=["fact-checks"])


@router.post("", response_model=FactCheckResponse, status_code=status.HTTP_201_CREATED)
async def create_fact_check_endpoint(
    payload: FactCheckCreateRequest,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> FactCheckResponse:
    fact_check = create_fact_check(
        db,
        submitter=current_user,
        title=payload.title,
        description=payload.description,
        attachments=payload.attachments,
    )
    return FactCheckResponse.model_validate(fact_check)


@router.get("", response_model=list[FactCheckResponse])
async def list_fact_checks_endpoint(
    verdict: FactCheckVerdict | None = None,
    limit: int = Query(default=DEFAULT_FACT_CHECK_LIMIT, ge=1, le=MAX_FACT_CHECK_LIMIT),
    db: Session = Depends(get_session),
) -> list[FactCheckResponse]:
    return [FactCheckResponse.model_validate(item) for item in list_fact_checks(db, verdict=verdict, limit=limit)]


@router.patch("/{fact_check_id}", response_model=FactCheckResponse)
async def update_fact_check_endpoint(
    fact_check_id: UUID,
    payload: FactCheckVerdictUpdateRequest,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> FactCheckResponse:
    fact_check = update_verdict(db, actor=current_user, fact_check_id=fact_check_id, new_verdict=payload.verdict)
    return FactCheckResponse.model_validate(fact_check)


__all__ = ["router"]
