"""Report submission, listing and moderation endpoints."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..constants import ReportStatus
from ..database import get_session
from ..models import User
from ..schemas import (
    ReportAttachmentIn,
    ReportAttachmentResponse,
    ReportCreateRequest,
    ReportResponse,
    ReportStatusUpdateRequest,
)
from ..services import (
    add_attachments,
    create_report,
    get_optional_user,
    get_report,
    list_reports,
    update_report_status,
)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report_endpoint(
    payload: ReportCreateRequest,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> ReportResponse:
    report = create_report(
        db,
        submitter=current_user,
        title=payload.title,
        description=payload.description,
        location=payload.location,
        is_anonymous=payload.is_anonymous,
    )
    return ReportResponse.model_validate(report)


@router.get("", response_model=list[ReportResponse])
async def list_reports_endpoint(
    status_filter: ReportStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> list[ReportResponse]:
    reports = list_reports(db, viewer=current_user, status_filter=status_filter)
    return [ReportResponse.model_validate(report) for report in reports]


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report_endpoint(
    report_id: UUID,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> ReportResponse:
    return ReportResponse.model_validate(get_report(db, viewer=current_user, report_id=report_id))


@router.post(
    "/{report_id}/attachments",
    response_model=list[ReportAttachmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_attachments_endpoint(
    report_id: UUID,
    payload: list[ReportAttachmentIn],
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> list[ReportAttachmentResponse]:
    rows = add_attachments(db, actor=current_user, report_id=report_id, attachments=payload)
    return [ReportAttachmentResponse.model_validate(row) for row in rows]


@router.patch("/{report_id}", response_model=ReportResponse)
async def update_report_endpoint(
    report_id: UUID,
    payload: ReportStatusUpdateRequest,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> ReportResponse:
    report = update_report_status(db, actor=current_user, report_id=report_id, new_status=payload.status)
    return ReportResponse.model_validate(report)


__all__ = ["router"]
