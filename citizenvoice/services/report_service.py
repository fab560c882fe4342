"""Services for creating, listing and moderating citizen reports."""
from __future__ import annotations

import logging
from typing import Sequence, cast
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..models import Report, ReportAttachment, User
from ..schemas import ReportAttachmentIn
from ..security.policies import (
    can_attach_to_report,
    can_view_report,
    ensure_admin,
    is_admin,
    row_level_security_error,
)
from ..domain.validation import (
    ValidationResult,
    unescape_text,
    validate_location,
    validate_report_description,
    validate_report_title,
)
from ..domain.verdicts import can_transition_report

logger = logging.getLogger(__name__)


def _raise_if_invalid(result: ValidationResult) -> None:
    if not result.is_valid:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.error)


def _commit(db: Session, failure_detail: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure_detail)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_detail) from exc


def create_report(
    db: Session,
    *,
    submitter: User | None,
    title: str,
    description: str,
    location: str | None,
    is_anonymous: bool,
) -> Report:
    _raise_if_invalid(validate_report_title(unescape_text(title)))
    _raise_if_invalid(validate_report_description(unescape_text(description)))
    _raise_if_invalid(validate_location(unescape_text(location or "")))

    if not is_anonymous and submitter is None:
        raise row_level_security_error("reports")

    report = Report(
        title=title.strip(),
        description=description.strip(),
        location=(location or "").strip() or None,
        user_id=None if is_anonymous else cast(UUID, submitter.id),
        is_anonymous=is_anonymous,
        status="pending",
    )
    db.add(report)
    _commit(db, "Unable to create report")
    db.refresh(report)
    return report


def list_reports(db: Session, *, viewer: User | None, status_filter: str | None = None) -> list[Report]:
    """Return reports visible to ``viewer``, newest first, with attachments loaded."""

    query = select(Report).options(selectinload(Report.attachments))
    if not is_admin(viewer):
        if viewer is None:
            query = query.where(Report.status == "approved")
        else:
            query = query.where(or_(Report.status == "approved", Report.user_id == viewer.id))
    if status_filter:
        query = query.where(Report.status == status_filter)
    return list(db.scalars(query.order_by(Report.created_at.desc())))


def get_report(db: Session, *, viewer: User | None, report_id: UUID) -> Report:
    report = db.get(Report, report_id)
    # Rows hidden by policy look exactly like missing rows.
    if report is None or not can_view_report(viewer, report):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    return report


def add_attachments(
    db: Session,
    *,
    actor: User | None,
    report_id: UUID,
    attachments: Sequence[ReportAttachmentIn],
) -> list[ReportAttachment]:
    report = db.get(Report, report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    if not can_attach_to_report(actor, report):
        raise row_level_security_error("report_attachments")

    rows = [
        ReportAttachment(report_id=report.id, name=item.name, path=item.path, type=item.type)
        for item in attachments
    ]
    db.add_all(rows)
    _commit(db, "Unable to store report attachments")
    for row in rows:
        db.refresh(row)
    return rows


def update_report_status(db: Session, *, actor: User | None, report_id: UUID, new_status: str) -> Report:
    """Move a report to ``new_status`` when the caller is an admin and the transition is allowed."""

    ensure_admin(actor, table="reports")

    report = db.get(Report, report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")

    current = cast(str, report.status)
    if not can_transition_report(current, new_status):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot change report status from {current} to {new_status}",
        )

    report.status = new_status
    db.add(report)
    _commit(db, "Unable to update report")
    db.refresh(report)
    logger.info("Report %s moved from %s to %s by %s", report.id, current, new_status, actor.id)
    return report


__all__ = [
    "create_report",
    "list_reports",
    "get_report",
    "add_attachments",
    "update_report_status",
]
