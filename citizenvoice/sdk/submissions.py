"""Report and fact-check submission flows.

Both flows validate locally first, so an invalid draft never reaches the
network. Attachments are uploaded one at a time; a failed upload becomes a
warning and the remaining files are still tried.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from ..constants import FACT_CHECKS_BUCKET, REPORT_ATTACHMENTS_BUCKET
from ..domain.validation import (
    DEFAULT_MAX_FILE_MB,
    attachment_type_for,
    file_extension,
    sanitize_user_input,
    validate_fact_check_claim,
    validate_file_size,
    validate_file_type,
    validate_location,
    validate_report_description,
    validate_report_title,
)
from ..schemas import FactCheckAttachment, ReportAttachmentIn
from .services import FactChecksService, ReportsService, StorageService
from .transport import ApiClient

logger = logging.getLogger(__name__)

UNTITLED_CLAIM = "Untitled Claim"


@dataclass(slots=True)
class AttachmentDraft:
    name: str
    content: bytes
    content_type: str | None = None

    @property
    def attachment_type(self) -> str | None:
        return attachment_type_for(self.name)


@dataclass(slots=True)
class ReportDraft:
    title: str
    description: str
    location: str | None = None
    is_anonymous: bool = False
    attachments: list[AttachmentDraft] = field(default_factory=list)


@dataclass(slots=True)
class FactCheckDraft:
    claim: str = ""
    description: str | None = None
    attachments: list[AttachmentDraft] = field(default_factory=list)


@dataclass(slots=True)
class SubmissionOutcome:
    success: bool
    record: Any = None
    error: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        """The parent row exists but some attachment work did not complete."""

        return self.success and bool(self.warnings)


def _attachment_errors(attachments: list[AttachmentDraft], max_size_mb: float) -> str | None:
    for attachment in attachments:
        type_check = validate_file_type(attachment.name)
        if not type_check.is_valid:
            return f"{attachment.name}: {type_check.error}"
        size_check = validate_file_size(len(attachment.content), max_size_mb)
        if not size_check.is_valid:
            return f"{attachment.name}: {size_check.error}"
    return None


def validate_report_draft(draft: ReportDraft, *, max_size_mb: float = DEFAULT_MAX_FILE_MB) -> dict[str, str]:
    errors: dict[str, str] = {}
    for name, check in (
        ("title", validate_report_title(draft.title)),
        ("description", validate_report_description(draft.description)),
        ("location", validate_location(draft.location)),
    ):
        if not check.is_valid and check.error:
            errors[name] = check.error
    attachment_error = _attachment_errors(draft.attachments, max_size_mb)
    if attachment_error:
        errors["attachments"] = attachment_error
    return errors


def validate_fact_check_draft(draft: FactCheckDraft, *, max_size_mb: float = DEFAULT_MAX_FILE_MB) -> dict[str, str]:
    errors: dict[str, str] = {}
    claim = (draft.claim or "").strip()
    if not claim and not draft.attachments:
        errors["claim"] = "Please provide a claim or upload a file."
    elif claim:
        check = validate_fact_check_claim(claim)
        if not check.is_valid and check.error:
            errors["claim"] = check.error
    attachment_error = _attachment_errors(draft.attachments, max_size_mb)
    if attachment_error:
        errors["attachments"] = attachment_error
    return errors


def _object_path(prefix: str, attachment: AttachmentDraft) -> str:
    extension = file_extension(attachment.name) or "bin"
    return f"{prefix}/{uuid.uuid4()}.{extension}"


def _upload_all(
    storage: StorageService,
    bucket: str,
    prefix: str,
    attachments: list[AttachmentDraft],
    warnings: list[str],
) -> list[dict[str, str]]:
    uploaded: list[dict[str, str]] = []
    for attachment in attachments:
        result = storage.upload_file(
            bucket,
            _object_path(prefix, attachment),
            attachment.content,
            content_type=attachment.content_type,
        )
        if result.error is not None or result.data is None:
            message = result.error.message if result.error else "no path returned"
            logger.warning("Upload of %s failed: %s", attachment.name, message)
            warnings.append(f"Failed to upload {attachment.name}: {message}")
            continue
        uploaded.append({"name": attachment.name, "path": result.data, "type": attachment.attachment_type or "document"})
    return uploaded


def submit_report(client: ApiClient, draft: ReportDraft) -> SubmissionOutcome:
    field_errors = validate_report_draft(draft)
    if field_errors:
        return SubmissionOutcome(False, error="Please fix the highlighted fields.", field_errors=field_errors)

    if not draft.is_anonymous:
        user_result = client.auth.get_user()
        if user_result.error is not None:
            return SubmissionOutcome(False, error=user_result.error.message)
        if user_result.data is None:
            return SubmissionOutcome(False, error="User not authenticated. Enable anonymous mode.")

    reports = ReportsService(client)
    created = reports.create(
        title=sanitize_user_input(draft.title),
        description=sanitize_user_input(draft.description),
        location=sanitize_user_input(draft.location) if draft.location else None,
        is_anonymous=draft.is_anonymous,
    )
    if created.error is not None or created.data is None:
        message = created.error.message if created.error else "Submission failed."
        return SubmissionOutcome(False, error=message)

    report = created.data
    warnings: list[str] = []
    uploaded = _upload_all(StorageService(client), REPORT_ATTACHMENTS_BUCKET, "reports", draft.attachments, warnings)
    if uploaded:
        linked = reports.add_attachments(report.id, [ReportAttachmentIn.model_validate(item) for item in uploaded])
        if linked.error is not None:
            # The report row stays; only the file links are missing.
            logger.warning("Linking attachments to report %s failed: %s", report.id, linked.error.message)
            warnings.append(f"Report submitted but attachments could not be linked: {linked.error.message}")

    return SubmissionOutcome(True, record=report, warnings=warnings)


def submit_fact_check(client: ApiClient, draft: FactCheckDraft) -> SubmissionOutcome:
    field_errors = validate_fact_check_draft(draft)
    if field_errors:
        return SubmissionOutcome(False, error="Please fix the highlighted fields.", field_errors=field_errors)

    warnings: list[str] = []
    uploaded = _upload_all(StorageService(client), FACT_CHECKS_BUCKET, "fact-checks", draft.attachments, warnings)

    claim = (draft.claim or "").strip()
    description = sanitize_user_input(draft.description) if draft.description else None
    created = FactChecksService(client).create(
        title=sanitize_user_input(claim) if claim else UNTITLED_CLAIM,
        description=description,
        attachments=[FactCheckAttachment.model_validate(item) for item in uploaded],
    )
    if created.error is not None or created.data is None:
        message = created.error.message if created.error else "Submission failed."
        return SubmissionOutcome(False, error=message, warnings=warnings)

    return SubmissionOutcome(True, record=created.data, warnings=warnings)


__all__ = [
    "UNTITLED_CLAIM",
    "AttachmentDraft",
    "ReportDraft",
    "FactCheckDraft",
    "SubmissionOutcome",
    "validate_report_draft",
    "validate_fact_check_draft",
    "submit_report",
    "submit_fact_check",
]
