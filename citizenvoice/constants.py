"""Project-wide constant values."""
from __future__ import annotations

from typing import Final, Literal

ReportStatus = Literal["pending", "approved", "rejected", "in_progress"]
FactCheckVerdict = Literal["queued", "in-progress", "verified", "disputed", "needs-review"]
AttachmentType = Literal["document", "image", "video", "audio"]
UserRole = Literal["user", "moderator", "admin", "super_admin"]

REPORT_STATUSES: Final[tuple[str, ...]] = ("pending", "approved", "rejected", "in_progress")
FACT_CHECK_VERDICTS: Final[tuple[str, ...]] = ("queued", "in-progress", "verified", "disputed", "needs-review")
ATTACHMENT_TYPES: Final[tuple[str, ...]] = ("document", "image", "video", "audio")

# Roles that the server-side ``is_admin()`` check accepts.
ADMIN_ROLES: Final[frozenset[str]] = frozenset({"admin", "moderator", "super_admin"})
ASSIGNABLE_ROLES: Final[tuple[str, ...]] = ("user", "moderator", "admin")

REPORT_ATTACHMENTS_BUCKET: Final[str] = "report-attachments"
FACT_CHECKS_BUCKET: Final[str] = "fact-checks"
NEWS_IMAGES_BUCKET: Final[str] = "news-images"
STORAGE_BUCKETS: Final[tuple[str, ...]] = (REPORT_ATTACHMENTS_BUCKET, FACT_CHECKS_BUCKET, NEWS_IMAGES_BUCKET)
ADMIN_ONLY_BUCKETS: Final[frozenset[str]] = frozenset({NEWS_IMAGES_BUCKET})

DEFAULT_FACT_CHECK_LIMIT: Final[int] = 10
MAX_CHAT_HISTORY: Final[int] = 10

RLS_VIOLATION_CODE: Final[str] = "42501"


def rls_violation_message(table: str) -> str:
    """Return the policy-denial message reported for writes on ``table``."""

    return f'new row violates row-level security policy for table "{table}"'


__all__ = [
    "ReportStatus",
    "FactCheckVerdict",
    "AttachmentType",
    "UserRole",
    "REPORT_STATUSES",
    "FACT_CHECK_VERDICTS",
    "ATTACHMENT_TYPES",
    "ADMIN_ROLES",
    "ASSIGNABLE_ROLES",
    "REPORT_ATTACHMENTS_BUCKET",
    "FACT_CHECKS_BUCKET",
    "NEWS_IMAGES_BUCKET",
    "STORAGE_BUCKETS",
    "ADMIN_ONLY_BUCKETS",
    "DEFAULT_FACT_CHECK_LIMIT",
    "MAX_CHAT_HISTORY",
    "RLS_VIOLATION_CODE",
    "rls_violation_message",
]
