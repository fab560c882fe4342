"""Input validation and sanitisation helpers shared by every write path.

All functions are pure and synchronous. Validators return a small result
object instead of raising so callers can surface inline field errors before
anything is sent over the network.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final, Iterable
from urllib.parse import urlparse

from markupsafe import Markup, escape

from ..constants import ATTACHMENT_TYPES

_EMAIL_RE: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SCRIPT_BLOCK_RE: Final = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG_RE: Final = re.compile(r"<[^>]+>")
_EXCESS_NEWLINES_RE: Final = re.compile(r"\n{3,}")

TITLE_MIN_LENGTH: Final[int] = 3
TITLE_MAX_LENGTH: Final[int] = 200
DESCRIPTION_MIN_LENGTH: Final[int] = 10
DESCRIPTION_MAX_LENGTH: Final[int] = 5000
CLAIM_MIN_LENGTH: Final[int] = 5
CLAIM_MAX_LENGTH: Final[int] = 2000
LOCATION_MAX_LENGTH: Final[int] = 200
PASSWORD_MIN_LENGTH: Final[int] = 8
DEFAULT_MAX_FILE_MB: Final[int] = 10

EXTENSIONS_BY_TYPE: Final[dict[str, frozenset[str]]] = {
    "image": frozenset({"jpg", "jpeg", "png", "gif", "webp"}),
    "video": frozenset({"mp4", "mov", "avi", "mkv", "webm"}),
    "audio": frozenset({"mp3", "wav", "m4a", "aac", "ogg"}),
    "document": frozenset({"pdf", "doc", "docx", "txt", "rtf"}),
}


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class PasswordCheck:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


_VALID: Final = ValidationResult(is_valid=True)


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email or ""))


def validate_password(password: str) -> PasswordCheck:
    """Check password strength and report every rule that failed."""

    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    return PasswordCheck(is_valid=not errors, errors=errors)


def _validate_bounded(value: str, *, label: str, minimum: int, maximum: int) -> ValidationResult:
    trimmed = (value or "").strip()
    if not trimmed:
        return ValidationResult(False, f"{label} is required")
    if len(trimmed) < minimum:
        return ValidationResult(False, f"{label} must be at least {minimum} characters long")
    if len(trimmed) > maximum:
        return ValidationResult(False, f"{label} must be less than {maximum} characters")
    return _VALID


def validate_report_title(title: str) -> ValidationResult:
    return _validate_bounded(title, label="Title", minimum=TITLE_MIN_LENGTH, maximum=TITLE_MAX_LENGTH)


def validate_report_description(description: str) -> ValidationResult:
    return _validate_bounded(
        description,
        label="Description",
        minimum=DESCRIPTION_MIN_LENGTH,
        maximum=DESCRIPTION_MAX_LENGTH,
    )


def validate_fact_check_claim(claim: str) -> ValidationResult:
    trimmed = (claim or "").strip()
    if not trimmed:
        return ValidationResult(False, "Claim text is required")
    if len(trimmed) < CLAIM_MIN_LENGTH:
        return ValidationResult(False, f"Claim must be at least {CLAIM_MIN_LENGTH} characters long")
    if len(trimmed) > CLAIM_MAX_LENGTH:
        return ValidationResult(False, f"Claim must be less than {CLAIM_MAX_LENGTH} characters")
    return _VALID


def validate_location(location: str | None) -> ValidationResult:
    if len((location or "").strip()) > LOCATION_MAX_LENGTH:
        return ValidationResult(False, f"Location must be less than {LOCATION_MAX_LENGTH} characters")
    return _VALID


def validate_file_size(size: int, max_size_mb: float = DEFAULT_MAX_FILE_MB) -> ValidationResult:
    """Reject files larger than ``max_size_mb`` megabytes (1 MB = 1024 * 1024 bytes)."""

    if size > max_size_mb * 1024 * 1024:
        return ValidationResult(False, f"File size must be less than {max_size_mb:g}MB")
    return _VALID


def file_extension(file_name: str) -> str:
    if "." not in (file_name or ""):
        return ""
    return file_name.rsplit(".", 1)[-1].strip().lower()


def attachment_type_for(file_name: str) -> str | None:
    """Map a file name to its coarse attachment type, or ``None`` when not allowed."""

    extension = file_extension(file_name)
    if not extension:
        return None
    for attachment_type, extensions in EXTENSIONS_BY_TYPE.items():
        if extension in extensions:
            return attachment_type
    return None


def validate_file_type(file_name: str, allowed_types: Iterable[str] = ATTACHMENT_TYPES) -> ValidationResult:
    allowed = list(allowed_types)
    if not file_extension(file_name):
        return ValidationResult(False, "Invalid file type")
    detected = attachment_type_for(file_name)
    if detected is None or detected not in allowed:
        return ValidationResult(False, f"File type not allowed. Allowed types: {', '.join(allowed)}")
    return _VALID


def sanitize_text(text: str) -> str:
    """Escape HTML-significant characters (basic XSS prevention) and trim."""

    return str(escape(text.strip())).replace("/", "&#x2F;")


def unescape_text(text: str) -> str:
    """Undo :func:`sanitize_text` so length limits apply to what the author typed."""

    return Markup(text).unescape()


def sanitize_for_display(text: str) -> str:
    """Remove script blocks and markup while keeping line breaks."""

    without_scripts = _SCRIPT_BLOCK_RE.sub("", text)
    return _TAG_RE.sub("", without_scripts).strip()


def sanitize_user_input(text: str) -> str:
    """Sanitise free text before it is persisted."""

    normalized = sanitize_text(text).replace("\r\n", "\n").replace("\r", "\n")
    return _EXCESS_NEWLINES_RE.sub("\n\n", normalized)


def validate_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and (parsed.netloc or parsed.path))


__all__ = [
    "ValidationResult",
    "PasswordCheck",
    "EXTENSIONS_BY_TYPE",
    "TITLE_MIN_LENGTH",
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MIN_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "CLAIM_MIN_LENGTH",
    "CLAIM_MAX_LENGTH",
    "LOCATION_MAX_LENGTH",
    "DEFAULT_MAX_FILE_MB",
    "validate_email",
    "validate_password",
    "validate_report_title",
    "validate_report_description",
    "validate_fact_check_claim",
    "validate_location",
    "validate_file_size",
    "validate_file_type",
    "file_extension",
    "attachment_type_for",
    "sanitize_text",
    "sanitize_for_display",
    "sanitize_user_input",
    "unescape_text",
    "validate_url",
]
