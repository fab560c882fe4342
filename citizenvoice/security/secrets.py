"""Helpers for reading keys (JWT, project key, storage, OpenAI) without trusting placeholder values."""
from __future__ import annotations

import os
from typing import Final


class MissingSecretError(RuntimeError):
    """Raised when a required secret is unset or still holds a placeholder."""


# Values copied from sample .env files that must never be used as real keys.
_PLACEHOLDER_VALUES: Final[frozenset[str]] = frozenset(
    {
        "changeme",
        "change-me",
        "placeholder",
        "example",
        "sample",
        "your-key-here",
        "your_key_here",
        "your-anon-key",
        "sk-...",
    }
)


def is_placeholder(value: str | None) -> bool:
    if value is None:
        return True
    normalized = value.strip().lower()
    return not normalized or normalized in _PLACEHOLDER_VALUES


def optional_secret(value: str | None) -> str | None:
    """Return the trimmed ``value``, or ``None`` when it is unset or a placeholder."""

    if is_placeholder(value):
        return None
    return value.strip()


def require_secret(name: str, value: str | None = None) -> str:
    """Return ``value`` (or ``$name`` when no value is given), raising :class:`MissingSecretError` if unusable."""

    secret = optional_secret(value if value is not None else os.getenv(name))
    if secret is None:
        raise MissingSecretError(f"{name} is required and must not use a placeholder value")
    return secret


__all__ = ["MissingSecretError", "is_placeholder", "optional_secret", "require_secret"]
