"""Project key check applied to every public route."""
from __future__ import annotations

import hmac

from fastapi import Header, HTTPException, status

from ..config import get_settings
from .secrets import optional_secret


async def require_api_key(apikey: str | None = Header(default=None)) -> None:
    """Reject requests whose ``apikey`` header does not match the configured key."""

    expected = optional_secret(get_settings().anon_key)
    if expected is None:
        return
    if not apikey or not hmac.compare_digest(apikey.strip(), expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


__all__ = ["require_api_key"]
