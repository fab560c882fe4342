"""Thin httpx client for the OpenAI chat and transcription endpoints."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence, cast

import httpx

from ..config import get_settings
from ..security.secrets import optional_secret

logger = logging.getLogger(__name__)


class OpenAIConfigurationError(RuntimeError):
    """Raised when the OpenAI API key is missing."""


class OpenAIRequestError(RuntimeError):
    """Raised when the provider rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(slots=True)
class ChatCompletionResult:
    content: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    model: str


class OpenAIClientProtocol(Protocol):
    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        ...

    def complete(
        self,
        *,
        messages: Sequence[dict[str, str]],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> ChatCompletionResult:
        """Return a chat completion for ``messages``."""
        ...

    def transcribe(self, *, audio: bytes, filename: str, content_type: str) -> str:
        """Return the transcript of ``audio``."""
        ...


def _provider_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return (response.text or "").strip() or f"OpenAI request failed with status {response.status_code}"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return cast(str, error["message"])
        if isinstance(error, str):
            return error
    return f"OpenAI request failed with status {response.status_code}"


class OpenAIClient:
    """HTTP client for the subset of the OpenAI API the assistant functions use."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        chat_model: str | None = None,
        transcribe_model: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = optional_secret(api_key if api_key is not None else settings.openai_api_key)
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._chat_model = chat_model or settings.openai_chat_model
        self._transcribe_model = transcribe_model or settings.openai_transcribe_model
        self._timeout = timeout if timeout is not None else settings.openai_timeout
        self._client = http_client or httpx.Client(timeout=self._timeout)

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    def _headers(self) -> dict[str, str]:
        if self._api_key is None:
            raise OpenAIConfigurationError("OPENAI_API_KEY not configured")
        return {"Authorization": f"Bearer {self._api_key}"}

    def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        headers = self._headers()
        try:
            response = self._client.post(url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:  # pragma: no cover - timeout path
            logger.error("OpenAI timeout | url=%s timeout=%s error=%s", url, self._timeout, type(exc).__name__)
            raise OpenAIRequestError("OpenAI request timed out", status_code=504) from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            message = _provider_message(exc.response)
            logger.error("OpenAI HTTP status error | url=%s status=%s message=%s", url, status_code, message)
            raise OpenAIRequestError(message, status_code=status_code) from exc
        except httpx.HTTPError as exc:  # pragma: no cover - network failure path
            logger.error("OpenAI transport error | url=%s error=%s", url, type(exc).__name__)
            raise OpenAIRequestError("OpenAI request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise OpenAIRequestError("OpenAI response was not valid JSON") from exc
        if not isinstance(data, dict):
            raise OpenAIRequestError("Invalid OpenAI response format")
        return cast(dict[str, Any], data)

    def complete(
        self,
        *,
        messages: Sequence[dict[str, str]],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> ChatCompletionResult:
        data = self._post(
            "/chat/completions",
            json={
                "model": self._chat_model,
                "messages": list(messages),
                "max_tokens": max_tokens,
                "temperature": temperature,
            },
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise OpenAIRequestError("Invalid OpenAI response format") from exc
        usage = data.get("usage") or {}
        return ChatCompletionResult(
            content=str(content or ""),
            prompt_tokens=int(usage.get("prompt_tokens", 0)),
            completion_tokens=int(usage.get("completion_tokens", 0)),
            total_tokens=int(usage.get("total_tokens", 0)),
            model=str(data.get("model") or self._chat_model),
        )

    def transcribe(self, *, audio: bytes, filename: str, content_type: str) -> str:
        data = self._post(
            "/audio/transcriptions",
            files={"file": (filename, audio, content_type)},
            data={"model": self._transcribe_model, "language": "en"},
        )
        text = data.get("text")
        if not isinstance(text, str):
            raise OpenAIRequestError("Invalid OpenAI response format")
        return text


_openai_client: OpenAIClientProtocol | None = None


def get_openai_client() -> OpenAIClientProtocol:
    global _openai_client
    if _openai_client is None:
        _openai_client = OpenAIClient()
    return _openai_client


def set_openai_client(client: OpenAIClientProtocol | None) -> None:
    """Override the OpenAI client (useful for tests)."""

    global _openai_client
    _openai_client = client


__all__ = [
    "ChatCompletionResult",
    "OpenAIClient",
    "OpenAIClientProtocol",
    "OpenAIConfigurationError",
    "OpenAIRequestError",
    "get_openai_client",
    "set_openai_client",
]
