"""The three stateless AI functions: chat, audio transcription and translation."""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Sequence

from fastapi import HTTPException, status

from ..constants import MAX_CHAT_HISTORY
from ..schemas import ChatMessage
from .openai_client import ChatCompletionResult, OpenAIClientProtocol, OpenAIConfigurationError, get_openai_client

logger = logging.getLogger(__name__)

ASSISTANT_SYSTEM_PROMPT = (
    "You are Mafaxson AI, a helpful assistant for the CitizenVoice app. You help citizens with questions about "
    "government services, news, opportunities, and reporting issues. Be friendly, concise, and helpful."
)
CHAT_MAX_TOKENS = 500
CHAT_TEMPERATURE = 0.7
TRANSLATION_TEMPERATURE = 0.3
_ENGLISH_TARGETS = frozenset({"en", "english"})


def _translator_prompt(target_language: str) -> str:
    return (
        f"You are a professional translator. Translate the following text into {target_language} while keeping "
        "the meaning accurate and natural. Only return the translated text, nothing else."
    )


def _require_client(client: OpenAIClientProtocol | None) -> OpenAIClientProtocol:
    resolved = client or get_openai_client()
    if not resolved.is_configured:
        raise OpenAIConfigurationError("OPENAI_API_KEY not configured")
    return resolved


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def build_chat_messages(message: str, history: Sequence[ChatMessage]) -> list[dict[str, str]]:
    """Assemble the provider payload: system prompt, recent history, then the new message."""

    recent = list(history)[-MAX_CHAT_HISTORY:]
    return [
        {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT},
        *({"role": item.role, "content": item.content} for item in recent),
        {"role": "user", "content": message},
    ]


def chat(
    message: str,
    history: Sequence[ChatMessage] = (),
    *,
    client: OpenAIClientProtocol | None = None,
) -> ChatCompletionResult:
    llm = _require_client(client)
    if not message or not message.strip():
        raise _bad_request("Message is required")

    return llm.complete(
        messages=build_chat_messages(message, history),
        max_tokens=CHAT_MAX_TOKENS,
        temperature=CHAT_TEMPERATURE,
    )


def transcribe(audio: str, audio_format: str = "m4a", *, client: OpenAIClientProtocol | None = None) -> str:
    """Decode base64 ``audio`` and return its English transcript."""

    llm = _require_client(client)
    if not audio:
        raise _bad_request("Audio data is required")

    try:
        audio_bytes = base64.b64decode(audio, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise _bad_request("Audio data must be base64 encoded") from exc
    if not audio_bytes:
        raise _bad_request("Audio data is required")

    fmt = (audio_format or "m4a").strip().lower() or "m4a"
    logger.debug("Transcribing %d bytes of %s audio", len(audio_bytes), fmt)
    return llm.transcribe(audio=audio_bytes, filename=f"audio.{fmt}", content_type=f"audio/{fmt}")


def translate(
    text: str,
    target_language: str,
    *,
    client: OpenAIClientProtocol | None = None,
) -> tuple[str, str]:
    """Return ``(translated_text, target_language)``; English targets skip the provider."""

    llm = _require_client(client)
    if not text or not text.strip():
        raise _bad_request("Text is required")
    if not target_language or not target_language.strip():
        raise _bad_request("Target language is required")

    if target_language.strip().lower() in _ENGLISH_TARGETS:
        return text, "en"

    result = llm.complete(
        messages=[
            {"role": "system", "content": _translator_prompt(target_language)},
            {"role": "user", "content": text},
        ],
        max_tokens=CHAT_MAX_TOKENS,
        temperature=TRANSLATION_TEMPERATURE,
    )
    return (result.content.strip() or text), target_language


__all__ = [
    "ASSISTANT_SYSTEM_PROMPT",
    "build_chat_messages",
    "chat",
    "transcribe",
    "translate",
]
