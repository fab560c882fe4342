"""Client calls for the AI functions (transcription, chat, translation)."""
from __future__ import annotations

import base64
import logging
from typing import Any, Sequence

from ..constants import MAX_CHAT_HISTORY
from ..schemas import ChatMessage, ChatResponse, TranscriptionResponse, TranslationResponse
from .results import ApiResponse, Result, ServiceError
from .transport import ApiClient

logger = logging.getLogger(__name__)

_ENGLISH_TARGETS = frozenset({"en", "english"})


def describe_function_error(error: ServiceError, *, function: str) -> str:
    """Map a failed function call to the message shown to the user."""

    message = error.message or ""
    if "OPENAI_API_KEY" in message or "not configured" in message:
        return "OpenAI API key not configured. Please set the OPENAI_API_KEY secret on the server."
    if error.status_code == 404:
        return f"{function} function is not deployed. Please deploy the function first."
    return message or f"{function} failed"


def _invoke(client: ApiClient, name: str, payload: dict[str, Any], *, function: str, operation: str) -> Result[Any]:
    result = client.request("POST", f"/functions/v1/{name}", json=payload, context=f"{operation} failed")
    if result.error is not None and result.error.status_code is not None:
        return Result(None, ServiceError(describe_function_error(result.error, function=function), result.error.status_code))
    return result


def transcribe_audio(client: ApiClient, audio: bytes, audio_format: str = "m4a") -> ApiResponse[TranscriptionResponse]:
    payload = {"audio": base64.b64encode(audio).decode("ascii"), "format": audio_format or "m4a"}
    result = _invoke(client, "transcribe-audio", payload, function="Transcribe", operation="Transcription")
    if result.error is not None:
        return ApiResponse(False, error=result.error.message)
    text = result.data.get("text") if isinstance(result.data, dict) else None
    return ApiResponse(True, data=TranscriptionResponse(text=text or ""))


def send_chat_message(
    client: ApiClient,
    message: str,
    history: Sequence[ChatMessage] = (),
) -> ApiResponse[ChatResponse]:
    recent = [item.model_dump() for item in list(history)[-MAX_CHAT_HISTORY:]]
    result = _invoke(client, "chat", {"message": message, "history": recent}, function="Chat", operation="Chat")
    if result.error is not None:
        return ApiResponse(False, error=result.error.message)
    try:
        return ApiResponse(True, data=ChatResponse.model_validate(result.data))
    except ValueError as exc:
        logger.warning("Unexpected chat response: %s", exc)
        return ApiResponse(False, error="Chat failed: unexpected response from server")


def translate_text(client: ApiClient, text: str, target_language: str) -> ApiResponse[TranslationResponse]:
    if target_language.strip().lower() in _ENGLISH_TARGETS:
        return ApiResponse(True, data=TranslationResponse(translated_text=text, target_language="en"))

    payload = {"text": text, "target_language": target_language}
    result = _invoke(client, "translate", payload, function="Translate", operation="Translation")
    if result.error is not None:
        return ApiResponse(False, error=result.error.message)
    data = result.data if isinstance(result.data, dict) else {}
    return ApiResponse(
        True,
        data=TranslationResponse(
            translated_text=data.get("translated_text") or text,
            source_language=data.get("source_language") or "auto",
            target_language=data.get("target_language") or target_language,
        ),
    )


__all__ = ["describe_function_error", "transcribe_audio", "send_chat_message", "translate_text"]
