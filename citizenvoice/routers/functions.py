"""AI function endpoints proxied to OpenAI."""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from ..schemas import (
    ChatRequest,
    ChatResponse,
    TokenUsage,
    TranscriptionRequest,
    TranscriptionResponse,
    TranslationRequest,
    TranslationResponse,
)
from ..services import OpenAIConfigurationError, OpenAIRequestError, chat, transcribe, translate

router = APIRouter(prefix="/functions/v1", tags=["functions"])
logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _call_provider(func: Callable[..., T], *args: object) -> T:
    try:
        return await run_in_threadpool(func, *args)
    except OpenAIConfigurationError as exc:
        logger.error("OpenAI function called without an API key")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except OpenAIRequestError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(payload: ChatRequest) -> ChatResponse:
    result = await _call_provider(chat, payload.message, payload.history)
    usage = TokenUsage(
        prompt_tokens=result.prompt_tokens,
        completion_tokens=result.completion_tokens,
        total_tokens=result.total_tokens,
    )
    return ChatResponse(message=result.content, usage=usage)


@router.post("/transcribe-audio", response_model=TranscriptionResponse)
async def transcribe_audio_endpoint(payload: TranscriptionRequest) -> TranscriptionResponse:
    text = await _call_provider(transcribe, payload.audio, payload.format)
    return TranscriptionResponse(text=text)


@router.post("/translate", response_model=TranslationResponse)
async def translate_endpoint(payload: TranslationRequest) -> TranslationResponse:
    translated, target = await _call_provider(translate, payload.text, payload.target_language)
    return TranslationResponse(translated_text=translated, target_language=target)


__all__ = ["router"]
