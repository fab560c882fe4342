"""Request and response bodies for the AI proxy functions."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    message: str = ""
    history: list[ChatMessage] = Field(default_factory=list)


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel):
    message: str
    usage: TokenUsage | None = None


class TranscriptionRequest(BaseModel):
    audio: str = ""
    format: str = "m4a"


class TranscriptionResponse(BaseModel):
    text: str


class TranslationRequest(BaseModel):
    text: str = ""
    target_language: str = ""


class TranslationResponse(BaseModel):
    translated_text: str
    source_language: str = "auto"
    target_language: str


__all__ = [
    "ChatMessage",
    "ChatRequest",
    "TokenUsage",
    "ChatResponse",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "TranslationRequest",
    "TranslationResponse",
]
