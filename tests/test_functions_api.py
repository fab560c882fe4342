"""Integration tests for the chat, transcription and translation functions."""
from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from citizenvoice.services import OpenAIRequestError
from citizenvoice.services.assistant_service import ASSISTANT_SYSTEM_PROMPT

from .conftest import FakeOpenAI


def test_chat_sends_system_prompt_and_recent_history(client: TestClient, fake_openai: FakeOpenAI) -> None:
    history = [{"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"} for i in range(14)]

    response = client.post("/functions/v1/chat", json={"message": "How do I report a pothole?", "history": history})

    assert response.status_code == 200, response.text
    assert response.json() == {
        "message": "Hello from the assistant",
        "usage": {"prompt_tokens": 12, "completion_tokens": 8, "total_tokens": 20},
    }

    call = fake_openai.completions[0]
    messages = call["messages"]
    assert messages[0] == {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT}
    assert [item["content"] for item in messages[1:-1]] == [f"turn {i}" for i in range(4, 14)]
    assert messages[-1] == {"role": "user", "content": "How do I report a pothole?"}
    assert call["max_tokens"] == 500
    assert call["temperature"] == 0.7


def test_chat_requires_message(client: TestClient, fake_openai: FakeOpenAI) -> None:
    response = client.post("/functions/v1/chat", json={"message": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Message is required"
    assert fake_openai.completions == []


def test_transcribe_decodes_audio(client: TestClient, fake_openai: FakeOpenAI) -> None:
    payload = {"audio": base64.b64encode(b"RIFF-audio").decode("ascii"), "format": "wav"}

    response = client.post("/functions/v1/transcribe-audio", json=payload)

    assert response.status_code == 200
    assert response.json() == {"text": "pothole on main street"}
    assert fake_openai.transcriptions == [
        {"audio": b"RIFF-audio", "filename": "audio.wav", "content_type": "audio/wav"}
    ]


@pytest.mark.parametrize(
    ("audio", "detail"),
    [
        ("", "Audio data is required"),
        ("not base64!!", "Audio data must be base64 encoded"),
    ],
)
def test_transcribe_rejects_bad_audio(client: TestClient, fake_openai: FakeOpenAI, audio: str, detail: str) -> None:
    response = client.post("/functions/v1/transcribe-audio", json={"audio": audio})

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_translate_to_english_skips_provider(client: TestClient, fake_openai: FakeOpenAI) -> None:
    response = client.post("/functions/v1/translate", json={"text": "Hello", "target_language": "English"})

    assert response.status_code == 200
    assert response.json()["translated_text"] == "Hello"
    assert response.json()["target_language"] == "en"
    assert fake_openai.completions == []


def test_translate_uses_low_temperature(client: TestClient, fake_openai: FakeOpenAI) -> None:
    fake_openai.reply = "  Bonjour  "

    response = client.post("/functions/v1/translate", json={"text": "Hello", "target_language": "French"})

    assert response.status_code == 200
    assert response.json() == {"translated_text": "Bonjour", "source_language": "auto", "target_language": "French"}
    call = fake_openai.completions[0]
    assert call["temperature"] == 0.3
    assert "into French" in call["messages"][0]["content"]
    assert call["messages"][1] == {"role": "user", "content": "Hello"}


def test_translate_requires_text_and_target(client: TestClient, fake_openai: FakeOpenAI) -> None:
    assert client.post("/functions/v1/translate", json={"text": "", "target_language": "fr"}).json()["detail"] == (
        "Text is required"
    )
    assert client.post("/functions/v1/translate", json={"text": "Hi", "target_language": " "}).json()["detail"] == (
        "Target language is required"
    )


def test_unconfigured_provider_returns_500(client: TestClient, fake_openai: FakeOpenAI) -> None:
    fake_openai.is_configured = False

    for path, body in (
        ("/functions/v1/chat", {"message": "hi"}),
        ("/functions/v1/transcribe-audio", {"audio": ""}),
        ("/functions/v1/translate", {"text": "hi", "target_language": "en"}),
    ):
        response = client.post(path, json=body)
        assert response.status_code == 500
        assert response.json()["detail"] == "OPENAI_API_KEY not configured"


def test_provider_errors_keep_status_and_message(
    client: TestClient,
    fake_openai: FakeOpenAI,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def rate_limited(**_kwargs: object) -> None:
        raise OpenAIRequestError("Rate limit reached", status_code=429)

    monkeypatch.setattr(fake_openai, "complete", rate_limited)

    response = client.post("/functions/v1/chat", json={"message": "hi"})

    assert response.status_code == 429
    assert response.json()["detail"] == "Rate limit reached"
