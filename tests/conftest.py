"""Shared fixtures: a throwaway SQLite database, users with tokens, and fake S3/OpenAI backends."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Iterator

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from sqlalchemy import delete

# Settings are cached on first import, so the environment must be ready before importing the app.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_citizenvoice.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ANON_KEY", "test-anon-key")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("STORAGE_KEY", "test-storage-key")
os.environ.setdefault("STORAGE_SECRET", "test-storage-secret")
os.environ.setdefault("STORAGE_REGION", "nyc3")
os.environ.setdefault("STORAGE_ENDPOINT", "https://storage.example.test")

from citizenvoice.database import Base, SessionLocal, engine  # noqa: E402
from citizenvoice.main import app  # noqa: E402
from citizenvoice.models import FactCheck, News, Opportunity, Report, ReportAttachment, Service, User  # noqa: E402
from citizenvoice.sdk import ApiClient, ClientSettings  # noqa: E402
from citizenvoice.services import auth_service, set_openai_client, storage_service  # noqa: E402
from citizenvoice.services.openai_client import ChatCompletionResult  # noqa: E402

ANON_KEY = os.environ["ANON_KEY"]


@dataclass
class Account:
    user: User
    token: str
    password: str

    @property
    def headers(self) -> dict[str, str]:
        return {"apikey": ANON_KEY, "Authorization": f"Bearer {self.token}"}


class FakeS3:
    """In-memory stand-in for the boto3 S3 client."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], tuple[bytes, dict[str, Any]]] = {}
        self.failing_keys: set[str] = set()

    def head_object(self, Bucket: str, Key: str) -> dict[str, Any]:  # noqa: N803
        if (Bucket, Key) not in self.objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        return {"ContentLength": len(self.objects[(Bucket, Key)][0])}

    def upload_fileobj(self, fileobj, bucket: str, key: str, ExtraArgs: dict[str, Any] | None = None) -> None:  # noqa: N803
        if any(key.endswith(suffix) for suffix in self.failing_keys):
            raise ClientError({"Error": {"Code": "500", "Message": "Upload exploded"}}, "PutObject")
        self.objects[(bucket, key)] = (fileobj.read(), dict(ExtraArgs or {}))


class FakeOpenAI:
    """Records every call and answers with canned content."""

    def __init__(self, *, reply: str = "Hello from the assistant", transcript: str = "pothole on main street") -> None:
        self.is_configured = True
        self.reply = reply
        self.transcript = transcript
        self.completions: list[dict[str, Any]] = []
        self.transcriptions: list[dict[str, Any]] = []

    def complete(self, *, messages, max_tokens: int = 500, temperature: float = 0.7) -> ChatCompletionResult:
        self.completions.append({"messages": list(messages), "max_tokens": max_tokens, "temperature": temperature})
        return ChatCompletionResult(
            content=self.reply,
            prompt_tokens=12,
            completion_tokens=8,
            total_tokens=20,
            model="fake-model",
        )

    def transcribe(self, *, audio: bytes, filename: str, content_type: str) -> str:
        self.transcriptions.append({"audio": audio, "filename": filename, "content_type": content_type})
        return self.transcript


@pytest.fixture(scope="session", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(ReportAttachment))
        session.execute(delete(Report))
        session.execute(delete(FactCheck))
        session.execute(delete(News))
        session.execute(delete(Service))
        session.execute(delete(Opportunity))
        session.execute(delete(User))
        session.commit()

    storage_service.load_storage_config.cache_clear()
    storage_service.get_storage_client.cache_clear()
    set_openai_client(None)
    yield
    set_openai_client(None)


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app, headers={"apikey": ANON_KEY}) as test_client:
        yield test_client


def create_account(
    email: str,
    *,
    role: str = "user",
    user_metadata: dict[str, Any] | None = None,
    password: str = "Password123",
) -> Account:
    with SessionLocal() as session:
        user = User(
            email=email,
            hashed_password=auth_service.hash_password(password),
            role=role,
            user_metadata=dict(user_metadata or {}),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
    return Account(user=user, token=auth_service.create_access_token(user.id), password=password)


@pytest.fixture
def citizen() -> Account:
    return create_account("citizen@example.com")


@pytest.fixture
def other_citizen() -> Account:
    return create_account("neighbour@example.com")


@pytest.fixture
def admin() -> Account:
    return create_account("moderator@example.com", role="admin")


@pytest.fixture
def fake_s3(monkeypatch: pytest.MonkeyPatch) -> FakeS3:
    fake = FakeS3()
    monkeypatch.setattr(storage_service, "get_storage_client", lambda: fake)
    return fake


@pytest.fixture
def fake_openai() -> Iterator[FakeOpenAI]:
    fake = FakeOpenAI()
    set_openai_client(fake)
    yield fake
    set_openai_client(None)


@pytest.fixture
def sdk_client(client: TestClient) -> ApiClient:
    """SDK client whose HTTP transport is the in-process app."""

    settings = ClientSettings(api_url="http://testserver", anon_key=ANON_KEY, app_env="development")
    return ApiClient(settings, http_client=client)
