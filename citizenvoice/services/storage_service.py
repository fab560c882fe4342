"""S3-compatible object storage for the report, fact-check and news image buckets."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import BinaryIO, Iterable
from urllib.parse import urlparse

from boto3.session import Session
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from ..config import get_settings
from ..constants import STORAGE_BUCKETS
from ..security.secrets import is_placeholder, optional_secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageConfig:
    """Runtime configuration extracted from the application settings."""

    key: str
    secret: str
    region: str
    api_endpoint: str
    public_endpoint: str


@dataclass(frozen=True)
class StoredObject:
    """Metadata returned after uploading an object."""

    bucket: str
    path: str
    public_url: str
    content_type: str


class StorageConfigurationError(RuntimeError):
    """Raised when required object storage settings are missing or invalid."""


class StorageUploadError(RuntimeError):
    """Raised when an upload to object storage fails."""


class StorageObjectExistsError(RuntimeError):
    """Raised when an upload would overwrite an existing object."""


class UnknownBucketError(LookupError):
    """Raised for bucket names the application does not serve."""


class InvalidObjectPathError(ValueError):
    """Raised when an object path has no usable segments."""


def _normalize_endpoint(raw: str, setting_name: str) -> str:
    endpoint = raw.strip().rstrip("/")
    parsed = urlparse(endpoint)
    if not parsed.scheme:
        endpoint = f"https://{endpoint.lstrip(':/')}"
        parsed = urlparse(endpoint)
    if not (parsed.netloc or parsed.path):
        raise StorageConfigurationError(f"{setting_name} must include a hostname.")
    return parsed.geturl().rstrip("/")


@lru_cache(maxsize=1)
def load_storage_config() -> StorageConfig:
    """Read and validate object storage configuration."""

    settings = get_settings()
    required: dict[str, str | None] = {
        "STORAGE_KEY": optional_secret(settings.storage_key),
        "STORAGE_SECRET": optional_secret(settings.storage_secret),
        "STORAGE_REGION": settings.storage_region,
        "STORAGE_ENDPOINT": settings.storage_endpoint,
    }

    missing = [name for name, value in required.items() if is_placeholder(value)]
    if missing:
        raise StorageConfigurationError(
            "Missing required object storage configuration: " + ", ".join(sorted(missing))
        )

    api_endpoint = _normalize_endpoint(str(required["STORAGE_ENDPOINT"]), "STORAGE_ENDPOINT")
    public_raw = settings.storage_public_url
    public_endpoint = (
        api_endpoint if is_placeholder(public_raw) else _normalize_endpoint(str(public_raw), "STORAGE_PUBLIC_URL")
    )

    return StorageConfig(
        key=str(required["STORAGE_KEY"]),
        secret=str(required["STORAGE_SECRET"]),
        region=str(required["STORAGE_REGION"]).strip(),
        api_endpoint=api_endpoint,
        public_endpoint=public_endpoint,
    )


@lru_cache(maxsize=1)
def get_storage_client() -> BaseClient:
    """Create a singleton boto3 client for storage interactions."""

    config = load_storage_config()
    session = Session()
    return session.client(
        "s3",
        region_name=config.region,
        endpoint_url=config.api_endpoint,
        aws_access_key_id=config.key,
        aws_secret_access_key=config.secret,
    )


def ensure_bucket(bucket: str) -> str:
    if bucket not in STORAGE_BUCKETS:
        raise UnknownBucketError(f"Bucket not found: {bucket}")
    return bucket


def _sanitize_segments(parts: Iterable[str]) -> list[str]:
    """Sanitize path segments to be safe for object keys."""

    sanitized: list[str] = []
    for part in parts:
        if part in {"", ".", ".."}:
            continue
        cleaned = re.sub(r"[^A-Za-z0-9._-]", "-", part.strip())
        cleaned = re.sub(r"-+", "-", cleaned).strip("-")
        if cleaned and cleaned not in {".", ".."}:
            sanitized.append(cleaned)
    return sanitized


def normalize_object_path(path: str) -> str:
    """Turn a client-supplied object path into a safe key inside its bucket."""

    segments = _sanitize_segments((path or "").replace("\\", "/").split("/"))
    if not segments:
        raise InvalidObjectPathError("Object path is empty")
    return "/".join(segments)


def build_public_url(bucket: str, path: str) -> str:
    """Build the public URL for an object stored in ``bucket``."""

    config = load_storage_config()
    normalized_key = path.lstrip("/")
    return f"{config.public_endpoint}/{bucket}/{normalized_key}"


def _object_exists(client: BaseClient, bucket: str, key: str) -> bool:
    try:
        client.head_object(Bucket=bucket, Key=key)
    except ClientError as exc:
        code = str(exc.response.get("Error", {}).get("Code", ""))
        if code in {"404", "NoSuchKey", "NotFound"}:
            return False
        raise
    return True


async def upload_object(
    bucket: str,
    path: str,
    file_obj: BinaryIO,
    *,
    content_type: str | None = None,
    client: BaseClient | None = None,
) -> StoredObject:
    """Upload ``file_obj`` to ``bucket/path`` without overwriting existing objects."""

    ensure_bucket(bucket)
    key = normalize_object_path(path)
    s3_client = client or get_storage_client()
    resolved_type = (content_type or "application/octet-stream").strip() or "application/octet-stream"

    def _upload() -> None:
        try:
            if _object_exists(s3_client, bucket, key):
                raise StorageObjectExistsError("The resource already exists")
            file_obj.seek(0)
            s3_client.upload_fileobj(
                file_obj,
                bucket,
                key,
                ExtraArgs={"ACL": "public-read", "ContentType": resolved_type},
            )
        except (ClientError, BotoCoreError) as exc:  # pragma: no cover - network errors hard to reproduce
            logger.exception("Upload to object storage failed: %s", exc)
            raise StorageUploadError("Upload to object storage failed") from exc

    await run_in_threadpool(_upload)

    return StoredObject(
        bucket=bucket,
        path=key,
        public_url=build_public_url(bucket, key),
        content_type=resolved_type,
    )


__all__ = [
    "StorageConfig",
    "StoredObject",
    "StorageConfigurationError",
    "StorageUploadError",
    "StorageObjectExistsError",
    "UnknownBucketError",
    "InvalidObjectPathError",
    "load_storage_config",
    "get_storage_client",
    "ensure_bucket",
    "normalize_object_path",
    "build_public_url",
    "upload_object",
]
