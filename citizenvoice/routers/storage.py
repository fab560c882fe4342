"""Object storage endpoints for the report, fact-check and news image buckets."""
from __future__ import annotations

import os

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import RedirectResponse

from ..config import get_settings
from ..models import User
from ..schemas import StoredObjectResponse
from ..security.policies import can_upload_to_bucket, row_level_security_error
from ..services import (
    InvalidObjectPathError,
    StorageConfigurationError,
    StorageObjectExistsError,
    StorageUploadError,
    UnknownBucketError,
    build_public_url,
    get_optional_user,
    upload_object,
)
from ..services.storage_service import ensure_bucket, normalize_object_path
from ..domain.validation import validate_file_size

router = APIRouter(prefix="/storage/v1/object", tags=["storage"])
# Mounted without the project key.
public_router = APIRouter(prefix="/storage/v1/object", tags=["storage"])


def _bucket_or_404(bucket: str) -> str:
    try:
        return ensure_bucket(bucket)
    except UnknownBucketError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bucket not found") from exc


@public_router.get("/public/{bucket}/{path:path}")
async def public_object_endpoint(bucket: str, path: str) -> RedirectResponse:
    _bucket_or_404(bucket)
    try:
        url = build_public_url(bucket, path)
    except StorageConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return RedirectResponse(url=url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.post("/{bucket}/{path:path}", response_model=StoredObjectResponse, status_code=status.HTTP_201_CREATED)
async def upload_object_endpoint(
    bucket: str,
    path: str,
    file: UploadFile = File(...),
    current_user: User | None = Depends(get_optional_user),
) -> StoredObjectResponse:
    """Store ``file`` at ``bucket/path``; existing objects are never overwritten."""

    _bucket_or_404(bucket)
    if not can_upload_to_bucket(current_user, bucket):
        raise row_level_security_error("objects")
    try:
        normalize_object_path(path)
    except InvalidObjectPathError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    check = validate_file_size(size, get_settings().max_upload_mb)
    if not check.is_valid:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=check.error)

    try:
        stored = await upload_object(bucket, path, file.file, content_type=file.content_type)
    except StorageObjectExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except StorageUploadError as exc:  # pragma: no cover - network bound
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return StoredObjectResponse(
        bucket=stored.bucket,
        path=stored.path,
        public_url=stored.public_url,
        content_type=stored.content_type,
    )


__all__ = ["public_router", "router"]
