"""Typed wrappers over the backend tables that always return ``Result`` values."""
from __future__ import annotations

from typing import IO, Any, Generic, Iterable, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from ..constants import DEFAULT_FACT_CHECK_LIMIT
from ..schemas import (
    FactCheckAttachment,
    FactCheckResponse,
    NewsResponse,
    OpportunityResponse,
    ReportAttachmentIn,
    ReportAttachmentResponse,
    ReportResponse,
    ServiceResponse,
)
from .results import Result
from .transport import ApiClient, parse_model, parse_models

M = TypeVar("M", bound=BaseModel)


class _ReadOnlyTable(Generic[M]):
    path: str
    model: type[M]

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def get_all(self) -> Result[list[M]]:
        result = self._client.request("GET", self.path)
        if result.error is not None:
            return Result([], result.error)
        return parse_models(self.model, result.data)

    def get_by_id(self, row_id: Any) -> Result[M | None]:
        result = self._client.request("GET", f"{self.path}/{row_id}")
        if result.error is not None:
            return Result(None, result.error)
        return parse_model(self.model, result.data)


class NewsService(_ReadOnlyTable[NewsResponse]):
    path = "/news"
    model = NewsResponse


class ServicesService(_ReadOnlyTable[ServiceResponse]):
    path = "/services"
    model = ServiceResponse


class OpportunitiesService(_ReadOnlyTable[OpportunityResponse]):
    path = "/opportunities"
    model = OpportunityResponse


def _as_payload(items: Iterable[BaseModel | dict[str, Any]]) -> list[dict[str, Any]]:
    return [item.model_dump() if isinstance(item, BaseModel) else dict(item) for item in items]


class ReportsService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def list(self, status: str | None = None) -> Result[list[ReportResponse]]:
        params = {"status": status} if status else None
        result = self._client.request("GET", "/reports", params=params)
        if result.error is not None:
            return Result([], result.error)
        return parse_models(ReportResponse, result.data)

    def get_all_approved(self) -> Result[list[ReportResponse]]:
        return self.list(status="approved")

    def create(
        self,
        *,
        title: str,
        description: str,
        location: str | None = None,
        is_anonymous: bool = False,
    ) -> Result[ReportResponse | None]:
        payload = {
            "title": title,
            "description": description,
            "location": location or None,
            "is_anonymous": is_anonymous,
        }
        result = self._client.request("POST", "/reports", json=payload)
        if result.error is not None:
            return Result(None, result.error)
        return parse_model(ReportResponse, result.data)

    def add_attachments(
        self,
        report_id: Any,
        attachments: Iterable[ReportAttachmentIn | dict[str, Any]],
    ) -> Result[list[ReportAttachmentResponse] | None]:
        result = self._client.request("POST", f"/reports/{report_id}/attachments", json=_as_payload(attachments))
        if result.error is not None:
            return Result(None, result.error)
        parsed = parse_models(ReportAttachmentResponse, result.data)
        if parsed.error is not None:
            return Result(None, parsed.error)
        return Result(parsed.data)

    def update(self, report_id: Any, *, status: str) -> Result[ReportResponse | None]:
        result = self._client.request("PATCH", f"/reports/{report_id}", json={"status": status})
        if result.error is not None:
            return Result(None, result.error)
        return parse_model(ReportResponse, result.data)


class FactChecksService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def list(self, verdict: str | None = None, limit: int | None = None) -> Result[list[FactCheckResponse]]:
        params: dict[str, Any] = {}
        if verdict:
            params["verdict"] = verdict
        if limit is not None:
            params["limit"] = limit
        result = self._client.request("GET", "/fact-checks", params=params or None)
        if result.error is not None:
            return Result([], result.error)
        return parse_models(FactCheckResponse, result.data)

    def get_all(self) -> Result[list[FactCheckResponse]]:
        """The public feed: the newest fact checks only."""

        return self.list(limit=DEFAULT_FACT_CHECK_LIMIT)

    def create(
        self,
        *,
        title: str,
        description: str | None = None,
        attachments: Iterable[FactCheckAttachment | dict[str, Any]] = (),
    ) -> Result[FactCheckResponse | None]:
        payload: dict[str, Any] = {"title": title, "description": description}
        items = _as_payload(attachments)
        if items:
            payload["attachments"] = items
        result = self._client.request("POST", "/fact-checks", json=payload)
        if result.error is not None:
            return Result(None, result.error)
        return parse_model(FactCheckResponse, result.data)

    def update(self, fact_check_id: Any, *, verdict: str) -> Result[FactCheckResponse | None]:
        result = self._client.request("PATCH", f"/fact-checks/{fact_check_id}", json={"verdict": verdict})
        if result.error is not None:
            return Result(None, result.error)
        return parse_model(FactCheckResponse, result.data)


class StorageService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def upload_file(
        self,
        bucket: str,
        path: str,
        content: bytes | IO[bytes],
        *,
        content_type: str | None = None,
    ) -> Result[str | None]:
        """Upload without overwriting; returns the stored object path."""

        file_name = path.rsplit("/", 1)[-1]
        files = {"file": (file_name, content, content_type or "application/octet-stream")}
        result = self._client.request("POST", f"/storage/v1/object/{bucket}/{quote(path)}", files=files)
        if result.error is not None:
            return Result(None, result.error)
        stored_path = result.data.get("path") if isinstance(result.data, dict) else None
        return Result(stored_path or path)

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self._client.base_url}/storage/v1/object/public/{bucket}/{quote(path.lstrip('/'))}"


__all__ = [
    "NewsService",
    "ServicesService",
    "OpportunitiesService",
    "ReportsService",
    "FactChecksService",
    "StorageService",
]
