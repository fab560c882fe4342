"""Result containers returned by every SDK call."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ServiceError:
    message: str
    status_code: int | None = None
    code: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """``(data, error)`` pair; exactly one side is meaningful."""

    data: T
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[Any]:
        yield self.data
        yield self.error


@dataclass(frozen=True, slots=True)
class ApiResponse(Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None


__all__ = ["ApiResponse", "Result", "ServiceError"]
