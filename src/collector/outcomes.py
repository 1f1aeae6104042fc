from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from src.collector.api_client import APIClientError

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    """Absence: upstream has no match, or the match lacks the requested data."""

    reason: str = "not_found"


@dataclass(frozen=True)
class Failed:
    """Failure: network error, unexpected status, or an undecodable body."""

    error: APIClientError


Outcome = Union[Found[T], NotFound, Failed]
