"""Typed provider lookup outcome.

Keeps "provider has no record" apart from "provider call broke" so logs
can tell them apart while the reconciler treats both as a miss.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    status: LookupStatus
    value: T | None = None
    error: str | None = None

    @classmethod
    def found(cls, value: T) -> Lookup[T]:
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> Lookup[T]:
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def timeout(cls, error: BaseException | str) -> Lookup[T]:
        return cls(LookupStatus.TIMEOUT, error=str(error) or type(error).__name__)

    @classmethod
    def failed(cls, error: BaseException | str) -> Lookup[T]:
        return cls(LookupStatus.ERROR, error=str(error) or type(error).__name__)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.FOUND
