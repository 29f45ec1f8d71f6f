"""Typed outcomes for remote clients and the snapshot store.

Every fetch or file operation returns either ``Success(value)`` or ``Failure(kind)``
instead of raising, so the orchestrator can decide on fallback explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    REMOTE_UNAVAILABLE = "remote_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    LOCAL_STORE_UNAVAILABLE = "local_store_unavailable"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]
