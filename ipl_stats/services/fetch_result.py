"""Two-branch outcome of a provider fetch.

Providers never raise for upstream trouble; they return either the data they
fetched or a synthesized substitute together with the reason. The wire format
is identical in both cases, callers that care (tests, the ``source`` field in
list responses) can tell them apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Fetched(Generic[T]):
    value: T

    @property
    def synthesized(self) -> bool:
        return False

    @property
    def source(self) -> Literal["upstream"]:
        return "upstream"


@dataclass(frozen=True, slots=True)
class Synthesized(Generic[T]):
    value: T
    reason: str

    @property
    def synthesized(self) -> bool:
        return True

    @property
    def source(self) -> Literal["synthetic"]:
        return "synthetic"


FetchResult = Fetched[T] | Synthesized[T]


__all__ = ["FetchResult", "Fetched", "Synthesized"]
