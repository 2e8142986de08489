"""Abstract cache store and cache event interfaces."""

from __future__ import annotations

from collections.abc import Hashable
from enum import StrEnum
from typing import Protocol, TypeVar, runtime_checkable

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CacheOutcome(StrEnum):
    """Result of probing a cache store."""

    HIT = "hit"
    MISS = "miss"


@runtime_checkable
class CacheStore(Protocol[K, V]):
    """Key-addressed store of decoded values for one resource kind."""

    def get(self, key: K) -> tuple[V | None, bool]:
        """Return ``(value, True)`` for a live entry, ``(None, False)`` otherwise."""
        ...

    def put(self, key: K, value: V) -> None:
        """Insert or replace a value, resetting its age."""
        ...


@runtime_checkable
class CacheEventReporter(Protocol):
    """Side-channel observer of cache hits and misses."""

    def report(self, kind: str, key: Hashable, outcome: CacheOutcome) -> None:
        """Record one cache lookup outcome."""
        ...
