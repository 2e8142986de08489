"""In-memory TTL + capacity bounded cache store."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A decoded value and the clock reading at insertion."""

    value: V
    inserted_at: float


class MemoryCacheStore(Generic[K, V]):
    """Insertion-ordered store with lazy TTL expiry.

    Entries are evicted oldest-inserted first once ``capacity`` is reached.
    Reads never refresh an entry's position or age. Expired entries are
    dropped when a read finds them; nothing sweeps in the background.
    """

    def __init__(
        self,
        capacity: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty store.

        Args:
            capacity: Maximum number of entries held at once
            ttl_seconds: Maximum age of a live entry
            clock: Monotonic time source, injectable for tests
        """
        if capacity <= 0:
            msg = f"capacity must be positive, got {capacity}"
            raise ValueError(msg)
        if ttl_seconds <= 0:
            msg = f"ttl_seconds must be positive, got {ttl_seconds}"
            raise ValueError(msg)
        self.capacity = capacity
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[K, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: K) -> tuple[V | None, bool]:
        """Return ``(value, True)`` if the key holds a live entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, False
            if self._expired(entry):
                del self._entries[key]
                return None, False
            return entry.value, True

    def put(self, key: K, value: V) -> None:
        """Insert or replace a value, evicting the oldest entry if full."""
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        """Check for a live entry without removing expired ones."""
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[call-overload]
            return entry is not None and not self._expired(entry)

    def __len__(self) -> int:
        """Return the number of held entries, including not-yet-dropped expired ones."""
        with self._lock:
            return len(self._entries)

    def _expired(self, entry: CacheEntry[V]) -> bool:
        return self._clock() - entry.inserted_at > self.ttl_seconds
