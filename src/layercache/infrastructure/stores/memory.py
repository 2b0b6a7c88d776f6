"""In-memory cache store implementation."""

import math
import time
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, NamedTuple

from cachetools import TLRUCache  # type: ignore[import-untyped]


class _Entry(NamedTuple):
    value: Any
    expires_at: float


def _entry_expiry(key: Hashable, entry: _Entry, now: float) -> float:
    return entry.expires_at


class InMemoryStore:
    """In-memory cache store using LRU with per-item TTL.

    Suitable for the fastest, process-local layer. Uses cachetools'
    TLRUCache so every entry expires on its own schedule and the
    least recently used entry is evicted when the store is full.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        default_ttl: int | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory store.

        Args:
            maxsize: Maximum number of items in the store.
            default_ttl: TTL in seconds used when a write has none.
                None keeps such items until they are evicted.
            timer: Clock used for expiry, monotonic seconds by default.
        """
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._timer = timer
        self._cache: TLRUCache[Hashable, _Entry] = TLRUCache(
            maxsize=maxsize,
            ttu=_entry_expiry,
            timer=timer,
        )

    async def get(self, key: Hashable) -> Any | None:
        """Retrieve a value by key.

        Args:
            key: The key to retrieve.

        Returns:
            The stored value, or None if not found or expired.
        """
        entry = self._cache.get(key)
        return entry.value if entry is not None else None

    async def get_multiple(self, keys: Iterable[Hashable]) -> dict[Hashable, Any]:
        """Retrieve several values at once.

        Args:
            keys: The keys to retrieve.

        Returns:
            Mapping of the keys that were found to their values.
        """
        values = {}
        for key in keys:
            entry = self._cache.get(key)
            if entry is not None:
                values[key] = entry.value
        return values

    async def set(self, key: Hashable, value: Any, ttl: int | None = None) -> bool:
        """Store a value.

        A TTL of 0 removes the key instead of storing it.

        Args:
            key: The key.
            value: The value to store.
            ttl: Optional TTL in seconds. If None, uses default_ttl.

        Returns:
            True, the in-memory store cannot fail a write.
        """
        effective_ttl = self._default_ttl if ttl is None else ttl
        if effective_ttl is not None and effective_ttl <= 0:
            self._cache.pop(key, None)
            return True

        expires_at = (
            math.inf if effective_ttl is None else self._timer() + effective_ttl
        )
        self._cache[key] = _Entry(value, expires_at)
        return True

    async def set_multiple(
        self,
        items: Mapping[Hashable, Any],
        ttl: int | None = None,
    ) -> bool:
        """Store several values with a shared TTL.

        Args:
            items: Mapping of key to value.
            ttl: Optional TTL in seconds. If None, uses default_ttl.

        Returns:
            True, the in-memory store cannot fail a write.
        """
        for key, value in items.items():
            await self.set(key, value, ttl)
        return True

    async def has(self, key: Hashable) -> bool:
        """Check if key exists in the store.

        Args:
            key: The key to check.

        Returns:
            True if the key exists and has not expired.
        """
        return key in self._cache

    async def delete(self, key: Hashable) -> bool:
        """Delete a value.

        Args:
            key: The key to delete.

        Returns:
            True, whether or not the key was present.
        """
        self._cache.pop(key, None)
        return True

    async def delete_multiple(self, keys: Iterable[Hashable]) -> bool:
        """Delete several values.

        Args:
            keys: The keys to delete.

        Returns:
            True, whether or not the keys were present.
        """
        for key in keys:
            self._cache.pop(key, None)
        return True

    async def clear(self) -> bool:
        """Clear all stored values."""
        self._cache.clear()
        return True

    def remaining_ttl(self, key: Hashable) -> float | None:
        """Return the seconds left before a key expires.

        Args:
            key: The key to inspect.

        Returns:
            Seconds until expiry, math.inf for entries without a TTL,
            or None if the key is not present.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None
        return max(0.0, entry.expires_at - self._timer())

    def __len__(self) -> int:
        """Return the number of items in the store."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize
