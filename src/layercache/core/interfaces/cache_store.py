"""Cache store interface."""

from collections.abc import Hashable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ICacheStore(Protocol):
    """Contract for a single cache layer.

    Every layer handed to LayerCache must implement this protocol.
    Methods are async so both in-process and networked stores fit.
    TTLs are whole seconds; None means the store default (or no expiry).
    """

    async def get(self, key: Hashable) -> Any | None:
        """Retrieve a value by key.

        Args:
            key: The key to retrieve.

        Returns:
            The stored value, or None if not found or expired.
        """
        ...

    async def get_multiple(self, keys: Iterable[Hashable]) -> dict[Hashable, Any]:
        """Retrieve several values at once.

        Args:
            keys: The keys to retrieve.

        Returns:
            Mapping of key to value. Absent keys are omitted or None.
        """
        ...

    async def set(self, key: Hashable, value: Any, ttl: int | None = None) -> bool:
        """Store a value.

        Args:
            key: The key.
            value: The value to store.
            ttl: Optional time-to-live in seconds.

        Returns:
            True on success, False otherwise.
        """
        ...

    async def set_multiple(
        self,
        items: Mapping[Hashable, Any],
        ttl: int | None = None,
    ) -> bool:
        """Store several values with a shared TTL.

        Args:
            items: Mapping of key to value.
            ttl: Optional time-to-live in seconds.

        Returns:
            True if every item was stored, False otherwise.
        """
        ...

    async def has(self, key: Hashable) -> bool:
        """Check if a key is present.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        ...

    async def delete(self, key: Hashable) -> bool:
        """Delete a value.

        Args:
            key: The key to delete.

        Returns:
            True if the key is gone afterwards, False on error.
        """
        ...

    async def delete_multiple(self, keys: Iterable[Hashable]) -> bool:
        """Delete several values.

        Args:
            keys: The keys to delete.

        Returns:
            True if all keys are gone afterwards, False on error.
        """
        ...

    async def clear(self) -> bool:
        """Remove every value from the store.

        Returns:
            True on success, False otherwise.
        """
        ...
