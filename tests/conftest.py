"""Pytest configuration for layercache tests."""

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

import pytest

from layercache import InMemoryStore, LayerCache


class RecordingStore(InMemoryStore):
    """In-memory store that records the calls made to it."""

    def __init__(self, name: str = "store", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.name = name
        self.get_calls: list[list[Hashable]] = []
        self.set_calls: list[tuple[dict[Hashable, Any], int | None]] = []

    async def get_multiple(self, keys: Iterable[Hashable]) -> dict[Hashable, Any]:
        keys = list(keys)
        self.get_calls.append(keys)
        return await super().get_multiple(keys)

    async def set_multiple(
        self,
        items: Mapping[Hashable, Any],
        ttl: int | None = None,
    ) -> bool:
        self.set_calls.append((dict(items), ttl))
        return await super().set_multiple(items, ttl)

    def ttl_for(self, key: Hashable) -> int | None:
        """Return the TTL of the last recorded write of a key."""
        for items, ttl in reversed(self.set_calls):
            if key in items:
                return ttl
        raise KeyError(key)


class FailingStore(RecordingStore):
    """Store whose writes, deletes and clears report failure."""

    def __init__(self, raises: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.raises = raises

    def _fail(self) -> bool:
        if self.raises:
            raise ConnectionError(f"{self.name} is down")
        return False

    async def set_multiple(
        self,
        items: Mapping[Hashable, Any],
        ttl: int | None = None,
    ) -> bool:
        self.set_calls.append((dict(items), ttl))
        return self._fail()

    async def delete(self, key: Hashable) -> bool:
        return self._fail()

    async def delete_multiple(self, keys: Iterable[Hashable]) -> bool:
        return self._fail()

    async def clear(self) -> bool:
        return self._fail()


class BrokenReadStore(RecordingStore):
    """Store whose reads raise."""

    async def get_multiple(self, keys: Iterable[Hashable]) -> dict[Hashable, Any]:
        self.get_calls.append(list(keys))
        raise ConnectionError(f"{self.name} is down")

    async def has(self, key: Hashable) -> bool:
        raise ConnectionError(f"{self.name} is down")


@pytest.fixture
def layers() -> list[RecordingStore]:
    """Two recording stores, fastest first."""
    return [RecordingStore(name="local"), RecordingStore(name="shared")]


@pytest.fixture
def cache(layers: list[RecordingStore]) -> LayerCache:
    """A two-layer cache with 2s and 10s ceilings."""
    return LayerCache(layers, [2, 10])
