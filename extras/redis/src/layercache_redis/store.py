"""Redis cache store implementation."""

import re
from collections.abc import Hashable, Iterable, Mapping
from typing import Any, Optional

import redis.asyncio as redis

from layercache.core.interfaces.serializer import ISerializer
from layercache.infrastructure.serializers.json import JsonSerializer

_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")


class RedisStore:
    """Redis cache store for shared, authoritative layers.

    Values are serialized before they are written, so anything the
    serializer accepts can be cached. Connection errors are raised
    as-is; LayerCache absorbs them.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "layercache",
        default_ttl: Optional[int] = None,
        serializer: Optional[ISerializer] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis store.

        Args:
            redis_url: Redis connection URL. Ignored if client is given.
            key_prefix: Prefix for all keys.
            default_ttl: TTL in seconds for writes without one.
            serializer: Serializer for values. Defaults to JSON.
            client: Optional pre-built Redis client.
        """
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl
        self._serializer = serializer or JsonSerializer()

    async def get(self, key: Hashable) -> Optional[Any]:
        """Retrieve a value by key.

        Args:
            key: The key to retrieve.

        Returns:
            The stored value, or None if not found or expired.
        """
        data = await self._redis.get(self._prefixed_key(key))
        if data is None:
            return None
        return self._serializer.deserialize(data)

    async def get_multiple(self, keys: Iterable[Hashable]) -> dict[Hashable, Any]:
        """Retrieve several values with a single MGET.

        Args:
            keys: The keys to retrieve.

        Returns:
            Mapping of the keys that were found to their values.
        """
        keys = list(keys)
        if not keys:
            return {}

        raw = await self._redis.mget([self._prefixed_key(key) for key in keys])
        return {
            key: self._serializer.deserialize(data)
            for key, data in zip(keys, raw)
            if data is not None
        }

    async def set(self, key: Hashable, value: Any, ttl: Optional[int] = None) -> bool:
        """Store a value.

        A TTL of 0 deletes the key instead of storing it.

        Args:
            key: The key.
            value: The value to store.
            ttl: Optional TTL in seconds. If None, uses default_ttl.

        Returns:
            True if Redis acknowledged the write.
        """
        prefixed_key = self._prefixed_key(key)
        effective_ttl = self._effective_ttl(ttl)

        if effective_ttl == 0:
            await self._redis.delete(prefixed_key)
            return True

        result = await self._redis.set(
            prefixed_key,
            self._serializer.serialize(value),
            ex=effective_ttl,
        )
        return bool(result)

    async def set_multiple(
        self,
        items: Mapping[Hashable, Any],
        ttl: Optional[int] = None,
    ) -> bool:
        """Store several values in one pipeline round trip.

        Args:
            items: Mapping of key to value.
            ttl: Optional TTL in seconds. If None, uses default_ttl.

        Returns:
            True if Redis acknowledged every write.
        """
        if not items:
            return True

        effective_ttl = self._effective_ttl(ttl)
        pipe = self._redis.pipeline(transaction=False)
        for key, value in items.items():
            prefixed_key = self._prefixed_key(key)
            if effective_ttl == 0:
                pipe.delete(prefixed_key)
            else:
                pipe.set(prefixed_key, self._serializer.serialize(value), ex=effective_ttl)

        results = await pipe.execute()
        if effective_ttl == 0:
            return True
        return all(results)

    async def has(self, key: Hashable) -> bool:
        """Check if key exists in Redis.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        result = await self._redis.exists(self._prefixed_key(key))
        return result > 0

    async def delete(self, key: Hashable) -> bool:
        """Delete a value.

        Args:
            key: The key to delete.

        Returns:
            True, whether or not the key was present.
        """
        await self._redis.delete(self._prefixed_key(key))
        return True

    async def delete_multiple(self, keys: Iterable[Hashable]) -> bool:
        """Delete several values with a single DEL.

        Args:
            keys: The keys to delete.

        Returns:
            True, whether or not the keys were present.
        """
        prefixed_keys = [self._prefixed_key(key) for key in keys]
        if prefixed_keys:
            await self._redis.delete(*prefixed_keys)
        return True

    async def clear(self) -> bool:
        """Clear all values with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.
        Glob characters in the prefix are escaped so they match literally.
        """
        prefix = _GLOB_SPECIAL.sub(r"\\\1", self._key_prefix)
        await self._delete_by_pattern(f"{prefix}:*")
        return True

    async def _delete_by_pattern(self, pattern: str) -> int:
        """Delete keys matching a pattern using SCAN.

        Uses SCAN instead of KEYS for production safety.

        Args:
            pattern: Redis glob pattern.

        Returns:
            Number of keys deleted.
        """
        count = 0
        cursor = 0

        while True:
            cursor, keys = await self._redis.scan(cursor, match=pattern, count=100)

            if keys:
                count += await self._redis.delete(*keys)

            if cursor == 0:
                break

        return count

    def _effective_ttl(self, ttl: Optional[int]) -> Optional[int]:
        return self._default_ttl if ttl is None else ttl

    def _prefixed_key(self, key: Hashable) -> str:
        return f"{self._key_prefix}:{key}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
