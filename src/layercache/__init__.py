"""layercache - Layered read-through/write-through cache coordinator.

A Python library that composes an ordered sequence of key-value
stores into a single cache. Fast, local layers absorb reads that
would otherwise reach a slow, authoritative layer; values found in a
later layer are copied back into the layers that missed them, with
each layer's TTL clamped to its own ceiling.

Example:
    from layercache import InMemoryStore, LayerCache
    from layercache_redis import RedisStore

    cache = LayerCache(
        [InMemoryStore(maxsize=10_000), RedisStore("redis://localhost:6379")],
        max_ttls=[60, 3600],
    )

    await cache.set("user:1", {"name": "Alice"}, ttl=600)
    user = await cache.get("user:1")

    # Reads fall back through the layers and fill the ones that missed
    values = await cache.get_multiple(["user:1", "user:2"], default={})
"""

from layercache.core.entities import Layer, LayerCacheConfig, MetaRecord
from layercache.core.exceptions import (
    InvalidKeyError,
    InvalidLayerError,
    InvalidTTLError,
    LayerCacheError,
    SerializationError,
)
from layercache.core.interfaces import ICacheStore, IMetaKeyBuilder, ISerializer
from layercache.core.services import LayerCache, clamp_ttl
from layercache.infrastructure import (
    InMemoryStore,
    JsonSerializer,
    SuffixMetaKeyBuilder,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Layer",
    "LayerCacheConfig",
    "MetaRecord",
    # Exceptions
    "LayerCacheError",
    "InvalidLayerError",
    "InvalidKeyError",
    "InvalidTTLError",
    "SerializationError",
    # Core interfaces
    "ICacheStore",
    "IMetaKeyBuilder",
    "ISerializer",
    # Core services
    "LayerCache",
    "clamp_ttl",
    # Infrastructure implementations
    "InMemoryStore",
    "SuffixMetaKeyBuilder",
    "JsonSerializer",
]
