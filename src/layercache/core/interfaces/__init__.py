"""Core interfaces (Protocol classes) for layercache."""

from layercache.core.interfaces.cache_store import ICacheStore
from layercache.core.interfaces.key_builder import IMetaKeyBuilder
from layercache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheStore",
    "IMetaKeyBuilder",
    "ISerializer",
]
