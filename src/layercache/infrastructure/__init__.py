"""Infrastructure layer implementations for layercache."""

from layercache.infrastructure.key_builders import SuffixMetaKeyBuilder
from layercache.infrastructure.serializers import JsonSerializer
from layercache.infrastructure.stores import InMemoryStore

__all__ = [
    "InMemoryStore",
    "SuffixMetaKeyBuilder",
    "JsonSerializer",
]
