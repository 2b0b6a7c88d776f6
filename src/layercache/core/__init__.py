"""Core domain layer for layercache."""

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

__all__ = [
    # Entities
    "Layer",
    "LayerCacheConfig",
    "MetaRecord",
    # Exceptions
    "LayerCacheError",
    "InvalidLayerError",
    "InvalidKeyError",
    "InvalidTTLError",
    "SerializationError",
    # Interfaces
    "ICacheStore",
    "IMetaKeyBuilder",
    "ISerializer",
    # Services
    "LayerCache",
    "clamp_ttl",
]
