"""Domain entities for layercache."""

from layercache.core.entities.layer import Layer
from layercache.core.entities.layer_cache_config import LayerCacheConfig
from layercache.core.entities.meta_record import MetaRecord

__all__ = [
    "Layer",
    "LayerCacheConfig",
    "MetaRecord",
]
