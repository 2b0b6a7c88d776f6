"""Domain services for layercache."""

from layercache.core.services.layer_cache import LayerCache
from layercache.core.services.ttl_policy import clamp_ttl

__all__ = [
    "LayerCache",
    "clamp_ttl",
]
