"""Utilities for layercache."""

from layercache.utils.ttl import ceiling_to_seconds, ttl_to_seconds

__all__ = [
    "ceiling_to_seconds",
    "ttl_to_seconds",
]
