"""Serializer implementations."""

from layercache.infrastructure.serializers.json import JsonSerializer

__all__ = ["JsonSerializer"]
