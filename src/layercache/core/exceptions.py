"""Exceptions raised by layercache."""


class LayerCacheError(Exception):
    """Base class for all layercache errors."""

    pass


class InvalidLayerError(LayerCacheError, TypeError):
    """Raised when a layer does not implement the store contract."""

    pass


class InvalidKeyError(LayerCacheError, ValueError):
    """Raised when a key cannot be used with the layered cache.

    Keys must be accepted by the meta key builder (strings by default)
    and must not fall inside the meta-key namespace.
    """

    pass


class InvalidTTLError(LayerCacheError, ValueError):
    """Raised for negative or unsupported TTLs and ceilings."""

    pass


class SerializationError(LayerCacheError):
    """Raised when serialization or deserialization fails."""

    pass
