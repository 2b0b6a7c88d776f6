"""Layered cache configuration entity."""

from dataclasses import dataclass


@dataclass
class LayerCacheConfig:
    """Layered cache configuration.

    Sync-back:
        When sync_back=True, values found in a lower layer are written
        into every higher layer that missed them. With sync_meta=True
        the value's meta record travels with it, so a later fallback
        from an intermediate layer still knows the original TTL.
    """

    sync_back: bool = True
    sync_meta: bool = True

    # Suffix used by the default meta key builder
    meta_suffix: str = "-kvls-meta"

    def __post_init__(self) -> None:
        """Validate the meta suffix."""
        if not self.meta_suffix:
            raise ValueError("meta_suffix must not be empty")
