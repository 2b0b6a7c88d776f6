"""Layer entity."""

from dataclasses import dataclass
from datetime import timedelta

from layercache.core.interfaces.cache_store import ICacheStore
from layercache.utils.ttl import ceiling_to_seconds


@dataclass(frozen=True)
class Layer:
    """One store in the layered cache plus its TTL ceiling.

    The ceiling is the longest lifetime this layer accepts for any
    entry. It is normalised to whole seconds; None means unbounded.
    """

    store: ICacheStore
    max_ttl: int | timedelta | None = None

    def __post_init__(self) -> None:
        """Normalise the ceiling to seconds."""
        object.__setattr__(self, "max_ttl", ceiling_to_seconds(self.max_ttl))
