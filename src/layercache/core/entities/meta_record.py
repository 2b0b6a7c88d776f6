"""Meta record entity."""

import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MetaRecord:
    """Immutable record of the original intent of a write.

    Stored next to every value so that a later sync-back can reuse
    the TTL the caller asked for instead of guessing.
    """

    created_at: float
    ttl: int | None = None

    @classmethod
    def create(cls, ttl: int | None = None) -> "MetaRecord":
        """Factory method to create a record stamped with the current time.

        Args:
            ttl: The requested TTL in seconds, or None if none was requested.

        Returns:
            A new MetaRecord instance.
        """
        return cls(created_at=time.time(), ttl=ttl)

    def to_value(self) -> tuple[float, int | None]:
        """Return the plain pair written to the stores."""
        return (self.created_at, self.ttl)

    @classmethod
    def from_value(cls, value: Any) -> "MetaRecord | None":
        """Rebuild a record from a stored value.

        Serializers may turn the stored tuple into a list, so any
        two-item sequence is accepted.

        Args:
            value: The value read from a store.

        Returns:
            The MetaRecord, or None if the value is not a valid record.
        """
        if isinstance(value, MetaRecord):
            return value
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            return None
        if len(value) != 2:
            return None

        created_at, ttl = value
        if not isinstance(created_at, (int, float)) or isinstance(created_at, bool):
            return None
        if ttl is not None and (not isinstance(ttl, int) or isinstance(ttl, bool)):
            return None
        return cls(created_at=float(created_at), ttl=ttl)
