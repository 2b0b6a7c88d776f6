"""Meta key builder interface."""

from collections.abc import Hashable
from typing import Protocol


class IMetaKeyBuilder(Protocol):
    """Contract for deriving meta-record keys from application keys.

    Distinct keys must map to distinct meta keys, and the derived keys
    must form a namespace disjoint from the keys an application stores,
    so meta records never shadow real values or each other.
    """

    def build(self, key: Hashable) -> str:
        """Build the meta key for an application key.

        Args:
            key: The application key.

        Returns:
            The key under which the meta record is stored.

        Raises:
            InvalidKeyError: If the builder does not accept the key.
        """
        ...

    def is_meta_key(self, key: Hashable) -> bool:
        """Check whether a key belongs to the meta namespace.

        Args:
            key: The key to check.

        Returns:
            True if the key could have been produced by build().
        """
        ...
