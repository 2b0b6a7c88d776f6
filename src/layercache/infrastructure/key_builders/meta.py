"""Suffix-based meta key builder implementation."""

from collections.abc import Hashable

from layercache.core.exceptions import InvalidKeyError


class SuffixMetaKeyBuilder:
    """Meta key builder that appends a fixed suffix to the key.

    Only string keys are accepted. Other scalars would share a meta key
    with their string form (``1`` and ``"1"`` both become ``"1<suffix>"``),
    so callers convert them first or inject a builder that tags them.

    Any application key ending with the suffix is considered part of
    the meta namespace, which LayerCache refuses to store.
    """

    def __init__(self, suffix: str = "-kvls-meta") -> None:
        """Initialize the key builder.

        Args:
            suffix: Suffix appended to application keys.
        """
        if not suffix:
            raise ValueError("suffix must not be empty")
        self._suffix = suffix

    @property
    def suffix(self) -> str:
        """Return the meta key suffix."""
        return self._suffix

    def build(self, key: Hashable) -> str:
        """Build the meta key for an application key.

        Args:
            key: The application key. Must be a string.

        Returns:
            The key with the suffix appended.

        Raises:
            InvalidKeyError: If the key is not a string.
        """
        if not isinstance(key, str):
            raise InvalidKeyError(
                f"Cache key must be a str, got {type(key).__name__}"
            )
        return f"{key}{self._suffix}"

    def is_meta_key(self, key: Hashable) -> bool:
        """Check whether a key ends with the meta suffix.

        Args:
            key: The key to check.

        Returns:
            True if the key is a string ending with the suffix.
        """
        return isinstance(key, str) and key.endswith(self._suffix)
