"""TTL conversion utilities."""

from datetime import timedelta

from layercache.core.exceptions import InvalidTTLError


def ttl_to_seconds(ttl: int | timedelta | None) -> int | None:
    """Convert a requested TTL to whole seconds.

    A timedelta is truncated to whole seconds, the span between now
    and now + ttl.

    Args:
        ttl: None, a non-negative number of seconds, or a timedelta.

    Returns:
        The TTL in seconds, or None if no TTL was requested.

    Raises:
        InvalidTTLError: If the TTL is negative or of an unsupported type.
    """
    if ttl is None:
        return None

    if isinstance(ttl, timedelta):
        seconds = int(ttl.total_seconds())
    elif isinstance(ttl, int) and not isinstance(ttl, bool):
        seconds = ttl
    else:
        raise InvalidTTLError(
            f"TTL must be None, an int or a timedelta, got {type(ttl).__name__}"
        )

    if seconds < 0:
        raise InvalidTTLError(f"TTL must not be negative, got {seconds}s")
    return seconds


def ceiling_to_seconds(ceiling: int | timedelta | None) -> int | None:
    """Normalise a layer ceiling to whole seconds.

    Args:
        ceiling: None (unbounded), positive seconds, or a positive timedelta.

    Returns:
        The ceiling in seconds, or None if unbounded.

    Raises:
        InvalidTTLError: If the ceiling is not positive.
    """
    seconds = ttl_to_seconds(ceiling)
    if seconds is not None and seconds <= 0:
        raise InvalidTTLError(f"Layer max TTL must be positive, got {seconds}s")
    return seconds
