"""TTL clamping policy for cache layers."""

from datetime import timedelta

from layercache.utils.ttl import ttl_to_seconds


def clamp_ttl(ttl: int | timedelta | None, ceiling: int | None) -> int | None:
    """Compute the effective TTL for a write into a layer.

    Every write LayerCache issues goes through this function.

    - No requested TTL uses the layer ceiling.
    - A requested TTL of exactly 0 also uses the layer ceiling
      instead of expiring the entry immediately.
    - Otherwise the smaller of the requested TTL and the ceiling wins.
      An unbounded ceiling (None) imposes no limit.

    Args:
        ttl: The requested TTL (None, seconds, or timedelta).
        ceiling: The layer ceiling in seconds, or None if unbounded.

    Returns:
        The TTL in seconds to pass to the store, or None for no expiry.

    Raises:
        InvalidTTLError: If the requested TTL is negative or unsupported.
    """
    seconds = ttl_to_seconds(ttl)

    # TODO: a requested TTL of 0 should delete the key from the layer
    # rather than fall back to the ceiling.
    if seconds is None or seconds == 0:
        return ceiling

    if ceiling is None:
        return seconds
    return min(seconds, ceiling)
