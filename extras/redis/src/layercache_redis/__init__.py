"""Redis store for layercache."""

from layercache_redis.store import RedisStore

__all__ = ["RedisStore"]
