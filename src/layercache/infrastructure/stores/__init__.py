"""Cache store implementations."""

from layercache.infrastructure.stores.memory import InMemoryStore

__all__ = ["InMemoryStore"]
