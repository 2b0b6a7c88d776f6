"""Meta key builder implementations."""

from layercache.infrastructure.key_builders.meta import SuffixMetaKeyBuilder

__all__ = ["SuffixMetaKeyBuilder"]
