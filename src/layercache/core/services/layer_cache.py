"""Layer cache - coordinates reads and writes across ordered stores."""

import logging
from collections.abc import Hashable, Iterable, Mapping, Sequence
from datetime import timedelta
from typing import Any

from layercache.core.entities.layer import Layer
from layercache.core.entities.layer_cache_config import LayerCacheConfig
from layercache.core.entities.meta_record import MetaRecord
from layercache.core.exceptions import InvalidKeyError, InvalidLayerError
from layercache.core.interfaces.cache_store import ICacheStore
from layercache.core.interfaces.key_builder import IMetaKeyBuilder
from layercache.core.services.ttl_policy import clamp_ttl
from layercache.infrastructure.key_builders.meta import SuffixMetaKeyBuilder
from layercache.utils.ttl import ttl_to_seconds

logger = logging.getLogger(__name__)


class LayerCache:
    """Cache facade over an ordered sequence of stores.

    Layer 0 is the fastest, most local store and the last layer is the
    most authoritative one. Reads start at layer 0 and fall back to
    later layers on a miss, then copy what they found into the layers
    that missed it. Writes start at the last layer and move towards
    layer 0, stopping at the first failure.

    Store failures never propagate: a lost cached copy can always be
    fetched again from a later layer, so failed calls are logged and
    folded into the boolean results.
    """

    def __init__(
        self,
        stores: Sequence[ICacheStore],
        max_ttls: Sequence[int | timedelta | None] | None = None,
        *,
        meta_key_builder: IMetaKeyBuilder | None = None,
        config: LayerCacheConfig | None = None,
    ) -> None:
        """Initialize the layered cache.

        Args:
            stores: The stores in order of use, fastest first.
            max_ttls: Optional per-layer TTL ceilings. Missing entries
                mean the layer has no ceiling.
            meta_key_builder: Optional builder for meta-record keys.
                Defaults to a suffix builder using config.meta_suffix.
            config: Optional configuration. Uses defaults if not provided.

        Raises:
            InvalidLayerError: If a store does not implement ICacheStore,
                or more ceilings than stores are given.
            InvalidTTLError: If a ceiling is not positive.
        """
        stores = list(stores)
        ceilings = list(max_ttls or [])
        if len(ceilings) > len(stores):
            raise InvalidLayerError(
                f"Got {len(ceilings)} max TTLs for {len(stores)} cache layers"
            )

        layers = []
        for index, store in enumerate(stores):
            if not isinstance(store, ICacheStore):
                raise InvalidLayerError(
                    f"Cache layer {index} ({type(store).__name__}) "
                    "must implement ICacheStore"
                )
            ceiling = ceilings[index] if index < len(ceilings) else None
            layers.append(Layer(store=store, max_ttl=ceiling))

        self._layers: tuple[Layer, ...] = tuple(layers)
        self._config = config or LayerCacheConfig()
        self._meta_keys = meta_key_builder or SuffixMetaKeyBuilder(
            suffix=self._config.meta_suffix
        )

        # Statistics
        self._hits = 0
        self._misses = 0
        self._sync_backs = 0
        self._layer_hits = [0] * len(self._layers)

    @classmethod
    def from_layers(
        cls,
        layers: Iterable[Layer],
        *,
        meta_key_builder: IMetaKeyBuilder | None = None,
        config: LayerCacheConfig | None = None,
    ) -> "LayerCache":
        """Create a LayerCache from prepared Layer objects.

        Args:
            layers: The layers in order of use, fastest first.
            meta_key_builder: Optional builder for meta-record keys.
            config: Optional configuration.

        Returns:
            A new LayerCache instance.
        """
        layers = list(layers)
        return cls(
            [layer.store for layer in layers],
            [layer.max_ttl for layer in layers],
            meta_key_builder=meta_key_builder,
            config=config,
        )

    @property
    def layers(self) -> tuple[Layer, ...]:
        """Get the layers in order of use."""
        return self._layers

    @property
    def config(self) -> LayerCacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, total lookups and the number
            of values written back into higher layers.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
            "sync_backs": self._sync_backs,
        }

    @property
    def layer_hits(self) -> tuple[int, ...]:
        """Get the number of keys resolved by each layer."""
        return tuple(self._layer_hits)

    def reset_stats(self) -> None:
        """Reset all statistics counters."""
        self._hits = 0
        self._misses = 0
        self._sync_backs = 0
        self._layer_hits = [0] * len(self._layers)

    def __len__(self) -> int:
        """Return the number of layers."""
        return len(self._layers)

    def layer_max_ttl(
        self,
        layer_index: int,
        ttl: int | timedelta | None = None,
    ) -> int | None:
        """Clamp a requested TTL to a layer's ceiling.

        Args:
            layer_index: Position of the layer.
            ttl: The requested TTL.

        Returns:
            The effective TTL in seconds, or None for no expiry.
        """
        return clamp_ttl(ttl, self._layers[layer_index].max_ttl)

    async def get(self, key: Hashable, default: Any = None) -> Any:
        """Get a value from the first layer that has it.

        Args:
            key: The key to retrieve.
            default: Value returned when no layer has the key.

        Returns:
            The cached value, or default.
        """
        result = await self.get_multiple([key], default)
        return result[key]

    async def get_multiple(
        self,
        keys: Iterable[Hashable],
        default: Any = None,
    ) -> dict[Hashable, Any]:
        """Get several values, falling back through the layers.

        Each layer is only asked for the keys no earlier layer had.
        Values found in a later layer are written back into every
        earlier layer that missed them, using the TTL recorded in the
        value's meta record clamped to that layer's ceiling.

        Args:
            keys: The keys to retrieve.
            default: Value used for keys no layer has.

        Returns:
            Mapping of every requested key to its value or default.

        Raises:
            InvalidKeyError: If the meta key builder rejects a key.
        """
        requested: list[Hashable] = []
        meta_keys: dict[Hashable, str] = {}
        for key in keys:
            meta_key = self._meta_key(key)
            if key not in meta_keys:
                meta_keys[key] = meta_key
                requested.append(key)

        found: dict[Hashable, Any] = {}
        missing = list(requested)
        missing_meta = list(meta_keys.values())
        # Keys each queried layer did not have
        sync_back: list[list[Hashable]] = []

        index = 0
        while missing and index < len(self._layers):
            lookup = missing + missing_meta
            layer_values = await self._call(index, "get_multiple", lookup, default={})
            if not layer_values:
                layer_values = {}

            for key in lookup:
                value = layer_values.get(key)
                if value is not None:
                    found[key] = value

            self._layer_hits[index] += sum(1 for key in missing if key in found)
            missing = [key for key in missing if key not in found]
            missing_meta = [key for key in missing_meta if key not in found]
            sync_back.append(missing)

            if missing:
                index += 1

        values = {key: found[key] for key in requested if key in found}
        self._hits += len(values)
        self._misses += len(requested) - len(values)

        if self._config.sync_back and values:
            ttls = {}
            for key in values:
                record = MetaRecord.from_value(found.get(meta_keys[key]))
                ttls[key] = record.ttl if record else None

            # The last queried layer either had the keys or nobody did
            for layer_index in reversed(range(len(sync_back) - 1)):
                pending = [key for key in sync_back[layer_index] if key in values]
                if pending:
                    await self._sync_back(
                        layer_index, pending, values, ttls, found, meta_keys
                    )

        return {key: values.get(key, default) for key in requested}

    async def set(
        self,
        key: Hashable,
        value: Any,
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Set a value in every layer.

        Args:
            key: The key.
            value: The value to store.
            ttl: Optional TTL, clamped per layer.

        Returns:
            True if every layer stored the value.
        """
        return await self.set_multiple({key: value}, ttl)

    async def set_multiple(
        self,
        items: Mapping[Hashable, Any],
        ttl: int | timedelta | None = None,
    ) -> bool:
        """Set several values in every layer.

        Starts with the last layer and walks back to layer 0, so a
        failure part way through still leaves the authoritative layers
        updated. Stops at the first layer that fails; layers already
        written are not rolled back.

        Args:
            items: Mapping of key to value.
            ttl: Optional TTL, clamped per layer.

        Returns:
            True only if every layer stored every item.

        Raises:
            InvalidKeyError: If the meta key builder rejects a key.
            InvalidTTLError: If the TTL is negative or unsupported.
        """
        items = dict(items)
        requested_ttl = ttl_to_seconds(ttl)
        if not items:
            return True

        record = MetaRecord.create(requested_ttl).to_value()
        batch = dict(items)
        for key in items:
            batch[self._meta_key(key)] = record

        for index in reversed(range(len(self._layers))):
            stored = await self._call(
                index,
                "set_multiple",
                batch,
                self.layer_max_ttl(index, requested_ttl),
                default=False,
            )
            if not stored:
                logger.debug(
                    "Write of %d key(s) stopped at cache layer %d", len(items), index
                )
                return False

        return True

    async def has(self, key: Hashable) -> bool:
        """Check whether every layer holds a key.

        This is stricter than get(): a key held only by the
        authoritative layer is reported as absent.

        Args:
            key: The key to check.

        Returns:
            True only if all layers have the key.
        """
        if not self._layers:
            return False

        for index in range(len(self._layers)):
            if not await self._call(index, "has", key, default=False):
                return False
        return True

    async def delete(self, key: Hashable) -> bool:
        """Delete a key from every layer.

        Does not stop on failure, so the result may be False while
        the key is gone from every layer but one.

        Args:
            key: The key to delete.

        Returns:
            True if every layer deleted the key.
        """
        return await self._apply_to_all("delete", key)

    async def delete_multiple(self, keys: Iterable[Hashable]) -> bool:
        """Delete several keys from every layer.

        Args:
            keys: The keys to delete.

        Returns:
            True if every layer deleted every key.
        """
        return await self._apply_to_all("delete_multiple", list(keys))

    async def clear(self) -> bool:
        """Clear every layer, starting with the last one.

        If an earlier layer fails to clear, its keys may still be
        returned by later reads.

        Returns:
            True if every layer was cleared.
        """
        return await self._apply_to_all("clear")

    def _meta_key(self, key: Hashable) -> str:
        """Derive the meta key for an application key.

        Raises:
            InvalidKeyError: If the builder rejects the key or it lies
                inside the meta-key namespace.
        """
        meta_key = self._meta_keys.build(key)
        if self._meta_keys.is_meta_key(key):
            raise InvalidKeyError(f"Key {key!r} collides with the meta-key namespace")
        return meta_key

    async def _sync_back(
        self,
        index: int,
        keys: list[Hashable],
        values: dict[Hashable, Any],
        ttls: dict[Hashable, int | None],
        found: dict[Hashable, Any],
        meta_keys: dict[Hashable, str],
    ) -> None:
        """Write values a layer missed back into it.

        Keys are grouped by their effective TTL so each group is a
        single store call. Failures are ignored: the next read will
        fall back again and retry.
        """
        batches: dict[int | None, dict[Hashable, Any]] = {}
        for key in keys:
            effective_ttl = self.layer_max_ttl(index, ttls[key])
            batch = batches.setdefault(effective_ttl, {})
            batch[key] = values[key]

            meta_key = meta_keys[key]
            if self._config.sync_meta and meta_key in found:
                batch[meta_key] = found[meta_key]

        for effective_ttl, batch in batches.items():
            logger.debug(
                "Syncing %d entr(ies) back to cache layer %d (ttl=%s)",
                len(batch),
                index,
                effective_ttl,
            )
            if await self._call(
                index, "set_multiple", batch, effective_ttl, default=False
            ):
                self._sync_backs += sum(1 for key in batch if key in values)

    async def _apply_to_all(self, operation: str, *args: Any) -> bool:
        """Run an operation on every layer, last layer first.

        Returns:
            The AND of all layer results.
        """
        result = True
        for index in reversed(range(len(self._layers))):
            succeeded = await self._call(index, operation, *args, default=False)
            result = bool(succeeded) and result
        return result

    async def _call(
        self,
        index: int,
        operation: str,
        *args: Any,
        default: Any,
    ) -> Any:
        """Await a store operation on one layer.

        Args:
            index: Position of the layer.
            operation: Name of the ICacheStore method to call.
            *args: Arguments for the method.
            default: Value returned if the store raises.

        Returns:
            The store result, or default if the store raised.
        """
        store = self._layers[index].store
        try:
            return await getattr(store, operation)(*args)
        except Exception:
            logger.warning(
                "Cache layer %d (%s) failed during %s",
                index,
                type(store).__name__,
                operation,
                exc_info=True,
            )
            return default
