"""
semcache — Semantic Cache

Key/value cache whose lookups match on meaning instead of exact strings.
Every operation is a round-trip to a vector index:

- get:    query the index with the key text, take the single best match,
          return its stored value if its score strictly exceeds
          ``min_proximity``
- set:    upsert an entry whose id and embedded text are the key, with the
          value stored as metadata
- delete: remove entries by key
- flush:  clear the facade's namespace

Nothing is cached locally, so reads always reflect the latest index state.
Index client errors propagate unchanged; there is no retry or fallback.
"""

import asyncio
import logging
from collections.abc import Sequence

from .config import DEFAULT_MIN_PROXIMITY, AppConfig, get_config
from .errors import BulkWriteError, InvalidArgumentError
from .index import VectorIndex, close_all_indexes, create_index

logger = logging.getLogger(__name__)

VALUE_FIELD = "value"


def _require_sequence(name: str, items: Sequence[str]) -> list[str]:
    """Validate a sequence of strings (a bare string is rejected)."""
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise InvalidArgumentError(
            f"{name} must be a sequence of strings, got {type(items).__name__}",
            details={"argument": name},
        )
    items = list(items)
    for position, item in enumerate(items):
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"{name}[{position}] must be a string, got {type(item).__name__}",
                details={"argument": name, "position": position},
            )
    return items


class SemanticCache:
    """
    Semantic cache facade over a vector index.

    Attributes:
        index: Vector index holding the entries
        min_proximity: Score a match must strictly exceed to be a hit
        namespace: Index namespace scoping every operation (None = default)
    """

    def __init__(
        self,
        index: VectorIndex,
        min_proximity: float = DEFAULT_MIN_PROXIMITY,
        namespace: str | None = None,
    ):
        """
        Initialize semantic cache.

        Args:
            index: Vector index (injected so tests can substitute a fake)
            min_proximity: Similarity threshold. Values near 1.0 accept only
                near-identical keys, values near 0.0 return the closest entry whatever it is
            namespace: Optional namespace isolating this cache's entries
        """
        self.index = index
        self.min_proximity = min_proximity
        self.namespace = namespace

    @property
    def _ns(self) -> str:
        return self.namespace or ""

    async def get(self, key: str) -> str | None:
        """
        Look up the value stored under the key closest in meaning to ``key``.

        Args:
            key: Query text

        Returns:
            Cached value, or None on a miss
        """
        matches = await self.index.query(
            key,
            top_k=1,
            include_metadata=True,
            namespace=self._ns,
        )

        if matches and matches[0].score > self.min_proximity:
            best = matches[0]
            value = best.metadata.get(VALUE_FIELD)
            if value is not None:
                logger.debug(
                    f"Semantic cache HIT: score={best.score:.3f}, "
                    f"threshold={self.min_proximity:.3f}, key='{key[:50]}'"
                )
                return value

        best_score = matches[0].score if matches else 0.0
        logger.debug(
            f"Semantic cache MISS: best_score={best_score:.3f}, "
            f"threshold={self.min_proximity:.3f}, key='{key[:50]}'"
        )
        return None

    async def get_many(self, keys: Sequence[str]) -> list[str | None]:
        """
        Look up several keys concurrently.

        Args:
            keys: Query texts

        Returns:
            One result per key, in input order (None for misses)
        """
        keys = _require_sequence("keys", keys)
        if not keys:
            return []
        return list(await asyncio.gather(*(self.get(key) for key in keys)))

    async def set(self, key: str, value: str) -> None:
        """
        Store ``value`` under ``key``, replacing any entry with the same key.

        Args:
            key: Key text (also the text the index embeds)
            value: Value to cache
        """
        await self.index.upsert(
            key,
            key,
            {VALUE_FIELD: value},
            namespace=self._ns,
        )
        logger.debug(f"Semantic cache SET: key='{key[:50]}'")

    async def set_many(self, keys: Sequence[str], values: Sequence[str]) -> None:
        """
        Store several key/value pairs, one upsert at a time in input order.

        Args:
            keys: Key texts
            values: Values, parallel to ``keys``

        Raises:
            InvalidArgumentError: If the sequences are malformed or differ in
                length (raised before anything is written)
            BulkWriteError: If an upsert fails; tells which keys were written
        """
        keys = _require_sequence("keys", keys)
        values = _require_sequence("values", values)
        if len(keys) != len(values):
            raise InvalidArgumentError(
                f"keys and values must have the same length ({len(keys)} != {len(values)})",
                details={"keys": len(keys), "values": len(values)},
            )

        for position, (key, value) in enumerate(zip(keys, values)):
            try:
                await self.set(key, value)
            except Exception as e:
                logger.error(
                    f"Semantic cache bulk set failed at position {position}: {e}",
                    extra={"position": position, "namespace": self.namespace, "error": str(e)},
                )
                raise BulkWriteError(
                    written_keys=keys[:position],
                    failed_key=key,
                    pending_keys=keys[position + 1 :],
                ) from e

        logger.debug(f"Semantic cache SET: {len(keys)} entries")

    async def delete(self, key: str) -> int:
        """
        Delete the entry stored under exactly ``key``.

        Returns:
            1 if an entry was removed, 0 if none existed
        """
        return await self.index.delete([key], namespace=self._ns)

    async def bulk_delete(self, keys: Sequence[str]) -> int:
        """
        Delete the entries stored under ``keys``.

        Returns:
            Number of entries removed
        """
        keys = _require_sequence("keys", keys)
        if not keys:
            return 0
        return await self.index.delete(keys, namespace=self._ns)

    async def flush(self) -> None:
        """Remove every entry in this cache's namespace. Irreversible."""
        await self.index.reset(namespace=self._ns)
        logger.info(f"Semantic cache flushed (namespace: {self.namespace or 'default'})")


def create_semantic_cache(config: AppConfig | None = None, index_name: str = "default") -> SemanticCache:
    """
    Build a semantic cache from configuration.

    Args:
        config: Application configuration (uses global config if None)
        index_name: Registry name of the index instance to use

    Returns:
        SemanticCache bound to the configured index
    """
    if config is None:
        config = get_config()

    index = create_index(config.index, name=index_name)
    cache = SemanticCache(
        index=index,
        min_proximity=config.cache.min_proximity,
        namespace=config.cache.namespace,
    )
    logger.info(
        f"Initialized SemanticCache: min_proximity={cache.min_proximity}, "
        f"namespace={cache.namespace or 'default'}"
    )
    return cache


# Global singleton
_cache: SemanticCache | None = None


def get_semantic_cache(config: AppConfig | None = None) -> SemanticCache:
    """
    Get global semantic cache instance.

    Args:
        config: Configuration (creates a new instance if provided)

    Returns:
        SemanticCache instance
    """
    global _cache

    if config is not None or _cache is None:
        _cache = create_semantic_cache(config)

    return _cache


async def close_semantic_cache() -> None:
    """Drop the global cache and close the indexes it was built on."""
    global _cache

    _cache = None
    await close_all_indexes()
