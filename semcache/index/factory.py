"""
semcache — Vector Index Factory

Canonical factory for creating vector index backends from configuration.

Key points:
- Select backend with INDEX_BACKEND=upstash|memory|chroma
  - Defaults to upstash when VECTOR_URL is set, memory otherwise
  - Optional backends are imported lazily; a missing client library
    surfaces as ConfigurationError
- Named instance registry so the same index is shared across callers

Examples:
    from semcache.index.factory import create_index

    # Uses env-configured backend
    index = create_index()

    # Or explicitly supply an IndexConfig (e.g., for tests)
    from semcache.config import IndexBackend, IndexConfig
    mem_index = create_index(IndexConfig(backend=IndexBackend.MEMORY), name="test")
"""

from __future__ import annotations

import logging

from ..config import IndexBackend, IndexConfig, get_config
from ..errors import ConfigurationError, ErrorCode
from .backends.memory import MemoryVectorIndex
from .embeddings import HashingEmbedder
from .interface import VectorIndex

logger = logging.getLogger(__name__)

# Global index instances registry
_index_instances: dict[str, VectorIndex] = {}


def _create_memory_index(config: IndexConfig) -> VectorIndex:
    """Internal helper to construct the in-process index."""
    return MemoryVectorIndex(embedder=HashingEmbedder(config.embedding_dimensions))


def _create_upstash_index(config: IndexConfig) -> VectorIndex:
    """Internal helper to construct the Upstash index with lazy import."""
    try:
        from .backends.upstash import UpstashVectorIndex
    except ImportError as e:
        logger.error(
            "Upstash backend selected but upstash-vector is not installed",
            extra={"package": "upstash-vector", "error": str(e)},
        )
        raise ConfigurationError(
            "Upstash backend selected but the upstash-vector client is unavailable. "
            "Install with: pip install 'upstash-vector>=0.6.0'",
            details={
                "package": "upstash-vector",
                "error": str(e),
                "backend": "upstash",
                "error_code": ErrorCode.BACKEND_UNAVAILABLE,
            },
        ) from e

    return UpstashVectorIndex(url=config.url, token=config.token)


def _create_chroma_index(config: IndexConfig) -> VectorIndex:
    """Internal helper to construct the Chroma index with lazy import."""
    try:
        from .backends.chroma import ChromaVectorIndex
    except ImportError as e:
        logger.error(
            "Chroma backend selected but chromadb is not installed",
            extra={"package": "chromadb", "error": str(e)},
        )
        raise ConfigurationError(
            "Chroma backend selected but chromadb is unavailable. Install with: pip install 'semcache[chroma]'",
            details={
                "package": "chromadb",
                "error": str(e),
                "backend": "chroma",
                "error_code": ErrorCode.BACKEND_UNAVAILABLE,
            },
        ) from e

    return ChromaVectorIndex(
        collection_name=config.collection_name,
        persist_directory=config.persist_directory,
    )


def create_index(
    config: IndexConfig | None = None,
    name: str = "default",
) -> VectorIndex:
    """
    Create a vector index backend based on configuration.

    Args:
        config: Index configuration (uses global config if not provided)
        name: Instance name (for multiple indexes)

    Returns:
        Configured vector index backend

    Raises:
        ConfigurationError: If configuration is invalid or backend unavailable
    """
    if name in _index_instances:
        logger.debug("Returning existing index instance: %s", name)
        return _index_instances[name]

    if config is None:
        config = get_config().index

    backend = IndexBackend(config.backend)
    logger.info(
        "Creating index instance '%s' with backend: %s",
        name,
        backend.value,
        extra={"index_name": name, "backend": backend.value},
    )

    try:
        if backend == IndexBackend.MEMORY:
            index = _create_memory_index(config)
        elif backend == IndexBackend.UPSTASH:
            index = _create_upstash_index(config)
        elif backend == IndexBackend.CHROMA:
            index = _create_chroma_index(config)
        else:  # pragma: no cover
            raise ConfigurationError(
                f"Unknown index backend: {backend}",
                details={"backend": str(backend), "supported": [b.value for b in IndexBackend]},
            )
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error creating index instance '%s': %s",
            name,
            e,
            extra={"index_name": name, "backend": backend.value, "error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create index instance '{name}': {e}",
            details={"index_name": name, "backend": backend.value, "error": str(e)},
        ) from e

    _index_instances[name] = index
    logger.info("Index instance '%s' created successfully", name)
    return index


def get_index(name: str = "default") -> VectorIndex:
    """
    Get an existing index instance by name, creating it from the global
    configuration if it does not exist yet.
    """
    if name not in _index_instances:
        logger.debug("Index instance '%s' not found, creating new instance", name)
        return create_index(name=name)

    return _index_instances[name]


async def close_all_indexes() -> None:
    """Close all index instances and release resources."""
    if not _index_instances:
        logger.debug("No index instances to close")
        return

    logger.info("Closing %d index instance(s)...", len(_index_instances))

    for name, index in list(_index_instances.items()):
        try:
            await index.close()
            logger.info("Closed index instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing index instance '%s': %s",
                name,
                e,
                extra={"index_name": name, "error": str(e)},
                exc_info=True,
            )

    _index_instances.clear()
    logger.info("All index instances closed")


def reset_index_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_index_instances)
    _index_instances.clear()
    logger.debug("Reset index factory, cleared %d instance reference(s)", count)


def list_index_instances() -> list[str]:
    """List all registered index instance names."""
    return list(_index_instances.keys())
