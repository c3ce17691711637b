"""
semcache — Semantic Cache over a Vector Index

Lookups return a previously stored value whose key is close in meaning to
the query, so paraphrased prompts hit the cache.

Public API:
    - SemanticCache: Cache facade (get/get_many/set/set_many/delete/bulk_delete/flush)
    - create_semantic_cache(), get_semantic_cache(), close_semantic_cache()
    - VectorIndex, QueryMatch: Index interface for custom backends
    - AppConfig, IndexConfig, SemanticCacheConfig: Configuration

Usage:
    >>> from semcache import SemanticCache
    >>> from semcache.index.backends.upstash import UpstashVectorIndex
    >>>
    >>> cache = SemanticCache(UpstashVectorIndex(), min_proximity=0.9)
    >>> await cache.set("capital of france", "paris")
    >>> await cache.get("france's capital")
    'paris'
"""

from .cache import SemanticCache, close_semantic_cache, create_semantic_cache, get_semantic_cache
from .config import AppConfig, IndexBackend, IndexConfig, SemanticCacheConfig
from .errors import (
    BulkWriteError,
    ConfigurationError,
    ErrorCode,
    InvalidArgumentError,
    SemanticCacheError,
)
from .index import QueryMatch, VectorIndex

__version__ = "1.0.0"

__all__ = [
    # Main cache interface
    "SemanticCache",
    "create_semantic_cache",
    "get_semantic_cache",
    "close_semantic_cache",
    # Index interface
    "VectorIndex",
    "QueryMatch",
    # Configuration
    "AppConfig",
    "IndexBackend",
    "IndexConfig",
    "SemanticCacheConfig",
    # Errors
    "SemanticCacheError",
    "ConfigurationError",
    "InvalidArgumentError",
    "BulkWriteError",
    "ErrorCode",
]
