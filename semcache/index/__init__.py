"""
semcache — Vector Index Module

Vector similarity indexes the semantic cache runs on, behind one
interface. Embedding and nearest-neighbour search happen inside the
backend.

Usage:
    from semcache.index import create_index

    index = create_index()
    await index.upsert("capital of france", "capital of france", {"value": "paris"})
    matches = await index.query("france's capital", top_k=1)
"""

from .embeddings import HashingEmbedder
from .factory import (
    close_all_indexes,
    create_index,
    get_index,
    list_index_instances,
    reset_index_factory,
)
from .interface import QueryMatch, VectorIndex

__all__ = [
    # Factory functions
    "create_index",
    "get_index",
    "close_all_indexes",
    "list_index_instances",
    "reset_index_factory",
    # Interface
    "VectorIndex",
    "QueryMatch",
    # Embeddings
    "HashingEmbedder",
]
