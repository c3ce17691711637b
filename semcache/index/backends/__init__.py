"""
semcache — Vector Index Backends

Exports available vector index backend implementations.

Upstash and Chroma backends are lazy-loaded via factory.py so that a
missing optional client only matters when that backend is selected.
"""

from .memory import MemoryVectorIndex

__all__ = [
    "MemoryVectorIndex",
]
