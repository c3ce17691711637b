"""
semcache — Memory Vector Index

In-process vector index: brute-force cosine similarity over a
per-namespace mapping of id -> (vector, metadata). Suitable for tests
and single-process development; nothing is persisted.

Scores use the same [0, 1] normalization as the hosted index:
score = (1 + cosine) / 2.
"""

import asyncio
import copy
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..embeddings import Embedder, HashingEmbedder
from ..interface import QueryMatch, VectorIndex

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    vector: np.ndarray
    metadata: dict[str, Any]


class MemoryVectorIndex(VectorIndex):
    """
    In-memory vector index with exact nearest-neighbour search.

    Features:
    - Namespaces as independent partitions
    - Upsert replaces any existing entry with the same id
    - Pluggable embedder (defaults to HashingEmbedder)
    """

    def __init__(self, embedder: Embedder | None = None):
        """
        Initialize memory vector index.

        Args:
            embedder: Callable mapping text to a vector (all vectors must
                share one dimensionality)
        """
        self.embedder: Embedder = embedder or HashingEmbedder()

        # namespace -> id -> entry
        self._namespaces: dict[str, dict[str, _Entry]] = {}

        self._lock = asyncio.Lock()

    def _embed(self, text: str) -> np.ndarray:
        return np.asarray(self.embedder(text), dtype=np.float64)

    @staticmethod
    def _score(query: np.ndarray, vector: np.ndarray) -> float:
        """Normalized cosine similarity in [0, 1]."""
        denom = float(np.linalg.norm(query) * np.linalg.norm(vector))
        if denom == 0.0:
            return 0.0
        cosine = float(np.dot(query, vector)) / denom
        return min(1.0, max(0.0, (1.0 + cosine) / 2.0))

    async def query(
        self,
        text: str,
        top_k: int = 1,
        include_metadata: bool = True,
        namespace: str = "",
    ) -> list[QueryMatch]:
        """Return the top_k entries closest to ``text``."""
        query_vector = self._embed(text)

        async with self._lock:
            entries = self._namespaces.get(namespace, {})
            scored = [(self._score(query_vector, entry.vector), id_, entry) for id_, entry in entries.items()]

        scored.sort(key=lambda item: item[0], reverse=True)

        return [
            QueryMatch(
                id=id_,
                score=score,
                metadata=copy.deepcopy(entry.metadata) if include_metadata else {},
            )
            for score, id_, entry in scored[: max(0, top_k)]
        ]

    async def upsert(
        self,
        id: str,
        text: str,
        metadata: dict[str, Any],
        namespace: str = "",
    ) -> None:
        """Insert or replace an entry."""
        vector = self._embed(text)

        async with self._lock:
            entries = self._namespaces.setdefault(namespace, {})
            entries[id] = _Entry(vector=vector, metadata=copy.deepcopy(metadata))

    async def delete(self, ids: Sequence[str], namespace: str = "") -> int:
        """Delete entries by id, returning how many existed."""
        async with self._lock:
            entries = self._namespaces.get(namespace)
            if not entries:
                return 0

            count = 0
            for id_ in dict.fromkeys(ids):
                if entries.pop(id_, None) is not None:
                    count += 1
            return count

    async def reset(self, namespace: str = "") -> None:
        """Drop every entry in the namespace."""
        async with self._lock:
            size = len(self._namespaces.pop(namespace, {}))
        logger.info(f"Reset memory index namespace '{namespace}' ({size} entries removed)")

    async def count(self, namespace: str = "") -> int:
        """Number of entries stored in ``namespace``."""
        async with self._lock:
            return len(self._namespaces.get(namespace, {}))

    async def close(self) -> None:
        """Close index (nothing to release)."""
        logger.debug("Memory vector index closed")
