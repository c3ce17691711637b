"""
semcache — Chroma Vector Index

Embedded vector index backed by ChromaDB. Each namespace maps to its own
collection in cosine space. Cosine distance d = 1 - cos is reported as
``1 - d / 2``, the same [0, 1] scale as the other backends: (1 + cos) / 2.

Chroma's client is synchronous, so calls run in a worker thread.

Embeddings come from Chroma's default embedding function unless an
embedder callable is supplied, in which case vectors are computed locally
and passed to Chroma directly.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from ..embeddings import Embedder
from ..interface import QueryMatch, VectorIndex

logger = logging.getLogger(__name__)

try:
    import chromadb
    from chromadb.config import Settings
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "chromadb is required for the chroma backend but not installed. "
        "Install with: pip install 'semcache[chroma]'"
    ) from e


class ChromaVectorIndex(VectorIndex):
    """ChromaDB backend with one collection per namespace."""

    def __init__(
        self,
        collection_name: str = "semcache",
        persist_directory: str | None = None,
        embedder: Embedder | None = None,
        client: Any | None = None,
    ):
        """
        Initialize Chroma vector index.

        Args:
            collection_name: Collection name (namespaces are appended to it)
            persist_directory: Directory for persistence (None = in-memory client)
            embedder: Optional local embedder; Chroma's default is used otherwise
            client: Pre-built Chroma client (takes precedence over persist_directory)
        """
        self.collection_name = collection_name
        self.embedder = embedder

        if client is not None:
            self._client = client
        elif persist_directory:
            logger.info(f"Initializing ChromaDB at {persist_directory}")
            self._client = chromadb.PersistentClient(
                path=persist_directory,
                settings=Settings(anonymized_telemetry=False),
            )
        else:
            self._client = chromadb.EphemeralClient(settings=Settings(anonymized_telemetry=False))

        self._collections: dict[str, Any] = {}

    def _name_for(self, namespace: str) -> str:
        return f"{self.collection_name}-{namespace}" if namespace else self.collection_name

    def _collection(self, namespace: str) -> Any:
        """Get or create the collection backing ``namespace``."""
        collection = self._collections.get(namespace)
        if collection is None:
            collection = self._client.get_or_create_collection(
                name=self._name_for(namespace),
                metadata={"hnsw:space": "cosine"},
            )
            self._collections[namespace] = collection
        return collection

    def _embed(self, text: str) -> list[float]:
        """Vector for ``text`` from the injected embedder (callers check it is set)."""
        return [float(x) for x in self.embedder(text)]

    def _query_sync(self, text: str, top_k: int, include_metadata: bool, namespace: str) -> list[QueryMatch]:
        collection = self._collection(namespace)
        if collection.count() == 0:
            return []

        include = ["distances", "metadatas"] if include_metadata else ["distances"]
        n_results = min(top_k, collection.count())
        if self.embedder is not None:
            results = collection.query(
                query_embeddings=[self._embed(text)],
                n_results=n_results,
                include=include,
            )
        else:
            results = collection.query(query_texts=[text], n_results=n_results, include=include)

        if not results["ids"] or not results["ids"][0]:
            return []

        ids = results["ids"][0]
        distances = results["distances"][0]
        metadatas = results["metadatas"][0] if include_metadata else [None] * len(ids)

        return [
            QueryMatch(
                id=entry_id,
                score=max(0.0, min(1.0, 1.0 - float(distance) / 2.0)),
                metadata=dict(metadata or {}),
            )
            for entry_id, distance, metadata in zip(ids, distances, metadatas)
        ]

    def _upsert_sync(self, id: str, text: str, metadata: dict[str, Any], namespace: str) -> None:
        collection = self._collection(namespace)
        if self.embedder is not None:
            collection.upsert(ids=[id], embeddings=[self._embed(text)], documents=[text], metadatas=[metadata])
        else:
            collection.upsert(ids=[id], documents=[text], metadatas=[metadata])

    def _delete_sync(self, ids: list[str], namespace: str) -> int:
        collection = self._collection(namespace)
        existing = collection.get(ids=ids)["ids"]
        if existing:
            collection.delete(ids=existing)
        return len(existing)

    def _reset_sync(self, namespace: str) -> None:
        name = self._name_for(namespace)
        # delete_collection raises for a collection that was never created
        self._collection(namespace)
        self._collections.pop(namespace, None)
        self._client.delete_collection(name=name)
        self._collection(namespace)

    async def query(
        self,
        text: str,
        top_k: int = 1,
        include_metadata: bool = True,
        namespace: str = "",
    ) -> list[QueryMatch]:
        """Similarity search in the namespace's collection."""
        return await asyncio.to_thread(self._query_sync, text, top_k, include_metadata, namespace)

    async def upsert(
        self,
        id: str,
        text: str,
        metadata: dict[str, Any],
        namespace: str = "",
    ) -> None:
        """Insert or replace an entry."""
        await asyncio.to_thread(self._upsert_sync, id, text, metadata, namespace)

    async def delete(self, ids: Sequence[str], namespace: str = "") -> int:
        """Delete entries by id, returning how many existed."""
        ids = list(dict.fromkeys(ids))
        if not ids:
            return 0
        return await asyncio.to_thread(self._delete_sync, ids, namespace)

    async def reset(self, namespace: str = "") -> None:
        """Drop and recreate the namespace's collection."""
        await asyncio.to_thread(self._reset_sync, namespace)
        logger.info(f"Chroma collection '{self._name_for(namespace)}' reset")

    async def close(self) -> None:
        """Forget cached collection handles."""
        self._collections.clear()
        logger.debug("Chroma vector index closed")
