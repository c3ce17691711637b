"""
semcache — Upstash Vector Index

Adapter over the hosted Upstash Vector service using the async
``upstash-vector`` client. Embedding, storage, search and persistence all
happen server-side; entries are written with raw text (``data``) and the
service embeds it.

Requires: upstash-vector

Example:
    index = UpstashVectorIndex(url="https://...upstash.io", token="...")
    await index.upsert("capital of france", "capital of france", {"value": "paris"})
    matches = await index.query("france's capital")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..interface import QueryMatch, VectorIndex

logger = logging.getLogger(__name__)

try:
    from upstash_vector import AsyncIndex, Vector
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Upstash Vector client is required but not installed. "
        "Install with: pip install 'upstash-vector>=0.6.0'"
    ) from e


class UpstashVectorIndex(VectorIndex):
    """
    Upstash Vector backend.

    Notes:
    - The default namespace is the empty string.
    - Client retries and timeouts are whatever the client is configured with.
    - Every client error is logged and re-raised unchanged.
    """

    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        client: Any | None = None,
    ) -> None:
        """
        Initialize Upstash vector index.

        Args:
            url: REST URL of the index
            token: REST token of the index
            client: Pre-built AsyncIndex (takes precedence over url/token)

        Without a client or credentials the client reads
        UPSTASH_VECTOR_REST_URL and UPSTASH_VECTOR_REST_TOKEN from the
        environment.
        """
        if client is not None:
            self._client = client
        elif url and token:
            self._client = AsyncIndex(url=url, token=token)
        else:
            self._client = AsyncIndex.from_env()

    @property
    def client(self) -> Any:
        """The underlying AsyncIndex."""
        return self._client

    async def query(
        self,
        text: str,
        top_k: int = 1,
        include_metadata: bool = True,
        namespace: str = "",
    ) -> list[QueryMatch]:
        """Similarity search against the hosted index."""
        try:
            results = await self._client.query(
                data=text,
                top_k=top_k,
                include_vectors=False,
                include_metadata=include_metadata,
                namespace=namespace,
            )
        except Exception as e:
            logger.error(
                f"Upstash query failed: {e}",
                extra={"namespace": namespace, "top_k": top_k, "error": str(e)},
                exc_info=True,
            )
            raise

        return [
            QueryMatch(
                id=str(result.id),
                score=float(result.score),
                metadata=dict(result.metadata or {}),
            )
            for result in results
        ]

    async def upsert(
        self,
        id: str,
        text: str,
        metadata: dict[str, Any],
        namespace: str = "",
    ) -> None:
        """Insert or replace an entry; the service embeds ``text``."""
        try:
            await self._client.upsert(
                vectors=[Vector(id=id, data=text, metadata=metadata)],
                namespace=namespace,
            )
        except Exception as e:
            logger.error(
                f"Upstash upsert failed for id '{id}': {e}",
                extra={"id": id, "namespace": namespace, "error": str(e)},
                exc_info=True,
            )
            raise

    async def delete(self, ids: Sequence[str], namespace: str = "") -> int:
        """Delete entries by id."""
        ids = list(ids)
        if not ids:
            return 0

        try:
            result = await self._client.delete(ids=ids, namespace=namespace)
        except Exception as e:
            logger.error(
                f"Upstash delete failed: {e}",
                extra={"id_count": len(ids), "namespace": namespace, "error": str(e)},
                exc_info=True,
            )
            raise

        return int(result.deleted)

    async def reset(self, namespace: str = "") -> None:
        """Clear every entry in the namespace."""
        try:
            await self._client.reset(namespace=namespace)
        except Exception as e:
            logger.error(
                f"Upstash reset failed: {e}",
                extra={"namespace": namespace, "error": str(e)},
                exc_info=True,
            )
            raise
        logger.info(f"Reset Upstash namespace '{namespace}'")

    async def close(self) -> None:
        """Close the httpx client the AsyncIndex sends requests through."""
        http_client = getattr(self._client, "_client", None)
        if isinstance(http_client, httpx.AsyncClient) and not http_client.is_closed:
            await http_client.aclose()
        logger.debug("Upstash vector index closed")
