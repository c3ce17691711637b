"""
semcache — Vector Index Interface

Defines the capability set the semantic cache needs from a vector
similarity index: query, upsert, delete and reset. Embedding, storage and
nearest-neighbour search all live behind this interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueryMatch:
    """A single candidate returned by a similarity query."""

    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)


class VectorIndex(ABC):
    """
    Abstract base class for vector index backends.

    ``namespace`` is threaded through every call. The empty string selects
    the index's default namespace. Entries in different namespaces are
    invisible to each other.

    Implementations must let client errors propagate to the caller.
    """

    @abstractmethod
    async def query(
        self,
        text: str,
        top_k: int = 1,
        include_metadata: bool = True,
        namespace: str = "",
    ) -> list[QueryMatch]:
        """
        Similarity search for the entries closest to ``text``.

        Args:
            text: Query text (embedded by the backend)
            top_k: Maximum number of candidates to return
            include_metadata: Whether to return each candidate's metadata
            namespace: Namespace to search

        Returns:
            Candidates ranked by descending score in [0, 1]
        """
        pass

    @abstractmethod
    async def upsert(
        self,
        id: str,
        text: str,
        metadata: dict[str, Any],
        namespace: str = "",
    ) -> None:
        """
        Insert or replace the entry identified by ``id``.

        Args:
            id: Entry identifier
            text: Text the backend embeds for this entry
            metadata: Opaque payload stored with the entry
            namespace: Namespace to write to
        """
        pass

    @abstractmethod
    async def delete(self, ids: Sequence[str], namespace: str = "") -> int:
        """
        Remove entries by identifier.

        Args:
            ids: Entry identifiers
            namespace: Namespace to delete from

        Returns:
            Number of entries actually removed (missing ids are not errors)
        """
        pass

    @abstractmethod
    async def reset(self, namespace: str = "") -> None:
        """
        Remove every entry in ``namespace``.

        Args:
            namespace: Namespace to clear
        """
        pass

    async def close(self) -> None:
        """
        Release client resources.

        Default implementation does nothing. Backends holding connections
        override it.
        """
        return None
