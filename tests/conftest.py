"""
semcache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import math
import os
from collections.abc import Generator, Sequence

import pytest

from semcache import SemanticCache
from semcache.index.backends.memory import MemoryVectorIndex

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

PROXIMITY_THRESHOLD = 0.9

CONFIG_ENV_VARS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "INDEX_BACKEND",
    "VECTOR_URL",
    "VECTOR_TOKEN",
    "UPSTASH_VECTOR_REST_URL",
    "UPSTASH_VECTOR_REST_TOKEN",
    "EMBEDDING_DIMENSIONS",
    "CHROMA_PERSIST_DIRECTORY",
    "CHROMA_COLLECTION",
    "MIN_PROXIMITY",
    "CACHE_NAMESPACE",
)


def unit(*components: float) -> list[float]:
    """Normalize a vector to unit length."""
    norm = math.sqrt(sum(c * c for c in components))
    return [c / norm for c in components]


# Fixed vectors so every similarity score in the tests is known exactly.
# Hosted-index normalization: score = (1 + cos) / 2.
#   same axis -> 1.0, cos 0.9 -> 0.95, orthogonal -> 0.5
STATIC_VECTORS: dict[str, list[float]] = {
    # France
    "capital of france": [1.0, 0.0, 0.0, 0.0],
    "france's capital": [0.9, math.sqrt(0.19), 0.0, 0.0],
    # Hot-day drinks
    "best drink on a hot day": [0.0, 0.0, 1.0, 0.0],
    "what to drink when it's hot": [0.0, 0.0, 0.9, math.sqrt(0.19)],
    # Water chemistry
    "chemical formula for water": [0.0, 0.0, 0.0, 1.0],
    "what is water's chemical formula": [0.0, 0.0, math.sqrt(0.19), 0.9],
}


class StaticEmbedder:
    """Embedder returning fixed vectors; unknown text maps to the zero vector."""

    def __init__(self, vectors: dict[str, Sequence[float]] | None = None, dimensions: int = 4):
        self.vectors = dict(vectors if vectors is not None else STATIC_VECTORS)
        self.dimensions = dimensions
        self.calls: list[str] = []

    def __call__(self, text: str) -> Sequence[float]:
        self.calls.append(text)
        return self.vectors.get(text, [0.0] * self.dimensions)


@pytest.fixture
def static_embedder() -> StaticEmbedder:
    """Embedder with the fixed test vectors."""
    return StaticEmbedder()


@pytest.fixture
def memory_index(static_embedder: StaticEmbedder) -> MemoryVectorIndex:
    """In-process vector index using the fixed test vectors."""
    return MemoryVectorIndex(embedder=static_embedder)


@pytest.fixture
def cache(memory_index: MemoryVectorIndex) -> SemanticCache:
    """Semantic cache over the in-process index with the default threshold."""
    return SemanticCache(index=memory_index, min_proximity=PROXIMITY_THRESHOLD)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every configuration variable and the loaded config singleton."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("semcache.config.loader._config_instance", None)


@pytest.fixture(autouse=True)
def reset_index_factory() -> Generator[None, None, None]:
    """Reset index factory after each test to prevent state leakage."""
    yield
    from semcache.index.factory import reset_index_factory

    reset_index_factory()
