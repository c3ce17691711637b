"""
semcache — Local Embeddings

Deterministic feature-hashing embedder for the in-process and Chroma
backends. Text is lowercased, split into words, and each padded word
contributes its character trigrams plus the word itself to hashed buckets.
No model download, no network; identical text always yields an identical
unit vector, and texts sharing vocabulary land close together.
"""

import hashlib
import re
from collections.abc import Callable, Sequence

import numpy as np

Embedder = Callable[[str], Sequence[float]]

_WORD_RE = re.compile(r"[a-z0-9]+")


class HashingEmbedder:
    """Character-trigram hashing embedder producing L2-normalized vectors."""

    def __init__(self, dimensions: int = 256):
        if dimensions < 1:
            raise ValueError("dimensions must be positive")
        self.dimensions = dimensions

    def _bucket(self, feature: str) -> tuple[int, float]:
        """Map a feature to a bucket index and a +/-1 sign."""
        digest = hashlib.blake2b(feature.encode("utf-8"), digest_size=8).digest()
        value = int.from_bytes(digest, "little")
        sign = 1.0 if value & 1 else -1.0
        return (value >> 1) % self.dimensions, sign

    def _features(self, text: str) -> list[str]:
        features = []
        for word in _WORD_RE.findall(text.lower()):
            features.append(f"w:{word}")
            padded = f"#{word}#"
            features.extend(padded[i : i + 3] for i in range(len(padded) - 2))
        return features

    def embed(self, text: str) -> np.ndarray:
        """Embed ``text`` into a unit vector (zero vector for empty text)."""
        vector = np.zeros(self.dimensions, dtype=np.float64)
        for feature in self._features(text):
            index, sign = self._bucket(feature)
            vector[index] += sign

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector

    def __call__(self, text: str) -> np.ndarray:
        return self.embed(text)
