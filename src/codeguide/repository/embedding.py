"""Deterministic hash-based embedding and cosine similarity.

The embedding is a placeholder, not a semantic model: it spreads a rolling
hash of the text across a fixed number of dimensions. Anything with the same
``(text, dimensions) -> list[float]`` signature can replace it.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

DEFAULT_DIMENSIONS = 384

_HASH_MOD = 2**32
_HASH_BASE = 31

Embedder = Callable[[str, int], list[float]]


def hash_embedding(text: str, dimensions: int = DEFAULT_DIMENSIONS) -> list[float]:
    """Embed ``text`` into ``dimensions`` floats. Empty text gives the zero vector."""
    if dimensions < 1:
        raise ValueError(f"dimensions must be positive, got {dimensions}")
    vector = [0.0] * dimensions
    h = 0
    for i, ch in enumerate(text.lower()):
        h = (h * _HASH_BASE + ord(ch)) % _HASH_MOD
        vector[i % dimensions] += h / _HASH_MOD
    return vector


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between ``a`` and ``b``; 0.0 if either has zero norm."""
    if len(a) != len(b):
        raise ValueError(f"vector length mismatch: {len(a)} != {len(b)}")
    norm_a = math.sqrt(math.fsum(x * x for x in a))
    norm_b = math.sqrt(math.fsum(y * y for y in b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    dot = math.fsum(x * y for x, y in zip(a, b, strict=True))
    return dot / (norm_a * norm_b)
