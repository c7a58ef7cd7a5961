"""
Vector distance helpers.

Cosine distance lies in [0, 2]; similarity is 1 - distance, in [-1, 1].

Dependencies: math (stdlib)
System role: Distance math for the in-memory vector store
"""

import math
from collections.abc import Sequence


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float | None:
    """
    Cosine distance between two vectors of equal length.

    Returns:
        float | None: 1 - cos(a, b), or None when either vector has zero norm
    """
    if len(a) != len(b):
        raise ValueError(f"Vector length mismatch: {len(a)} != {len(b)}")

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0.0 or norm_b == 0.0:
        return None

    cos = dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
    # clamp float drift so distance stays within [0, 2]
    cos = max(-1.0, min(1.0, cos))
    return 1.0 - cos


def vector_norm(vector: Sequence[float]) -> float:
    """Euclidean length of vector."""
    return math.sqrt(sum(x * x for x in vector))


def to_similarity(distance: float) -> float:
    """Convert cosine distance to similarity, clamped to [-1, 1]."""
    return max(min(1.0 - float(distance), 1.0), -1.0)
