"""
Similarity scoring and brute-force ranking.

Every backend reports a distance; similarity is always ``1 - distance``. The
fallback path derives its distance from cosine similarity, so both backends
rank identically by ascending distance.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..errors import DimensionMismatch
from ..storage import IndexedHit, ScannedChunk


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity of two equal-length vectors, in [-1, 1].

    Computed in float64 regardless of input width. A zero vector on either
    side has similarity 0.
    """
    left = np.asarray(a, dtype=np.float64)
    right = np.asarray(b, dtype=np.float64)
    if left.shape != right.shape:
        raise DimensionMismatch(left.size, right.size)

    norm_left = float(np.linalg.norm(left))
    norm_right = float(np.linalg.norm(right))
    if norm_left == 0.0 or norm_right == 0.0:
        return 0.0
    return float(np.dot(left, right) / (norm_left * norm_right))


def distance_to_similarity(distance: float) -> float:
    return 1.0 - distance


def similarity_to_distance(similarity: float) -> float:
    return 1.0 - similarity


def rank_by_distance(
    query_vector: Sequence[float] | np.ndarray,
    chunks: list[ScannedChunk],
    *,
    limit: int,
) -> list[IndexedHit]:
    """Score every chunk against the query and keep the *limit* nearest."""
    scored: list[IndexedHit] = []
    for chunk in chunks:
        try:
            similarity = cosine_similarity(query_vector, chunk.embedding)
        except DimensionMismatch as exc:
            raise DimensionMismatch(exc.expected, exc.actual, context=f"chunk {chunk.id}") from exc
        scored.append(
            IndexedHit(
                id=chunk.id,
                relpath=chunk.relpath,
                chunk=chunk.chunk,
                distance=similarity_to_distance(similarity),
            )
        )
    # Stable sort: equal distances keep scan order.
    scored.sort(key=lambda hit: hit.distance)
    return scored[: max(limit, 0)]
