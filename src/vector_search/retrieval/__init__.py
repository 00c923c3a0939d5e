"""Ranked retrieval over embedded chunk corpora."""

from .aggregate import unique_relpaths
from .engine import SearchEngine, SearchQuery, SearchResult, related_files, search
from .scoring import (
    cosine_similarity,
    distance_to_similarity,
    rank_by_distance,
    similarity_to_distance,
)

__all__ = [
    "unique_relpaths",
    "SearchEngine",
    "SearchQuery",
    "SearchResult",
    "related_files",
    "search",
    "cosine_similarity",
    "distance_to_similarity",
    "rank_by_distance",
    "similarity_to_distance",
]
