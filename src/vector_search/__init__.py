"""
vector_search - semantic retrieval of project chunks by embedding similarity.

Chunks and their embeddings live in a per-project DuckDB store. A search
embeds the query, ranks chunks through the store's native vector index when
it has one and by brute-force cosine similarity when it does not, then keeps
the hits at or above a similarity threshold.

Example usage:
    >>> from vector_search import GeminiEmbeddingProvider, related_files, search
    >>> provider = GeminiEmbeddingProvider()
    >>> hits = await search("/path/to/project", "where are retries configured?", provider)
    >>> files = await related_files("/path/to/project", "retry policy", provider, limit=20)
"""

from .embeddings import EmbeddingProvider, GeminiEmbeddingProvider
from .errors import (
    DimensionMismatch,
    EmbeddingFailed,
    SearchFailed,
    StoreUnavailable,
    VectorSearchError,
)
from .retrieval import (
    SearchEngine,
    SearchQuery,
    SearchResult,
    cosine_similarity,
    related_files,
    search,
    unique_relpaths,
)
from .storage import ChunkRecord, DuckDBVectorStore, IndexUnsupported, StoreRegistry

__all__ = [
    # Embeddings
    "EmbeddingProvider",
    "GeminiEmbeddingProvider",
    # Errors
    "DimensionMismatch",
    "EmbeddingFailed",
    "SearchFailed",
    "StoreUnavailable",
    "VectorSearchError",
    # Search
    "SearchEngine",
    "SearchQuery",
    "SearchResult",
    "cosine_similarity",
    "related_files",
    "search",
    "unique_relpaths",
    # Storage
    "ChunkRecord",
    "DuckDBVectorStore",
    "IndexUnsupported",
    "StoreRegistry",
]
