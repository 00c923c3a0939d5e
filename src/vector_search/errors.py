"""
Error types raised by vector search.
"""

from __future__ import annotations


class VectorSearchError(Exception):
    """Base class for vector search failures."""


class EmbeddingFailed(VectorSearchError):
    """Raised when the embedding provider cannot embed a text."""


class DimensionMismatch(VectorSearchError, ValueError):
    """Raised when two embeddings that must be compared differ in length."""

    def __init__(self, expected: int, actual: int, *, context: str = "") -> None:
        self.expected = expected
        self.actual = actual
        message = f"Embedding dimension mismatch: expected {expected}, got {actual}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class StoreUnavailable(VectorSearchError):
    """Raised when a project's vector store cannot be opened."""


class SearchFailed(VectorSearchError):
    """Raised when the store fails during a search for any reason other than a missing native index."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Vector search failed: {cause}")
