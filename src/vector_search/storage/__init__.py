"""Storage backends for embedded chunk corpora."""

from .base import (
    ChunkRecord,
    IndexedHit,
    IndexedQueryResult,
    IndexHits,
    IndexUnsupported,
    ScannedChunk,
    VectorStore,
)
from .codec import pack_embedding, unpack_embedding
from .duckdb import DuckDBVectorStore
from .registry import StoreRegistry

__all__ = [
    "ChunkRecord",
    "IndexedHit",
    "IndexedQueryResult",
    "IndexHits",
    "IndexUnsupported",
    "ScannedChunk",
    "VectorStore",
    "pack_embedding",
    "unpack_embedding",
    "DuckDBVectorStore",
    "StoreRegistry",
]
