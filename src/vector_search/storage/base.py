"""
Storage interfaces and data models for embedded chunk corpora.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

import numpy as np


@dataclass(frozen=True)
class ChunkRecord:
    """A text chunk of a project file, with its embedding if one was computed."""

    id: str
    relpath: str
    text: str
    embedding: Sequence[float] | None = None


@dataclass(frozen=True)
class IndexedHit:
    """A chunk ranked by distance to a query vector."""

    id: str
    relpath: str
    chunk: str
    distance: float


@dataclass(frozen=True)
class ScannedChunk:
    """A chunk read by a full scan, embedding decoded to a float32 vector."""

    id: str
    relpath: str
    chunk: str
    embedding: np.ndarray


@dataclass(frozen=True)
class IndexHits:
    """The native index answered the query."""

    hits: list[IndexedHit]


@dataclass(frozen=True)
class IndexUnsupported:
    """The store has no usable native index; callers should scan instead."""

    reason: str


IndexedQueryResult = Union[IndexHits, IndexUnsupported]


class VectorStore(Protocol):
    """Read-side protocol for a single project's chunk corpus."""

    def query_indexed(self, query_vector: Sequence[float], limit: int) -> IndexedQueryResult:
        """Return the nearest *limit* chunks by ascending distance, or IndexUnsupported."""

    def scan_all(self) -> list[ScannedChunk]:
        """Return every chunk that has an embedding."""

    def close(self) -> None:
        """Release the underlying connection."""
