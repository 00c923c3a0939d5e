"""
Vector similarity search over a project's embedded chunks.

The engine embeds the query, asks the project store for its native index
ranking and, when the store has no native index, scans every embedded chunk
and ranks by cosine distance instead. Both paths pick the ``limit`` nearest
candidates first and only then drop those below the similarity threshold, so
``limit`` caps the candidate pool rather than the number of results.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import BaseModel, Field

from ..config import default_limit, default_similarity_threshold
from ..embeddings import EmbeddingProvider
from ..errors import SearchFailed, VectorSearchError
from ..storage import IndexedHit, IndexHits, StoreRegistry, VectorStore
from .aggregate import unique_relpaths
from .scoring import distance_to_similarity, rank_by_distance

logger = logging.getLogger(__name__)


class SearchQuery(BaseModel):
    """Parameters of one search call."""

    project_path: str
    query_text: str
    limit: int = Field(default_factory=default_limit, gt=0)
    similarity_threshold: float = Field(default_factory=default_similarity_threshold)


@dataclass(frozen=True)
class SearchResult:
    """A chunk that passed the similarity threshold."""

    chunk_id: str
    relpath: str
    chunk: str
    similarity: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "relpath": self.relpath,
            "chunk": self.chunk,
            "similarity": self.similarity,
            "chunkId": self.chunk_id,
        }


class SearchEngine:
    """Embed a query and rank a project's chunks against it."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        registry: StoreRegistry,
    ) -> None:
        self.embedding_provider = embedding_provider
        self.registry = registry

    async def search(self, query: SearchQuery) -> list[SearchResult]:
        """Return chunks ordered by descending similarity, all at or above the threshold."""
        query_vector = await self.embedding_provider.get_embedding(query.query_text)
        store = await asyncio.to_thread(self.registry.open_project, query.project_path)

        try:
            candidates = await asyncio.to_thread(
                self._nearest, store, query_vector, query.limit, query.project_path
            )
        except VectorSearchError:
            raise
        except Exception as exc:
            raise SearchFailed(exc) from exc

        results = [
            SearchResult(
                chunk_id=hit.id,
                relpath=hit.relpath,
                chunk=hit.chunk,
                similarity=distance_to_similarity(hit.distance),
            )
            for hit in candidates
        ]
        passing = [result for result in results if result.similarity >= query.similarity_threshold]
        logger.debug(
            "Search in %s: %d candidates, %d at or above %.3f",
            query.project_path,
            len(results),
            len(passing),
            query.similarity_threshold,
        )
        return passing

    async def related_files(self, query: SearchQuery) -> list[str]:
        """Return the distinct files with at least one passing chunk."""
        return unique_relpaths(await self.search(query))

    @staticmethod
    def _nearest(
        store: VectorStore,
        query_vector: Sequence[float],
        limit: int,
        project_path: str,
    ) -> list[IndexedHit]:
        outcome = store.query_indexed(query_vector, limit)
        if isinstance(outcome, IndexHits):
            return outcome.hits

        logger.warning(
            "Native vector search unavailable for %s, using full scan: %s",
            project_path,
            outcome.reason,
        )
        return rank_by_distance(query_vector, store.scan_all(), limit=limit)


async def search(
    project_path: str,
    query_text: str,
    embedding_provider: EmbeddingProvider,
    limit: int | None = None,
    similarity_threshold: float | None = None,
    *,
    registry: StoreRegistry | None = None,
) -> list[SearchResult]:
    """
    Search a project's chunks for *query_text*.

    Without a registry, the project store is opened for this call only and
    closed afterwards.
    """
    query = _build_query(project_path, query_text, limit, similarity_threshold)
    if registry is not None:
        return await SearchEngine(embedding_provider, registry).search(query)
    with StoreRegistry() as scoped_registry:
        return await SearchEngine(embedding_provider, scoped_registry).search(query)


async def related_files(
    project_path: str,
    query_text: str,
    embedding_provider: EmbeddingProvider,
    limit: int | None = None,
    similarity_threshold: float | None = None,
    *,
    registry: StoreRegistry | None = None,
) -> list[str]:
    """Search a project and return the distinct relpaths of the passing chunks."""
    results = await search(
        project_path,
        query_text,
        embedding_provider,
        limit,
        similarity_threshold,
        registry=registry,
    )
    return unique_relpaths(results)


def _build_query(
    project_path: str,
    query_text: str,
    limit: int | None,
    similarity_threshold: float | None,
) -> SearchQuery:
    overrides: dict[str, Any] = {}
    if limit is not None:
        overrides["limit"] = limit
    if similarity_threshold is not None:
        overrides["similarity_threshold"] = similarity_threshold
    return SearchQuery(project_path=project_path, query_text=query_text, **overrides)
