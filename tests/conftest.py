from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

from vector_search.storage import ChunkRecord, DuckDBVectorStore, StoreRegistry


class FakeEmbeddingProvider:
    """Returns fixed vectors per query text and records every call."""

    def __init__(self, vectors: dict[str, Sequence[float]]) -> None:
        self.vectors = vectors
        self.calls: list[str] = []

    async def get_embedding(self, text: str) -> list[float]:
        self.calls.append(text)
        return list(self.vectors[text])


_SCENARIO_CHUNKS = [
    ChunkRecord(id="chunk_a", relpath="src/auth.py", text="def login(): ...", embedding=[1.0, 0.0]),
    ChunkRecord(id="chunk_b", relpath="src/render.py", text="def draw(): ...", embedding=[0.0, 1.0]),
    ChunkRecord(id="chunk_c", relpath="src/session.py", text="def refresh(): ...", embedding=[0.9, 0.1]),
]


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def registry(monkeypatch):
    monkeypatch.delenv("VECTOR_SEARCH_DB_PATH", raising=False)
    with StoreRegistry() as reg:
        yield reg


@pytest.fixture()
def seed_store(registry: StoreRegistry) -> Callable[..., DuckDBVectorStore]:
    """Write chunks into a project's store, optionally building the native index."""

    def _seed(
        project_path: Path,
        chunks: list[ChunkRecord],
        *,
        native_index: bool = False,
    ) -> DuckDBVectorStore:
        store = registry.open_project(str(project_path))
        assert isinstance(store, DuckDBVectorStore)
        store.upsert_chunks(chunks)
        if native_index:
            store.refresh_native_index()
        return store

    return _seed


@pytest.fixture()
def query_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider(
        {
            "login flow": [1.0, 0.0],
            "nothing relevant": [-1.0, -1.0],
            "diagonal": [0.7, 0.7],
        }
    )


@pytest.fixture()
def scenario_chunks() -> list[ChunkRecord]:
    """Three chunks at [1, 0], [0, 1] and [0.9, 0.1]."""
    return list(_SCENARIO_CHUNKS)
