"""
DuckDB storage backend for embedded chunks.

Chunks live in ``vector_chunks`` with embeddings as float32 blobs (see
``codec``). The optional native index is the ``vss_vectors`` table, a
fixed-width ``FLOAT[n]`` copy of the embeddings keyed by chunk id, queried
with ``array_cosine_distance`` and optionally backed by an HNSW index from
DuckDB's ``vss`` extension.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import duckdb

from ..errors import DimensionMismatch, StoreUnavailable
from .base import (
    ChunkRecord,
    IndexedHit,
    IndexedQueryResult,
    IndexHits,
    IndexUnsupported,
    ScannedChunk,
)
from .codec import pack_embedding, unpack_embedding

logger = logging.getLogger(__name__)

NATIVE_INDEX_TABLE = "vss_vectors"


class DuckDBVectorStore:
    """DuckDB-backed chunk corpus for one project."""

    def __init__(
        self,
        db_path: str,
        *,
        read_only: bool = False,
        initialize: bool = True,
    ) -> None:
        self.db_path = str(Path(db_path).expanduser().resolve())
        self.read_only = read_only
        try:
            if not read_only:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = duckdb.connect(self.db_path, read_only=read_only)
        except (duckdb.Error, OSError) as exc:
            raise StoreUnavailable(f"Cannot open vector store at {self.db_path}: {exc}") from exc
        if initialize and not read_only:
            self.initialize()

    def close(self) -> None:
        """Close the underlying DuckDB connection."""
        self._conn.close()

    def initialize(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS vector_chunks (
                id VARCHAR PRIMARY KEY,
                relpath VARCHAR NOT NULL,
                chunk VARCHAR NOT NULL,
                embedding BLOB
            );
            """
        )

    # Read path

    def query_indexed(self, query_vector: Sequence[float], limit: int) -> IndexedQueryResult:
        """
        Rank chunks through the native index.

        Returns ``IndexUnsupported`` when DuckDB reports the index table or the
        distance function as missing. Any other error is raised to the caller.
        """
        dim = len(query_vector)
        sql = f"""
            WITH nearest AS (
                SELECT id, array_cosine_distance(embedding, ?::FLOAT[{dim}]) AS distance
                FROM {NATIVE_INDEX_TABLE}
                ORDER BY distance
                LIMIT ?
            )
            SELECT vc.id, vc.relpath, vc.chunk, nearest.distance
            FROM nearest
            JOIN vector_chunks vc ON vc.id = nearest.id
            ORDER BY nearest.distance ASC, vc.id ASC
        """
        params: list[Any] = [[float(value) for value in query_vector], limit]
        with self._conn.cursor() as cursor:
            try:
                rows = cursor.execute(sql, params).fetchall()
            except duckdb.CatalogException as exc:
                return IndexUnsupported(reason=str(exc))

        return IndexHits(
            hits=[
                IndexedHit(
                    id=str(row[0]),
                    relpath=str(row[1]),
                    chunk=str(row[2]),
                    distance=float(row[3]),
                )
                for row in rows
            ]
        )

    def scan_all(self) -> list[ScannedChunk]:
        with self._conn.cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT id, relpath, chunk, embedding
                FROM vector_chunks
                WHERE embedding IS NOT NULL
                ORDER BY id
                """
            ).fetchall()

        return [
            ScannedChunk(
                id=str(row[0]),
                relpath=str(row[1]),
                chunk=str(row[2]),
                embedding=unpack_embedding(row[3]),
            )
            for row in rows
        ]

    def count_chunks(self) -> int:
        with self._conn.cursor() as cursor:
            row = cursor.execute("SELECT COUNT(*) FROM vector_chunks").fetchone()
        return int(row[0]) if row else 0

    def has_embeddings(self) -> bool:
        with self._conn.cursor() as cursor:
            row = cursor.execute(
                "SELECT COUNT(*) FROM vector_chunks WHERE embedding IS NOT NULL"
            ).fetchone()
        return bool(row and row[0])

    def has_native_index(self) -> bool:
        """Diagnostic only; search never consults this."""
        with self._conn.cursor() as cursor:
            row = cursor.execute(
                "SELECT COUNT(*) FROM duckdb_tables() WHERE table_name = ?",
                [NATIVE_INDEX_TABLE],
            ).fetchone()
        return bool(row and row[0])

    # Write helpers for ingestion collaborators

    def upsert_chunks(self, chunks: list[ChunkRecord]) -> int:
        """Insert or replace chunks. Returns the number of rows written."""
        if not chunks:
            return 0
        self._conn.executemany(
            """
            INSERT INTO vector_chunks (id, relpath, chunk, embedding)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                relpath = excluded.relpath,
                chunk = excluded.chunk,
                embedding = excluded.embedding
            """,
            [
                (
                    chunk.id,
                    chunk.relpath,
                    chunk.text,
                    pack_embedding(chunk.embedding) if chunk.embedding is not None else None,
                )
                for chunk in chunks
            ],
        )
        return len(chunks)

    def refresh_native_index(self, *, hnsw: bool = False) -> int:
        """
        Rebuild ``vss_vectors`` from the stored embedding blobs.

        With ``hnsw=True`` an approximate HNSW index is built on top; when the
        ``vss`` extension cannot be loaded the plain table is kept and queries
        stay exact. Returns the number of vectors indexed.
        """
        chunks = self.scan_all()
        if not chunks:
            self.drop_native_index()
            logger.info("No embeddings in %s; native index dropped", self.db_path)
            return 0

        dim = len(chunks[0].embedding)
        for chunk in chunks:
            if len(chunk.embedding) != dim:
                raise DimensionMismatch(dim, len(chunk.embedding), context=f"chunk {chunk.id}")

        self._conn.begin()
        try:
            self._conn.execute(
                f"""
                CREATE OR REPLACE TABLE {NATIVE_INDEX_TABLE} (
                    id VARCHAR PRIMARY KEY,
                    embedding FLOAT[{dim}] NOT NULL
                );
                """
            )
            self._conn.executemany(
                f"INSERT INTO {NATIVE_INDEX_TABLE} (id, embedding) VALUES (?, ?::FLOAT[{dim}])",
                [(chunk.id, chunk.embedding.tolist()) for chunk in chunks],
            )
            self._conn.commit()
        except duckdb.Error:
            self._conn.rollback()
            raise

        if hnsw:
            self._create_hnsw_index()
        logger.info("Indexed %d vectors of dimension %d in %s", len(chunks), dim, self.db_path)
        return len(chunks)

    def drop_native_index(self) -> None:
        self._conn.execute(f"DROP TABLE IF EXISTS {NATIVE_INDEX_TABLE}")

    def _create_hnsw_index(self) -> None:
        try:
            self._conn.execute("LOAD vss")
            self._conn.execute("SET hnsw_enable_experimental_persistence = true")
            self._conn.execute(
                f"""
                CREATE INDEX IF NOT EXISTS {NATIVE_INDEX_TABLE}_hnsw
                ON {NATIVE_INDEX_TABLE} USING HNSW (embedding)
                WITH (metric = 'cosine')
                """
            )
        except duckdb.Error as exc:
            logger.warning("HNSW index unavailable for %s, keeping exact index: %s", self.db_path, exc)
