"""
Registry of open per-project vector stores.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

from ..config import resolve_db_path
from ..errors import StoreUnavailable
from .base import VectorStore
from .duckdb import DuckDBVectorStore

logger = logging.getLogger(__name__)


class StoreRegistry:
    """
    Opens project stores on demand and keeps them until closed.

    One store is kept per resolved project path. Stores are safe for
    concurrent reads, so a single registry can serve many searches at once.
    Use as a context manager, or call ``close()`` on teardown.
    """

    def __init__(
        self,
        *,
        db_path: str | None = None,
        read_only: bool = False,
        store_factory: Callable[..., VectorStore] = DuckDBVectorStore,
    ) -> None:
        self._db_path = db_path
        self._read_only = read_only
        self._store_factory = store_factory
        self._stores: dict[str, VectorStore] = {}
        self._lock = threading.Lock()

    def open_project(self, project_path: str) -> VectorStore:
        """Return the store for *project_path*, opening or creating it if needed."""
        key = self._normalize(project_path)
        with self._lock:
            store = self._stores.get(key)
            if store is None:
                store = self._store_factory(
                    resolve_db_path(key, self._db_path),
                    read_only=self._read_only,
                )
                self._stores[key] = store
                logger.info("Opened vector store for %s", key)
            return store

    def close_project(self, project_path: str) -> None:
        key = str(Path(project_path).expanduser().resolve())
        with self._lock:
            store = self._stores.pop(key, None)
        if store is not None:
            store.close()
            logger.info("Closed vector store for %s", key)

    def close(self) -> None:
        with self._lock:
            stores = list(self._stores.items())
            self._stores.clear()
        for key, store in stores:
            store.close()
            logger.info("Closed vector store for %s", key)

    def __len__(self) -> int:
        return len(self._stores)

    def __enter__(self) -> "StoreRegistry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _normalize(project_path: str) -> str:
        try:
            resolved = Path(project_path).expanduser().resolve()
            is_dir = resolved.is_dir()
        except OSError as exc:
            raise StoreUnavailable(f"Cannot access project path {project_path}: {exc}") from exc
        if not is_dir:
            raise StoreUnavailable(f"Project path is not a directory: {project_path}")
        return str(resolved)
