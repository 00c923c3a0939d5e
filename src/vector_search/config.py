"""
Configuration helpers for per-project vector stores and search defaults.
"""

from __future__ import annotations

import os
from pathlib import Path


STORE_DIRNAME = ".vector_search"
STORE_FILENAME = "vectors.duckdb"
ENV_DB_PATH = "VECTOR_SEARCH_DB_PATH"

ENV_LIMIT = "VECTOR_SEARCH_LIMIT"
ENV_SIMILARITY_THRESHOLD = "VECTOR_SEARCH_SIMILARITY_THRESHOLD"
DEFAULT_LIMIT = 10
DEFAULT_SIMILARITY_THRESHOLD = 0.7


def resolve_db_path(project_path: str, override_path: str | None = None) -> str:
    """
    Resolve the DuckDB path holding a project's chunks.

    Precedence:
    1) explicit override_path
    2) VECTOR_SEARCH_DB_PATH
    3) <project_path>/.vector_search/vectors.duckdb
    """
    raw_path = override_path or os.getenv(ENV_DB_PATH)
    if raw_path:
        return str(Path(raw_path).expanduser().resolve())
    project_root = Path(project_path).expanduser().resolve()
    return str(project_root / STORE_DIRNAME / STORE_FILENAME)


def default_limit() -> int:
    return int(os.getenv(ENV_LIMIT, str(DEFAULT_LIMIT)))


def default_similarity_threshold() -> float:
    return float(os.getenv(ENV_SIMILARITY_THRESHOLD, str(DEFAULT_SIMILARITY_THRESHOLD)))
