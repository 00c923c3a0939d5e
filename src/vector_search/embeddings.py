"""
Embedding providers for vector search.

Search consumes any object implementing ``EmbeddingProvider``. The bundled
``GeminiEmbeddingProvider`` wraps the Google GenAI async embedding API with
configurable model and output dimensionality.
"""

from __future__ import annotations

import os
from typing import Any, Protocol, Sequence

from google.genai import Client as GenAIClient
from google.genai import errors as genai_errors

from .errors import EmbeddingFailed


_DEFAULT_MODEL = "gemini-embedding-001"
_DEFAULT_DIM = 768


class EmbeddingProvider(Protocol):
    """Turns a text into a fixed-length embedding vector."""

    async def get_embedding(self, text: str) -> Sequence[float]:
        """Return the embedding for *text*."""


class GeminiEmbeddingProvider:
    """Generate query embeddings via Google GenAI."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        task_type: str = "RETRIEVAL_QUERY",
        client: Any | None = None,
    ) -> None:
        self.model = model or os.getenv("VECTOR_SEARCH_EMBEDDING_MODEL", _DEFAULT_MODEL)
        self.dim = dim or int(os.getenv("VECTOR_SEARCH_EMBEDDING_DIM", str(_DEFAULT_DIM)))
        self.task_type = task_type

        if client is not None:
            self._client = client
        else:
            resolved_key = api_key or os.getenv("GOOGLE_API_KEY")
            if resolved_key is None:
                raise ValueError(
                    "GOOGLE_API_KEY not found. "
                    "Provide api_key or set the environment variable."
                )
            self._client = GenAIClient(api_key=resolved_key)

    async def get_embedding(self, text: str) -> list[float]:
        """Embed a single text. API failures are raised as ``EmbeddingFailed``."""
        try:
            result = await self._client.aio.models.embed_content(
                model=self.model,
                contents=[text],
                config={
                    "task_type": self.task_type,
                    "output_dimensionality": self.dim,
                },
            )
        except genai_errors.APIError as exc:
            raise EmbeddingFailed(f"Embedding request to {self.model} failed: {exc}") from exc

        if not result.embeddings:
            raise EmbeddingFailed(f"Embedding request to {self.model} returned no vectors")
        return list(result.embeddings[0].values)
