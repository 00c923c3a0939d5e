"""
Serialization of embedding vectors to and from BLOB columns.

An embedding blob is a headerless run of IEEE-754 float32 values in
little-endian byte order (numpy dtype ``<f4``). Writers and readers must both
go through this module; reading a blob with any other element width or byte
order silently yields garbage vectors.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


EMBEDDING_DTYPE = np.dtype("<f4")


def pack_embedding(embedding: Sequence[float] | np.ndarray) -> bytes:
    """Encode an embedding as a float32 little-endian blob."""
    return np.asarray(embedding, dtype=EMBEDDING_DTYPE).tobytes()


def unpack_embedding(blob: bytes | bytearray | memoryview) -> np.ndarray:
    """Decode a float32 little-endian blob into a native float32 vector."""
    raw = bytes(blob)
    if len(raw) % EMBEDDING_DTYPE.itemsize:
        raise ValueError(
            f"Embedding blob of {len(raw)} bytes is not a whole number of float32 values."
        )
    # frombuffer returns a read-only view over `raw`; astype copies into native order.
    return np.frombuffer(raw, dtype=EMBEDDING_DTYPE).astype(np.float32)
