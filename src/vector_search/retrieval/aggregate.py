"""
Reduce ranked chunk hits to the files they came from.
"""

from __future__ import annotations

from typing import Iterable, Protocol


class _HasRelpath(Protocol):
    relpath: str


def unique_relpaths(results: Iterable[_HasRelpath]) -> list[str]:
    """
    Return each relpath in *results* exactly once.

    Paths come out in order of their best-ranked hit, but callers should only
    rely on uniqueness.
    """
    return list(dict.fromkeys(result.relpath for result in results))
