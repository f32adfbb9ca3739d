from __future__ import annotations
from typing import List
from .base import BaseSearcher, REGISTRY, SearchResult, SearchRun, register

from . import backtrack  # noqa: F401
from . import stack  # noqa: F401


def create_searcher(searcher_id: str) -> BaseSearcher:
    """
    Factory: instantiate a registered searcher by id.
    """
    try:
        cls = REGISTRY[searcher_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown solver id: {searcher_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls()


def get_searcher_ids() -> List[str]:
    """
    Return all registered searcher ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())
