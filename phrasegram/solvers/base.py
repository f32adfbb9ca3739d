from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Type

import numpy as np

from phrasegram.datasets.index import CandidateView, DictionaryIndex
from phrasegram.engine.letters import FREQ_DTYPE, letter_count
from phrasegram.engine.signature import SignatureSet

logger = logging.getLogger(__name__)

# ---- Global searcher registry ----
REGISTRY: Dict[str, Type["BaseSearcher"]] = {}

# stop reasons reported in SearchResult.stop_reason
STOP_MAX_SOLUTIONS = "max_solutions"
STOP_MAX_NODES = "max_nodes"
STOP_TIME_LIMIT = "time_limit"


def register(cls: Type["BaseSearcher"]) -> Type["BaseSearcher"]:
    """
    Decorator: @register on a searcher class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate searcher id: {sid}")
    REGISTRY[sid] = cls
    return cls


@dataclass
class SearchResult:
    """Accepted (deduplicated) sequences in emission order, plus run stats."""
    sequences: List[Tuple[str, ...]]
    nodes: int = 0
    candidates: int = 0
    stop_reason: str | None = None   # None = search space exhausted

    @property
    def complete(self) -> bool:
        return self.stop_reason is None


@dataclass
class SearchRun:
    """
    All mutable state of ONE search invocation.

    Nothing here is shared between calls: each search builds a fresh run,
    so concurrent queries over the same index cannot interfere.
    """
    max_solutions: int
    max_nodes: int | None = None
    deadline: float | None = None        # time.perf_counter() value
    seen: SignatureSet = field(default_factory=SignatureSet)
    solutions: List[Tuple[str, ...]] = field(default_factory=list)
    nodes: int = 0
    stop_reason: str | None = None

    @property
    def stopped(self) -> bool:
        return self.stop_reason is not None

    def emit(self, words: List[str]) -> None:
        """Offer a complete sequence; kept only if its word multiset is new."""
        if self.stopped:
            return
        if self.seen.is_new_signature(words):
            self.solutions.append(tuple(words))
            if len(self.solutions) >= self.max_solutions:
                self.stop_reason = STOP_MAX_SOLUTIONS

    def visit(self) -> bool:
        """Count one expanded node; False once a cost bound has been hit."""
        if self.stopped:
            return False
        self.nodes += 1
        if self.max_nodes is not None and self.nodes > self.max_nodes:
            self.stop_reason = STOP_MAX_NODES
            return False
        if self.deadline is not None and time.perf_counter() > self.deadline:
            self.stop_reason = STOP_TIME_LIMIT
            return False
        return True


# ---- Base class that searchers inherit ----
class BaseSearcher:
    """
    Enumerates word sequences whose letters exactly cover a phrase.

    Subclasses implement `_explore`; this class owns the shared contract:
    narrowing the index, creating the per-call run state, the empty-phrase
    policy (zero letters -> no results) and result packaging.
    """
    id = "base"
    name = "Base"
    version = "0.0.0"

    def search(
            self,
            phrase_freq: np.ndarray,
            source: DictionaryIndex | CandidateView,
            *,
            max_solutions: int,
            max_words: int,
            allow_repeats: bool = True,
            max_nodes: int | None = None,
            time_limit: float | None = None,
    ) -> SearchResult:
        """
        Args:
          phrase_freq   : frequency vector of the normalized phrase
          source        : full index (narrowed here) or an already-narrowed view
          max_solutions : stop after this many accepted sequences
          max_words     : longest sequence considered
          allow_repeats : may one word appear several times in a sequence?
          max_nodes     : optional node-visit budget
          time_limit    : optional wall-clock budget in seconds
        """
        view = source.candidates_for(phrase_freq) if isinstance(source, DictionaryIndex) else source
        remaining = letter_count(phrase_freq)
        if remaining == 0 or len(view) == 0:
            return SearchResult(sequences=[], nodes=0, candidates=len(view))

        deadline = None if time_limit is None else time.perf_counter() + time_limit
        run = SearchRun(max_solutions=max_solutions, max_nodes=max_nodes, deadline=deadline)

        # private, writable copy: the search decrements it in place
        budget = np.array(phrase_freq, dtype=FREQ_DTYPE, copy=True)
        step = 0 if allow_repeats else 1
        self._explore(run, view, budget, remaining, max_words, step)

        if run.stop_reason in (STOP_MAX_NODES, STOP_TIME_LIMIT):
            logger.warning("%s search stopped early (%s) after %d nodes; returning %d partial results",
                           self.id, run.stop_reason, run.nodes, len(run.solutions))
        return SearchResult(sequences=run.solutions, nodes=run.nodes,
                            candidates=len(view), stop_reason=run.stop_reason)

    def _explore(self, run: SearchRun, view: CandidateView, budget: np.ndarray,
                 remaining: int, max_words: int, step: int) -> None:
        raise NotImplementedError("Override in subclass")
