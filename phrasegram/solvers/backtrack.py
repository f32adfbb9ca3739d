"""
Backtracking Searcher (recursive).

Idea:
  - The budget starts as the phrase's letter counts. At each level, try every
    candidate word (at or after the previous choice) that still fits; subtract
    it, recurse, add it back.
  - A budget of all zeros is a complete answer.

Pruning:
  - Only move forward through the index (start = i, or i + 1 without
    repeats). Each multiset of words is therefore generated in exactly one
    order, which is the main cut of the search space.
  - Per node, candidates are filtered in one vectorised pass
    (CandidateView.fitting) instead of word by word.
  - A branch whose remaining letters are fewer than the shortest word still
    reachable from `start` is dropped without scanning.
  - Depth is bounded by max_words, so recursion depth is too. When that
    bound (or the phrase length) would come near the interpreter recursion
    limit, the same enumeration runs on the explicit-stack searcher instead.
"""

from __future__ import annotations
import logging
import sys
from typing import List

import numpy as np

from phrasegram.datasets.index import CandidateView
from .base import BaseSearcher, SearchRun, register
from .stack import StackSearcher

logger = logging.getLogger(__name__)

# frames kept free for callers above the search
RECURSION_HEADROOM = 200


@register
class BacktrackSearcher(BaseSearcher):
    id = "backtrack"
    name = "Recursive backtracking"
    version = "1.0.0"

    def _explore(self, run: SearchRun, view: CandidateView, budget: np.ndarray,
                 remaining: int, max_words: int, step: int) -> None:
        depth = min(max_words, remaining)
        if depth > sys.getrecursionlimit() - RECURSION_HEADROOM:
            logger.debug("depth bound %d too deep for recursion; using the stack searcher", depth)
            StackSearcher()._explore(run, view, budget, remaining, max_words, step)
            return
        partial: List[str] = []
        self._descend(run, view, budget, remaining, 0, partial, max_words, step)

    def _descend(self, run: SearchRun, view: CandidateView, budget: np.ndarray, remaining: int,
                 start: int, partial: List[str], max_words: int, step: int) -> None:
        if remaining == 0:
            run.emit(partial)
            return

        if not run.visit():
            return
        if len(partial) >= max_words:
            return
        shortest = view.shortest_from(start)
        if shortest is None or remaining < shortest:
            return

        for i in view.fitting(budget, remaining, start):
            if run.stopped:
                return
            i = int(i)
            word_freq = view.freqs[i]
            budget -= word_freq
            partial.append(view.words[i])

            self._descend(run, view, budget, remaining - int(view.lengths[i]),
                          i + step, partial, max_words, step)

            # undo
            partial.pop()
            budget += word_freq
