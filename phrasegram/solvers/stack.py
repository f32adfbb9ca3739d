"""
Explicit-stack Searcher.

Same enumeration as the recursive searcher (same candidates, same order, same
accepted sequences) but the call stack is replaced by a list of SearchFrame
objects. Each frame holds the candidate positions that fit at its depth and a
cursor into them, so the whole search state is an inspectable structure and
the cost bounds are checked between frames rather than inside deep recursion.

Useful when max_words is large enough that recursion depth matters, or when a
caller wants to reason about where a bounded search stopped.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

import numpy as np

from phrasegram.datasets.index import CandidateView
from .base import BaseSearcher, SearchRun, register

_NONE = np.zeros(0, dtype=np.intp)


@dataclass
class SearchFrame:
    order: np.ndarray      # candidate positions fitting the budget at this depth
    cursor: int = 0        # next entry of `order` to try
    chosen: int = -1       # position currently applied to the budget (-1: none)


@register
class StackSearcher(BaseSearcher):
    id = "stack"
    name = "Explicit-stack backtracking"
    version = "1.0.0"

    @staticmethod
    def _open(view: CandidateView, budget: np.ndarray, remaining: int, start: int,
              depth: int, max_words: int) -> SearchFrame:
        """Frame for a node; empty when the node is pruned."""
        if depth >= max_words:
            return SearchFrame(order=_NONE)
        shortest = view.shortest_from(start)
        if shortest is None or remaining < shortest:
            return SearchFrame(order=_NONE)
        return SearchFrame(order=view.fitting(budget, remaining, start))

    def _explore(self, run: SearchRun, view: CandidateView, budget: np.ndarray,
                 remaining: int, max_words: int, step: int) -> None:
        partial: List[str] = []
        if not run.visit():
            return
        stack: List[SearchFrame] = [self._open(view, budget, remaining, 0, 0, max_words)]

        while stack and not run.stopped:
            frame = stack[-1]

            # undo the previous choice made at this depth
            if frame.chosen >= 0:
                budget += view.freqs[frame.chosen]
                remaining += int(view.lengths[frame.chosen])
                partial.pop()
                frame.chosen = -1

            if frame.cursor >= len(frame.order):
                stack.pop()
                continue

            i = int(frame.order[frame.cursor])
            frame.cursor += 1
            budget -= view.freqs[i]
            remaining -= int(view.lengths[i])
            partial.append(view.words[i])
            frame.chosen = i

            if remaining == 0:
                run.emit(partial)
                continue
            if not run.visit():
                break
            stack.append(self._open(view, budget, remaining, i + step, len(partial), max_words))
