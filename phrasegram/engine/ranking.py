"""
Scored results and the final ranking step.

rank() orders by descending score and breaks ties by canonical signature, so
output is reproducible regardless of the order results were discovered in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .scoring import score_sequence
from .signature import canonical_signature


@dataclass(frozen=True)
class ScoredResult:
    """One accepted answer: the words in emission order plus its score."""
    words: Tuple[str, ...]
    score: float

    @property
    def signature(self) -> str:
        return canonical_signature(self.words)

    @property
    def text(self) -> str:
        return " ".join(self.words)


def score_result(words: Iterable[str]) -> ScoredResult:
    words = tuple(words)
    return ScoredResult(words=words, score=score_sequence(words))


def _rank_key(r: ScoredResult):
    return (-r.score, r.signature)


def rank(results: Iterable[ScoredResult], limit: int | None = None) -> List[ScoredResult]:
    """
    Sort by descending score (ties: ascending signature) and keep the first `limit`.

    `limit=None` keeps everything. The input is not modified.
    """
    ordered = sorted(results, key=_rank_key)
    if limit is None:
        return ordered
    return ordered[: max(0, int(limit))]
