"""
Solve pipeline primitives.

- solve:        phrase -> ranked ScoredResults (the presentation-facing call).
- solve_report: same pipeline, plus the numbers behind it (letters,
                candidates, nodes, stop reason, elapsed time).
- solve_batch:  many phrases against one index.

Pipeline per phrase:
  frequency_of(phrase) -> index.candidates_for -> searcher.search
  (dedup gate inside the search run) -> score_result -> rank

These functions are UI-agnostic so they can be reused by the CLI app, a
notebook, or a service without changes. The index is only read, so one index
may serve any number of calls.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from phrasegram.datasets.index import DictionaryIndex
from phrasegram.engine import (
    ScoredResult, SolveOptions, coerce_options, frequency_of, letter_count, rank, score_result,
)
from phrasegram.solvers import create_searcher

logger = logging.getLogger(__name__)

OptionsLike = Optional[Union[SolveOptions, Mapping[str, Any]]]
ProgressCallback = Callable[[int, int], None]


@dataclass
class SolveReport:
    """Ranked results for one phrase plus how the search went."""
    phrase: str
    results: List[ScoredResult]
    letters: int = 0
    candidates: int = 0
    found: int = 0                 # accepted sequences before ranking/truncation
    nodes: int = 0
    stop_reason: str | None = None
    time_ms: float = 0.0
    solver: str = ""
    options: SolveOptions = field(default_factory=SolveOptions)

    @property
    def complete(self) -> bool:
        return self.stop_reason is None


def solve_report(phrase: str, index: DictionaryIndex, options: OptionsLike = None) -> SolveReport:
    """
    Run the full pipeline for one phrase.

    Raises ValueError for malformed options before any search work is done.
    A phrase with no usable letters is not an error: it yields no results.
    """
    opts = coerce_options(options)
    searcher = create_searcher(opts.solver)

    t0 = time.perf_counter()
    phrase_freq = frequency_of(phrase, index.alphabet)
    letters = letter_count(phrase_freq)

    outcome = searcher.search(
        phrase_freq, index,
        max_solutions=opts.search_limit,
        max_words=opts.max_words,
        allow_repeats=opts.allow_repeated_words,
        max_nodes=opts.max_nodes,
        time_limit=opts.time_limit,
    )
    scored = [score_result(words) for words in outcome.sequences]
    ranked = rank(scored, opts.max_results)
    dt = (time.perf_counter() - t0) * 1000.0

    logger.info("Solved %r: %d letters, %d candidates, %d found, %d nodes, %.1f ms%s",
                phrase, letters, outcome.candidates, len(scored), outcome.nodes, dt,
                "" if outcome.complete else f" (stopped: {outcome.stop_reason})")
    return SolveReport(
        phrase=phrase, results=ranked, letters=letters, candidates=outcome.candidates,
        found=len(scored), nodes=outcome.nodes, stop_reason=outcome.stop_reason,
        time_ms=dt, solver=searcher.id, options=opts,
    )


def solve(phrase: str, index: DictionaryIndex, options: OptionsLike = None) -> List[ScoredResult]:
    """
    Ranked anagram word-combinations for `phrase`.

    Args:
      phrase  : raw text; case and non-letters are ignored
      index   : prebuilt DictionaryIndex
      options : SolveOptions, a mapping such as
                {"maxResults": 10, "maxWordsPerSequence": 3, "allowRepeatedWords": False},
                or None for defaults

    Returns:
      Up to max_results ScoredResults, best first; [] if nothing matches.
    """
    return solve_report(phrase, index, options).results


def solve_batch(
        phrases: Iterable[str],
        index: DictionaryIndex,
        options: OptionsLike = None,
        *,
        progress: ProgressCallback | None = None,
) -> List[SolveReport]:
    """
    Solve many phrases back-to-back with one validated option set.

    `progress(done, total)` is called after each phrase when given.
    """
    opts = coerce_options(options)
    pool = list(phrases)
    out: List[SolveReport] = []
    for idx, phrase in enumerate(pool, start=1):
        out.append(solve_report(phrase, index, opts))
        if progress is not None:
            progress(idx, len(pool))
    return out
