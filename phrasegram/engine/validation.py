"""
Solve options and their validation.

This module answers the question: "Is this configuration acceptable before we
start searching?" Bad limits fail fast here with a ValueError; the search
engine itself assumes validated, positive limits.

Options arrive either as a SolveOptions instance or as a plain mapping from
the presentation layer. Mappings may use the boundary names
(maxResults, maxWordsPerSequence, allowRepeatedWords, ...) or snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

DEFAULT_MAX_RESULTS = 50
DEFAULT_MAX_WORDS = 6
# Raw accepted sequences collected before ranking; the search stops here.
DEFAULT_SEARCH_LIMIT = 50_000
DEFAULT_SOLVER = "backtrack"

# Boundary (camelCase) name -> SolveOptions field
_ALIASES: Dict[str, str] = {
    "maxResults": "max_results",
    "maxWordsPerSequence": "max_words",
    "max_words_per_sequence": "max_words",
    "allowRepeatedWords": "allow_repeated_words",
    "searchLimit": "search_limit",
    "maxNodes": "max_nodes",
    "timeLimit": "time_limit",
}


@dataclass(frozen=True)
class SolveOptions:
    max_results: int = DEFAULT_MAX_RESULTS
    max_words: int = DEFAULT_MAX_WORDS
    allow_repeated_words: bool = True
    search_limit: int = DEFAULT_SEARCH_LIMIT
    max_nodes: int | None = None       # node-visit budget (None = unbounded)
    time_limit: float | None = None    # seconds (None = unbounded)
    solver: str = DEFAULT_SOLVER

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SolveOptions":
        """Build options from a boundary dict; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown option: {key!r}. Known: {sorted(known | set(_ALIASES))}")
            kwargs[name] = value
        return validate_options(cls(**kwargs))


def _require_positive_int(name: str, value: Any) -> None:
    # bool is an int subclass; True is not a sensible limit
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer; got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1; got {value}")


def validate_options(options: SolveOptions) -> SolveOptions:
    """
    Return `options` unchanged if acceptable, else raise ValueError.

    Rules:
      - max_results, max_words, search_limit: integers >= 1
      - max_nodes: None or integer >= 1
      - time_limit: None or number > 0
      - allow_repeated_words: bool
      - solver: a registered search strategy id
    """
    _require_positive_int("max_results", options.max_results)
    _require_positive_int("max_words", options.max_words)
    _require_positive_int("search_limit", options.search_limit)
    if options.max_nodes is not None:
        _require_positive_int("max_nodes", options.max_nodes)
    if options.time_limit is not None:
        tl = options.time_limit
        if isinstance(tl, bool) or not isinstance(tl, (int, float)) or not tl > 0:
            raise ValueError(f"time_limit must be a positive number of seconds; got {tl!r}")
    if not isinstance(options.allow_repeated_words, bool):
        raise ValueError(f"allow_repeated_words must be a bool; got {options.allow_repeated_words!r}")

    # Imported here: solvers depend on the engine package.
    from phrasegram.solvers import get_searcher_ids
    if options.solver not in get_searcher_ids():
        raise ValueError(f"Unknown solver id: {options.solver}. Available: {get_searcher_ids()}")
    return options


def coerce_options(options: SolveOptions | Mapping[str, Any] | None) -> SolveOptions:
    """Accept None, a mapping, or SolveOptions; always return validated SolveOptions."""
    if options is None:
        return validate_options(SolveOptions())
    if isinstance(options, SolveOptions):
        return validate_options(options)
    return SolveOptions.from_mapping(options)
