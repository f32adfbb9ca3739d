"""
Dictionary index: the word list preprocessed once for fast searching.

What this module does:
- Clean raw word-list lines (trim, lower-case, alphabet-only, no duplicates).
- Precompute each word's frequency vector and length.
- Order entries by descending length (ties keep first-seen order). Longer
  words are tried first, and the search only ever moves forward through this
  order, which is what keeps it from producing the same multiset of words in
  several orders.
- Per query, narrow the index to the entries that fit the phrase at all
  (CandidateView) so the search works on a small stacked numpy matrix.

The index is immutable after build: its arrays are flagged read-only and it
can be shared by any number of queries.

Typical use:
    from phrasegram.datasets import DictionaryIndex
    index = DictionaryIndex.from_path("phrasegram/datasets/data/sample_words.txt")
    view = index.candidates_for(frequency_of("dirty room"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import numpy as np

from phrasegram.engine.letters import (
    Alphabet, DEFAULT_ALPHABET, FREQ_DTYPE, frequency_of, letter_count,
)
from .io import read_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionaryEntry:
    """(word, frequency vector, length); the vector is read-only."""
    word: str
    frequency: np.ndarray
    length: int


@dataclass(frozen=True)
class IndexStats:
    """What happened to the raw lines while building an index."""
    total_lines: int      # lines/tokens seen, blanks included
    accepted_words: int   # entries in the index
    rejected_lines: int   # non-blank tokens with characters outside the alphabet
    duplicate_words: int  # repeats of an already-accepted word


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


class CandidateView:
    """
    The slice of an index usable for one phrase, in index order.

    Positions used by the search are positions in THIS view, not in the
    full index.
    """

    def __init__(self, words: List[str], freqs: np.ndarray, lengths: np.ndarray):
        self.words = words
        self.freqs = freqs
        self.lengths = lengths
        # suffix_min[i] = shortest word at or after position i
        if len(lengths):
            self._suffix_min = np.minimum.accumulate(lengths[::-1])[::-1].copy()
        else:
            self._suffix_min = np.zeros(0, dtype=lengths.dtype)

    def __len__(self) -> int:
        return len(self.words)

    def shortest_from(self, start: int) -> int | None:
        """Length of the shortest word at or after `start`; None past the end."""
        if start >= len(self.words):
            return None
        return int(self._suffix_min[start])

    def fitting(self, budget: np.ndarray, remaining: int, start: int) -> np.ndarray:
        """
        Positions >= start whose word fits inside `budget` (component-wise)
        and is no longer than `remaining` letters. Ascending order.
        """
        if start >= len(self.words):
            return np.zeros(0, dtype=np.intp)
        lengths = self.lengths[start:]
        mask = lengths <= remaining
        mask &= np.all(self.freqs[start:] <= budget, axis=1)
        return np.flatnonzero(mask) + start


class DictionaryIndex:
    """Read-only, length-ordered dictionary for the anagram search."""

    def __init__(self, entries: Iterable[DictionaryEntry], alphabet: Alphabet = DEFAULT_ALPHABET,
                 stats: IndexStats | None = None):
        self.alphabet = alphabet
        self._entries: Tuple[DictionaryEntry, ...] = tuple(entries)
        self.words: Tuple[str, ...] = tuple(e.word for e in self._entries)

        width = len(alphabet)
        if self._entries:
            matrix = np.vstack([e.frequency for e in self._entries]).astype(FREQ_DTYPE)
        else:
            matrix = np.zeros((0, width), dtype=FREQ_DTYPE)
        self.matrix = _readonly(matrix)
        self.lengths = _readonly(np.array([e.length for e in self._entries], dtype=np.int64))
        self.stats = stats or IndexStats(len(self._entries), len(self._entries), 0, 0)

    # ---- construction ----

    @classmethod
    def build(cls, raw_words: str | Iterable[str], alphabet: Alphabet = DEFAULT_ALPHABET) -> "DictionaryIndex":
        """
        Build from raw word-list text (split on lines) or an iterable of tokens.

        Tolerates mixed case, blanks, duplicates and junk tokens; none of
        them are errors, they are just left out (and counted in `stats`).
        """
        lines = raw_words.splitlines() if isinstance(raw_words, str) else raw_words

        total = rejected = dupes = 0
        seen = set()
        kept: List[DictionaryEntry] = []
        for raw in lines:
            total += 1
            w = raw.strip().lower()
            if not w:
                continue
            if not alphabet.admits(w):
                rejected += 1
                continue
            if w in seen:
                dupes += 1
                continue
            seen.add(w)
            freq = _readonly(frequency_of(w, alphabet))
            length = letter_count(freq)
            if length == 0:
                continue
            kept.append(DictionaryEntry(word=w, frequency=freq, length=length))

        # stable: equal lengths stay in first-seen order
        kept.sort(key=lambda e: -e.length)

        stats = IndexStats(total_lines=total, accepted_words=len(kept),
                           rejected_lines=rejected, duplicate_words=dupes)
        logger.info("Indexed %d words (%d lines, %d rejected, %d duplicates)",
                    stats.accepted_words, stats.total_lines, stats.rejected_lines, stats.duplicate_words)
        return cls(kept, alphabet=alphabet, stats=stats)

    @classmethod
    def from_path(cls, path: Path | str, alphabet: Alphabet = DEFAULT_ALPHABET) -> "DictionaryIndex":
        """Load a UTF-8 word list, one word per line."""
        logger.debug("Loading word list from %s", path)
        return cls.build(read_lines(path), alphabet=alphabet)

    # ---- read-only access ----

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)

    def __getitem__(self, i: int) -> DictionaryEntry:
        return self._entries[i]

    def candidates_for(self, phrase_freq: np.ndarray) -> CandidateView:
        """Entries that could appear in SOME answer for this phrase, index order kept."""
        total = letter_count(phrase_freq)
        if not len(self._entries):
            return CandidateView([], self.matrix, self.lengths)
        mask = (self.lengths <= total) & np.all(self.matrix <= phrase_freq, axis=1)
        pos = np.flatnonzero(mask)
        return CandidateView(
            words=[self.words[i] for i in pos],
            freqs=self.matrix[pos],
            lengths=self.lengths[pos],
        )
