"""
Letter-frequency model.

A phrase and a dictionary word are both reduced to a fixed-width count vector,
one integer slot per alphabet symbol. Everything downstream (index filtering,
search budgets, exact-cover checks) is slot-wise integer arithmetic on these
vectors.

Conventions:
  - case-insensitive: input is lower-cased before counting
  - anything outside the alphabet (spaces, punctuation, digits) is dropped
  - two strings are anagrams iff their vectors are equal

Examples:
  frequency_of("Dormitory!")  -> counts d=1 o=2 r=2 m=1 i=1 t=1 y=1
  frequency_of("dirty room")  == same vector
"""

from __future__ import annotations

import string
from typing import Dict

import numpy as np

# Slot dtype for every frequency vector. Word lists never repeat a letter
# anywhere near 2**31 times.
FREQ_DTYPE = np.int32


class Alphabet:
    """Ordered set of lower-case symbols; slot i of a vector counts symbols[i]."""

    def __init__(self, symbols: str = string.ascii_lowercase):
        symbols = symbols.lower()
        if not symbols:
            raise ValueError("alphabet must contain at least one symbol")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"alphabet has repeated symbols: {symbols!r}")
        if any(ch.isspace() for ch in symbols):
            raise ValueError("alphabet symbols cannot be whitespace")
        self.symbols = symbols
        self._slot: Dict[str, int] = {ch: i for i, ch in enumerate(symbols)}

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, ch: object) -> bool:
        return ch in self._slot

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other.symbols == self.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"Alphabet({self.symbols!r})"

    def slot(self, ch: str) -> int:
        return self._slot[ch]

    def admits(self, word: str) -> bool:
        """True if every character of the (already lower-cased) word is a symbol."""
        return bool(word) and all(ch in self._slot for ch in word)


DEFAULT_ALPHABET = Alphabet()


def empty_vector(alphabet: Alphabet = DEFAULT_ALPHABET) -> np.ndarray:
    return np.zeros(len(alphabet), dtype=FREQ_DTYPE)


def frequency_of(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> np.ndarray:
    """
    Count the alphabet letters in `text`.

    Never fails: characters outside the alphabet are skipped silently, so
    frequency_of("") and frequency_of("?! 42") are both the zero vector.
    """
    vec = empty_vector(alphabet)
    for ch in text.lower():
        if ch in alphabet:
            vec[alphabet.slot(ch)] += 1
    return vec


def letter_count(vec: np.ndarray) -> int:
    """Total letters represented by a vector."""
    return int(vec.sum())


def fits(need: np.ndarray, have: np.ndarray) -> bool:
    """Component-wise need <= have: can `need` be spelled from `have`?"""
    return bool(np.all(need <= have))


def is_exhausted(vec: np.ndarray) -> bool:
    """True when every slot is zero (all letters consumed)."""
    return not vec.any()


def same_letters(a: np.ndarray, b: np.ndarray) -> bool:
    """Exact slot-by-slot equality."""
    return bool(np.array_equal(a, b))


def combined_frequency(words, alphabet: Alphabet = DEFAULT_ALPHABET) -> np.ndarray:
    """Sum of the vectors of several words (the multiset union of their letters)."""
    total = empty_vector(alphabet)
    for w in words:
        total += frequency_of(w, alphabet)
    return total
