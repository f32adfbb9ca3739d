"""
Readability score for an accepted word sequence.

The score depends only on the SHAPE of the answer (how many words, how long
each is), never on which words they are. Preferences, strongest first:
  1) fewer words
  2) at equal word count, more balanced lengths (lower variance)

Formula:
  balance = 1 / (1 + var(lengths) / mean(lengths)**2)      in (0, 1]
  score   = 1 / (n - BALANCE_WEIGHT * balance)

With BALANCE_WEIGHT = 0.5 an n-word answer scores within [1/n, 1/(n - 0.5)],
so every n-word answer beats every (n+1)-word answer and balance only orders
answers of the same length.

Examples:
  score_sequence(["dormitory"])       -> 2.0
  score_sequence(["dirty", "room"])   -> ~0.664  (lengths 5, 4)
  score_sequence(["dirtyroo", "m"])   -> ~0.592  (lengths 8, 1; lopsided)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

BALANCE_WEIGHT = 0.5


def length_balance(lengths: Sequence[int]) -> float:
    """1.0 for equal lengths, approaching 0 as lengths spread apart."""
    arr = np.asarray(lengths, dtype=float)
    if arr.size == 0:
        return 1.0
    mean = arr.mean()
    if mean == 0:
        return 1.0
    cv2 = arr.var() / (mean * mean)  # squared coefficient of variation
    return float(1.0 / (1.0 + cv2))


def score_lengths(lengths: Sequence[int]) -> float:
    n = len(lengths)
    if n == 0:
        return 0.0
    return float(1.0 / (n - BALANCE_WEIGHT * length_balance(lengths)))


def score_sequence(words: Sequence[str]) -> float:
    """Score a word sequence by word count and length balance only."""
    return score_lengths([len(w) for w in words])
