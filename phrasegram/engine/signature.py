"""
Order-independent identity for a multiset of words.

"dirty room" and "room dirty" are the same answer written twice. The
canonical signature sorts the words and joins them with a space, which no
indexed word can contain, so two sequences share a signature iff they hold
the same words with the same multiplicities.
"""

from __future__ import annotations

from typing import Iterable, Set

SEPARATOR = " "


def canonical_signature(words: Iterable[str]) -> str:
    """
    Examples:
      canonical_signature(["room", "dirty"]) -> "dirty room"
      canonical_signature(["a", "ct"]) == canonical_signature(["ct", "a"])
    """
    return SEPARATOR.join(sorted(words))


class SignatureSet:
    """
    Seen-signature gate for ONE search invocation.

    Each search creates its own instance, so concurrent queries never see
    each other's signatures.
    """

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, words: object) -> bool:
        if isinstance(words, str):
            return words in self._seen
        return canonical_signature(words) in self._seen  # type: ignore[arg-type]

    def is_new_signature(self, words: Iterable[str]) -> bool:
        """Record the signature of `words`; False if it was already recorded."""
        sig = canonical_signature(words)
        if sig in self._seen:
            return False
        self._seen.add(sig)
        return True

    def reset(self) -> None:
        self._seen.clear()
