"""
Word-list validator for phrasegram.

What this module does:
- Inspect a dictionary file before indexing it (one word per line).
- Count lines the index would keep, reject (characters outside the alphabet),
  or collapse (case-insensitive duplicates); compute SHA-256 of the raw file.
- Return a machine-readable dict (for run manifests) and provide a pretty
  one-line summary.

The index tolerates everything flagged here. The report only tells you how much
of a list is actually usable, so a bad path or a wrong-language list shows up
before a search silently finds nothing.

Typical use:
    from phrasegram.datasets import validate_wordlist, pretty_summary
    rep = validate_wordlist("phrasegram/datasets/data/sample_words.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from phrasegram.engine.letters import Alphabet, DEFAULT_ALPHABET


# -----------------------------
# Dataclass for structured reports
# -----------------------------

@dataclass
class WordlistReport:
    """Diagnostics and metadata for one word-list file."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    alphabet: str        # symbols accepted
    count: int           # lines holding a usable word
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # distinct usable words (case-folded)
    blank_lines: int     # empty/whitespace-only lines
    invalid_lines: int   # non-blank lines with characters outside the alphabet
    longest: int         # longest usable word (0 if none)
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _scan(path: Path, alphabet: Alphabet) -> Tuple[List[str], int, int]:
    """
    Read words and classify each line.

    Returns:
      (usable_words, blank_count, invalid_count)
    """
    usable: List[str] = []
    blank = invalid = 0
    with path.open("r", encoding="utf-8", errors="replace") as f:
        for raw in f:
            w = raw.strip().lower()
            if not w:
                blank += 1
            elif alphabet.admits(w):
                usable.append(w)
            else:
                invalid += 1
    return usable, blank, invalid


# -----------------------------
# Public API
# -----------------------------

def validate_wordlist(path: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> Dict:
    """
    Validate a dictionary file.

    Parameters
    ----------
    path : str
        Word list, one candidate word per line.
    alphabet : Alphabet
        Symbols a usable word may contain.

    Returns
    -------
    Dict
        JSON-serializable WordlistReport. `passed` requires the file to exist
        and hold at least one usable word; invalid and duplicate lines are
        reported in `issues` but do not fail the list.
    """
    p = Path(path)
    if not p.exists():
        rep = WordlistReport(
            path=path, exists=False, alphabet=alphabet.symbols, count=0, sha256="",
            unique_count=0, blank_lines=0, invalid_lines=0, longest=0,
            passed=False, issues=[f"word list not found: {path}"],
        )
        return asdict(rep)

    words, blank, invalid = _scan(p, alphabet)
    unique = set(words)

    issues: List[str] = []
    if not words:
        issues.append("word list contains 0 usable words")
    if invalid:
        issues.append(f"{invalid} line(s) with characters outside the alphabet")
    if len(words) != len(unique):
        issues.append(f"{len(words) - len(unique)} duplicate line(s)")

    rep = WordlistReport(
        path=str(p),
        exists=True,
        alphabet=alphabet.symbols,
        count=len(words),
        sha256=_sha256_file(p),
        unique_count=len(unique),
        blank_lines=blank,
        invalid_lines=invalid,
        longest=max((len(w) for w in unique), default=0),
        passed=bool(words),
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        words=412 (uniq=410, sha=abc123...) | invalid=3 | longest=11 | OK
    """
    status = "OK" if report["passed"] else "FAIL"
    sha = (report.get("sha256") or "")[:12]
    return (
        f"words={report['count']} (uniq={report['unique_count']}, sha={sha}) "
        f"| invalid={report['invalid_lines']} | longest={report['longest']} | {status}"
    )
