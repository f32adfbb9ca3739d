from __future__ import annotations
from pathlib import Path
from typing import List


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 word list or phrase file into a list of lines.

    A leading byte-order mark is dropped (common in lists exported from
    spreadsheets); undecodable bytes are replaced rather than raised on.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_bytes().decode("utf-8", errors="replace")
    return text.lstrip("\ufeff").splitlines()


def read_phrases(p: Path | str) -> List[str]:
    """Non-blank lines of a phrase file, surrounding whitespace trimmed."""
    return [ln.strip() for ln in read_lines(p) if ln.strip()]

