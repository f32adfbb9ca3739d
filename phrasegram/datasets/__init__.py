from .validator import validate_wordlist, pretty_summary
from .io import read_lines, read_phrases
from .index import DictionaryIndex, DictionaryEntry, CandidateView, IndexStats

__all__ = [
    "validate_wordlist", "pretty_summary",
    "read_lines", "read_phrases",
    "DictionaryIndex", "DictionaryEntry", "CandidateView", "IndexStats",
]
