from .letters import Alphabet, DEFAULT_ALPHABET, frequency_of, letter_count, fits, is_exhausted
from .signature import SignatureSet, canonical_signature
from .scoring import score_sequence
from .ranking import ScoredResult, rank, score_result
from .validation import SolveOptions, validate_options, coerce_options

__all__ = [
    "Alphabet", "DEFAULT_ALPHABET", "frequency_of", "letter_count", "fits", "is_exhausted",
    "SignatureSet", "canonical_signature",
    "score_sequence",
    "ScoredResult", "rank", "score_result",
    "SolveOptions", "validate_options", "coerce_options",
]
