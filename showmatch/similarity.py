"""
Normalized Levenshtein similarity.

Strings are case-folded and compared per Unicode code point, so the
length normalization is meaningful for any text.
"""

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(left: str | None, right: str | None) -> int:
    """Classic unit-cost edit distance (insert, delete, substitute)."""
    return Levenshtein.distance(left or "", right or "")


def similarity(left: str | None, right: str | None) -> float:
    """
    Similarity in [0.0, 1.0]; 1.0 only for case-insensitively equal strings.

    Symmetric, and total on any input including None and empty strings.
    """
    left = (left or "").casefold()
    right = (right or "").casefold()
    if left == right:
        return 1.0
    longest = max(len(left), len(right))
    return 1.0 - levenshtein_distance(left, right) / longest
