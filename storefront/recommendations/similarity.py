from __future__ import annotations

from Levenshtein import distance


def similarity(a: str, b: str) -> float:
    """
    Normalised edit-distance similarity in [0, 1], case-insensitive.

    ``1 - distance / max(len(a), len(b))``; two empty strings are identical.
    """
    a = a.lower()
    b = b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - distance(a, b) / longest
