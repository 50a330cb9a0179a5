"""String similarity used for fuzzy description and company-name matching."""

import math

from rapidfuzz.distance import Levenshtein


def calculate_similarity(first: str | None, second: str | None) -> int:
    """Case-insensitive similarity percentage between two strings.

    Identical strings (including two empty ones) score 100, a string against
    an empty one scores 0. Otherwise the Levenshtein distance is scaled by the
    longer length: ``round((1 - distance / max_len) * 100)``.

    Args:
        first: First string.
        second: Second string.

    Returns:
        Integer in ``[0, 100]``; symmetric in its arguments.
    """
    a = (first or "").lower()
    b = (second or "").lower()
    if a == b:
        return 100
    if not a or not b:
        return 0
    distance = Levenshtein.distance(a, b)
    score = (1 - distance / max(len(a), len(b))) * 100
    # Half-up rounding, so 62.5 scores 63
    return math.floor(score + 0.5)
