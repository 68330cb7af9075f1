"""
Similarity scoring between normalized source texts.

Short inputs are scored with Levenshtein distance. Inputs longer than
EXACT_METHOD_MAX_LENGTH fall back to a character-frequency overlap, which is
linear but ignores character order.
"""

from collections import Counter
from enum import Enum
from typing import Tuple

# Longer strings use the frequency approximation
EXACT_METHOD_MAX_LENGTH = 1000

# Pairs whose length difference exceeds this share of the longer length score 0
LENGTH_GATE_RATIO = 0.8


class SimilarityMethod(Enum):
    """Scoring path taken for a pair of strings."""
    LENGTH_GATE = "length_gate"
    EMPTY = "empty"
    EDIT_DISTANCE = "edit_distance"
    FREQUENCY = "frequency"


def levenshtein_distance(longer: str, shorter: str) -> int:
    """
    Classic edit distance with unit cost insert, delete and substitute.

    Keeps two rows of the dynamic-programming table at a time.
    """
    if not shorter:
        return len(longer)

    previous = list(range(len(shorter) + 1))
    for i, char_l in enumerate(longer, start=1):
        current = [i] + [0] * len(shorter)
        for j, char_s in enumerate(shorter, start=1):
            cost = 0 if char_l == char_s else 1
            current[j] = min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost,
            )
        previous = current

    return previous[len(shorter)]


def frequency_similarity(a: str, b: str) -> float:
    """
    Multiset intersection over union of character counts.

    Returns 0.0 when both strings are empty.
    """
    freq_a = Counter(a)
    freq_b = Counter(b)

    shared = 0
    total = 0
    for char in set(freq_a) | set(freq_b):
        count_a = freq_a.get(char, 0)
        count_b = freq_b.get(char, 0)
        shared += min(count_a, count_b)
        total += max(count_a, count_b)

    return shared / total if total > 0 else 0.0


def score_with_method(a: str, b: str) -> Tuple[float, SimilarityMethod]:
    """
    Score two normalized strings and report which path produced the score.

    Returns:
        Tuple of (score in [0, 1], method used)
    """
    length_diff = abs(len(a) - len(b))
    if length_diff > LENGTH_GATE_RATIO * max(len(a), len(b)):
        return 0.0, SimilarityMethod.LENGTH_GATE

    if len(b) > len(a):
        longer, shorter = b, a
    else:
        longer, shorter = a, b

    if len(longer) == 0:
        return 1.0, SimilarityMethod.EMPTY

    if len(longer) > EXACT_METHOD_MAX_LENGTH:
        return frequency_similarity(a, b), SimilarityMethod.FREQUENCY

    distance = levenshtein_distance(longer, shorter)
    return (len(longer) - distance) / len(longer), SimilarityMethod.EDIT_DISTANCE


def similarity(a: str, b: str) -> float:
    """Similarity score in [0, 1] between two normalized strings."""
    score, _ = score_with_method(a, b)
    return score
