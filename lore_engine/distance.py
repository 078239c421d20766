"""
lore_engine/distance.py -- String distance primitives.

Kept separate from the conflict policy in ``conflict_checker`` so the metric
can be swapped (phonetic, token-based, ...) without touching thresholds or
ordering.  Any callable with the signature ``(a: str, b: str) -> int`` can be
handed to ``NameConflictDetector(distance=...)``.
"""

from __future__ import annotations

from typing import Callable

DistanceFunc = Callable[[str, str], int]


def levenshtein(a: str, b: str) -> int:
    """Return the Levenshtein edit distance between *a* and *b*.

    Insertions, deletions and substitutions each cost 1; matching characters
    cost 0.  The full ``(len(b) + 1) x (len(a) + 1)`` table is built, with
    row 0 holding ``0..len(a)`` and column 0 holding ``0..len(b)``.

    Examples:
        levenshtein("kaelen", "kaelan")  -> 1
        levenshtein("", "abc")           -> 3
    """
    matrix: list[list[int]] = [[i] + [0] * len(a) for i in range(len(b) + 1)]
    matrix[0] = list(range(len(a) + 1))

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            cost = 0 if b[i - 1] == a[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,         # deletion
                matrix[i][j - 1] + 1,         # insertion
                matrix[i - 1][j - 1] + cost,  # substitution
            )

    return matrix[len(b)][len(a)]
