"""
Counting and sequential-draw kernels.

Inputs are assumed validated by exact.solvers.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any, Callable, Sequence

import numpy as np


def count_permutations(n: int, k: int) -> int:
    """Ordered selections of k from n: n! / (n - k)!, 0 when k > n."""
    return math.perm(n, k)


def count_combinations(n: int, k: int) -> int:
    """Unordered selections of k from n, 0 when k > n."""
    return math.comb(n, k)


def no_collision_log_probability(n: int, d: int) -> float:
    """log prod_{i=0}^{n-1} (d - i) / d, for 0 <= n <= d."""
    i = np.arange(n, dtype=np.float64)
    return float(np.sum(np.log1p(-i / d)))


def make_matcher(event: Any) -> Callable[[Any], bool]:
    """An event is either a predicate over labels or a label to match."""
    if callable(event):
        return lambda label: bool(event(label))
    return lambda label: label == event


def sequential_draw_probability(
    labels: Sequence[Any],
    counts: Sequence[int],
    matchers: Sequence[Callable[[Any], bool]],
) -> Fraction:
    """
    Pr(first draw satisfies matchers[0], second matchers[1], ...).

    Draws are without replacement. When an event admits several labels
    the probability sums over which label was removed, so later events
    see the right shrunken urn. States are memoised on the remaining
    label counts.
    """
    memo: dict[tuple[int, tuple[int, ...]], Fraction] = {}
    hits = [[m(label) for label in labels] for m in matchers]

    def step(depth: int, remaining: tuple[int, ...]) -> Fraction:
        if depth == len(matchers):
            return Fraction(1)
        key = (depth, remaining)
        if key in memo:
            return memo[key]
        total = sum(remaining)
        prob = Fraction(0)
        for j, c in enumerate(remaining):
            if c == 0 or not hits[depth][j]:
                continue
            shrunk = remaining[:j] + (c - 1,) + remaining[j + 1:]
            prob += Fraction(c, total) * step(depth + 1, shrunk)
        memo[key] = prob
        return prob

    return step(0, tuple(int(c) for c in counts))
