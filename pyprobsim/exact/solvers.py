"""
Closed-form probability routines.

Each routine is a pure function, independently testable against a Monte
Carlo estimate from pyprobsim.montecarlo.replicate() within a
ToleranceTier (|empirical - exact| < 0.02 for B >= 10,000).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike
from scipy import stats

from pyprobsim.core.exceptions import InsufficientPopulation, InvalidArgument
from pyprobsim.core.validation import check_integer, check_probability
from pyprobsim.exact._combinatorics import (
    count_combinations,
    count_permutations,
    make_matcher,
    no_collision_log_probability,
    sequential_draw_probability,
)
from pyprobsim.sampling.population import FinitePopulation

DEFAULT_CATEGORIES = 365

# Slack for probabilities assembled from rounded inputs (addition rule)
_PROB_SLACK = 1e-12


def _as_population(population: FinitePopulation | ArrayLike) -> FinitePopulation:
    if isinstance(population, FinitePopulation):
        return population
    return FinitePopulation.from_items(population)


def binomial_sum_tail(n: int, p: float, threshold: float = 0.0) -> float:
    """
    Pr(S < threshold) where S is the sum of n independent ±1 draws.

    With Pr(+1) = p, the number of +1 draws X = (S + n) / 2 is
    Binomial(n, p), so Pr(S < t) = Pr(X <= ceil((t + n) / 2) - 1), read
    off the binomial CDF (a regularized incomplete beta).

    Parameters
    ----------
    n : int
        Number of draws, >= 1.
    p : float
        Probability of +1, in [0, 1].
    threshold : float
        Default 0: the probability the sum ends up negative (a casino
        losing money on n bets).
    """
    n = check_integer(n, 'n', minimum=1)
    p = check_probability(p, 'p')
    threshold = float(threshold)
    if not np.isfinite(threshold):
        raise InvalidArgument(f"threshold: must be finite, got {threshold}")
    max_successes = math.ceil((threshold + n) / 2.0) - 1
    if max_successes < 0:
        return 0.0
    if max_successes >= n:
        return 1.0
    return float(stats.binom.cdf(max_successes, n, p))


def exact_birthday_probability(n: int, categories: int = DEFAULT_CATEGORIES) -> float:
    """
    Pr(at least two of n people share a birthday).

    1 - prod_{i=0}^{n-1} (d - i) / d with d equally likely categories.
    Returns 0.0 for n <= 1 and exactly 1.0 for n > d (pigeonhole).

    Examples
    --------
    >>> round(exact_birthday_probability(23), 3)
    0.507
    """
    n = check_integer(n, 'n')
    d = check_integer(categories, 'categories', minimum=1)
    if n <= 1:
        return 0.0
    if n > d:
        return 1.0
    p = -math.expm1(no_collision_log_probability(n, d))
    return min(1.0, max(0.0, p))


def exact_conditional_probability(
    population: FinitePopulation | ArrayLike,
    event_sequence: Sequence[Any],
) -> float:
    """
    Probability that sequential draws without replacement match a sequence of events.

    Pr(A then B) = Pr(A) * Pr(B | A), where Pr(B | A) is computed on the
    urn with A's item removed; k events give a product of k shrinking
    fractions. An event is a label (draw equals it) or a predicate over
    labels (draw satisfies it); for predicates that match several labels
    the probability sums over which item was removed.

    Parameters
    ----------
    population : FinitePopulation or array-like of labels
        Equally likely items (weighted urns are rejected).
    event_sequence : sequence
        Events in draw order. An empty sequence has probability 1.

    Raises
    ------
    InsufficientPopulation
        More events than items in the population.

    Examples
    --------
    >>> deck = FinitePopulation.from_counts({"king": 4, "other": 48})
    >>> exact_conditional_probability(deck, ["king", "king"])   # 4/52 * 3/51
    """
    pop = _as_population(population)
    if pop.is_weighted:
        raise InvalidArgument(
            "conditional probabilities need equally likely items; got a weighted population"
        )
    events = list(event_sequence)
    if len(events) > pop.size:
        raise InsufficientPopulation(
            f"requested {len(events)} sequential draws exceeds population size {pop.size}",
            requested=len(events),
            available=pop.size,
        )

    labels, counts = np.unique(pop.items, return_counts=True)
    matchers = [make_matcher(e) for e in events]
    prob = sequential_draw_probability(list(labels), counts.tolist(), matchers)
    return float(prob)


def addition_rule(p_a: float, p_b: float, p_a_and_b: float) -> float:
    """
    Pr(A or B) = Pr(A) + Pr(B) - Pr(A and B).

    Raises
    ------
    InvalidArgument
        If the three probabilities are not jointly consistent
        (Pr(A and B) > min(Pr(A), Pr(B)) or the union exceeds 1).
    """
    p_a = check_probability(p_a, 'p_a')
    p_b = check_probability(p_b, 'p_b')
    p_ab = check_probability(p_a_and_b, 'p_a_and_b')
    if p_ab > min(p_a, p_b) + _PROB_SLACK:
        raise InvalidArgument(
            f"p_a_and_b={p_ab} exceeds min(p_a, p_b)={min(p_a, p_b)}"
        )
    union = p_a + p_b - p_ab
    if union > 1.0 + _PROB_SLACK:
        raise InvalidArgument(
            f"p_a + p_b - p_a_and_b = {union} exceeds 1"
        )
    return min(1.0, max(0.0, union))


def permutations(n: int, k: int) -> int:
    """Number of ordered selections of k items from n (0 when k > n)."""
    n = check_integer(n, 'n')
    k = check_integer(k, 'k')
    return count_permutations(n, k)


def combinations(n: int, k: int) -> int:
    """Number of unordered selections of k items from n (0 when k > n)."""
    n = check_integer(n, 'n')
    k = check_integer(k, 'k')
    return count_combinations(n, k)


@dataclass(frozen=True)
class SumMoments:
    """Expected value and standard error of a sum of independent draws."""
    expected: float
    standard_error: float


def sum_of_draws_moments(population: FinitePopulation | ArrayLike, n: int) -> SumMoments:
    """
    Moments of the sum of n independent draws from a numeric urn.

    E[S] = n * mu and SE[S] = sqrt(n) * sigma, where mu and sigma are the
    urn's mean and standard deviation (divisor N: the urn is the whole
    population, not a sample). Draw weights are honoured.
    """
    pop = _as_population(population)
    if not pop.is_numeric:
        raise InvalidArgument("population: sum of draws needs numeric items")
    n = check_integer(n, 'n', minimum=1)

    x = pop.items.astype(np.float64)
    w = pop.weights if pop.is_weighted else np.full(pop.size, 1.0 / pop.size)
    mu = float(np.sum(w * x))
    sigma = float(np.sqrt(np.sum(w * (x - mu) ** 2)))
    return SumMoments(expected=n * mu, standard_error=math.sqrt(n) * sigma)


def normal_approximation_tail(
    population: FinitePopulation | ArrayLike,
    n: int,
    threshold: float = 0.0,
) -> float:
    """
    CLT approximation of Pr(S < threshold) for a sum of n draws.

    Uses Normal(E[S], SE[S]) from sum_of_draws_moments().
    """
    moments = sum_of_draws_moments(population, n)
    if moments.standard_error == 0.0:
        return 1.0 if moments.expected < threshold else 0.0
    return float(stats.norm.cdf(
        threshold, loc=moments.expected, scale=moments.standard_error,
    ))
