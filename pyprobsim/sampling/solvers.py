"""
Samplers: draw k items from a Population.

Three explicit entry points, one per independence discipline:
    sample_without_replacement  dependent draws, distinct positions
    sample_with_replacement     independent uniform (or weighted) draws
    sample_parametric           independent draws from a named family

sample() is the dispatcher used by the replication layer; for a finite
urn it requires `replacement` to be spelled out.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyprobsim.core.exceptions import InsufficientPopulation, InvalidArgument
from pyprobsim.core.random_source import RandomSource, resolve_source
from pyprobsim.core.validation import check_integer
from pyprobsim.sampling.population import (
    FinitePopulation,
    ParametricPopulation,
    Population,
)

# Bounds of the open interval (0, 1) fed to ppf(); unbounded families
# return -inf at 0 and +inf at 1.
_LOWEST_U = 2.0 ** -54
_HIGHEST_U = float(np.nextafter(1.0, 0.0))


def _require_finite(population: Any, name: str = 'population') -> FinitePopulation:
    if not isinstance(population, FinitePopulation):
        raise InvalidArgument(
            f"{name}: expected FinitePopulation, got {type(population).__name__}"
        )
    return population


def check_without_replacement(population: FinitePopulation, k: int) -> int:
    """
    Validate a without-replacement request before any draw is made.

    Raises:
        InvalidArgument: k is not a non-negative integer, or the urn is weighted
        InsufficientPopulation: k exceeds the population size
    """
    k = check_integer(k, 'k')
    n = population.size
    if k > n:
        raise InsufficientPopulation(
            f"requested k={k} exceeds population size {n}",
            requested=k,
            available=n,
        )
    if population.is_weighted:
        raise InvalidArgument(
            "weighted populations support sampling with replacement only"
        )
    return k


def sample_without_replacement(
    population: FinitePopulation,
    k: int,
    *,
    source: RandomSource | None = None,
) -> NDArray[Any]:
    """
    Draw a uniformly random k-subset of positions, in draw order.

    Partial Fisher-Yates over position indices: draw i picks uniformly
    among the n - i positions not yet used. The source population is
    untouched; only this call's index array is permuted.

    Parameters
    ----------
    population : FinitePopulation
    k : int
        Number of items, 0 <= k <= population.size.
    source : RandomSource, optional
        Stream to draw from. Defaults to the configured process source.

    Returns
    -------
    Sample (1D array) of length k. With k == population.size the result
    is a permutation of the population.

    Raises
    ------
    InsufficientPopulation
        If k > population.size.
    """
    population = _require_finite(population)
    k = check_without_replacement(population, k)
    source = resolve_source(source)

    n = population.size
    positions = np.arange(n)
    # One bound per draw: n, n-1, ..., n-k+1
    offsets = source.draw_index(np.arange(n, n - k, -1))
    for i in range(k):
        j = i + int(offsets[i])
        positions[i], positions[j] = positions[j], positions[i]

    return population.items[positions[:k]]


def sample_with_replacement(
    population: FinitePopulation,
    k: int,
    *,
    source: RandomSource | None = None,
) -> NDArray[Any]:
    """
    Draw k items independently, each from the full population.

    Equally likely positions use draw_index(n, size=k). Weighted urns
    map draw_uniform() values through the cumulative weights.

    Parameters
    ----------
    population : FinitePopulation
    k : int
        Number of draws, any k >= 0.
    source : RandomSource, optional

    Returns
    -------
    Sample (1D array) of length k; items may repeat.
    """
    population = _require_finite(population)
    k = check_integer(k, 'k')
    source = resolve_source(source)

    if k == 0:
        return population.items[:0]

    if population.is_weighted:
        cumulative = np.cumsum(population.weights)
        cumulative[-1] = 1.0
        u = source.draw_uniform(size=k)
        positions = np.searchsorted(cumulative, u, side='right')
    else:
        positions = source.draw_index(population.size, size=k)

    return population.items[positions]


def sample_parametric(
    population: ParametricPopulation,
    k: int,
    *,
    source: RandomSource | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Draw k independent values from a named family.

    Values are produced by inverse-CDF transform of k uniforms, so the
    stream position advances by exactly k draw_uniform() calls.

    Parameters
    ----------
    population : ParametricPopulation
    k : int
    source : RandomSource, optional

    Returns
    -------
    float64 array of length k.
    """
    if not isinstance(population, ParametricPopulation):
        raise InvalidArgument(
            f"population: expected ParametricPopulation, got {type(population).__name__}"
        )
    k = check_integer(k, 'k')
    source = resolve_source(source)

    if k == 0:
        return np.empty(0, dtype=np.float64)

    u = np.clip(source.draw_uniform(size=k), _LOWEST_U, _HIGHEST_U)
    return np.asarray(population.distribution().ppf(u), dtype=np.float64)


def sample(
    population: Population,
    k: int,
    *,
    replacement: bool | None = None,
    source: RandomSource | None = None,
) -> NDArray[Any]:
    """
    Draw a Sample from any Population.

    Parameters
    ----------
    population : FinitePopulation or ParametricPopulation
    k : int
    replacement : bool
        Required for a FinitePopulation. Parametric draws are always
        independent; passing replacement=False for them is rejected.
    source : RandomSource, optional

    Raises
    ------
    InsufficientPopulation
        When replacement=False and k exceeds the population size.
    InvalidArgument
        When replacement is omitted for a finite population.
    """
    if isinstance(population, FinitePopulation):
        if replacement is None:
            raise InvalidArgument(
                "replacement: must be given explicitly (True or False) "
                "when sampling a finite population"
            )
        if replacement:
            return sample_with_replacement(population, k, source=source)
        return sample_without_replacement(population, k, source=source)

    if isinstance(population, ParametricPopulation):
        if replacement is False:
            raise InvalidArgument(
                f"replacement=False is meaningless for a parametric "
                f"{population.family} population"
            )
        return sample_parametric(population, k, source=source)

    raise InvalidArgument(
        f"population: expected FinitePopulation or ParametricPopulation, "
        f"got {type(population).__name__}"
    )
