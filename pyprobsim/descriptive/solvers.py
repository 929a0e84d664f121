"""
Solver dispatch for empirical estimators.

Provides summarize() as the comprehensive entry point, plus individual
functions: mean(), sd(), ecdf(), quantile(), standard_units(),
histogram(), density_estimate(), proportion(), running_mean(), qq_pairs().

Every function accepts a raw numeric sequence or an EmpiricalDesign and
validates eagerly: empty input raises EmptyInput, non-numeric, non-finite
or non-1D input raises InvalidArgument.
"""

from __future__ import annotations

from typing import Any, Callable
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.validation import check_integer, check_positive
from pyprobsim.descriptive.design import EmpiricalDesign
from pyprobsim.descriptive.solution import SummaryStatistics
from pyprobsim.descriptive.backends.cpu import (
    CPUEmpiricalBackend,
    compute_ecdf,
    compute_histogram,
    compute_mean,
    compute_quantiles,
    compute_running_mean,
    compute_sd,
    compute_standard_units,
)
from pyprobsim.descriptive._density import bandwidth_nrd0, gaussian_kde_grid
from pyprobsim.descriptive._quantile_types import (
    DEFAULT_QUANTILE_TYPE,
    check_quantile_type,
)


def _ensure_design(x: ArrayLike | EmpiricalDesign) -> EmpiricalDesign:
    """Convert raw sequence to EmpiricalDesign if needed."""
    if isinstance(x, EmpiricalDesign):
        return x
    return EmpiricalDesign.from_array(x)


def _check_probs(probs: ArrayLike) -> NDArray[np.floating[Any]]:
    p = np.atleast_1d(np.asarray(probs, dtype=np.float64))
    if p.ndim != 1:
        raise InvalidArgument(f"probs: expected scalar or 1D, got shape {p.shape}")
    if not np.all((p >= 0.0) & (p <= 1.0)):
        raise InvalidArgument(
            f"probs: must lie in [0, 1], got {p[(p < 0.0) | (p > 1.0) | np.isnan(p)].tolist()}"
        )
    return p


def mean(x: ArrayLike | EmpiricalDesign) -> float:
    """Arithmetic mean, (sum x_i) / n."""
    return compute_mean(_ensure_design(x))


def sd(x: ArrayLike | EmpiricalDesign) -> float:
    """
    Standard deviation with Bessel's correction.

    sqrt(sum (x_i - mean)^2 / (n - 1)). Matches R sd().

    Raises
    ------
    InvalidArgument
        If x has fewer than 2 values.
    """
    return compute_sd(_ensure_design(x))


def ecdf(
    x: ArrayLike | EmpiricalDesign,
    a: float | ArrayLike,
) -> float | NDArray[np.floating[Any]]:
    """
    Empirical CDF: |{x_i : x_i <= a}| / n.

    A right-continuous step function defined for every real a: 0 below
    min(x), 1 at and above max(x). Vectorised over a.
    """
    design = _ensure_design(x)
    try:
        points = np.asarray(a, dtype=np.float64)
    except (ValueError, TypeError) as e:
        raise InvalidArgument(f"a: expected real evaluation points: {e}") from e
    if np.any(np.isnan(points)):
        raise InvalidArgument("a: eCDF is not defined at NaN")
    values = compute_ecdf(design, points)
    if points.ndim == 0:
        return float(values)
    return values


def quantile(
    x: ArrayLike | EmpiricalDesign,
    probs: float | ArrayLike,
    *,
    type: int = DEFAULT_QUANTILE_TYPE,
) -> float | NDArray[np.floating[Any]]:
    """
    Sample quantiles.

    Parameters
    ----------
    x : array-like or EmpiricalDesign
    probs : float or array-like
        Probabilities in [0, 1].
    type : int
        Hyndman & Fan type 1-9. Default 7: linear interpolation between
        order statistics at h = (n - 1)p (R's and numpy's default).

    Returns
    -------
    float for scalar probs, else an array aligned with probs.
    """
    qtype = check_quantile_type(type)
    design = _ensure_design(x)
    scalar = np.ndim(probs) == 0
    values = compute_quantiles(design, _check_probs(probs), qtype)
    if scalar:
        return float(values[0])
    return values


def standard_units(x: ArrayLike | EmpiricalDesign) -> NDArray[np.floating[Any]]:
    """
    (x - mean(x)) / sd(x), element-wise.

    Raises
    ------
    InvalidArgument
        If x is constant or has a single value.
    """
    return compute_standard_units(_ensure_design(x))


def histogram(
    x: ArrayLike | EmpiricalDesign,
    bin_width: float,
) -> tuple[tuple[float, int], ...]:
    """
    Fixed-width histogram counts.

    Bins are half-open [start, start + bin_width) beginning at min(x); the
    last bin also holds max(x). Counts sum to len(x).

    Returns
    -------
    Tuple of (bin_start, count) pairs in ascending order.
    """
    w = check_positive(bin_width, 'bin_width')
    return compute_histogram(_ensure_design(x), w)


def density_estimate(
    x: ArrayLike | EmpiricalDesign,
    bandwidth: float | None = None,
    *,
    grid_size: int = 512,
    cut: float = 3.0,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Gaussian kernel density estimate over a regular grid.

    Parameters
    ----------
    x : array-like or EmpiricalDesign
    bandwidth : float, optional
        Kernel standard deviation. Default: Silverman's rule (R bw.nrd0).
    grid_size : int
        Number of grid points, >= 2.
    cut : float
        The grid extends cut * bandwidth beyond the data on each side.

    Returns
    -------
    (grid, density). sum(density) * (grid[1] - grid[0]) is approximately 1.
    """
    design = _ensure_design(x)
    grid_size = check_integer(grid_size, 'grid_size', minimum=2)
    cut = float(cut)
    if not np.isfinite(cut) or cut < 0:
        raise InvalidArgument(f"cut: must be a finite number >= 0, got {cut}")
    if bandwidth is None:
        bw = bandwidth_nrd0(design.data)
    else:
        bw = check_positive(bandwidth, 'bandwidth')
    return gaussian_kde_grid(design.data, bw, grid_size, cut)


def proportion(
    x: ArrayLike | EmpiricalDesign,
    predicate: Callable[[float], Any] | None = None,
) -> float:
    """
    Fraction of values satisfying `predicate`.

    Without a predicate, x must hold 0/1 (or boolean) indicators and
    their mean is returned.
    """
    design = _ensure_design(x)
    if predicate is None:
        if not np.all((design.data == 0.0) | (design.data == 1.0)):
            raise InvalidArgument(
                f"{design.name}: proportion without a predicate needs 0/1 values"
            )
        return compute_mean(design)
    hits = sum(1 for v in design.data if predicate(float(v)))
    return hits / design.n


def running_mean(x: ArrayLike | EmpiricalDesign) -> NDArray[np.floating[Any]]:
    """Mean of the first 1, 2, ..., n values: a Monte Carlo convergence trace."""
    return compute_running_mean(_ensure_design(x))


def _ppoints(n: int) -> NDArray[np.floating[Any]]:
    """R ppoints(): (i - a) / (n + 1 - 2a), a = 3/8 for n <= 10 else 1/2."""
    a = 3.0 / 8.0 if n <= 10 else 0.5
    return (np.arange(1, n + 1) - a) / (n + 1 - 2 * a)


def qq_pairs(
    x: ArrayLike | EmpiricalDesign,
    probs: ArrayLike | None = None,
    *,
    mean: float | None = None,
    sd: float | None = None,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Theoretical normal quantiles paired with sample quantiles.

    The numeric half of a normal QQ plot. The reference normal defaults to
    the sample's own mean and sd.

    Returns
    -------
    (theoretical, observed), both aligned with probs (default ppoints(n)).
    """
    design = _ensure_design(x)
    p = _ppoints(design.n) if probs is None else _check_probs(probs)
    loc = compute_mean(design) if mean is None else float(mean)
    scale = compute_sd(design) if sd is None else check_positive(sd, 'sd')
    theoretical = stats.norm.ppf(p, loc=loc, scale=scale)
    observed = compute_quantiles(design, p, DEFAULT_QUANTILE_TYPE)
    return theoretical, observed


def summarize(
    x: ArrayLike | EmpiricalDesign,
    *,
    quantile_type: int = DEFAULT_QUANTILE_TYPE,
) -> SummaryStatistics:
    """
    Summary statistics of a numeric sequence.

    Computes n, mean, sd (n-1), min, max and the quantile table at
    (0, 0.25, 0.5, 0.75, 1). Never fails for non-empty input.

    Raises
    ------
    EmptyInput
        For a length-0 sequence.
    """
    qtype = check_quantile_type(quantile_type)
    design = _ensure_design(x)
    result = CPUEmpiricalBackend().solve(design, quantile_type=qtype)
    return SummaryStatistics(_result=result, _design=design)
