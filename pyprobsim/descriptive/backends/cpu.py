"""
CPU backend for empirical estimators.

The kernels below operate on a validated EmpiricalDesign; the
CPUEmpiricalBackend composes them into a SummaryStatistics payload.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.result import Result
from pyprobsim.core.compute.timing import Timer
from pyprobsim.core.validation import check_min_samples
from pyprobsim.descriptive.design import EmpiricalDesign
from pyprobsim.descriptive.solution import EmpiricalParams
from pyprobsim.descriptive._quantile_types import sample_quantile

SUMMARY_PROBS = np.array([0.0, 0.25, 0.5, 0.75, 1.0])

# Refuse histograms that would allocate absurd numbers of bins
MAX_BINS = 10_000_000


# --- Kernels ---

def compute_mean(design: EmpiricalDesign) -> float:
    return float(np.mean(design.data))


def compute_sd(design: EmpiricalDesign) -> float:
    """Standard deviation with Bessel correction (n-1)."""
    check_min_samples(design.data, 2, f"{design.name} (sd)")
    return float(np.std(design.data, ddof=1))


def compute_ecdf(design: EmpiricalDesign, a: NDArray) -> NDArray[np.floating[Any]]:
    """|{x_i <= a}| / n, right-continuous in a."""
    return np.searchsorted(design.sorted, a, side='right') / design.n


def compute_quantiles(design: EmpiricalDesign, probs: NDArray, qtype: int) -> NDArray:
    return sample_quantile(design.sorted, probs, qtype)


def compute_standard_units(design: EmpiricalDesign) -> NDArray[np.floating[Any]]:
    if design.n < 2 or design.is_constant:
        raise InvalidArgument(
            f"{design.name}: standard units need a non-constant sequence of "
            f"length >= 2 (sd would be 0 or undefined)"
        )
    return (design.data - compute_mean(design)) / compute_sd(design)


def compute_histogram(design: EmpiricalDesign, bin_width: float) -> tuple[tuple[float, int], ...]:
    """
    Half-open bins [start, start + w) from min(x); max(x) joins the last bin.
    """
    x_min = float(design.sorted[0])
    span = float(design.sorted[-1]) - x_min
    n_bins = max(1, int(np.ceil(span / bin_width)))
    if n_bins > MAX_BINS:
        raise InvalidArgument(
            f"bin_width={bin_width} yields {n_bins} bins over a range of "
            f"{span}; at most {MAX_BINS} are allowed"
        )
    edges = x_min + np.arange(n_bins + 1) * bin_width
    if edges[-1] < design.sorted[-1]:
        n_bins += 1
        edges = x_min + np.arange(n_bins + 1) * bin_width
    # Bin i holds edges[i] <= x < edges[i + 1]; the last also holds max(x)
    idx = np.searchsorted(edges, design.data, side='right') - 1
    idx = np.clip(idx, 0, n_bins - 1)
    counts = np.bincount(idx, minlength=n_bins)
    return tuple(
        (float(edges[i]), int(c)) for i, c in enumerate(counts)
    )


def compute_running_mean(design: EmpiricalDesign) -> NDArray[np.floating[Any]]:
    return np.cumsum(design.data) / np.arange(1, design.n + 1)


class CPUEmpiricalBackend:
    """CPU reference backend for summary statistics."""

    @property
    def name(self) -> str:
        return 'cpu_empirical'

    def solve(
        self,
        design: EmpiricalDesign,
        *,
        quantile_probs: NDArray | None = None,
        quantile_type: int = 7,
    ) -> Result[EmpiricalParams]:
        """
        Compute the summary payload.

        Never fails for a validated (non-empty) design; for n = 1 the sd is
        NaN and a warning is recorded.
        """
        timer = Timer()
        timer.start()

        warnings_list: list[str] = []
        probs = SUMMARY_PROBS if quantile_probs is None else quantile_probs

        with timer.section('mean'):
            mean = compute_mean(design)

        with timer.section('sd'):
            if design.n >= 2:
                sd = compute_sd(design)
            else:
                sd = float('nan')
                warnings_list.append(
                    f"{design.name}: sd undefined for a single value (n-1 = 0)"
                )

        with timer.section('quantiles'):
            quantiles = compute_quantiles(design, probs, quantile_type)

        quantile_probs = np.array(probs, dtype=np.float64)
        quantiles.setflags(write=False)
        quantile_probs.setflags(write=False)

        timer.stop()

        params = EmpiricalParams(
            n=design.n,
            mean=mean,
            sd=sd,
            minimum=float(design.sorted[0]),
            maximum=float(design.sorted[-1]),
            quantiles=quantiles,
            quantile_probs=quantile_probs,
            quantile_type=quantile_type,
        )

        return Result(
            params=params,
            info={'name': design.name, 'n': design.n},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
