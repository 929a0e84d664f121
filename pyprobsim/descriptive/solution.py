"""
Summary statistics solution types.

Contains the parameter payload and the user-facing SummaryStatistics view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyprobsim.core.result import Result

if TYPE_CHECKING:
    from pyprobsim.descriptive.design import EmpiricalDesign


@dataclass(frozen=True)
class EmpiricalParams:
    """
    Parameter payload for summary statistics.

    sd uses the n-1 divisor and is NaN when n == 1.
    quantiles line up with quantile_probs (default 0, .25, .5, .75, 1).
    """
    n: int
    mean: float
    sd: float
    minimum: float
    maximum: float
    quantiles: NDArray[np.floating[Any]]
    quantile_probs: NDArray[np.floating[Any]]
    quantile_type: int


@dataclass
class SummaryStatistics:
    """
    Read-only summary of one numeric sequence.

    Wraps Result[EmpiricalParams]. Anything beyond the stored table
    (eCDF values, other quantiles, standard units) is recomputed from the
    design's data on each call.
    """
    _result: Result[EmpiricalParams]
    _design: 'EmpiricalDesign'

    # --- Stored statistics ---

    @property
    def n(self) -> int:
        return self._result.params.n

    @property
    def mean(self) -> float:
        return self._result.params.mean

    @property
    def sd(self) -> float:
        """Standard deviation (Bessel-corrected, n-1)."""
        return self._result.params.sd

    @property
    def minimum(self) -> float:
        return self._result.params.minimum

    @property
    def maximum(self) -> float:
        return self._result.params.maximum

    @property
    def median(self) -> float:
        from pyprobsim.descriptive.solvers import quantile
        return quantile(self._design, 0.5, type=self.quantile_type)

    @property
    def quantiles(self) -> NDArray[np.floating[Any]]:
        """Quantile table values, aligned with quantile_probs."""
        return self._result.params.quantiles

    @property
    def quantile_probs(self) -> NDArray[np.floating[Any]]:
        return self._result.params.quantile_probs

    @property
    def quantile_type(self) -> int:
        return self._result.params.quantile_type

    # --- Derived on demand ---

    def ecdf(self, a: float | ArrayLike) -> float | NDArray[np.floating[Any]]:
        """Empirical CDF of the summarized data at a."""
        from pyprobsim.descriptive.solvers import ecdf
        return ecdf(self._design, a)

    def quantile(self, probs: float | ArrayLike) -> float | NDArray[np.floating[Any]]:
        """Quantile(s) using the same type as the stored table."""
        from pyprobsim.descriptive.solvers import quantile
        return quantile(self._design, probs, type=self.quantile_type)

    def standard_units(self) -> NDArray[np.floating[Any]]:
        from pyprobsim.descriptive.solvers import standard_units
        return standard_units(self._design)

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """
        R-style summary output.

        Produces:
               Min.   1st Qu.    Median      Mean   3rd Qu.      Max.
             1.0000    2.0000    3.0000    3.0000    4.0000    5.0000
             n = 5, sd = 1.5811
        """
        labels = ["Min.", "1st Qu.", "Median", "Mean", "3rd Qu.", "Max."]
        if (len(self.quantile_probs) == 5
                and np.allclose(self.quantile_probs, [0.0, 0.25, 0.5, 0.75, 1.0])):
            q = self.quantiles
            values = [q[0], q[1], q[2], self.mean, q[3], q[4]]
        else:
            labels = ["Min.", "Mean", "Max."]
            values = [self.minimum, self.mean, self.maximum]

        width = max(10, max(len(f"{v:.4f}") for v in values) + 2)
        lines = [
            "".join(label.rjust(width) for label in labels),
            "".join(f"{v:.4f}".rjust(width) for v in values),
            f"  n = {self.n}, sd = {self.sd:.4f}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SummaryStatistics(n={self.n}, mean={self.mean:.6g}, "
            f"sd={self.sd:.6g})"
        )
