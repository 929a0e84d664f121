"""
Solution wrapper for replication results.

ReplicationSolution is the OutcomeSequence handed to callers: it wraps
Result[ReplicationParams] and provides read-only accessors, Monte Carlo
summaries and an R-style summary() printout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyprobsim.core.result import Result
from pyprobsim.core.compute.tolerances import (
    ToleranceTier,
    select_tolerance,
    within_tolerance,
)
from pyprobsim.descriptive import solvers as descriptive
from pyprobsim.montecarlo._common import ReplicationParams

if TYPE_CHECKING:
    from pyprobsim.descriptive.solution import SummaryStatistics
    from pyprobsim.montecarlo.design import ReplicationDesign


@dataclass
class ReplicationSolution:
    """
    User-facing replication results.

    Aggregates (mean, proportion, summarize) are computed over the
    successful outcomes only; failed trials are counted, not imputed.
    """
    _result: Result[ReplicationParams]
    _design: 'ReplicationDesign'

    # --- Outcome sequence ---

    @property
    def outcomes(self) -> NDArray[np.floating[Any]]:
        """Outcomes of the successful trials, in replicate order (read-only)."""
        return self._result.params.outcomes

    @property
    def outcome_index(self) -> NDArray[np.integer[Any]]:
        """Replicate index of each entry in `outcomes` (read-only)."""
        return self._result.params.outcome_index

    @property
    def B(self) -> int:
        """Number of replications attempted."""
        return self._result.params.B

    @property
    def n_succeeded(self) -> int:
        return int(self._result.params.outcomes.shape[0])

    @property
    def n_failed(self) -> int:
        return len(self._result.params.failures)

    @property
    def failures(self) -> tuple[tuple[int, str], ...]:
        """(replicate index, "ExcType: message") for each failed trial."""
        return self._result.params.failures

    def __len__(self) -> int:
        return self.n_succeeded

    # --- Estimates ---

    @property
    def mean(self) -> float:
        """Monte Carlo estimate of E[outcome]."""
        return descriptive.mean(self._result.params.outcomes)

    def proportion(self, predicate: Callable[[float], bool] | None = None) -> float:
        """
        Fraction of outcomes satisfying `predicate`.

        Without a predicate the outcomes are taken as 0/1 event indicators
        and their mean is returned.
        """
        if predicate is None:
            return self.mean
        return descriptive.proportion(self._result.params.outcomes, predicate)

    @property
    def monte_carlo_se(self) -> float:
        """Standard error of the Monte Carlo mean: sd / sqrt(n)."""
        x = self._result.params.outcomes
        return descriptive.sd(x) / np.sqrt(x.shape[0])

    def running_mean(self) -> NDArray[np.floating[Any]]:
        """Estimate after 1, 2, ..., n successful replications."""
        return descriptive.running_mean(self._result.params.outcomes)

    def summarize(self) -> 'SummaryStatistics':
        """SummaryStatistics over the successful outcomes."""
        return descriptive.summarize(self._result.params.outcomes)

    def agrees_with(self, exact: float, tier: ToleranceTier | None = None) -> bool:
        """
        Whether the Monte Carlo mean lies within `tier` of an exact value.

        The default tier is chosen from B (see select_tolerance).
        """
        if tier is None:
            tier = select_tolerance(self.B)
        return within_tolerance(self.mean, exact, tier)

    # --- Metadata ---

    @property
    def seed(self) -> int:
        return self._design.source.seed

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

    # --- Display ---

    def summary(self) -> str:
        """
        Replication summary.

        Produces:
            MONTE CARLO REPLICATION

            Replications: 10000 (0 failed)
            Sampling: k=1000, with replacement
            Estimate:  -52.6340   MC std. error: 0.3160
        """
        lines = [
            "\nMONTE CARLO REPLICATION",
            "",
            f"Replications: {self.B} ({self.n_failed} failed)",
            f"Sampling: k={self._design.spec.k}, {self._design.spec.discipline}",
        ]
        if self.n_succeeded >= 2:
            lines.append(
                f"Estimate: {self.mean:12.5f}   MC std. error: {self.monte_carlo_se:.5f}"
            )
        elif self.n_succeeded == 1:
            lines.append(f"Estimate: {self.mean:12.5f}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ReplicationSolution(B={self.B}, failed={self.n_failed}, "
            f"backend={self.backend_name!r})"
        )
