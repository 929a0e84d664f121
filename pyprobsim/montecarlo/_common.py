"""
Common data structures and the cycle loop for Monte Carlo replication.

ReplicationParams is the payload wrapped by Result[P] and exposed
through ReplicationSolution. run_cycles() is shared by every backend so
that a chunk and a sequential run execute byte-for-byte the same loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.random_source import RandomSource
from pyprobsim.montecarlo.design import ReplicationDesign


@dataclass(frozen=True)
class ReplicationParams:
    """
    Parameter payload for a replication run.

    - outcomes: outcomes of the successful cycles, in replicate order
    - outcome_index: replicate index of each entry in outcomes
    - failures: (replicate index, "ExcType: message") per failed trial
    - B: number of cycles attempted
    """
    outcomes: NDArray[np.floating[Any]]        # shape (B - n_failed,)
    outcome_index: NDArray[np.integer[Any]]    # shape (B - n_failed,)
    failures: tuple[tuple[int, str], ...]
    B: int

    @classmethod
    def build(
        cls,
        outcomes: list[float],
        index: list[int],
        failures: tuple[tuple[int, str], ...],
        B: int,
    ) -> ReplicationParams:
        """Freeze collected cycle results into read-only arrays."""
        outcome_arr = np.asarray(outcomes, dtype=np.float64)
        index_arr = np.asarray(index, dtype=np.int64)
        outcome_arr.setflags(write=False)
        index_arr.setflags(write=False)
        return cls(outcomes=outcome_arr, outcome_index=index_arr, failures=failures, B=B)


def coerce_outcome(value: Any) -> float:
    """
    Convert one trial result to a float Outcome.

    Booleans become 0.0/1.0 so event indicators average into proportions.

    Raises:
        InvalidArgument: If the trial returned something other than a
            numeric or boolean scalar
    """
    arr = np.asarray(value)
    if arr.ndim != 0 or arr.dtype.kind not in 'biuf':
        raise InvalidArgument(
            f"trial must return a numeric or boolean scalar, got "
            f"{type(value).__name__} with shape {arr.shape}"
        )
    return float(arr)


def run_cycles(
    design: ReplicationDesign,
    source: RandomSource,
    start: int,
    stop: int,
) -> tuple[list[float], list[int], list[tuple[int, str]]]:
    """
    Run replicates [start, stop) against one stream.

    Each cycle draws a fresh Sample, then applies the trial. A trial that
    raises is recorded and skipped; the stream has already advanced past
    its sample, so later cycles are unaffected.
    """
    outcomes: list[float] = []
    index: list[int] = []
    failures: list[tuple[int, str]] = []

    spec = design.spec
    trial = design.trial
    for b in range(start, stop):
        drawn = spec.draw(source)
        try:
            outcomes.append(coerce_outcome(trial(drawn)))
        except Exception as exc:
            failures.append((b, f"{type(exc).__name__}: {exc}"))
            continue
        index.append(b)

    return outcomes, index, failures


def failure_warning(n_failed: int, B: int, failures: tuple[tuple[int, str], ...]) -> str:
    """Warning text for a run with failed trials."""
    first_index, first_message = failures[0]
    return (
        f"{n_failed} of {B} trials failed and were excluded "
        f"(first at replicate {first_index}: {first_message})"
    )
