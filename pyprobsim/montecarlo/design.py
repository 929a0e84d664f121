"""
Design classes for Monte Carlo replication.

SamplingSpec bundles a population with its sampling rule;
ReplicationDesign bundles everything a backend needs to run B
sample-then-trial cycles. Both are immutable and validated at
construction, so a run either starts clean or fails before any draw.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from numpy.typing import NDArray

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.protocols import Trial
from pyprobsim.core.random_source import RandomSource
from pyprobsim.core.validation import check_integer
from pyprobsim.sampling.population import (
    FinitePopulation,
    ParametricPopulation,
    Population,
)
from pyprobsim.sampling.solvers import check_without_replacement, sample


@dataclass(frozen=True)
class SamplingSpec:
    """
    Frozen sampling rule: which population, how many items, which discipline.

    Attributes:
        population: FinitePopulation or ParametricPopulation.
        k: Sample size per cycle.
        replacement: True/False for finite urns; None for parametric families.
    """
    population: Population
    k: int
    replacement: bool | None

    @classmethod
    def of(
        cls,
        population: Population,
        k: int,
        *,
        replacement: bool | None = None,
    ) -> SamplingSpec:
        """
        Create a sampling rule with validation.

        Raises:
            InvalidArgument: Bad k, missing `replacement` for an urn, or
                replacement=False for a parametric family.
            InsufficientPopulation: Without replacement and k > population size.
        """
        k = check_integer(k, 'k')

        if isinstance(population, FinitePopulation):
            if replacement is None:
                raise InvalidArgument(
                    "replacement: must be given explicitly (True or False) "
                    "when sampling a finite population"
                )
            replacement = bool(replacement)
            if not replacement:
                check_without_replacement(population, k)
        elif isinstance(population, ParametricPopulation):
            if replacement is False:
                raise InvalidArgument(
                    f"replacement=False is meaningless for a parametric "
                    f"{population.family} population"
                )
            replacement = None
        else:
            raise InvalidArgument(
                f"population: expected FinitePopulation or ParametricPopulation, "
                f"got {type(population).__name__}"
            )

        return cls(population=population, k=k, replacement=replacement)

    def draw(self, source: RandomSource) -> NDArray[Any]:
        """Draw one Sample following this rule."""
        return sample(self.population, self.k, replacement=self.replacement, source=source)

    @property
    def discipline(self) -> str:
        if self.replacement is None:
            return "parametric"
        return "with replacement" if self.replacement else "without replacement"


@dataclass(frozen=True)
class ReplicationDesign:
    """
    Frozen design for a replication run.

    Attributes:
        trial: Function Sample -> Outcome (numeric or boolean scalar).
        spec: Sampling rule applied before every trial.
        B: Number of replications.
        source: Stream for the run (the master stream for chunked runs).
        n_chunks: Number of independently seeded chunks, or None for a
            single sequential stream.
    """
    trial: Trial
    spec: SamplingSpec
    B: int
    source: RandomSource
    n_chunks: int | None = None

    @classmethod
    def for_replicate(
        cls,
        trial: Trial,
        spec: SamplingSpec,
        B: int,
        *,
        source: RandomSource,
        n_chunks: int | None = None,
    ) -> ReplicationDesign:
        """
        Create a replication design with validation.

        Raises:
            InvalidArgument: If trial is not callable, spec is not a
                SamplingSpec, B <= 0 or n_chunks is outside [1, B].
        """
        if not isinstance(trial, Trial):
            raise InvalidArgument(
                f"trial: expected a callable Sample -> Outcome, got {type(trial).__name__}"
            )
        if not isinstance(spec, SamplingSpec):
            raise InvalidArgument(
                f"sampling_spec: expected SamplingSpec, got {type(spec).__name__}"
            )
        B = check_integer(B, 'B', minimum=1)

        if n_chunks is not None:
            n_chunks = check_integer(n_chunks, 'n_chunks', minimum=1)
            if n_chunks > B:
                raise InvalidArgument(
                    f"n_chunks: must be <= B, got n_chunks={n_chunks}, B={B}"
                )

        return cls(trial=trial, spec=spec, B=B, source=source, n_chunks=n_chunks)

    def chunk_bounds(self) -> list[tuple[int, int]]:
        """
        Contiguous [start, stop) replicate ranges, one per chunk.

        The first B % n_chunks chunks carry one extra replicate.
        """
        n_chunks = self.n_chunks or 1
        base, extra = divmod(self.B, n_chunks)
        bounds = []
        start = 0
        for i in range(n_chunks):
            stop = start + base + (1 if i < extra else 0)
            bounds.append((start, stop))
            start = stop
        return bounds
