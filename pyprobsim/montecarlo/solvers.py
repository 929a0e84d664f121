"""
Solver dispatch for Monte Carlo replication.

Provides replicate() as the public entry point.
"""

from __future__ import annotations

import warnings
from typing import Literal

from pyprobsim.core.exceptions import InvalidArgument
from pyprobsim.core.protocols import Backend, Trial
from pyprobsim.core.random_source import RandomSource, resolve_source
from pyprobsim.montecarlo.design import ReplicationDesign, SamplingSpec
from pyprobsim.montecarlo.solution import ReplicationSolution
from pyprobsim.montecarlo.backends.cpu import CPUReplicationBackend


BackendChoice = Literal['cpu', 'chunked']

# Chunk count for backend='chunked' when n_chunks is not given. A fixed
# constant, never the CPU count, so outputs do not depend on the machine.
DEFAULT_N_CHUNKS = 8


def _get_backend(backend: str, n_jobs: int) -> Backend:
    """Select backend for replication."""
    if backend == 'cpu':
        return CPUReplicationBackend()
    if backend == 'chunked':
        from pyprobsim.montecarlo.backends.chunked import ChunkedReplicationBackend
        return ChunkedReplicationBackend(n_jobs=n_jobs)
    raise InvalidArgument(
        f"Unknown backend: {backend!r}. Use 'cpu' or 'chunked'."
    )


def replicate(
    trial: Trial,
    sampling_spec: SamplingSpec,
    B: int,
    *,
    source: RandomSource | None = None,
    seed: int | None = None,
    backend: BackendChoice = 'cpu',
    n_chunks: int | None = None,
    n_jobs: int = 1,
) -> ReplicationSolution:
    """
    Run B independent sample-then-trial cycles.

    Parameters
    ----------
    trial : callable
        Sample -> Outcome. Must return a numeric or boolean scalar.
    sampling_spec : SamplingSpec
        Population and sampling rule, e.g.
        SamplingSpec.of(urn, 1000, replacement=True).
    B : int
        Number of replications, >= 1.
    source : RandomSource, optional
        Stream to draw from. Mutually exclusive with `seed`.
    seed : int, optional
        Seed for a fresh stream dedicated to this run.
    backend : str
        'cpu' (sequential, default) or 'chunked'.
    n_chunks : int, optional
        Chunk count for backend='chunked'. Default 8 (capped at B).
    n_jobs : int
        joblib worker count for backend='chunked'. Does not affect the
        outcomes, only the wall-clock time.

    Returns
    -------
    ReplicationSolution

    Raises
    ------
    InvalidArgument
        If B <= 0 or options are inconsistent.
    InsufficientPopulation
        If the sampling rule draws without replacement more items than
        the population holds (checked before any cycle runs).

    Examples
    --------
    >>> urn = FinitePopulation.from_items([-1, 1], weights=[9/19, 10/19])
    >>> spec = SamplingSpec.of(urn, 1000, replacement=True)
    >>> result = replicate(lambda s: s.sum() < 0, spec, B=10_000, seed=1)
    >>> result.proportion()
    """
    if backend == 'cpu' and n_chunks is not None:
        raise InvalidArgument("n_chunks applies to backend='chunked' only")
    if backend == 'chunked' and n_chunks is None:
        if isinstance(B, int) and not isinstance(B, bool) and B >= 1:
            n_chunks = min(DEFAULT_N_CHUNKS, B)

    stream = resolve_source(source, seed)
    design = ReplicationDesign.for_replicate(
        trial, sampling_spec, B, source=stream, n_chunks=n_chunks,
    )
    be = _get_backend(backend, n_jobs)
    result = be.solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return ReplicationSolution(_result=result, _design=design)
