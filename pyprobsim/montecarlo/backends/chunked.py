"""
Chunk-parallel backend for replication.

B replicates are split into contiguous chunks. Each run spawns one fresh
child stream per chunk from the master source, so chunks share no
mutable state and may run in any order or in parallel, while successive
runs on one source stay independent. Results are concatenated in chunk
order, which makes the outcome sequence identical for every n_jobs.
"""

from __future__ import annotations

from pyprobsim.core.result import Result
from pyprobsim.core.compute.timing import Timer
from pyprobsim.core.random_source import RandomSource
from pyprobsim.montecarlo._common import (
    ReplicationParams,
    failure_warning,
    run_cycles,
)
from pyprobsim.montecarlo.design import ReplicationDesign


def _run_chunk(
    design: ReplicationDesign,
    source: RandomSource,
    start: int,
    stop: int,
):
    return run_cycles(design, source, start, stop)


class ChunkedReplicationBackend:
    """
    Backend running independently seeded chunks, optionally through joblib.

    Args:
        n_jobs: Worker count passed to joblib.Parallel. 1 runs the chunks
            in a plain loop; -1 uses all cores.
    """

    def __init__(self, n_jobs: int = 1):
        self._n_jobs = n_jobs

    @property
    def name(self) -> str:
        return 'chunked_replicate'

    def solve(self, design: ReplicationDesign) -> Result[ReplicationParams]:
        """Run every chunk, merge in chunk order, return Result[ReplicationParams]."""
        timer = Timer()
        timer.start()

        bounds = design.chunk_bounds()
        sources = design.source.spawn(len(bounds))

        with timer.section('replicates'):
            if self._n_jobs == 1:
                chunk_results = [
                    _run_chunk(design, src, start, stop)
                    for src, (start, stop) in zip(sources, bounds)
                ]
            else:
                from joblib import Parallel, delayed

                chunk_results = Parallel(n_jobs=self._n_jobs)(
                    delayed(_run_chunk)(design, src, start, stop)
                    for src, (start, stop) in zip(sources, bounds)
                )

        with timer.section('merge'):
            outcomes: list[float] = []
            index: list[int] = []
            failures: list[tuple[int, str]] = []
            for chunk_outcomes, chunk_index, chunk_failures in chunk_results:
                outcomes.extend(chunk_outcomes)
                index.extend(chunk_index)
                failures.extend(chunk_failures)

        timer.stop()

        failures_t = tuple(failures)
        warnings_list: list[str] = []
        if failures_t:
            warnings_list.append(failure_warning(len(failures_t), design.B, failures_t))

        params = ReplicationParams.build(outcomes, index, failures_t, design.B)

        return Result(
            params=params,
            info={
                'seed': design.source.seed,
                'B': design.B,
                'k': design.spec.k,
                'discipline': design.spec.discipline,
                'n_failed': len(failures_t),
                'n_chunks': len(bounds),
                'chunk_sizes': [stop - start for start, stop in bounds],
                'n_jobs': self._n_jobs,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
