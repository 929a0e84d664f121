"""
Sequential CPU backend for replication.

The correctness baseline: one stream, cycles in replicate order.
"""

from __future__ import annotations

from pyprobsim.core.result import Result
from pyprobsim.core.compute.timing import Timer
from pyprobsim.montecarlo._common import (
    ReplicationParams,
    failure_warning,
    run_cycles,
)
from pyprobsim.montecarlo.design import ReplicationDesign


class CPUReplicationBackend:
    """
    Sequential backend.

    Every cycle consumes draws from design.source in a fixed order, so
    the outcome sequence is a pure function of the seed and the stream
    position at entry.
    """

    @property
    def name(self) -> str:
        return 'cpu_replicate'

    def solve(self, design: ReplicationDesign) -> Result[ReplicationParams]:
        """Run B cycles and return Result[ReplicationParams]."""
        timer = Timer()
        timer.start()

        with timer.section('replicates'):
            outcomes, index, failures = run_cycles(
                design, design.source, 0, design.B,
            )

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
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
