"""
pyprobsim Monte Carlo replication.

Runs a user-supplied trial B times over fresh samples and collects the
outcome sequence, sequentially or in independently seeded chunks.

Usage:
    from pyprobsim.montecarlo import SamplingSpec, replicate

    spec = SamplingSpec.of(urn, 1000, replacement=True)
    result = replicate(lambda s: s.sum(), spec, B=10_000, seed=42)
    result.mean, result.monte_carlo_se
"""

from pyprobsim.montecarlo.design import SamplingSpec, ReplicationDesign
from pyprobsim.montecarlo.solution import ReplicationSolution
from pyprobsim.montecarlo.solvers import replicate

__all__ = [
    "SamplingSpec",
    "ReplicationDesign",
    "ReplicationSolution",
    "replicate",
]
