"""
Populations and samplers.

Usage:
    from pyprobsim import RandomSource
    from pyprobsim.sampling import FinitePopulation, sample_without_replacement

    source = RandomSource(1986)
    urn = FinitePopulation.from_counts({"red": 3, "blue": 2})
    beads = sample_without_replacement(urn, 3, source=source)
"""

from pyprobsim.sampling.population import (
    FinitePopulation,
    ParametricPopulation,
    Population,
)
from pyprobsim.sampling._families import supported_families
from pyprobsim.sampling.solvers import (
    sample,
    sample_without_replacement,
    sample_with_replacement,
    sample_parametric,
)

__all__ = [
    "FinitePopulation",
    "ParametricPopulation",
    "Population",
    "supported_families",
    "sample",
    "sample_without_replacement",
    "sample_with_replacement",
    "sample_parametric",
]
