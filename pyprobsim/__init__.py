"""
pyprobsim: reproducible Monte Carlo probability for Python.

A sampler that draws from finite urns or parametric families through a
seeded RandomSource, a replicator that runs a trial many times, empirical
estimators for the resulting sequences, and exact probability routines to
check them against.

Submodules:
    sampling: Populations and samplers (with / without replacement, parametric)
    montecarlo: replicate() and the outcome sequence
    descriptive: mean, sd, eCDF, quantiles, histograms, density estimates
    exact: binomial tails, birthday collisions, sequential-draw probabilities
"""

__version__ = "0.1.0"

from pyprobsim.core.random_source import RandomSource, configure
from pyprobsim.core.exceptions import (
    ProbSimError,
    ValidationError,
    InvalidArgument,
    InsufficientPopulation,
    EmptyInput,
    UnsupportedDistribution,
)
from pyprobsim import sampling
from pyprobsim import montecarlo
from pyprobsim import descriptive
from pyprobsim import exact
from pyprobsim.sampling import FinitePopulation, ParametricPopulation, sample
from pyprobsim.montecarlo import SamplingSpec, replicate
from pyprobsim.descriptive import summarize
from pyprobsim.exact import (
    exact_birthday_probability,
    exact_conditional_probability,
)

__all__ = [
    "__version__",
    # Randomness
    "RandomSource",
    "configure",
    # Errors
    "ProbSimError",
    "ValidationError",
    "InvalidArgument",
    "InsufficientPopulation",
    "EmptyInput",
    "UnsupportedDistribution",
    # Submodules
    "sampling",
    "montecarlo",
    "descriptive",
    "exact",
    # External surface
    "FinitePopulation",
    "ParametricPopulation",
    "sample",
    "SamplingSpec",
    "replicate",
    "summarize",
    "exact_birthday_probability",
    "exact_conditional_probability",
]
