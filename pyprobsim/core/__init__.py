"""
Core infrastructure for pyprobsim.

This module provides shared abstractions and utilities used by all
domain-specific submodules (sampling, montecarlo, descriptive, exact).

Key components:
    protocols: Trial, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    random_source: RandomSource and the process default (configure)
    compute: Timing and tolerance tiers
"""

from pyprobsim.core.protocols import Trial, Backend
from pyprobsim.core.result import Result
from pyprobsim.core.random_source import (
    RandomSource,
    configure,
    get_default_source,
)
from pyprobsim.core.exceptions import (
    ProbSimError,
    ValidationError,
    InvalidArgument,
    DimensionError,
    InsufficientPopulation,
    EmptyInput,
    UnsupportedDistribution,
)

__all__ = [
    # Protocols
    "Trial",
    "Backend",
    # Result
    "Result",
    # Randomness
    "RandomSource",
    "configure",
    "get_default_source",
    # Exceptions
    "ProbSimError",
    "ValidationError",
    "InvalidArgument",
    "DimensionError",
    "InsufficientPopulation",
    "EmptyInput",
    "UnsupportedDistribution",
]
