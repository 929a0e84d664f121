"""
Shared compute infrastructure for pyprobsim.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared numeric infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Agreement tiers for exact and Monte Carlo comparisons
"""

from pyprobsim.core.compute.timing import Timer, timed
from pyprobsim.core.compute.tolerances import (
    ToleranceTier,
    EXACT_FP64,
    MONTE_CARLO_10K,
    MONTE_CARLO_1M,
    select_tolerance,
    within_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "EXACT_FP64",
    "MONTE_CARLO_10K",
    "MONTE_CARLO_1M",
    "select_tolerance",
    "within_tolerance",
]
