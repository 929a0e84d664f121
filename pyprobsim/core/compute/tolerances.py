"""
Tolerance tiers for comparing results.

Defines agreement expectations for the two kinds of comparison the
library makes:
- deterministic paths (exact formulas, estimators): machine precision
- Monte Carlo estimates vs. exact probabilities: an absolute band that
  shrinks with the number of replications B

Used by the test suite and by ReplicationSolution.agrees_with().
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Closed-form routines and estimators: agree to machine precision
EXACT_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='exact_fp64',
    description='Double precision, deterministic computation',
)

# Proportion estimated from B >= 10,000 replications
MONTE_CARLO_10K = ToleranceTier(
    rtol=0.0,
    atol=0.02,
    name='monte_carlo_10k',
    description='Monte Carlo estimate, B >= 10,000',
)

# Mean or proportion estimated from B >= 1,000,000 replications
MONTE_CARLO_1M = ToleranceTier(
    rtol=0.0,
    atol=0.01,
    name='monte_carlo_1m',
    description='Monte Carlo estimate, B >= 1,000,000',
)


def select_tolerance(B: int | None = None) -> ToleranceTier:
    """Select the tolerance tier for a run of B replications (None = exact)."""
    if B is None:
        return EXACT_FP64
    if B >= 1_000_000:
        return MONTE_CARLO_1M
    return MONTE_CARLO_10K


def within_tolerance(estimate: float, reference: float, tier: ToleranceTier) -> bool:
    """|estimate - reference| <= atol + rtol * |reference|."""
    return abs(estimate - reference) <= tier.atol + tier.rtol * abs(reference)
