"""
Exact probability calculations.

Closed-form counterparts to Monte Carlo estimates: binomial tails of ±1
sums, birthday collisions, ordered draws without replacement, the
addition rule and the normal approximation to a sum of draws.
"""

from pyprobsim.exact.solvers import (
    binomial_sum_tail,
    exact_birthday_probability,
    exact_conditional_probability,
    addition_rule,
    permutations,
    combinations,
    SumMoments,
    sum_of_draws_moments,
    normal_approximation_tail,
)

__all__ = [
    "binomial_sum_tail",
    "exact_birthday_probability",
    "exact_conditional_probability",
    "addition_rule",
    "permutations",
    "combinations",
    "SumMoments",
    "sum_of_draws_moments",
    "normal_approximation_tail",
]
