"""
Empirical estimators.

Summary statistics of any numeric sequence: a raw population or the
outcome sequence of a replication run.

Public API:
    summarize(x)              - SummaryStatistics (n, mean, sd, quantile table, eCDF)
    mean(x), sd(x)            - sd is Bessel-corrected (n-1)
    ecdf(x, a)                - empirical CDF
    quantile(x, p)            - Hyndman & Fan types 1-9, default 7
    standard_units(x)         - (x - mean) / sd
    histogram(x, bin_width)   - (bin_start, count) pairs
    density_estimate(x)       - Gaussian KDE on a grid
    proportion, running_mean, qq_pairs
"""

from pyprobsim.descriptive.design import EmpiricalDesign
from pyprobsim.descriptive.solution import EmpiricalParams, SummaryStatistics
from pyprobsim.descriptive.solvers import (
    summarize,
    mean,
    sd,
    ecdf,
    quantile,
    standard_units,
    histogram,
    density_estimate,
    proportion,
    running_mean,
    qq_pairs,
)

__all__ = [
    "summarize",
    "mean",
    "sd",
    "ecdf",
    "quantile",
    "standard_units",
    "histogram",
    "density_estimate",
    "proportion",
    "running_mean",
    "qq_pairs",
    "EmpiricalDesign",
    "EmpiricalParams",
    "SummaryStatistics",
]
