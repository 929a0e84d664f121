"""Empirical estimator backends."""
