"""
Tests for sample quantiles (Hyndman & Fan types 1-9) and quantile().

Expected values are R 4.x output of quantile(x, probs, type=t).
"""

from __future__ import annotations

import numpy as np
import pytest

from pyprobsim.core.exceptions import EmptyInput, InvalidArgument
from pyprobsim.descriptive import quantile
from pyprobsim.descriptive._quantile_types import (
    DEFAULT_QUANTILE_TYPE,
    sample_quantile,
)


# ---------------------------------------------------------------------------
# Expected values from R
# ---------------------------------------------------------------------------

# x = 1:5, probs = c(0, 0.25, 0.5, 0.75, 1)
R_QUANTILES_1TO5 = {
    1: [1, 2, 3, 4, 5],
    2: [1, 2, 3, 4, 5],
    3: [1, 1, 2, 4, 5],
    4: [1, 1.25, 2.5, 3.75, 5],
    5: [1, 1.75, 3, 4.25, 5],
    6: [1, 1.5, 3, 4.5, 5],
    7: [1, 2, 3, 4, 5],
    8: [1, 5 / 3, 3, 13 / 3, 5],
    9: [1, 1.6875, 3, 4.3125, 5],
}

# x = sort(c(2.1, 5.3, 8.7, 1.4, 9.2, 3.6, 7.8, 4.5, 6.9, 0.3))
# probs = c(0, 0.1, 0.25, 0.5, 0.75, 0.9, 1)
R_QUANTILES_10ELEM = {
    1: [0.3, 0.3, 2.1, 4.5, 7.8, 8.7, 9.2],
    2: [0.3, 0.85, 2.1, 4.9, 7.8, 8.95, 9.2],
    3: [0.3, 0.3, 1.4, 4.5, 7.8, 8.7, 9.2],
    4: [0.3, 0.3, 1.75, 4.5, 7.35, 8.7, 9.2],
    5: [0.3, 0.85, 2.1, 4.9, 7.8, 8.95, 9.2],
    6: [0.3, 0.41, 1.925, 4.9, 8.025, 9.15, 9.2],
    7: [0.3, 1.29, 2.475, 4.9, 7.575, 8.75, 9.2],
    8: [0.3, 0.7033333333333331, 2.0416666666666665, 4.9, 7.875, 9.0166666666666657, 9.2],
    9: [0.3, 0.74, 2.05625, 4.9, 7.85625, 9.0, 9.2],
}

# x = c(10, 20), probs = c(0, 0.25, 0.5, 0.75, 1)
R_QUANTILES_N2 = {
    1: [10, 10, 10, 20, 20],
    2: [10, 10, 15, 20, 20],
    3: [10, 10, 10, 20, 20],
    4: [10, 10, 10, 15, 20],
    5: [10, 10, 15, 20, 20],
    6: [10, 10, 15, 20, 20],
    7: [10, 12.5, 15, 17.5, 20],
    8: [10, 10, 15, 20, 20],
    9: [10, 10, 15, 20, 20],
}

# x = c(1,1,1,2,2,3), probs = c(0, 0.25, 0.5, 0.75, 1)
R_QUANTILES_TIES = {
    1: [1, 1, 1, 2, 3],
    2: [1, 1, 1.5, 2, 3],
    3: [1, 1, 1, 2, 3],
    4: [1, 1, 1, 2, 3],
    5: [1, 1, 1.5, 2, 3],
    6: [1, 1, 1.5, 2.25, 3],
    7: [1, 1, 1.5, 2, 3],
    8: [1, 1, 1.5, 2.0833333333333330, 3],
    9: [1, 1, 1.5, 2.0625, 3],
}

PROBS_5 = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
TEN = np.sort(np.array([2.1, 5.3, 8.7, 1.4, 9.2, 3.6, 7.8, 4.5, 6.9, 0.3]))


# ---------------------------------------------------------------------------
# Low-level: sample_quantile()
# ---------------------------------------------------------------------------

class TestSampleQuantile:

    @pytest.mark.parametrize("qtype", range(1, 10))
    def test_x_1to5(self, qtype):
        x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        np.testing.assert_allclose(
            sample_quantile(x, PROBS_5, qtype), R_QUANTILES_1TO5[qtype], rtol=1e-12,
        )

    @pytest.mark.parametrize("qtype", range(1, 10))
    def test_10elem(self, qtype):
        probs = np.array([0.0, 0.1, 0.25, 0.5, 0.75, 0.9, 1.0])
        np.testing.assert_allclose(
            sample_quantile(TEN, probs, qtype), R_QUANTILES_10ELEM[qtype], rtol=1e-12,
        )

    @pytest.mark.parametrize("qtype", range(1, 10))
    def test_n2(self, qtype):
        x = np.array([10.0, 20.0])
        np.testing.assert_allclose(
            sample_quantile(x, PROBS_5, qtype), R_QUANTILES_N2[qtype], rtol=1e-12,
        )

    @pytest.mark.parametrize("qtype", range(1, 10))
    def test_ties(self, qtype):
        x = np.array([1.0, 1.0, 1.0, 2.0, 2.0, 3.0])
        np.testing.assert_allclose(
            sample_quantile(x, PROBS_5, qtype), R_QUANTILES_TIES[qtype], rtol=1e-12,
        )

    def test_single_element(self):
        x = np.array([42.0])
        for qtype in range(1, 10):
            np.testing.assert_array_equal(
                sample_quantile(x, PROBS_5, qtype), np.full(5, 42.0),
            )

    @pytest.mark.parametrize("qtype", [0, 10, True])
    def test_bad_type(self, qtype):
        with pytest.raises(InvalidArgument, match="Quantile type must be 1-9"):
            sample_quantile(TEN, PROBS_5, qtype)

    def test_default_is_type_7(self):
        assert DEFAULT_QUANTILE_TYPE == 7

    def test_type_7_matches_numpy(self):
        rng = np.random.default_rng(0)
        x = np.sort(rng.normal(size=101))
        probs = np.linspace(0, 1, 41)
        np.testing.assert_allclose(
            sample_quantile(x, probs), np.quantile(x, probs), rtol=1e-12,
        )


# ---------------------------------------------------------------------------
# Public: quantile()
# ---------------------------------------------------------------------------

class TestQuantile:

    def test_scalar_returns_float(self):
        q = quantile([1, 2, 3, 4, 5], 0.5)
        assert isinstance(q, float)
        assert q == 3.0

    def test_unsorted_input(self):
        x = [2.1, 5.3, 8.7, 1.4, 9.2, 3.6, 7.8, 4.5, 6.9, 0.3]
        np.testing.assert_allclose(
            quantile(x, [0.1, 0.9]), [1.29, 8.75], rtol=1e-12,
        )

    def test_type_keyword(self):
        assert quantile(TEN, 0.25, type=6) == pytest.approx(1.925)

    def test_endpoints(self, continuous_data):
        assert quantile(continuous_data, 0.0) == continuous_data.min()
        assert quantile(continuous_data, 1.0) == continuous_data.max()

    def test_monotone_in_p(self, continuous_data):
        q = quantile(continuous_data, np.linspace(0, 1, 101))
        assert np.all(np.diff(q) >= 0)

    @pytest.mark.parametrize("p", [-0.1, 1.5, float('nan')])
    def test_bad_probs(self, p):
        with pytest.raises(InvalidArgument, match="probs"):
            quantile([1, 2, 3], p)

    def test_empty(self):
        with pytest.raises(EmptyInput):
            quantile([], 0.5)
