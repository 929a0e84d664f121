"""
Tests for the empirical estimators and summarize().

Covers mean/sd conventions, eCDF step behaviour, the quantile/eCDF
round trip, standard units, histogram bins, the kernel density estimate
and input validation shared by every estimator.
"""

import numpy as np
import pytest

from pyprobsim.core.exceptions import DimensionError, EmptyInput, InvalidArgument
from pyprobsim.descriptive import (
    EmpiricalDesign,
    density_estimate,
    ecdf,
    histogram,
    mean,
    proportion,
    qq_pairs,
    quantile,
    running_mean,
    sd,
    standard_units,
    summarize,
)


# ---------------------------------------------------------------------------
# Validation shared by all estimators
# ---------------------------------------------------------------------------

class TestInputValidation:

    @pytest.mark.parametrize("estimator", [mean, sd, standard_units, running_mean, summarize])
    def test_empty(self, estimator):
        with pytest.raises(EmptyInput):
            estimator([])

    def test_empty_ecdf(self):
        with pytest.raises(EmptyInput):
            ecdf([], 0.0)

    def test_non_finite(self):
        with pytest.raises(InvalidArgument, match="NaN"):
            mean([1.0, float('nan')])

    def test_non_numeric(self):
        with pytest.raises(InvalidArgument):
            mean(["a", "b"])

    def test_matrix(self):
        with pytest.raises(DimensionError):
            mean(np.ones((3, 2)))

    def test_design_passthrough(self, continuous_data):
        design = EmpiricalDesign.from_array(continuous_data, name='heights')
        assert mean(design) == pytest.approx(np.mean(continuous_data))
        assert design.n == 500
        assert repr(design) == "EmpiricalDesign(name='heights', n=500)"

    def test_design_data_read_only(self):
        design = EmpiricalDesign.from_array([3.0, 1.0, 2.0])
        np.testing.assert_array_equal(design.sorted, [1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            design.data[0] = 0.0


# ---------------------------------------------------------------------------
# Mean and standard deviation
# ---------------------------------------------------------------------------

class TestMoments:

    def test_mean(self):
        assert mean([1, 2, 3, 4, 5]) == 3.0

    def test_mean_of_indicators(self):
        assert mean([True, False, True, True]) == 0.75

    def test_sd_bessel(self):
        assert sd([1, 2, 3, 4, 5]) == pytest.approx(np.sqrt(2.5), rel=1e-12)

    def test_sd_matches_numpy(self, continuous_data):
        assert sd(continuous_data) == pytest.approx(np.std(continuous_data, ddof=1), rel=1e-12)

    def test_sd_single_value(self):
        with pytest.raises(InvalidArgument, match="at least 2"):
            sd([4.0])

    def test_running_mean(self):
        np.testing.assert_allclose(running_mean([2, 4, 6, 8]), [2, 3, 4, 5])


# ---------------------------------------------------------------------------
# eCDF
# ---------------------------------------------------------------------------

class TestEcdf:

    def test_step_values(self):
        x = [1, 2, 2, 3]
        assert ecdf(x, 2) == 0.75
        assert ecdf(x, 1.999) == 0.25
        assert ecdf(x, 2.5) == 0.75

    def test_flat_outside_range(self, continuous_data):
        lo, hi = continuous_data.min(), continuous_data.max()
        assert ecdf(continuous_data, lo - 1.0) == 0.0
        assert ecdf(continuous_data, -1e300) == 0.0
        assert ecdf(continuous_data, hi) == 1.0
        assert ecdf(continuous_data, hi + 100.0) == 1.0

    def test_vectorised_and_monotone(self, continuous_data):
        a = np.linspace(55, 85, 200)
        values = ecdf(continuous_data, a)
        assert values.shape == (200,)
        assert np.all(np.diff(values) >= 0)
        assert np.all((values >= 0) & (values <= 1))

    def test_nan_point(self):
        with pytest.raises(InvalidArgument):
            ecdf([1, 2, 3], float('nan'))

    @pytest.mark.parametrize("a", ["abc", [object()], [1.0, "x"]])
    def test_non_numeric_point(self, a):
        with pytest.raises(InvalidArgument, match="a: expected real evaluation points"):
            ecdf([1, 2, 3], a)

    def test_round_trip_with_quantile(self, continuous_data):
        n = continuous_data.shape[0]
        probs = np.linspace(0.0, 1.0, 201)
        back = ecdf(continuous_data, quantile(continuous_data, probs))
        np.testing.assert_array_less(np.abs(back - probs), 1.0 / n + 1e-12)


# ---------------------------------------------------------------------------
# Standard units
# ---------------------------------------------------------------------------

class TestStandardUnits:

    def test_mean_zero_sd_one(self, continuous_data):
        z = standard_units(continuous_data)
        assert np.mean(z) == pytest.approx(0.0, abs=1e-12)
        assert np.std(z, ddof=1) == pytest.approx(1.0, rel=1e-12)

    def test_order_preserved(self):
        z = standard_units([3.0, 1.0, 2.0])
        np.testing.assert_allclose(z, [1.0, -1.0, 0.0])

    @pytest.mark.parametrize("x", [[5.0, 5.0, 5.0], [1.0]])
    def test_degenerate(self, x):
        with pytest.raises(InvalidArgument, match="non-constant"):
            standard_units(x)


# ---------------------------------------------------------------------------
# Histogram
# ---------------------------------------------------------------------------

class TestHistogram:

    def test_bins(self):
        assert histogram([0, 1, 2, 3, 4, 5], 2) == ((0.0, 2), (2.0, 2), (4.0, 2))

    def test_max_on_edge_joins_last_bin(self):
        assert histogram([0, 1, 2, 3, 4], 2) == ((0.0, 2), (2.0, 3))

    def test_counts_sum_to_n(self, continuous_data):
        for w in (0.1, 0.5, 1.0, 3.7, 100.0):
            bins = histogram(continuous_data, w)
            assert sum(c for _, c in bins) == 500
            starts = [s for s, _ in bins]
            assert starts[0] == continuous_data.min()
            np.testing.assert_allclose(np.diff(starts), w)

    def test_constant_input(self):
        assert histogram([7.0, 7.0, 7.0], 1.0) == ((7.0, 3),)

    @pytest.mark.parametrize("w", [0, -1, float('inf')])
    def test_bad_width(self, w):
        with pytest.raises(InvalidArgument, match="bin_width"):
            histogram([1, 2, 3], w)

    def test_too_many_bins(self):
        with pytest.raises(InvalidArgument, match="bins"):
            histogram([0.0, 1e9], 1e-3)


# ---------------------------------------------------------------------------
# Kernel density
# ---------------------------------------------------------------------------

class TestDensity:

    def test_integrates_to_one(self, continuous_data):
        grid, dens = density_estimate(continuous_data)
        assert grid.shape == dens.shape == (512,)
        assert np.sum(dens) * (grid[1] - grid[0]) == pytest.approx(1.0, abs=0.01)
        assert np.all(dens >= 0)

    def test_peak_near_center(self, continuous_data):
        grid, dens = density_estimate(continuous_data)
        assert grid[np.argmax(dens)] == pytest.approx(69.0, abs=1.5)

    def test_explicit_bandwidth(self):
        grid, dens = density_estimate([0.0], 1.0, grid_size=1001, cut=5.0)
        assert grid[0] == pytest.approx(-5.0)
        assert grid[-1] == pytest.approx(5.0)
        assert dens[500] == pytest.approx(1.0 / np.sqrt(2 * np.pi))

    def test_single_value_needs_bandwidth(self):
        with pytest.raises(InvalidArgument, match="bandwidth"):
            density_estimate([1.0])

    def test_bad_bandwidth(self, continuous_data):
        with pytest.raises(InvalidArgument):
            density_estimate(continuous_data, -0.5)


# ---------------------------------------------------------------------------
# Proportion and QQ pairs
# ---------------------------------------------------------------------------

class TestProportion:

    def test_indicators(self):
        assert proportion([0, 1, 1, 0]) == 0.5
        assert proportion([True, True, False, True]) == 0.75

    def test_predicate(self, continuous_data):
        assert proportion(continuous_data, lambda v: v > 69.0) == pytest.approx(
            np.mean(continuous_data > 69.0)
        )

    def test_non_indicator_needs_predicate(self):
        with pytest.raises(InvalidArgument, match="0/1"):
            proportion([0, 2, 1])


class TestQQPairs:

    def test_normal_data_line_up(self, continuous_data):
        theoretical, observed = qq_pairs(continuous_data)
        assert theoretical.shape == observed.shape == (500,)
        assert np.corrcoef(theoretical, observed)[0, 1] > 0.99

    def test_reference_normal(self):
        theoretical, observed = qq_pairs([1, 2, 3, 4, 5], [0.5], mean=0.0, sd=1.0)
        np.testing.assert_allclose(theoretical, [0.0], atol=1e-15)
        np.testing.assert_allclose(observed, [3.0])


# ---------------------------------------------------------------------------
# summarize()
# ---------------------------------------------------------------------------

class TestSummarize:

    def test_table(self):
        s = summarize([1, 2, 3, 4, 5])
        assert s.n == 5
        assert s.mean == 3.0
        assert s.sd == pytest.approx(np.sqrt(2.5))
        assert s.minimum == 1.0
        assert s.maximum == 5.0
        np.testing.assert_allclose(s.quantiles, [1, 2, 3, 4, 5])
        assert s.median == 3.0
        assert s.quantile_type == 7
        assert s.backend_name == 'cpu_empirical'

    def test_recomputed_views(self, continuous_data):
        s = summarize(continuous_data)
        assert s.ecdf(s.maximum) == 1.0
        assert s.quantile(0.3) == quantile(continuous_data, 0.3)
        np.testing.assert_allclose(s.standard_units(), standard_units(continuous_data))

    def test_quantile_type_carried(self):
        s = summarize([1, 2, 3, 4, 5], quantile_type=6)
        np.testing.assert_allclose(s.quantiles, [1, 1.5, 3, 4.5, 5])
        assert s.quantile(0.25) == 1.5

    def test_single_value(self):
        s = summarize([4.0])
        assert s.n == 1
        assert np.isnan(s.sd)
        assert s.warnings
        np.testing.assert_array_equal(s.quantiles, np.full(5, 4.0))

    def test_summary_text(self):
        text = summarize([1, 2, 3, 4, 5]).summary()
        assert "Median" in text
        assert "1st Qu." in text
        assert "n = 5, sd = 1.5811" in text

    def test_repr(self):
        assert repr(summarize([1, 2, 3])) == "SummaryStatistics(n=3, mean=2, sd=1)"

    def test_quantile_table_read_only(self):
        s = summarize([1, 2, 3, 4, 5])
        with pytest.raises(ValueError):
            s.quantiles[0] = 99.0
        with pytest.raises(ValueError):
            s.quantile_probs[0] = 0.5
        np.testing.assert_allclose(s.quantiles, [1, 2, 3, 4, 5])
        assert "1.0000" in s.summary()
