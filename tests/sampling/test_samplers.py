"""
Tests for sample_without_replacement, sample_with_replacement,
sample_parametric and the sample() dispatcher.

Checks the independence disciplines, the population-size boundary,
seed reproducibility and distributional sanity of large draws.
"""

import numpy as np
import pytest

from pyprobsim import RandomSource
from pyprobsim.core import random_source as rs_module
from pyprobsim.core.exceptions import InsufficientPopulation, InvalidArgument
from pyprobsim.sampling import (
    FinitePopulation,
    ParametricPopulation,
    sample,
    sample_parametric,
    sample_with_replacement,
    sample_without_replacement,
)


# ---------------------------------------------------------------------------
# Without replacement
# ---------------------------------------------------------------------------

class TestWithoutReplacement:

    @pytest.mark.parametrize("seed", [0, 1, 17, 2024, 99999])
    def test_full_draw_is_permutation(self, seed):
        urn = FinitePopulation.from_items(np.arange(20))
        drawn = sample_without_replacement(urn, 20, source=RandomSource(seed))
        np.testing.assert_array_equal(np.sort(drawn), np.arange(20))

    def test_labels_full_draw_is_permutation(self, beads, source):
        drawn = sample_without_replacement(beads, 5, source=source)
        assert sorted(drawn.tolist()) == sorted(beads.items.tolist())

    def test_positions_distinct(self, source):
        urn = FinitePopulation.from_items(np.arange(100))
        drawn = sample_without_replacement(urn, 60, source=source)
        assert len(np.unique(drawn)) == 60

    @pytest.mark.parametrize("k", [6, 7, 100])
    def test_too_many_fails(self, k, source):
        urn = FinitePopulation.from_items([1, 2, 3, 4, 5])
        with pytest.raises(InsufficientPopulation, match=f"k={k} exceeds population size 5"):
            sample_without_replacement(urn, k, source=source)

    def test_failure_draws_nothing(self, source):
        urn = FinitePopulation.from_items([1, 2, 3, 4, 5])
        with pytest.raises(InsufficientPopulation):
            sample_without_replacement(urn, 6, source=source)
        np.testing.assert_array_equal(
            source.draw_uniform(size=5), RandomSource(42).draw_uniform(size=5),
        )

    def test_zero_draws(self, beads, source):
        assert sample_without_replacement(beads, 0, source=source).shape == (0,)

    def test_population_untouched(self, beads, source):
        before = beads.items.copy()
        for _ in range(10):
            sample_without_replacement(beads, 3, source=source)
        np.testing.assert_array_equal(beads.items, before)

    def test_weighted_rejected(self, source):
        urn = FinitePopulation.from_items([0, 1], weights=[0.5, 0.5])
        with pytest.raises(InvalidArgument, match="with replacement only"):
            sample_without_replacement(urn, 1, source=source)

    def test_first_position_uniform(self, source):
        urn = FinitePopulation.from_items(np.arange(4))
        first = np.array([
            sample_without_replacement(urn, 2, source=source)[0]
            for _ in range(8000)
        ])
        freqs = np.bincount(first, minlength=4) / 8000
        np.testing.assert_allclose(freqs, 0.25, atol=0.03)

    def test_second_draw_conditional(self, beads, source):
        """Pr(second is blue | first is red) = 3/4."""
        pairs = [sample_without_replacement(beads, 2, source=source) for _ in range(20000)]
        first_red = [p for p in pairs if p[0] == "red"]
        frac = np.mean([p[1] == "blue" for p in first_red])
        assert frac == pytest.approx(0.75, abs=0.03)

    def test_reproducible(self, beads):
        a = sample_without_replacement(beads, 4, source=RandomSource(5))
        b = sample_without_replacement(beads, 4, source=RandomSource(5))
        np.testing.assert_array_equal(a, b)


# ---------------------------------------------------------------------------
# With replacement
# ---------------------------------------------------------------------------

class TestWithReplacement:

    def test_k_unconstrained(self, source):
        urn = FinitePopulation.from_items([1, 2, 3, 4, 5])
        drawn = sample_with_replacement(urn, 1000, source=source)
        assert drawn.shape == (1000,)
        assert set(np.unique(drawn)) <= {1, 2, 3, 4, 5}

    def test_items_repeat(self, source):
        urn = FinitePopulation.from_items([1, 2, 3])
        drawn = sample_with_replacement(urn, 10, source=source)
        assert len(np.unique(drawn)) < 10

    def test_roulette_frequency(self, roulette, source):
        drawn = sample_with_replacement(roulette, 1_000_000, source=source)
        assert drawn.mean() == pytest.approx(2 / 38, abs=0.01)

    def test_weighted_frequency(self, source):
        urn = FinitePopulation.from_items([-1, 1], weights=[9 / 19, 10 / 19])
        drawn = sample_with_replacement(urn, 200_000, source=source)
        assert np.mean(drawn == 1) == pytest.approx(10 / 19, abs=0.005)

    def test_zero_weight_never_drawn(self, source):
        urn = FinitePopulation.from_items(["a", "b", "c"], weights=[0.5, 0.0, 0.5])
        drawn = sample_with_replacement(urn, 5000, source=source)
        assert "b" not in set(drawn.tolist())

    def test_negative_k(self, beads, source):
        with pytest.raises(InvalidArgument, match="k: must be >= 0"):
            sample_with_replacement(beads, -1, source=source)

    def test_reproducible(self, roulette):
        a = sample_with_replacement(roulette, 50, source=RandomSource(9))
        b = sample_with_replacement(roulette, 50, source=RandomSource(9))
        np.testing.assert_array_equal(a, b)


class EdgeUniforms(RandomSource):
    """Source whose uniforms sit at the ends of [0, 1)."""

    def draw_uniform(self, size=None):
        return np.array([0.0, 1.0 - 2.0 ** -53])


# ---------------------------------------------------------------------------
# Parametric
# ---------------------------------------------------------------------------

class TestParametric:

    @pytest.mark.parametrize("family, params, mean, sd", [
        ('normal', {'mean': 69, 'sd': 3}, 69.0, 3.0),
        ('exponential', {'rate': 2}, 0.5, 0.5),
        ('gamma', {'shape': 2, 'rate': 0.5}, 4.0, np.sqrt(8.0)),
        ('uniform', {'low': -1, 'high': 1}, 0.0, np.sqrt(1 / 3)),
        ('poisson', {'rate': 4}, 4.0, 2.0),
        ('binomial', {'size': 10, 'prob': 0.3}, 3.0, np.sqrt(2.1)),
        ('geometric', {'prob': 0.25}, 3.0, np.sqrt(12.0)),
    ])
    def test_moments(self, family, params, mean, sd, source):
        pop = ParametricPopulation.of(family, **params)
        x = sample_parametric(pop, 100_000, source=source)
        assert x.mean() == pytest.approx(mean, abs=0.05 * max(1.0, sd))
        assert x.std(ddof=1) == pytest.approx(sd, rel=0.05)

    def test_all_finite(self, source):
        x = sample_parametric(ParametricPopulation.of('normal'), 100_000, source=source)
        assert np.all(np.isfinite(x))

    @pytest.mark.parametrize("family, params", [
        ('normal', {}),
        ('exponential', {'rate': 2}),
        ('gamma', {'shape': 2, 'rate': 0.5}),
    ])
    def test_extreme_uniforms_stay_finite(self, family, params):
        pop = ParametricPopulation.of(family, **params)
        x = sample_parametric(pop, 2, source=EdgeUniforms(0))
        assert np.all(np.isfinite(x))
        assert x[0] < x[1]

    def test_discrete_integer_valued(self, source):
        x = sample_parametric(ParametricPopulation.of('poisson', rate=2), 1000, source=source)
        np.testing.assert_array_equal(x, np.round(x))

    def test_consumes_k_uniforms(self):
        a, b = RandomSource(1), RandomSource(1)
        sample_parametric(ParametricPopulation.of('normal'), 10, source=a)
        b.draw_uniform(size=10)
        assert a.draw_uniform() == b.draw_uniform()

    def test_rejects_finite(self, beads, source):
        with pytest.raises(InvalidArgument, match="ParametricPopulation"):
            sample_parametric(beads, 3, source=source)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class TestSample:

    def test_replacement_required_for_urn(self, beads, source):
        with pytest.raises(InvalidArgument, match="replacement"):
            sample(beads, 2, source=source)

    def test_without_replacement_boundary(self, beads, source):
        with pytest.raises(InsufficientPopulation):
            sample(beads, 6, replacement=False, source=source)
        assert sample(beads, 6, replacement=True, source=source).shape == (6,)

    def test_matches_entry_points(self, beads):
        np.testing.assert_array_equal(
            sample(beads, 3, replacement=False, source=RandomSource(4)),
            sample_without_replacement(beads, 3, source=RandomSource(4)),
        )
        np.testing.assert_array_equal(
            sample(beads, 3, replacement=True, source=RandomSource(4)),
            sample_with_replacement(beads, 3, source=RandomSource(4)),
        )

    def test_parametric(self, source):
        pop = ParametricPopulation.of('exponential', rate=1)
        assert sample(pop, 5, source=source).shape == (5,)
        assert sample(pop, 5, replacement=True, source=source).shape == (5,)
        with pytest.raises(InvalidArgument, match="meaningless"):
            sample(pop, 5, replacement=False, source=source)

    def test_unknown_population_type(self, source):
        with pytest.raises(InvalidArgument):
            sample([1, 2, 3], 2, replacement=True, source=source)

    def test_default_source(self, beads, monkeypatch):
        monkeypatch.setattr(rs_module, '_default_source', None)
        with pytest.raises(InvalidArgument, match="configure"):
            sample(beads, 2, replacement=True)
        rs_module.configure(8)
        a = sample(beads, 4, replacement=True)
        rs_module.configure(8)
        b = sample(beads, 4, replacement=True)
        np.testing.assert_array_equal(a, b)
