# tests/distributions/test_beta.py
import itertools
import math
import threading

import numpy as np
import pytest
from scipy import stats

from probcore.distributions import Beta, BetaRegime, ContinuousDistribution, classify
from probcore.distributions import beta as beta_module
from probcore.exceptions import InvalidParameterError, UnsupportedOperationError
from probcore.random import RandomSource, set_default_source, using_source

inf = np.inf

GENERIC_SHAPES = [(2.0, 5.0), (0.5, 0.5), (3.0, 1.0), (0.7, 2.3), (10.0, 10.0), (1.5, 40.0)]


# -----------------------------
# Construction and parameters
# -----------------------------

class TestConstruction:

    def test_basic(self):
        d = Beta(2.0, 5.0)
        assert isinstance(d, ContinuousDistribution)
        assert d.a == 2.0 and d.b == 5.0
        assert d.parameters == (2.0, 5.0)
        assert repr(d) == "Beta(a=2.0, b=5.0)"

    def test_accepts_integers_and_numpy_scalars(self):
        d = Beta(2, np.float32(5.0))
        assert isinstance(d.a, float) and isinstance(d.b, float)

    @pytest.mark.parametrize("a, b", [(-1.0, 1.0), (1.0, -1.0), (np.nan, 1.0), (1.0, np.nan), (-inf, 1.0)])
    def test_invalid(self, a, b):
        with pytest.raises(InvalidParameterError):
            Beta(a, b)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            Beta(-1.0, 2.0)

    @pytest.mark.parametrize("a, b", [(0.0, 0.0), (inf, inf), (0.0, inf), (1.0, 1.0)])
    def test_degenerate_shapes_are_valid(self, a, b):
        assert Beta(a, b).parameters == (a, b)

    def test_non_numeric_shape(self):
        with pytest.raises(TypeError):
            Beta("2", 5.0)


class TestSetters:

    def test_setters(self, beta25):
        beta25.a = 3.0
        beta25.b = 4.0
        assert beta25.parameters == (3.0, 4.0)
        np.testing.assert_allclose(beta25.mean, 3.0 / 7.0)

    def test_set_parameters(self, beta25):
        beta25.set_parameters(0.0, inf)
        assert beta25.regime is BetaRegime.B_INFINITE

    @pytest.mark.parametrize("attr, value", [("a", -2.0), ("b", np.nan)])
    def test_failed_setter_leaves_state(self, beta25, attr, value):
        with pytest.raises(InvalidParameterError):
            setattr(beta25, attr, value)
        assert beta25.parameters == (2.0, 5.0)

    def test_failed_set_parameters_is_atomic(self, beta25):
        with pytest.raises(InvalidParameterError):
            beta25.set_parameters(3.0, -1.0)
        assert beta25.parameters == (2.0, 5.0)


# -----------------------------
# Regime classification
# -----------------------------

@pytest.mark.parametrize(
    "a, b, regime",
    [
        (inf, inf, BetaRegime.BOTH_INFINITE),
        (inf, 2.0, BetaRegime.A_INFINITE),
        (inf, 0.0, BetaRegime.A_INFINITE),
        (3.0, inf, BetaRegime.B_INFINITE),
        (0.0, inf, BetaRegime.B_INFINITE),
        (0.0, 0.0, BetaRegime.BOTH_ZERO),
        (0.0, 2.0, BetaRegime.A_ZERO),
        (2.0, 0.0, BetaRegime.B_ZERO),
        (1.0, 1.0, BetaRegime.UNIFORM),
        (1.0, 2.0, BetaRegime.GENERIC),
        (0.5, 0.5, BetaRegime.GENERIC),
    ],
)
def test_classify(a, b, regime):
    assert classify(a, b) is regime
    assert Beta(a, b).regime is regime


# -----------------------------
# Regime table
# -----------------------------

# (a, b, mean, mode, skewness, entropy)
DEGENERATE_STATISTICS = [
    (inf, inf, 0.5, 0.5, 0.0, 0.0),
    (inf, 2.0, 1.0, 1.0, -2.0, 0.0),
    (2.0, inf, 0.0, 0.0, 2.0, 0.0),
    (0.0, 0.0, 0.5, 0.5, 0.0, math.log(2.0)),
    (0.0, 2.0, 0.0, 0.0, 2.0, 0.0),
    (2.0, 0.0, 1.0, 1.0, -2.0, 0.0),
]


@pytest.mark.parametrize("a, b, mean, mode, skewness, entropy", DEGENERATE_STATISTICS)
def test_degenerate_statistics(a, b, mean, mode, skewness, entropy):
    d = Beta(a, b)
    assert d.mean == mean
    assert d.mode == mode
    assert d.skewness == skewness
    np.testing.assert_allclose(d.entropy, entropy, atol=1e-15)


# (a, b, x, density, cdf)
DEGENERATE_EVALUATIONS = [
    (inf, inf, 0.5, inf, 1.0),
    (inf, inf, 0.3, 0.0, 0.0),
    (inf, inf, 0.0, 0.0, 0.0),
    (inf, 2.0, 1.0, inf, 1.0),
    (inf, 2.0, 0.5, 0.0, 0.0),
    (2.0, inf, 0.0, inf, 1.0),
    (2.0, inf, 0.5, 0.0, 1.0),
    (0.0, 0.0, 0.0, inf, 0.5),
    (0.0, 0.0, 1.0, inf, 1.0),
    (0.0, 0.0, 0.4, 0.0, 0.5),
    (0.0, 2.0, 0.0, inf, 1.0),
    (0.0, 2.0, 0.7, 0.0, 1.0),
    (2.0, 0.0, 1.0, inf, 1.0),
    (2.0, 0.0, 0.7, 0.0, 0.0),
]


@pytest.mark.parametrize("a, b, x, density, cdf", DEGENERATE_EVALUATIONS)
def test_degenerate_evaluations(a, b, x, density, cdf):
    d = Beta(a, b)
    assert d.density(x) == density
    assert d.cdf(x) == cdf
    assert d.log_density(x) == (inf if density == inf else -inf)


class TestUniform:

    def test_density_and_cdf(self, unit_grid):
        d = Beta(1.0, 1.0)
        np.testing.assert_array_equal(d.density(unit_grid), np.ones_like(unit_grid))
        np.testing.assert_array_equal(d.log_density(unit_grid), np.zeros_like(unit_grid))
        np.testing.assert_allclose(d.cdf(unit_grid[:-1]), unit_grid[:-1])
        assert d.cdf(1.0) == 1.0

    def test_statistics(self):
        d = Beta(1.0, 1.0)
        assert d.mean == 0.5
        assert d.mode == 0.5
        np.testing.assert_allclose(d.variance, 1.0 / 12.0)
        np.testing.assert_allclose(d.skewness, 0.0, atol=1e-15)
        np.testing.assert_allclose(d.entropy, 0.0, atol=1e-15)


# -----------------------------
# Generic regime
# -----------------------------

class TestGeneric:

    def test_concrete_scenario(self, beta25):
        np.testing.assert_allclose(beta25.mean, 2.0 / 7.0)
        np.testing.assert_allclose(beta25.variance, 10.0 / (49.0 * 8.0))
        np.testing.assert_allclose(beta25.std_dev, math.sqrt(10.0 / 392.0))
        np.testing.assert_allclose(beta25.mode, 0.2)
        np.testing.assert_allclose(beta25.density(0.2), 2.4576, rtol=1e-12)

    @pytest.mark.parametrize("a, b", GENERIC_SHAPES)
    def test_moments_against_scipy(self, a, b):
        d = Beta(a, b)
        mean, var, skew = stats.beta(a, b).stats(moments="mvs")
        np.testing.assert_allclose(d.mean, mean, rtol=1e-12)
        np.testing.assert_allclose(d.variance, var, rtol=1e-12)
        np.testing.assert_allclose(d.std_dev, math.sqrt(var), rtol=1e-12)
        np.testing.assert_allclose(d.skewness, skew, rtol=1e-10, atol=1e-14)
        np.testing.assert_allclose(d.entropy, stats.beta(a, b).entropy(), rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("a, b", GENERIC_SHAPES)
    def test_evaluators_against_scipy(self, a, b, interior_grid):
        d = Beta(a, b)
        ref = stats.beta(a, b)
        np.testing.assert_allclose(d.density(interior_grid), ref.pdf(interior_grid), rtol=1e-10)
        np.testing.assert_allclose(d.log_density(interior_grid), ref.logpdf(interior_grid), rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(d.cdf(interior_grid), ref.cdf(interior_grid), rtol=1e-10, atol=1e-14)

    @pytest.mark.parametrize("a, b", [(2.0, 5.0), (1.5, 3.5), (7.0, 2.0)])
    def test_mode_is_density_maximum(self, a, b):
        d = Beta(a, b)
        grid = np.linspace(0.0, 1.0, 100_001)
        assert abs(grid[np.argmax(d.density(grid))] - d.mode) < 1e-4

    @pytest.mark.parametrize("a, b", [(0.5, 1.5), (1.5, 0.5)])
    def test_mode_undefined_when_shapes_sum_to_two(self, a, b):
        assert math.isnan(Beta(a, b).mode)

    @pytest.mark.parametrize("a, b", GENERIC_SHAPES)
    def test_reflection(self, a, b, interior_grid):
        d, r = Beta(a, b), Beta(b, a)
        np.testing.assert_allclose(d.density(interior_grid), r.density(1.0 - interior_grid), rtol=1e-10)
        np.testing.assert_allclose(d.cdf(interior_grid), 1.0 - r.cdf(1.0 - interior_grid), rtol=1e-9, atol=1e-12)
        np.testing.assert_allclose(d.mean, 1.0 - r.mean, rtol=1e-12)
        if a > 1.0 and b > 1.0:
            np.testing.assert_allclose(d.mode, 1.0 - r.mode, rtol=1e-12)

    def test_large_shapes_do_not_overflow(self):
        d = Beta(400.0, 500.0)
        x = 400.0 / 900.0
        value = d.density(x)
        assert np.isfinite(value) and value > 0.0
        np.testing.assert_allclose(value, stats.beta(400.0, 500.0).pdf(x), rtol=1e-9)

    @pytest.mark.parametrize(
        "a, b, at_zero, at_one",
        [(0.5, 2.0, inf, 0.0), (2.0, 0.5, 0.0, inf), (1.0, 3.0, 3.0, 0.0), (3.0, 3.0, 0.0, 0.0)],
    )
    def test_endpoints(self, a, b, at_zero, at_one):
        d = Beta(a, b)
        np.testing.assert_allclose(d.density(0.0), at_zero)
        np.testing.assert_allclose(d.density(1.0), at_one)
        np.testing.assert_allclose(d.log_density(0.0), np.log(at_zero) if at_zero else -inf)

    def test_tiny_shapes_statistics(self):
        d = Beta(1e-200, 2e-200)
        np.testing.assert_allclose(d.skewness, 1.0 / math.sqrt(2.0), rtol=1e-12)
        np.testing.assert_allclose(d.mean, 1.0 / 3.0, rtol=1e-12)

    @pytest.mark.parametrize("a, b, mean", [(1e308, 1e308, 0.5), (1e308, 5e307, 2.0 / 3.0), (1.7e308, 1.7e308, 0.5)])
    def test_huge_shapes_statistics(self, a, b, mean):
        d = Beta(a, b)
        np.testing.assert_allclose(d.mean, mean, rtol=1e-12)
        np.testing.assert_allclose(d.mode, mean, rtol=1e-12)
        assert np.isfinite(d.skewness)
        if a == b:
            assert d.skewness == 0.0

    def test_median_unsupported(self):
        with pytest.raises(UnsupportedOperationError):
            Beta(2.0, 3.0).median
        with pytest.raises(NotImplementedError):
            Beta(2.0, 3.0).median


# -----------------------------
# Properties over every regime
# -----------------------------

ALL_SHAPES = GENERIC_SHAPES + [(1.0, 1.0), (inf, inf), (inf, 2.0), (2.0, inf), (0.0, 0.0), (0.0, 2.0), (2.0, 0.0)]


@pytest.mark.parametrize("a, b", ALL_SHAPES)
def test_outside_support(a, b):
    d = Beta(a, b)
    x = np.array([-inf, -1.0, -1e-12, 1.0 + 1e-12, 2.0, inf])
    np.testing.assert_array_equal(d.density(x), np.zeros(6))
    np.testing.assert_array_equal(d.log_density(x), np.full(6, -inf))
    np.testing.assert_array_equal(d.cdf(x), [0.0, 0.0, 0.0, 1.0, 1.0, 1.0])


@pytest.mark.parametrize("a, b", ALL_SHAPES)
def test_cdf_saturates_at_one(a, b):
    assert Beta(a, b).cdf(1.0) == 1.0


@pytest.mark.parametrize("a, b", GENERIC_SHAPES + [(1.0, 1.0), (inf, inf), (inf, 2.0), (2.0, 0.0)])
def test_cdf_zero_at_origin(a, b):
    assert Beta(a, b).cdf(0.0) == 0.0


@pytest.mark.parametrize("a, b", ALL_SHAPES)
def test_min_max(a, b):
    d = Beta(a, b)
    assert (d.minimum, d.maximum) == (0.0, 1.0)


@pytest.mark.parametrize("a, b", GENERIC_SHAPES + [(1.0, 1.0), (0.0, 3.0), (3.0, 0.0)])
def test_variance_formula(a, b):
    d = Beta(a, b)
    expected = a * b / ((a + b) ** 2 * (a + b + 1.0))
    np.testing.assert_allclose(d.variance, expected, rtol=1e-14)
    np.testing.assert_allclose(d.std_dev, math.sqrt(expected), rtol=1e-14)


@pytest.mark.parametrize("a, b", [(0.0, 0.0), (inf, inf), (inf, 2.0)])
def test_variance_indeterminate(a, b):
    assert math.isnan(Beta(a, b).variance)


def test_density_log_density_agree(interior_grid):
    for a, b in ALL_SHAPES:
        d = Beta(a, b)
        with np.errstate(divide="ignore"):
            np.testing.assert_allclose(np.log(d.density(interior_grid)), d.log_density(interior_grid), rtol=1e-10)


def test_nan_input_propagates(beta25):
    assert math.isnan(beta25.density(np.nan))
    assert math.isnan(beta25.cdf(np.nan))
    out = beta25.log_density([0.5, np.nan])
    assert np.isfinite(out[0]) and np.isnan(out[1])


def test_shape_policy(beta25):
    assert isinstance(beta25.density(0.3), float)
    assert isinstance(beta25.cdf(np.float64(0.3)), float)
    grid = np.linspace(0.1, 0.9, 6).reshape(2, 3)
    assert beta25.density(grid).shape == (2, 3)
    assert beta25.log_density([0.2, 0.4]).shape == (2,)
    assert beta25.cdf(np.array([[0.5]])).shape == (1, 1)


# -----------------------------
# Sampling
# -----------------------------

class TestSampling:

    def test_uniform_draws_pass_ks(self, source):
        draws = Beta(1.0, 1.0, random_source=source).sample(100_000)
        assert draws.shape == (100_000,)
        assert stats.kstest(draws, "uniform").pvalue > 1e-3

    @pytest.mark.parametrize("a, b", [(2.0, 5.0), (0.5, 0.5), (0.3, 4.0)])
    def test_generic_draws_pass_ks(self, a, b):
        draws = Beta(a, b, random_source=RandomSource(7)).sample(20_000)
        assert np.all((draws >= 0.0) & (draws <= 1.0))
        assert stats.kstest(draws, stats.beta(a, b).cdf).pvalue > 1e-3

    def test_sample_types(self, beta25):
        assert isinstance(beta25.sample(), float)
        assert beta25.sample(0).shape == (0,)

    @pytest.mark.parametrize("n", [-1, 2.5, True, "3"])
    def test_invalid_n_samples(self, beta25, n):
        with pytest.raises((TypeError, ValueError)):
            beta25.sample(n)

    @pytest.mark.parametrize(
        "a, b, value",
        [(inf, inf, 0.5), (inf, 2.0, 1.0), (2.0, inf, 0.0), (0.0, 2.0, 0.0), (2.0, 0.0, 1.0), (inf, 0.0, 1.0)],
    )
    def test_point_mass_draws(self, source, a, b, value):
        np.testing.assert_array_equal(Beta(a, b, random_source=source).sample(50), np.full(50, value))

    @pytest.mark.parametrize("a, b", [(1e-4, 1e-3), (1e-3, 2e-3), (0.01, 0.005)])
    def test_small_shapes_match_law(self, a, b):
        draws = Beta(a, b, random_source=RandomSource(0)).sample(100_000)
        assert np.all((draws >= 0.0) & (draws <= 1.0))
        np.testing.assert_allclose(draws.mean(), a / (a + b), atol=0.008)
        np.testing.assert_allclose(np.mean(draws > 0.5), stats.beta(a, b).sf(0.5), atol=0.008)

    def test_both_zero_is_fair_coin(self, source):
        draws = Beta(0.0, 0.0, random_source=source).sample(20_000)
        assert set(np.unique(draws)) == {0.0, 1.0}
        assert abs(draws.mean() - 0.5) < 0.02

    def test_reproducible_streams(self):
        d1 = Beta(2.0, 5.0, random_source=RandomSource(99))
        d2 = Beta(2.0, 5.0, random_source=RandomSource(99))
        assert list(itertools.islice(d1.samples(), 25)) == list(itertools.islice(d2.samples(), 25))
        np.testing.assert_array_equal(d1.sample(10), d2.sample(10))

    def test_samples_reads_current_parameters(self, source):
        d = Beta(2.0, 5.0, random_source=source)
        it = d.samples()
        next(it)
        d.set_parameters(inf, 1.0)
        assert next(it) == 1.0

    def test_random_source_setter(self):
        d = Beta(2.0, 5.0)
        d.random_source = RandomSource(3)
        first = d.sample(5)
        d.random_source = 3
        np.testing.assert_array_equal(d.sample(5), first)

    def test_follows_default_source(self):
        d = Beta(2.0, 5.0)
        set_default_source(RandomSource(12))
        a = d.sample(5)
        with using_source(RandomSource(12)):
            b = d.sample(5)
        np.testing.assert_array_equal(a, b)

    def test_random_source_none_resets_to_default(self, source):
        d = Beta(2.0, 5.0, random_source=source)
        assert d.random_source is source
        d.random_source = None
        with using_source(RandomSource(5)) as active:
            assert d.random_source is active

    def test_shared_default_across_threads(self):
        set_default_source(RandomSource(0))
        results = []

        def worker():
            results.append(Beta(2.0, 5.0).sample(2000))

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        combined = np.concatenate(results)
        assert combined.size == 12_000
        assert np.all((combined > 0.0) & (combined < 1.0))
        assert stats.kstest(combined, stats.beta(2.0, 5.0).cdf).pvalue > 1e-3


# -----------------------------
# Stateless entry points
# -----------------------------

class TestStaticFunctions:

    @pytest.mark.parametrize("a, b", ALL_SHAPES)
    def test_parity_with_instance(self, a, b, unit_grid):
        d = Beta(a, b)
        np.testing.assert_array_equal(beta_module.pdf(a, b, unit_grid), d.density(unit_grid))
        np.testing.assert_array_equal(beta_module.log_pdf(a, b, unit_grid), d.log_density(unit_grid))
        np.testing.assert_array_equal(beta_module.cdf(a, b, unit_grid), d.cdf(unit_grid))

    def test_concrete_scenario(self):
        np.testing.assert_allclose(beta_module.pdf(2.0, 5.0, 0.2), 2.4576, rtol=1e-12)
        assert beta_module.cdf(2.0, 5.0, 1.0) == 1.0
        assert beta_module.pdf(inf, inf, 0.5) == inf

    def test_sample_parity(self):
        a = beta_module.sample(2.0, 5.0, RandomSource(4), n_samples=10)
        b = Beta(2.0, 5.0, random_source=RandomSource(4)).sample(10)
        np.testing.assert_array_equal(a, b)
        assert isinstance(beta_module.sample(2.0, 5.0, RandomSource(4)), float)

    def test_samples_stream(self):
        it = beta_module.samples(2.0, 5.0, RandomSource(4))
        first = list(itertools.islice(it, 10))
        expected = list(itertools.islice(Beta(2.0, 5.0, random_source=RandomSource(4)).samples(), 10))
        assert first == expected

    @pytest.mark.parametrize(
        "call",
        [
            lambda: beta_module.pdf(-1.0, 1.0, 0.5),
            lambda: beta_module.log_pdf(1.0, np.nan, 0.5),
            lambda: beta_module.cdf(-0.1, 2.0, 0.5),
            lambda: beta_module.sample(np.nan, 2.0),
            lambda: beta_module.samples(2.0, -3.0),
        ],
    )
    def test_validation(self, call):
        with pytest.raises(InvalidParameterError):
            call()
