"""
Tests for the native (untransformed) SciPy-backed distributions.

These check the translation between the host-facing parametrization and SciPy's,
argument binding, and the half-flat special case.
"""

import numpy as np
import pytest

from scipy import stats

from nobounds.distributions import native

X = np.array([0.05, 0.3, 1.0, 2.5, 7.0])


class TestParametrization:
    """Native parameters are translated to SciPy's parametrization."""

    @pytest.mark.parametrize(
        "dist, params, expected",
        [
            (native.chisq, {"df": 3.0}, stats.chi2(df=3.0)),
            (native.expon, {"rate": 4.0}, stats.expon(scale=0.25)),
            (native.gamma, {"shape": 2.0, "rate": 3.0}, stats.gamma(a=2.0, scale=1 / 3)),
            (native.invgamma, {"shape": 3.0, "scale": 2.0}, stats.invgamma(a=3.0, scale=2.0)),
            (
                native.lnorm,
                {"meanlog": 0.5, "sdlog": 2.0},
                stats.lognorm(s=2.0, scale=np.exp(0.5)),
            ),
            (native.weib, {"shape": 2.0, "scale": 1.5}, stats.weibull_min(c=2.0, scale=1.5)),
            (native.beta, {"shape1": 1.0, "shape2": 11.0}, stats.beta(a=1.0, b=11.0)),
            (native.unif, {"lower": -3.0, "upper": 5.0}, stats.uniform(loc=-3.0, scale=8.0)),
        ],
        ids=["chisq", "expon", "gamma", "invgamma", "lnorm", "weib", "beta", "unif"],
    )
    def test_logpdf_matches_scipy(self, dist, params, expected):
        x = np.concatenate([X / 10, [-1.0]]) if dist is native.beta else X
        np.testing.assert_allclose(dist.logpdf(x, **params), expected.logpdf(x))

    def test_gamma_rate_is_inverse_scale(self):
        np.testing.assert_allclose(
            native.gamma.logpdf(X, shape=2.0, rate=3.0),
            np.log(3.0**2 * X * np.exp(-3.0 * X)),
        )

    def test_outside_support_is_neg_inf(self):
        assert native.gamma.logpdf(-1.0, shape=2.0, rate=1.0) == -np.inf
        assert native.unif.logpdf(6.0, lower=-3.0, upper=5.0) == -np.inf

    def test_invalid_parameters_give_nan(self):
        assert np.isnan(native.gamma.logpdf(1.0, shape=-1.0, rate=1.0))


class TestBinding:
    """Parameters bind positionally or by keyword, with defaults."""

    def test_positional(self):
        assert native.gamma.bind(2.0, 3.0) == {"shape": 2.0, "rate": 3.0}

    def test_defaults(self):
        assert native.gamma.bind(2.0) == {"shape": 2.0, "rate": 1.0}
        assert native.expon.bind() == {"rate": 1.0}
        assert native.lnorm.bind() == {"meanlog": 0.0, "sdlog": 1.0}
        assert native.unif.bind() == {"lower": 0.0, "upper": 1.0}
        assert native.halfflat.bind() == {}

    def test_mixed(self):
        assert native.weib.bind(2.0, scale=5.0) == {"shape": 2.0, "scale": 5.0}

    def test_missing(self):
        with pytest.raises(TypeError):
            native.beta.bind(1.0)

    def test_unexpected(self):
        with pytest.raises(TypeError):
            native.chisq.bind(2.0, rate=1.0)
        with pytest.raises(TypeError):
            native.halfflat.bind(1.0)

    def test_signature(self):
        assert list(native.gamma.SIGNATURE.parameters) == ["shape", "rate"]
        assert native.gamma.SIGNATURE.parameters["rate"].default == 1.0

    def test_support(self):
        assert native.gamma.support(shape=2.0) == (0.0, np.inf)
        assert native.beta.support(shape1=1.0, shape2=1.0) == (0.0, 1.0)
        assert native.unif.support(lower=-3.0, upper=5.0) == (-3.0, 5.0)
        assert native.unif.support() == (0.0, 1.0)


class TestSampling:
    """Native draws come from the caller's random source."""

    def test_shape(self):
        assert native.gamma.sample(7, random_state=0, shape=2.0).shape == (7,)
        assert native.gamma.sample(0, random_state=0, shape=2.0).shape == (0,)

    def test_reproducible(self):
        first = native.beta.sample(
            10, random_state=np.random.default_rng(5), shape1=2.0, shape2=3.0
        )
        second = native.beta.sample(
            10, random_state=np.random.default_rng(5), shape1=2.0, shape2=3.0
        )
        np.testing.assert_array_equal(first, second)

    def test_generator_state_advances(self):
        rng = np.random.default_rng(5)
        first = native.expon.sample(10, random_state=rng)
        second = native.expon.sample(10, random_state=rng)
        assert not np.array_equal(first, second)

    def test_negative_n(self):
        with pytest.raises(ValueError):
            native.chisq.sample(-1, df=2.0)

    def test_moments(self):
        draws = native.gamma.sample(
            200000, random_state=np.random.default_rng(11), shape=2.0, rate=4.0
        )
        np.testing.assert_allclose(draws.mean(), 0.5, rtol=0.02)

    def test_uniform_bounds(self):
        draws = native.unif.sample(1000, random_state=3, lower=10.0, upper=20.0)
        assert np.all((draws >= 10.0) & (draws < 20.0))


class TestHalfFlat:
    def test_logpdf(self):
        np.testing.assert_array_equal(
            native.halfflat.logpdf(np.array([-1.0, 0.0, 1e-300, 5.0, np.inf])),
            [-np.inf, -np.inf, 0.0, 0.0, 0.0],
        )

    def test_sample_not_implemented(self):
        with pytest.raises(NotImplementedError):
            native.halfflat.sample(10)
