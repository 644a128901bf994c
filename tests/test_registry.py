"""
Tests for the registration table and the host entry points.
"""

import numpy as np
import pytest

import nobounds

from nobounds import registry
from nobounds.distributions import custom_scipy_dists as csd
from nobounds.distributions import custom_torch_dists
from nobounds.exceptions import NoBoundsError, UnknownDistributionError

KEYS = [
    "LogChisq",
    "LogExp",
    "LogGamma",
    "LogHalfflat",
    "LogInvgamma",
    "LogLnorm",
    "LogWeib",
    "LogitBeta",
    "LogitUnif",
]

PARAM_NAMES = {
    "LogChisq": ("df",),
    "LogExp": ("rate",),
    "LogGamma": ("shape", "rate"),
    "LogHalfflat": (),
    "LogInvgamma": ("shape", "scale"),
    "LogLnorm": ("meanlog", "sdlog"),
    "LogWeib": ("shape", "scale"),
    "LogitBeta": ("shape1", "shape2"),
    "LogitUnif": ("lower", "upper"),
}


class TestNaming:
    def test_keys(self):
        assert list(registry.REGISTRY) == KEYS

    def test_entry_points(self):
        functions = registry.entry_points()
        assert len(functions) == 18
        assert set(functions) == {f"{prefix}{key}" for key in KEYS for prefix in "dr"}

    @pytest.mark.parametrize("key", KEYS)
    def test_module_level_callables(self, key):
        entry = registry.REGISTRY[key]
        assert getattr(registry, f"d{key}") == entry.density
        assert getattr(registry, f"r{key}") == entry.sampler
        assert getattr(nobounds, f"d{key}") == entry.density
        assert getattr(nobounds, f"r{key}") == entry.sampler

    @pytest.mark.parametrize("key", KEYS)
    def test_param_names(self, key):
        assert registry.REGISTRY[key].param_names == PARAM_NAMES[key]

    def test_entry_names(self):
        entry = registry.REGISTRY["LogGamma"]
        assert entry.density_name == "dLogGamma"
        assert entry.sampler_name == "rLogGamma"


class TestLookup:
    @pytest.mark.parametrize("name", ["LogGamma", "dLogGamma", "rLogGamma"])
    def test_get_entry(self, name):
        assert registry.get_entry(name) is registry.REGISTRY["LogGamma"]

    def test_get_density(self):
        assert registry.get_density("dLogitBeta") == registry.dLogitBeta
        assert registry.get_density("LogitBeta") == registry.dLogitBeta

    def test_get_sampler(self):
        assert registry.get_sampler("rLogitBeta") == registry.rLogitBeta
        assert registry.get_sampler("LogitBeta") == registry.rLogitBeta

    def test_wrong_kind(self):
        with pytest.raises(UnknownDistributionError):
            registry.get_density("rLogitBeta")
        with pytest.raises(UnknownDistributionError):
            registry.get_sampler("dLogitBeta")

    @pytest.mark.parametrize("name", ["Gamma", "dGamma", "LogBeta", "logGamma", ""])
    def test_unknown(self, name):
        with pytest.raises(UnknownDistributionError, match="registered"):
            registry.get_entry(name)

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            nobounds.get_density("dLogCauchy")
        assert issubclass(UnknownDistributionError, NoBoundsError)


class TestCalls:
    def test_density_positional_order(self):
        assert nobounds.dLogitBeta(0.0, 1.0, 11.0) == pytest.approx(
            0.002685546875, rel=1e-6
        )
        assert nobounds.dLogitBeta(0.0, 1.0, 11.0, log=True) == pytest.approx(
            np.log(0.002685546875), rel=1e-9
        )

    def test_density_matches_adapter(self):
        y = np.linspace(-4, 4, 9)
        np.testing.assert_array_equal(
            nobounds.dLogGamma(y, 2.0, 3.0, log=True), csd.loggamma.logpdf(y, 2.0, 3.0)
        )
        np.testing.assert_array_equal(
            nobounds.dLogWeib(y, shape=2.0), csd.logweib.pdf(y, 2.0, 1.0)
        )

    def test_defaults(self):
        np.testing.assert_array_equal(
            nobounds.dLogLnorm(0.3), nobounds.dLogLnorm(0.3, 0.0, 1.0)
        )
        np.testing.assert_array_equal(
            nobounds.dLogitUnif(0.3), nobounds.dLogitUnif(0.3, lower=0.0, upper=1.0)
        )

    def test_sampler_uses_rng(self):
        first = nobounds.rLogInvgamma(50, 3.0, 2.0, rng=np.random.default_rng(3))
        second = nobounds.rLogInvgamma(50, 3.0, 2.0, rng=np.random.default_rng(3))
        assert first.shape == (50,)
        np.testing.assert_array_equal(first, second)

    def test_sampler_matches_adapter(self):
        np.testing.assert_array_equal(
            nobounds.rLogExp(10, 2.0, rng=4),
            csd.logexp.rvs(2.0, size=10, random_state=4),
        )

    def test_sampler_zero_draws(self):
        assert nobounds.rLogitUnif(0, -1.0, 1.0, rng=0).shape == (0,)

    def test_sampler_negative_draws(self):
        with pytest.raises(ValueError):
            nobounds.rLogChisq(-1, 2.0)

    def test_halfflat(self):
        np.testing.assert_allclose(nobounds.dLogHalfflat(2.0, log=True), 2.0)
        with pytest.raises(NotImplementedError):
            nobounds.rLogHalfflat(5)


class TestTorchCounterparts:
    @pytest.mark.parametrize(
        "key, params, expected",
        [
            ("LogChisq", (3.0,), custom_torch_dists.LogChiSquared),
            ("LogGamma", (2.0,), custom_torch_dists.LogGamma),
            ("LogHalfflat", (), custom_torch_dists.LogHalfFlat),
            ("LogitUnif", (-1.0, 2.0), custom_torch_dists.LogitUniform),
        ],
    )
    def test_torch_dist(self, key, params, expected):
        torch_dist = registry.REGISTRY[key].torch_dist(*params)
        assert isinstance(torch_dist, expected)
        assert isinstance(torch_dist, custom_torch_dists.CustomDistribution)
