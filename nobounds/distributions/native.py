# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Native (untransformed) bounded distributions backed by SciPy.

Every distribution supported by NoBounds is first described here in its native,
bounded form. Each class implements the same small interface,

    - ``logpdf(x, **params)``: native log-density, ``-inf`` outside the support
    - ``sample(n, random_state, **params)``: ``n`` independent native draws

so that the transformed distributions never need to special-case parameter
counts or parametrizations. Parameters are always named as in the host-facing
entry points (e.g. ``shape`` and ``rate`` for the gamma distribution) and are
translated to SciPy's parametrization (e.g. ``a`` and ``scale = 1 / rate``) by
the class attributes ``TO_SCIPY_NAMES`` and ``TO_SCIPY_TRANSFORMS``.

The following distributions are available:

.. list-table::
    :header-rows: 1

    * - Class
      - Support
      - Parameters
    * - :py:class:`ChiSquared`
      - :math:`(0, \\infty)`
      - ``df``
    * - :py:class:`Exponential`
      - :math:`(0, \\infty)`
      - ``rate=1``
    * - :py:class:`Gamma`
      - :math:`(0, \\infty)`
      - ``shape``, ``rate=1``
    * - :py:class:`HalfFlat`
      - :math:`(0, \\infty)`
      -
    * - :py:class:`InverseGamma`
      - :math:`(0, \\infty)`
      - ``shape``, ``scale=1``
    * - :py:class:`LogNormal`
      - :math:`(0, \\infty)`
      - ``meanlog=0``, ``sdlog=1``
    * - :py:class:`Weibull`
      - :math:`(0, \\infty)`
      - ``shape``, ``scale=1``
    * - :py:class:`Beta`
      - :math:`(0, 1)`
      - ``shape1``, ``shape2``
    * - :py:class:`Uniform`
      - :math:`(\\text{lower}, \\text{upper})`
      - ``lower=0``, ``upper=1``

Parameter validity (e.g. positive rates) is left to SciPy: invalid parameters
produce NaN densities and ``ValueError`` from sampling.
"""

from __future__ import annotations

import inspect

from abc import ABCMeta
from typing import Any, Callable

import numpy as np

from scipy import stats

from nobounds import defaults, utils
from nobounds.custom_types import Integer, RandomState, SampleType

# pylint: disable=line-too-long


def _inverse_transform(x):
    """Element-wise inverse (1/x). Defined at module level to keep classes picklable."""
    return 1 / np.asarray(x, dtype=float)


def _exp_transform(x):
    """Element-wise exponential. Defined at module level to keep classes picklable."""
    return np.exp(x)


class NativeDistributionMeta(ABCMeta):
    """Metaclass building the call signature of each native distribution.

    The signature is derived from the ``PARAM_NAMES`` and ``DEFAULTS`` class
    attributes and stored on the class as ``SIGNATURE``. It is what allows the
    transformed distributions and the registration table to accept native
    parameters either positionally (in ``PARAM_NAMES`` order) or by keyword.
    """

    def __init__(cls, name, bases, attrs):
        super().__init__(name, bases, attrs)
        cls.SIGNATURE = utils.build_signature(cls.PARAM_NAMES, cls.DEFAULTS)


class NativeDistribution(metaclass=NativeDistributionMeta):
    """Base class for native bounded distributions.

    :cvar SCIPY_DIST: SciPy distribution providing ``logpdf`` and ``rvs``
    :type SCIPY_DIST: Optional[stats.rv_continuous]
    :cvar PARAM_NAMES: Native parameter names, in positional order
    :type PARAM_NAMES: tuple[str, ...]
    :cvar DEFAULTS: Default values for the parameters that have one
    :type DEFAULTS: dict[str, float]
    :cvar TO_SCIPY_NAMES: Map from native parameter names to SciPy's names
    :type TO_SCIPY_NAMES: dict[str, str]
    :cvar TO_SCIPY_TRANSFORMS: Functions converting native parameter values to
        SciPy's parametrization
    :type TO_SCIPY_TRANSFORMS: dict[str, Callable]
    :cvar LOWER_BOUND: Lower bound of the support. ``None`` if it is a parameter.
    :type LOWER_BOUND: Optional[float]
    :cvar UPPER_BOUND: Upper bound of the support. ``None`` if it is a parameter.
    :type UPPER_BOUND: Optional[float]
    :cvar SIGNATURE: Call signature built by the metaclass
    :type SIGNATURE: inspect.Signature
    """

    SCIPY_DIST: stats.rv_continuous | None = None
    """Corresponding SciPy distribution (e.g., `scipy.stats.gamma`)."""

    PARAM_NAMES: tuple[str, ...] = ()
    """Names of the native parameters, in the order they are accepted positionally."""

    DEFAULTS: dict[str, float] = {}
    """Default values for native parameters."""

    TO_SCIPY_NAMES: dict[str, str] = {}
    """
    There can be differences in parameter names between the native parametrization
    and SciPy. This dictionary maps between the two naming conventions.
    """

    TO_SCIPY_TRANSFORMS: dict[str, Callable[[Any], Any]] = {}
    """
    Some distributions are parametrized differently in SciPy. This dictionary
    provides functions converting native parameter values to SciPy's.
    """

    LOWER_BOUND: float | None = 0.0
    UPPER_BOUND: float | None = np.inf

    SIGNATURE: inspect.Signature

    def bind(self, *args, **kwargs) -> dict[str, Any]:
        """Name the given parameter values and fill in defaults.

        :raises TypeError: If parameters are missing, unknown, or given twice
        """
        return utils.bind_parameters(self.SIGNATURE, args, kwargs)

    def to_scipy(self, **params) -> dict[str, Any]:
        """Translate native parameters to SciPy keyword arguments."""
        return {
            self.TO_SCIPY_NAMES[name]: self.TO_SCIPY_TRANSFORMS.get(
                name, lambda x: x
            )(value)
            for name, value in params.items()
        }

    def support(self, **params) -> tuple[SampleType, SampleType]:
        """Bounds of the open support for the given parameters."""
        return self.LOWER_BOUND, self.UPPER_BOUND

    def logpdf(self, x: SampleType, **params) -> SampleType:
        """Native log-density.

        :param x: Values in (or outside) the native support
        :type x: custom_types.SampleType
        :param params: Native parameters, by name

        :returns: Log-density, ``-inf`` outside the support
        :rtype: custom_types.SampleType
        """
        return self.SCIPY_DIST.logpdf(x, **self.to_scipy(**self.bind(**params)))

    def sample(
        self, n: Integer, random_state: RandomState = None, **params
    ) -> np.ndarray:
        """Draw ``n`` independent native variates.

        :param n: Number of draws
        :type n: custom_types.Integer
        :param random_state: Source of randomness owned by the caller. Defaults to
            None (fresh system entropy).
        :type random_state: custom_types.RandomState
        :param params: Native parameters, by name

        :returns: Array of shape ``(n,)``
        :rtype: np.ndarray

        :raises ValueError: If ``n`` is negative
        """
        if n < 0:
            raise ValueError(f"`n` must be non-negative, got {n}")
        return np.asarray(
            self.SCIPY_DIST.rvs(
                **self.to_scipy(**self.bind(**params)),
                size=int(n),
                random_state=random_state,
            ),
            dtype=float,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.SIGNATURE}"


class ChiSquared(NativeDistribution):
    r"""Chi-squared distribution with ``df`` degrees of freedom.

    .. math::
        P(x | k) = \frac{x^{k/2 - 1} e^{-x/2}}{2^{k/2} \Gamma(k/2)} \text{ for } x > 0
    """

    SCIPY_DIST = stats.chi2
    PARAM_NAMES = ("df",)
    TO_SCIPY_NAMES = {"df": "df"}


class Exponential(NativeDistribution):
    r"""Exponential distribution with rate ``rate``.

    .. math::
        P(x | \lambda) = \lambda e^{-\lambda x} \text{ for } x > 0
    """

    SCIPY_DIST = stats.expon
    PARAM_NAMES = ("rate",)
    DEFAULTS = {"rate": defaults.DEFAULT_RATE}
    TO_SCIPY_NAMES = {"rate": "scale"}
    TO_SCIPY_TRANSFORMS = {"rate": _inverse_transform}


class Gamma(NativeDistribution):
    r"""Gamma distribution with shape ``shape`` and rate ``rate``.

    .. math::
        P(x | \alpha, \beta) = \frac{\beta^\alpha}{\Gamma(\alpha)} x^{\alpha - 1}
        e^{-\beta x} \text{ for } x > 0
    """

    SCIPY_DIST = stats.gamma
    PARAM_NAMES = ("shape", "rate")
    DEFAULTS = {"rate": defaults.DEFAULT_RATE}
    TO_SCIPY_NAMES = {"shape": "a", "rate": "scale"}
    TO_SCIPY_TRANSFORMS = {"rate": _inverse_transform}


class HalfFlat(NativeDistribution):
    """Improper flat distribution on the positive half-line.

    The log-density is 0 inside :math:`(0, \\infty)` and ``-inf`` outside. There
    is no proper distribution to sample from, so :py:meth:`sample` raises.
    """

    def logpdf(self, x: SampleType, **params) -> SampleType:
        self.bind(**params)
        return np.where(np.greater(x, 0.0), 0.0, -np.inf)

    def sample(
        self, n: Integer, random_state: RandomState = None, **params
    ) -> np.ndarray:
        """This is not implemented.

        :raises NotImplementedError: The half-flat distribution is improper
        """
        raise NotImplementedError(
            "Cannot sample from the half-flat distribution: it is improper"
        )


class InverseGamma(NativeDistribution):
    r"""Inverse-gamma distribution with shape ``shape`` and scale ``scale``.

    If :math:`X` is inverse-gamma distributed, :math:`1/X` is gamma distributed
    with the same shape and rate equal to ``scale``.

    .. math::
        P(x | \alpha, \beta) = \frac{\beta^\alpha}{\Gamma(\alpha)} x^{-\alpha - 1}
        e^{-\beta / x} \text{ for } x > 0
    """

    SCIPY_DIST = stats.invgamma
    PARAM_NAMES = ("shape", "scale")
    DEFAULTS = {"scale": defaults.DEFAULT_SCALE}
    TO_SCIPY_NAMES = {"shape": "a", "scale": "scale"}


class LogNormal(NativeDistribution):
    r"""Log-normal distribution, parametrized by the mean ``meanlog`` and
    standard deviation ``sdlog`` of :math:`\log(X)`.

    .. math::
        P(x | \mu, \sigma) = \frac{1}{x\sigma\sqrt{2\pi}}
        \exp\left(-\frac{(\ln(x)-\mu)^2}{2\sigma^2}\right) \text{ for } x > 0
    """

    SCIPY_DIST = stats.lognorm
    PARAM_NAMES = ("meanlog", "sdlog")
    DEFAULTS = {"meanlog": defaults.DEFAULT_MEANLOG, "sdlog": defaults.DEFAULT_SDLOG}
    TO_SCIPY_NAMES = {"meanlog": "scale", "sdlog": "s"}
    TO_SCIPY_TRANSFORMS = {"meanlog": _exp_transform}


class Weibull(NativeDistribution):
    r"""Weibull distribution with shape ``shape`` and scale ``scale``.

    .. math::
        P(x | k, \lambda) = \frac{k}{\lambda}\left(\frac{x}{\lambda}\right)^{k-1}
        e^{-(x/\lambda)^k} \text{ for } x > 0
    """

    SCIPY_DIST = stats.weibull_min
    PARAM_NAMES = ("shape", "scale")
    DEFAULTS = {"scale": defaults.DEFAULT_SCALE}
    TO_SCIPY_NAMES = {"shape": "c", "scale": "scale"}


class Beta(NativeDistribution):
    r"""Beta distribution with shape parameters ``shape1`` and ``shape2``.

    .. math::
        P(x | \alpha, \beta) = \frac{\Gamma(\alpha + \beta)}{\Gamma(\alpha)\Gamma(\beta)}
        x^{\alpha - 1} (1 - x)^{\beta - 1} \text{ for } 0 < x < 1
    """

    SCIPY_DIST = stats.beta
    PARAM_NAMES = ("shape1", "shape2")
    TO_SCIPY_NAMES = {"shape1": "a", "shape2": "b"}
    UPPER_BOUND = 1.0


class Uniform(NativeDistribution):
    r"""Uniform distribution on :math:`(\text{lower}, \text{upper})`.

    The bounds of the support are themselves parameters, so :py:meth:`support`
    depends on the parameters passed to it.
    """

    SCIPY_DIST = stats.uniform
    PARAM_NAMES = ("lower", "upper")
    DEFAULTS = {"lower": defaults.DEFAULT_LOWER, "upper": defaults.DEFAULT_UPPER}
    LOWER_BOUND = None
    UPPER_BOUND = None

    def to_scipy(self, **params) -> dict[str, Any]:
        # SciPy's scale is the width of the interval, which needs both bounds
        return {
            "loc": params["lower"],
            "scale": np.subtract(params["upper"], params["lower"]),
        }

    def support(self, **params) -> tuple[SampleType, SampleType]:
        params = self.bind(**params)
        return params["lower"], params["upper"]


# Pre-configured instances
chisq = ChiSquared()
expon = Exponential()
gamma = Gamma()
halfflat = HalfFlat()
invgamma = InverseGamma()
lnorm = LogNormal()
weib = Weibull()
beta = Beta()
unif = Uniform()
