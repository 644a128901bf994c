# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Transformed SciPy distributions living on the unbounded real line.

This module composes the native bounded distributions of
:py:mod:`nobounds.distributions.native` with the transform primitives of
:py:mod:`nobounds.transforms`. For a native variable :math:`X` with density
:math:`p_X` and a bijection :math:`g` from its support onto the real line, the
transformed variable :math:`Y = g(X)` has log-density

.. math::

    \\log p_Y(y) = \\log p_X(g^{-1}(y)) + \\log\\left|\\frac{d}{dy} g^{-1}(y)\\right|

which is what :py:meth:`TransformedScipyDist.logpdf` evaluates. Draws of
:math:`Y` are obtained by forward-transforming native draws.

Two families are provided:

    - **Log-transformed**: distributions on :math:`(0, \\infty)`, mapped with
      :math:`y = \\log(x)` by :py:class:`LogUnivariateScipyTransform`
    - **Logit-transformed**: distributions on an open interval, mapped with an
      affinely rescaled logit by :py:class:`LogitUnivariateScipyTransform`

All composition happens in log space. The linear-scale density is only formed as
a final exponentiation, so extreme values degrade to 0 or ``inf`` instead of
raising.
"""

from __future__ import annotations

import warnings

from abc import ABC, abstractmethod

import numpy as np

from nobounds import transforms
from nobounds.custom_types import Integer, RandomState, SampleType
from nobounds.distributions import native

# pylint: disable=line-too-long


def _as_output(values) -> SampleType:
    """Unwrap 0-d arrays into NumPy scalars and leave everything else alone."""
    return np.asarray(values)[()]


class TransformedScipyDist(ABC):
    """Abstract base class for transformed native distributions.

    This class handles the change of variables between a native bounded
    distribution and its image on the real line. Native parameters are accepted
    positionally (in the order of the native distribution's ``PARAM_NAMES``) or
    by keyword on every method.

    :param base_dist: Native distribution to transform
    :type base_dist: native.NativeDistribution

    Subclasses must implement:
        - get_transform: Build the transform primitive for a set of native
          parameters
    """

    def __init__(self, base_dist: native.NativeDistribution):
        """Initialize transformed distribution with base distribution.

        :param base_dist: Base distribution to transform
        :type base_dist: native.NativeDistribution

        Records the base distribution for use in transformation operations.
        """
        self.base_dist = base_dist

    @property
    def param_names(self) -> tuple[str, ...]:
        """Names of the native parameters, in positional order."""
        return self.base_dist.PARAM_NAMES

    @abstractmethod
    def get_transform(self, **params) -> transforms.Transform:
        """Build the transform primitive matching the given native parameters.

        :param params: Bound native parameters
        :returns: Transform mapping the native support onto the real line
        :rtype: transforms.Transform

        This is called on every evaluation. Distributions whose support depends
        on their parameters therefore never reuse a transform built for
        different parameter values.
        """

    def transform(self, x: SampleType, *args, **kwargs) -> SampleType:
        """Apply the forward transformation to values in the native support.

        :param x: Values in the native support
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param kwargs: Native parameters, by name

        :returns: Values on the real line
        :rtype: custom_types.SampleType

        :raises DomainError: If any value lies outside the open native support
        """
        params = self.base_dist.bind(*args, **kwargs)
        return self.get_transform(**params).forward(x)

    def inverse_transform(self, x: SampleType, *args, **kwargs) -> SampleType:
        """Apply the inverse transformation to values on the real line.

        :param x: Values on the real line
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param kwargs: Native parameters, by name

        :returns: Values in the native support
        :rtype: custom_types.SampleType
        """
        params = self.base_dist.bind(*args, **kwargs)
        return self.get_transform(**params).inverse(x)

    def log_jacobian_correction(self, x: SampleType, *args, **kwargs) -> SampleType:
        """Compute the log Jacobian correction of the inverse transformation.

        :param x: Values on the real line
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param kwargs: Native parameters, by name

        :returns: Log absolute derivative of the inverse transform at ``x``
        :rtype: custom_types.SampleType
        """
        params = self.base_dist.bind(*args, **kwargs)
        return self.get_transform(**params).log_jacobian(x)

    def logpdf(self, x: SampleType, *args, **kwargs) -> SampleType:
        """Compute log probability density function with Jacobian correction.

        :param x: Values on the real line at which to evaluate the log-PDF
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param kwargs: Native parameters, by name

        :returns: Log probability density values
        :rtype: custom_types.SampleType

        :raises TypeError: If native parameters are missing or unexpected

        A native log-density of ``-inf`` is propagated as ``-inf`` regardless of
        the Jacobian term. So is any ``x`` far enough in the tails for its inverse
        transform to round onto a bound of the native support, even though the
        exact log-density there is still a finite (very negative) number. For
        the logit-Beta this starts at :math:`y` above about 37, where
        :math:`\\text{logit}^{-1}(y)` rounds to 1; a bound away from 0 (as for a
        Uniform) is also reached at :math:`y` below about -37. For the log family
        it starts once :math:`e^{y}` underflows or overflows (:math:`|y|` above
        about 709).

        A NaN result (which SciPy produces for invalid native parameters) is
        returned as is, with a ``RuntimeWarning``.
        """
        params = self.base_dist.bind(*args, **kwargs)
        transform = self.get_transform(**params)

        # Evaluate the native density at the recovered point, then correct
        native_x = transform.inverse(x)
        native_logp = self.base_dist.logpdf(native_x, **params)

        # Recovered points that rounded onto a bound are outside the open support
        outside = ~transform.in_support(native_x) & ~np.isnan(native_x)
        with np.errstate(invalid="ignore"):
            logp = np.where(
                outside | np.isneginf(native_logp),
                -np.inf,
                native_logp + transform.log_jacobian(x),
            )

        if np.any(np.isnan(logp)):
            warnings.warn(
                f"{self!r} produced NaN log-densities for parameters {params}. "
                "Check that the parameters are valid.",
                RuntimeWarning,
            )

        return _as_output(logp)

    def pdf(self, x: SampleType, *args, **kwargs) -> SampleType:
        """Compute probability density function with Jacobian correction.

        :param x: Values on the real line at which to evaluate the PDF
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param kwargs: Native parameters, by name

        :returns: Probability density values
        :rtype: custom_types.SampleType

        Computed as the exponential of the log probability density for
        numerical stability and consistency.
        """
        return _as_output(np.exp(self.logpdf(x, *args, **kwargs)))

    def density(
        self, x: SampleType, *args, log: bool = False, **kwargs
    ) -> SampleType:
        """Evaluate the density or the log-density.

        :param x: Values on the real line
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param log: Whether to return the log-density. Defaults to False.
        :type log: bool
        :param kwargs: Native parameters, by name

        :returns: :py:meth:`logpdf` if ``log`` is True, :py:meth:`pdf` otherwise
        :rtype: custom_types.SampleType
        """
        if log:
            return self.logpdf(x, *args, **kwargs)
        return self.pdf(x, *args, **kwargs)

    def rvs(
        self,
        *args,
        size: Integer = 1,
        random_state: RandomState = None,
        **kwargs,
    ) -> np.ndarray:
        """Generate random samples from the transformed distribution.

        :param args: Native parameters, positionally
        :param size: Number of samples. Defaults to 1.
        :type size: custom_types.Integer
        :param random_state: Source of randomness owned by the caller. Defaults to
            None (fresh system entropy).
        :type random_state: custom_types.RandomState
        :param kwargs: Native parameters, by name

        :returns: Samples on the real line, shape ``(size,)``
        :rtype: np.ndarray

        Generates samples from base distribution and applies transformation.
        Native draws that rounded onto a bound of the support (e.g. gamma draws
        of exactly 0 for a small shape) become ``-inf`` or ``inf``.
        """
        params = self.base_dist.bind(*args, **kwargs)
        transform = self.get_transform(**params)
        return transform.forward(
            self.base_dist.sample(size, random_state=random_state, **params),
            check=False,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.base_dist!r})"


class LogUnivariateScipyTransform(TransformedScipyDist):
    """Log transformation of a native distribution on :math:`(0, \\infty)`.

    Example:
        >>> # Log-transformed exponential distribution (a Gumbel-type distribution)
        >>> logexp = LogUnivariateScipyTransform(native.expon)
        >>> samples = logexp.rvs(2.0, size=1000, random_state=42)
        >>> log_density = logexp.logpdf(samples, rate=2.0)
    """

    _TRANSFORM = transforms.LogTransform()

    def get_transform(self, **params) -> transforms.LogTransform:
        return self._TRANSFORM


class LogitUnivariateScipyTransform(TransformedScipyDist):
    """Logit transformation of a native distribution on an open interval.

    The interval is read from the native distribution's support for the
    parameters of each call, and the unit interval is affinely rescaled onto it.
    This makes the same class serve both fixed-support distributions (Beta on
    :math:`(0, 1)`) and distributions whose support bounds are parameters
    (Uniform on :math:`(\\text{lower}, \\text{upper})`).

    :raises InvalidBoundsError: On evaluation, if the parameters describe an
        empty or unbounded interval

    Example:
        >>> logitunif = LogitUnivariateScipyTransform(native.unif)
        >>> samples = logitunif.rvs(lower=-3.0, upper=5.0, size=1000, random_state=42)
    """

    def get_transform(self, **params) -> transforms.LogitAffineTransform:
        lower, upper = self.base_dist.support(**params)
        return transforms.LogitAffineTransform(lower, upper)


# Pre-configured distribution instances for convenient use
logchisq = LogUnivariateScipyTransform(native.chisq)
"""Chi-squared distribution transformed to the log scale."""

logexp = LogUnivariateScipyTransform(native.expon)
"""Exponential distribution transformed to the log scale."""

loggamma = LogUnivariateScipyTransform(native.gamma)
"""Gamma distribution (shape, rate) transformed to the log scale."""

loghalfflat = LogUnivariateScipyTransform(native.halfflat)
"""Improper half-flat distribution transformed to the log scale. Its
log-density is the log-Jacobian alone, :math:`y`. Sampling raises
``NotImplementedError``."""

loginvgamma = LogUnivariateScipyTransform(native.invgamma)
"""Inverse-gamma distribution (shape, scale) transformed to the log scale."""

loglnorm = LogUnivariateScipyTransform(native.lnorm)
"""Log-normal distribution transformed to the log scale."""

logweib = LogUnivariateScipyTransform(native.weib)
"""Weibull distribution (shape, scale) transformed to the log scale."""

logitbeta = LogitUnivariateScipyTransform(native.beta)
"""Beta distribution transformed to the logit scale."""

logitunif = LogitUnivariateScipyTransform(native.unif)
"""Uniform distribution on (lower, upper) transformed to the rescaled logit scale."""
