# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Transformed PyTorch distributions for gradient-based samplers.

This module provides PyTorch counterparts of the transformed SciPy distributions
in :py:mod:`nobounds.distributions.custom_scipy_dists`. Their ``log_prob`` is
differentiable with respect to both the value and the parameters, which is what
Hamiltonian samplers need on the unconstrained scale.

Distribution Categories:

**Log-transformed**: native distributions on :math:`(0, \\infty)`
    - LogChiSquared
    - LogExponential
    - LogGamma
    - LogHalfFlat
    - LogInverseGamma
    - LogLogNormal
    - LogWeibull

**Logit-transformed**: native distributions on an open interval
    - LogitBeta
    - LogitUniform

Each class takes the native parameters under the same names, and with the same
defaults, as the SciPy-backed entry points.
"""

from __future__ import annotations

import torch
import torch.distributions as dist

from torch.distributions import constraints

from nobounds import defaults

# pylint: disable=abstract-method


class CustomDistribution:
    """Base marker class for NoBounds PyTorch distributions.

    This class doesn't provide any functionality but is useful for type hinting
    and identifying NoBounds distributions in the codebase.
    """


class _LogTransformed(
    dist.transformed_distribution.TransformedDistribution, CustomDistribution
):
    """Pushes a distribution on the positive half-line through the logarithm."""

    def __init__(self, base_dist: dist.Distribution, *args, **kwargs):
        transforms = [dist.transforms.ExpTransform().inv]
        super().__init__(base_dist, transforms, *args, **kwargs)


class LogChiSquared(_LogTransformed):
    """Chi-squared distribution on the log scale.

    :param df: Degrees of freedom
    :type df: Union[torch.Tensor, float]

    Mathematical Definition:
        If X ~ ChiSquared(df), then Y = log(X) ~ LogChiSquared(df)
    """

    def __init__(self, df: torch.Tensor | float, *args, **kwargs):
        super().__init__(dist.Chi2(df=df), *args, **kwargs)


class LogExponential(_LogTransformed):
    """Exponential distribution on the log scale.

    :param rate: Rate of the exponential distribution. Defaults to 1.
    :type rate: Union[torch.Tensor, float]

    Mathematical Definition:
        If X ~ Exponential(rate), then Y = log(X) ~ LogExponential(rate)

    Example:
        >>> log_exp = LogExponential(rate=torch.tensor(2.0))
        >>> samples = log_exp.sample((1000,))
    """

    def __init__(
        self, rate: torch.Tensor | float = defaults.DEFAULT_RATE, *args, **kwargs
    ):
        super().__init__(dist.Exponential(rate=rate), *args, **kwargs)


class LogGamma(_LogTransformed):
    """Gamma distribution (shape, rate) on the log scale.

    :param shape: Shape of the gamma distribution
    :type shape: Union[torch.Tensor, float]
    :param rate: Rate of the gamma distribution. Defaults to 1.
    :type rate: Union[torch.Tensor, float]
    """

    def __init__(
        self,
        shape: torch.Tensor | float,
        rate: torch.Tensor | float = defaults.DEFAULT_RATE,
        *args,
        **kwargs,
    ):
        super().__init__(dist.Gamma(concentration=shape, rate=rate), *args, **kwargs)


class LogInverseGamma(_LogTransformed):
    """Inverse-gamma distribution (shape, scale) on the log scale.

    :param shape: Shape of the inverse-gamma distribution
    :type shape: Union[torch.Tensor, float]
    :param scale: Scale of the inverse-gamma distribution. Defaults to 1.
    :type scale: Union[torch.Tensor, float]

    PyTorch calls the scale of the inverse-gamma distribution its ``rate`` (the
    rate of the gamma distribution of :math:`1/X`); the two are the same number.
    """

    def __init__(
        self,
        shape: torch.Tensor | float,
        scale: torch.Tensor | float = defaults.DEFAULT_SCALE,
        *args,
        **kwargs,
    ):
        super().__init__(
            dist.InverseGamma(concentration=shape, rate=scale), *args, **kwargs
        )


class LogLogNormal(_LogTransformed):
    """Log-normal distribution on the log scale, which is a normal distribution
    with mean ``meanlog`` and standard deviation ``sdlog``.

    :param meanlog: Mean of the logarithm. Defaults to 0.
    :type meanlog: Union[torch.Tensor, float]
    :param sdlog: Standard deviation of the logarithm. Defaults to 1.
    :type sdlog: Union[torch.Tensor, float]
    """

    def __init__(
        self,
        meanlog: torch.Tensor | float = defaults.DEFAULT_MEANLOG,
        sdlog: torch.Tensor | float = defaults.DEFAULT_SDLOG,
        *args,
        **kwargs,
    ):
        super().__init__(dist.LogNormal(loc=meanlog, scale=sdlog), *args, **kwargs)


class LogWeibull(_LogTransformed):
    """Weibull distribution (shape, scale) on the log scale.

    :param shape: Shape of the Weibull distribution
    :type shape: Union[torch.Tensor, float]
    :param scale: Scale of the Weibull distribution. Defaults to 1.
    :type scale: Union[torch.Tensor, float]
    """

    def __init__(
        self,
        shape: torch.Tensor | float,
        scale: torch.Tensor | float = defaults.DEFAULT_SCALE,
        *args,
        **kwargs,
    ):
        super().__init__(
            dist.Weibull(scale=scale, concentration=shape), *args, **kwargs
        )


class LogHalfFlat(dist.Distribution, CustomDistribution):
    """Improper flat distribution on the positive half-line, on the log scale.

    The native log-density is constant, so the transformed log-density is the
    log-Jacobian of the exponential alone, :math:`\\log p(y) = y`. The
    distribution is improper and cannot be sampled.

    :param batch_shape: Batch shape of the distribution. Defaults to ``()``.
    :type batch_shape: torch.Size
    """

    arg_constraints = {}
    support = constraints.real

    def __init__(self, batch_shape: torch.Size = torch.Size(), validate_args=None):
        super().__init__(batch_shape=batch_shape, validate_args=validate_args)

    def log_prob(self, value: torch.Tensor) -> torch.Tensor:
        if self._validate_args:
            self._validate_sample(value)
        return value.clone()

    def sample(self, sample_shape: torch.Size = torch.Size()) -> torch.Tensor:
        """This is not implemented.

        :raises NotImplementedError: The half-flat distribution is improper
        """
        raise NotImplementedError(
            "Cannot sample from the half-flat distribution: it is improper"
        )

    def rsample(self, sample_shape: torch.Size = torch.Size()) -> torch.Tensor:
        """This is not implemented.

        :raises NotImplementedError: The half-flat distribution is improper
        """
        return self.sample(sample_shape)


class LogitBeta(
    dist.transformed_distribution.TransformedDistribution, CustomDistribution
):
    """Beta distribution on the logit scale.

    :param shape1: First shape parameter
    :type shape1: Union[torch.Tensor, float]
    :param shape2: Second shape parameter
    :type shape2: Union[torch.Tensor, float]

    Mathematical Definition:
        If X ~ Beta(shape1, shape2), then Y = logit(X) ~ LogitBeta(shape1, shape2)
    """

    def __init__(
        self, shape1: torch.Tensor | float, shape2: torch.Tensor | float, *args, **kwargs
    ):
        base_dist = dist.Beta(concentration1=shape1, concentration0=shape2)
        transforms = [dist.transforms.SigmoidTransform().inv]
        super().__init__(base_dist, transforms, *args, **kwargs)


class LogitUniform(
    dist.transformed_distribution.TransformedDistribution, CustomDistribution
):
    """Uniform distribution on (lower, upper) on the rescaled logit scale.

    :param lower: Lower bound of the uniform distribution. Defaults to 0.
    :type lower: Union[torch.Tensor, float]
    :param upper: Upper bound of the uniform distribution. Defaults to 1.
    :type upper: Union[torch.Tensor, float]

    Mathematical Definition:
        If X ~ Uniform(lower, upper), then
        Y = logit((X - lower) / (upper - lower)) ~ LogitUniform(lower, upper)

    The resulting distribution is the standard logistic distribution whatever
    the bounds; the bounds only enter through the affine rescaling.
    """

    def __init__(
        self,
        lower: torch.Tensor | float = defaults.DEFAULT_LOWER,
        upper: torch.Tensor | float = defaults.DEFAULT_UPPER,
        *args,
        **kwargs,
    ):
        # Build the base distribution and the transforms (rescale to the unit
        # interval, then logit)
        base_dist = dist.Uniform(low=lower, high=upper)
        width = base_dist.high - base_dist.low
        transforms = [
            dist.transforms.AffineTransform(loc=-base_dist.low / width, scale=1 / width),
            dist.transforms.SigmoidTransform().inv,
        ]
        super().__init__(base_dist, transforms, *args, **kwargs)


# pylint: enable=abstract-method
