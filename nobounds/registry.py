# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Registration table of host entry points.

Probabilistic-programming hosts that accept user-defined distributions expect a
density and a sampler for each of them under a rigid naming and calling
convention:

    - ``d<Transform><Distribution>(x, <native params...>, log=False)``
    - ``r<Transform><Distribution>(n, <native params...>, rng=None)``

This module maps each distribution identity to those two entry points. The
numeric work is entirely delegated to the transformed distributions of
:py:mod:`nobounds.distributions.custom_scipy_dists`; nothing here knows about
transforms or Jacobians.

The registered distributions are:

.. list-table::
    :header-rows: 1

    * - Key
      - Density
      - Sampler
      - Native parameters
    * - ``LogChisq``
      - ``dLogChisq``
      - ``rLogChisq``
      - ``df``
    * - ``LogExp``
      - ``dLogExp``
      - ``rLogExp``
      - ``rate=1``
    * - ``LogGamma``
      - ``dLogGamma``
      - ``rLogGamma``
      - ``shape``, ``rate=1``
    * - ``LogHalfflat``
      - ``dLogHalfflat``
      - ``rLogHalfflat``
      -
    * - ``LogInvgamma``
      - ``dLogInvgamma``
      - ``rLogInvgamma``
      - ``shape``, ``scale=1``
    * - ``LogLnorm``
      - ``dLogLnorm``
      - ``rLogLnorm``
      - ``meanlog=0``, ``sdlog=1``
    * - ``LogWeib``
      - ``dLogWeib``
      - ``rLogWeib``
      - ``shape``, ``scale=1``
    * - ``LogitBeta``
      - ``dLogitBeta``
      - ``rLogitBeta``
      - ``shape1``, ``shape2``
    * - ``LogitUnif``
      - ``dLogitUnif``
      - ``rLogitUnif``
      - ``lower=0``, ``upper=1``

Example:
    >>> from nobounds import registry
    >>> registry.dLogitBeta(0.0, 1.0, 11.0)  # density at y = 0
    >>> draws = registry.get_sampler("rLogGamma")(1000, 2.0, 3.0, rng=42)
    >>> host_functions = registry.entry_points()  # all 18 callables by name
"""

from __future__ import annotations

import dataclasses

from typing import Callable

import numpy as np

from nobounds import defaults, utils
from nobounds.custom_types import Integer, RandomState, SampleType
from nobounds.distributions import custom_scipy_dists
from nobounds.exceptions import UnknownDistributionError

# pylint: disable=invalid-name


@dataclasses.dataclass(frozen=True)
class RegisteredDistribution:
    """A transformed distribution registered under a host-facing name.

    :param name: Registry key, ``<Transform><Distribution>`` (e.g. ``LogGamma``)
    :type name: str
    :param distribution: The transformed distribution doing the numeric work
    :type distribution: custom_scipy_dists.TransformedScipyDist
    :param torch_dist_name: Name of the PyTorch counterpart in
        :py:mod:`nobounds.distributions.custom_torch_dists`
    :type torch_dist_name: str
    """

    name: str
    distribution: custom_scipy_dists.TransformedScipyDist
    torch_dist_name: str

    @property
    def density_name(self) -> str:
        """Name of the density entry point (e.g. ``dLogGamma``)."""
        return f"{defaults.DENSITY_PREFIX}{self.name}"

    @property
    def sampler_name(self) -> str:
        """Name of the sampler entry point (e.g. ``rLogGamma``)."""
        return f"{defaults.SAMPLER_PREFIX}{self.name}"

    @property
    def param_names(self) -> tuple[str, ...]:
        """Native parameter names, in the order the entry points take them."""
        return self.distribution.param_names

    def density(
        self, x: SampleType, *args, log: bool = False, **kwargs
    ) -> SampleType:
        """Density entry point, ``d<Name>(x, <native params...>, log=False)``.

        :param x: Values on the real line
        :type x: custom_types.SampleType
        :param args: Native parameters, positionally
        :param log: Whether to return the log-density. Defaults to False.
        :type log: bool
        :param kwargs: Native parameters, by name

        :returns: Density (or log-density) of the transformed variable at ``x``
        :rtype: custom_types.SampleType
        """
        return self.distribution.density(x, *args, log=log, **kwargs)

    def sampler(
        self, n: Integer, *args, rng: RandomState = None, **kwargs
    ) -> np.ndarray:
        """Sampler entry point, ``r<Name>(n, <native params...>, rng=None)``.

        :param n: Number of draws
        :type n: custom_types.Integer
        :param args: Native parameters, positionally
        :param rng: Source of randomness owned by the caller. Defaults to None
            (fresh system entropy).
        :type rng: custom_types.RandomState
        :param kwargs: Native parameters, by name

        :returns: ``n`` draws of the transformed variable
        :rtype: np.ndarray
        """
        return self.distribution.rvs(*args, size=n, random_state=rng, **kwargs)

    def torch_dist(self, *args, **kwargs):
        """Build the PyTorch counterpart for the given native parameters.

        :param args: Native parameters, positionally
        :param kwargs: Native parameters, by name

        :returns: Instance of the matching class in
            :py:mod:`nobounds.distributions.custom_torch_dists`
        """
        params = self.distribution.base_dist.bind(*args, **kwargs)
        return getattr(utils.torch_backend(), self.torch_dist_name)(**params)


REGISTRY: dict[str, RegisteredDistribution] = {
    entry.name: entry
    for entry in (
        RegisteredDistribution("LogChisq", custom_scipy_dists.logchisq, "LogChiSquared"),
        RegisteredDistribution("LogExp", custom_scipy_dists.logexp, "LogExponential"),
        RegisteredDistribution("LogGamma", custom_scipy_dists.loggamma, "LogGamma"),
        RegisteredDistribution(
            "LogHalfflat", custom_scipy_dists.loghalfflat, "LogHalfFlat"
        ),
        RegisteredDistribution(
            "LogInvgamma", custom_scipy_dists.loginvgamma, "LogInverseGamma"
        ),
        RegisteredDistribution("LogLnorm", custom_scipy_dists.loglnorm, "LogLogNormal"),
        RegisteredDistribution("LogWeib", custom_scipy_dists.logweib, "LogWeibull"),
        RegisteredDistribution("LogitBeta", custom_scipy_dists.logitbeta, "LogitBeta"),
        RegisteredDistribution(
            "LogitUnif", custom_scipy_dists.logitunif, "LogitUniform"
        ),
    )
}
"""Registered distributions by key, in documentation order."""


def get_entry(name: str) -> RegisteredDistribution:
    """Look up a registered distribution.

    :param name: Registry key (``LogGamma``) or the name of one of its entry points
        (``dLogGamma`` or ``rLogGamma``)
    :type name: str

    :returns: The registered distribution
    :rtype: RegisteredDistribution

    :raises UnknownDistributionError: If nothing is registered under ``name``
    """
    if name in REGISTRY:
        return REGISTRY[name]

    for prefix in (defaults.DENSITY_PREFIX, defaults.SAMPLER_PREFIX):
        if name.startswith(prefix) and name.removeprefix(prefix) in REGISTRY:
            return REGISTRY[name.removeprefix(prefix)]

    raise UnknownDistributionError(
        f"No distribution registered under '{name}'. Options are: "
        f"{', '.join(REGISTRY)}"
    )


def get_density(name: str) -> Callable[..., SampleType]:
    """Density entry point of a registered distribution.

    :param name: Registry key or entry-point name
    :type name: str

    :raises UnknownDistributionError: If nothing is registered under ``name``,
        or if ``name`` is the name of a sampler
    """
    if name.startswith(defaults.SAMPLER_PREFIX) and name not in REGISTRY:
        raise UnknownDistributionError(f"'{name}' names a sampler, not a density")
    return get_entry(name).density


def get_sampler(name: str) -> Callable[..., np.ndarray]:
    """Sampler entry point of a registered distribution.

    :param name: Registry key or entry-point name
    :type name: str

    :raises UnknownDistributionError: If nothing is registered under ``name``,
        or if ``name`` is the name of a density
    """
    if name.startswith(defaults.DENSITY_PREFIX) and name not in REGISTRY:
        raise UnknownDistributionError(f"'{name}' names a density, not a sampler")
    return get_entry(name).sampler


def entry_points() -> dict[str, Callable]:
    """All density and sampler entry points by name, for bulk registration.

    :returns: Mapping from ``d<Name>`` and ``r<Name>`` to their callables
    :rtype: dict[str, Callable]
    """
    functions = {}
    for entry in REGISTRY.values():
        functions[entry.density_name] = entry.density
        functions[entry.sampler_name] = entry.sampler
    return functions


# Host entry points
dLogChisq = REGISTRY["LogChisq"].density
rLogChisq = REGISTRY["LogChisq"].sampler
dLogExp = REGISTRY["LogExp"].density
rLogExp = REGISTRY["LogExp"].sampler
dLogGamma = REGISTRY["LogGamma"].density
rLogGamma = REGISTRY["LogGamma"].sampler
dLogHalfflat = REGISTRY["LogHalfflat"].density
rLogHalfflat = REGISTRY["LogHalfflat"].sampler
dLogInvgamma = REGISTRY["LogInvgamma"].density
rLogInvgamma = REGISTRY["LogInvgamma"].sampler
dLogLnorm = REGISTRY["LogLnorm"].density
rLogLnorm = REGISTRY["LogLnorm"].sampler
dLogWeib = REGISTRY["LogWeib"].density
rLogWeib = REGISTRY["LogWeib"].sampler
dLogitBeta = REGISTRY["LogitBeta"].density
rLogitBeta = REGISTRY["LogitBeta"].sampler
dLogitUnif = REGISTRY["LogitUnif"].density
rLogitUnif = REGISTRY["LogitUnif"].sampler
