# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Default configuration values for NoBounds.

This module centralizes default values used across the package, including the
default native parameter values of the transformed distributions, the naming
convention of the host entry points, and numerical tolerances.

Default values cannot be programmatically altered. This documentation serves as a
reference for users and developers to understand the standard configuration used
by NoBounds.
"""

# Native parameter defaults
DEFAULT_RATE: float = 1.0
"""Default rate of the exponential and gamma distributions.

:type: float
"""

DEFAULT_SCALE: float = 1.0
"""Default scale of the inverse-gamma and Weibull distributions.

:type: float
"""

DEFAULT_MEANLOG: float = 0.0
"""Default mean of the log-normal distribution on the log scale.

:type: float
"""

DEFAULT_SDLOG: float = 1.0
"""Default standard deviation of the log-normal distribution on the log scale.

:type: float
"""

DEFAULT_LOWER: float = 0.0
"""Default lower bound of the uniform distribution and of the logit transform.

:type: float
"""

DEFAULT_UPPER: float = 1.0
"""Default upper bound of the uniform distribution and of the logit transform.

:type: float
"""

# Entry-point naming
DENSITY_PREFIX: str = "d"
"""Prefix of density entry points in the registration table (e.g. ``dLogGamma``).

:type: str
"""

SAMPLER_PREFIX: str = "r"
"""Prefix of sampler entry points in the registration table (e.g. ``rLogGamma``).

:type: str
"""

# Numerical tolerances
DEFAULT_ROUND_TRIP_RTOL: float = 1e-9
"""Relative tolerance within which ``forward(inverse(y))`` must recover ``y``
(and ``inverse(forward(x))`` must recover ``x``).

:type: float
"""
