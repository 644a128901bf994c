# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
NoBounds: bounded distributions re-expressed on the unbounded real line.

NoBounds pairs densities and samplers for common bounded univariate
distributions with a change of variables onto the real line: a logarithmic
transform for distributions bounded below and a (rescaled) logit transform for
distributions bounded on both sides. MCMC samplers can then move on an
unconstrained space without rejections at the boundaries of the support.

Key Features:
    - Transform primitives with numerically stable Jacobian corrections
    - Nine transformed distributions backed by SciPy
    - Host entry points following the ``d<Transform><Distribution>`` /
      ``r<Transform><Distribution>`` naming convention
    - Differentiable PyTorch counterparts for gradient-based samplers

Randomness is never drawn from global state: every sampler takes the random
number generator (or seed) it should use.

Example:
    >>> import numpy as np
    >>> import nobounds as nb
    >>> rng = np.random.default_rng(42)
    >>> y = nb.rLogGamma(1000, 2.0, 3.0, rng=rng)
    >>> log_density = nb.dLogGamma(y, 2.0, 3.0, log=True)
"""

from typeguard import install_import_hook

# Define the version
__version__ = "0.1.0"

# Set up type checking
install_import_hook("nobounds")

# Import objects that should be easily accessible from the package level
# pylint: disable=wrong-import-position
from nobounds import transforms
from nobounds.exceptions import (
    DomainError,
    InvalidBoundsError,
    NoBoundsError,
    UnknownDistributionError,
)
from nobounds.registry import (
    REGISTRY,
    dLogChisq,
    dLogExp,
    dLogGamma,
    dLogHalfflat,
    dLogInvgamma,
    dLogitBeta,
    dLogitUnif,
    dLogLnorm,
    dLogWeib,
    entry_points,
    get_density,
    get_sampler,
    rLogChisq,
    rLogExp,
    rLogGamma,
    rLogHalfflat,
    rLogInvgamma,
    rLogitBeta,
    rLogitUnif,
    rLogLnorm,
    rLogWeib,
)
