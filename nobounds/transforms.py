# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Transform primitives mapping bounded supports onto the real line.

Two bijections are provided:

    - :py:class:`LogTransform` takes the positive half-line :math:`(0, \\infty)`
      to the real line with :math:`y = \\log(x)`.
    - :py:class:`LogitAffineTransform` takes an open interval :math:`(a, b)` to
      the real line with :math:`y = \\text{logit}((x - a) / (b - a))`.

Each transform exposes its forward map (bounded to unbounded), its inverse map
(unbounded to bounded), and the log absolute derivative of the inverse map. The
latter is the Jacobian correction that must be added to a native log-density to
obtain the log-density of the transformed variable:

.. math::

    \\log p_Y(y) = \\log p_X(g^{-1}(y)) + \\log\\left|\\frac{d}{dy} g^{-1}(y)\\right|

Forward maps validate their input and raise
:py:class:`~nobounds.exceptions.DomainError` for values outside the open support.
Inverse maps and Jacobians are defined on the entire real line.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from scipy import special

from nobounds import defaults
from nobounds.custom_types import SampleType
from nobounds.exceptions import DomainError, InvalidBoundsError


def logit(p: SampleType) -> SampleType:
    """Log-odds, :math:`\\log(p / (1 - p))`."""
    return special.logit(p)


def invlogit(y: SampleType) -> SampleType:
    """Inverse of :py:func:`logit`, :math:`1 / (1 + e^{-y})`, stable for large
    :math:`|y|`.
    """
    return special.expit(y)


def softplus(y: SampleType) -> SampleType:
    """Numerically stable :math:`\\log(1 + e^{y})`."""
    return np.logaddexp(0.0, y)


class Transform(ABC):
    """Abstract base class for the transform primitives.

    Subclasses must implement:
        - :py:meth:`_forward`: Forward map without support validation
        - :py:meth:`inverse`: Inverse map
        - :py:meth:`log_jacobian`: Log absolute derivative of the inverse map
        - :py:attr:`lower` and :py:attr:`upper`: Bounds of the open support
    """

    @property
    @abstractmethod
    def lower(self) -> SampleType:
        """Lower bound of the open support of the untransformed variable."""

    @property
    @abstractmethod
    def upper(self) -> SampleType:
        """Upper bound of the open support of the untransformed variable."""

    @abstractmethod
    def _forward(self, x: SampleType) -> SampleType:
        """Forward map, assuming ``x`` is already known to be in the support."""

    @abstractmethod
    def inverse(self, y: SampleType) -> SampleType:
        """Map values on the real line back into the open support.

        :param y: Values on the unconstrained scale
        :type y: custom_types.SampleType

        :returns: Values in the open support
        :rtype: custom_types.SampleType
        """

    @abstractmethod
    def log_jacobian(self, y: SampleType) -> SampleType:
        """Log absolute derivative of :py:meth:`inverse`, evaluated at ``y``.

        :param y: Values on the unconstrained scale
        :type y: custom_types.SampleType

        :returns: :math:`\\log|d g^{-1}(y) / dy|`
        :rtype: custom_types.SampleType
        """

    def in_support(self, x: SampleType) -> SampleType:
        """Elementwise check of whether ``x`` lies strictly inside the support.

        :param x: Values to check
        :type x: custom_types.SampleType

        :returns: Boolean mask, ``True`` where ``x`` is inside the support. NaN is
            never inside the support.
        :rtype: custom_types.SampleType
        """
        return np.asarray(
            np.logical_and(np.greater(x, self.lower), np.less(x, self.upper))
        )

    def check_support(self, x: SampleType) -> None:
        """Raise if any element of ``x`` is outside the open support.

        :param x: Values to check
        :type x: custom_types.SampleType

        :raises DomainError: If any value is outside the open support
        """
        mask = self.in_support(x)
        if mask.all():
            return

        # Report a handful of the offending values
        offending = np.broadcast_to(np.asarray(x), mask.shape)[~mask]
        raise DomainError(
            f"{type(self).__name__} is only defined on the open interval "
            f"({self.lower}, {self.upper}); got {offending.size} value(s) outside "
            f"of it, e.g. {offending[:5].tolist()}"
        )

    def forward(self, x: SampleType, check: bool = True) -> SampleType:
        """Map values from the open support onto the real line.

        :param x: Values in the open support
        :type x: custom_types.SampleType
        :param check: Whether to validate ``x`` against the support. Defaults to
            True. Without the check, values on a bound map to ``-inf`` or ``inf``.
        :type check: bool

        :returns: Values on the unconstrained scale
        :rtype: custom_types.SampleType

        :raises DomainError: If ``check`` is True and any value is outside the
            open support
        """
        if check:
            self.check_support(x)
            return self._forward(x)

        with np.errstate(divide="ignore"):
            return self._forward(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(lower={self.lower}, upper={self.upper})"


class LogTransform(Transform):
    """Logarithmic transform of the positive half-line.

    .. list-table::

        * - Forward
          - :math:`y = \\log(x)`, :math:`x > 0`
        * - Inverse
          - :math:`x = e^{y}`
        * - Log-Jacobian of inverse
          - :math:`y`

    Example:
        >>> transform = LogTransform()
        >>> y = transform.forward(np.array([0.5, 1.0, 2.0]))
        >>> x = transform.inverse(y)  # recovers [0.5, 1.0, 2.0]
    """

    @property
    def lower(self) -> float:
        return 0.0

    @property
    def upper(self) -> float:
        return np.inf

    def _forward(self, x):
        return np.log(x)

    def inverse(self, y: SampleType) -> SampleType:
        return np.exp(y)

    def log_jacobian(self, y: SampleType) -> SampleType:
        # d/dy exp(y) = exp(y), whose log is y itself
        return y * 1.0

    def __repr__(self) -> str:
        return "LogTransform()"


class LogitAffineTransform(Transform):
    """Logit transform of an open interval, with an affine rescaling to the unit
    interval first.

    :param lower: Lower bound of the interval. Defaults to 0.
    :type lower: custom_types.SampleType
    :param upper: Upper bound of the interval. Defaults to 1.
    :type upper: custom_types.SampleType

    :raises InvalidBoundsError: If either bound is not finite or if ``lower`` is
        not strictly below ``upper``

    .. list-table::

        * - Forward
          - :math:`y = \\text{logit}\\left(\\frac{x - a}{b - a}\\right)`, :math:`a < x < b`
        * - Inverse
          - :math:`x = a + (b - a) \\, \\text{logit}^{-1}(y)`
        * - Log-Jacobian of inverse
          - :math:`\\log(b - a) + y - 2 \\log(1 + e^{y})`

    The Jacobian term is the log-density of the standard logistic distribution
    scaled by the interval width. It is evaluated as
    :math:`\\log(b - a) - \\text{softplus}(y) - \\text{softplus}(-y)`, which
    neither overflows nor loses precision for large :math:`|y|`.

    Bounds may be arrays, in which case they broadcast against the values being
    transformed.
    """

    def __init__(
        self,
        lower: SampleType = defaults.DEFAULT_LOWER,
        upper: SampleType = defaults.DEFAULT_UPPER,
    ):
        # The interval must be finite and non-empty
        if not (np.all(np.isfinite(lower)) and np.all(np.isfinite(upper))):
            raise InvalidBoundsError(
                f"Bounds must be finite, got lower={lower}, upper={upper}"
            )
        if not np.all(np.less(lower, upper)):
            raise InvalidBoundsError(
                f"`lower` must be strictly less than `upper`, got lower={lower}, "
                f"upper={upper}"
            )

        self._lower = lower
        self._upper = upper

    @property
    def lower(self) -> SampleType:
        return self._lower

    @property
    def upper(self) -> SampleType:
        return self._upper

    @property
    def width(self) -> SampleType:
        """Width of the interval, :math:`b - a`."""
        return np.subtract(self._upper, self._lower)

    def _forward(self, x):
        return logit((x - self._lower) / self.width)

    def inverse(self, y: SampleType) -> SampleType:
        return self._lower + self.width * invlogit(y)

    def log_jacobian(self, y: SampleType) -> SampleType:
        return np.log(self.width) - softplus(y) - softplus(np.negative(y))
