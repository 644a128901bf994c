# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Custom exception classes for the NoBounds package.

This module defines the exceptions raised by the transform primitives, the
transformed distributions, and the registration table. All custom exceptions
inherit from the base :py:class:`NoBoundsError` class to allow for unified
exception handling when needed. Each concrete exception also inherits from the
closest built-in exception (``ValueError`` or ``KeyError``) so that callers
already catching those continue to work.
"""


class NoBoundsError(Exception):
    """Base class for all exceptions in the NoBounds package.

    Example:
        >>> try:
        ...     nobounds.transforms.LogTransform().forward(-1.0)
        ... except NoBoundsError as e:
        ...     print(f"NoBounds error occurred: {e}")
    """


class DomainError(NoBoundsError, ValueError):
    """Raised when a forward transform receives a value outside the open support
    of the distribution it was built for.

    Values are never clamped to the support; the offending call fails immediately.

    :param message: Error message describing the out-of-support values
    :type message: str
    """


class InvalidBoundsError(NoBoundsError, ValueError):
    """Raised when a bounded transform is built with bounds that do not describe
    a non-empty open interval (non-finite bounds, or ``lower >= upper``).
    """


class UnknownDistributionError(NoBoundsError, KeyError):
    """Raised when the registration table is asked for a distribution or entry
    point that it does not hold.
    """
