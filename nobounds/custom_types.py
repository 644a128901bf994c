# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Custom type definitions for NoBounds.

This module provides the type aliases used throughout the package. Unlike most
annotations, these are resolvable at runtime because the package checks its own
annotations with ``typeguard`` when it is imported.
"""

from typing import Union

import numpy as np

# Scalar types
Integer = Union[int, np.integer]
"""Type alias for integer values.

Accepts both Python's built-in int and NumPy integer types.

:type: Union[int, np.integer]
"""

# Array types
SampleType = Union[int, float, np.integer, np.floating, np.ndarray]
"""Type alias for values passed to or returned from densities and samplers.

Scalars and NumPy arrays are both accepted; all operations broadcast.

:type: Union[int, float, np.integer, np.floating, np.ndarray]
"""

# Random state
RandomState = Union[int, np.integer, np.random.Generator, None]
"""Type alias for the random-number source handed to samplers.

Either a ``np.random.Generator`` owned by the caller, an integer seed used to
build a fresh generator, or ``None`` for fresh system entropy.

:type: Union[int, np.integer, np.random.Generator, None]
"""
