# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


"""Utility functions for the NoBounds package.

This module provides the small pieces of infrastructure shared by the rest of
the package:

    - Deferred loading of the PyTorch backend, so that ``import nobounds`` does
      not pay for importing torch
    - Construction of call signatures from native parameter lists
    - Binding of positional and keyword arguments against those signatures

Users will not typically need to interact with this module directly--it is designed
to be used internally by NoBounds.
"""

from __future__ import annotations

import functools
import importlib
import inspect

from types import ModuleType
from typing import Any, Mapping, Sequence

TORCH_BACKEND = "nobounds.distributions.custom_torch_dists"


@functools.cache
def torch_backend() -> ModuleType:
    """Module holding the PyTorch distributions, imported on first request.

    :returns: :py:mod:`nobounds.distributions.custom_torch_dists`
    :rtype: ModuleType

    :raises ImportError: If PyTorch is not installed
    """
    try:
        return importlib.import_module(TORCH_BACKEND)
    except ModuleNotFoundError as error:
        raise ImportError(
            f"The PyTorch distributions need `torch`, which could not be imported: "
            f"{error}"
        ) from error


def build_signature(
    param_names: Sequence[str], defaults: Mapping[str, Any]
) -> inspect.Signature:
    """Build a call signature from an ordered list of parameter names.

    :param param_names: Parameter names in the order they are accepted positionally
    :type param_names: Sequence[str]
    :param defaults: Default values for the parameters that have one
    :type defaults: Mapping[str, Any]

    :returns: Signature accepting the parameters positionally or by keyword
    :rtype: inspect.Signature

    :raises ValueError: If a default is given for a parameter that is not in
        ``param_names`` or if a parameter without a default follows one with a
        default.
    """
    if unknown := set(defaults) - set(param_names):
        raise ValueError(f"Defaults given for unknown parameters: {unknown}")

    return inspect.Signature(
        [
            inspect.Parameter(
                name,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                default=defaults.get(name, inspect.Parameter.empty),
            )
            for name in param_names
        ]
    )


def bind_parameters(
    signature: inspect.Signature, args: tuple, kwargs: dict
) -> dict[str, Any]:
    """Combine positional and keyword arguments into a single dictionary.

    :param signature: Signature whose parameters determine the names
    :type signature: inspect.Signature
    :param args: Positional arguments
    :type args: tuple
    :param kwargs: Keyword arguments
    :type kwargs: dict

    :returns: Combined arguments, with defaults applied, in signature order
    :rtype: dict[str, Any]

    :raises TypeError: If arguments are missing, unexpected, or given twice
    """
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)
