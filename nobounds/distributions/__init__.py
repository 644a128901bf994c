# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Distribution implementations for NoBounds.

This submodule holds the native bounded distributions (SciPy-backed), their
transformed counterparts on the real line, and the PyTorch versions of the
latter. The transformed distributions keep the SciPy method names (``logpdf``,
``pdf``, ``rvs``) so that they can be used wherever a SciPy distribution is
expected on the unconstrained scale.
"""
