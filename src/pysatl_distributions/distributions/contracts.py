"""
Distribution Capability Protocols
=================================

Instead of one deep inheritance chain, a distribution-like object advertises
what it can do by satisfying one or more small protocols:

- :class:`MeanVariance`: closed-form ``mean()`` and ``variance()``.
- :class:`MeanCovariance`: vector ``mean()`` and ``covariance()``.
- :class:`Sampleable`: ``sample(rng)`` / ``sample(rng, n)``.
- :class:`DensityEvaluable`: ``to_density_function()`` (PDF or PMF).
- :class:`CDFEvaluable`: ``to_cumulative_function()``.
- :class:`Supported`: ``min_support()`` / ``max_support()``.
- :class:`VectorParameterized`: flat numeric parameter vector.
- :class:`DiscreteDomain`: enumeration of the points with non-zero mass.

:class:`ScalarFunctionContract` is the union every univariate family
distribution satisfies. All protocols are ``runtime_checkable`` so consumers
such as mixtures can validate components with ``isinstance``.

Notes
-----
Randomness is always injected: every ``sample`` receives a
:class:`numpy.random.Generator` and never touches global state.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    import numpy as np

    from pysatl_distributions.distributions.functions import (
        CumulativeFunction,
        DensityFunction,
    )
    from pysatl_distributions.types import NumericArray


@runtime_checkable
class MeanVariance(Protocol):
    def mean(self) -> Any: ...
    def variance(self) -> Any: ...


@runtime_checkable
class Sampleable(Protocol):
    """
    Anything that can draw random values.

    ``sample(rng)`` returns a single draw; ``sample(rng, n)`` returns ``n``
    independent draws (a numpy array for numeric data, a list otherwise).
    """

    def sample(self, rng: np.random.Generator, n: int | None = None) -> Any: ...


@runtime_checkable
class MeanCovariance(Protocol):
    """Vector-valued counterpart of :class:`MeanVariance`."""

    def mean(self) -> NumericArray: ...
    def covariance(self) -> NumericArray: ...


@runtime_checkable
class DensityEvaluable(Protocol):
    def to_density_function(self) -> DensityFunction[Any, Any]: ...


@runtime_checkable
class CDFEvaluable(Protocol):
    def to_cumulative_function(self) -> CumulativeFunction[Any, Any]: ...


@runtime_checkable
class Supported(Protocol):
    def min_support(self) -> float: ...
    def max_support(self) -> float: ...


@runtime_checkable
class VectorParameterized(Protocol):
    """
    Parameters expressible as a flat numeric vector.

    ``with_vector`` returns a *new* value; parameter containers are immutable.
    """

    def to_vector(self) -> NumericArray: ...
    def with_vector(self, vector: NumericArray) -> Self: ...


@runtime_checkable
class DiscreteDomain(Protocol):
    def domain(self) -> Iterable[Any]: ...


@runtime_checkable
class ScalarFunctionContract(
    MeanVariance,
    Sampleable,
    DensityEvaluable,
    CDFEvaluable,
    Supported,
    VectorParameterized,
    Protocol,
):
    """Full contract of a univariate parametric distribution."""


__all__ = [
    "MeanVariance",
    "MeanCovariance",
    "Sampleable",
    "DensityEvaluable",
    "CDFEvaluable",
    "Supported",
    "VectorParameterized",
    "DiscreteDomain",
    "ScalarFunctionContract",
]
