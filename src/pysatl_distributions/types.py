"""
Core Type Definitions
=====================

Fundamental types and data structures shared by distributions, mixtures and
empirical data distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Discrete probability distribution (described by a PMF).
    CONTINUOUS : str
        Continuous probability distribution (described by a PDF).
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


@dataclass(frozen=True, slots=True)
class DistributionType:
    """
    Descriptor of the space a distribution lives on.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Dimension of a single draw (1 for univariate).
    """

    kind: Kind
    dimension: int

    @property
    def is_discrete(self) -> bool:
        return self.kind is Kind.DISCRETE


UnivariateContinuous = DistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Type for univariate continuous distributions."""

UnivariateDiscrete = DistributionType(kind=Kind.DISCRETE, dimension=1)
"""Type for univariate discrete distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[np.float64]
"""Type alias for floating point arrays."""

IndexArray = NDArray[np.intp]
"""Type alias for arrays of indices."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

type Key = Hashable
"""Type alias for keys of an empirical data distribution."""

type ParametrizationName = str
"""Type alias for parametrization names."""

type GenericCharacteristicName = str
"""Type alias for characteristic names (e.g., 'pdf', 'cdf')."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    1D interval with configurable closure.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    left_closed : bool, default=True
        Whether left endpoint is included (ignored if left = -inf).
    right_closed : bool, default=True
        Whether right endpoint is included (ignored if right = inf).
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        """Adjust closure for infinite endpoints."""
        if self.left == -inf and self.left_closed:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf and self.right_closed:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) are contained in the interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within the interval, False otherwise.
        """
        arr = np.asarray(x)

        left_ok = (arr > self.left) | (self.left_closed & (arr >= self.left))
        right_ok = (arr < self.right) | (self.right_closed & (arr <= self.right))
        result = left_ok & right_ok

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def is_empty(self) -> bool:
        if self.left > self.right:
            return True

        return bool(self.left == self.right and not (self.left_closed and self.right_closed))


class CharacteristicName(StrEnum):
    """
    Standard names of the characteristics a parametric family may provide.

    Notes
    -----
    A continuous family provides ``PDF``; a discrete one provides ``PMF``.
    ``PPF`` is only required when the family has no native sampler.
    """

    PDF = "pdf"
    LOG_PDF = "log_pdf"
    PMF = "pmf"
    LOG_PMF = "log_pmf"
    CDF = "cdf"
    PPF = "ppf"
    MEAN = "mean"
    VAR = "var"


class FamilyName(StrEnum):
    NORMAL = "Normal"
    EXPONENTIAL = "Exponential"
    CONTINUOUS_UNIFORM = "ContinuousUniform"
    GAMMA = "Gamma"
    BETA = "Beta"
    BINOMIAL = "Binomial"
    POISSON = "Poisson"
    NEGATIVE_BINOMIAL = "NegativeBinomial"


__all__ = [
    "Kind",
    "DistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "IndexArray",
    "BoolArray",
    "Key",
    "ParametrizationName",
    "GenericCharacteristicName",
    "ScalarFunc",
    "Interval1D",
    "CharacteristicName",
    "FamilyName",
]
