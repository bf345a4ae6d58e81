"""
Support Primitives
==================

Supports describe where a distribution places non-zero density or mass:

- :class:`ContinuousSupport` — an interval of the real line.
- :class:`ExplicitTableDiscreteSupport` — a finite sorted table of points
  (empirical data distributions).
- :class:`IntegerLatticeDiscreteSupport` — integers ``min_k, min_k + 1, ...``
  optionally bounded above (counting families).

Every support exposes ``contains``, ``lower`` and ``upper``; discrete ones
additionally iterate their points in increasing order.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from itertools import count
from math import inf
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_distributions.errors import InvalidArgumentError
from pysatl_distributions.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    @property
    def lower(self) -> float: ...
    @property
    def upper(self) -> float: ...


class ContinuousSupport(Interval1D):
    @property
    def lower(self) -> float:
        return self.left

    @property
    def upper(self) -> float:
        return self.right


@runtime_checkable
class DiscreteSupport(Support, Protocol):
    def iter_points(self) -> Iterator[Number]: ...

    def iter_leq(self, x: Number) -> Iterator[Number]: ...


class ExplicitTableDiscreteSupport(DiscreteSupport):
    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number], assume_sorted: bool = False) -> None:
        arr = np.array(list(points), dtype=np.float64)

        if arr.size == 0:
            raise InvalidArgumentError("Points must be non-empty")

        if not assume_sorted:
            arr.sort()

        self._points = np.unique(arr) if not assume_sorted else arr

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x)
        idx = np.minimum(np.searchsorted(self._points, arr, side="left"), self._points.size - 1)
        result = self._points[idx] == arr

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_points(self) -> Iterator[Number]:
        return iter(self._points)

    def iter_leq(self, x: Number) -> Iterator[Number]:
        return iter(self._points[: np.searchsorted(self._points, x, side="right")])

    @property
    def lower(self) -> float:
        return float(self._points[0])

    @property
    def upper(self) -> float:
        return float(self._points[-1])

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    def __len__(self) -> int:
        return int(self._points.size)

    __iter__ = iter_points


@dataclass(frozen=True, slots=True)
class IntegerLatticeDiscreteSupport(DiscreteSupport):
    """
    Integers in ``[min_k, max_k]``; ``max_k=None`` means unbounded above.

    Parameters
    ----------
    min_k : int, default 0
        Smallest point of the support.
    max_k : int, optional
        Largest point of the support.
    """

    min_k: int = 0
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.max_k is not None and self.max_k < self.min_k:
            raise InvalidArgumentError("max_k must not be smaller than min_k.")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        mask = (xf == np.floor(xf)) & (xf >= self.min_k)
        if self.max_k is not None:
            mask &= xf <= self.max_k

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def is_bounded(self) -> bool:
        return self.max_k is not None

    @property
    def lower(self) -> float:
        return float(self.min_k)

    @property
    def upper(self) -> float:
        return inf if self.max_k is None else float(self.max_k)

    def iter_points(self) -> Iterator[int]:
        if self.max_k is None:
            return count(self.min_k)
        return iter(range(self.min_k, self.max_k + 1))

    def iter_leq(self, x: Number) -> Iterator[int]:
        last = int(np.floor(float(x)))
        if self.max_k is not None:
            last = min(last, self.max_k)
        return iter(range(self.min_k, last + 1))

    __iter__ = iter_points


__all__ = [
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "IntegerLatticeDiscreteSupport",
]
