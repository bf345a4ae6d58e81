"""
Empirical Data Distributions
============================

Map-backed distributions over observed values, accumulating a non-negative
weight per distinct value:

- :class:`DataDistribution`: generic hashable keys with float weights.
- :class:`DataHistogram`: integer counts only.
- :class:`ScalarDataDistribution`: real-valued keys; adds moments, support
  bounds and a CDF.
- :class:`SortedScalarDataDistribution`: keeps keys sorted so support bounds
  are O(1) and CDF queries O(log n).

Notes
-----
- ``total`` always equals the sum of the stored weights and is maintained
  incrementally. Entries never hold a weight ``<= 0``.
- Insertion order of keys is preserved and used for iteration and display.
- Without ``strict`` a distribution holding no mass reports ``0.0`` for
  fractions, moments and entropy. With ``strict=True`` these raise
  :class:`~pysatl_distributions.errors.DegenerateResultError`.
- No internal locking; concurrent mutation is the caller's responsibility.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from bisect import bisect_left, insort
from collections.abc import Hashable
from numbers import Integral
from typing import TYPE_CHECKING, Any, Self, cast

import numpy as np

from pysatl_distributions.distributions.functions import CumulativeFunction, DensityFunction
from pysatl_distributions.distributions.sampling import sample_many, sample_one
from pysatl_distributions.errors import DegenerateResultError, InvalidArgumentError
from pysatl_distributions.types import Kind

if TYPE_CHECKING:
    from collections.abc import ItemsView, Iterable, Iterator

    from numpy.typing import ArrayLike

    from pysatl_distributions.types import Number, NumericArray


class DataDistribution[K: Hashable]:
    """
    Empirical distribution over hashable values.

    Parameters
    ----------
    data : Iterable[K] or DataDistribution[K], optional
        Initial observations, each counted with weight one, or another data
        distribution whose weights are copied.
    strict : bool, default False
        Raise :class:`DegenerateResultError` instead of returning the
        conventional default when a result needs positive total mass.

    Examples
    --------
    >>> d = DataDistribution(["a", "a", "b"])
    >>> d.increment("a", 2.0)
    4.0
    >>> d.fraction("a")
    0.8
    """

    _zero: float | int = 0.0

    def __init__(
        self,
        data: Iterable[K] | DataDistribution[K] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._counts: dict[K, Any] = {}
        self._total: Any = self._zero
        self.strict = strict
        if data is not None:
            self.increment_all(data)

    # ---- validation hooks ----------------------------------------------

    def _check_key(self, value: Any) -> K:
        return cast("K", value)

    def _check_weight(self, weight: Any) -> Any:
        w = float(weight)
        if not math.isfinite(w):
            raise InvalidArgumentError(f"Weight must be finite, got {weight!r}.")
        if w < 0.0:
            raise InvalidArgumentError(f"Weight must be nonnegative, got {weight!r}.")
        return w

    # ---- storage hooks -------------------------------------------------

    def _put(self, key: K, weight: Any) -> None:
        self._counts[key] = weight

    def _pop(self, key: K) -> Any:
        return self._counts.pop(key)

    def _degenerate(self, what: str, default: Any) -> Any:
        if self.strict:
            raise DegenerateResultError(f"Cannot compute {what} of a distribution with no mass.")
        return default

    # ---- mutation --------------------------------------------------------

    def increment(self, value: K, weight: Number = 1.0) -> Any:
        """
        Add ``weight`` to the weight of ``value``.

        Returns
        -------
        float
            The new stored weight of ``value``.

        Raises
        ------
        InvalidArgumentError
            If ``weight`` is negative or not finite.
        """
        key = self._check_key(value)
        w = self._check_weight(weight)
        old = self._counts.get(key, self._zero)
        if w == 0:
            return old
        new = old + w
        self._put(key, new)
        self._total += w
        return new

    def decrement(self, value: K, weight: Number = 1.0) -> Any:
        """
        Remove ``weight`` from the weight of ``value``.

        If the result would be ``<= 0`` the entry is dropped and only the
        previously stored weight is subtracted from the total.

        Returns
        -------
        float
            The new stored weight of ``value`` (zero if removed).
        """
        key = self._check_key(value)
        w = self._check_weight(weight)
        old = self._counts.get(key, self._zero)
        if w == 0 or old == 0:
            return old

        new = old - w
        if new <= 0:
            self._pop(key)
            self._total -= old
            if not self._counts:
                self._total = self._zero
            return self._zero

        self._put(key, new)
        self._total -= w
        return new

    def increment_all(self, data: Iterable[K] | DataDistribution[K]) -> None:
        if isinstance(data, DataDistribution):
            for value, weight in list(data.items()):
                self.increment(value, weight)
        else:
            for value in data:
                self.increment(value)

    def decrement_all(self, data: Iterable[K] | DataDistribution[K]) -> None:
        if isinstance(data, DataDistribution):
            for value, weight in list(data.items()):
                self.decrement(value, weight)
        else:
            for value in data:
                self.decrement(value)

    def set(self, value: K, weight: Number) -> None:
        """Overwrite the weight of ``value``; zero removes the entry."""
        key = self._check_key(value)
        w = self._check_weight(weight)
        old = self._counts.get(key, self._zero)
        if w == 0:
            if key in self._counts:
                self._pop(key)
                self._total -= old
                if not self._counts:
                    self._total = self._zero
            return
        self._put(key, w)
        self._total += w - old

    def clear(self) -> None:
        self._counts.clear()
        self._total = self._zero

    def copy(self) -> Self:
        clone = type(self)(strict=self.strict)
        clone.increment_all(self)
        return clone

    # ---- queries -------------------------------------------------------

    @property
    def total(self) -> Any:
        """Sum of all stored weights."""
        return self._total

    @property
    def domain(self) -> list[K]:
        """Values with positive weight, in insertion order."""
        return list(self._counts)

    @property
    def domain_size(self) -> int:
        return len(self._counts)

    def items(self) -> ItemsView[K, Any]:
        return self._counts.items()

    def count(self, value: K) -> Any:
        """Stored weight of ``value`` (zero when absent)."""
        return self._counts.get(value, self._zero)

    def fraction(self, value: K) -> float:
        """
        Share of the total weight held by ``value``.

        Returns ``0.0`` when the total is zero (raises in strict mode).
        """
        if self._total <= 0:
            return float(self._degenerate("a fraction", 0.0))
        return min(float(self._counts.get(value, self._zero) / self._total), 1.0)

    def log_fraction(self, value: K) -> float:
        p = self.fraction(value)
        return math.log(p) if p > 0.0 else -math.inf

    def entropy(self) -> float:
        """Shannon entropy in nats; zero fractions contribute nothing."""
        if self._total <= 0:
            return float(self._degenerate("entropy", 0.0))
        p = np.fromiter(self._counts.values(), dtype=np.float64, count=len(self._counts))
        p /= float(self._total)
        p = p[p > 0.0]
        return float(-np.sum(p * np.log(p)))

    def max_count(self) -> Any:
        """Largest stored weight (zero when empty)."""
        if not self._counts:
            return self._zero
        return max(self._counts.values())

    def max_value(self) -> K | None:
        """First value, in insertion order, holding the largest weight."""
        if not self._counts:
            return cast("K | None", self._degenerate("the mode", None))
        return max(self._counts, key=self._counts.__getitem__)

    def max_values(self) -> list[K]:
        """All values holding the largest weight."""
        if not self._counts:
            return []
        best = self.max_count()
        return [value for value, weight in self._counts.items() if weight == best]

    def mean_count(self) -> float:
        """Average weight per distinct value."""
        if not self._counts:
            return float(self._degenerate("the mean count", 0.0))
        return float(self._total) / len(self._counts)

    # ---- sampling and views ----------------------------------------------

    def sample(self, rng: np.random.Generator, n: int | None = None) -> Any:
        """
        Draw values proportionally to their weights.

        Parameters
        ----------
        rng : numpy.random.Generator
            Source of randomness.
        n : int, optional
            Number of draws; a single value is returned when omitted.

        Raises
        ------
        InvalidArgumentError
            If the distribution is empty.
        """
        if not self._counts:
            raise InvalidArgumentError("Cannot sample from an empty data distribution.")
        values = list(self._counts)
        weights = np.fromiter(self._counts.values(), dtype=np.float64, count=len(values))
        if n is None:
            return sample_one(weights, values, rng)
        return sample_many(weights, values, rng, n)

    def to_density_function(self) -> DensityFunction[Any, float]:
        """Live PMF view: ``fraction`` and ``log_fraction``."""
        return DensityFunction(
            kind=Kind.DISCRETE,
            func=lambda value, **_: self.fraction(value),
            log_func=lambda value, **_: self.log_fraction(value),
        )

    # ---- container protocol ----------------------------------------------

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, value: object) -> bool:
        return value in self._counts

    def __iter__(self) -> Iterator[K]:
        return iter(self._counts)

    def __repr__(self) -> str:
        shown = ", ".join(f"{k!r}: {v!r}" for k, v in self._counts.items())
        return f"{type(self).__name__}(total={self._total!r}, counts={{{shown}}})"


class DataHistogram[K: Hashable](DataDistribution[K]):
    """
    Data distribution restricted to integer counts.

    Every weight argument must be an integer (integer-valued floats are
    accepted); anything else raises :class:`InvalidArgumentError`.
    """

    _zero = 0

    def _check_weight(self, weight: Any) -> int:
        if isinstance(weight, bool):
            raise InvalidArgumentError("Counts must be integers, got a bool.")
        if isinstance(weight, Integral):
            count = int(weight)
        else:
            w = float(weight)
            if not (math.isfinite(w) and w.is_integer()):
                raise InvalidArgumentError(f"Counts must be integers, got {weight!r}.")
            count = int(w)
        if count < 0:
            raise InvalidArgumentError(f"Counts must be nonnegative, got {weight!r}.")
        return count


class ScalarDataDistribution(DataDistribution[float]):
    """
    Data distribution over real numbers.

    Adds the weighted mean and variance, support bounds, a vectorised PMF and
    a CDF to :class:`DataDistribution`.
    """

    @classmethod
    def from_weighted(
        cls,
        data: Iterable[float] | ArrayLike,
        weights: ArrayLike | None = None,
        *,
        strict: bool = False,
    ) -> Self:
        """
        Build from observations with optional per-observation weights.

        Raises
        ------
        InvalidArgumentError
            If lengths differ or a weight is invalid.
        """
        values = np.asarray(list(data) if not isinstance(data, np.ndarray) else data, dtype=float)
        values = values.reshape(-1)
        if weights is None:
            w = np.ones_like(values)
        else:
            w = np.asarray(weights, dtype=np.float64).reshape(-1)
            if w.size != values.size:
                raise InvalidArgumentError(
                    f"data and weights must have the same length, got {values.size} and {w.size}."
                )
        result = cls(strict=strict)
        for value, weight in zip(values, w, strict=True):
            result.increment(float(value), float(weight))
        return result

    def _check_key(self, value: Any) -> float:
        x = float(value)
        if math.isnan(x):
            raise InvalidArgumentError("NaN cannot be stored in a scalar data distribution.")
        return x

    def _arrays(self) -> tuple[NumericArray, NumericArray]:
        n = len(self._counts)
        keys = np.fromiter(self._counts.keys(), dtype=np.float64, count=n)
        weights = np.fromiter(self._counts.values(), dtype=np.float64, count=n)
        return keys, weights

    def mean(self) -> float:
        """Weighted mean ``sum(w * x) / total``; ``0.0`` without mass."""
        if self._total <= 0:
            return float(self._degenerate("the mean", 0.0))
        keys, weights = self._arrays()
        return float(np.dot(keys, weights) / self._total)

    def variance(self) -> float:
        """
        Weighted population variance in a single pass.

        Uses West's weighted update of Welford's algorithm; weights enter in
        absolute value.
        """
        mean = 0.0
        s = 0.0
        weight_sum = 0.0
        for x, w in self._counts.items():
            w = abs(w)
            if w == 0:
                continue
            new_sum = weight_sum + w
            delta = x - mean
            r = delta * w / new_sum
            mean += r
            s += weight_sum * delta * r
            weight_sum = new_sum

        if weight_sum <= 0.0:
            return float(self._degenerate("the variance", 0.0))
        return s / weight_sum

    def std(self) -> float:
        return math.sqrt(self.variance())

    def min_support(self) -> float:
        """Smallest stored value; ``+inf`` when empty."""
        return min(self._counts, default=math.inf)

    def max_support(self) -> float:
        """Largest stored value; ``-inf`` when empty."""
        return max(self._counts, default=-math.inf)

    def pmf(self, x: Number | NumericArray) -> float | NumericArray:
        if np.ndim(x) == 0:
            return self.fraction(cast(float, x))
        arr = np.asarray(x, dtype=np.float64)
        out = np.fromiter((self.fraction(v) for v in arr.ravel()), dtype=np.float64, count=arr.size)
        return cast("NumericArray", out.reshape(arr.shape))

    def _cumulative_table(self) -> tuple[NumericArray, NumericArray]:
        keys, weights = self._arrays()
        order = np.argsort(keys, kind="stable")
        return keys[order], np.cumsum(weights[order])

    def cdf(self, x: Number | NumericArray) -> float | NumericArray:
        """
        ``sum(w[key <= x]) / total``; ``0.0`` without mass.

        Accepts a scalar or a numpy array.
        """
        if self._total <= 0:
            default = float(self._degenerate("the CDF", 0.0))
            if np.ndim(x) == 0:
                return default
            return cast("NumericArray", np.full(np.shape(x), default))

        keys, cumulative = self._cumulative_table()
        idx = np.searchsorted(keys, np.asarray(x, dtype=np.float64), side="right")
        padded = np.concatenate(([0.0], cumulative))
        result = padded[idx] / float(self._total)
        # accumulated float error must not push the top of the CDF past one
        result = np.minimum(result, 1.0)
        if np.ndim(result) == 0:
            return float(result)
        return cast("NumericArray", result)

    def to_density_function(self) -> DensityFunction[Any, Any]:
        return DensityFunction(kind=Kind.DISCRETE, func=lambda x, **_: self.pmf(x))

    def to_cumulative_function(self) -> CumulativeFunction[Any, Any]:
        return CumulativeFunction(
            func=lambda x, **_: self.cdf(x),
            derivative=self.to_density_function(),
        )

    def sample(self, rng: np.random.Generator, n: int | None = None) -> Any:
        drawn = super().sample(rng, n)
        if n is None:
            return drawn
        return np.asarray(drawn, dtype=np.float64)


class SortedScalarDataDistribution(ScalarDataDistribution):
    """
    Scalar data distribution with keys kept in sorted order.

    Support bounds are O(1). The cumulative-weight table used by :meth:`cdf`
    is rebuilt lazily, at most once between two mutations.
    """

    def __init__(
        self,
        data: Iterable[float] | DataDistribution[float] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._sorted_keys: list[float] = []
        self._table: tuple[NumericArray, NumericArray] | None = None
        super().__init__(data, strict=strict)

    def _put(self, key: float, weight: Any) -> None:
        if key not in self._counts:
            insort(self._sorted_keys, key)
        self._table = None
        super()._put(key, weight)

    def _pop(self, key: float) -> Any:
        del self._sorted_keys[bisect_left(self._sorted_keys, key)]
        self._table = None
        return super()._pop(key)

    def clear(self) -> None:
        super().clear()
        self._sorted_keys.clear()
        self._table = None

    @property
    def sorted_domain(self) -> list[float]:
        return list(self._sorted_keys)

    def min_support(self) -> float:
        return self._sorted_keys[0] if self._sorted_keys else math.inf

    def max_support(self) -> float:
        return self._sorted_keys[-1] if self._sorted_keys else -math.inf

    def _cumulative_table(self) -> tuple[NumericArray, NumericArray]:
        if self._table is None:
            keys = np.asarray(self._sorted_keys, dtype=np.float64)
            weights = np.fromiter(
                (self._counts[k] for k in self._sorted_keys), dtype=np.float64, count=keys.size
            )
            self._table = (keys, np.cumsum(weights))
        return self._table


__all__ = [
    "DataDistribution",
    "DataHistogram",
    "ScalarDataDistribution",
    "SortedScalarDataDistribution",
]
