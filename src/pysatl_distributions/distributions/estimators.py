"""
Data Distribution Estimators
============================

Incremental learners that build empirical data distributions from streams of
observations. Each estimator creates an empty target with
:meth:`create_initial`, folds one datum into it with :meth:`update` and runs
the whole loop with :meth:`learn`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Hashable
from typing import TYPE_CHECKING, Any, cast

from pysatl_distributions.distributions.data import (
    DataDistribution,
    ScalarDataDistribution,
    SortedScalarDataDistribution,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class DataDistributionEstimator[K: Hashable]:
    """
    Counts every observation with weight one.

    Parameters
    ----------
    factory : Callable[[], DataDistribution], optional
        Creates the empty target; defaults to :class:`DataDistribution`.
    """

    def __init__(self, factory: Callable[[], DataDistribution[K]] | None = None) -> None:
        self._factory: Callable[[], DataDistribution[K]] = (
            factory if factory is not None else DataDistribution
        )

    def create_initial(self) -> DataDistribution[K]:
        return self._factory()

    def update(self, target: DataDistribution[K], datum: Any) -> None:
        target.increment(datum)

    def learn(self, data: Iterable[Any]) -> DataDistribution[K]:
        """Fold every datum into a fresh target and return it."""
        target = self.create_initial()
        for datum in data:
            self.update(target, datum)
        return target


class WeightedDataDistributionEstimator[K: Hashable](DataDistributionEstimator[K]):
    """Consumes ``(value, weight)`` pairs."""

    def update(self, target: DataDistribution[K], datum: Any) -> None:
        value, weight = datum
        target.increment(value, weight)


class ScalarDataDistributionEstimator(DataDistributionEstimator[float]):
    """
    Builds a :class:`ScalarDataDistribution` from real observations.

    Parameters
    ----------
    weighted : bool, default False
        Expect ``(value, weight)`` pairs instead of bare values.
    keep_sorted : bool, default False
        Build a :class:`SortedScalarDataDistribution`.
    """

    def __init__(self, weighted: bool = False, keep_sorted: bool = False) -> None:
        super().__init__(SortedScalarDataDistribution if keep_sorted else ScalarDataDistribution)
        self.weighted = weighted

    def create_initial(self) -> ScalarDataDistribution:
        return cast("ScalarDataDistribution", self._factory())

    def update(self, target: DataDistribution[float], datum: Any) -> None:
        if self.weighted:
            value, weight = datum
            target.increment(value, weight)
        else:
            target.increment(datum)

    def learn(self, data: Iterable[Any]) -> ScalarDataDistribution:
        target = self.create_initial()
        for datum in data:
            self.update(target, datum)
        return target


__all__ = [
    "DataDistributionEstimator",
    "WeightedDataDistributionEstimator",
    "ScalarDataDistributionEstimator",
]
