from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from scipy.stats import multivariate_normal

from pysatl_distributions.distributions import (
    CumulativeFunction,
    DensityFunction,
    SamplingStrategy,
)
from pysatl_distributions.types import Kind


class MockSamplingStrategy(SamplingStrategy):
    def sample(self, n: int, distr: Any, rng: np.random.Generator, **options: Any) -> Any:
        return rng.random(n)


class FixedUniformGenerator:
    """Stands in for ``numpy.random.Generator`` returning a fixed uniform."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self, size: int | None = None) -> Any:
        self.calls += 1
        if size is None:
            return self.value
        return np.full(size, self.value)


@dataclass
class BoxComponent:
    """
    Unit-width box density centred on ``center`` with a free-standing variance.

    Draws are always ``center`` and never consume randomness, which makes the
    component choice of a mixture directly observable. Every call to
    :meth:`sample` is recorded in ``calls``.
    """

    center: float
    var: float = 1.0 / 12.0
    calls: list[int | None] = field(default_factory=list)

    def mean(self) -> float:
        return self.center

    def variance(self) -> float:
        return self.var

    def sample(self, rng: np.random.Generator, n: int | None = None) -> Any:
        self.calls.append(n)
        if n is None:
            return self.center
        return np.full(n, self.center)

    def _pdf(self, x: Any, **_: Any) -> Any:
        x = np.asarray(x, dtype=np.float64)
        return np.where(np.abs(x - self.center) <= 0.5, 1.0, 0.0)

    def _cdf(self, x: Any, **_: Any) -> Any:
        return np.clip(np.asarray(x, dtype=np.float64) - self.center + 0.5, 0.0, 1.0)

    def to_density_function(self) -> DensityFunction[Any, Any]:
        return DensityFunction(kind=Kind.CONTINUOUS, func=self._pdf)

    def to_cumulative_function(self) -> CumulativeFunction[Any, Any]:
        return CumulativeFunction(func=self._cdf)

    def min_support(self) -> float:
        return self.center - 0.5

    def max_support(self) -> float:
        return self.center + 0.5

    def to_vector(self) -> np.ndarray[Any, Any]:
        return np.array([self.center])

    def with_vector(self, vector: Any) -> BoxComponent:
        return BoxComponent(center=float(np.asarray(vector)[0]), var=self.var)


@dataclass(frozen=True)
class GaussianVectorComponent:
    """Multivariate normal component backed by ``scipy.stats.multivariate_normal``."""

    loc: np.ndarray[Any, Any]
    cov: np.ndarray[Any, Any]

    def mean(self) -> np.ndarray[Any, Any]:
        return np.asarray(self.loc, dtype=np.float64)

    def covariance(self) -> np.ndarray[Any, Any]:
        return np.asarray(self.cov, dtype=np.float64)

    def sample(self, rng: np.random.Generator, n: int | None = None) -> Any:
        return rng.multivariate_normal(self.loc, self.cov, size=n)

    def to_density_function(self) -> DensityFunction[Any, Any]:
        frozen = multivariate_normal(mean=self.loc, cov=self.cov)
        return DensityFunction(
            kind=Kind.CONTINUOUS,
            func=lambda x, **_: frozen.pdf(x),
            log_func=lambda x, **_: frozen.logpdf(x),
        )

    def to_vector(self) -> np.ndarray[Any, Any]:
        return np.concatenate([self.mean(), self.covariance().ravel()])

    def with_vector(self, vector: Any) -> GaussianVectorComponent:
        d = self.mean().size
        values = np.asarray(vector, dtype=np.float64)
        return GaussianVectorComponent(loc=values[:d], cov=values[d:].reshape(d, d))
