"""
Linear Mixture Models
=====================

A mixture draws a component index proportionally to a weight vector and
then draws from that component. This module provides:

- :class:`LinearMixtureModel`: generic mixture of sampleable components.
- :class:`ScalarMixtureDensityModel`: mixture of univariate distributions
  with closed-form mean and variance, density, CDF and posterior.
- :class:`MultivariateMixtureDensityModel`: mixture of vector-valued
  distributions with mean and covariance.

Notes
-----
- The weight buffer is owned by the mixture and may be mutated in place
  (e.g. by an EM-style learner between iterations). Its length always equals
  the number of components and every entry is non-negative.
- Weights need not sum to one. A zero sum is read as "uniform"; whenever
  that fallback is applied a
  :class:`~pysatl_distributions.errors.DegenerateResultWarning` is issued.
- Components are shared, not copied: they are immutable values.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Self, cast

import numpy as np
from scipy.special import logsumexp

from pysatl_distributions.distributions.contracts import (
    DensityEvaluable,
    MeanCovariance,
    MeanVariance,
    Sampleable,
)
from pysatl_distributions.distributions.functions import CumulativeFunction, DensityFunction
from pysatl_distributions.distributions.sampling import (
    sample_index,
    sample_indices,
    uniform_if_degenerate,
)
from pysatl_distributions.errors import InvalidArgumentError
from pysatl_distributions.types import Kind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike

    from pysatl_distributions.types import NumericArray


class LinearMixtureModel[T]:
    """
    Weighted mixture of components.

    Parameters
    ----------
    components : Sequence[T]
        At least one component; fixed after construction.
    weights : array_like, optional
        Non-negative finite weights, one per component. Defaults to ones.

    Raises
    ------
    InvalidArgumentError
        If there are no components, the lengths differ or a weight is
        negative or not finite.
    """

    def __init__(self, components: Sequence[T], weights: ArrayLike | None = None) -> None:
        if len(components) == 0:
            raise InvalidArgumentError("A mixture needs at least one component.")
        for component in components:
            self._check_component(component)
        self._components: tuple[T, ...] = tuple(components)
        if weights is None:
            self._weights = np.ones(len(self._components), dtype=np.float64)
        else:
            self._weights = self._validated(weights)

    def _check_component(self, component: T) -> None:
        if not isinstance(component, Sampleable):
            raise TypeError(f"Mixture component {component!r} cannot be sampled.")

    def _validated(self, weights: ArrayLike) -> NumericArray:
        w = np.array(weights, dtype=np.float64)
        if w.ndim != 1 or w.size != len(self._components):
            raise InvalidArgumentError(
                f"Expected {len(self._components)} weights, got shape {w.shape}."
            )
        if not np.all(np.isfinite(w)):
            raise InvalidArgumentError("Mixture weights must be finite.")
        if np.any(w < 0.0):
            raise InvalidArgumentError("Mixture weights must be nonnegative.")
        return w

    @property
    def components(self) -> tuple[T, ...]:
        return self._components

    @property
    def component_count(self) -> int:
        return len(self._components)

    @property
    def weights(self) -> NumericArray:
        """The live weight buffer; in-place edits change the mixture."""
        return self._weights

    @weights.setter
    def weights(self, value: ArrayLike) -> None:
        self._weights[...] = self._validated(value)

    @property
    def weight_sum(self) -> float:
        return float(self._weights.sum())

    def normalized_weights(self) -> NumericArray:
        """Weights scaled to sum to one; uniform when they sum to zero."""
        w = uniform_if_degenerate(self._weights)
        return cast("NumericArray", w / w.sum())

    def sample(self, rng: np.random.Generator, n: int | None = None) -> Any:
        """
        Draw from the mixture.

        A single draw consumes one uniform variate to choose the component
        and then whatever the component consumes. For ``n`` draws all
        component indices are chosen in one batch, then each chosen component
        is asked, in index order, for all of its draws at once; results are
        returned in the original draw order.

        Parameters
        ----------
        rng : numpy.random.Generator
            Source of randomness.
        n : int, optional
            Number of draws; a single value is returned when omitted.
        """
        weights = uniform_if_degenerate(self._weights)
        if n is None:
            component = self._components[sample_index(weights, rng)]
            return cast(Sampleable, component).sample(rng)

        indices = sample_indices(weights, rng, n)
        batches = []
        for k in np.unique(indices):
            positions = np.flatnonzero(indices == k)
            batches.append(
                (positions, cast(Sampleable, self._components[k]).sample(rng, positions.size))
            )
        if not batches:
            return np.empty(0, dtype=np.float64)

        if all(isinstance(draws, np.ndarray) for _, draws in batches):
            dtype = np.result_type(*(draws.dtype for _, draws in batches))
            result = np.empty((n, *batches[0][1].shape[1:]), dtype=dtype)
            for positions, draws in batches:
                result[positions] = draws
            return result

        # Opaque items (tuples, strings, ...) are placed one by one.
        items: list[Any] = [None] * n
        for positions, draws in batches:
            for position, draw in zip(positions, draws, strict=True):
                items[position] = draw
        return items

    def mean(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not define a mean.")

    def copy(self) -> Self:
        """Mixture sharing the components with its own copy of the weights."""
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._weights = self._weights.copy()
        return clone

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(components={list(self._components)!r}, "
            f"weights={self._weights.tolist()!r})"
        )


class MixtureDensityModel[T](LinearMixtureModel[T]):
    """
    Mixture whose components expose a density function.

    Provides the weighted density, per-component densities, posterior
    responsibilities and the flat parameter vector
    ``[weights..., component_1 params..., ...]``.
    """

    def _check_component(self, component: T) -> None:
        super()._check_component(component)
        if not isinstance(component, DensityEvaluable):
            raise TypeError(f"Mixture component {component!r} has no density function.")

    def _densities(self) -> list[DensityFunction[Any, Any]]:
        return [cast(DensityEvaluable, c).to_density_function() for c in self._components]

    def _broadcast_weights(self, ndim: int) -> NumericArray:
        return self.normalized_weights().reshape((-1,) + (1,) * (ndim - 1))

    def component_densities(self, x: Any) -> NumericArray:
        """Array of shape ``(K, ...)`` with ``f_k(x)`` in row ``k``."""
        return np.stack([np.asarray(d.evaluate(x), dtype=np.float64) for d in self._densities()])

    def component_log_densities(self, x: Any) -> NumericArray:
        return np.stack(
            [np.asarray(d.log_evaluate(x), dtype=np.float64) for d in self._densities()]
        )

    def _evaluate(self, x: Any, **_: Any) -> Any:
        densities = self.component_densities(x)
        result = np.sum(self._broadcast_weights(densities.ndim) * densities, axis=0)
        return float(result) if np.ndim(result) == 0 else result

    def _log_evaluate_stable(self, x: Any, **_: Any) -> Any:
        log_densities = self.component_log_densities(x)
        with np.errstate(divide="ignore"):
            log_w = np.log(self._broadcast_weights(log_densities.ndim))
        result = logsumexp(log_densities + log_w, axis=0)
        return float(result) if np.ndim(result) == 0 else result

    def to_density_function(self, stable: bool = False) -> DensityFunction[Any, Any]:
        """
        Weighted density ``sum(w_k f_k(x)) / sum(w_k)``.

        Parameters
        ----------
        stable : bool, default False
            Compute ``log_evaluate`` with log-sum-exp over the component
            log-densities instead of taking the log of the weighted sum.
        """
        kind = self._density_kind()
        return DensityFunction(
            kind=kind,
            func=self._evaluate,
            log_func=self._log_evaluate_stable if stable else None,
        )

    def _density_kind(self) -> Kind:
        kinds = {d.kind for d in self._densities()}
        return Kind.DISCRETE if kinds == {Kind.DISCRETE} else Kind.CONTINUOUS

    def posterior(self, x: Any) -> NumericArray:
        """
        Responsibilities ``w_k f_k(x) / sum_j w_j f_j(x)``.

        Returns an array of shape ``(K, ...)``. Where every component has
        zero density the normalized weights are returned instead.
        """
        log_densities = self.component_log_densities(x)
        weights = self._broadcast_weights(log_densities.ndim)
        with np.errstate(divide="ignore"):
            joint = log_densities + np.log(weights)
            norm = logsumexp(joint, axis=0)
        finite = np.isfinite(norm)
        post = np.exp(joint - np.where(finite, norm, 0.0))
        return cast("NumericArray", np.where(finite, post, weights))

    def to_vector(self) -> NumericArray:
        parts = [self._weights] + [np.asarray(c.to_vector()) for c in self._components]  # type: ignore[attr-defined]
        return np.concatenate(parts).astype(np.float64)

    def set_vector(self, vector: ArrayLike) -> None:
        """
        Overwrite weights (in place) and component parameters from a vector.

        Components are replaced by the values their ``with_vector`` returns.

        Raises
        ------
        InvalidArgumentError
            If the vector length does not match or any part is invalid; the
            mixture is left unchanged in that case.
        """
        values = np.asarray(vector, dtype=np.float64).reshape(-1)
        sizes = [np.asarray(c.to_vector()).size for c in self._components]  # type: ignore[attr-defined]
        expected = len(self._components) + sum(sizes)
        if values.size != expected:
            raise InvalidArgumentError(
                f"Expected a parameter vector of length {expected}, got {values.size}."
            )

        weights = self._validated(values[: len(self._components)])
        offset = len(self._components)
        components = []
        for component, size in zip(self._components, sizes, strict=True):
            components.append(component.with_vector(values[offset : offset + size]))  # type: ignore[attr-defined]
            offset += size

        self._weights[...] = weights
        self._components = tuple(components)


class ScalarMixtureDensityModel(MixtureDensityModel[Any]):
    """
    Mixture of univariate distributions.

    Examples
    --------
    >>> from pysatl_distributions.families import configure_families_register
    >>> normal = configure_families_register().get("Normal")
    >>> mix = ScalarMixtureDensityModel(
    ...     [normal(mu=0.0, sigma=1.0), normal(mu=4.0, sigma=1.0)], [1.0, 3.0]
    ... )
    >>> mix.mean()
    3.0
    """

    def _check_component(self, component: Any) -> None:
        super()._check_component(component)
        if not isinstance(component, MeanVariance):
            raise TypeError(f"Mixture component {component!r} has no mean and variance.")

    def _means(self) -> NumericArray:
        return np.array([c.mean() for c in self._components], dtype=np.float64)

    def mean(self) -> float:
        """``sum(w_k mean_k) / sum(w_k)``."""
        return float(np.dot(self.normalized_weights(), self._means()))

    def variance(self) -> float:
        """Law of total variance: ``sum(p_k (mean_k^2 + var_k)) - mean^2``."""
        p = self.normalized_weights()
        means = self._means()
        variances = np.array([c.variance() for c in self._components], dtype=np.float64)
        mean = float(np.dot(p, means))
        return float(np.dot(p, means**2 + variances) - mean**2)

    def min_support(self) -> float:
        return min(float(c.min_support()) for c in self._components)

    def max_support(self) -> float:
        return max(float(c.max_support()) for c in self._components)

    def _cdf(self, x: Any, **_: Any) -> Any:
        cdfs = np.stack(
            [
                np.asarray(c.to_cumulative_function().evaluate(x), dtype=np.float64)
                for c in self._components
            ]
        )
        result = np.sum(self._broadcast_weights(cdfs.ndim) * cdfs, axis=0)
        return float(result) if np.ndim(result) == 0 else result

    def to_cumulative_function(self) -> CumulativeFunction[Any, Any]:
        """Weighted sum of the component CDFs."""
        return CumulativeFunction(func=self._cdf, derivative=self.to_density_function())


class MultivariateMixtureDensityModel(MixtureDensityModel[Any]):
    """
    Mixture of vector-valued distributions of a common dimension.

    Density input is a point of shape ``(d,)`` or a batch ``(n, d)``.
    """

    def __init__(self, components: Sequence[Any], weights: ArrayLike | None = None) -> None:
        super().__init__(components, weights)
        dims = {np.asarray(c.mean()).size for c in self._components}
        if len(dims) != 1:
            raise InvalidArgumentError(f"Components have different dimensions: {sorted(dims)}.")
        self._dimension = dims.pop()

    def _check_component(self, component: Any) -> None:
        super()._check_component(component)
        if not isinstance(component, MeanCovariance):
            raise TypeError(f"Mixture component {component!r} has no mean and covariance.")

    @property
    def dimension(self) -> int:
        return self._dimension

    def mean(self) -> NumericArray:
        means = np.array([np.asarray(c.mean(), dtype=np.float64) for c in self._components])
        return cast("NumericArray", self.normalized_weights() @ means)

    def covariance(self) -> NumericArray:
        """Law of total covariance over the components."""
        p = self.normalized_weights()
        d = self._dimension
        means = np.array([np.asarray(c.mean(), dtype=np.float64) for c in self._components])
        covs = np.array(
            [np.asarray(c.covariance(), dtype=np.float64).reshape(d, d) for c in self._components]
        )
        mean = p @ means
        second = np.einsum("k,kij->ij", p, covs + np.einsum("ki,kj->kij", means, means))
        return cast("NumericArray", second - np.outer(mean, mean))

    variance = covariance


__all__ = [
    "LinearMixtureModel",
    "MixtureDensityModel",
    "ScalarMixtureDensityModel",
    "MultivariateMixtureDensityModel",
]
