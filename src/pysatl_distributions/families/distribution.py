"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families. Instances are immutable values: changing a
parameter produces a new instance.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.distributions.functions import CumulativeFunction, DensityFunction
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    from numpy.typing import ArrayLike

    from pysatl_distributions.distributions.strategies import SamplingStrategy
    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.families.parametric_family import ParametricFamily
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
        NumericArray,
    )

_DOMAIN_TAIL_TOLERANCE = 1e-12


@dataclass(frozen=True, slots=True)
class ParametricFamilyDistribution:
    """
    A specific distribution instance from a parametric family.

    Represents a concrete distribution with specific parameter values,
    providing closed-form moments, density and CDF values and sampling.

    Parameters
    ----------
    family : ParametricFamily
        Family the distribution belongs to.
    parameters : Parametrization
        Parameter values for this distribution (any registered
        parametrization).
    """

    family: ParametricFamily
    parameters: Parametrization
    _characteristics: dict[GenericCharacteristicName, Callable[..., Any]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_characteristics", self.family.build_characteristics(self.parameters)
        )

    @property
    def family_name(self) -> str:
        return self.family.name

    @property
    def distribution_type(self) -> DistributionType:
        """Get the distribution type."""
        return self.family.distribution_type

    @property
    def base_parameters(self) -> Parametrization:
        """Parameters converted to the family's base parametrization."""
        return self.family.to_base(self.parameters)

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        """Get the sampling strategy for this distribution."""
        return self.family.sampling_strategy

    @property
    def support(self) -> Support:
        """Get the support of this distribution."""
        return self.family.support(self.parameters)

    def has_characteristic(self, name: GenericCharacteristicName) -> bool:
        return name in self._characteristics

    def characteristic(self, name: GenericCharacteristicName) -> Callable[..., Any]:
        """
        Characteristic bound to this distribution's parameters.

        Parameters
        ----------
        name : str
            Characteristic name, e.g. ``CharacteristicName.CDF``.

        Returns
        -------
        Callable
            Function ``f(x, **options)``.

        Raises
        ------
        RuntimeError
            If the family does not provide the characteristic.
        """
        try:
            return self._characteristics[name]
        except KeyError as exc:
            raise RuntimeError(
                f"Family {self.family_name} does not provide characteristic '{name}'."
            ) from exc

    def mean(self) -> float:
        return float(self.characteristic(CharacteristicName.MEAN)(None))

    def variance(self) -> float:
        return float(self.characteristic(CharacteristicName.VAR)(None))

    def std(self) -> float:
        return float(np.sqrt(self.variance()))

    def sample(self, rng: np.random.Generator, n: int | None = None, **options: Any) -> Any:
        """
        Generate samples from this distribution.

        Parameters
        ----------
        rng : numpy.random.Generator
            Source of randomness.
        n : int, optional
            Number of samples. When omitted a single scalar draw is returned.
        **options : Any
            Additional options for the sampling strategy.

        Returns
        -------
        float or int or NumericArray
            One draw, or an array of ``n`` draws.
        """
        if n is None:
            return self.sampling_strategy.sample(1, distr=self, rng=rng, **options)[0].item()
        return self.sampling_strategy.sample(n, distr=self, rng=rng, **options)

    def to_density_function(self) -> DensityFunction[Any, Any]:
        """
        Density of the distribution: PDF when continuous, PMF when discrete.

        A directly implemented log-density is used for ``log_evaluate`` when
        the family provides one.
        """
        kind = self.distribution_type.kind
        if self.distribution_type.is_discrete:
            name, log_name = CharacteristicName.PMF, CharacteristicName.LOG_PMF
        else:
            name, log_name = CharacteristicName.PDF, CharacteristicName.LOG_PDF
        return DensityFunction(
            kind=kind,
            func=self.characteristic(name),
            log_func=self._characteristics.get(log_name),
        )

    def to_cumulative_function(self) -> CumulativeFunction[Any, Any]:
        return CumulativeFunction(
            func=self.characteristic(CharacteristicName.CDF),
            derivative=self.to_density_function(),
        )

    def log_likelihood(self, data: ArrayLike) -> float:
        """Sum of log-densities of the observations."""
        values = np.asarray(data, dtype=np.float64)
        return float(np.sum(self.to_density_function().log_evaluate(values)))

    def min_support(self) -> float:
        return self.support.lower

    def max_support(self) -> float:
        return self.support.upper

    def to_vector(self) -> NumericArray:
        """Parameters of the current parametrization as a flat vector."""
        return self.parameters.to_vector()

    def with_vector(self, vector: ArrayLike) -> ParametricFamilyDistribution:
        """
        New distribution of the same family and parametrization.

        Raises
        ------
        InvalidArgumentError
            If the vector has the wrong length or violates a constraint.
        """
        parameters = type(self.parameters).from_vector(vector)
        return ParametricFamilyDistribution(family=self.family, parameters=parameters)

    def domain(self) -> list[int]:
        """
        Points carrying non-zero mass, in increasing order.

        For a support unbounded above, enumeration stops once the CDF
        reaches ``1 - 1e-12``.

        Raises
        ------
        TypeError
            If the distribution is not discrete.
        """
        support = self.support
        if not isinstance(support, IntegerLatticeDiscreteSupport):
            raise TypeError(f"{self.family_name} distribution has no enumerable domain.")
        if support.is_bounded:
            return list(support.iter_points())

        cdf = self.characteristic(CharacteristicName.CDF)
        return list(self._iter_until_tail(support.iter_points(), cdf))

    @staticmethod
    def _iter_until_tail(points: Iterator[int], cdf: Callable[..., Any]) -> Iterator[int]:
        for k in points:
            yield k
            if float(cdf(float(k))) >= 1.0 - _DOMAIN_TAIL_TOLERANCE:
                return

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.parameters.parameters.items())
        return f"{self.family_name}({self.parameters.name}: {params})"


__all__ = [
    "ParametricFamilyDistribution",
]
