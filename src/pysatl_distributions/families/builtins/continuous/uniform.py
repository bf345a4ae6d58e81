"""
Continuous uniform distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.errors import InvalidArgumentError
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.families.registry import ParametricFamilyRegister
from pysatl_distributions.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_distributions.distributions.data import ScalarDataDistribution


def configure_uniform_family() -> None:
    """
    Configure and register the continuous Uniform distribution family.

    The family has no direct log-density and no native sampler: the log
    density is derived from the pdf and draws go through the inverse CDF.
    """

    if ParametricFamilyRegister.contains(FamilyName.CONTINUOUS_UNIFORM):
        return

    UNIFORM_DOC = """
    Continuous uniform distribution on the closed interval [a, b].

    Density 1 / (b - a) inside the interval, zero outside.
    Fitting returns the smallest and largest observed values.
    """

    def _bounds(parameters: Parametrization) -> tuple[float, float]:
        parameters = cast(_Bounds, parameters)
        return parameters.lower_bound, parameters.upper_bound

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        a, b = _bounds(parameters)
        x = np.asarray(x, dtype=np.float64)
        inside = (a <= x) & (x <= b)
        return cast(NumericArray, inside / (b - a))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Share of the interval to the left of x, clipped to [0, 1]."""
        a, b = _bounds(parameters)
        x = np.asarray(x, dtype=np.float64)
        return cast(NumericArray, np.clip((x - a) / (b - a), 0.0, 1.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Linear interpolation between the bounds.

        Raises
        ------
        InvalidArgumentError
            If any probability lies outside [0, 1].
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise InvalidArgumentError("Probability must be in [0, 1]")

        a, b = _bounds(parameters)
        return cast(NumericArray, a + p * (b - a))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        a, b = _bounds(parameters)
        return 0.5 * (a + b)

    def var_func(parameters: Parametrization, _: Any) -> float:
        a, b = _bounds(parameters)
        return (b - a) ** 2 / 12.0

    def _support(parameters: Parametrization) -> ContinuousSupport:
        a, b = _bounds(parameters)
        return ContinuousSupport(left=a, right=b, left_closed=True, right_closed=True)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        return {"lower_bound": data.min_support(), "upper_bound": data.max_support()}

    Uniform = ParametricFamily(
        name=FamilyName.CONTINUOUS_UNIFORM,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["bounds"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
        estimator=_estimate,
    )
    Uniform.__doc__ = UNIFORM_DOC

    @parametrization(family=Uniform, name="bounds")
    class _Bounds(Parametrization):
        """
        Interval endpoints.

        Parameters
        ----------
        lower_bound : float
            Left endpoint ``a``.
        upper_bound : float
            Right endpoint ``b``.
        """

        lower_bound: float
        upper_bound: float

        @constraint(description="lower_bound < upper_bound")
        def check_bounds_ordered(self) -> bool:
            return self.lower_bound < self.upper_bound

    ParametricFamilyRegister.register(Uniform)
