"""
Exponential distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_distributions.distributions.strategies import GeneratorSamplingStrategy
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


def configure_exponential_family() -> None:
    """
    Configure and register the Exponential distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.EXPONENTIAL):
        return

    EXPONENTIAL_DOC = """
    Exponential distribution.

    Waiting time with constant hazard λ > 0 on [0, ∞).

    Log-density:
        log f(x) = log λ - λx for x ≥ 0

    Fitting returns λ = 1 / (weighted sample mean).
    """

    def _rate(parameters: Parametrization) -> float:
        return cast(_Rate, parameters).lambda_

    def log_pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the exponential distribution; ``-inf`` below zero.

        Parameters
        ----------
        parameters : Parametrization
            Base parameters with the field ``lambda_``.
        x : NumericArray
            Evaluation points.
        """
        lambda_ = _rate(parameters)
        x = np.asarray(x, dtype=np.float64)
        return np.where(x >= 0, math.log(lambda_) - lambda_ * x, -np.inf)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(log_pdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        x = np.asarray(x, dtype=np.float64)
        return cast(NumericArray, -np.expm1(-_rate(parameters) * np.maximum(x, 0.0)))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function ``-log(1 - p) / λ``; ``p = 1`` maps to +inf.

        Raises
        ------
        InvalidArgumentError
            If any probability lies outside [0, 1].
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise InvalidArgumentError("Probability must be in [0, 1]")

        with np.errstate(divide="ignore"):
            return cast(NumericArray, -np.log1p(-p) / _rate(parameters))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        return 1.0 / _rate(parameters)

    def var_func(parameters: Parametrization, _: Any) -> float:
        return _rate(parameters) ** -2

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        return rng.exponential(1.0 / _rate(parameters), size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        mean = data.mean()
        if mean <= 0:
            raise InvalidArgumentError("Exponential fit needs data with a positive mean.")
        return {"lambda_": 1.0 / mean}

    Exponential = ParametricFamily(
        name=FamilyName.EXPONENTIAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["rate"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOG_PDF: log_pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        sampling_strategy=GeneratorSamplingStrategy(_sample),
        support_by_parametrization=_support,
        estimator=_estimate,
    )
    Exponential.__doc__ = EXPONENTIAL_DOC

    @parametrization(family=Exponential, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization.

        Parameters
        ----------
        lambda_ : float
            Events per unit time.
        """

        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    ParametricFamilyRegister.register(Exponential)
