"""
Poisson distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import gammaincc, gammaln, xlogy

from pysatl_distributions.distributions.strategies import GeneratorSamplingStrategy
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
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
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_distributions.distributions.data import ScalarDataDistribution


def configure_poisson_family() -> None:
    """
    Configure and register the Poisson distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.POISSON):
        return

    POISSON_DOC = """
    Poisson distribution.

    Number of events in a fixed interval when events occur independently at
    a constant rate λ.

    Probability mass function:
        P(X = k) = λ^k exp(-λ) / k!, k = 0, 1, ...

    The maximum likelihood estimate of λ is the weighted sample mean.
    """

    def log_pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Rate, parameters)

        lambda_ = parameters.lambda_
        x = np.asarray(x, dtype=np.float64)
        inside = (x == np.floor(x)) & (x >= 0)
        k = np.where(inside, x, 0.0)
        value = xlogy(k, lambda_) - lambda_ - gammaln(k + 1.0)
        return np.where(inside, value, -np.inf)

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(log_pmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """P(X ≤ x) as the regularized upper incomplete gamma Q(floor(x) + 1, λ)."""
        parameters = cast(_Rate, parameters)

        k = np.floor(np.asarray(x, dtype=np.float64))
        value = gammaincc(np.maximum(k, 0.0) + 1.0, parameters.lambda_)
        return np.where(k < 0, 0.0, value)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Rate, parameters)
        return parameters.lambda_

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Rate, parameters)
        return parameters.lambda_

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0)

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Rate, parameters)
        return rng.poisson(parameters.lambda_, size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        mean = data.mean()
        if mean <= 0:
            raise InvalidArgumentError("Poisson fit needs data with a positive mean.")
        return {"lambda_": mean}

    Poisson = ParametricFamily(
        name=FamilyName.POISSON,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["rate"],
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOG_PMF: log_pmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        sampling_strategy=GeneratorSamplingStrategy(_sample),
        support_by_parametrization=_support,
        estimator=_estimate,
    )
    Poisson.__doc__ = POISSON_DOC

    @parametrization(family=Poisson, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization of Poisson distribution.

        Parameters
        ----------
        lambda_ : float
            Expected number of events (λ > 0)
        """

        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    ParametricFamilyRegister.register(Poisson)
