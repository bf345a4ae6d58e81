"""
Binomial distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betainc, gammaln, xlog1py, xlogy

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


def configure_binomial_family() -> None:
    """
    Configure and register the Binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BINOMIAL):
        return

    BINOMIAL_DOC = """
    Binomial distribution.

    Number of successes in n independent trials with success probability p.

    Probability mass function:
        P(X = k) = C(n, k) p^k (1-p)^(n-k), k = 0, ..., n

    Fitting uses moment matching: p = 1 - var / mean, n = round(mean / p),
    after which p is re-estimated as mean / n.
    """

    def log_pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-probability mass function for binomial distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - n: int (number of trials)
            - p: float (success probability)
        x : NumericArray
            Points at which to evaluate; non-integer points have zero mass
        """
        parameters = cast(_Standard, parameters)

        n, p = parameters.n, parameters.p
        x = np.asarray(x, dtype=np.float64)
        inside = (x == np.floor(x)) & (x >= 0) & (x <= n)
        k = np.where(inside, x, 0.0)
        value = (
            gammaln(n + 1.0)
            - gammaln(k + 1.0)
            - gammaln(n - k + 1.0)
            + xlogy(k, p)
            + xlog1py(n - k, -p)
        )
        return np.where(inside, value, -np.inf)

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(log_pmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """P(X ≤ x) through the regularized incomplete beta function."""
        parameters = cast(_Standard, parameters)

        n, p = parameters.n, parameters.p
        k = np.floor(np.asarray(x, dtype=np.float64))
        inner = (k >= 0) & (k < n)
        kk = np.where(inner, k, 0.0)
        value = betainc(n - kk, kk + 1.0, 1.0 - p)
        return np.where(k < 0, 0.0, np.where(k >= n, 1.0, value))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.n * parameters.p

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.n * parameters.p * (1 - parameters.p)

    def _support(parameters: Parametrization) -> IntegerLatticeDiscreteSupport:
        parameters = cast(_Standard, parameters)
        return IntegerLatticeDiscreteSupport(min_k=0, max_k=parameters.n)

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return rng.binomial(parameters.n, parameters.p, size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, Any]:
        mean, var = data.mean(), data.variance()
        if mean <= 0 or var >= mean:
            raise InvalidArgumentError("Binomial fit needs a positive mean above the variance.")
        p = 1.0 - var / mean
        n = max(int(round(mean / p)), int(np.ceil(data.max_support())), 1)
        return {"n": n, "p": min(mean / n, 1.0)}

    Binomial = ParametricFamily(
        name=FamilyName.BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["standard"],
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
    Binomial.__doc__ = BINOMIAL_DOC

    @parametrization(family=Binomial, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of binomial distribution.

        Parameters
        ----------
        n : int
            Number of trials
        p : float
            Success probability
        """

        n: int
        p: float

        @constraint(description="n is a nonnegative integer")
        def check_n_nonnegative_integer(self) -> bool:
            return float(self.n).is_integer() and self.n >= 0

        @constraint(description="0 <= p <= 1")
        def check_p_in_unit_interval(self) -> bool:
            return 0 <= self.p <= 1

    ParametricFamilyRegister.register(Binomial)
