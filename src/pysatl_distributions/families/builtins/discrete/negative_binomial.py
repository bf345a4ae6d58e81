"""
Negative binomial distribution family implementation.

Counts failures before the r-th success, matching
``numpy.random.Generator.negative_binomial`` and ``scipy.stats.nbinom``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betainc, gammaln, xlog1py

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


def configure_negative_binomial_family() -> None:
    """
    Configure and register the NegativeBinomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NEGATIVE_BINOMIAL):
        return

    NEGATIVE_BINOMIAL_DOC = """
    Negative binomial distribution.

    Number of failures before the r-th success in independent trials with
    success probability p. The size r may be any positive real.

    Probability mass function:
        P(X = k) = Γ(k + r) / (k! Γ(r)) p^r (1-p)^k, k = 0, 1, ...

    Fitting uses moment matching and needs over-dispersed data
    (variance above the mean): p = mean / var, r = mean² / (var - mean).
    """

    def log_pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)

        r, p = parameters.r, parameters.p
        x = np.asarray(x, dtype=np.float64)
        inside = (x == np.floor(x)) & (x >= 0)
        k = np.where(inside, x, 0.0)
        value = gammaln(k + r) - gammaln(k + 1.0) - gammaln(r) + r * np.log(p) + xlog1py(k, -p)
        return np.where(inside, value, -np.inf)

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(log_pmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """P(X ≤ x) = I_p(r, floor(x) + 1)."""
        parameters = cast(_Standard, parameters)

        k = np.floor(np.asarray(x, dtype=np.float64))
        value = betainc(parameters.r, np.maximum(k, 0.0) + 1.0, parameters.p)
        return np.where(k < 0, 0.0, value)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.r * (1 - parameters.p) / parameters.p

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return parameters.r * (1 - parameters.p) / parameters.p**2

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0)

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Standard, parameters)
        return rng.negative_binomial(parameters.r, parameters.p, size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        mean, var = data.mean(), data.variance()
        if mean <= 0 or var <= mean:
            raise InvalidArgumentError(
                "Negative binomial fit needs a positive mean below the variance."
            )
        return {"r": mean**2 / (var - mean), "p": mean / var}

    NegativeBinomial = ParametricFamily(
        name=FamilyName.NEGATIVE_BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["standard", "meanSize"],
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
    NegativeBinomial.__doc__ = NEGATIVE_BINOMIAL_DOC

    @parametrization(family=NegativeBinomial, name="standard")
    class _Standard(Parametrization):
        """
        Size-probability parametrization of negative binomial distribution.

        Parameters
        ----------
        r : float
            Number of successes (size)
        p : float
            Success probability
        """

        r: float
        p: float

        @constraint(description="r > 0")
        def check_r_positive(self) -> bool:
            return self.r > 0

        @constraint(description="0 < p <= 1")
        def check_p_in_unit_interval(self) -> bool:
            return 0 < self.p <= 1

    @parametrization(family=NegativeBinomial, name="meanSize")
    class _MeanSize(Parametrization):
        """
        Mean-size parametrization, common for over-dispersed count data.

        Parameters
        ----------
        mu : float
            Mean number of failures
        r : float
            Size (dispersion) parameter
        """

        mu: float
        r: float

        @constraint(description="mu > 0")
        def check_mu_positive(self) -> bool:
            return self.mu > 0

        @constraint(description="r > 0")
        def check_r_positive(self) -> bool:
            return self.r > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _Standard(r=self.r, p=self.r / (self.r + self.mu))

    ParametricFamilyRegister.register(NegativeBinomial)
