"""
Beta distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betainc, betaincinv, betaln, xlog1py, xlogy

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


def configure_beta_family() -> None:
    """
    Configure and register the Beta distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BETA):
        return

    BETA_DOC = """
    Beta distribution.

    A continuous distribution on [0, 1] with shape parameters α and β.

    Probability density function:
        f(x) = x^(α-1) (1-x)^(β-1) / B(α, β)

    Fitting uses moment matching on the weighted sample mean and variance.
    """

    def log_pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Shapes, parameters)

        a, b = parameters.alpha, parameters.beta
        x = np.asarray(x, dtype=np.float64)
        inside = (x >= 0) & (x <= 1)
        safe = np.where(inside, x, 0.5)
        with np.errstate(divide="ignore"):
            value = xlogy(a - 1.0, safe) + xlog1py(b - 1.0, -safe) - betaln(a, b)
        return np.where(inside, value, -np.inf)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(log_pdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Shapes, parameters)

        x = np.clip(np.asarray(x, dtype=np.float64), 0.0, 1.0)
        return cast(NumericArray, betainc(parameters.alpha, parameters.beta, x))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for beta distribution.

        Raises
        ------
        InvalidArgumentError
            If probability is outside [0, 1]
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise InvalidArgumentError("Probability must be in [0, 1]")

        parameters = cast(_Shapes, parameters)
        return cast(NumericArray, betaincinv(parameters.alpha, parameters.beta, p))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shapes, parameters)
        return parameters.alpha / (parameters.alpha + parameters.beta)

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Shapes, parameters)
        a, b = parameters.alpha, parameters.beta
        return a * b / ((a + b) ** 2 * (a + b + 1))

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0, right=1.0)

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Shapes, parameters)
        return rng.beta(parameters.alpha, parameters.beta, size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        mean, var = data.mean(), data.variance()
        if not 0 < mean < 1 or not 0 < var < mean * (1 - mean):
            raise InvalidArgumentError(
                "Beta fit needs a mean in (0, 1) and a variance below mean * (1 - mean)."
            )
        common = mean * (1 - mean) / var - 1
        return {"alpha": mean * common, "beta": (1 - mean) * common}

    Beta = ParametricFamily(
        name=FamilyName.BETA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shapes", "meanConcentration"],
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
    Beta.__doc__ = BETA_DOC

    @parametrization(family=Beta, name="shapes")
    class _Shapes(Parametrization):
        """
        Shape parametrization of beta distribution.

        Parameters
        ----------
        alpha : float
            First shape parameter
        beta : float
            Second shape parameter
        """

        alpha: float
        beta: float

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

    @parametrization(family=Beta, name="meanConcentration")
    class _MeanConcentration(Parametrization):
        """
        Mean-concentration parametrization: α = μκ, β = (1 - μ)κ.

        Parameters
        ----------
        mu : float
            Mean, strictly inside (0, 1)
        kappa : float
            Concentration α + β
        """

        mu: float
        kappa: float

        @constraint(description="0 < mu < 1")
        def check_mu_in_unit_interval(self) -> bool:
            return 0 < self.mu < 1

        @constraint(description="kappa > 0")
        def check_kappa_positive(self) -> bool:
            return self.kappa > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _Shapes(alpha=self.mu * self.kappa, beta=(1 - self.mu) * self.kappa)

    ParametricFamilyRegister.register(Beta)
