"""
Gamma distribution family implementation.

Contains the Gamma family with shape-scale and shape-rate parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import gammainc, gammaincinv, gammaln, xlogy

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


def configure_gamma_family() -> None:
    """
    Configure and register the Gamma distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GAMMA):
        return

    GAMMA_DOC = """
    Gamma distribution.

    A continuous distribution on the positive half-line with shape k and
    scale θ (equivalently rate β = 1/θ).

    Probability density function:
        f(x) = x^(k-1) exp(-x/θ) / (Γ(k) θ^k) for x > 0

    Fitting uses moment matching: k = mean² / var, θ = var / mean.
    """

    def log_pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the gamma distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - k: float (shape)
            - theta: float (scale)
        x : NumericArray
            Points at which to evaluate the log-density
        """
        parameters = cast(_ShapeScale, parameters)

        k, theta = parameters.k, parameters.theta
        x = np.asarray(x, dtype=np.float64)
        inside = x >= 0
        safe = np.where(inside, x, 1.0)
        value = xlogy(k - 1.0, safe) - safe / theta - gammaln(k) - k * np.log(theta)
        return np.where(inside, value, -np.inf)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Probability density function for gamma distribution."""
        return cast(NumericArray, np.exp(log_pdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Regularized lower incomplete gamma function of x / θ."""
        parameters = cast(_ShapeScale, parameters)

        x = np.asarray(x, dtype=np.float64)
        return cast(NumericArray, gammainc(parameters.k, np.maximum(x, 0.0) / parameters.theta))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for gamma distribution.

        Raises
        ------
        InvalidArgumentError
            If probability is outside [0, 1]
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise InvalidArgumentError("Probability must be in [0, 1]")

        parameters = cast(_ShapeScale, parameters)
        return cast(NumericArray, parameters.theta * gammaincinv(parameters.k, p))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.k * parameters.theta

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.k * parameters.theta**2

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_ShapeScale, parameters)
        return rng.gamma(parameters.k, parameters.theta, size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        mean, var = data.mean(), data.variance()
        if mean <= 0 or var <= 0:
            raise InvalidArgumentError("Gamma fit needs data with positive mean and variance.")
        return {"k": mean**2 / var, "theta": var / mean}

    Gamma = ParametricFamily(
        name=FamilyName.GAMMA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shapeScale", "shapeRate"],
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
    Gamma.__doc__ = GAMMA_DOC

    @parametrization(family=Gamma, name="shapeScale")
    class _ShapeScale(Parametrization):
        """
        Shape-scale parametrization of gamma distribution.

        Parameters
        ----------
        k : float
            Shape parameter
        theta : float
            Scale parameter
        """

        k: float
        theta: float

        @constraint(description="k > 0")
        def check_k_positive(self) -> bool:
            return self.k > 0

        @constraint(description="theta > 0")
        def check_theta_positive(self) -> bool:
            return self.theta > 0

    @parametrization(family=Gamma, name="shapeRate")
    class _ShapeRate(Parametrization):
        """
        Shape-rate parametrization of gamma distribution.

        Parameters
        ----------
        alpha : float
            Shape parameter
        beta : float
            Rate parameter (inverse scale)
        """

        alpha: float
        beta: float

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _ShapeScale(k=self.alpha, theta=1.0 / self.beta)

    ParametricFamilyRegister.register(Gamma)
