"""
Normal distribution family implementation.

The family is stored by location and scale; a precision form is accepted
as input and converted on construction.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import ndtr, ndtri

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

_HALF_LOG_TWO_PI = 0.5 * math.log(2.0 * math.pi)


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution.

    Location μ, scale σ > 0, support on the whole real line.

    Log-density:
        log f(x) = -(x - μ)² / (2σ²) - log σ - log(2π) / 2

    Fitting returns the weighted sample mean and the weighted population
    standard deviation, which are the maximum likelihood estimates.
    """

    def _standardized(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        x = np.asarray(x, dtype=np.float64)
        return cast(NumericArray, (x - parameters.mu) / parameters.sigma)

    def log_pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the normal distribution.

        Evaluated directly so that it stays finite far in the tails, where
        the density itself underflows to zero.

        Parameters
        ----------
        parameters : Parametrization
            Base parameters with fields ``mu`` and ``sigma``.
        x : NumericArray
            Evaluation points.
        """
        sigma = cast(_MeanStd, parameters).sigma
        z = _standardized(parameters, x)
        return cast(NumericArray, -0.5 * z * z - math.log(sigma) - _HALF_LOG_TWO_PI)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(log_pdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Standard normal CDF of the standardized points."""
        return cast(NumericArray, ndtr(_standardized(parameters, x)))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function; maps 0 and 1 to -inf and +inf.

        Raises
        ------
        InvalidArgumentError
            If any probability lies outside [0, 1].
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise InvalidArgumentError("Probability must be in [0, 1]")

        parameters = cast(_MeanStd, parameters)
        return cast(NumericArray, parameters.mu + parameters.sigma * ndtri(p))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).mu

    def var_func(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).sigma ** 2

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport()

    def _sample(parameters: Parametrization, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return rng.normal(parameters.mu, parameters.sigma, size=n)

    def _estimate(data: ScalarDataDistribution) -> dict[str, float]:
        return {"mu": data.mean(), "sigma": data.std()}

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanPrec"],
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
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """
        Location and scale.

        Parameters
        ----------
        mu : float
            Mean.
        sigma : float
            Standard deviation.
        """

        mu: float
        sigma: float

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    @parametrization(family=Normal, name="meanPrec")
    class _MeanPrec(Parametrization):
        """
        Location and precision ``tau = 1 / sigma**2``.
        """

        mu: float
        tau: float

        @constraint(description="tau > 0")
        def check_tau_positive(self) -> bool:
            return self.tau > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _MeanStd(mu=self.mu, sigma=1.0 / math.sqrt(self.tau))

    ParametricFamilyRegister.register(Normal)
