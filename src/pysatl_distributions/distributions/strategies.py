"""
Sampling Strategies
===================

This module defines the pluggable sampling interface used by parametric
family distributions and its default implementations:

- :class:`SamplingStrategy` — draws ``n`` values from a distribution.
- :class:`InverseTransformSamplingStrategy` — applies the distribution's
  ``ppf`` to i.i.d. uniforms ``U ~ U(0, 1)``.
- :class:`GeneratorSamplingStrategy` — delegates to a native
  :class:`numpy.random.Generator` method supplied by the family.

Notes
-----
- Strategies are stateless; the generator is always passed in by the caller.
- Results are one-dimensional arrays of length ``n``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, cast

import numpy as np

from pysatl_distributions.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_distributions.families.distribution import ParametricFamilyDistribution
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import NumericArray

    type NativeSampler = Callable[[Parametrization, np.random.Generator, int], NumericArray]


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies."""

    def sample(
        self, n: int, distr: ParametricFamilyDistribution, rng: np.random.Generator, **options: Any
    ) -> NumericArray: ...


class InverseTransformSamplingStrategy(SamplingStrategy):
    """
    Univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``ppf`` and applies it to i.i.d.
    uniforms drawn from the injected generator.

    Raises
    ------
    RuntimeError
        If the distribution's family does not provide a ``ppf``.
    """

    def sample(
        self, n: int, distr: ParametricFamilyDistribution, rng: np.random.Generator, **options: Any
    ) -> NumericArray:
        ppf = distr.characteristic(CharacteristicName.PPF)
        U = rng.random(n)
        return cast("NumericArray", np.asarray(ppf(U, **options), dtype=np.float64).reshape(n))


@dataclass(frozen=True, slots=True)
class GeneratorSamplingStrategy(SamplingStrategy):
    """
    Sampler delegating to a native numpy generator routine.

    Parameters
    ----------
    sampler : Callable[[Parametrization, Generator, int], NumericArray]
        Function drawing ``n`` values for the given base parameters, e.g.
        ``lambda p, rng, n: rng.gamma(p.k, p.theta, n)``.
    """

    sampler: NativeSampler

    def sample(
        self, n: int, distr: ParametricFamilyDistribution, rng: np.random.Generator, **options: Any
    ) -> NumericArray:
        values = self.sampler(distr.base_parameters, rng, n)
        return cast("NumericArray", np.asarray(values).reshape(n))


__all__ = [
    "SamplingStrategy",
    "InverseTransformSamplingStrategy",
    "GeneratorSamplingStrategy",
]
