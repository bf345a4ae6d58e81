"""
Density and Cumulative Function Values
======================================

Distributions do not *are* their density or their CDF; they hand out
separate, explicitly typed value objects:

- :class:`DensityFunction` — PDF (continuous) or PMF (discrete), obtained via
  ``distribution.to_density_function()``.
- :class:`CumulativeFunction` — CDF, obtained via
  ``distribution.to_cumulative_function()``.

Both wrap a plain callable, in the same way an analytical characteristic is a
callable bound to its parameters.

Notes
-----
- Callables are expected to accept either a scalar or a numpy array and to
  broadcast; the wrappers do not vectorise on their own.
- ``**options`` are free-form and forwarded untouched.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np
from mypy_extensions import KwArg

from pysatl_distributions.types import Kind


@dataclass(frozen=True, slots=True)
class DensityFunction[In, Out]:
    """
    Probability density (or mass) function of a distribution.

    Parameters
    ----------
    kind : Kind
        ``CONTINUOUS`` for a PDF, ``DISCRETE`` for a PMF.
    func : Callable[[In, KwArg(Any)], Out]
        Callable evaluating the density.
    log_func : Callable[[In, KwArg(Any)], Out], optional
        Callable evaluating the log-density directly. When omitted,
        :meth:`log_evaluate` takes the logarithm of :meth:`evaluate`.
    """

    kind: Kind
    func: Callable[[In, KwArg(Any)], Out]
    log_func: Callable[[In, KwArg(Any)], Out] | None = None

    @property
    def is_mass_function(self) -> bool:
        return self.kind is Kind.DISCRETE

    def evaluate(self, data: In, **options: Any) -> Out:
        """Evaluate the density at ``data``."""
        return self.func(data, **options)

    def log_evaluate(self, data: In, **options: Any) -> Out:
        """
        Evaluate the log-density at ``data``.

        Zero density maps to ``-inf`` without a divide-by-zero warning.
        """
        if self.log_func is not None:
            return self.log_func(data, **options)
        with np.errstate(divide="ignore"):
            result: Out = np.log(self.evaluate(data, **options))
        return result

    __call__ = evaluate


@dataclass(frozen=True, slots=True)
class CumulativeFunction[In, Out]:
    """
    Cumulative distribution function ``P(X <= x)``.

    Parameters
    ----------
    func : Callable[[In, KwArg(Any)], Out]
        Callable evaluating the CDF.
    derivative : DensityFunction, optional
        Density function this CDF integrates, when known.
    """

    func: Callable[[In, KwArg(Any)], Out]
    derivative: DensityFunction[In, Out] | None = None

    def evaluate(self, data: In, **options: Any) -> Out:
        """Evaluate the CDF at ``data``."""
        return self.func(data, **options)

    __call__ = evaluate


__all__ = [
    "DensityFunction",
    "CumulativeFunction",
]
