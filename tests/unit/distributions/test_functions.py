from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings

import numpy as np
import pytest

from pysatl_distributions.distributions.functions import CumulativeFunction, DensityFunction
from pysatl_distributions.types import Kind


def _triangle(x, **_):
    x = np.asarray(x, dtype=np.float64)
    return np.clip(1.0 - np.abs(x), 0.0, None)


class TestDensityFunction:
    def setup_method(self):
        self.density = DensityFunction(kind=Kind.CONTINUOUS, func=_triangle)

    def test_evaluate_and_call_agree(self):
        assert self.density(0.5) == self.density.evaluate(0.5) == pytest.approx(0.5)

    def test_log_falls_back_to_log_of_density(self):
        assert self.density.log_evaluate(0.5) == pytest.approx(math.log(0.5))

    def test_zero_density_has_log_minus_inf_without_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert self.density.log_evaluate(3.0) == -np.inf

    def test_explicit_log_function_is_used(self):
        density = DensityFunction(
            kind=Kind.DISCRETE,
            func=lambda x, **_: 0.25,
            log_func=lambda x, **_: -42.0,
        )
        assert density.is_mass_function
        assert density.log_evaluate(1) == -42.0

    def test_options_are_forwarded(self):
        seen = {}

        def func(x, **options):
            seen.update(options)
            return x

        DensityFunction(kind=Kind.CONTINUOUS, func=func)(1.0, scale=2)
        assert seen == {"scale": 2}

    def test_vectorised_input(self):
        np.testing.assert_allclose(self.density(np.array([-1.0, 0.0, 0.5])), [0.0, 1.0, 0.5])


class TestCumulativeFunction:
    def test_evaluate_and_derivative(self):
        density = DensityFunction(kind=Kind.CONTINUOUS, func=_triangle)
        cdf = CumulativeFunction(
            func=lambda x, **_: np.clip(np.asarray(x, dtype=np.float64), 0.0, 1.0),
            derivative=density,
        )
        assert cdf(0.3) == pytest.approx(0.3)
        assert cdf.evaluate(2.0) == 1.0
        assert cdf.derivative is density

    def test_derivative_defaults_to_none(self):
        assert CumulativeFunction(func=lambda x, **_: x).derivative is None
