"""
Common fixtures and utilities for built-in family tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np


class BaseDistributionTest:
    """Base class for all distribution families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10
    SAMPLE_SIZE = 50_000

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Relative comparison with an absolute floor for values near zero."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_allclose(actual, expected, rtol=precision, atol=precision * 1e-2)

    def assert_sample_moments(self, distr: Any, rng: np.random.Generator) -> None:
        """Sample mean lies within five standard errors of the exact mean."""
        sample = distr.sample(rng, self.SAMPLE_SIZE)
        assert sample.shape == (self.SAMPLE_SIZE,)

        standard_error = math.sqrt(distr.variance() / self.SAMPLE_SIZE)
        assert abs(sample.mean() - distr.mean()) < 5 * standard_error
        assert np.all(distr.support.contains(sample))
