from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_distributions.distributions.strategies import (
    GeneratorSamplingStrategy,
    InverseTransformSamplingStrategy,
)
from pysatl_distributions.families import configure_families_register
from pysatl_distributions.types import FamilyName
from tests.unit.families.test_basic import TestBaseFamily


class TestInverseTransformSamplingStrategy(TestBaseFamily):
    def test_applies_ppf_to_uniforms(self):
        distr = self.make_default_family()(value=10.0)
        drawn = InverseTransformSamplingStrategy().sample(5, distr, np.random.default_rng(8))
        expected = 10.0 + np.random.default_rng(8).random(5)
        np.testing.assert_allclose(drawn, expected)

    def test_requires_ppf(self, rng):
        fam = self.make_default_family(
            distr_characteristics={self.PDF: lambda p, x: np.ones_like(np.asarray(x))}
        )
        with pytest.raises(RuntimeError, match="ppf"):
            InverseTransformSamplingStrategy().sample(3, fam(value=0.0), rng)


class TestGeneratorSamplingStrategy:
    def test_calls_sampler_with_base_parameters(self, rng):
        seen = []

        def sampler(params, generator, n):
            seen.append(params.parameters)
            return generator.normal(params.mu, params.sigma, size=n)

        normal = configure_families_register().get(FamilyName.NORMAL)
        distr = normal(mu=1.0, tau=4.0, parametrization_name="meanPrec")

        drawn = GeneratorSamplingStrategy(sampler).sample(7, distr, rng)
        assert drawn.shape == (7,)
        assert seen == [{"mu": 1.0, "sigma": 0.5}]

    def test_native_draws_match_generator(self):
        exponential = configure_families_register().get(FamilyName.EXPONENTIAL)
        drawn = exponential(lambda_=2.0).sample(np.random.default_rng(4), 6)
        np.testing.assert_allclose(drawn, np.random.default_rng(4).exponential(0.5, size=6))
