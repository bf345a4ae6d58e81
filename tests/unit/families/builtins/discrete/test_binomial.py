"""
Tests for Binomial Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest
from scipy.stats import binom

from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.errors import InvalidArgumentError
from pysatl_distributions.families.configuration import configure_families_register
from pysatl_distributions.types import CharacteristicName, FamilyName, Kind, UnivariateDiscrete

from ..base import BaseDistributionTest


class TestBinomialFamily(BaseDistributionTest):
    def setup_method(self):
        self.binomial_family = configure_families_register().get(FamilyName.BINOMIAL)
        self.binomial_dist_example = self.binomial_family(n=10, p=0.3)

    def test_family_properties(self):
        assert self.binomial_family.distribution_type == UnivariateDiscrete
        assert self.binomial_dist_example.to_density_function().kind is Kind.DISCRETE

    @pytest.mark.parametrize(
        "params",
        [{"n": -1, "p": 0.5}, {"n": 3, "p": 1.5}, {"n": 3, "p": -0.1}],
    )
    def test_parametrization_constraints(self, params):
        with pytest.raises(InvalidArgumentError):
            self.binomial_family(**params)

    def test_moments(self):
        assert self.binomial_dist_example.mean() == pytest.approx(3.0)
        assert self.binomial_dist_example.variance() == pytest.approx(2.1)

    @pytest.mark.parametrize(
        "char_name, scipy_func",
        [
            (CharacteristicName.PMF, binom.pmf),
            (CharacteristicName.LOG_PMF, binom.logpmf),
            (CharacteristicName.CDF, binom.cdf),
        ],
    )
    def test_characteristics_match_scipy(self, char_name, scipy_func):
        ks = np.arange(0.0, 11.0)
        result = self.binomial_dist_example.characteristic(char_name)(ks)
        self.assert_arrays_almost_equal(result, scipy_func(ks, 10, 0.3), precision=1e-9)

    def test_mass_outside_lattice(self):
        pmf = self.binomial_dist_example.to_density_function()
        np.testing.assert_array_equal(pmf(np.array([-1.0, 2.5, 11.0])), [0.0, 0.0, 0.0])

    def test_cdf_between_and_beyond_points(self):
        cdf = self.binomial_dist_example.to_cumulative_function()
        assert cdf(2.5) == pytest.approx(binom.cdf(2, 10, 0.3))
        assert cdf(-0.5) == 0.0
        assert cdf(25.0) == 1.0

    def test_support_and_domain(self):
        support = self.binomial_dist_example.support
        assert isinstance(support, IntegerLatticeDiscreteSupport)
        assert (support.min_k, support.max_k) == (0, 10)
        assert self.binomial_dist_example.domain() == list(range(11))

    def test_degenerate_probabilities(self):
        certain = self.binomial_family(n=4, p=1.0)
        assert certain.to_density_function()(4.0) == pytest.approx(1.0)
        assert certain.to_density_function()(3.0) == pytest.approx(0.0)

    def test_sampling(self, rng):
        sample = self.binomial_dist_example.sample(rng, self.SAMPLE_SIZE)
        assert np.issubdtype(sample.dtype, np.integer)
        self.assert_sample_moments(self.binomial_dist_example, rng)

    def test_fit(self, rng):
        data = binom(20, 0.4).rvs(size=40_000, random_state=rng)
        fitted = self.binomial_family.fit(data).base_parameters.parameters
        assert isinstance(fitted["n"], int)
        assert fitted["n"] >= int(data.max())
        assert fitted["n"] * fitted["p"] == pytest.approx(data.mean())

    def test_fit_rejects_overdispersed_data(self):
        with pytest.raises(InvalidArgumentError):
            self.binomial_family.fit([0.0, 0.0, 10.0])

    def test_with_vector_rounds_trials(self):
        moved = self.binomial_dist_example.with_vector([12.0000001, 0.5])
        assert moved.base_parameters.parameters == {"n": 12, "p": 0.5}
