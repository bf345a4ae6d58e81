"""
Tests for Negative Binomial Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest
from scipy.stats import nbinom

from pysatl_distributions.errors import InvalidArgumentError
from pysatl_distributions.families.configuration import configure_families_register
from pysatl_distributions.types import CharacteristicName, FamilyName

from ..base import BaseDistributionTest


class TestNegativeBinomialFamily(BaseDistributionTest):
    def setup_method(self):
        self.nbinom_family = configure_families_register().get(FamilyName.NEGATIVE_BINOMIAL)
        self.nbinom_dist_example = self.nbinom_family(r=3.5, p=0.4)

    def test_mean_size_conversion(self):
        dist = self.nbinom_family(mu=6.0, r=3.0, parametrization_name="meanSize")
        assert dist.base_parameters.parameters == pytest.approx({"r": 3.0, "p": 1 / 3})
        assert dist.mean() == pytest.approx(6.0)

    @pytest.mark.parametrize(
        "params",
        [
            {"r": 0.0, "p": 0.5},
            {"r": 2.0, "p": 0.0},
            {"mu": -1.0, "r": 1.0, "parametrization_name": "meanSize"},
        ],
    )
    def test_parametrization_constraints(self, params):
        with pytest.raises(InvalidArgumentError):
            self.nbinom_family(**params)

    def test_moments_match_scipy(self):
        assert self.nbinom_dist_example.mean() == pytest.approx(nbinom(3.5, 0.4).mean())
        assert self.nbinom_dist_example.variance() == pytest.approx(nbinom(3.5, 0.4).var())

    @pytest.mark.parametrize(
        "char_name, scipy_func",
        [
            (CharacteristicName.PMF, nbinom.pmf),
            (CharacteristicName.LOG_PMF, nbinom.logpmf),
            (CharacteristicName.CDF, nbinom.cdf),
        ],
    )
    def test_characteristics_match_scipy(self, char_name, scipy_func):
        ks = np.arange(0.0, 30.0)
        result = self.nbinom_dist_example.characteristic(char_name)(ks)
        self.assert_arrays_almost_equal(result, scipy_func(ks, 3.5, 0.4), precision=1e-9)

    def test_cdf_below_zero(self):
        assert self.nbinom_dist_example.to_cumulative_function()(-0.5) == 0.0

    def test_domain_is_unbounded_lattice(self):
        domain = self.nbinom_dist_example.domain()
        assert domain[:3] == [0, 1, 2]
        assert nbinom.sf(domain[-1], 3.5, 0.4) < 2e-12

    def test_sampling(self, rng):
        self.assert_sample_moments(self.nbinom_dist_example, rng)

    def test_fit(self, rng):
        data = nbinom(5.0, 0.3).rvs(size=40_000, random_state=rng)
        fitted = self.nbinom_family.fit(data).base_parameters.parameters
        assert fitted["p"] == pytest.approx(0.3, rel=0.08)
        assert fitted["r"] == pytest.approx(5.0, rel=0.15)

    def test_fit_rejects_underdispersed_data(self):
        with pytest.raises(InvalidArgumentError):
            self.nbinom_family.fit([2.0, 3.0, 2.0, 3.0])
