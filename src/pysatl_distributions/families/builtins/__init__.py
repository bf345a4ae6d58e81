"""
Built-in distribution families.

This package contains implementations of standard statistical distribution
families that are available by default.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.continuous import (
    configure_beta_family,
    configure_exponential_family,
    configure_gamma_family,
    configure_normal_family,
    configure_uniform_family,
)
from pysatl_distributions.families.builtins.discrete import (
    configure_binomial_family,
    configure_negative_binomial_family,
    configure_poisson_family,
)

__all__ = [
    "configure_normal_family",
    "configure_uniform_family",
    "configure_exponential_family",
    "configure_gamma_family",
    "configure_beta_family",
    "configure_binomial_family",
    "configure_poisson_family",
    "configure_negative_binomial_family",
]
