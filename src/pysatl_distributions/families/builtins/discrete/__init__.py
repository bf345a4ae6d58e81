"""
Built-in discrete distribution families.

This module contains implementations of counting (integer-valued) families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.discrete.binomial import configure_binomial_family
from pysatl_distributions.families.builtins.discrete.negative_binomial import (
    configure_negative_binomial_family,
)
from pysatl_distributions.families.builtins.discrete.poisson import configure_poisson_family

__all__ = [
    "configure_binomial_family",
    "configure_poisson_family",
    "configure_negative_binomial_family",
]
