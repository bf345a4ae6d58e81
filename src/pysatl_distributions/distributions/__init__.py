"""
Distributions Module
====================

Building blocks shared by every distribution in the library: capability
protocols, density and CDF values, supports, weighted sampling, sampling
strategies, mixtures and empirical data distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .contracts import (
    CDFEvaluable,
    DensityEvaluable,
    DiscreteDomain,
    MeanCovariance,
    MeanVariance,
    Sampleable,
    ScalarFunctionContract,
    Supported,
    VectorParameterized,
)
from .data import (
    DataDistribution,
    DataHistogram,
    ScalarDataDistribution,
    SortedScalarDataDistribution,
)
from .estimators import (
    DataDistributionEstimator,
    ScalarDataDistributionEstimator,
    WeightedDataDistributionEstimator,
)
from .functions import CumulativeFunction, DensityFunction
from .mixture import (
    LinearMixtureModel,
    MixtureDensityModel,
    MultivariateMixtureDensityModel,
    ScalarMixtureDensityModel,
)
from .sampling import (
    cumulative_weights,
    sample_index,
    sample_indices,
    sample_many,
    sample_one,
    sample_with_replacement,
    sample_without_replacement,
    uniform_if_degenerate,
)
from .strategies import (
    GeneratorSamplingStrategy,
    InverseTransformSamplingStrategy,
    SamplingStrategy,
)
from .support import (
    ContinuousSupport,
    DiscreteSupport,
    ExplicitTableDiscreteSupport,
    IntegerLatticeDiscreteSupport,
    Support,
)

__all__ = [
    # contracts
    "MeanVariance",
    "MeanCovariance",
    "Sampleable",
    "DensityEvaluable",
    "CDFEvaluable",
    "Supported",
    "VectorParameterized",
    "DiscreteDomain",
    "ScalarFunctionContract",
    # functions
    "DensityFunction",
    "CumulativeFunction",
    # support
    "Support",
    "ContinuousSupport",
    "DiscreteSupport",
    "ExplicitTableDiscreteSupport",
    "IntegerLatticeDiscreteSupport",
    # sampling
    "cumulative_weights",
    "sample_index",
    "sample_indices",
    "sample_one",
    "sample_many",
    "sample_with_replacement",
    "sample_without_replacement",
    "uniform_if_degenerate",
    # strategies
    "SamplingStrategy",
    "InverseTransformSamplingStrategy",
    "GeneratorSamplingStrategy",
    # mixtures
    "LinearMixtureModel",
    "MixtureDensityModel",
    "ScalarMixtureDensityModel",
    "MultivariateMixtureDensityModel",
    # data
    "DataDistribution",
    "DataHistogram",
    "ScalarDataDistribution",
    "SortedScalarDataDistribution",
    # estimators
    "DataDistributionEstimator",
    "WeightedDataDistributionEstimator",
    "ScalarDataDistributionEstimator",
]
