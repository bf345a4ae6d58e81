"""
Parametric family definitions and management infrastructure.

This module contains the main class for defining parametric families of
distributions: parametrizations, closed-form characteristics, support,
sampling strategy and parameter estimation from data.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from pysatl_distributions.distributions.data import ScalarDataDistribution
from pysatl_distributions.distributions.strategies import InverseTransformSamplingStrategy
from pysatl_distributions.families.distribution import ParametricFamilyDistribution
from pysatl_distributions.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import Any

    from numpy.typing import ArrayLike

    from pysatl_distributions.distributions.strategies import SamplingStrategy
    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[..., Any]
    type SupportResolver = Callable[[Parametrization], Support]
    type Estimator = Callable[[ScalarDataDistribution], dict[str, Any]]


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Represents a parametric family of distributions (e.g., normal, gamma)
    that can be parameterized in different ways. Manages parametrizations and
    closed-form characteristics, and provides factory methods for creating
    distribution instances and for fitting them to data.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType
        Kind and dimension of every member of the family.
    distr_parametrizations : list[ParametrizationName]
        List of parametrization names (first is base parametrization).
    distr_characteristics : dict[str, dict[str, Callable] or Callable]
        Mapping from characteristic names to ``func(parameters, x, **options)``.
        Single functions are treated as defined for the base parametrization.
    support_by_parametrization : Callable[[Parametrization], Support]
        Function that returns support for given base parameters.
    sampling_strategy : SamplingStrategy, optional
        Strategy for sampling; defaults to inverse transform through ``ppf``.
    estimator : Callable[[ScalarDataDistribution], dict[str, Any]], optional
        Maps weighted observations to base-parametrization keyword arguments.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType,
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        support_by_parametrization: SupportResolver,
        sampling_strategy: SamplingStrategy | None = None,
        estimator: Estimator | None = None,
    ):
        self._name = name
        self.distribution_type = distr_type
        self._support_resolver = support_by_parametrization
        self._estimator = estimator

        # Ordered names; the first one is the base parametrization name
        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]

        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self.sampling_strategy: SamplingStrategy = (
            InverseTransformSamplingStrategy() if sampling_strategy is None else sampling_strategy
        )

        def _process_char_val(
            value: dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ) -> dict[ParametrizationName, ParametrizedFunction]:
            return value if isinstance(value, dict) else {self.base_parametrization_name: value}

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {key: _process_char_val(val) for key, val in distr_characteristics.items()}

        # For every parametrization: which form of each characteristic to use
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {}
        base_name = self.base_parametrization_name
        for pname in self.parametrization_names:
            plan_for_p: dict[GenericCharacteristicName, ParametrizationName] = {}
            for characteristic, forms in self.distr_characteristics.items():
                if pname in forms:
                    plan_for_p[characteristic] = pname
                elif base_name in forms:
                    plan_for_p[characteristic] = base_name
            self._analytical_plan[pname] = plan_for_p

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Get mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Get the base parametrization class.

        Raises
        ------
        ValueError
            If base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def can_fit(self) -> bool:
        return self._estimator is not None

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If name is already registered or not declared by the family.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Parametrization '{name}' is not declared by family {self.name}.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert parameters to the base parametrization."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        base_parameters = parameters.transform_to_base_parametrization()
        base_parameters.validate()
        return base_parameters

    def support(self, parameters: Parametrization) -> Support:
        return self._support_resolver(self.to_base(parameters))

    def build_characteristics(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, Callable[..., Any]]:
        """
        Bind every available characteristic to concrete parameter values.

        Parameters
        ----------
        parameters : Parametrization
            Parameters in any registered parametrization.

        Returns
        -------
        dict[str, Callable]
            Mapping from characteristic name to ``func(x, **options)``.
        """
        plan = self._analytical_plan[parameters.name]
        base_parameters: Parametrization | None = None

        result: dict[GenericCharacteristicName, Callable[..., Any]] = {}
        for characteristic, form_name in plan.items():
            func = self.distr_characteristics[characteristic][form_name]
            if form_name == parameters.name:
                bound = parameters
            else:
                if base_parameters is None:
                    base_parameters = self.to_base(parameters)
                bound = base_parameters
            result[characteristic] = partial(func, bound)
        return result

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        **parameters_values
            Parameter values for the distribution.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        KeyError
            If parametrization name is not registered.
        InvalidArgumentError
            If parameters don't satisfy constraints.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        return self.from_parameters(parameters)

    def from_parameters(self, parameters: Parametrization) -> ParametricFamilyDistribution:
        """Wrap already-built parameters into a validated distribution."""
        parameters.validate()
        return ParametricFamilyDistribution(family=self, parameters=parameters)

    def fit(
        self,
        data: Iterable[float] | ScalarDataDistribution,
        weights: ArrayLike | None = None,
    ) -> ParametricFamilyDistribution:
        """
        Estimate a member of the family from (optionally weighted) data.

        Parameters
        ----------
        data : Iterable[float] or ScalarDataDistribution
            Observations, or an already accumulated data distribution.
        weights : array_like, optional
            Non-negative weight per observation; ignored when ``data`` is a
            data distribution.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution in the base parametrization.

        Raises
        ------
        RuntimeError
            If the family provides no estimator.
        InvalidArgumentError
            If the data carries no mass or the estimate violates a constraint.
        """
        if self._estimator is None:
            raise RuntimeError(f"Family {self.name} does not provide a parameter estimator.")

        if isinstance(data, ScalarDataDistribution):
            observations = data
        else:
            observations = ScalarDataDistribution.from_weighted(data, weights)

        return self.distribution(**self._estimator(observations))

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Create a class decorator that registers a parametrization.

        Parameters
        ----------
        name : str
            Name of the parametrization.
        """
        from pysatl_distributions.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    def __repr__(self) -> str:
        return f"ParametricFamily(name={self.name!r}, parametrizations={self.parametrization_names})"

    __call__ = distribution
