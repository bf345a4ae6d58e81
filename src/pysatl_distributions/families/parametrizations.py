"""
Parameterization classes and constraint definitions for distribution families.

This module provides the core abstractions for defining parameterizations of
statistical distributions: constraint validation, conversion to the base
parameterization and (de)serialization to a flat numeric vector.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec, Self

import numpy as np

from pysatl_distributions.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from numpy.typing import ArrayLike

    from pysatl_distributions.families.parametric_family import ParametricFamily
    from pysatl_distributions.types import NumericArray, ParametrizationName


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    Concrete parametrizations are frozen dataclasses whose fields are the
    shape parameters, in the order they appear in the parameter vector.
    """

    # These attributes are set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        InvalidArgumentError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise InvalidArgumentError(f'Constraint "{constraint.description}" does not hold')

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Notes
        -----
        Base implementation returns self. Subclasses should override
        if conversion to a different parametrization is needed.
        """
        return self

    def to_vector(self) -> NumericArray:
        """Parameters as a flat float vector in field order."""
        return np.array([float(v) for v in self.parameters.values()], dtype=np.float64)

    @classmethod
    def from_vector(cls, vector: ArrayLike) -> Self:
        """
        Build validated parameters from a flat vector.

        Integer-annotated fields are rounded back to ``int``.

        Raises
        ------
        InvalidArgumentError
            If the vector length differs from the number of parameters or a
            constraint does not hold.
        """
        values = np.asarray(vector, dtype=np.float64).reshape(-1)
        declared = fields(cls)  # type: ignore[arg-type]
        if values.size != len(declared):
            raise InvalidArgumentError(
                f"Expected a parameter vector of length {len(declared)}, got {values.size}."
            )
        kwargs = {
            f.name: int(round(v)) if f.type in (int, "int") else float(v)
            for f, v in zip(declared, values, strict=True)
        }
        instance = cls(**kwargs)
        instance.validate()
        return instance


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to register a class as a parametrization for a family.

    Parameters
    ----------
    family : ParametricFamily
        Family to register the parametrization with.
    name : str
        Name of the parametrization.

    Notes
    -----
    Automatically converts the class to a frozen dataclass if not already one.
    Collects constraint methods marked with @constraint, including the ones
    inherited from parent parametrizations.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        constraints: list[ParametrizationConstraint] = []
        for klass in reversed(cls.__mro__):
            for attr_name, attr in vars(klass).items():
                if isinstance(attr, (staticmethod, classmethod)) and getattr(
                    attr.__func__, "__is_constraint", False
                ):
                    raise TypeError(f"@constraint '{attr_name}' must be an instance method")

                func = attr if isfunction(attr) else None
                if func is None or not getattr(func, "__is_constraint", False):
                    continue
                desc = getattr(func, "__constraint_description", func.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator


__all__ = [
    "ParametrizationConstraint",
    "Parametrization",
    "constraint",
    "parametrization",
]
