from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np
import pytest

from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.families import ParametricFamily, Parametrization, constraint
from pysatl_distributions.types import CharacteristicName, UnivariateContinuous
from tests.utils.mocks import MockSamplingStrategy


def _box_pdf(p: Any, x: Any) -> Any:
    x = np.asarray(x, dtype=np.float64)
    return np.where((x >= p.value) & (x <= p.value + 1.0), 1.0, 0.0)


def _box_cdf(p: Any, x: Any) -> Any:
    return np.clip(np.asarray(x, dtype=np.float64) - p.value, 0.0, 1.0)


class TestBaseFamily:
    """
    Builds a unit-box family with a ``base`` and an ``alt`` parametrization.

    ``alt`` stores the negated left edge and provides its own CDF; every
    other characteristic falls back to the base form.
    """

    PDF = CharacteristicName.PDF
    CDF = CharacteristicName.CDF
    PPF = CharacteristicName.PPF
    MEAN = CharacteristicName.MEAN

    def make_default_family(
        self,
        distr_characteristics: dict[Any, Any] | None = None,
        **kwargs: Any,
    ) -> ParametricFamily:
        if distr_characteristics is None:
            distr_characteristics = {
                self.PDF: _box_pdf,
                self.CDF: {
                    "base": _box_cdf,
                    "alt": lambda p, x: np.clip(np.asarray(x) + p.neg_value, 0.0, 1.0),
                },
                self.PPF: lambda p, q: p.value + np.asarray(q),
                self.MEAN: lambda p, _: p.value + 0.5,
            }
        kwargs.setdefault("sampling_strategy", MockSamplingStrategy())
        fam = ParametricFamily(
            name="Box",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base", "alt"],
            distr_characteristics=distr_characteristics,
            support_by_parametrization=lambda p: ContinuousSupport(p.value, p.value + 1.0),
            **kwargs,
        )

        @fam.parametrization(name="base")
        class Base(Parametrization):
            value: float

            @constraint(description="value is finite")
            def check_finite(self) -> bool:
                return bool(np.isfinite(self.value))

        @fam.parametrization(name="alt")
        class Alt(Parametrization):
            neg_value: float

            def transform_to_base_parametrization(self) -> Parametrization:
                return Base(value=-self.neg_value)  # type: ignore[call-arg]

        return fam


class TestFamilyBasics(TestBaseFamily):
    def test_names_and_base(self):
        fam = self.make_default_family()
        assert fam.name == "Box"
        assert fam.base_parametrization_name == "base"
        assert fam.base is fam.parametrizations["base"]
        assert fam.get_parametrization("alt") is fam.parametrizations["alt"]
        assert "Box" in repr(fam)

    def test_analytical_plan_falls_back_to_base(self):
        plan = self.make_default_family()._analytical_plan
        assert set(plan) == {"base", "alt"}
        assert plan["alt"][self.CDF] == "alt"
        assert plan["alt"][self.PDF] == "base"
        assert plan["alt"][self.PPF] == "base"
        assert all(form == "base" for form in plan["base"].values())

    def test_undeclared_parametrization_rejected(self):
        fam = self.make_default_family()
        with pytest.raises(ValueError, match="not declared"):

            @fam.parametrization(name="other")
            class Other(Parametrization):
                value: float

    def test_duplicate_parametrization_rejected(self):
        fam = self.make_default_family()
        with pytest.raises(ValueError, match="already registered"):
            fam.register_parametrization("base", fam.base)

    def test_missing_base_parametrization(self):
        fam = ParametricFamily(
            name="Empty",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base"],
            distr_characteristics={},
            support_by_parametrization=lambda p: ContinuousSupport(),
        )
        with pytest.raises(ValueError, match="not registered"):
            fam.base

    def test_default_sampling_strategy_is_inverse_transform(self, rng):
        fam = self.make_default_family(sampling_strategy=None)
        drawn = fam(value=3.0).sample(rng, 200)
        assert drawn.shape == (200,)
        assert np.all((drawn >= 3.0) & (drawn < 4.0))

    def test_support_uses_base_parameters(self):
        fam = self.make_default_family()
        support = fam.support(fam.parametrizations["alt"](neg_value=2.0))
        assert (support.lower, support.upper) == (-2.0, -1.0)

    def test_fit_without_estimator(self):
        fam = self.make_default_family()
        assert not fam.can_fit
        with pytest.raises(RuntimeError, match="estimator"):
            fam.fit([1.0, 2.0])
