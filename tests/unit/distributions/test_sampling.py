from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings

import numpy as np
import pytest
from scipy.stats import chisquare

from pysatl_distributions.distributions.sampling import (
    cumulative_weights,
    sample_index,
    sample_indices,
    sample_many,
    sample_one,
    sample_with_replacement,
    sample_without_replacement,
    uniform_if_degenerate,
)
from pysatl_distributions.errors import DegenerateResultWarning, InvalidArgumentError
from tests.utils.mocks import FixedUniformGenerator


class TestCumulativeWeights:
    def test_last_entry_is_total(self):
        cumulative = cumulative_weights([1.0, 2.0, 3.0])
        np.testing.assert_allclose(cumulative, [1.0, 3.0, 6.0])

    @pytest.mark.parametrize(
        "weights",
        [[], [1.0, -0.5], [0.0, 0.0], [1.0, np.nan], [1.0, np.inf], [[1.0, 2.0]]],
        ids=["empty", "negative", "all-zero", "nan", "inf", "two-dimensional"],
    )
    def test_invalid_weights_raise(self, weights):
        with pytest.raises(InvalidArgumentError):
            cumulative_weights(weights)


class TestInversion:
    """The uniform ``u`` lies in ``(0, total]``; the first index reaching it wins."""

    @pytest.mark.parametrize(
        "uniform, expected",
        [
            (0.999, 0),  # u = 0.002
            (0.5, 0),  # u = 1.0 ties with the first cumulative entry
            (0.49, 2),  # u = 1.02
            (0.0, 2),  # u = total
        ],
    )
    def test_threshold_and_ties(self, uniform, expected):
        rng = FixedUniformGenerator(uniform)
        assert sample_index([1.0, 0.0, 1.0], rng) == expected  # type: ignore[arg-type]

    def test_zero_weight_item_is_never_selected(self, rng):
        items = ["a", "b", "c"]
        drawn = sample_many([0.0, 1.0, 0.0], items, rng, 1000)
        assert set(drawn) == {"b"}

    def test_single_draw_consumes_one_uniform(self):
        first = np.random.default_rng(1)
        second = np.random.default_rng(1)

        sample_index([1.0, 2.0], first)
        second.random()

        assert first.random() == second.random()

    def test_batched_and_single_draws_agree(self):
        weights = [0.2, 0.5, 0.3]
        batched = sample_indices(weights, np.random.default_rng(5), 50)

        single_rng = np.random.default_rng(5)
        uniforms = single_rng.random(50)
        cumulative = np.cumsum(weights)
        expected = np.searchsorted(cumulative, (1.0 - uniforms) * cumulative[-1], side="left")

        np.testing.assert_array_equal(batched, np.minimum(expected, 2))


class TestSampleOneAndMany:
    def test_sample_one_returns_an_item(self, rng):
        items = ["x", "y"]
        assert sample_one([1.0, 3.0], items, rng) in items

    def test_sample_many_length(self, rng):
        assert len(sample_many([1.0, 1.0], ["x", "y"], rng, 17)) == 17

    def test_sample_many_zero(self, rng):
        assert sample_many([1.0, 1.0], ["x", "y"], rng, 0) == []

    def test_length_mismatch_raises(self, rng):
        with pytest.raises(InvalidArgumentError, match="same length"):
            sample_one([1.0, 2.0, 3.0], ["x", "y"], rng)
        with pytest.raises(InvalidArgumentError, match="same length"):
            sample_many([1.0], ["x", "y"], rng, 3)

    def test_negative_count_raises(self, rng):
        with pytest.raises(InvalidArgumentError):
            sample_many([1.0, 1.0], ["x", "y"], rng, -1)

    def test_all_zero_weights_raise(self, rng):
        with pytest.raises(InvalidArgumentError, match="positive sum"):
            sample_one([0.0, 0.0], ["x", "y"], rng)

    def test_weights_need_not_be_normalized(self):
        a = sample_indices([1.0, 3.0], np.random.default_rng(3), 100)
        b = sample_indices([10.0, 30.0], np.random.default_rng(3), 100)
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("weights", [[1.0, 2.0, 3.0, 4.0], [5.0, 0.5, 0.5, 4.0]])
    def test_frequencies_match_normalized_weights(self, weights):
        n = 100_000
        indices = sample_indices(weights, np.random.default_rng(2024), n)
        observed = np.bincount(indices, minlength=len(weights))

        w = np.asarray(weights)
        expected = n * w / w.sum()
        assert chisquare(observed, expected).pvalue > 1e-3


class TestUniformSampling:
    def test_with_replacement(self, rng):
        items = [1, 2, 3]
        drawn = sample_with_replacement(items, rng, 50)
        assert len(drawn) == 50
        assert set(drawn) <= set(items)

    def test_with_replacement_empty_raises(self, rng):
        with pytest.raises(InvalidArgumentError):
            sample_with_replacement([], rng, 1)

    def test_without_replacement_distinct(self, rng):
        items = list(range(10))
        drawn = sample_without_replacement(items, rng, 6)
        assert len(drawn) == 6
        assert len(set(drawn)) == 6

    def test_without_replacement_full(self, rng):
        items = ["a", "b", "c"]
        assert sample_without_replacement(items, rng, 3) == items

    @pytest.mark.parametrize("n", [0, 4])
    def test_without_replacement_bad_count(self, rng, n):
        with pytest.raises(InvalidArgumentError):
            sample_without_replacement([1, 2, 3], rng, n)


class TestUniformIfDegenerate:
    def test_positive_weights_pass_through(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            np.testing.assert_array_equal(uniform_if_degenerate([0.0, 2.0]), [0.0, 2.0])

    def test_zero_weights_become_uniform(self):
        with pytest.warns(DegenerateResultWarning):
            result = uniform_if_degenerate([0.0, 0.0, 0.0])
        np.testing.assert_array_equal(result, [1.0, 1.0, 1.0])

    def test_negative_weights_still_rejected(self):
        with pytest.raises(InvalidArgumentError):
            uniform_if_degenerate([0.0, -1.0])
