"""
Weighted Sampling
=================

Helpers drawing items (or their indices) proportionally to non-negative
weights by cumulative-weight inversion:

- :func:`cumulative_weights`: validated cumulative weight array.
- :func:`sample_index` / :func:`sample_indices`: draw index(es).
- :func:`sample_one` / :func:`sample_many`: draw item(s).
- :func:`sample_with_replacement` / :func:`sample_without_replacement`:
  uniform draws from a sequence.
- :func:`uniform_if_degenerate`: the "zero total weight means uniform"
  convention used by callers.

Notes
-----
- A uniform ``u`` is drawn in ``(0, total]`` and the first index whose
  cumulative weight is ``>= u`` is returned. Ties therefore resolve to the
  first index reaching the threshold and zero-weight items are never drawn.
- Weights are *not* required to sum to one.
- All-zero weights are rejected here; callers that want a uniform fallback
  apply :func:`uniform_if_degenerate` first.
- Each single draw consumes exactly one ``rng.random()`` value; ``n`` draws
  consume one vector of ``n`` values.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_distributions.errors import DegenerateResultWarning, InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike

    from pysatl_distributions.types import IndexArray, NumericArray


def _as_weights(weights: ArrayLike) -> NumericArray:
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 1:
        raise InvalidArgumentError(f"weights must be one-dimensional, got shape {w.shape}.")
    if w.size == 0:
        raise InvalidArgumentError("weights must be non-empty.")
    if not np.all(np.isfinite(w)):
        raise InvalidArgumentError("weights must be finite.")
    if np.any(w < 0.0):
        raise InvalidArgumentError("weights must be nonnegative.")
    return w


def _check_count(n: int) -> int:
    n = int(n)
    if n < 0:
        raise InvalidArgumentError(f"Number of samples must be nonnegative, got {n}.")
    return n


def cumulative_weights(weights: ArrayLike) -> NumericArray:
    """
    Build the cumulative weight array used for inversion.

    Parameters
    ----------
    weights : array_like
        One-dimensional non-negative finite weights with a positive sum.

    Returns
    -------
    NumericArray
        ``numpy.cumsum`` of the weights; the last entry is the total weight.

    Raises
    ------
    InvalidArgumentError
        If weights are empty, not 1-D, negative, non-finite or all zero.
    """
    w = _as_weights(weights)
    cumulative = np.cumsum(w)
    if not cumulative[-1] > 0.0:
        raise InvalidArgumentError(
            "weights must have a positive sum; substitute uniform weights for an all-zero vector."
        )
    return cast("NumericArray", cumulative)


def _invert(cumulative: NumericArray, u: NumericArray) -> IndexArray:
    idx = np.searchsorted(cumulative, u, side="left")
    # guards against u rounding above the last cumulative entry
    return cast("IndexArray", np.minimum(idx, cumulative.size - 1))


def sample_index(weights: ArrayLike, rng: np.random.Generator) -> int:
    """
    Draw one index with probability ``weights[i] / sum(weights)``.

    Parameters
    ----------
    weights : array_like
        Non-negative weights with a positive sum.
    rng : numpy.random.Generator
        Source of randomness (one uniform variate is consumed).

    Returns
    -------
    int
        Selected index.
    """
    cumulative = cumulative_weights(weights)
    u = (1.0 - rng.random()) * cumulative[-1]
    return int(_invert(cumulative, np.asarray(u)))


def sample_indices(weights: ArrayLike, rng: np.random.Generator, n: int) -> IndexArray:
    """
    Draw ``n`` independent indices proportionally to ``weights``.

    The cumulative array is built once and every draw is a binary search,
    so the cost is ``O(K + n log K)``.

    Parameters
    ----------
    weights : array_like
        Non-negative weights with a positive sum.
    rng : numpy.random.Generator
        Source of randomness (``n`` uniform variates are consumed).
    n : int
        Number of draws.

    Returns
    -------
    IndexArray
        Array of ``n`` selected indices.
    """
    n = _check_count(n)
    cumulative = cumulative_weights(weights)
    u = (1.0 - rng.random(n)) * cumulative[-1]
    return _invert(cumulative, u)


def _check_items[T](weights: ArrayLike, items: Sequence[T]) -> None:
    size = np.shape(weights)[0] if np.ndim(weights) >= 1 else -1
    if size != len(items):
        raise InvalidArgumentError(
            f"weights and items must have the same length, got {size} and {len(items)}."
        )


def sample_one[T](weights: ArrayLike, items: Sequence[T], rng: np.random.Generator) -> T:
    """
    Draw one item proportionally to its weight.

    Parameters
    ----------
    weights : array_like
        Non-negative weights, parallel to ``items``.
    items : Sequence[T]
        Opaque items to choose from.
    rng : numpy.random.Generator
        Source of randomness.

    Returns
    -------
    T
        The selected item.

    Raises
    ------
    InvalidArgumentError
        If lengths differ or the weights are invalid.
    """
    _check_items(weights, items)
    return items[sample_index(weights, rng)]


def sample_many[T](
    weights: ArrayLike, items: Sequence[T], rng: np.random.Generator, n: int
) -> list[T]:
    """
    Draw ``n`` independent items proportionally to their weights.

    Parameters
    ----------
    weights : array_like
        Non-negative weights, parallel to ``items``.
    items : Sequence[T]
        Opaque items to choose from.
    rng : numpy.random.Generator
        Source of randomness.
    n : int
        Number of draws.

    Returns
    -------
    list[T]
        Selected items in draw order.
    """
    _check_items(weights, items)
    return [items[i] for i in sample_indices(weights, rng, n)]


def sample_with_replacement[T](items: Sequence[T], rng: np.random.Generator, n: int) -> list[T]:
    """Draw ``n`` items uniformly with replacement."""
    n = _check_count(n)
    if not items:
        raise InvalidArgumentError("Cannot sample from an empty sequence.")
    return [items[i] for i in rng.integers(0, len(items), size=n)]


def sample_without_replacement[T](
    items: Sequence[T], rng: np.random.Generator, n: int
) -> list[T]:
    """
    Draw ``n`` distinct positions of ``items`` uniformly.

    Raises
    ------
    InvalidArgumentError
        If ``n`` is not positive or exceeds ``len(items)``.
    """
    n = int(n)
    if n <= 0:
        raise InvalidArgumentError("Number of samples must be positive.")
    if n > len(items):
        raise InvalidArgumentError(
            f"Number of samples ({n}) cannot be larger than data size ({len(items)})."
        )
    if n == len(items):
        return list(items)
    return [items[i] for i in rng.permutation(len(items))[:n]]


def uniform_if_degenerate(weights: ArrayLike) -> NumericArray:
    """
    Return ``weights`` as an array, or uniform weights if they sum to zero.

    Parameters
    ----------
    weights : array_like
        Non-negative weights.

    Returns
    -------
    NumericArray
        The validated weights, or an array of ones of the same length.

    Warns
    -----
    DegenerateResultWarning
        When the uniform fallback is applied.
    """
    w = _as_weights(weights)
    if w.sum() > 0.0:
        return w
    warnings.warn(
        "All weights are zero; falling back to uniform weights.",
        DegenerateResultWarning,
        stacklevel=2,
    )
    return np.ones_like(w)


__all__ = [
    "cumulative_weights",
    "sample_index",
    "sample_indices",
    "sample_one",
    "sample_many",
    "sample_with_replacement",
    "sample_without_replacement",
    "uniform_if_degenerate",
]
