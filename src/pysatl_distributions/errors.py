"""
Error taxonomy
==============

- :class:`InvalidArgumentError`: malformed parameters or arguments (negative
  weight, mismatched lengths, violated parameter constraint). Always raised at
  the boundary where the bad value enters.
- :class:`DegenerateResultError`: a quantity that needs positive total mass
  was requested from an object holding none. Only raised in ``strict`` mode;
  otherwise the conventional default (``0.0`` or a uniform fallback) is
  returned.
- :class:`DegenerateResultWarning`: emitted when a uniform fallback is
  silently applied.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class InvalidArgumentError(ValueError):
    """Raised when an argument violates the documented preconditions."""


class DegenerateResultError(ArithmeticError):
    """Raised in strict mode when a result is undefined for zero total mass."""


class DegenerateResultWarning(RuntimeWarning):
    """Issued when a degenerate weight vector is replaced by a uniform one."""


__all__ = [
    "InvalidArgumentError",
    "DegenerateResultError",
    "DegenerateResultWarning",
]
