# SPDX-License-Identifier: MIT
"""
shepardpy.errors
================

Exception hierarchy for the IDW interpolator.

Every error raised by the package derives from :class:`ShepardError`
and from the built-in exception that best describes it, so callers can
catch either the package-specific class or the usual ``ValueError`` /
``TypeError`` / ``IndexError``.
"""

from __future__ import annotations


class ShepardError(Exception):
    """Base class of all shepardpy errors."""


class InvalidConfigurationError(ShepardError, ValueError):
    """Out-of-range ``dimensions``, ``power`` or ``number_of_neighbours``."""


class MissingArgumentError(ShepardError, TypeError):
    """A required coordinate vector or sample sequence was not supplied."""


class MalformedCoordinatesError(ShepardError, ValueError):
    """A coordinate vector is nested or holds non-numeric entries."""


class DimensionMismatchError(ShepardError, ValueError):
    """
    A coordinate vector does not have the interpolator's dimension.

    Attributes
    ----------
    expected : int
        Configured dimension of the interpolator.
    actual : int
        Length of the offending coordinate vector.
    """

    def __init__(self, expected: int, actual: int, what: str = "coordinates"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Size of {what} ({actual}) must match the dimension of the "
            f"interpolator ({expected})."
        )


class InsufficientSamplesError(ShepardError, IndexError):
    """
    Fewer samples are stored than the configured number of neighbours.

    Attributes
    ----------
    available : int
        Number of samples currently stored.
    required : int
        Configured number of neighbours.
    """

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"The number of stored samples ({available}) is less than the "
            f"number of required neighbours ({required}). Consider reducing "
            f"'number_of_neighbours'."
        )


__all__ = [
    "ShepardError",
    "InvalidConfigurationError",
    "MissingArgumentError",
    "MalformedCoordinatesError",
    "DimensionMismatchError",
    "InsufficientSamplesError",
]
