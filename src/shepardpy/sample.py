# SPDX-License-Identifier: MIT
"""
shepardpy.sample
================

The :class:`Sample` value type and the helpers that turn user input
(varargs, lists, tuples, NumPy arrays) into coordinate tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from .errors import MalformedCoordinatesError, MissingArgumentError

Coordinates = Tuple[float, ...]


@dataclass(frozen=True)
class Sample:
    """
    A known (value, coordinates) pair.

    Parameters
    ----------
    value : float
        Scalar value observed at ``coordinates``.
    coordinates : tuple of float
        Location of the sample. Any sequence is accepted and stored as a
        tuple of floats.
    """

    value: float
    coordinates: Coordinates

    def __post_init__(self):
        if self.coordinates is None:
            raise MissingArgumentError("Sample requires 'coordinates'.")
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "coordinates", to_coordinates(self.coordinates))

    @classmethod
    def of(cls, value: float, *coordinates: float) -> "Sample":
        """Build a sample from varargs, e.g. ``Sample.of(2.2, 1, 1)``."""
        return cls(value, coordinates)

    @property
    def dimensions(self) -> int:
        return len(self.coordinates)

    def __str__(self) -> str:
        return f"{';'.join(repr(c) for c in self.coordinates)} -> {self.value!r}"


def to_coordinates(raw: Any) -> Coordinates:
    """
    Convert a sequence or array of numbers into a tuple of floats.

    Raises
    ------
    MissingArgumentError
        If ``raw`` is None.
    MalformedCoordinatesError
        If ``raw`` is nested (more than one axis) or not numeric.
    """
    if raw is None:
        raise MissingArgumentError("'coordinates' must not be None.")
    try:
        arr = np.asarray(raw, dtype="float64")
    except (TypeError, ValueError) as exc:
        raise MalformedCoordinatesError(f"coordinates must be numeric. Got {raw!r}.") from exc
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim > 1:
        raise MalformedCoordinatesError(
            f"coordinates must be a flat vector. Got shape {arr.shape}."
        )
    return tuple(float(c) for c in arr)


def unpack_coordinates(args: Sequence[Any]) -> Coordinates:
    """
    Normalize the ``*coordinates`` of a public call.

    ``f(0, 1)`` and ``f([0, 1])`` both yield ``(0.0, 1.0)``; ``f(None)``
    and ``f()`` raise :class:`MissingArgumentError`.
    """
    if len(args) == 0:
        raise MissingArgumentError("'coordinates' must be provided.")
    if len(args) == 1:
        return to_coordinates(args[0])
    if any(a is None for a in args):
        raise MissingArgumentError("'coordinates' must not contain None.")
    return to_coordinates(args)


__all__ = ["Coordinates", "Sample", "to_coordinates", "unpack_coordinates"]
