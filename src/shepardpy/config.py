# SPDX-License-Identifier: MIT
"""
shepardpy.config
================

Construction parameters of :class:`~shepardpy.interpolator.IdwInterpolator`.

The three parameters are fixed for the lifetime of an interpolator:

- ``dimensions``           : length D of every coordinate vector (required)
- ``power``                : IDW exponent p, weight = 1 / d**p (default 2)
- ``number_of_neighbours`` : k nearest samples used per query (default 5)
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from typing import Any

from .errors import InvalidConfigurationError

DEFAULT_POWER = 2.0
DEFAULT_NUMBER_OF_NEIGHBOURS = 5


def _is_integer(x: Any) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


@dataclass(frozen=True)
class IDWConfig:
    dimensions: int
    power: float = DEFAULT_POWER
    number_of_neighbours: int = DEFAULT_NUMBER_OF_NEIGHBOURS

    def validate(self) -> "IDWConfig":
        """
        Check every parameter and return ``self``.

        Raises
        ------
        InvalidConfigurationError
            If ``dimensions`` or ``number_of_neighbours`` is not a positive
            integer, or ``power`` is not a positive finite real.
        """
        if not _is_integer(self.dimensions) or self.dimensions < 1:
            raise InvalidConfigurationError(
                f"Parameter 'dimensions' must be a positive integer. Got {self.dimensions!r}."
            )
        if (
            isinstance(self.power, bool)
            or not isinstance(self.power, numbers.Real)
            or not math.isfinite(self.power)
            or self.power <= 0
        ):
            raise InvalidConfigurationError(
                f"Parameter 'power' must be a positive real value. Got {self.power!r}."
            )
        if not _is_integer(self.number_of_neighbours) or self.number_of_neighbours < 1:
            raise InvalidConfigurationError(
                "Parameter 'number_of_neighbours' must be a positive integer. "
                f"Got {self.number_of_neighbours!r}."
            )
        return self

    def with_params(self, **overrides: Any) -> "IDWConfig":
        """Return a validated copy with ``overrides`` applied."""
        return replace(self, **overrides).validate()


__all__ = ["DEFAULT_POWER", "DEFAULT_NUMBER_OF_NEIGHBOURS", "IDWConfig"]
