# SPDX-License-Identifier: MIT
"""
shepardpy.result
================

Outcome of a single interpolation query.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .sample import Sample


class ResultKind(str, Enum):
    """How an :class:`InterpolationResult` value was obtained."""

    HIT = "hit"
    NEAREST_NEIGHBOR = "nearest_neighbor"
    INTERPOLATED = "interpolated"
    # Reserved: requires a convex-hull membership test that is not implemented.
    EXTRAPOLATED = "extrapolated"
    # Reserved, unused.
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class InterpolationResult:
    """
    Value computed for a query point.

    ``sample`` is set only for ``HIT`` and ``NEAREST_NEIGHBOR`` results.
    """

    value: float
    kind: ResultKind
    sample: Optional[Sample] = None

    @property
    def result_kind(self) -> ResultKind:
        return self.kind

    @property
    def is_exact(self) -> bool:
        return self.kind is ResultKind.HIT


__all__ = ["ResultKind", "InterpolationResult"]
