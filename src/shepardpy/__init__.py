# SPDX-License-Identifier: MIT
"""
shepardpy
=========

Inverse Distance Weighting (IDW) interpolation of scattered
N-dimensional samples, restricted to the k nearest samples (modified
Shepard's method), on top of a k-d tree.

Main entry points
-----------------

- :class:`IdwInterpolator` – add samples, query values. Each query
  returns an :class:`InterpolationResult` tagged with a
  :class:`ResultKind`:

    * "hit"              – a sample sits exactly at the query point
    * "nearest_neighbor" – ``number_of_neighbours == 1``
    * "interpolated"     – weighted average of the k nearest samples

Core submodules
---------------

- :mod:`shepardpy.kdtree`      – k-d tree spatial index
- :mod:`shepardpy.interpolator` – the IDW interpolator
- :mod:`shepardpy.frame`       – pandas helpers
- :mod:`shepardpy.estimator`   – scikit-learn ``IDWRegressor``
- :mod:`shepardpy.evaluate`    – leave-one-out validation (MAE, RMSE, R2)
"""

from __future__ import annotations

from .config import IDWConfig
from .errors import (
    ShepardError,
    InvalidConfigurationError,
    MissingArgumentError,
    MalformedCoordinatesError,
    DimensionMismatchError,
    InsufficientSamplesError,
)
from .sample import Sample
from .result import InterpolationResult, ResultKind
from .kdtree import KDTree, euclidean_distance
from .interpolator import IdwInterpolator, weighted_average
from .frame import interpolator_from_frame, interpolate_frame, samples_from_frame
from .estimator import IDWRegressor
from .evaluate import leave_one_out

__all__ = [
    # Core
    "IdwInterpolator",
    "InterpolationResult",
    "ResultKind",
    "Sample",
    "IDWConfig",
    "KDTree",
    "euclidean_distance",
    "weighted_average",
    # Errors
    "ShepardError",
    "InvalidConfigurationError",
    "MissingArgumentError",
    "MalformedCoordinatesError",
    "DimensionMismatchError",
    "InsufficientSamplesError",
    # pandas / scikit-learn
    "samples_from_frame",
    "interpolator_from_frame",
    "interpolate_frame",
    "IDWRegressor",
    # Validation
    "leave_one_out",
]


# Sync this with pyproject.toml if you bump the version
__version__ = "0.1.0"
