# SPDX-License-Identifier: MIT
"""
shepardpy.estimator
===================

scikit-learn compatible wrapper around
:class:`~shepardpy.interpolator.IdwInterpolator`, so the k-nearest IDW
scheme can be used in pipelines, ``cross_val_score`` and grid searches.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.validation import check_array, check_is_fitted, check_X_y

from .config import DEFAULT_NUMBER_OF_NEIGHBOURS, DEFAULT_POWER
from .errors import InsufficientSamplesError
from .interpolator import IdwInterpolator
from .sample import Sample


class IDWRegressor(RegressorMixin, BaseEstimator):
    """
    Inverse Distance Weighting over the ``n_neighbors`` nearest training rows.

    Every column of ``X`` is a coordinate axis.

    Parameters
    ----------
    power : float, default 2.0
        Distance exponent of the weights.
    n_neighbors : int, default 5
        Neighbours used per prediction.
    """

    def __init__(self, power: float = DEFAULT_POWER, n_neighbors: int = DEFAULT_NUMBER_OF_NEIGHBOURS):
        self.power = power
        self.n_neighbors = n_neighbors

    def fit(self, X, y):
        X, y = check_X_y(X, y, dtype="float64", y_numeric=True)
        if X.shape[0] < self.n_neighbors:
            raise InsufficientSamplesError(X.shape[0], self.n_neighbors)
        self.interpolator_ = IdwInterpolator.from_samples(
            (Sample(v, row) for v, row in zip(y, X)),
            dimensions=X.shape[1],
            power=self.power,
            number_of_neighbours=self.n_neighbors,
        )
        self.n_features_in_ = X.shape[1]
        return self

    def predict(self, X) -> np.ndarray:
        check_is_fitted(self, "interpolator_")
        X = check_array(X, dtype="float64")
        return self.interpolator_.interpolate_many(X)


__all__ = ["IDWRegressor"]
