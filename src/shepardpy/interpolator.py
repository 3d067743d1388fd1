# SPDX-License-Identifier: MIT
"""
shepardpy.interpolator
======================

Inverse Distance Weighting (IDW) restricted to the k nearest samples
("modified Shepard's method").

For a query point ``q`` the interpolator:

1. returns the stored value directly when a sample sits exactly at ``q``
   (:attr:`ResultKind.HIT`);
2. otherwise retrieves the ``k`` nearest samples from its k-d tree;
3. returns the single neighbour's value when ``k == 1``
   (:attr:`ResultKind.NEAREST_NEIGHBOR`);
4. otherwise returns the weighted average

       sum(w_i * v_i) / sum(w_i),   w_i = 1 / d_i ** power

   (:attr:`ResultKind.INTERPOLATED`).

No convex-hull test is performed, so :attr:`ResultKind.EXTRAPOLATED` is
never produced.

Instances are not thread-safe; guard concurrent use externally.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_NUMBER_OF_NEIGHBOURS, DEFAULT_POWER, IDWConfig
from .errors import (
    DimensionMismatchError,
    InsufficientSamplesError,
    MissingArgumentError,
)
from .kdtree import KDTree
from .result import InterpolationResult, ResultKind
from .sample import Coordinates, Sample, to_coordinates, unpack_coordinates

logger = logging.getLogger(__name__)

SampleLike = Union[Sample, Tuple[float, Sequence[float]]]


def weighted_average(
    values: Sequence[float],
    distances: Sequence[float],
    power: float,
) -> float:
    """
    IDW weighted average of ``values`` at the given ``distances``.

    Distances are expected to be strictly positive; a zero distance yields
    ``inf``/``nan`` following IEEE-754 arithmetic.
    """
    v = np.asarray(values, dtype="float64")
    d = np.asarray(distances, dtype="float64")
    with np.errstate(divide="ignore", invalid="ignore"):
        w = 1.0 / d ** power
        return float(np.sum(w * v) / np.sum(w))


class IdwInterpolator:
    """
    k-nearest-neighbour IDW interpolator over D-dimensional samples.

    Parameters
    ----------
    dimensions : int
        Length of every coordinate vector. Must be >= 1.
    power : float, default 2.0
        Exponent applied to distances in the weights. Must be > 0.
    number_of_neighbours : int, default 5
        Number of nearest samples used per query. Must be >= 1.

    Raises
    ------
    InvalidConfigurationError
        If any parameter is out of range.

    Examples
    --------
    >>> interp = IdwInterpolator(2, number_of_neighbours=4)
    >>> interp.add_point_range([(1.0, [0, 0]), (2.0, [1, 0]),
    ...                         (1.1, [0, 1]), (2.2, [1, 1])])
    >>> interp.interpolate(1, 1).kind
    <ResultKind.HIT: 'hit'>
    """

    def __init__(
        self,
        dimensions: int,
        power: float = DEFAULT_POWER,
        number_of_neighbours: int = DEFAULT_NUMBER_OF_NEIGHBOURS,
    ):
        self._config = IDWConfig(
            dimensions=dimensions,
            power=power,
            number_of_neighbours=number_of_neighbours,
        ).validate()
        self._tree = KDTree(self._config.dimensions)
        logger.debug("Created %r", self)

    @classmethod
    def from_config(cls, config: IDWConfig) -> "IdwInterpolator":
        return cls(config.dimensions, config.power, config.number_of_neighbours)

    @classmethod
    def from_samples(
        cls,
        samples: Iterable[SampleLike],
        dimensions: int,
        power: float = DEFAULT_POWER,
        number_of_neighbours: int = DEFAULT_NUMBER_OF_NEIGHBOURS,
    ) -> "IdwInterpolator":
        """
        Create an interpolator holding ``samples`` in a balanced tree.

        Raises the same errors as :meth:`add_point_range`.
        """
        interp = cls(dimensions, power, number_of_neighbours)
        if samples is None:
            raise MissingArgumentError("'samples' must not be None.")
        checked = [interp._checked(_as_sample(s), "samples") for s in samples]
        interp._tree = KDTree.build(checked, interp.dimensions)
        return interp

    # ------------------------------------------------------------------ #
    # Parameters
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> IDWConfig:
        return self._config

    @property
    def dimensions(self) -> int:
        return self._config.dimensions

    @property
    def power(self) -> float:
        return self._config.power

    @property
    def number_of_neighbours(self) -> int:
        return self._config.number_of_neighbours

    def count(self) -> int:
        """Number of stored samples."""
        return self._tree.count()

    def __len__(self) -> int:
        return self._tree.count()

    def samples(self) -> List[Sample]:
        """All stored samples (tree order)."""
        return list(self._tree)

    def __repr__(self) -> str:
        return (
            f"IdwInterpolator(dimensions={self.dimensions}, power={self.power}, "
            f"number_of_neighbours={self.number_of_neighbours}, count={self.count()})"
        )

    # ------------------------------------------------------------------ #
    # Ingestion
    # ------------------------------------------------------------------ #

    def _check_dimension(self, coordinates: Coordinates, what: str = "coordinates") -> None:
        if len(coordinates) != self.dimensions:
            raise DimensionMismatchError(self.dimensions, len(coordinates), what)

    def _checked(self, sample: Sample, what: str) -> Sample:
        self._check_dimension(sample.coordinates, what)
        return sample

    def add_point(self, value: Union[float, Sample], *coordinates: Any) -> None:
        """
        Add one sample.

        Accepted forms::

            add_point(2.2, 1, 1)        # varargs coordinates
            add_point(2.2, [1, 1])      # one sequence / array
            add_point(Sample(2.2, (1, 1)))

        Raises
        ------
        MissingArgumentError
            If the coordinate vector is missing (``None`` or not given).
        DimensionMismatchError
            If the coordinate vector length differs from ``dimensions``.
        """
        if isinstance(value, Sample) and not coordinates:
            self.add_sample(value)
            return
        coords = unpack_coordinates(coordinates)
        self._check_dimension(coords)
        self._tree.insert(coords, Sample(value, coords))

    def add_sample(self, sample: Sample) -> None:
        """Add a :class:`Sample`."""
        if sample is None:
            raise MissingArgumentError("'sample' must not be None.")
        self._check_dimension(sample.coordinates)
        self._tree.insert(sample.coordinates, sample)

    def add_point_range(self, samples: Iterable[SampleLike]) -> None:
        """
        Add many samples, all or nothing.

        Items may be :class:`Sample` objects or ``(value, coordinates)``
        pairs. If any item has the wrong dimension the **whole index is
        cleared**, including samples stored before this call, and
        :class:`DimensionMismatchError` is raised.
        Items that cannot be read as samples at all (None, missing or
        non-numeric coordinates) raise before anything is inserted, so the
        index is left unchanged.

        Raises
        ------
        MissingArgumentError
            If ``samples`` or one of its items is None, or an item lacks
            coordinates.
        DimensionMismatchError
            On the first item whose coordinates have the wrong length.
        """
        if samples is None:
            raise MissingArgumentError("'samples' must not be None.")

        # malformed items fail here, before anything is inserted
        batch = [_as_sample(item) for item in samples]

        added = 0
        for sample in batch:
            if len(sample.coordinates) != self.dimensions:
                logger.debug(
                    "Rejecting batch at item %d (dimension %d != %d); clearing %d samples",
                    added,
                    len(sample.coordinates),
                    self.dimensions,
                    self.count(),
                )
                self._tree.clear()
                raise DimensionMismatchError(
                    self.dimensions, len(sample.coordinates), "coordinates of all items in samples"
                )
            self._tree.insert(sample.coordinates, sample)
            added += 1
        logger.debug("Added %d samples; index now holds %d", added, self.count())

    def clear(self) -> None:
        """Remove every stored sample."""
        self._tree.clear()

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def _require_samples(self) -> None:
        available = self.count()
        if available < self.number_of_neighbours:
            raise InsufficientSamplesError(available, self.number_of_neighbours)

    def _interpolate(self, coords: Coordinates) -> InterpolationResult:
        hit = self._tree.find_exact(coords)
        if hit is not None:
            return InterpolationResult(hit.value, ResultKind.HIT, hit)

        neighbours = self._tree.k_nearest(coords, self.number_of_neighbours)
        if len(neighbours) == 1:
            sample = neighbours[0][0]
            return InterpolationResult(sample.value, ResultKind.NEAREST_NEIGHBOR, sample)

        value = weighted_average(
            [s.value for s, _ in neighbours],
            [d for _, d in neighbours],
            self.power,
        )
        # TODO: classify as EXTRAPOLATED once a convex-hull membership test exists.
        return InterpolationResult(value, ResultKind.INTERPOLATED)

    def interpolate(self, *coordinates: Any) -> InterpolationResult:
        """
        Estimate the value at ``coordinates``.

        Coordinates may be passed as varargs or as one sequence/array.

        Raises
        ------
        MissingArgumentError
            If no coordinates are given.
        DimensionMismatchError
            If the coordinate vector length differs from ``dimensions``.
        InsufficientSamplesError
            If fewer than ``number_of_neighbours`` samples are stored.
        """
        coords = unpack_coordinates(coordinates)
        self._check_dimension(coords)
        self._require_samples()
        return self._interpolate(coords)

    def interpolate_many(self, points: Any) -> np.ndarray:
        """
        Interpolate every row of an ``(n, D)`` array.

        A 1-D input is read as ``n`` points when ``dimensions == 1`` and as
        a single point otherwise. An empty input yields an empty array.

        Returns
        -------
        np.ndarray
            Float64 array of length ``n``.
        """
        if points is None:
            raise MissingArgumentError("'points' must not be None.")
        arr = np.asarray(points, dtype="float64")
        if arr.ndim == 1 and arr.size == 0:
            return np.empty(0, dtype="float64")
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1) if self.dimensions == 1 else arr.reshape(1, -1)
        if arr.ndim != 2 or arr.shape[1] != self.dimensions:
            actual = arr.shape[1] if arr.ndim == 2 else arr.ndim
            raise DimensionMismatchError(self.dimensions, actual, "points")
        self._require_samples()

        out = np.empty(arr.shape[0], dtype="float64")
        for i, row in enumerate(arr):
            out[i] = self._interpolate(to_coordinates(row)).value
        return out


def _as_sample(item: Optional[SampleLike]) -> Sample:
    if item is None:
        raise MissingArgumentError("Sample items must not be None.")
    if isinstance(item, Sample):
        return item
    value, coordinates = item
    return Sample(value, coordinates)


__all__ = ["IdwInterpolator", "weighted_average"]
