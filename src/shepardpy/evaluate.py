# SPDX-License-Identifier: MIT
"""
shepardpy.evaluate
==================

Leave-one-out cross-validation of the k-nearest IDW interpolator.

For each sample ``i`` an interpolator is built from every *other* sample
and queried at sample ``i``'s coordinates. Duplicates of ``i`` (same
coordinates) remain in the training set, so such rows come back as
``hit``.

The main entry point is :func:`leave_one_out`, which returns a per-sample
table plus MAE/RMSE/R2 over all held-out predictions.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from tqdm.auto import tqdm

from .config import DEFAULT_NUMBER_OF_NEIGHBOURS, DEFAULT_POWER, IDWConfig
from .errors import InsufficientSamplesError, MissingArgumentError
from .interpolator import IdwInterpolator
from .sample import Sample

logger = logging.getLogger(__name__)


def leave_one_out(
    samples: Iterable[Union[Sample, Tuple[float, Iterable[float]]]],
    *,
    dimensions: int,
    power: float = DEFAULT_POWER,
    number_of_neighbours: int = DEFAULT_NUMBER_OF_NEIGHBOURS,
    show_progress: bool = False,
) -> Tuple[pd.DataFrame, Dict[str, float]]:
    """
    Leave-one-out validation.

    Parameters
    ----------
    samples : iterable of Sample or (value, coordinates)
        Known samples. At least ``number_of_neighbours + 1`` are needed.
    dimensions : int
        Coordinate dimension.
    power : float, default 2.0
        IDW exponent.
    number_of_neighbours : int, default 5
        Neighbours used per query.
    show_progress : bool, default False
        If True, show a progress bar over held-out samples.

    Returns
    -------
    (per_sample, metrics) : tuple
        ``per_sample`` has one row per sample with columns ``index``,
        ``observed``, ``predicted``, ``error``, ``kind`` and one column
        ``x0..x{D-1}`` per axis. ``metrics`` holds MAE, RMSE and R2
        (R2 is NaN when every observed value is the same).

    Raises
    ------
    MissingArgumentError
        If ``samples`` is None.
    InsufficientSamplesError
        If there are not enough samples to leave one out.
    DimensionMismatchError
        If any sample has the wrong dimension.
    """
    if samples is None:
        raise MissingArgumentError("'samples' must not be None.")
    cfg = IDWConfig(dimensions, power, number_of_neighbours).validate()

    pool: List[Sample] = [s if isinstance(s, Sample) else Sample(*s) for s in samples]
    n = len(pool)
    if n - 1 < cfg.number_of_neighbours:
        raise InsufficientSamplesError(max(n - 1, 0), cfg.number_of_neighbours)

    logger.debug("Leave-one-out over %d samples with %s", n, cfg)

    rows: List[Dict[str, object]] = []
    for i in tqdm(range(n), desc="leave-one-out", disable=not show_progress):
        held_out = pool[i]
        interp = IdwInterpolator.from_samples(
            pool[:i] + pool[i + 1:],
            dimensions=cfg.dimensions,
            power=cfg.power,
            number_of_neighbours=cfg.number_of_neighbours,
        )
        res = interp.interpolate(held_out.coordinates)
        row: Dict[str, object] = {
            "index": i,
            "observed": held_out.value,
            "predicted": res.value,
            "error": res.value - held_out.value,
            "kind": res.kind.value,
        }
        for axis, c in enumerate(held_out.coordinates):
            row[f"x{axis}"] = c
        rows.append(row)

    per_sample = pd.DataFrame(rows)
    return per_sample, _score(per_sample)


def _score(per_sample: pd.DataFrame) -> Dict[str, float]:
    """MAE, RMSE and R2 of the held-out predictions."""
    observed = per_sample["observed"].to_numpy(dtype=float)
    predicted = per_sample["predicted"].to_numpy(dtype=float)
    if np.ptp(observed) == 0.0:
        r2 = float("nan")
    else:
        r2 = float(r2_score(observed, predicted))
    return {
        "MAE": float(mean_absolute_error(observed, predicted)),
        "RMSE": float(np.sqrt(mean_squared_error(observed, predicted))),
        "R2": r2,
    }


__all__ = ["leave_one_out"]
