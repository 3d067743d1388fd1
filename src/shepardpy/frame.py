# SPDX-License-Identifier: MIT
"""
shepardpy.frame
===============

pandas helpers around :class:`~shepardpy.interpolator.IdwInterpolator`.

- :func:`samples_from_frame`:
    Turn rows of a DataFrame into :class:`Sample` objects.
- :func:`interpolator_from_frame`:
    Build an interpolator from a value column and coordinate columns.
- :func:`interpolate_frame`:
    Query every row of a DataFrame and append ``value``/``kind`` columns.

Rows with NaN in the value or coordinate columns are dropped on
ingestion; query rows with NaN coordinates yield NaN values.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import DEFAULT_NUMBER_OF_NEIGHBOURS, DEFAULT_POWER
from .interpolator import IdwInterpolator
from .sample import Sample


def _require_columns(data: pd.DataFrame, columns: Sequence[str], caller: str) -> None:
    """Raise ValueError naming the columns of ``data`` that ``caller`` needs but lacks."""
    missing = [c for c in columns if c not in data.columns]
    if missing:
        raise ValueError(
            f"{caller}: coordinate/value columns {missing} not found in data "
            f"(has {list(data.columns)})."
        )


def samples_from_frame(
    data: pd.DataFrame,
    *,
    value_col: str,
    coord_cols: Sequence[str],
) -> List[Sample]:
    """
    Convert DataFrame rows into samples.

    Parameters
    ----------
    data : pandas.DataFrame
        Table holding at least ``value_col`` and ``coord_cols``.
    value_col : str
        Column with the known scalar values.
    coord_cols : sequence of str
        Coordinate columns, in axis order.

    Returns
    -------
    list of Sample
        One sample per complete row, in row order.
    """
    coord_cols = list(coord_cols)
    _require_columns(data, [value_col, *coord_cols], "samples_from_frame")

    sub = data[[value_col, *coord_cols]].dropna()
    values = sub[value_col].to_numpy(dtype=float)
    coords = sub[coord_cols].to_numpy(dtype=float)
    return [Sample(v, c) for v, c in zip(values, coords)]


def interpolator_from_frame(
    data: pd.DataFrame,
    *,
    value_col: str,
    coord_cols: Sequence[str],
    power: float = DEFAULT_POWER,
    number_of_neighbours: int = DEFAULT_NUMBER_OF_NEIGHBOURS,
) -> IdwInterpolator:
    """
    Build an interpolator whose dimension is ``len(coord_cols)``.

    The samples are stored in a balanced tree.
    """
    samples = samples_from_frame(data, value_col=value_col, coord_cols=coord_cols)
    return IdwInterpolator.from_samples(
        samples,
        dimensions=len(list(coord_cols)),
        power=power,
        number_of_neighbours=number_of_neighbours,
    )


def interpolate_frame(
    interpolator: IdwInterpolator,
    data: pd.DataFrame,
    *,
    coord_cols: Sequence[str],
    value_col: str = "value",
    kind_col: str = "kind",
) -> pd.DataFrame:
    """
    Interpolate at every row of ``data``.

    Parameters
    ----------
    interpolator : IdwInterpolator
        Populated interpolator of dimension ``len(coord_cols)``.
    data : pandas.DataFrame
        Query locations.
    coord_cols : sequence of str
        Coordinate columns, in axis order.
    value_col, kind_col : str
        Names of the output columns.

    Returns
    -------
    pandas.DataFrame
        Copy of ``data`` with ``value_col`` (float) and ``kind_col``
        (:class:`ResultKind` value string, or None for NaN rows) appended.
        Row order and index are preserved.
    """
    coord_cols = list(coord_cols)
    _require_columns(data, coord_cols, "interpolate_frame")

    coords = data[coord_cols].to_numpy(dtype=float)
    values = np.full(len(data), np.nan)
    kinds: List[Optional[str]] = [None] * len(data)

    for i, row in enumerate(coords):
        if np.isnan(row).any():
            continue
        res = interpolator.interpolate(row)
        values[i] = res.value
        kinds[i] = res.kind.value

    out = data.copy()
    out[value_col] = values
    # object dtype keeps None; a string dtype would turn it into NaN
    out[kind_col] = pd.Series(kinds, index=data.index, dtype=object)
    return out


__all__ = [
    "samples_from_frame",
    "interpolator_from_frame",
    "interpolate_frame",
]
