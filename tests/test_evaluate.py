# tests/test_evaluate.py
# SPDX-License-Identifier: MIT

import numpy as np
import pytest

from shepardpy import (
    DimensionMismatchError,
    IdwInterpolator,
    InsufficientSamplesError,
    MissingArgumentError,
    Sample,
)
from shepardpy.evaluate import leave_one_out


def _plane_samples():
    """5x5 grid sampling the plane z = x + 2y."""
    return [Sample.of(x + 2.0 * y, x, y) for x in range(5) for y in range(5)]


def test_leave_one_out_table_and_metrics():
    samples = _plane_samples()
    per_sample, metrics = leave_one_out(samples, dimensions=2, number_of_neighbours=4)

    assert len(per_sample) == 25
    assert {"index", "observed", "predicted", "error", "kind", "x0", "x1"} <= set(per_sample.columns)
    assert (per_sample["kind"] == "interpolated").all()
    assert np.allclose(per_sample["error"], per_sample["predicted"] - per_sample["observed"])
    assert set(metrics) == {"MAE", "RMSE", "R2"}
    assert metrics["R2"] > 0.5


def test_leave_one_out_matches_manual_fit():
    samples = _plane_samples()
    per_sample, _ = leave_one_out(samples, dimensions=2, power=1.5, number_of_neighbours=3)

    interp = IdwInterpolator(2, power=1.5, number_of_neighbours=3)
    interp.add_point_range(samples[1:])
    expected = interp.interpolate(samples[0].coordinates).value
    assert np.isclose(per_sample.loc[0, "predicted"], expected)


def test_leave_one_out_duplicates_hit():
    samples = [(1.0, [0, 0]), (1.0, [0, 0]), (5.0, [3, 3]), (7.0, [4, 1])]
    per_sample, _ = leave_one_out(samples, dimensions=2, number_of_neighbours=2)
    assert list(per_sample["kind"][:2]) == ["hit", "hit"]


def test_leave_one_out_errors():
    with pytest.raises(MissingArgumentError):
        leave_one_out(None, dimensions=2)
    with pytest.raises(InsufficientSamplesError):
        leave_one_out(_plane_samples()[:3], dimensions=2, number_of_neighbours=3)
    with pytest.raises(DimensionMismatchError):
        leave_one_out(_plane_samples(), dimensions=3, number_of_neighbours=2)


def test_leave_one_out_metrics_follow_errors():
    per_sample, metrics = leave_one_out(_plane_samples(), dimensions=2, number_of_neighbours=4)
    err = per_sample["error"].to_numpy()

    assert np.isclose(metrics["MAE"], np.mean(np.abs(err)))
    assert np.isclose(metrics["RMSE"], np.sqrt(np.mean(err ** 2)))
    assert metrics["RMSE"] >= metrics["MAE"]
    obs = per_sample["observed"].to_numpy()
    assert np.isclose(metrics["R2"], 1.0 - np.sum(err ** 2) / np.sum((obs - obs.mean()) ** 2))


def test_leave_one_out_constant_field():
    samples = [Sample.of(4.0, x, y) for x in range(3) for y in range(3)]
    per_sample, metrics = leave_one_out(samples, dimensions=2, number_of_neighbours=3)

    assert np.allclose(per_sample["predicted"], 4.0)
    assert np.isclose(metrics["MAE"], 0.0)
    assert np.isclose(metrics["RMSE"], 0.0)
    assert np.isnan(metrics["R2"])
