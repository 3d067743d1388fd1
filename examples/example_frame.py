import numpy as np
import pandas as pd

from shepardpy import interpolate_frame, interpolator_from_frame, leave_one_out, samples_from_frame

rng = np.random.default_rng(0)
stations = pd.DataFrame({
    "x": rng.random(40) * 100,
    "y": rng.random(40) * 100,
})
stations["temp"] = 15 + 0.05 * stations["x"] - 0.03 * stations["y"] + rng.normal(0, 0.2, 40)

interp = interpolator_from_frame(stations, value_col="temp", coord_cols=["x", "y"], number_of_neighbours=6)

grid = pd.DataFrame({"x": [10.0, 50.0, 90.0], "y": [10.0, 50.0, 90.0]})
print(interpolate_frame(interp, grid, coord_cols=["x", "y"]))

per_sample, metrics = leave_one_out(
    samples_from_frame(stations, value_col="temp", coord_cols=["x", "y"]),
    dimensions=2,
    number_of_neighbours=6,
)
print(metrics)
