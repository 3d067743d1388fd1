from shepardpy import IdwInterpolator, Sample

grid = [
    Sample.of(1.0, 0, 0), Sample.of(1.1, 0, 1), Sample.of(1.2, 0, 2),
    Sample.of(2.0, 1, 0), Sample.of(2.2, 1, 1), Sample.of(2.4, 1, 2),
    Sample.of(3.0, 2, 0), Sample.of(3.3, 2, 1), Sample.of(3.6, 2, 2),
]

interp = IdwInterpolator(dimensions=2, power=2, number_of_neighbours=4)
interp.add_point_range(grid)

for q in [(1, 1), (1.5, 1.5), (0.2, 1.7)]:
    res = interp.interpolate(q)
    print(f"{q} -> {res.value:.4f} ({res.kind.value})")
