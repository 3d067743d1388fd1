# tests/test_kdtree.py
# SPDX-License-Identifier: MIT

import math

import numpy as np
import pytest

from shepardpy.kdtree import KDTree, euclidean_distance
from shepardpy.sample import Sample


def _fill(tree, samples):
    for s in samples:
        tree.insert(s.coordinates, s)
    return tree


def _random_samples(n, dims, seed=0):
    rng = np.random.default_rng(seed)
    pts = rng.random((n, dims))
    return [Sample(float(i), p) for i, p in enumerate(pts)]


def _brute_force(samples, q, k):
    ranked = sorted(
        enumerate(samples),
        key=lambda e: (euclidean_distance(e[1].coordinates, q), e[0]),
    )
    return [s for _, s in ranked[:k]]


def test_euclidean_distance():
    assert euclidean_distance((0.0, 0.0), (3.0, 4.0)) == 5.0
    assert euclidean_distance((1.0,), (1.0,)) == 0.0
    assert np.isclose(euclidean_distance((1, 2, 3), (2, 3, 4)), math.sqrt(3))


def test_rejects_non_positive_dimension():
    with pytest.raises(ValueError):
        KDTree(0)


def test_insert_count_and_clear():
    tree = KDTree(2)
    assert tree.count() == 0
    _fill(tree, _random_samples(10, 2))
    assert tree.count() == 10
    assert len(tree) == 10

    tree.clear()
    assert tree.count() == 0
    assert list(tree) == []
    assert tree.find_exact((0.5, 0.5)) is None
    assert tree.k_nearest((0.5, 0.5), 3) == []


def test_iteration_yields_every_sample():
    samples = _random_samples(25, 3, seed=1)
    tree = _fill(KDTree(3), samples)
    assert sorted(s.value for s in tree) == sorted(s.value for s in samples)


def test_split_invariant_holds():
    tree = _fill(KDTree(2), _random_samples(50, 2, seed=2))

    def check(node, lo, hi):
        if node is None:
            return
        for axis, bound in lo:
            assert node.coordinates[axis] >= bound
        for axis, bound in hi:
            assert node.coordinates[axis] < bound
        a = node.axis
        check(node.left, lo, hi + [(a, node.coordinates[a])])
        check(node.right, lo + [(a, node.coordinates[a])], hi)

    check(tree._root, [], [])


def test_find_exact_hit_and_miss():
    tree = _fill(KDTree(2), [Sample(1.0, (0, 0)), Sample(2.0, (1, 1)), Sample(3.0, (1, 2))])
    hit = tree.find_exact((1.0, 1.0))
    assert hit is not None
    assert hit.value == 2.0

    # Near but not equal must miss
    assert tree.find_exact((1.0, 1.0 + 1e-12)) is None
    assert tree.find_exact((5.0, 5.0)) is None


def test_find_exact_with_ties_on_split_axis():
    # All share x == 1, so every insert descends right on axis 0
    samples = [Sample(float(i), (1.0, float(i))) for i in range(6)]
    tree = _fill(KDTree(2), samples)
    for s in samples:
        assert tree.find_exact(s.coordinates) == s


def test_duplicates_are_retained_and_first_wins():
    tree = KDTree(2)
    tree.insert((1.0, 1.0), Sample(1.0, (1, 1)))
    tree.insert((1.0, 1.0), Sample(2.0, (1, 1)))
    assert tree.count() == 2
    assert tree.find_exact((1.0, 1.0)).value == 1.0

    got = tree.k_nearest((0.0, 0.0), 2)
    assert [s.value for s, _ in got] == [1.0, 2.0]


def test_k_nearest_matches_brute_force():
    samples = _random_samples(200, 3, seed=3)
    tree = _fill(KDTree(3), samples)
    rng = np.random.default_rng(42)
    for q in rng.random((20, 3)):
        q = tuple(q)
        got = tree.k_nearest(q, 7)
        expected = _brute_force(samples, q, 7)
        assert [s for s, _ in got] == expected
        distances = [d for _, d in got]
        assert distances == sorted(distances)
        for s, d in got:
            assert np.isclose(d, euclidean_distance(s.coordinates, q))


def test_k_nearest_ties_follow_insertion_order():
    # 4 points equidistant from the centre of the unit square
    samples = [
        Sample(1.0, (0, 0)),
        Sample(2.0, (1, 0)),
        Sample(3.0, (0, 1)),
        Sample(4.0, (1, 1)),
    ]
    tree = _fill(KDTree(2), samples)
    got = tree.k_nearest((0.5, 0.5), 2)
    assert [s.value for s, _ in got] == [1.0, 2.0]


def test_k_nearest_more_than_count_returns_all():
    samples = _random_samples(4, 2)
    tree = _fill(KDTree(2), samples)
    assert len(tree.k_nearest((0.0, 0.0), 10)) == 4
    assert tree.k_nearest((0.0, 0.0), 0) == []


def test_sorted_insertion_does_not_recurse():
    # Degenerate (linked-list shaped) tree
    samples = [Sample(float(i), (float(i),)) for i in range(2000)]
    tree = _fill(KDTree(1), samples)
    assert tree.find_exact((1999.0,)).value == 1999.0
    got = tree.k_nearest((1500.2,), 2)
    assert [s.value for s, _ in got] == [1500.0, 1501.0]


def test_build_matches_incremental_queries():
    samples = _random_samples(150, 2, seed=4)
    built = KDTree.build(samples, 2)
    assert built.count() == 150
    rng = np.random.default_rng(7)
    for q in rng.random((15, 2)):
        q = tuple(q)
        assert [s for s, _ in built.k_nearest(q, 5)] == _brute_force(samples, q, 5)
    for s in samples[:20]:
        assert built.find_exact(s.coordinates) == s


def test_build_with_repeated_axis_values():
    samples = [Sample(float(i), (float(i % 3), float(i // 3))) for i in range(9)]
    tree = KDTree.build(samples, 2)
    for s in samples:
        assert tree.find_exact(s.coordinates) == s
