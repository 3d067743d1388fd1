# SPDX-License-Identifier: MIT
"""
shepardpy.kdtree
================

A k-d tree over :class:`~shepardpy.sample.Sample` objects.

The tree splits on axis ``depth mod D``. A coordinate strictly smaller
than the node's value on the split axis goes left, everything else
(including ties) goes right, so for every node:

- left descendants have ``coord[axis] <  node[axis]``
- right descendants have ``coord[axis] >= node[axis]``

Supported operations:

- :meth:`KDTree.insert` – incremental insertion, duplicates retained.
- :meth:`KDTree.find_exact` – exact (componentwise equal) lookup.
- :meth:`KDTree.k_nearest` – k nearest samples by Euclidean distance.
- :meth:`KDTree.clear` – drop every stored sample.
- :meth:`KDTree.build` – balanced bulk construction by median split.

Search is iterative, so degenerate trees built from sorted input do not
hit the interpreter's recursion limit.
"""

from __future__ import annotations

import heapq
import logging
import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .sample import Coordinates, Sample

logger = logging.getLogger(__name__)


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two equal-length coordinate vectors."""
    return math.sqrt(_squared_distance(a, b))


def _squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    total = 0.0
    for p, q in zip(a, b):
        d = p - q
        total += d * d
    return total


class _Node:
    __slots__ = ("coordinates", "sample", "axis", "order", "left", "right")

    def __init__(self, coordinates: Coordinates, sample: Sample, axis: int, order: int):
        self.coordinates = coordinates
        self.sample = sample
        self.axis = axis
        # insertion rank, breaks distance ties in k_nearest
        self.order = order
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None


class KDTree:
    """
    k-d tree mapping D-dimensional coordinates to samples.

    Parameters
    ----------
    dimensions : int
        Length of every coordinate vector stored in the tree. Callers are
        responsible for only inserting vectors of this length.
    """

    def __init__(self, dimensions: int):
        if dimensions < 1:
            raise ValueError(f"dimensions must be >= 1, got {dimensions}.")
        self._dimensions = int(dimensions)
        self._root: Optional[_Node] = None
        self._count = 0
        self._next_order = 0

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def build(cls, samples: Iterable[Sample], dimensions: int) -> "KDTree":
        """
        Build a balanced tree from ``samples`` in one pass.

        Each level is split at the median of the active axis, moved down to
        the first of any run of equal values so the left/right invariant
        holds. Distance ties still resolve by position in ``samples``.
        """
        tree = cls(dimensions)
        items = [(s.coordinates, s, i) for i, s in enumerate(samples)]
        tree._root = tree._build(items, 0)
        tree._count = len(items)
        tree._next_order = len(items)
        logger.debug("Built balanced KDTree with %d samples (D=%d)", tree._count, dimensions)
        return tree

    def _build(self, items: List[Tuple[Coordinates, Sample, int]], depth: int) -> Optional[_Node]:
        if not items:
            return None
        axis = depth % self._dimensions
        items.sort(key=lambda it: (it[0][axis], it[2]))
        m = len(items) // 2
        while m > 0 and items[m - 1][0][axis] == items[m][0][axis]:
            m -= 1
        coords, sample, order = items[m]
        node = _Node(coords, sample, axis, order)
        node.left = self._build(items[:m], depth + 1)
        node.right = self._build(items[m + 1:], depth + 1)
        return node

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    def insert(self, coordinates: Coordinates, sample: Sample) -> None:
        """Insert ``sample`` at ``coordinates``. Duplicates are kept."""
        order = self._next_order
        self._next_order += 1
        self._count += 1

        if self._root is None:
            self._root = _Node(coordinates, sample, 0, order)
            return

        node = self._root
        depth = 0
        while True:
            depth += 1
            if coordinates[node.axis] < node.coordinates[node.axis]:
                if node.left is None:
                    node.left = _Node(coordinates, sample, depth % self._dimensions, order)
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = _Node(coordinates, sample, depth % self._dimensions, order)
                    return
                node = node.right

    def clear(self) -> None:
        """Remove every stored sample."""
        self._root = None
        self._count = 0
        self._next_order = 0

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def count(self) -> int:
        """Number of stored samples."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Sample]:
        # in-order traversal
        stack: List[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.sample
            node = node.right

    def find_exact(self, coordinates: Sequence[float]) -> Optional[Sample]:
        """
        Return the sample stored at exactly ``coordinates``, or None.

        Equality is componentwise and exact. With duplicates the earliest
        inserted one is returned.
        """
        target = tuple(coordinates)
        node = self._root
        while node is not None:
            if node.coordinates == target:
                return node.sample
            if target[node.axis] < node.coordinates[node.axis]:
                node = node.left
            else:
                node = node.right
        return None

    def k_nearest(self, coordinates: Sequence[float], k: int) -> List[Tuple[Sample, float]]:
        """
        Return up to ``k`` nearest samples as ``(sample, distance)`` pairs.

        Results are sorted by ascending distance; equidistant samples are
        ordered by insertion. Fewer than ``k`` pairs are returned when the
        tree holds fewer samples.
        """
        if k < 1 or self._root is None:
            return []

        query = tuple(coordinates)
        # max-heap of the best candidates: (-d2, -order, node)
        best: List[Tuple[float, int, _Node]] = []
        # (node, lower bound on squared distance to its region)
        stack: List[Tuple[_Node, float]] = [(self._root, 0.0)]

        while stack:
            node, bound = stack.pop()
            if len(best) == k and bound > -best[0][0]:
                continue

            d2 = _squared_distance(node.coordinates, query)
            key = (-d2, -node.order, node)
            if len(best) < k:
                heapq.heappush(best, key)
            elif (d2, node.order) < (-best[0][0], -best[0][1]):
                heapq.heapreplace(best, key)

            diff = query[node.axis] - node.coordinates[node.axis]
            if diff < 0:
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left

            if far is not None:
                stack.append((far, max(bound, diff * diff)))
            if near is not None:
                stack.append((near, bound))

        ranked = sorted(best, key=lambda e: (-e[0], -e[1]))
        return [(n.sample, math.sqrt(-neg_d2)) for neg_d2, _, n in ranked]

    def __repr__(self) -> str:
        return f"KDTree(dimensions={self._dimensions}, count={self._count})"


__all__ = ["KDTree", "euclidean_distance"]
