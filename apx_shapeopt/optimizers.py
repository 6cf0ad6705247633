"""Shape optimizers: reduce the vertex count of closed contours.

Every optimizer follows the same contract:

- the input sequence is never modified, a new list is returned;
- shapes with fewer than 3 points come back unchanged;
- the result never has fewer than 3 points;
- the result depends only on the input and the tolerance.

Optimizers are greedy and iterative: after every removal the affected
geometry is recomputed before the next vertex is chosen. Deleting all
qualifying vertices in one sweep is not equivalent, because removing one
point changes the angle and line distance of its neighbors.
"""

import logging
from abc import ABC, abstractmethod
from numbers import Real
from typing import Iterable

import numpy as np

from .geometry import (
    edge_lengths,
    interior_angles,
    midpoint,
    perpendicular_distances,
    points_to_array,
)
from .types import InvalidConfiguration, PointLike, Shape, to_shape

logger = logging.getLogger(__name__)

# Smallest shape still treated as a polygon
MIN_POINTS = 3


def validate_tolerance(name: str, value: float) -> float:
    """Return ``value`` as a float, or raise InvalidConfiguration.

    Accepts real numbers only: strings and booleans are rejected even though
    ``float()`` would convert them.
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, Real):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}")

    value = float(value)
    if not np.isfinite(value) or value < 0:
        raise InvalidConfiguration(f"{name} must be a finite, non-negative number, got {value}")
    return value


class ShapeOptimizer(ABC):
    """Base class for shape optimizers."""

    def optimize(self, shape: Iterable[PointLike]) -> Shape:
        """Optimize a shape.

        Args:
            shape: Closed polygon as Points or (x, y) pairs, in either winding

        Returns:
            New list of Points with at least ``min(3, len(shape))`` entries
        """
        points = to_shape(shape)
        if len(points) <= MIN_POINTS:
            return points

        optimized = self._optimize(points)
        logger.debug(f"{self!r}: {len(points)} -> {len(optimized)} points")
        return optimized

    def __call__(self, shape: Iterable[PointLike]) -> Shape:
        return self.optimize(shape)

    @abstractmethod
    def _optimize(self, shape: Shape) -> Shape:
        """Optimize a private copy of a shape with more than 3 points."""


class FlatAnglesOptimizer(ShapeOptimizer):
    """Removes vertices whose interior angle is close to a straight line.

    On each step the flattest vertex with an angle of at least
    ``max_angle_to_keep`` degrees is removed (lowest index on ties), until no
    vertex qualifies or only a triangle is left.
    """

    def __init__(self, max_angle_to_keep: float = 160.0):
        self._max_angle_to_keep = validate_tolerance("max_angle_to_keep", max_angle_to_keep)

    @property
    def max_angle_to_keep(self) -> float:
        return self._max_angle_to_keep

    def __repr__(self) -> str:
        return f"FlatAnglesOptimizer(max_angle_to_keep={self._max_angle_to_keep})"

    def _optimize(self, shape: Shape) -> Shape:
        while len(shape) > MIN_POINTS:
            angles = interior_angles(points_to_array(shape))
            candidates = np.where(angles >= self._max_angle_to_keep, angles, -1.0)

            index = int(np.argmax(candidates))
            if candidates[index] < 0:
                break

            del shape[index]

        return shape


class LineStraighteningOptimizer(ShapeOptimizer):
    """Removes vertices lying close to the line through their neighbors.

    On each step the vertex nearest to the line through its two neighbors is
    removed (lowest index on ties), as long as that distance does not exceed
    ``max_distance_to_keep``.
    """

    def __init__(self, max_distance_to_keep: float = 3.0):
        self._max_distance_to_keep = validate_tolerance(
            "max_distance_to_keep", max_distance_to_keep
        )

    @property
    def max_distance_to_keep(self) -> float:
        return self._max_distance_to_keep

    def __repr__(self) -> str:
        return f"LineStraighteningOptimizer(max_distance_to_keep={self._max_distance_to_keep})"

    def _optimize(self, shape: Shape) -> Shape:
        while len(shape) > MIN_POINTS:
            distances = perpendicular_distances(points_to_array(shape))

            index = int(np.argmin(distances))
            if distances[index] > self._max_distance_to_keep:
                break

            del shape[index]

        return shape


class ClosePointsMergingOptimizer(ShapeOptimizer):
    """Merges adjacent vertices closer than a tolerance into their midpoint.

    Works in passes over the circularly adjacent pairs, the closing pair
    (last, first) included. Within a pass each vertex takes part in at most
    one merge, so a run of three close points does not collapse into one.
    Passes repeat until one makes no merge.
    """

    def __init__(self, max_distance_to_merge: float = 3.0):
        self._max_distance_to_merge = validate_tolerance(
            "max_distance_to_merge", max_distance_to_merge
        )

    @property
    def max_distance_to_merge(self) -> float:
        return self._max_distance_to_merge

    def __repr__(self) -> str:
        return f"ClosePointsMergingOptimizer(max_distance_to_merge={self._max_distance_to_merge})"

    def _optimize(self, shape: Shape) -> Shape:
        while len(shape) > MIN_POINTS:
            merged = self._merge_pass(shape)
            if len(merged) == len(shape):
                break
            shape = merged

        return shape

    def _merge_pass(self, shape: Shape) -> Shape:
        """Run one pass over adjacent pairs.

        The merged point takes the slot of the pair's lower index, so the
        closing pair (last, first) lands at the front of the shape.
        """
        n = len(shape)
        lengths = edge_lengths(points_to_array(shape))

        used = [False] * n
        replacements = {}
        dropped = set()
        remaining = n

        for i in range(n):
            j = (i + 1) % n
            if used[i] or used[j] or lengths[i] > self._max_distance_to_merge:
                continue
            if remaining - 1 < MIN_POINTS:
                break

            used[i] = used[j] = True
            replacements[min(i, j)] = midpoint(shape[i], shape[j])
            dropped.add(max(i, j))
            remaining -= 1

        return [
            replacements.get(index, point)
            for index, point in enumerate(shape)
            if index not in dropped
        ]


class OptimizerChain(ShapeOptimizer):
    """Runs several optimizers in sequence, each on the previous output."""

    def __init__(self, *optimizers: ShapeOptimizer):
        for optimizer in optimizers:
            if not isinstance(optimizer, ShapeOptimizer):
                raise TypeError(f"Expected a ShapeOptimizer, got {type(optimizer).__name__}")
        self._optimizers = tuple(optimizers)

    @property
    def optimizers(self):
        return self._optimizers

    def __repr__(self) -> str:
        stages = ", ".join(repr(o) for o in self._optimizers)
        return f"OptimizerChain({stages})"

    def _optimize(self, shape: Shape) -> Shape:
        for optimizer in self._optimizers:
            shape = optimizer.optimize(shape)
        return shape
