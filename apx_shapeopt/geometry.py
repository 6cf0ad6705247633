"""Geometry primitives for shape optimization.

Scalar helpers operate on single Points; the plural forms compute the same
quantity for every vertex of a circular shape at once, with neighbors taken
by wrapping around (``np.roll``). Both go through the same array code.
"""

from typing import Sequence

import numpy as np

from .types import Point


def points_to_array(shape: Sequence[Point]) -> np.ndarray:
    """Convert a sequence of Points to a float (N, 2) array."""
    return np.array([[p.x, p.y] for p in shape], dtype=np.float64).reshape(-1, 2)


def _norms(vectors: np.ndarray) -> np.ndarray:
    return np.sqrt(np.sum(vectors * vectors, axis=-1))


def _angles(prev: np.ndarray, cur: np.ndarray, nxt: np.ndarray) -> np.ndarray:
    v1 = prev - cur
    v2 = nxt - cur
    norms = _norms(v1) * _norms(v2)
    dots = np.sum(v1 * v2, axis=-1)

    # Zero-length edge: report a flat angle
    cosines = np.divide(dots, norms, out=np.full_like(dots, -1.0), where=norms > 0)

    return np.degrees(np.arccos(np.clip(cosines, -1.0, 1.0)))


def _line_distances(points: np.ndarray, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
    direction = ends - starts
    offset = points - starts
    lengths = _norms(direction)
    cross = direction[..., 0] * offset[..., 1] - direction[..., 1] * offset[..., 0]

    safe_lengths = np.where(lengths > 0, lengths, 1.0)
    return np.where(lengths > 0, np.abs(cross) / safe_lengths, _norms(offset))


def interior_angle(prev: Point, cur: Point, nxt: Point) -> float:
    """Angle at ``cur`` between the vectors towards ``prev`` and ``nxt``.

    Args:
        prev: Previous vertex
        cur: Vertex the angle is measured at
        nxt: Next vertex

    Returns:
        Angle in degrees within [0, 180]. Values near 180 mean ``cur`` lies
        almost on the straight line between its neighbors; if ``cur``
        coincides with a neighbor the angle is 180.
    """
    angles = _angles(
        prev.as_array()[np.newaxis],
        cur.as_array()[np.newaxis],
        nxt.as_array()[np.newaxis],
    )
    return float(angles[0])


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """Distance from ``point`` to the infinite line through two points.

    If ``line_start`` and ``line_end`` coincide, this is the plain distance
    from ``point`` to that location.
    """
    distances = _line_distances(
        point.as_array()[np.newaxis],
        line_start.as_array()[np.newaxis],
        line_end.as_array()[np.newaxis],
    )
    return float(distances[0])


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return float(_norms((b.as_array() - a.as_array())[np.newaxis])[0])


def midpoint(a: Point, b: Point) -> Point:
    """Midpoint of two points.

    Integer points give an integer midpoint, with halves going to the even
    neighbor, computed in integer arithmetic so coordinates of any size stay
    exact. Float points give the exact mean.
    """
    if a.is_integral and b.is_integral:
        return Point(_half_to_even(a.x + b.x), _half_to_even(a.y + b.y))
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def _half_to_even(total: int) -> int:
    quotient, remainder = divmod(total, 2)
    return quotient + (remainder and quotient % 2)


def interior_angles(points: np.ndarray) -> np.ndarray:
    """Interior angle in degrees at every vertex of a closed (N, 2) polygon."""
    return _angles(np.roll(points, 1, axis=0), points, np.roll(points, -1, axis=0))


def perpendicular_distances(points: np.ndarray) -> np.ndarray:
    """Distance of every vertex from the line through its two neighbors."""
    return _line_distances(points, np.roll(points, 1, axis=0), np.roll(points, -1, axis=0))


def edge_lengths(points: np.ndarray) -> np.ndarray:
    """Length of every edge ``i -> i + 1``, including the closing edge."""
    return _norms(np.roll(points, -1, axis=0) - points)
