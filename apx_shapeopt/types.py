"""Common types and exceptions for apx-shapeopt."""

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np

# Type aliases
Contour = np.ndarray
Coordinate = Union[int, float]


@dataclass(frozen=True)
class Point:
    """2D point with integer or float coordinates."""

    x: Coordinate
    y: Coordinate

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __iter__(self) -> Iterator[Coordinate]:
        yield self.x
        yield self.y

    @property
    def is_integral(self) -> bool:
        """True when both coordinates are integers."""
        return isinstance(self.x, Integral) and isinstance(self.y, Integral)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


# Ordered, circular sequence of points: the element after the last is the first.
Shape = List[Point]

PointLike = Union[Point, Sequence[Coordinate], Tuple[Coordinate, Coordinate]]


def _as_number(value) -> Coordinate:
    # numpy scalars -> plain Python numbers so integral checks stay reliable
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"Point coordinates must be real numbers, got {value!r}")
    if isinstance(value, Integral):
        return int(value)
    return float(value)


def to_shape(points: Iterable[PointLike]) -> Shape:
    """Build a new Shape from Points or (x, y) pairs.

    The returned list never aliases the input, so optimizers can work on it
    freely without touching the caller's sequence.

    Args:
        points: Iterable of Point objects or two-element coordinate pairs

    Returns:
        Fresh list of Point objects
    """
    shape = []
    for point in points:
        if isinstance(point, Point):
            shape.append(point)
            continue
        x, y = point
        shape.append(Point(_as_number(x), _as_number(y)))
    return shape


class ShapeOptimizationError(Exception):
    """Base exception for shape optimization errors."""

    pass


class InvalidConfiguration(ShapeOptimizationError, ValueError):
    """Exception raised when an optimizer or pipeline is misconfigured."""

    pass


class ContourError(ShapeOptimizationError):
    """Exception raised during contour extraction or conversion."""

    pass
