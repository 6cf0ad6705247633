"""Tests for geometry primitives."""

import numpy as np
import pytest

from apx_shapeopt.geometry import (
    distance,
    edge_lengths,
    interior_angle,
    interior_angles,
    midpoint,
    perpendicular_distance,
    perpendicular_distances,
    points_to_array,
)
from apx_shapeopt.types import Point


class TestPoint:
    """Test cases for Point arithmetic."""

    def test_add(self):
        """Test component-wise sum of integer points."""
        result = Point(1, 2) + Point(10, 20)

        assert result == Point(11, 22)
        assert result.is_integral

    def test_sub(self):
        """Test that the difference is the vector from the second point."""
        assert Point(10, 0) - Point(3, 4) == Point(7, -4)

    def test_mixed_types_give_float(self):
        """Test that mixing int and float coordinates gives a float point."""
        result = Point(1, 1) + Point(0.5, 0.0)

        assert result == Point(1.5, 1.0)
        assert not result.is_integral

    def test_difference_matches_distance(self):
        """Test that distance is the length of the difference vector."""
        a, b = Point(0, 0), Point(3, 4)

        assert float(np.hypot(*(b - a))) == pytest.approx(distance(a, b))


class TestInteriorAngle:
    """Test cases for interior_angle function."""

    def test_right_angle(self):
        """Test angle at the corner of a square."""
        assert interior_angle(Point(10, 0), Point(0, 0), Point(0, 10)) == pytest.approx(90.0)

    def test_straight_line(self):
        """Test that a point on the line between its neighbors is 180 degrees."""
        assert interior_angle(Point(-5, 0), Point(0, 0), Point(5, 0)) == pytest.approx(180.0)

    def test_spike(self):
        """Test that neighbors in the same direction give a zero angle."""
        assert interior_angle(Point(10, 0), Point(0, 0), Point(5, 0)) == pytest.approx(0.0)

    def test_near_flat(self):
        """Test a shallow corner."""
        angle = interior_angle(Point(0, 0), Point(10, 1), Point(20, 0))

        assert 168.0 < angle < 169.0

    def test_coincident_neighbor_is_flat(self):
        """Test that a zero-length edge is treated as a flat angle, not NaN."""
        angle = interior_angle(Point(0, 0), Point(0, 0), Point(10, 0))

        assert angle == 180.0

    def test_float_coordinates(self):
        """Test angle with float coordinates."""
        angle = interior_angle(Point(1.5, 0.0), Point(0.0, 0.0), Point(0.0, 2.5))

        assert angle == pytest.approx(90.0)


class TestPerpendicularDistance:
    """Test cases for perpendicular_distance function."""

    def test_distance_to_diagonal(self):
        """Test distance from a point to the line y = x."""
        d = perpendicular_distance(Point(8, 2), Point(10, 10), Point(0, 0))

        assert d == pytest.approx(6 / np.sqrt(2))

    def test_point_on_line(self):
        """Test that a collinear point has zero distance."""
        assert perpendicular_distance(Point(5, 5), Point(0, 0), Point(10, 10)) == pytest.approx(0.0)

    def test_infinite_line_not_segment(self):
        """Test that distance is measured to the line beyond the segment ends."""
        d = perpendicular_distance(Point(20, 5), Point(0, 0), Point(10, 0))

        assert d == pytest.approx(5.0)

    def test_coincident_line_points(self):
        """Test fallback to plain distance when the line is a single point."""
        d = perpendicular_distance(Point(3, 4), Point(0, 0), Point(0, 0))

        assert d == pytest.approx(5.0)


class TestDistanceAndMidpoint:
    """Test cases for distance and midpoint functions."""

    def test_distance(self):
        """Test Euclidean distance."""
        assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)

    def test_midpoint_integral(self):
        """Test midpoint of integer points with an even coordinate sum."""
        assert midpoint(Point(0, 0), Point(2, 2)) == Point(1, 1)

    def test_midpoint_rounds_half_to_even(self):
        """Test rounding of integer midpoints that fall on a half."""
        m = midpoint(Point(0, 0), Point(1, 3))

        assert m == Point(0, 2)
        assert m.is_integral

    def test_midpoint_symmetric(self):
        """Test that argument order does not change the midpoint."""
        assert midpoint(Point(3, 7), Point(8, 2)) == midpoint(Point(8, 2), Point(3, 7))

    def test_midpoint_float(self):
        """Test that float points give the exact mean."""
        assert midpoint(Point(0.0, 0.0), Point(1.0, 3.0)) == Point(0.5, 1.5)

    def test_midpoint_large_integers_exact(self):
        """Test that integer midpoints beyond float precision stay exact."""
        big = 2 ** 60

        assert midpoint(Point(big + 1, 0), Point(big + 5, 0)) == Point(big + 3, 0)

    def test_midpoint_large_integers_half_to_even(self):
        """Test half-to-even rounding on integers float64 cannot represent."""
        big = 2 ** 60

        assert midpoint(Point(big, 0), Point(big + 1, 0)).x == big
        assert midpoint(Point(big + 1, 0), Point(big + 2, 0)).x == big + 2
        assert midpoint(Point(-big - 1, 0), Point(-big, 0)).x == -big


class TestVectorized:
    """Test cases for whole-shape geometry."""

    def test_square_angles(self):
        """Test that every corner of a square is 90 degrees."""
        square = points_to_array([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)])

        np.testing.assert_allclose(interior_angles(square), [90.0] * 4)

    def test_agrees_with_scalar(self):
        """Test that vectorized values match the scalar functions."""
        shape = [Point(0, 0), Point(10, 1), Point(20, 0), Point(20, 20), Point(3, 7)]
        points = points_to_array(shape)
        n = len(shape)

        angles = interior_angles(points)
        distances = perpendicular_distances(points)

        for i in range(n):
            prev, cur, nxt = shape[i - 1], shape[i], shape[(i + 1) % n]
            assert angles[i] == pytest.approx(interior_angle(prev, cur, nxt))
            assert distances[i] == pytest.approx(perpendicular_distance(cur, prev, nxt))

    def test_edge_lengths_include_closing_edge(self):
        """Test that the last edge wraps around to the first point."""
        points = points_to_array([Point(0, 0), Point(3, 4), Point(3, 0)])

        np.testing.assert_allclose(edge_lengths(points), [5.0, 4.0, 3.0])

    def test_degenerate_shape_has_no_nan(self):
        """Test that a shape of identical points yields finite values."""
        points = points_to_array([Point(1, 1)] * 4)

        assert np.all(np.isfinite(interior_angles(points)))
        assert np.all(np.isfinite(perpendicular_distances(points)))
