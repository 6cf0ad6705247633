"""Pytest configuration and fixtures."""

import numpy as np
import pytest
from PIL import Image

from apx_shapeopt.types import to_shape


def _shape_from_coordinates(coordinates):
    return to_shape(zip(coordinates[::2], coordinates[1::2]))


@pytest.fixture
def make_shape():
    """Factory building a Shape from a flat [x0, y0, x1, y1, ...] coordinate list."""
    return _shape_from_coordinates


@pytest.fixture
def noisy_quad():
    """Triangle-like quad with three near-collinear noise points."""
    return _shape_from_coordinates([4, 6, 0, 0, 5, 1, 10, 0, 10, 5, 10, 10])


@pytest.fixture
def close_hexagon():
    """Hexagon whose three close adjacent pairs all merge at distance 3."""
    return _shape_from_coordinates([2, 0, 8, 0, 10, 2, 10, 8, 8, 10, 0, 2])


@pytest.fixture
def square_mask():
    """Binary mask with a single filled 30x30 square."""
    mask = np.zeros((50, 50), dtype=np.uint8)
    mask[10:40, 10:40] = 255
    return mask


@pytest.fixture
def two_squares_image(tmp_path):
    """Path to a PNG image with two separate white squares."""
    image = np.zeros((100, 100), dtype=np.uint8)
    image[10:30, 10:30] = 255
    image[60:80, 60:80] = 255

    path = tmp_path / "mask.png"
    Image.fromarray(image).save(path)
    return path
