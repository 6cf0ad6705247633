"""Contour extraction and conversion between contours and shapes."""

from typing import List, Sequence

import cv2
import numpy as np

from .types import Contour, ContourError, Point, Shape, to_shape

METHODS = {
    "simple": cv2.CHAIN_APPROX_SIMPLE,
    "none": cv2.CHAIN_APPROX_NONE,
    "tc89_l1": cv2.CHAIN_APPROX_TC89_L1,
    "tc89_kcos": cv2.CHAIN_APPROX_TC89_KCOS,
}


def find_contours(mask: np.ndarray, method: str = "simple") -> List[Contour]:
    """Find external contours in a binary mask.

    Args:
        mask: Binary mask (H, W) with True/non-zero for object pixels
        method: Contour approximation - "simple", "none", "tc89_l1" or "tc89_kcos"

    Returns:
        List of contours, each an (N, 2) array of (x, y) points

    Raises:
        ContourError: If the mask is not 2D or contour detection fails
    """
    mask = np.asarray(mask)
    if mask.ndim != 2:
        raise ContourError(f"Expected a 2D mask, got shape {mask.shape}")

    # Nothing to trace
    if not mask.any():
        return []

    try:
        if mask.dtype != np.uint8:
            mask = (mask > 0).astype(np.uint8) * 255

        cv_method = METHODS.get(method, cv2.CHAIN_APPROX_SIMPLE)
        contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv_method)

        # Need at least 3 points for a polygon
        return [c.reshape(-1, 2) for c in contours if len(c) >= 3]

    except Exception as e:
        raise ContourError(f"Contour detection failed: {e}") from e


def contour_to_shape(contour: Contour) -> Shape:
    """Convert an (N, 2) or OpenCV-style (N, 1, 2) contour to a Shape."""
    points = np.asarray(contour)
    if points.ndim == 3 and points.shape[1] == 1:
        points = points.reshape(-1, 2)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ContourError(f"Expected contour of shape (N, 2), got {points.shape}")

    return to_shape(points.tolist())


def shape_to_contour(shape: Sequence[Point]) -> Contour:
    """Convert a Shape to an (N, 2) contour array.

    Integral shapes become int32 arrays, which OpenCV drawing and measuring
    functions accept directly; anything else is float64.
    """
    dtype = np.int32 if all(p.is_integral for p in shape) else np.float64
    return np.array([[p.x, p.y] for p in shape], dtype=dtype).reshape(-1, 2)
