"""apx-shapeopt: point-sequence optimization for closed contours.

Reduces the vertex list of a closed polygon (typically a traced contour)
to a smaller, visually equivalent one by removing flat corners, near-collinear
points and merging points that sit too close together.
"""

from .types import (
    Point,
    Shape,
    to_shape,
    ShapeOptimizationError,
    InvalidConfiguration,
    ContourError,
)
from .optimizers import (
    ShapeOptimizer,
    FlatAnglesOptimizer,
    LineStraighteningOptimizer,
    ClosePointsMergingOptimizer,
    OptimizerChain,
)

__version__ = "0.1.0"
__all__ = [
    "Point",
    "Shape",
    "to_shape",
    "ShapeOptimizationError",
    "InvalidConfiguration",
    "ContourError",
    "ShapeOptimizer",
    "FlatAnglesOptimizer",
    "LineStraighteningOptimizer",
    "ClosePointsMergingOptimizer",
    "OptimizerChain",
]
