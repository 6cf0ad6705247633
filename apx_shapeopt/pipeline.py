"""Pipeline orchestrator: masks and images in, optimized polygons out."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image

from .contour import contour_to_shape, find_contours, shape_to_contour
from .optimizers import (
    ClosePointsMergingOptimizer,
    FlatAnglesOptimizer,
    LineStraighteningOptimizer,
    OptimizerChain,
    ShapeOptimizer,
    validate_tolerance,
)
from .types import Contour, InvalidConfiguration, PointLike, Shape

logger = logging.getLogger(__name__)

STAGES = ("merge", "straighten", "flatten")


@dataclass
class PipelineConfig:
    """Configuration for the shape optimization pipeline."""

    # Flat angle removal (degrees)
    max_angle_to_keep: float = 160.0

    # Line straightening (coordinate units)
    max_distance_to_keep: float = 3.0

    # Close point merging (coordinate units)
    max_distance_to_merge: float = 3.0

    # Optimizers to run, in order
    stages: Tuple[str, ...] = STAGES

    # Contour detection
    contour_method: str = "simple"

    # Contour filtering
    min_contour_area: float = 0.0

    def __post_init__(self):
        """Validate stage names and thresholds."""
        if isinstance(self.stages, str):
            self.stages = (self.stages,)
        self.stages = tuple(self.stages)

        unknown = [s for s in self.stages if s not in STAGES]
        if unknown:
            raise InvalidConfiguration(
                f"Unknown stage(s) {', '.join(unknown)}; expected any of {', '.join(STAGES)}"
            )
        self.min_contour_area = validate_tolerance("min_contour_area", self.min_contour_area)

        # Fail fast on bad tolerances, even for stages that are not enabled
        build_optimizer(self, stages=STAGES)


def build_optimizer(config: PipelineConfig, stages: Optional[Sequence[str]] = None) -> OptimizerChain:
    """Create the optimizer chain described by a configuration.

    Args:
        config: Pipeline configuration
        stages: Stage names overriding ``config.stages``

    Returns:
        OptimizerChain running the stages in order
    """
    factories = {
        "merge": lambda: ClosePointsMergingOptimizer(config.max_distance_to_merge),
        "straighten": lambda: LineStraighteningOptimizer(config.max_distance_to_keep),
        "flatten": lambda: FlatAnglesOptimizer(config.max_angle_to_keep),
    }

    optimizers = []
    for name in config.stages if stages is None else stages:
        if name not in factories:
            raise InvalidConfiguration(f"Unknown stage: {name}")
        optimizers.append(factories[name]())

    return OptimizerChain(*optimizers)


class Pipeline:
    """Shape optimization pipeline."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        """Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration. Uses defaults if None.
        """
        self.config = config or PipelineConfig()
        self.optimizer: ShapeOptimizer = build_optimizer(self.config)
        self.stats: Dict[str, int] = {}

    def optimize_shape(self, shape: Sequence[PointLike]) -> Shape:
        """Run every configured stage on a single shape."""
        return self.optimizer.optimize(shape)

    def optimize_contours(self, contours: List[Contour]) -> List[Contour]:
        """Optimize a list of contours.

        Args:
            contours: List of (N, 2) or (N, 1, 2) contour arrays

        Returns:
            List of optimized (N, 2) contours, in input order
        """
        input_points = 0
        output_points = 0
        result = []

        for contour in contours:
            shape = contour_to_shape(contour)
            optimized = self.optimize_shape(shape)

            input_points += len(shape)
            output_points += len(optimized)
            result.append(shape_to_contour(optimized))

        self.stats = {
            "contours": len(result),
            "input_points": input_points,
            "output_points": output_points,
        }
        logger.info(f"Optimized {len(result)} contours: {input_points} -> {output_points} points")

        return result

    def process_mask(self, mask: np.ndarray) -> List[Contour]:
        """Find contours in a binary mask and optimize them.

        Args:
            mask: Binary mask (H, W)

        Returns:
            List of optimized contours
        """
        return self.optimize_contours(self._find_contours(mask))

    def process(self, image_path: str, output_path: Optional[str] = None) -> dict:
        """Process an image through the pipeline.

        Non-zero pixels of the grayscale image are treated as foreground.

        Args:
            image_path: Path to input image
            output_path: Optional path to save the JSON result

        Returns:
            Dictionary with image size, run statistics and optimized polygons

        Raises:
            FileNotFoundError: If input file doesn't exist
        """
        mask = self._load_mask(image_path)
        height, width = mask.shape

        contours = self._find_contours(mask)
        if not contours:
            logger.warning(f"No contours found in {image_path}")

        optimized = self.optimize_contours(contours)

        result = {
            "source": str(image_path),
            "width": int(width),
            "height": int(height),
            "stats": dict(self.stats),
            "polygons": [
                {
                    "points": contour.tolist(),
                    "original_points": len(original),
                    "optimized_points": len(contour),
                }
                for original, contour in zip(contours, optimized)
            ],
        }

        if output_path:
            with open(output_path, "w") as f:
                json.dump(result, f, indent=2)

        return result

    def _find_contours(self, mask: np.ndarray) -> List[Contour]:
        contours = find_contours(mask, method=self.config.contour_method)

        if self.config.min_contour_area > 0:
            kept = [
                c for c in contours
                if cv2.contourArea(c.astype(np.float32)) >= self.config.min_contour_area
            ]
            if len(kept) < len(contours):
                logger.info(
                    f"Skipped {len(contours) - len(kept)} contours below "
                    f"area {self.config.min_contour_area}"
                )
            contours = kept

        return contours

    def _load_mask(self, image_path: str) -> np.ndarray:
        """Load an image as a boolean foreground mask."""
        path = Path(image_path)
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with Image.open(path) as img:
            gray = np.array(img.convert("L"))

        return gray > 0
