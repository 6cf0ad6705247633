"""Command-line interface for apx-shapeopt."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .pipeline import STAGES, Pipeline, PipelineConfig
from .types import ShapeOptimizationError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="apx-shapeopt",
        description="Trace contours in a mask image and reduce their point count",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  apx-shapeopt -i mask.png -o shapes.json
  apx-shapeopt -i mask.png --angle 170 --distance 2 --merge 2
  apx-shapeopt -i mask.png --stages straighten,flatten --verbose
        """,
    )

    parser.add_argument("-i", "--input", required=True, help="Input mask image path")

    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (default: input name with .json extension)",
    )

    parser.add_argument(
        "--angle",
        type=float,
        default=160.0,
        help="Vertices with an interior angle at or above this are removed (default: 160)",
    )

    parser.add_argument(
        "--distance",
        type=float,
        default=3.0,
        help="Vertices this close to the line through their neighbors are removed (default: 3)",
    )

    parser.add_argument(
        "--merge",
        type=float,
        default=3.0,
        help="Adjacent vertices this close are merged (default: 3)",
    )

    parser.add_argument(
        "--stages",
        default=",".join(STAGES),
        help=f"Comma-separated optimizers to run in order (default: {','.join(STAGES)})",
    )

    parser.add_argument(
        "--method",
        choices=["simple", "none", "tc89_l1", "tc89_kcos"],
        default="simple",
        help="Contour approximation method (default: simple)",
    )

    parser.add_argument(
        "--min-area",
        type=float,
        default=0.0,
        help="Minimum contour area in pixels (default: 0)",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    input_path = Path(parsed.input)
    output_path = parsed.output or str(input_path.with_suffix(".json"))

    try:
        config = PipelineConfig(
            max_angle_to_keep=parsed.angle,
            max_distance_to_keep=parsed.distance,
            max_distance_to_merge=parsed.merge,
            stages=tuple(s.strip() for s in parsed.stages.split(",") if s.strip()),
            contour_method=parsed.method,
            min_contour_area=parsed.min_area,
        )
        pipeline = Pipeline(config)

        print(f"Processing: {parsed.input}")
        print(f"  Stages: {', '.join(config.stages) or 'none'}")

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        pipeline.process(parsed.input, output_path)

        stats = pipeline.stats
        print(f"  Contours: {stats['contours']}")
        print(f"  Points: {stats['input_points']} -> {stats['output_points']}")
        print(f"  Output saved: {output_path}")

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ShapeOptimizationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
