"""
Plan concentric mowing passes inside a waypoint perimeter.

Example:
    mowplan rectangle.waypoints out.waypoints 54 CCW

reads the perimeter in rectangle.waypoints and writes out.waypoints with the
perimeter followed by counter-clockwise passes 54 inches apart.
"""

import argparse
import logging
import os
import sys

from mowplan.errors import (
    InputOpenError,
    InvalidSpacingError,
    MowPlanError,
    OutputOpenError,
    UsageError,
)
from mowplan.planning.quantizer import WindingDirection
from mowplan.planning.waypoint_plan import WaypointPlan
from mowplan.utilities.config_loader import PlannerConfig, load_config
from mowplan.utilities.plot_utils import plot_plan
from mowplan.waypoints.waypoint_file import read_perimeter

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        raise UsageError(f"{message}\n{self.format_usage()}  where DIR is CW or CCW")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="mowplan", description="Generate concentric mowing passes inside a perimeter.")
    parser.add_argument("input", help="Input waypoint file holding the perimeter")
    parser.add_argument("output", help="Output waypoint file")
    parser.add_argument("spacing", metavar="SPACING_INCHES", help="Distance between passes in inches")
    parser.add_argument("direction", metavar="DIR", help="CW or CCW")
    parser.add_argument("--config", help="YAML planner configuration")
    parser.add_argument("--plot", help="Save a map of the plan to this image file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def parse_spacing(token: str) -> int:
    try:
        spacing = int(token)
    except ValueError:
        spacing = 0
    if spacing < 1:
        raise InvalidSpacingError("Spacing must be greater than 0.", details={"spacing": token})
    return spacing


def run(args: argparse.Namespace) -> WaypointPlan:
    config = load_config(args.config) if args.config else PlannerConfig()

    try:
        infile = open(args.input, 'r')
    except OSError as e:
        raise InputOpenError(f"Unable to open input file: {args.input}") from e

    with infile:
        try:
            outfile = open(args.output, 'w')
        except OSError as e:
            raise OutputOpenError(f"Unable to open output file: {args.output}") from e

        try:
            with outfile:
                spacing = parse_spacing(args.spacing)
                direction = WindingDirection.from_token(args.direction)
                perimeter = read_perimeter(infile, config.max_perimeter_lines)
                plan = WaypointPlan(perimeter, spacing, direction, config)
                plan.generate()
                plan.write(outfile)
        except Exception:
            if os.path.isfile(args.output):
                os.remove(args.output)
            raise

    if args.plot:
        try:
            plot_plan(plan, args.plot)
        except OSError as e:
            raise OutputOpenError(f"Unable to write plot: {args.plot}") from e
        logger.info(f"Plan plot saved to {args.plot}")
    return plan


def main(argv=None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                            format="%(levelname)s %(name)s: %(message)s")
        plan = run(args)
    except MowPlanError as e:
        print(e.message, file=sys.stderr)
        return e.exit_code

    print(f"{plan.next_index} waypoints in new file ({len(plan.waypoints)} generated).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
