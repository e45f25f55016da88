import logging
from typing import Iterator, List, Optional, TextIO, Tuple

from mowplan.errors import InvalidSpacingError
from mowplan.planning.geo_projector import GeoProjector, ScaleModel
from mowplan.planning.quantizer import FixedPointQuantizer, WindingDirection
from mowplan.planning.ring_offset_driver import ClipperOffsetEngine, RingOffsetDriver, continuation_strategy
from mowplan.planning.ring_stitcher import OutputWaypoint, RingStitcher
from mowplan.utilities.config_loader import PlannerConfig
from mowplan.utilities.geometry_utils import is_clockwise, ring_area_m2
from mowplan.waypoints.waypoint_file import Perimeter, write_lines

logger = logging.getLogger(__name__)


class WaypointPlan:
    """
    Concentric mowing plan for one perimeter.

    Projects the perimeter, quantizes it, shrinks it pass by pass and stitches
    every pass into a single numbered waypoint stream that follows the perimeter
    in the output file.

    Args:
        perimeter (Perimeter): Parsed perimeter waypoints.
        spacing_inches (int): Distance between passes, at least 1 inch.
        direction (WindingDirection): Direction of travel around each pass.
        config (PlannerConfig): Ellipsoid, quantization and engine settings.
        engine: Offset engine; defaults to pyclipper with the configured miter limit.
    """

    def __init__(self, perimeter: Perimeter, spacing_inches: int, direction: WindingDirection,
                 config: Optional[PlannerConfig] = None, engine=None):
        if spacing_inches < 1:
            raise InvalidSpacingError("Spacing must be greater than 0.", details={"spacing": spacing_inches})
        self.perimeter = perimeter
        self.spacing_inches = spacing_inches
        self.direction = direction
        self.config = config or PlannerConfig()
        self.engine = engine or ClipperOffsetEngine(self.config.miter_limit)
        self.scale_model: Optional[ScaleModel] = None
        self.waypoints: List[OutputWaypoint] = []
        self.rings: List[List[Tuple[float, float]]] = []

    @property
    def first_generated_index(self) -> int:
        # Index 0 is the home item in the header.
        return len(self.perimeter) + 1

    @property
    def next_index(self) -> int:
        return self.first_generated_index + len(self.waypoints)

    def generate(self) -> List[OutputWaypoint]:
        self.waypoints = []
        self.rings = []

        projector = GeoProjector(self.config.ellipsoid)
        self.scale_model = projector.scale_model(self.perimeter.waypoints[0].latitude)
        quantizer = FixedPointQuantizer(self.scale_model, self.direction, self.config.quantization_scale)
        spacing_units = quantizer.spacing_in_units(self.spacing_inches)
        if spacing_units < 1:
            raise InvalidSpacingError(
                f"Spacing of {self.spacing_inches} inches is below the quantization resolution",
                details={"quantization_scale": self.config.quantization_scale},
            )
        logger.debug(f"meters/deg lat = {self.scale_model.meters_per_deg_lat}, "
                     f"meters/deg lon = {self.scale_model.meters_per_deg_lon}, "
                     f"lon scale ratio = {self.scale_model.longitude_scale_ratio}, "
                     f"spacing = {spacing_units} units")

        coordinates = self.perimeter.coordinates
        # A zero-area perimeter has no winding.
        if ring_area_m2(coordinates, self.scale_model) > 0 and \
                is_clockwise(coordinates) != (self.direction is WindingDirection.CW):
            logger.warning(f"Perimeter winding differs from requested direction {self.direction.name}; "
                           f"generated passes will run {self.direction.name}")

        boundary = quantizer.quantize_path(coordinates)
        driver = RingOffsetDriver(self.engine, spacing_units, continuation_strategy(self.config.continuation))
        stitcher = RingStitcher(quantizer, self.perimeter.payload_template, self.first_generated_index,
                                boundary[0][0])

        for step in driver.rings(boundary):
            for ring in step:
                self.waypoints.extend(stitcher.stitch(ring))
                geo_ring = [quantizer.dequantize(x, y) for x, y in ring]
                self.rings.append(geo_ring)
                logger.info(f"Pass {len(self.rings)}: {len(ring)} corners, "
                            f"{ring_area_m2(geo_ring, self.scale_model):.1f} m^2")

        logger.info(f"Generated {len(self.rings)} passes, {len(self.waypoints)} waypoints")
        return self.waypoints

    def lines(self) -> Iterator[str]:
        yield from self.perimeter.header
        for waypoint in self.perimeter.waypoints:
            yield waypoint.line
        for waypoint in self.waypoints:
            yield waypoint.to_line()

    def write(self, stream: TextIO) -> None:
        write_lines(stream, self.lines())
