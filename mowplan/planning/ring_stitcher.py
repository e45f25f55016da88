from dataclasses import dataclass
from typing import List, Sequence

from mowplan.planning.quantizer import FixedPointQuantizer, IntPoint
from mowplan.waypoints.waypoint_file import Waypoint, format_generated_line


@dataclass(frozen=True)
class OutputWaypoint:
    index: int
    latitude: float
    longitude: float
    template: Waypoint

    def to_line(self) -> str:
        return format_generated_line(self.index, self.template, self.latitude, self.longitude)


class RingStitcher:
    """
    Turns offset rings back into numbered geographic waypoints.

    The first corner of each ring is moved onto the latitude of the previous
    ring's first corner, so the mower turns in level with where it left the
    previous pass instead of cutting across diagonally.

    Args:
        quantizer (FixedPointQuantizer): Same quantizer the rings were built with.
        template (Waypoint): Waypoint whose payload fields every output point copies.
        first_index (int): Index given to the first generated waypoint.
        first_corner_x (int): Quantized latitude of the perimeter's first point.
    """

    def __init__(self, quantizer: FixedPointQuantizer, template: Waypoint, first_index: int, first_corner_x: int):
        self.quantizer = quantizer
        self.template = template
        self.next_index = first_index
        self.first_corner_x = first_corner_x

    def stitch(self, ring: Sequence[IntPoint]) -> List[OutputWaypoint]:
        out = []
        for position, (x, y) in enumerate(ring):
            lat_x = x
            if position == 0:
                lat_x, self.first_corner_x = self.first_corner_x, x
            lat, lon = self.quantizer.dequantize(lat_x, y)
            out.append(OutputWaypoint(self.next_index, lat, lon, self.template))
            self.next_index += 1
        return out
