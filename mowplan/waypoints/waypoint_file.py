"""
QGC WPL waypoint files.

Layout::

    QGC WPL 110
    0  1 0 16 0 0 0 0 <home lat> <home lon> <alt> 1
    1  0 3 16 0 0 0 0 <lat> <lon> <alt> 1
    ...

The first two lines are carried through untouched. Every following line is one
perimeter waypoint of exactly twelve whitespace separated fields; fields 9 and
10 (1-indexed) are latitude and longitude in decimal degrees. Only those two are
interpreted, the rest are kept as the original text tokens.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, TextIO, Tuple

from mowplan.errors import PerimeterCapacityError, PerimeterFormatError, PerimeterShapeError

logger = logging.getLogger(__name__)

HEADER_LINES = 2
FIELDS_PER_LINE = 12
LAT_FIELD = 8
LON_FIELD = 9
MIN_PERIMETER_POINTS = 3
MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0
DEFAULT_MAX_PERIMETER_LINES = 100


@dataclass(frozen=True)
class Waypoint:
    fields: Tuple[str, ...]
    line: str

    @property
    def latitude(self) -> float:
        return float(self.fields[LAT_FIELD])

    @property
    def longitude(self) -> float:
        return float(self.fields[LON_FIELD])


@dataclass(frozen=True)
class Perimeter:
    header: Tuple[str, ...]
    waypoints: Tuple[Waypoint, ...]

    def __len__(self) -> int:
        return len(self.waypoints)

    @property
    def coordinates(self) -> List[Tuple[float, float]]:
        return [(wp.latitude, wp.longitude) for wp in self.waypoints]

    @property
    def payload_template(self) -> Waypoint:
        """Generated waypoints copy their non-positional fields from the last perimeter point."""
        return self.waypoints[-1]


def parse_waypoint(line: str, line_number: int) -> Waypoint:
    fields = tuple(line.split())
    if len(fields) != FIELDS_PER_LINE:
        raise PerimeterFormatError(
            f"Line {line_number}: expected {FIELDS_PER_LINE} fields, found {len(fields)}",
            details={"line": line_number},
        )
    try:
        lat = float(fields[LAT_FIELD])
        lon = float(fields[LON_FIELD])
    except ValueError:
        raise PerimeterFormatError(
            f"Line {line_number}: latitude/longitude are not numbers: "
            f"{fields[LAT_FIELD]!r} {fields[LON_FIELD]!r}",
            details={"line": line_number},
        ) from None
    if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > MAX_LATITUDE or abs(lon) > MAX_LONGITUDE:
        raise PerimeterFormatError(
            f"Line {line_number}: latitude/longitude out of range: "
            f"{fields[LAT_FIELD]!r} {fields[LON_FIELD]!r}",
            details={"line": line_number},
        )
    return Waypoint(fields, line)


def parse_perimeter(lines: Iterable[str], max_lines: int = DEFAULT_MAX_PERIMETER_LINES) -> Perimeter:
    lines = [line.rstrip("\r\n") for line in lines]
    if len(lines) < HEADER_LINES:
        raise PerimeterFormatError(f"Waypoint file needs {HEADER_LINES} header lines, found {len(lines)}")

    waypoints = []
    for number, line in enumerate(lines[HEADER_LINES:], start=HEADER_LINES + 1):
        if not line.strip():
            continue
        if len(waypoints) == max_lines:
            raise PerimeterCapacityError(
                f"Perimeter has more than {max_lines} waypoints",
                details={"max_lines": max_lines},
            )
        waypoints.append(parse_waypoint(line, number))

    if len(waypoints) < MIN_PERIMETER_POINTS:
        raise PerimeterShapeError(
            f"Perimeter needs at least {MIN_PERIMETER_POINTS} waypoints, found {len(waypoints)}",
            details={"points": len(waypoints)},
        )
    logger.debug(f"Read {len(waypoints)} perimeter waypoints")
    return Perimeter(tuple(lines[:HEADER_LINES]), tuple(waypoints))


def read_perimeter(stream: TextIO, max_lines: int = DEFAULT_MAX_PERIMETER_LINES) -> Perimeter:
    try:
        lines = stream.readlines()
    except UnicodeDecodeError as e:
        raise PerimeterFormatError(f"Waypoint file is not text: {e}") from e
    return parse_perimeter(lines, max_lines)


def format_generated_line(index: int, template: Waypoint, lat: float, lon: float) -> str:
    fields = [str(index), *template.fields[1:LAT_FIELD], format(lat, ".9g"), format(lon, ".9g"),
              *template.fields[LON_FIELD + 1:]]
    return " ".join(fields)


def write_lines(stream: TextIO, lines: Iterable[str]) -> None:
    for line in lines:
        stream.write(line + "\n")
