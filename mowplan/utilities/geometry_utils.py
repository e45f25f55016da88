from shapely.geometry import LinearRing, Polygon
from typing import List, Sequence, Tuple

from mowplan.planning.geo_projector import ScaleModel

LatLon = Tuple[float, float]


def map_polygon(points: Sequence[LatLon]) -> Polygon:
    """Polygon in map axes: longitude on x, latitude on y."""
    return Polygon([(lon, lat) for lat, lon in points])


def is_clockwise(points: Sequence[LatLon]) -> bool:
    """True when the ring runs clockwise on a north-up map."""
    return not LinearRing([(lon, lat) for lat, lon in points]).is_ccw


def local_meters(points: Sequence[LatLon], scale_model: ScaleModel) -> List[Tuple[float, float]]:
    lat0, lon0 = points[0]
    return [((lon - lon0) * scale_model.meters_per_deg_lon, (lat - lat0) * scale_model.meters_per_deg_lat)
            for lat, lon in points]


def ring_area_m2(points: Sequence[LatLon], scale_model: ScaleModel) -> float:
    if len(points) < 3:
        return 0.0
    return Polygon(local_meters(points, scale_model)).area
