import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Ellipsoid:
    semi_major_axis: float = 6378137.0
    eccentricity_squared: float = 0.00669437999014


WGS84 = Ellipsoid()


@dataclass(frozen=True)
class ScaleModel:
    """Local flat-earth scale around one reference latitude."""

    reference_latitude: float
    meters_per_deg_lat: float
    meters_per_deg_lon: float

    @property
    def longitude_scale_ratio(self) -> float:
        return self.meters_per_deg_lon / self.meters_per_deg_lat


class GeoProjector:
    """
    Computes how many meters one degree of latitude and of longitude span near a
    reference latitude.

    The formulas are the ellipsoidal "length of a degree" expressions. They only
    hold close to the reference latitude, which is fine for field-sized areas.
    """

    def __init__(self, ellipsoid: Ellipsoid = WGS84):
        self.ellipsoid = ellipsoid

    def meters_per_degree(self, latitude: float) -> tuple:
        """
        Args:
            latitude (float): Reference latitude in decimal degrees.

        Returns:
            (float, float): meters per degree of latitude, meters per degree of longitude.
        """
        a = self.ellipsoid.semi_major_axis
        e2 = self.ellipsoid.eccentricity_squared
        phi = math.radians(latitude)
        w2 = 1.0 - e2 * math.sin(phi) ** 2
        per_lat = math.pi * a * (1.0 - e2) / (180.0 * w2 ** 1.5)
        per_lon = math.pi * a * math.cos(phi) / (180.0 * math.sqrt(w2))
        return per_lat, per_lon

    def scale_model(self, latitude: float) -> ScaleModel:
        per_lat, per_lon = self.meters_per_degree(latitude)
        return ScaleModel(latitude, per_lat, per_lon)
