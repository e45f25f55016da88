from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

from mowplan.errors import GeometryEngineError, InvalidDirectionError
from mowplan.planning.geo_projector import ScaleModel

METERS_PER_INCH = 0.0254
DEFAULT_QUANTIZATION_SCALE = 1e8
# Largest coordinate magnitude the offset engine accepts.
MAX_COORDINATE = 0x3FFFFFFFFFFFFFFF

IntPoint = Tuple[int, int]


class WindingDirection(Enum):
    """Direction of travel around every ring, as seen on a north-up map."""

    CW = 1
    CCW = -1

    @classmethod
    def from_token(cls, token: str) -> "WindingDirection":
        try:
            return cls[token.strip().upper()]
        except KeyError:
            raise InvalidDirectionError("DIR must be CW or CCW", details={"token": token}) from None


def round_half_away(values) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    if not np.all(np.isfinite(values)) or np.any(np.abs(values) > MAX_COORDINATE):
        raise GeometryEngineError(
            "Quantized coordinates exceed the offset engine range; lower quantization_scale",
            details={"max_coordinate": MAX_COORDINATE},
        )
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


class FixedPointQuantizer:
    """
    Maps (lat, lon) in degrees onto the integer lattice the offset engine works on.

    x carries latitude, y carries longitude stretched by the longitude scale ratio
    so both axes span the same distance per unit. y is also multiplied by the
    winding direction: the engine always hands back positively oriented rings,
    and in (latitude, direction * longitude) that orientation is the requested
    direction of travel on a north-up map.
    """

    def __init__(self, scale_model: ScaleModel, winding: WindingDirection,
                 scale: float = DEFAULT_QUANTIZATION_SCALE):
        if scale <= 0:
            raise ValueError(f"quantization scale must be positive, got {scale}")
        self.scale_model = scale_model
        self.winding = winding
        self.scale = float(scale)
        self._lon_factor = scale_model.longitude_scale_ratio * winding.value * self.scale

    def quantize_lat(self, lat: float) -> int:
        return int(round_half_away(lat * self.scale))

    def quantize_lon(self, lon: float) -> int:
        return int(round_half_away(lon * self._lon_factor))

    def quantize(self, lat: float, lon: float) -> IntPoint:
        return self.quantize_lat(lat), self.quantize_lon(lon)

    def quantize_path(self, points: Sequence[Tuple[float, float]]) -> List[IntPoint]:
        coords = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        xs = round_half_away(coords[:, 0] * self.scale)
        ys = round_half_away(coords[:, 1] * self._lon_factor)
        return list(zip(xs.tolist(), ys.tolist()))

    def dequantize_lat(self, x: int) -> float:
        return x / self.scale

    def dequantize_lon(self, y: int) -> float:
        return y / self._lon_factor

    def dequantize(self, x: int, y: int) -> Tuple[float, float]:
        return self.dequantize_lat(x), self.dequantize_lon(y)

    def spacing_in_units(self, inches: float) -> int:
        # Latitude is the unstretched axis, so spacing is measured along it.
        degrees = inches * METERS_PER_INCH / self.scale_model.meters_per_deg_lat
        return int(round_half_away(degrees * self.scale))
