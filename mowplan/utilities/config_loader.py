from dataclasses import dataclass, fields
from typing import Optional

import yaml

from mowplan.errors import ConfigurationError
from mowplan.planning.geo_projector import WGS84, Ellipsoid
from mowplan.planning.quantizer import DEFAULT_QUANTIZATION_SCALE
from mowplan.planning.ring_offset_driver import CONTINUATION_STRATEGIES, DEFAULT_MITER_LIMIT
from mowplan.waypoints.waypoint_file import DEFAULT_MAX_PERIMETER_LINES


@dataclass(frozen=True)
class PlannerConfig:
    semi_major_axis: float = WGS84.semi_major_axis
    eccentricity_squared: float = WGS84.eccentricity_squared
    quantization_scale: float = DEFAULT_QUANTIZATION_SCALE
    miter_limit: float = DEFAULT_MITER_LIMIT
    max_perimeter_lines: int = DEFAULT_MAX_PERIMETER_LINES
    continuation: str = "last"

    @property
    def ellipsoid(self) -> Ellipsoid:
        return Ellipsoid(self.semi_major_axis, self.eccentricity_squared)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PlannerConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = {}
        for name in ("semi_major_axis", "quantization_scale", "miter_limit"):
            if name in data:
                values[name] = _positive_number(name, data[name])
        if "eccentricity_squared" in data:
            e2 = _number("eccentricity_squared", data["eccentricity_squared"])
            if not 0 <= e2 < 1:
                raise ConfigurationError(f"eccentricity_squared must be in [0, 1), got {e2}")
            values["eccentricity_squared"] = e2
        if "max_perimeter_lines" in data:
            max_lines = data["max_perimeter_lines"]
            if isinstance(max_lines, bool) or not isinstance(max_lines, int) or max_lines < 3:
                raise ConfigurationError(f"max_perimeter_lines must be an integer >= 3, got {max_lines!r}")
            values["max_perimeter_lines"] = max_lines
        if "continuation" in data:
            if data["continuation"] not in CONTINUATION_STRATEGIES:
                raise ConfigurationError(
                    f"continuation must be one of {sorted(CONTINUATION_STRATEGIES)}, got {data['continuation']!r}"
                )
            values["continuation"] = data["continuation"]
        return cls(**values)


def _number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    return float(value)


def _positive_number(name: str, value) -> float:
    value = _number(name, value)
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def load_config(file_path: str) -> PlannerConfig:
    try:
        with open(file_path, 'r') as file:
            data = yaml.safe_load(file)
    except OSError as e:
        raise ConfigurationError(f"Unable to open config file: {file_path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e
    return PlannerConfig.from_dict(data)
