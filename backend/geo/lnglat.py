from __future__ import annotations

import math
from dataclasses import dataclass


# Rendered tile size in pixels and the longitude span covered at zoom 0.
_TILE_SIZE_PX = 512.0
_WORLD_SPAN_DEG = 360.0
_MAX_ERROR_PX = 0.5

# Zoom range a fragment may carry (same bound as scenario default views).
MIN_ZOOM = 0.0
MAX_ZOOM = 24.0


@dataclass(frozen=True)
class LngLat:
    """
    WGS84 position in degrees.

    Convention used throughout this repo:
    - lng first, lat second (same as GeoJSON / MapLibre)
    """

    lng: float
    lat: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lng, self.lat)

    def rounded(self, precision: int) -> "LngLat":
        return LngLat(
            lng=round_half_up(self.lng, precision),
            lat=round_half_up(self.lat, precision),
        )

    @classmethod
    def from_any(cls, value) -> "LngLat":
        if isinstance(value, LngLat):
            return value
        if isinstance(value, dict):
            return cls(lng=float(value["lng"]), lat=float(value["lat"]))
        lng, lat = value
        return cls(lng=float(lng), lat=float(lat))


def round_half_up(value: float, digits: int) -> float:
    """
    Round like the browser's `Math.round(x * 10^d) / 10^d`.

    Python's `round()` uses banker's rounding, which would produce fragments that
    differ from the ones a browser writes for the same view.
    """
    m = 10.0**digits
    return math.floor(float(value) * m + 0.5) / m


def coordinate_precision(zoom: float) -> int:
    """
    Number of decimals needed so one coordinate step stays under half a pixel.

    Derived from: 512px * 2^z / 360 / 10^d < 0.5px
    """
    return int(
        math.ceil(
            (float(zoom) * math.log(2) + math.log(_TILE_SIZE_PX / _WORLD_SPAN_DEG / _MAX_ERROR_PX))
            / math.log(10)
        )
    )


def format_number(value: float, decimals: int) -> str:
    """
    Fixed-notation text of an already rounded number, trailing zeros stripped.

    Matches what a browser prints for the same value (`51.505`, `0.00001`, `10`);
    `repr()` would switch to exponent form below 1e-4.
    """
    out = f"{float(value):.{max(0, int(decimals))}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        return "0"
    return out


def is_valid_zoom(zoom: float) -> bool:
    return math.isfinite(zoom) and MIN_ZOOM <= zoom <= MAX_ZOOM
