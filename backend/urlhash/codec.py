from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from geo.lnglat import (
    MAX_ZOOM,
    MIN_ZOOM,
    coordinate_precision,
    format_number,
    is_valid_zoom,
    round_half_up,
)

# Fragment grammar:
#   #<zoom>/<lat>/<lng>[/<layer ids, comma separated>][/<key>=<value>]*
_PARAM_RE = re.compile(r"^(\w+)=(.*)$", re.DOTALL)
# Plain decimal numbers only; no "_" separators, padding or nan/inf words.
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_ZOOM_DECIMALS = 2
# Unwrapped longitudes stay far below this, even after panning across many world copies.
_MAX_ABS_LNG = 1e6


class InvalidHashError(ValueError):
    """The zoom/lat/lng part of a fragment is not a usable map position."""


@dataclass(frozen=True)
class HashComponents:
    """
    Everything the URL fragment carries.

    `layers` is the comma-joined list of visible layer ids; the empty string means
    "default layers". `center` is (lng, lat).
    """

    zoom: float | None = None
    center: tuple[float, float] | None = None
    layers: str = ""
    additional: dict[str, str] = field(default_factory=dict)


def _check_position(zoom: float, lng: float, lat: float) -> None:
    if not is_valid_zoom(zoom):
        raise InvalidHashError(f"Zoom {zoom!r} outside {MIN_ZOOM:g}..{MAX_ZOOM:g}")
    if not (math.isfinite(lng) and math.isfinite(lat)):
        raise InvalidHashError(f"Non-finite center ({lng!r}, {lat!r})")
    if abs(lat) > 90.0 or abs(lng) > _MAX_ABS_LNG:
        raise InvalidHashError(f"Center ({lng!r}, {lat!r}) out of range")


def round_components(components: HashComponents) -> HashComponents:
    """
    Apply the same rounding `encode_hash` does, so the result survives a round trip.
    """
    if components.zoom is None or components.center is None:
        return components
    lng, lat = components.center
    _check_position(float(components.zoom), float(lng), float(lat))
    zoom = round_half_up(components.zoom, _ZOOM_DECIMALS)
    precision = coordinate_precision(zoom)
    return HashComponents(
        zoom=zoom,
        center=(round_half_up(lng, precision), round_half_up(lat, precision)),
        layers=components.layers,
        additional=dict(components.additional),
    )


def encode_hash(components: HashComponents) -> str:
    if components.zoom is None or components.center is None:
        return ""

    rounded = round_components(components)
    precision = coordinate_precision(rounded.zoom)
    lng, lat = rounded.center
    out = "#" + "/".join(
        [
            format_number(rounded.zoom, _ZOOM_DECIMALS),
            format_number(lat, precision),
            format_number(lng, precision),
        ]
    )
    if rounded.layers:
        out += "/" + rounded.layers
    for key, value in rounded.additional.items():
        out += f"/{key}={value}"
    return out


def _parse_number(text: str, fragment: str) -> float:
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidHashError(f"Invalid map position in fragment {fragment!r}")
    return float(text)


def decode_hash(fragment: str) -> HashComponents:
    text = fragment or ""
    if text.startswith("#"):
        text = text[1:]
    parts = text.split("/")
    if len(parts) < 3:
        return HashComponents()

    zoom = _parse_number(parts[0], fragment)
    lat = _parse_number(parts[1], fragment)
    lng = _parse_number(parts[2], fragment)
    _check_position(zoom, lng, lat)

    layers = ""
    additional: dict[str, str] = {}
    for part in parts[3:]:
        m = _PARAM_RE.match(part)
        if m:
            additional[m.group(1)] = m.group(2)
        else:
            # Only the last plain segment is kept.
            layers = part

    return HashComponents(zoom=zoom, center=(lng, lat), layers=layers, additional=additional)
