from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from geo.lnglat import MAX_ZOOM, MIN_ZOOM
from urlhash.codec import HashComponents


class ApiCenter(BaseModel):
    lng: float = Field(allow_inf_nan=False)
    lat: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)


class ApiHashComponents(BaseModel):
    zoom: float | None = Field(default=None, ge=MIN_ZOOM, le=MAX_ZOOM, allow_inf_nan=False)
    center: ApiCenter | None = None
    layers: str = ""
    additional: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_components(cls, c: HashComponents) -> "ApiHashComponents":
        center = None
        if c.center is not None:
            center = ApiCenter(lng=c.center[0], lat=c.center[1])
        return cls(zoom=c.zoom, center=center, layers=c.layers, additional=dict(c.additional))

    def to_components(self) -> HashComponents:
        return HashComponents(
            zoom=self.zoom,
            center=(self.center.lng, self.center.lat) if self.center is not None else None,
            layers=self.layers,
            additional=dict(self.additional),
        )


class ApiHash(BaseModel):
    hash: str = ""


class ApiInitialVisibility(BaseModel):
    scenarioId: str
    hash: str = ""
    # MapLibre style document; only `layers[].id` / `layers[].layout` are touched.
    style: dict[str, Any]
