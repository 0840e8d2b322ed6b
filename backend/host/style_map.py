from __future__ import annotations

import copy
import math
from collections import defaultdict
from typing import Any, Callable

from loguru import logger

from geo.lnglat import LngLat
from host.types import MapEvent


class StyleMap:
    """
    In-process map surface backed by a style document.

    Events are dispatched synchronously, like a browser map does for `moveend`
    after a `jump_to`: listeners run before `jump_to` returns.
    """

    def __init__(
        self,
        style: dict[str, Any],
        *,
        center: LngLat | tuple[float, float] = (0.0, 0.0),
        zoom: float = 0.0,
        loaded: bool = False,
        min_zoom: float = 0.0,
        max_zoom: float = 22.0,
    ) -> None:
        self.min_zoom = float(min_zoom)
        self.max_zoom = float(max_zoom)
        # The caller's document stays untouched; layout changes apply to our copy.
        self._style = copy.deepcopy(style)
        self._style.setdefault("layers", [])
        self._center = LngLat.from_any(center)
        self._zoom = self._clamp_zoom(zoom)
        self._loaded = loaded
        self._listeners: dict[str, list[Callable[[], None]]] = defaultdict(list)

    def get_style(self) -> dict[str, Any]:
        return self._style

    def set_layout_property(self, layer_id: str, name: str, value: Any) -> None:
        layer = self._style_layer(layer_id)
        if layer is None:
            raise KeyError(f"Style layer not found: {layer_id}")
        layer.setdefault("layout", {})[name] = value

    def get_layout_property(self, layer_id: str, name: str) -> Any:
        layer = self._style_layer(layer_id)
        if layer is None:
            raise KeyError(f"Style layer not found: {layer_id}")
        return (layer.get("layout") or {}).get(name)

    def get_center(self) -> LngLat:
        return self._center

    def get_zoom(self) -> float:
        return self._zoom

    def is_style_loaded(self) -> bool:
        return self._loaded

    def jump_to(self, *, center: LngLat | tuple[float, float], zoom: float) -> None:
        zoom = self._clamp_zoom(zoom)
        self._center = LngLat.from_any(center)
        self._zoom = zoom
        self._fire("moveend")

    def on(self, event: MapEvent, callback: Callable[[], None]) -> None:
        self._listeners[event].append(callback)

    def mark_loaded(self) -> None:
        """
        Finish loading the style and notify `load` listeners (once).
        """
        if self._loaded:
            return
        self._loaded = True
        self._fire("load")

    def _clamp_zoom(self, zoom: float) -> float:
        z = float(zoom)
        if not math.isfinite(z):
            raise ValueError(f"Invalid zoom: {zoom!r}")
        return max(self.min_zoom, min(self.max_zoom, z))

    def _style_layer(self, layer_id: str) -> dict[str, Any] | None:
        for layer in self._style["layers"]:
            if layer.get("id") == layer_id:
                return layer
        return None

    def _fire(self, event: str) -> None:
        listeners = list(self._listeners.get(event, ()))
        logger.debug(f"StyleMap: {event} -> {len(listeners)} listener(s)")
        for cb in listeners:
            cb()
