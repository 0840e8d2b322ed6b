from __future__ import annotations

import re
from typing import Any, Callable

from loguru import logger

from geo.lnglat import LngLat
from host.types import Location, MapSurface
from layers.switcher import LayerSwitcher
from urlhash.codec import HashComponents, InvalidHashError, decode_hash, encode_hash

ParameterHandler = Callable[[str | None], None]

_KEY_RE = re.compile(r"^\w+$")


class SurfaceNotAttachedError(RuntimeError):
    pass


class URLHash:
    """
    Keeps the URL fragment, the map view and the visible layers in agreement.

    Besides zoom/center and layer ids, the fragment carries extra `key=value`
    parameters owned by this object. Handlers registered for a key are told about
    changes that arrive through the fragment (user edits, back/forward), never
    about values set locally with `set_parameter`.
    """

    def __init__(self, layer_switcher: LayerSwitcher, location: Location) -> None:
        self.layer_switcher = layer_switcher
        self.location = location
        self._surface: MapSurface | None = None
        self._additional: dict[str, str] = {}
        self._handlers: dict[str, ParameterHandler] = {}

        layer_switcher.add_listener(self.update_hash)
        self.on_hash_change()

    @property
    def parameters(self) -> dict[str, str]:
        return dict(self._additional)

    def get_parameter(self, key: str) -> str | None:
        return self._additional.get(key)

    def register_handler(self, key: str, callback: ParameterHandler) -> None:
        self._handlers[key] = callback

    def set_parameter(self, key: str, value: str | None) -> None:
        if not _KEY_RE.match(key or ""):
            raise ValueError(f"Invalid parameter key: {key!r}")
        if value is not None and "/" in value:
            raise ValueError(f"Parameter value must not contain '/': {value!r}")

        if self._additional.get(key) == value:
            return
        if value is None:
            del self._additional[key]
        else:
            self._additional[key] = value
        self.update_hash()

    def enable(self, surface: MapSurface) -> None:
        self._surface = surface
        surface.on("moveend", self.update_hash)
        self.location.add_hashchange_listener(self.on_hash_change)

    def init_map_options(self, options: dict[str, Any]) -> dict[str, Any]:
        """
        Map constructor options with the view taken from the current fragment.

        Pass defaults for `center` and `zoom`; they are kept when the fragment
        doesn't carry a position.
        """
        out = dict(options)
        out["hash"] = False
        try:
            components = decode_hash(self.location.hash)
        except InvalidHashError as e:
            logger.warning(f"Ignoring URL fragment for initial view: {e}")
            return out
        if components.center is not None and components.zoom is not None:
            out["center"] = list(components.center)
            out["zoom"] = components.zoom
        return out

    def on_hash_change(self, fragment: str | None = None) -> None:
        if fragment is None:
            fragment = self.location.hash
        try:
            components = decode_hash(fragment)
        except InvalidHashError as e:
            logger.warning(f"Ignoring URL fragment: {e}")
            return

        # Parameters first: moving the map rewrites the fragment from
        # `_additional` synchronously (moveend), so it has to be current by then.
        self._reconcile_parameters(components.additional)

        surface = self._surface
        if (
            surface is not None
            and surface.is_style_loaded()
            and components.center is not None
            and components.zoom is not None
        ):
            surface.jump_to(center=components.center, zoom=components.zoom)

        self.layer_switcher.set_url_string(components.layers)

    def update_hash(self) -> None:
        if self._surface is None:
            return
        try:
            fragment = self.get_hash_string()
        except InvalidHashError as e:
            logger.warning(f"Not writing URL fragment for current view: {e}")
            return
        try:
            self.location.replace_state(fragment)
        except Exception as e:
            logger.warning(f"Failed to update URL fragment to {fragment!r}: {e}")

    def get_hash_string(self) -> str:
        surface = self._surface
        if surface is None:
            raise SurfaceNotAttachedError("get_hash_string called before map initialised")
        center = LngLat.from_any(surface.get_center())
        return encode_hash(
            HashComponents(
                zoom=surface.get_zoom(),
                center=(center.lng, center.lat),
                layers=self.layer_switcher.get_url_string(),
                additional=dict(self._additional),
            )
        )

    def _reconcile_parameters(self, incoming: dict[str, str]) -> None:
        keys = list(self._additional) + [k for k in incoming if k not in self._additional]
        for key in keys:
            old = self._additional.get(key)
            new = incoming.get(key)
            if old == new:
                continue
            if new is None:
                del self._additional[key]
            else:
                self._additional[key] = new
            handler = self._handlers.get(key)
            if handler is not None:
                handler(new)
