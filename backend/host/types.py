from __future__ import annotations

from typing import Any, Callable, Literal, Protocol

from geo.lnglat import LngLat

MapEvent = Literal["load", "moveend"]
Visibility = Literal["visible", "none"]


class MapSurface(Protocol):
    """
    The capabilities consumed from the map renderer.

    - StyleMap: in-process surface holding a style document
    - anything exposing the same calls (e.g. a bridge to MapLibre GL) fits here
    """

    def get_style(self) -> dict[str, Any]: ...

    def set_layout_property(self, layer_id: str, name: str, value: Any) -> None: ...

    def get_center(self) -> LngLat: ...

    def get_zoom(self) -> float: ...

    def is_style_loaded(self) -> bool: ...

    def jump_to(self, *, center: LngLat | tuple[float, float], zoom: float) -> None: ...

    def on(self, event: MapEvent, callback: Callable[[], None]) -> None: ...


class Location(Protocol):
    """
    The page address fragment.

    `replace_state` must not add a history entry and must not raise a
    hashchange notification.
    """

    @property
    def hash(self) -> str: ...

    def replace_state(self, fragment: str) -> None: ...

    def add_hashchange_listener(self, callback: Callable[[str], None]) -> None: ...


class HistoryWriteError(RuntimeError):
    """The host refused to rewrite the address fragment."""
