from __future__ import annotations

from typing import Any, Callable, Iterable

from loguru import logger

from host.types import MapSurface
from layers.registry import build_layer_index
from layers.types import Layer, LayerTree, LayerTreeNode, UnknownLayerError


class LayerSwitcher:
    """
    Owns which layers are visible and applies that to a map surface.

    This is the only writer of the visible-id set. Other components observe
    changes through `add_listener`.
    """

    def __init__(self, layers: LayerTree, title: str = "Layers") -> None:
        self._tree: LayerTree = list(layers)
        self.title = title
        self._layer_index, self._default_visible = build_layer_index(self._tree)
        self._visible: set[str] = set(self._default_visible)
        self._surface: MapSurface | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def layers(self) -> list[Layer]:
        return list(self._layer_index.values())

    @property
    def visible(self) -> tuple[str, ...]:
        return tuple(sorted(self._visible))

    @property
    def default_visible(self) -> tuple[str, ...]:
        return tuple(sorted(self._default_visible))

    @property
    def surface(self) -> MapSurface | None:
        return self._surface

    def is_visible(self, layer_id: str) -> bool:
        return layer_id in self._visible

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def set_visibility(self, layer_id: str, visible: bool) -> None:
        layer = self._layer_index.get(layer_id)
        if layer is None:
            raise UnknownLayerError(layer_id)

        new = set(self._visible)
        if visible:
            new.add(layer_id)
            if layer.group_id is not None:
                # Radio semantics: siblings are switched off in the same step.
                new -= {
                    lid
                    for lid, other in self._layer_index.items()
                    if lid != layer_id and other.group_id == layer.group_id
                }
        else:
            new.discard(layer_id)

        if new == self._visible:
            return
        self._visible = new
        self._changed()

    def apply_visibility(self, renderable_ids: Iterable[str] | None = None) -> None:
        """
        Push visibility to every style layer matched by a layer prefix.

        When several prefixes match the same style layer, the last layer in index
        order wins.
        """
        surface = self._surface
        if surface is None:
            return
        if renderable_ids is None:
            renderable_ids = [layer["id"] for layer in surface.get_style().get("layers") or []]

        for name in renderable_ids:
            for layer_id, layer in self._layer_index.items():
                if name.startswith(layer.prefix):
                    surface.set_layout_property(
                        name, "visibility", self._visibility_value(layer_id)
                    )

    def set_initial_visibility(self, style: dict[str, Any]) -> dict[str, Any]:
        """
        Modify a style document before the map is created so layers start out in
        their final state (no flash of layers that are about to be hidden).
        """
        for style_layer in style.get("layers") or []:
            name = style_layer.get("id") or ""
            for layer_id, layer in self._layer_index.items():
                if name.startswith(layer.prefix):
                    layout = style_layer.get("layout")
                    if layout is None:
                        layout = style_layer["layout"] = {}
                    layout["visibility"] = self._visibility_value(layer_id)
        return style

    def get_url_string(self) -> str:
        if self._visible == self._default_visible:
            return ""
        return ",".join(sorted(self._visible))

    def set_url_string(self, text: str) -> None:
        if text:
            self._visible = {lid for lid in text.split(",") if lid in self._layer_index}
        else:
            self._visible = set(self._default_visible)

        # Before the style is loaded, initial visibility is handled by
        # `set_initial_visibility` on the style document instead.
        if self._surface is not None and self._surface.is_style_loaded():
            self._refresh()

    def on_add(self, surface: MapSurface) -> None:
        self._surface = surface
        if surface.is_style_loaded():
            self._refresh()
        else:
            surface.on("load", self._refresh)

    def on_remove(self) -> None:
        self._surface = None

    def items(self) -> list[dict[str, Any]]:
        """
        Render model of the switcher: one entry per tree node, groups nested.
        """
        return [self._item(node) for node in self._tree]

    def _item(self, node: LayerTreeNode) -> dict[str, Any]:
        if node.kind == "group":
            return {
                "type": "group",
                "title": node.title,
                "layers": [self._item(child) for child in node.layers],
            }
        if node.kind == "layer":
            # The index holds the layer with its effective group id.
            layer = self._layer_index[node.id]
            return {
                "type": "layer",
                "id": layer.id,
                "title": layer.title,
                "checked": layer.id in self._visible,
                "input": "radio" if layer.group_id is not None else "checkbox",
                "groupId": layer.group_id,
            }
        raise TypeError(f"Unknown layer tree node: {node!r}")

    def _visibility_value(self, layer_id: str) -> str:
        return "visible" if layer_id in self._visible else "none"

    def _changed(self) -> None:
        logger.debug(f"LayerSwitcher: visible={','.join(sorted(self._visible))}")
        self._refresh()

    def _refresh(self) -> None:
        self.apply_visibility()
        for cb in list(self._listeners):
            cb()
