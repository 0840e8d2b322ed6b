from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

from layers.types import Layer, LayerGroup, LayerTree


class ScenarioCenter(BaseModel):
    lat: float
    lng: float


class ScenarioDefaultView(BaseModel):
    center: ScenarioCenter
    zoom: float = Field(ge=0.0, le=24.0)


class LayerConfig(BaseModel):
    """
    One switchable layer.

    `id` ends up in the URL fragment; keep it short.
    """

    type: Literal["layer"] = "layer"
    id: str = Field(min_length=1, pattern=r"^[^,/=#\s]+$")
    title: str
    prefix: str
    groupId: str | None = None
    enabled: bool = False

    def to_layer(self) -> Layer:
        return Layer(
            id=self.id,
            title=self.title,
            prefix=self.prefix,
            group_id=self.groupId,
            enabled=self.enabled,
        )


class LayerGroupConfig(BaseModel):
    type: Literal["group"]
    title: str
    layers: list[LayerConfig]
    # Radio-button group: at most one member visible.
    exclusive: bool | None = None
    groupId: str | None = None

    def to_group(self) -> LayerGroup:
        return LayerGroup(
            title=self.title,
            layers=[layer.to_layer() for layer in self.layers],
            exclusive=self.exclusive,
            group_id=self.groupId,
        )


LayerNodeConfig = Union[LayerConfig, LayerGroupConfig]


class SwitcherConfig(BaseModel):
    id: str
    title: str
    defaultView: ScenarioDefaultView
    enabled: bool = True
    # Heading of the switcher control.
    switcherTitle: str = "Layers"
    layers: list[LayerNodeConfig] = Field(default_factory=list)

    def build_tree(self) -> LayerTree:
        tree: LayerTree = []
        for node in self.layers:
            if node.type == "group":
                tree.append(node.to_group())
            else:
                tree.append(node.to_layer())
        return tree
