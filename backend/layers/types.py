from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias, Union


@dataclass(frozen=True)
class Layer:
    """
    A switchable entry in the layer switcher.

    `id` is written into the URL fragment, so it should be as short as possible and
    must be unique across the whole tree. `prefix` is matched against the ids of the
    layers in the map style: every style layer whose id starts with it follows this
    entry's visibility.
    """

    id: str
    title: str
    prefix: str
    # Members sharing a group id behave like radio buttons.
    group_id: str | None = None
    enabled: bool = False
    kind: Literal["layer"] = field(default="layer", init=False)


@dataclass(frozen=True)
class LayerGroup:
    """
    A titled group of layers shown together in the layer switcher.

    A group holds no visibility of its own. When `exclusive` is set (or left as None
    with a `group_id` given), its children share `group_id` and at most one of them
    is visible at a time.
    """

    title: str
    layers: tuple[Layer, ...]
    exclusive: bool | None = None
    group_id: str | None = None
    kind: Literal["group"] = field(default="group", init=False)

    def __post_init__(self) -> None:
        # Any iterable is accepted; stored as a tuple.
        object.__setattr__(self, "layers", tuple(self.layers))

    @property
    def is_exclusive(self) -> bool:
        if self.exclusive is None:
            return self.group_id is not None
        return bool(self.exclusive)


LayerTreeNode: TypeAlias = Union[Layer, LayerGroup]
LayerTree: TypeAlias = list[LayerTreeNode]


class LayerConfigError(ValueError):
    """Invalid layer tree; raised while building the switcher."""


class DuplicateLayerIdError(LayerConfigError):
    def __init__(self, layer_id: str):
        super().__init__(f'Duplicate layer ID "{layer_id}". Layer IDs must be unique.')
        self.layer_id = layer_id


class MissingGroupIdError(LayerConfigError):
    def __init__(self, title: str):
        super().__init__(f'Exclusive layer group "{title}" has no group ID.')
        self.title = title


class UnknownLayerError(KeyError):
    def __init__(self, layer_id: str):
        super().__init__(f"Layer not found: {layer_id}")
        self.layer_id = layer_id
