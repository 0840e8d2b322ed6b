from .registry import build_layer_index, flatten_layers
from .switcher import LayerSwitcher
from .types import (
    DuplicateLayerIdError,
    Layer,
    LayerConfigError,
    LayerGroup,
    LayerTree,
    MissingGroupIdError,
    UnknownLayerError,
)

__all__ = [
    "DuplicateLayerIdError",
    "Layer",
    "LayerConfigError",
    "LayerGroup",
    "LayerSwitcher",
    "LayerTree",
    "MissingGroupIdError",
    "UnknownLayerError",
    "build_layer_index",
    "flatten_layers",
]
