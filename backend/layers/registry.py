from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from layers.types import (
    DuplicateLayerIdError,
    Layer,
    LayerGroup,
    LayerTreeNode,
    MissingGroupIdError,
)


def flatten_layers(tree: Iterable[LayerTreeNode]) -> list[Layer]:
    """
    Pre-order flattening of a layer tree (groups expanded in place).

    Children of an exclusive group come back with the group's id as their
    `group_id`, unless they carry one of their own.
    """
    out: list[Layer] = []
    for node in tree:
        if node.kind == "layer":
            out.append(node)
        elif node.kind == "group":
            out.extend(_group_members(node))
        else:
            raise TypeError(f"Unknown layer tree node: {node!r}")
    return out


def _group_members(group: LayerGroup) -> list[Layer]:
    if not group.is_exclusive:
        return list(group.layers)
    if not group.group_id:
        raise MissingGroupIdError(group.title)
    return [
        layer if layer.group_id else replace(layer, group_id=group.group_id)
        for layer in group.layers
    ]


def build_layer_index(
    tree: Iterable[LayerTreeNode],
) -> tuple[dict[str, Layer], frozenset[str]]:
    """
    Index layers by id and snapshot the ids that are visible by default.
    """
    index: dict[str, Layer] = {}
    for layer in flatten_layers(tree):
        if layer.id in index:
            raise DuplicateLayerIdError(layer.id)
        index[layer.id] = layer
    default_visible = frozenset(lid for lid, layer in index.items() if layer.enabled)
    return index, default_visible
