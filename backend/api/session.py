from __future__ import annotations

import copy
from typing import Any

from loguru import logger

from host.location import MemoryLocation
from layers.switcher import LayerSwitcher
from scenarios.registry import build_switcher, get_scenario
from urlhash.sync import URLHash


def open_session(scenario_id: str, fragment: str) -> tuple[LayerSwitcher, URLHash]:
    """
    A switcher + hash pair in the state a page loaded with `fragment` would start in.
    """
    switcher = build_switcher(scenario_id)
    url_hash = URLHash(switcher, MemoryLocation(fragment))
    return switcher, url_hash


def prepare_map(scenario_id: str, fragment: str, style: dict[str, Any]) -> dict[str, Any]:
    """
    Style document and map options for a page loaded with `fragment`.

    Layers hidden by the fragment (or by default) are already hidden in the returned
    style, so the client never renders them before the switcher is attached.
    """
    view = get_scenario(scenario_id).config.defaultView
    switcher, url_hash = open_session(scenario_id, fragment)

    prepared = switcher.set_initial_visibility(copy.deepcopy(style))
    options = url_hash.init_map_options(
        {"center": [view.center.lng, view.center.lat], "zoom": view.zoom}
    )
    logger.debug(
        f"Prepared style for {scenario_id}: visible={','.join(switcher.visible)} "
        f"params={url_hash.parameters}"
    )
    return {
        "style": prepared,
        "mapOptions": options,
        "visible": list(switcher.visible),
        "parameters": url_hash.parameters,
    }
