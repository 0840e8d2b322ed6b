from __future__ import annotations

from pathlib import Path

import pytest

from layers.types import DuplicateLayerIdError, MissingGroupIdError
from scenarios.registry import (
    UnknownScenarioError,
    build_switcher,
    clear_registry_cache,
    get_registry,
    get_scenario,
)


@pytest.fixture
def scenarios_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("LAYERSWITCH_SCENARIOS_DIR", str(tmp_path))
    clear_registry_cache()
    yield tmp_path
    clear_registry_cache()


def _write(root: Path, name: str, body: str) -> None:
    d = root / name
    d.mkdir()
    (d / "switcher.yaml").write_text(body, encoding="utf-8")


_HEADER = """
title: Test
defaultView:
  center: {lat: 50.0, lng: 14.0}
  zoom: 11
"""


def test_registry_loads_layer_tree(scenarios_dir: Path):
    _write(
        scenarios_dir,
        "basic",
        "id: basic\n"
        + _HEADER
        + """
switcherTitle: Overlays
layers:
  - {id: w, title: Water, prefix: water, enabled: true}
  - type: group
    title: Basemap
    groupId: base
    layers:
      - {id: s, title: Satellite, prefix: sat, enabled: true}
      - {id: t, title: Terrain, prefix: terrain}
""",
    )
    entry = get_scenario("basic")
    assert entry.path.name == "switcher.yaml"

    switcher = build_switcher("basic")
    assert switcher.title == "Overlays"
    assert switcher.default_visible == ("s", "w")
    switcher.set_visibility("t", True)
    assert switcher.visible == ("t", "w")


def test_disabled_scenarios_are_skipped(scenarios_dir: Path):
    _write(scenarios_dir, "off", "id: hidden\nenabled: false\n" + _HEADER)
    assert get_registry() == {}
    with pytest.raises(UnknownScenarioError):
        get_scenario("hidden")


def test_duplicate_ids_fail_at_load(scenarios_dir: Path):
    _write(
        scenarios_dir,
        "dup",
        "id: dup\n"
        + _HEADER
        + """
layers:
  - {id: a, title: A, prefix: a}
  - type: group
    title: G
    layers:
      - {id: a, title: A again, prefix: a2}
""",
    )
    with pytest.raises(DuplicateLayerIdError):
        get_registry()


def test_exclusive_group_needs_group_id(scenarios_dir: Path):
    _write(
        scenarios_dir,
        "radio",
        "id: radio\n"
        + _HEADER
        + """
layers:
  - type: group
    title: G
    exclusive: true
    layers:
      - {id: a, title: A, prefix: a}
""",
    )
    with pytest.raises(MissingGroupIdError):
        get_registry()


def test_enabled_scenario_without_layers_fails(scenarios_dir: Path):
    _write(scenarios_dir, "empty", "id: empty\n" + _HEADER)
    with pytest.raises(ValueError):
        get_registry()
