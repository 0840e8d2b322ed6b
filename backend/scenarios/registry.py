from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable

import yaml
from loguru import logger

from layers.registry import build_layer_index
from layers.switcher import LayerSwitcher
from scenarios.config import scenarios_root
from scenarios.types import SwitcherConfig


@dataclass(frozen=True)
class ScenarioEntry:
    config: SwitcherConfig
    # Absolute path to switcher.yaml on disk (useful for debugging).
    path: Path


class UnknownScenarioError(KeyError):
    pass


def _iter_switcher_yaml_files() -> Iterable[Path]:
    root = scenarios_root()
    if not root.exists():
        return []
    return root.glob("*/switcher.yaml")


def _load_yaml(path: Path) -> dict:
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid switcher yaml root: {path}")
    return data


@lru_cache(maxsize=1)
def get_registry() -> dict[str, ScenarioEntry]:
    out: dict[str, ScenarioEntry] = {}
    for p in sorted(_iter_switcher_yaml_files(), key=lambda x: str(x)):
        cfg = SwitcherConfig.model_validate(_load_yaml(p))
        if not cfg.enabled:
            continue
        if not cfg.layers:
            raise ValueError(f"Enabled scenario is missing `layers`: {p}")
        # Fail at load time on duplicate ids / incomplete exclusive groups.
        build_layer_index(cfg.build_tree())
        out[cfg.id] = ScenarioEntry(config=cfg, path=p)
    logger.info(f"Loaded {len(out)} layer switcher scenario(s) from {scenarios_root()}")
    return out


def list_scenarios() -> list[SwitcherConfig]:
    return [e.config for e in get_registry().values()]


def get_scenario(scenario_id: str) -> ScenarioEntry:
    reg = get_registry()
    sid = (scenario_id or "").strip()
    if sid not in reg:
        raise UnknownScenarioError(sid)
    return reg[sid]


def build_switcher(scenario_id: str) -> LayerSwitcher:
    cfg = get_scenario(scenario_id).config
    return LayerSwitcher(cfg.build_tree(), title=cfg.switcherTitle)


def clear_registry_cache() -> None:
    """
    Clear in-memory scenario registry cache.

    Useful during development and tests: YAML changes (or a different
    LAYERSWITCH_SCENARIOS_DIR) are otherwise not picked up until restart.
    """
    get_registry.cache_clear()
