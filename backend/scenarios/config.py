from __future__ import annotations

import os
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def scenarios_root() -> Path:
    # Convention: scenarios/*/switcher.yaml under the repo root.
    return Path(os.getenv("LAYERSWITCH_SCENARIOS_DIR") or (_repo_root() / "scenarios"))


def log_level() -> str:
    return (os.getenv("LAYERSWITCH_LOG_LEVEL") or "INFO").strip().upper()
