import sys
from pathlib import Path

import pytest

# Ensure `backend/` is on sys.path so tests can import local modules
# like `layers.*`, `urlhash.*`, and `main` without installing the package.
BACKEND_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_ROOT))

from scenarios.registry import clear_registry_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_scenario_registry():
    # Scenario YAML is cached per process; tests may point it elsewhere.
    clear_registry_cache()
    yield
    clear_registry_cache()
