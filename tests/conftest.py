# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for `import gridroute` without installing.
PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gridroute.core.types import Grid  # noqa: E402

MAPS_DIR = PROJECT_ROOT / "maps"


@pytest.fixture
def open_grid() -> Grid:
    return Grid.blank(5, 5)


@pytest.fixture
def walled_grid() -> Grid:
    """3x3 with the whole middle row blocked."""
    return Grid.from_strings([
        "...",
        "###",
        "...",
    ])


@pytest.fixture
def maps_dir() -> Path:
    return MAPS_DIR
