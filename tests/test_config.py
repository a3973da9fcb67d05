"""
Unit tests for env / argv driven settings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gridroute.config import RouteConfig, resolve_config
from gridroute.core.types import Algorithm


def test_defaults() -> None:
    cfg = resolve_config(argv=[], environ={})

    assert cfg == RouteConfig()
    assert cfg.grid_size == 15
    assert cfg.obstacle_ratio == 0.2
    assert cfg.algorithm is Algorithm.ASTAR
    assert cfg.map_file is None


def test_environment_values() -> None:
    cfg = resolve_config(argv=[], environ={
        "GRIDROUTE_GRID_SIZE": "20",
        "GRIDROUTE_ALGORITHM": "dijkstra",
        "GRIDROUTE_SAVED_PATHS": "/tmp/routes.json",
        "GRIDROUTE_LOG_LEVEL": "debug",
        "UNRELATED": "x",
    })

    assert cfg.grid_size == 20
    assert cfg.algorithm is Algorithm.DIJKSTRA
    assert cfg.saved_paths == Path("/tmp/routes.json")
    assert cfg.log_level == "DEBUG"


def test_cli_overrides_environment() -> None:
    cfg = resolve_config(
        argv=["--grid-size=9", "--obstacle-ratio=0.35", "--map=maps/aisles.json", "positional"],
        environ={"GRIDROUTE_GRID_SIZE": "20"},
    )

    assert cfg.grid_size == 9
    assert cfg.obstacle_ratio == 0.35
    assert cfg.map_file == Path("maps/aisles.json")


def test_steps_per_sec_is_clamped() -> None:
    assert resolve_config(argv=["--steps-per-sec=500"], environ={}).steps_per_sec == 60
    assert resolve_config(argv=["--steps-per-sec=0"], environ={}).steps_per_sec == 1


@pytest.mark.parametrize(
    "argv",
    [
        ["--grid-size=abc"],
        ["--grid-size=1"],
        ["--obstacle-ratio=1.5"],
        ["--algorithm=bfs"],
    ],
)
def test_invalid_values_raise(argv) -> None:
    with pytest.raises(ValueError):
        resolve_config(argv=argv, environ={})
