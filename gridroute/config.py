# gridroute/config.py
"""
Runtime settings for the viewer and launcher.

- ENV: GRIDROUTE_GRID_SIZE, GRIDROUTE_OBSTACLE_RATIO, GRIDROUTE_ALGORITHM,
       GRIDROUTE_STEPS_PER_SEC, GRIDROUTE_SAVED_PATHS, GRIDROUTE_MAP,
       GRIDROUTE_LOG_LEVEL
- CLI: --grid-size=20 --algorithm=dijkstra ... (CLI wins over ENV)
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from gridroute.core.pathfinder import parse_algorithm
from gridroute.core.types import Algorithm

ENV_PREFIX = "GRIDROUTE_"


@dataclass
class RouteConfig:
    grid_size: int = 15
    obstacle_ratio: float = 0.2
    algorithm: Algorithm = Algorithm.ASTAR
    steps_per_sec: int = 8
    saved_paths: Path = Path("saved_paths.json")
    map_file: Optional[Path] = None
    log_level: str = "INFO"


def _raw_settings(argv: Sequence[str], environ: Mapping[str, str]) -> dict:
    raw = {}
    for key, value in environ.items():
        if key.startswith(ENV_PREFIX):
            raw[key[len(ENV_PREFIX):].lower()] = value
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            raw[key.replace("-", "_").lower()] = value
    return raw


def resolve_config(argv: Optional[Sequence[str]] = None,
                   environ: Optional[Mapping[str, str]] = None) -> RouteConfig:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_settings(argv, environ)
    cfg = RouteConfig()

    try:
        if "grid_size" in raw:
            cfg.grid_size = int(raw["grid_size"])
        if "obstacle_ratio" in raw:
            cfg.obstacle_ratio = float(raw["obstacle_ratio"])
        if "steps_per_sec" in raw:
            cfg.steps_per_sec = int(raw["steps_per_sec"])
    except ValueError as ex:
        raise ValueError(f"invalid numeric setting: {ex}") from ex

    if cfg.grid_size < 2:
        raise ValueError(f"grid_size must be at least 2, got {cfg.grid_size}")
    if not 0.0 <= cfg.obstacle_ratio < 1.0:
        raise ValueError(f"obstacle_ratio must be in [0, 1), got {cfg.obstacle_ratio}")
    cfg.steps_per_sec = max(1, min(60, cfg.steps_per_sec))

    if "algorithm" in raw:
        cfg.algorithm = parse_algorithm(raw["algorithm"])
    if raw.get("saved_paths"):
        cfg.saved_paths = Path(raw["saved_paths"])
    if raw.get("map"):
        cfg.map_file = Path(raw["map"])
    if raw.get("log_level"):
        cfg.log_level = raw["log_level"].upper()
    return cfg
