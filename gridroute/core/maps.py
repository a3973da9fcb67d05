# gridroute/core/maps.py
"""
Map files and generated demo grids.

Map JSON format (cell value 1 = obstacle, anything else = floor):

    {"name": "aisle", "width": 5, "height": 3,
     "start": [0, 0], "goal": [4, 2],
     "cells": [[0,0,0,0,0],[0,1,1,1,0],[0,0,0,0,0]]}
"""

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from gridroute.core.errors import GridValidationError, MapFormatError
from gridroute.core.pathfinder import find_path
from gridroute.core.types import Algorithm, Cell, Grid

logger = logging.getLogger(__name__)

BLOCK = 1
DEFAULT_OBSTACLE_RATIO = 0.2


@dataclass
class Scenario:
    grid: Grid
    start: Cell
    goal: Cell
    name: str = "custom"


# ---------- Loader ----------
def load_map(path: Union[str, Path]) -> Scenario:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as ex:
            raise MapFormatError(f"{path.name}: not valid JSON ({ex})") from ex
    try:
        width  = int(data["width"])
        height = int(data["height"])
        start  = tuple(int(v) for v in data["start"])
        goal   = tuple(int(v) for v in data["goal"])
        cells  = data["cells"]
    except (KeyError, TypeError, ValueError) as ex:
        raise MapFormatError(f"{path.name}: malformed map ({ex!r})") from ex
    if len(start) != 2 or len(goal) != 2:
        raise MapFormatError(f"{path.name}: start/goal must be [x, y] pairs")
    if not isinstance(cells, list) or not all(isinstance(r, list) for r in cells):
        raise MapFormatError(f"{path.name}: cells must be a list of rows")
    if len(cells) != height or any(len(r) != width for r in cells):
        raise GridValidationError(f"{path.name}: cells size mismatch, expected {width}x{height}")

    grid = Grid.from_rows([[v != BLOCK for v in row] for row in cells])
    grid.require_in_bounds(start, "start")
    grid.require_in_bounds(goal, "goal")
    logger.debug("loaded map %s (%dx%d)", path, width, height)
    return Scenario(grid, start, goal, str(data.get("name", path.stem)))


def save_map(scenario: Scenario, path: Union[str, Path]) -> None:
    g = scenario.grid
    data = {
        "name": scenario.name,
        "width": g.width,
        "height": g.height,
        "start": list(scenario.start),
        "goal": list(scenario.goal),
        "cells": [[0 if cell.walkable else BLOCK for cell in row] for row in g.cells],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


# ---------- Generators ----------
def random_grid(width: int, height: int, obstacle_ratio: float = DEFAULT_OBSTACLE_RATIO,
                rng: Optional[random.Random] = None) -> Grid:
    """Each cell independently blocked with probability obstacle_ratio."""
    rng = rng or random.Random()
    return Grid.from_rows([[rng.random() >= obstacle_ratio for _ in range(width)]
                           for _ in range(height)])


def sample_grid_with_route(size: int, start: Cell, end: Cell,
                           algorithm: Union[str, Algorithm] = Algorithm.ASTAR,
                           obstacle_ratio: float = DEFAULT_OBSTACLE_RATIO,
                           rng: Optional[random.Random] = None) -> Grid:
    """
    Square grid that keeps at least one route from start to end:
    the route is planned on an empty floor first and obstacles are only
    scattered on cells off it.
    """
    rng = rng or random.Random()
    grid = Grid.blank(size, size)
    keep = set(find_path(grid, start, end, algorithm)) | {tuple(start), tuple(end)}
    for y in range(size):
        for x in range(size):
            if (x, y) not in keep and rng.random() < obstacle_ratio:
                grid.set_walkable((x, y), False)
    return grid


__all__ = [
    "Scenario",
    "load_map",
    "save_map",
    "random_grid",
    "sample_grid_with_route",
]
