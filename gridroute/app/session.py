# gridroute/app/session.py
"""
Host-side route state for one grid, independent of any drawing toolkit.

The core only maps (grid, start, end) to a route; everything a screen needs
on top of that lives here: which cells are the endpoints, which are drawn as
'on path', the frontier overlays while animating, and the message to show.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Set, Union

from gridroute.core.maps import random_grid
from gridroute.core.pathfinder import make_algo, parse_algorithm, path_length, route_cells
from gridroute.core.search import GridSearch
from gridroute.core.types import Algorithm, Cell, Grid, StepResult

logger = logging.getLogger(__name__)

MSG_PICK_ENDPOINTS = "Please select both start and end points"
MSG_NO_PATH = "No path found between the selected points"


class RouteSession:
    def __init__(self, grid: Grid, algorithm: Union[str, Algorithm] = Algorithm.ASTAR,
                 obstacle_ratio: float = 0.2):
        self.grid = grid
        self.algorithm = parse_algorithm(algorithm)
        self.obstacle_ratio = obstacle_ratio

        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None
        self.path: List[Cell] = []
        self.path_cells: Set[Cell] = set()
        self.open_set: Set[Cell] = set()
        self.closed_set: Set[Cell] = set()
        self.length: float = 0.0
        self.state = "Idle"           # Idle | Running | Done | No path
        self.message = ""
        self.metrics: dict = {}

        self._algo: Optional[GridSearch] = None

    # ---------- endpoint picking ----------
    def click(self, cell: Cell) -> None:
        """First walkable click sets start, second sets end, a third clears both."""
        cell = tuple(cell)
        if not self.grid.in_bounds(cell) or not self.grid.is_walkable(cell):
            return
        if self.start is None:
            self.start = cell
        elif self.end is None and cell != self.start:
            self.end = cell
        else:
            self.clear()
            return
        self._reset_search()

    def toggle_obstacle(self, cell: Cell) -> None:
        cell = tuple(cell)
        if not self.grid.in_bounds(cell) or cell in (self.start, self.end):
            return
        self.grid.set_walkable(cell, not self.grid.is_walkable(cell))
        self._reset_search()

    def select_algorithm(self, algorithm: Union[str, Algorithm]) -> None:
        self.algorithm = parse_algorithm(algorithm)
        self._reset_search()

    def clear(self) -> None:
        self.start = None
        self.end = None
        self._reset_search()

    def regenerate(self, rng: Optional[random.Random] = None) -> None:
        self.grid = random_grid(self.grid.width, self.grid.height, self.obstacle_ratio, rng)
        self.clear()

    @property
    def ready(self) -> bool:
        return self.start is not None and self.end is not None

    # ---------- searching ----------
    def step(self) -> Optional[StepResult]:
        """Advance the animated search by one expansion."""
        if not self.ready:
            self.message = MSG_PICK_ENDPOINTS
            return None
        if self._algo is None:
            self._begin()
        res = self._algo.step()
        self.open_set.update(res.opened)
        self.open_set.difference_update(res.closed)
        self.closed_set.update(res.closed)
        if res.metrics:
            self.metrics = res.metrics
        if res.status == "done":
            self._finish(res.path or [])
        elif res.status == "no_path":
            self._finish([])
        else:
            self.state = "Running"
        return res

    def solve(self) -> List[Cell]:
        """Run the selected algorithm to completion and mark the route."""
        if not self.ready:
            self.message = MSG_PICK_ENDPOINTS
            return []
        while True:
            res = self.step()
            if res is None or res.finished:
                return list(self.path)

    @property
    def finished(self) -> bool:
        return self.state in ("Done", "No path")

    # ---------- internals ----------
    def _begin(self) -> None:
        # Endpoints are always opened up before searching.
        self.grid.set_walkable(self.start, True)
        self.grid.set_walkable(self.end, True)
        self._algo = make_algo(self.algorithm)
        self._algo.init(self.grid, self.start, self.end)
        self.state = "Running"
        self.message = ""

    def _finish(self, path: List[Cell]) -> None:
        self.path = list(path)
        if not path:
            self.path_cells = set()
            self.length = 0.0
            self.state = "No path"
            self.message = MSG_NO_PATH
            return
        self.path_cells = route_cells(path, self.start, self.end)
        self.length = path_length(path)
        self.state = "Done"
        self.message = (f"Path calculated using {self.algorithm.value.upper()}! "
                        f"Length: {self.length} units")
        logger.info("%s", self.message)

    def _reset_search(self) -> None:
        self._algo = None
        self.path = []
        self.path_cells = set()
        self.open_set = set()
        self.closed_set = set()
        self.length = 0.0
        self.state = "Idle"
        self.message = ""
        self.metrics = {}
