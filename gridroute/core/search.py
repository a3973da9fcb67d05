# gridroute/core/search.py
#!/usr/bin/env python3
"""
Shared stepping machinery for the grid searches, one expansion per step().

Algorithm API used by the viewer and the session:
- init(grid, start, goal) - reset() - step() -> StepResult - run() -> path

Subclasses only decide how the frontier is keyed (_push / _pop).
Movement is 4-connected with a uniform step cost of 1.

The start and goal cells are always treated as passable, whatever the grid
says about them. The grid itself is never written to.
"""

import logging
from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Optional, Tuple

from gridroute.core.metrics import path_length
from gridroute.core.types import Cell, Grid, StepResult

logger = logging.getLogger(__name__)

STEP_COST = 1


@dataclass
class GridSearch:
    name: str = "search"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    goal_cell: Optional[Cell] = None
    open_pq: list = field(default_factory=list)
    open_set: set = field(default_factory=set)         # for overlay
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, goal: Cell) -> None:
        """Validate endpoints and seed the frontier."""
        grid.require_in_bounds(start, "start")
        grid.require_in_bounds(goal, "goal")
        self.grid = grid
        self.start = tuple(start)
        self.goal_cell = tuple(goal)
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.seq = 0

        self.g[self.start] = 0
        self._push(self.start)
        self.open_set.add(self.start)
        logger.debug("%s search %s -> %s on %dx%d grid",
                     self.name, self.start, self.goal_cell, self.grid.width, self.grid.height)

    def run(self) -> List[Cell]:
        """Step until the search finishes. Empty list when the goal is unreachable."""
        if self.grid is None:
            raise RuntimeError(f"{self.name}: init() must be called before run()")
        while True:
            res = self.step()
            if res.finished:
                return list(res.path) if res.path else []

    # -------------------- frontier (per algorithm) --------------------

    def _push(self, c: Cell) -> None:
        raise NotImplementedError

    def _pop(self) -> Tuple[int, Cell]:
        """Remove the best frontier entry, returning (g recorded in it, cell)."""
        raise NotImplementedError

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _passable(self, c: Cell) -> bool:
        return c == self.start or c == self.goal_cell or self.grid.is_walkable(c)

    def _neighbors4(self, c: Cell) -> List[Cell]:
        """Return valid 4-connected neighbors for cell c."""
        x, y = c
        candidates: List[Cell] = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
        return [n for n in candidates if self.grid.in_bounds(n) and self._passable(n)]

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = [end]
        cur = end
        while cur != self.start:
            cur = self.parent[cur]
            path.append(cur)
        path.reverse()
        return path

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion step:
          - Pop the best frontier node.
          - If goal, reconstruct and finish.
          - Else relax neighbors with uniform edge cost.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(status="done", path=path, metrics=self._metrics(path))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            logger.info("%s: no path from %s to %s (%d cells visited)",
                        self.name, self.start, self.goal_cell, len(self.closed_set))
            return StepResult(status="no_path", metrics=self._metrics())

        g_u, u = self._pop()

        # Ignore stale pops
        if g_u != self.g.get(u, inf):
            return StepResult(status="running", current=u, metrics=self._metrics())

        # Finalize u
        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            logger.debug("%s: reached %s in %d hops after %d pops",
                         self.name, u, len(path) - 1, self.popped_count)
            return StepResult(status="done", closed=[u], current=u, path=path,
                              metrics=self._metrics(path))

        opened_now: List[Cell] = []
        for v in self._neighbors4(u):
            alt = self.g[u] + STEP_COST
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                self._push(v)
                if v not in self.closed_set and v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self, path: Optional[List[Cell]] = None) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": len(path) if path else 0,
            "length": path_length(path) if path else 0.0,
        }
