# gridroute/core/astar.py
#!/usr/bin/env python3
"""
A*, one expansion per step() for animation.

Heuristic:
- Manhattan distance, admissible and consistent for 4-connected unit-cost moves.

Tie-breaking in the PQ:
- (f, h, -g, seq, cell): lower f, then lower h, then deeper g, then FIFO by seq.
"""

import heapq
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from gridroute.core.search import GridSearch
from gridroute.core.types import Cell


class AStarNode(NamedTuple):
    f: int
    h: int
    neg_g: int
    seq: int
    cell: Cell


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarAlgo(GridSearch):
    name: str = "A*"

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.goal_cell)

    def _push(self, c: Cell) -> None:
        g = self.g[c]
        h = self._h(c)
        heapq.heappush(self.open_pq, AStarNode(g + h, h, -g, self._bump(), c))

    def _pop(self) -> Tuple[int, Cell]:
        node = heapq.heappop(self.open_pq)
        return -node.neg_g, node.cell
