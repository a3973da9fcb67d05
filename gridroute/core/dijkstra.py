# gridroute/core/dijkstra.py
#!/usr/bin/env python3

import heapq
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from gridroute.core.search import GridSearch
from gridroute.core.types import Cell


class DijkstraNode(NamedTuple):
    dist: int
    seq: int
    cell: Cell


@dataclass
class DijkstraAlgo(GridSearch):
    """
    Uniform-cost Dijkstra. Cells never pushed keep an implicit infinite
    distance; an empty heap means every remaining cell is unreachable.
    """

    name: str = "Dijkstra"

    def _push(self, c: Cell) -> None:
        heapq.heappush(self.open_pq, DijkstraNode(self.g[c], self._bump(), c))

    def _pop(self) -> Tuple[int, Cell]:
        node = heapq.heappop(self.open_pq)
        return node.dist, node.cell
