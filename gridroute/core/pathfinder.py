# gridroute/core/pathfinder.py
"""
One-shot entry points over the stepwise searches.

Both algorithms return the route as a list of (col, row) cells from start to
end inclusive, or an empty list when the end cannot be reached. Neither one
touches the grid it is given.
"""

from typing import Iterable, List, Set, Union

from gridroute.core.astar import AStarAlgo
from gridroute.core.dijkstra import DijkstraAlgo
from gridroute.core.errors import UnknownAlgorithmError
from gridroute.core.metrics import path_length
from gridroute.core.search import GridSearch
from gridroute.core.types import Algorithm, Cell, Grid

__all__ = [
    "find_path",
    "find_path_astar",
    "find_path_dijkstra",
    "make_algo",
    "parse_algorithm",
    "path_length",
    "route_cells",
]


def parse_algorithm(value: Union[str, Algorithm]) -> Algorithm:
    if isinstance(value, Algorithm):
        return value
    key = str(value).strip().lower()
    if key in ("a*", "a-star"):
        key = Algorithm.ASTAR.value
    try:
        return Algorithm(key)
    except ValueError:
        raise UnknownAlgorithmError(
            f"unknown algorithm {value!r}, expected one of: "
            + ", ".join(a.value for a in Algorithm)
        ) from None


def make_algo(algorithm: Union[str, Algorithm]) -> GridSearch:
    """Fresh, uninitialised search object for the selector."""
    if parse_algorithm(algorithm) is Algorithm.ASTAR:
        return AStarAlgo()
    return DijkstraAlgo()


def find_path(grid: Grid, start: Cell, end: Cell,
              algorithm: Union[str, Algorithm] = Algorithm.ASTAR) -> List[Cell]:
    algo = make_algo(algorithm)
    algo.init(grid, start, end)
    return algo.run()


def find_path_astar(grid: Grid, start: Cell, end: Cell) -> List[Cell]:
    return find_path(grid, start, end, Algorithm.ASTAR)


def find_path_dijkstra(grid: Grid, start: Cell, end: Cell) -> List[Cell]:
    return find_path(grid, start, end, Algorithm.DIJKSTRA)


def route_cells(path: Iterable[Cell], start: Cell, end: Cell) -> Set[Cell]:
    """Cells to draw as 'on path': the route minus its two endpoints."""
    start, end = tuple(start), tuple(end)
    return {tuple(c) for c in path if tuple(c) != start and tuple(c) != end}
