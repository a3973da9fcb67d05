"""
Grid pathfinding core.

Provides:
- Grid / GridCell: rectangular walkability grid
- AStarAlgo / DijkstraAlgo: stepwise searches for animation
- find_path_astar / find_path_dijkstra / find_path: one-shot routes
- path_length: Euclidean length of a route
"""

from .errors import GridError, GridValidationError, MapFormatError, UnknownAlgorithmError
from .types import Algorithm, Cell, Grid, GridCell, StepResult
from .astar import AStarAlgo, AStarNode, manhattan
from .dijkstra import DijkstraAlgo, DijkstraNode
from .pathfinder import (
    find_path,
    find_path_astar,
    find_path_dijkstra,
    make_algo,
    parse_algorithm,
    path_length,
    route_cells,
)

__all__ = [
    "Algorithm",
    "AStarAlgo",
    "AStarNode",
    "Cell",
    "DijkstraAlgo",
    "DijkstraNode",
    "Grid",
    "GridCell",
    "GridError",
    "GridValidationError",
    "MapFormatError",
    "StepResult",
    "UnknownAlgorithmError",
    "find_path",
    "find_path_astar",
    "find_path_dijkstra",
    "make_algo",
    "manhattan",
    "parse_algorithm",
    "path_length",
    "route_cells",
]
