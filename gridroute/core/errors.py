# gridroute/core/errors.py
"""Faults raised by the core. "No path" is never one of them: that is an empty list."""


class GridError(ValueError):
    """Base class for invalid pathfinding input."""


class GridValidationError(GridError):
    """Empty or jagged grid, or a coordinate outside it."""


class UnknownAlgorithmError(GridError):
    """Algorithm selector is neither A* nor Dijkstra."""


class MapFormatError(GridError):
    """A map file is missing keys or holds values of the wrong shape."""
