# gridroute/core/metrics.py
from math import hypot
from typing import Any, Sequence, Tuple


def _xy(point: Any) -> Tuple[float, float]:
    if hasattr(point, "x") and hasattr(point, "y"):
        return point.x, point.y
    x, y = point
    return x, y


def path_length(path: Sequence[Any]) -> float:
    """
    Euclidean length of a polyline, rounded to 2 decimals.

    Points may be (x, y) pairs or anything with .x/.y. Segments are measured
    as straight lines, so diagonal or skipping steps are handled too.
    """
    points = list(path)
    total = 0.0
    for a, b in zip(points, points[1:]):
        (ax, ay), (bx, by) = _xy(a), _xy(b)
        total += hypot(bx - ax, by - ay)
    return round(total, 2)
