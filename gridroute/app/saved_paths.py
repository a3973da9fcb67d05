# gridroute/app/saved_paths.py
"""
Named routes the user chose to keep, stored as a JSON list on disk.

A record holds only what the planner produced plus its request: endpoints,
algorithm, computed length and grid size. The grid itself is not stored;
it is regenerated on demand.
"""

from __future__ import annotations

import json
import logging
import random
import uuid
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from gridroute.core.maps import sample_grid_with_route
from gridroute.core.pathfinder import find_path, parse_algorithm, path_length
from gridroute.core.types import Algorithm, Cell

logger = logging.getLogger(__name__)


class PathRequestError(ValueError):
    """A route request was rejected before planning."""


class SavedPathError(ValueError):
    """The saved-paths file exists but cannot be read back."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SavedPath:
    name: str
    start: Cell
    end: Cell
    algorithm: str
    length: float
    grid_size: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=_now)
    grid_height: Optional[int] = None  # None: square, grid_size rows

    @property
    def dimensions(self) -> str:
        height = self.grid_size if self.grid_height is None else self.grid_height
        return f"{self.grid_size}x{height}"

    @classmethod
    def from_dict(cls, data: dict) -> "SavedPath":
        height = data.get("grid_height")
        return cls(
            name=data["name"],
            start=tuple(data["start"]),
            end=tuple(data["end"]),
            algorithm=data["algorithm"],
            length=float(data["length"]),
            grid_size=int(data["grid_size"]),
            id=data["id"],
            created_at=data["created_at"],
            grid_height=None if height is None else int(height),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["start"] = list(self.start)
        data["end"] = list(self.end)
        return data


class SavedPathStore:
    def __init__(self, file: Union[str, Path]):
        self.file = Path(file)

    def _read(self) -> List[SavedPath]:
        if not self.file.exists():
            return []
        with open(self.file, "r", encoding="utf-8") as f:
            try:
                return [SavedPath.from_dict(d) for d in json.load(f)]
            except (ValueError, KeyError, TypeError) as ex:
                raise SavedPathError(f"{self.file.name} is damaged and cannot be read ({ex!r})") from ex

    def _write(self, paths: List[SavedPath]) -> None:
        self.file.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.file.with_suffix(self.file.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump([p.to_dict() for p in paths], f, indent=2)
        tmp.replace(self.file)

    def list(self) -> List[SavedPath]:
        """Newest first."""
        return sorted(self._read(), key=lambda p: p.created_at, reverse=True)

    def get(self, path_id: str) -> Optional[SavedPath]:
        return next((p for p in self._read() if p.id == path_id), None)

    def add(self, path: SavedPath) -> SavedPath:
        paths = self._read()
        paths.append(path)
        self._write(paths)
        logger.info("saved path %r (%s, length %s)", path.name, path.algorithm, path.length)
        return path

    def delete(self, path_id: str) -> bool:
        paths = self._read()
        kept = [p for p in paths if p.id != path_id]
        if len(kept) == len(paths):
            return False
        self._write(kept)
        return True

    def duplicate(self, path_id: str) -> Optional[SavedPath]:
        original = self.get(path_id)
        if original is None:
            return None
        copy = replace(original, name=f"{original.name} (Copy)",
                       id=uuid.uuid4().hex, created_at=_now())
        return self.add(copy)


def record_for_session(session, name: str) -> SavedPath:
    """Record the solved route of a RouteSession, keeping the grid's real width and height."""
    grid = session.grid
    return SavedPath(name=name, start=session.start, end=session.end,
                     algorithm=session.algorithm.value, length=session.length,
                     grid_size=grid.width, grid_height=grid.height)


def validate_request(name: str, start: Cell, end: Cell, grid_size: int) -> None:
    if not name or not name.strip():
        raise PathRequestError("Please enter a path name")
    if tuple(start) == tuple(end):
        raise PathRequestError("Start and end points cannot be the same")
    for v in (*start, *end):
        if not 0 <= v < grid_size:
            raise PathRequestError(f"Coordinates must be between 0 and {grid_size - 1}")


def create_custom_path(store: SavedPathStore, name: str, start: Cell, end: Cell,
                       algorithm: Union[str, Algorithm] = Algorithm.ASTAR,
                       grid_size: int = 15, obstacle_ratio: float = 0.2,
                       rng: Optional[random.Random] = None) -> Optional[SavedPath]:
    """Plan a named route on a freshly generated sample grid and keep it."""
    validate_request(name, start, end, grid_size)
    algo = parse_algorithm(algorithm)
    start, end = tuple(start), tuple(end)

    grid = sample_grid_with_route(grid_size, start, end, algo, obstacle_ratio, rng)
    grid.set_walkable(start, True)
    grid.set_walkable(end, True)

    route = find_path(grid, start, end, algo)
    if not route:
        logger.warning("no route for %r from %s to %s", name, start, end)
        return None

    return store.add(SavedPath(
        name=name.strip(),
        start=start,
        end=end,
        algorithm=algo.value,
        length=path_length(route),
        grid_size=grid_size,
    ))
