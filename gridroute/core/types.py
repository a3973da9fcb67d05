# gridroute/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from gridroute.core.errors import GridValidationError

Cell = Tuple[int, int]  # (col, row)

BLOCK_CHAR = "#"


class Algorithm(str, Enum):
    ASTAR = "astar"
    DIJKSTRA = "dijkstra"

    @property
    def label(self) -> str:
        return "A*" if self is Algorithm.ASTAR else "Dijkstra"


@dataclass(frozen=True)
class GridCell:
    x: int
    y: int
    walkable: bool = True

    @property
    def coord(self) -> Cell:
        return (self.x, self.y)


@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[GridCell]]        # [row][col]

    def __post_init__(self):
        if self.height <= 0 or self.width <= 0 or not self.cells:
            raise GridValidationError(
                f"grid must have at least one row and one column, got {self.width}x{self.height}"
            )
        if len(self.cells) != self.height:
            raise GridValidationError(
                f"grid has {len(self.cells)} rows but height is {self.height}"
            )
        for y, row in enumerate(self.cells):
            if len(row) != self.width:
                raise GridValidationError(
                    f"grid rows of unequal length: row {y} has {len(row)} cells, expected {self.width}"
                )

    # -------------------- construction --------------------

    @classmethod
    def blank(cls, width: int, height: int) -> "Grid":
        """Every cell walkable."""
        if width <= 0 or height <= 0:
            raise GridValidationError(f"grid dimensions must be positive, got {width}x{height}")
        cells = [[GridCell(x, y) for x in range(width)] for y in range(height)]
        return cls(width, height, cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        """Build from rows of walkability flags (truthy = walkable)."""
        if not rows or not rows[0]:
            raise GridValidationError("grid must have at least one row and one column")
        width = len(rows[0])
        cells = [[GridCell(x, y, bool(v)) for x, v in enumerate(row)] for y, row in enumerate(rows)]
        return cls(width, len(rows), cells)

    @classmethod
    def from_strings(cls, lines: Iterable[str]) -> "Grid":
        """'#' marks an obstacle, any other character is floor."""
        return cls.from_rows([[ch != BLOCK_CHAR for ch in line] for line in lines])

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, c: Cell) -> GridCell:
        x, y = c
        return self.cells[y][x]

    def is_walkable(self, c: Cell) -> bool:
        return self.cell_at(c).walkable

    def require_in_bounds(self, c: Cell, what: str = "coordinate") -> None:
        if not self.in_bounds(c):
            raise GridValidationError(
                f"{what} out of bounds: {tuple(c)} not in {self.width}x{self.height} grid"
            )

    def obstacles(self) -> List[Cell]:
        return [cell.coord for row in self.cells for cell in row if not cell.walkable]

    def to_strings(self) -> List[str]:
        return ["".join("." if cell.walkable else BLOCK_CHAR for cell in row) for row in self.cells]

    # -------------------- host-side edits --------------------

    def set_walkable(self, c: Cell, walkable: bool) -> None:
        self.require_in_bounds(c)
        x, y = c
        self.cells[y][x] = GridCell(x, y, bool(walkable))

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, [list(row) for row in self.cells])


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.status in ("done", "no_path")
