"""
Unit tests for Grid / GridCell construction and validation.
"""

from __future__ import annotations

import pytest

from gridroute.core.errors import GridError, GridValidationError
from gridroute.core.types import Grid, GridCell


def test_blank_grid_is_all_walkable() -> None:
    grid = Grid.blank(4, 3)

    assert (grid.width, grid.height) == (4, 3)
    assert grid.obstacles() == []
    assert grid.cell_at((3, 2)) == GridCell(3, 2, True)


def test_from_strings_marks_hash_as_obstacle() -> None:
    grid = Grid.from_strings([".#.", "..#"])

    assert (grid.width, grid.height) == (3, 2)
    assert grid.obstacles() == [(1, 0), (2, 1)]
    assert not grid.is_walkable((1, 0))
    assert grid.to_strings() == [".#.", "..#"]


def test_from_rows_uses_truthiness_for_walkability() -> None:
    grid = Grid.from_rows([[True, False], [1, 0]])

    assert grid.is_walkable((0, 0))
    assert not grid.is_walkable((1, 0))
    assert grid.is_walkable((0, 1))
    assert not grid.is_walkable((1, 1))


def test_jagged_rows_are_rejected() -> None:
    with pytest.raises(GridValidationError, match="unequal length"):
        Grid.from_rows([[True, True], [True]])


@pytest.mark.parametrize("rows", [[], [[]]])
def test_empty_grid_is_rejected(rows) -> None:
    with pytest.raises(GridValidationError):
        Grid.from_rows(rows)


def test_non_positive_dimensions_are_rejected() -> None:
    with pytest.raises(GridValidationError):
        Grid.blank(0, 3)
    with pytest.raises(GridValidationError):
        Grid.blank(3, -1)


def test_height_must_match_row_count() -> None:
    cells = [[GridCell(0, 0)]]
    with pytest.raises(GridValidationError):
        Grid(1, 2, cells)


def test_validation_errors_are_value_errors() -> None:
    assert issubclass(GridValidationError, GridError)
    assert issubclass(GridValidationError, ValueError)


def test_in_bounds() -> None:
    grid = Grid.blank(3, 2)

    assert grid.in_bounds((0, 0))
    assert grid.in_bounds((2, 1))
    assert not grid.in_bounds((3, 0))
    assert not grid.in_bounds((0, 2))
    assert not grid.in_bounds((-1, 0))


def test_set_walkable_and_copy_are_independent() -> None:
    grid = Grid.blank(3, 3)
    twin = grid.copy()

    grid.set_walkable((1, 1), False)

    assert not grid.is_walkable((1, 1))
    assert twin.is_walkable((1, 1))


def test_set_walkable_out_of_bounds() -> None:
    grid = Grid.blank(2, 2)
    with pytest.raises(GridValidationError, match="out of bounds"):
        grid.set_walkable((2, 0), False)
