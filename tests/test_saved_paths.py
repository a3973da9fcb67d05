"""
Unit tests for saved route records and the plan-and-save flow.
"""

from __future__ import annotations

import json
import random

import pytest

from gridroute.app.saved_paths import (
    PathRequestError,
    SavedPath,
    SavedPathError,
    SavedPathStore,
    create_custom_path,
    record_for_session,
)
from gridroute.app.session import RouteSession
from gridroute.core.types import Grid


@pytest.fixture
def store(tmp_path) -> SavedPathStore:
    return SavedPathStore(tmp_path / "paths" / "saved.json")


def make_record(name: str, created_at: str) -> SavedPath:
    return SavedPath(name=name, start=(0, 0), end=(3, 4), algorithm="astar",
                     length=7.0, grid_size=15, created_at=created_at)


def test_empty_store_lists_nothing(store) -> None:
    assert store.list() == []
    assert store.get("missing") is None


def test_create_custom_path_plans_and_saves(store) -> None:
    saved = create_custom_path(store, "Dock to aisle 4", (0, 0), (6, 9), "dijkstra",
                               grid_size=15, rng=random.Random(7))

    assert saved is not None
    assert saved.name == "Dock to aisle 4"
    assert saved.algorithm == "dijkstra"
    assert saved.length == 15.0
    assert saved.grid_size == 15
    assert (saved.start, saved.end) == ((0, 0), (6, 9))
    assert [p.id for p in store.list()] == [saved.id]

    on_disk = json.loads(store.file.read_text(encoding="utf-8"))
    assert on_disk[0]["start"] == [0, 0]
    assert on_disk[0]["end"] == [6, 9]


def test_records_survive_a_new_store_instance(store) -> None:
    saved = store.add(make_record("A", "2026-01-01T00:00:00+00:00"))

    reopened = SavedPathStore(store.file)

    assert reopened.get(saved.id) == saved


@pytest.mark.parametrize(
    "name,start,end,message",
    [
        ("", (0, 0), (1, 1), "Please enter a path name"),
        ("   ", (0, 0), (1, 1), "Please enter a path name"),
        ("same", (2, 2), (2, 2), "Start and end points cannot be the same"),
        ("far", (0, 0), (15, 0), "Coordinates must be between 0 and 14"),
        ("neg", (-1, 0), (3, 3), "Coordinates must be between 0 and 14"),
    ],
)
def test_bad_requests_are_rejected(store, name, start, end, message) -> None:
    with pytest.raises(PathRequestError, match=message):
        create_custom_path(store, name, start, end, grid_size=15)

    assert store.list() == []


def test_list_is_newest_first(store) -> None:
    store.add(make_record("old", "2026-01-01T00:00:00+00:00"))
    store.add(make_record("new", "2026-03-01T00:00:00+00:00"))
    store.add(make_record("mid", "2026-02-01T00:00:00+00:00"))

    assert [p.name for p in store.list()] == ["new", "mid", "old"]


def test_duplicate_copies_route_under_new_name(store) -> None:
    original = store.add(make_record("Picking loop", "2026-01-01T00:00:00+00:00"))

    copy = store.duplicate(original.id)

    assert copy is not None
    assert copy.name == "Picking loop (Copy)"
    assert copy.id != original.id
    assert (copy.start, copy.end, copy.length) == (original.start, original.end, original.length)
    assert len(store.list()) == 2
    assert store.duplicate("missing") is None


def test_delete(store) -> None:
    record = store.add(make_record("gone", "2026-01-01T00:00:00+00:00"))

    assert store.delete(record.id) is True
    assert store.delete(record.id) is False
    assert store.list() == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"name": "not a list"}',
        '[{"name": "no endpoints"}]',
    ],
)
def test_damaged_file_raises_saved_path_error(store, content) -> None:
    store.file.parent.mkdir(parents=True)
    store.file.write_text(content, encoding="utf-8")

    with pytest.raises(SavedPathError, match="damaged"):
        store.list()
    with pytest.raises(SavedPathError):
        store.add(make_record("new", "2026-01-01T00:00:00+00:00"))

    assert store.file.read_text(encoding="utf-8") == content


def test_session_record_keeps_width_and_height() -> None:
    session = RouteSession(Grid.blank(7, 5))
    session.click((0, 0))
    session.click((6, 4))
    session.solve()

    record = record_for_session(session, "Aisle sweep")

    assert (record.grid_size, record.grid_height) == (7, 5)
    assert record.dimensions == "7x5"
    assert record.length == 10.0
    assert record.algorithm == "astar"


def test_records_written_before_grid_height_read_as_square(store) -> None:
    data = make_record("legacy", "2026-01-01T00:00:00+00:00").to_dict()
    del data["grid_height"]
    store.file.parent.mkdir(parents=True)
    store.file.write_text(json.dumps([data]), encoding="utf-8")

    [loaded] = store.list()

    assert loaded.grid_height is None
    assert loaded.dimensions == "15x15"
