"""Tests for group serialisation and summaries."""

from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from groups_finder.explain import describe_groups
from groups_finder.grid import ArrayGrid
from groups_finder.io_utils import groups_to_json, load_groups, save_groups
from groups_finder.objects import find_groups
from groups_finder.types import Group, Point


def _groups():
    return find_groups(ArrayGrid([["A", "A", None, "B"]]))


def test_group_record_shape() -> None:
    record = groups_to_json(_groups())[0]
    assert record == {
        "top_left": {"x": 0, "y": 0},
        "bottom_right": {"x": 1, "y": 0},
        "bounding_rectangle": {"x": 0, "y": 0, "width": 1, "height": 0},
        "positions_count": 2,
        "positions": [[0, 0], [1, 0]],
        "value": "A",
    }
    json.dumps(record)


def test_save_and_load(tmp_path: Path) -> None:
    groups = _groups()
    out = save_groups(groups, str(tmp_path / "groups.json"))
    assert load_groups(out) == groups


def test_load_rejects_non_list(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"groups": []}))
    with pytest.raises(ValueError):
        load_groups(str(path))


def test_empty_group_sentinel() -> None:
    group = Group()
    assert group.is_empty
    assert group.top_left.x > group.bottom_right.x
    assert not group.contains(0, 0)
    assert Group(Point(1, 1), Point(2, 3), 1).contains(2, 3)


def test_describe_groups() -> None:
    assert describe_groups([]) == "No groups found."
    report = describe_groups(_groups(), max_lines=1, limit_exceeded=True)
    lines = report.splitlines()
    assert lines[0] == "Groups: 2"
    assert "partial" in lines[1]
    assert lines[2] == "Cells grouped: 3"
    assert lines[3].startswith("#0: 2 cells")
    assert lines[4] == "... 1 more"
