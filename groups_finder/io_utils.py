"""
Input/output helpers for grouping results.

Groups serialise to plain dictionaries (see :meth:`Group.to_dict`) and are
written as a JSON list.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from .types import Group


def groups_to_json(groups: Iterable[Group]) -> List[Dict[str, Any]]:
    """Convert groups into JSON-ready dictionaries."""
    return [group.to_dict() for group in groups]


def save_groups(groups: Iterable[Group], out_path: str = "groups.json") -> str:
    """Write groups to a JSON file.

    Returns the path to the written file for convenience.
    """
    with open(out_path, "w") as f:
        json.dump(groups_to_json(groups), f, indent=2)
    return out_path


def load_groups(path: str) -> List[Group]:
    """Load groups previously written by :func:`save_groups`."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON list of groups in {path}")
    return [Group.from_dict(item) for item in data]
