"""Typed primitives shared across the groups finder modules."""
# [S:API v1] module=types contracts=stable pass

from __future__ import annotations

from dataclasses import dataclass, field
import sys
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

SEED_EQUIVALENCE = "seed"
CHAINED_EQUIVALENCE = "chain"
EQUIVALENCE_POLICIES = (SEED_EQUIVALENCE, CHAINED_EQUIVALENCE)


class Point(NamedTuple):
    x: int
    y: int


class Rectangle(NamedTuple):
    """Axis-aligned rectangle. Width and height span extreme coordinates."""

    x: int
    y: int
    width: int
    height: int


# Corners of a group that has not accepted any member yet.
EMPTY_TOP_LEFT = Point(sys.maxsize, sys.maxsize)
EMPTY_BOTTOM_RIGHT = Point(-sys.maxsize, -sys.maxsize)


@dataclass(frozen=True)
class Group:
    """A connected group of equivalent values found in a grid."""

    top_left: Point = EMPTY_TOP_LEFT
    bottom_right: Point = EMPTY_BOTTOM_RIGHT
    positions_count: int = 0
    positions: Tuple[Point, ...] = ()
    value: Any = None

    @property
    def bounding_rectangle(self) -> Rectangle:
        """Minimal rectangle containing the group.

        Width and height are ``bottom_right - top_left``, so a single cell
        group has a zero sized rectangle.
        """
        return Rectangle(
            self.top_left.x,
            self.top_left.y,
            self.bottom_right.x - self.top_left.x,
            self.bottom_right.y - self.top_left.y,
        )

    @property
    def is_empty(self) -> bool:
        return self.positions_count == 0

    def contains(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies within the bounding rectangle."""
        return (
            self.top_left.x <= x <= self.bottom_right.x
            and self.top_left.y <= y <= self.bottom_right.y
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain structured record suitable for JSON serialisation."""
        rect = self.bounding_rectangle
        return {
            "top_left": {"x": self.top_left.x, "y": self.top_left.y},
            "bottom_right": {"x": self.bottom_right.x, "y": self.bottom_right.y},
            "bounding_rectangle": {
                "x": rect.x,
                "y": rect.y,
                "width": rect.width,
                "height": rect.height,
            },
            "positions_count": self.positions_count,
            "positions": [[p.x, p.y] for p in self.positions],
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        top_left = data["top_left"]
        bottom_right = data["bottom_right"]
        return cls(
            top_left=Point(int(top_left["x"]), int(top_left["y"])),
            bottom_right=Point(int(bottom_right["x"]), int(bottom_right["y"])),
            positions_count=int(data["positions_count"]),
            positions=tuple(Point(int(x), int(y)) for x, y in data.get("positions", [])),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class FinderOptions:
    """Per-call configuration of the grouping engine."""

    store_positions: bool = True
    walk_diagonally: bool = True
    limit_results_count: int = 0
    mark_rejected: bool = False
    equivalence: str = SEED_EQUIVALENCE

    def __post_init__(self) -> None:
        if self.limit_results_count < 0:
            raise ValueError(
                f"limit_results_count must be >= 0, got {self.limit_results_count}"
            )
        if self.equivalence not in EQUIVALENCE_POLICIES:
            raise ValueError(
                f"equivalence must be one of {EQUIVALENCE_POLICIES}, got {self.equivalence!r}"
            )

    @property
    def chained(self) -> bool:
        return self.equivalence == CHAINED_EQUIVALENCE


@dataclass
class GroupingOutcome:
    """Groups collected by one call and whether the results limit stopped it."""

    groups: List[Group] = field(default_factory=list)
    limit_exceeded: bool = False

    def unwrap(self) -> List[Group]:
        """Return the groups, raising :class:`ResultsLimitExceeded` on overflow."""

        if self.limit_exceeded:
            raise ResultsLimitExceeded(self.groups)
        return self.groups


class ResultsLimitExceeded(RuntimeError):
    """Raised when a call finds more groups than ``limit_results_count``.

    ``results`` holds every group found so far, including the one that crossed
    the limit.
    """

    def __init__(self, results: List[Group], message: Optional[str] = None) -> None:
        super().__init__(message or f"Exceeded max results count ({len(results)} groups found)")
        self.results = results
