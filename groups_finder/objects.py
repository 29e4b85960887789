"""
Connected group detection over arbitrary grids.

Groups are found with a flood fill driven by an explicit work list, so large
regions (a fully opaque image is one giant group) never hit the interpreter's
recursion limit. Pixels are popped in the same order a recursive fill would
visit them, so ``positions`` keep recursive pre-order.

Two policies are configurable through :class:`FinderOptions`:

* ``equivalence="seed"`` compares every candidate against the value that
  seeded the group. Values that are each similar to their neighbour but not
  to the seed are not merged. ``"chain"`` compares a candidate against the
  member it was reached from instead.
* ``mark_rejected=True`` marks a valued neighbour that failed the equivalence
  test as visited, which keeps it from ever seeding its own group. The
  default leaves it free to seed a later group.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List, Optional, Set, Tuple

import numpy as np

from .grid import Grid
from .types import FinderOptions, GroupingOutcome, Group, Point

logger = logging.getLogger("groups_finder.objects")
logger.addHandler(logging.NullHandler())

# Neighbour offsets (dx, dy) in visiting order.
ORTHOGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def neighbour_offsets(walk_diagonally: bool) -> Tuple[Tuple[int, int], ...]:
    """Return the offsets of the 8-neighbourhood, or the 4-neighbourhood."""
    if walk_diagonally:
        return ORTHOGONAL_OFFSETS + DIAGONAL_OFFSETS
    return ORTHOGONAL_OFFSETS


def flood_fill(
    grid: Grid,
    start_x: int,
    start_y: int,
    start_value: Any,
    visited: np.ndarray,
    options: FinderOptions,
) -> Group:
    """Collect the group seeded at ``(start_x, start_y)``.

    ``visited`` is a boolean array of shape ``(height, width)`` shared by all
    fills of one call; members and touched holes are marked in it.

    The work list holds cells packed as ``y * width + x``. Reference values
    are only stacked alongside in chain mode, since in seed mode every
    candidate is compared against ``start_value``.
    """
    width, height = grid.width, grid.height
    # reversed so the first offset is popped first
    offsets = tuple(reversed(neighbour_offsets(options.walk_diagonally)))
    chained = options.chained
    store_positions = options.store_positions
    mark_rejected = options.mark_rejected
    equivalent = grid.equivalent
    value_at = grid.value_at

    rejected: Set[int] = set()
    positions: List[Point] = []
    count = 0
    min_x = min_y = sys.maxsize
    max_x = max_y = -sys.maxsize

    stack: List[int] = [start_y * width + start_x]
    references: List[Any] = [start_value] if chained else []
    reference = start_value
    while stack:
        index = stack.pop()
        if chained:
            reference = references.pop()
        y, x = divmod(index, width)
        if visited[y, x] or index in rejected:
            continue

        value = value_at(x, y)
        if value is None:
            visited[y, x] = True
            continue
        if not equivalent(value, reference):
            if mark_rejected:
                visited[y, x] = True
            elif not chained:
                # same seed for the whole fill, so the answer cannot change
                rejected.add(index)
            continue

        visited[y, x] = True
        count += 1
        if store_positions:
            positions.append(Point(x, y))
        if x < min_x:
            min_x = x
        if y < min_y:
            min_y = y
        if x > max_x:
            max_x = x
        if y > max_y:
            max_y = y

        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and not visited[ny, nx]:
                neighbour = ny * width + nx
                if neighbour in rejected:
                    continue
                stack.append(neighbour)
                if chained:
                    references.append(value)

    return Group(
        top_left=Point(min_x, min_y),
        bottom_right=Point(max_x, max_y),
        positions_count=count,
        positions=tuple(positions),
        value=start_value,
    )


def collect_groups(grid: Grid, options: Optional[FinderOptions] = None) -> GroupingOutcome:
    """Find groups in ``grid`` and report whether the results limit stopped the scan.

    Cells are scanned column by column (x ascending, then y ascending) and each
    unvisited, non-hole cell seeds one group. Groups are returned in discovery
    order.
    """
    options = options or FinderOptions()
    width, height = grid.width, grid.height
    visited = np.zeros((height, width), dtype=bool)
    limit = options.limit_results_count
    outcome = GroupingOutcome()

    for x in range(width):
        for y in range(height):
            if visited[y, x]:
                continue
            value = grid.value_at(x, y)
            if value is None:
                continue

            group = flood_fill(grid, x, y, value, visited, options)
            outcome.groups.append(group)
            logger.debug(
                "group_found index=%d seed=(%d, %d) size=%d rect=%s",
                len(outcome.groups) - 1,
                x,
                y,
                group.positions_count,
                tuple(group.bounding_rectangle),
            )

            if limit and len(outcome.groups) > limit:
                logger.warning(
                    "results limit exceeded: %d groups found, limit is %d",
                    len(outcome.groups),
                    limit,
                )
                outcome.limit_exceeded = True
                return outcome

    logger.debug("grid %dx%d: %d groups", width, height, len(outcome.groups))
    return outcome


def find_groups(grid: Grid, options: Optional[FinderOptions] = None) -> List[Group]:
    """Find and return all groups in ``grid``.

    Raises
    ------
    ResultsLimitExceeded
        If ``options.limit_results_count`` is positive and more groups are
        found. The exception's ``results`` hold the groups found so far.
    """
    return collect_groups(grid, options).unwrap()


__all__ = [
    "ORTHOGONAL_OFFSETS",
    "DIAGONAL_OFFSETS",
    "neighbour_offsets",
    "flood_fill",
    "collect_groups",
    "find_groups",
]
