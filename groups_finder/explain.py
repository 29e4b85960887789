"""Human readable summaries of grouping results."""
# [S:OBS v1] telemetry=describe_groups pass

from __future__ import annotations

from typing import List, Sequence

from .types import Group


def describe_group(index: int, group: Group) -> str:
    rect = group.bounding_rectangle
    line = (
        f"#{index}: {group.positions_count} cells, "
        f"rect x={rect.x} y={rect.y} w={rect.width} h={rect.height}"
    )
    if group.value is not None:
        line += f", value={group.value}"
    return line


def describe_groups(groups: Sequence[Group], max_lines: int = 10, limit_exceeded: bool = False) -> str:
    """Return a short report of ``groups``, listing the largest first."""

    if not groups:
        return "No groups found."

    lines: List[str] = [f"Groups: {len(groups)}"]
    if limit_exceeded:
        lines.append("Results limit exceeded, groups are partial.")
    total = sum(g.positions_count for g in groups)
    lines.append(f"Cells grouped: {total}")

    ranked = sorted(enumerate(groups), key=lambda item: (-item[1].positions_count, item[0]))
    for index, group in ranked[:max_lines]:
        lines.append(describe_group(index, group))
    if len(groups) > max_lines:
        lines.append(f"... {len(groups) - max_lines} more")
    return "\n".join(lines)


__all__ = ["describe_group", "describe_groups"]
