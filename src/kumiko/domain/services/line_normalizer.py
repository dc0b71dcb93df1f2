"""Line normalization: merge collinear touching or overlapping segments.

Lines are grouped per infinite line:

- horizontal lines keyed by ``y``
- vertical lines keyed by ``x``
- everything else keyed by the reduced direction ``(dir_x, dir_y)`` and the
  constant ``c`` of ``dir_x * y - dir_y * x = c``

Inside a group every segment is projected onto one parameter axis and the
resulting intervals are swept in order, merging any that overlap or touch.
Each merged interval becomes one fresh Line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable, Mapping

from ..geometry import reduce_direction, snap_to_grid
from ..value_objects import Line, new_id

logger = logging.getLogger(__name__)


@dataclass
class _LineGroup:
    """Segments sharing one infinite line, as 1D intervals on ``axis``."""

    kind: str
    axis: str
    fixed: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    c: float = 0.0
    intervals: list[tuple[float, float]] = field(default_factory=list)

    def to_coordinates(self, t: float) -> tuple[float, float]:
        """Map a parameter on the group axis back to grid coordinates."""
        if self.kind == "h":
            return t, self.fixed
        if self.kind == "v":
            return self.fixed, t
        if self.axis == "x":
            return t, snap_to_grid((self.c + self.dir_y * t) / self.dir_x)
        return snap_to_grid((self.dir_x * t - self.c) / self.dir_y), t


def normalize_lines(
    lines: Mapping[str, Line] | Iterable[Line],
    id_factory: Callable[[], str] = new_id,
) -> dict[str, Line]:
    """Return a canonical, non-overlapping line set.

    Each maximal collinear run of touching or overlapping segments is
    replaced by one Line with a freshly generated id. Degenerate inputs are
    dropped. Groups keep the order in which they were first seen and
    merged runs are emitted by ascending position along their axis.

    Args:
        lines: Current lines, as an id-keyed mapping or any iterable.
        id_factory: Generator for new line ids.

    Returns:
        Insertion-ordered mapping of new line id to Line.
    """
    source = lines.values() if isinstance(lines, Mapping) else lines

    groups: dict[Hashable, _LineGroup] = {}
    skipped = 0
    for line in source:
        if line.is_degenerate:
            skipped += 1
            continue
        key, group = _group_for(line)
        existing = groups.setdefault(key, group)
        existing.intervals.append(_interval(line, existing.axis))

    normalized: dict[str, Line] = {}
    for group in groups.values():
        for t_start, t_end in _merge_intervals(group.intervals):
            x1, y1 = group.to_coordinates(t_start)
            x2, y2 = group.to_coordinates(t_end)
            line_id = id_factory()
            normalized[line_id] = Line(id=line_id, x1=x1, y1=y1, x2=x2, y2=y2)

    logger.debug(
        f"Normalized lines into {len(normalized)} segments across {len(groups)} groups "
        f"({skipped} degenerate skipped)"
    )
    return normalized


def _group_for(line: Line) -> tuple[Hashable, _LineGroup]:
    if line.is_horizontal:
        return ("h", line.y1), _LineGroup(kind="h", axis="x", fixed=line.y1)
    if line.is_vertical:
        return ("v", line.x1), _LineGroup(kind="v", axis="y", fixed=line.x1)

    dir_x, dir_y = reduce_direction(line.x2 - line.x1, line.y2 - line.y1)
    c = dir_x * line.y1 - dir_y * line.x1
    axis = "x" if abs(line.x2 - line.x1) >= abs(line.y2 - line.y1) else "y"
    group = _LineGroup(kind="d", axis=axis, dir_x=dir_x, dir_y=dir_y, c=c)
    return ("d", dir_x, dir_y, c), group


def _interval(line: Line, axis: str) -> tuple[float, float]:
    a, b = (line.x1, line.x2) if axis == "x" else (line.y1, line.y2)
    return (a, b) if a <= b else (b, a)


def _merge_intervals(intervals: list[tuple[float, float]]) -> list[tuple[float, float]]:
    merged: list[tuple[float, float]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged
