"""Draw and erase edits on the line set."""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from ..constants import ERASE_T_MAX, ERASE_T_MIN
from ..geometry import compute_line_overlaps, point_at
from ..value_objects import Line, Point, new_id
from .line_normalizer import normalize_lines

logger = logging.getLogger(__name__)


def apply_segment(
    lines: Mapping[str, Line],
    start: Point,
    end: Point,
    id_factory: Callable[[], str] = new_id,
) -> dict[str, Line]:
    """Apply a user-drawn segment to the line set.

    A segment lying on top of existing collinear lines erases the covered
    part of each of them, keeping any remnant before or after the overlap.
    Any other segment is added as a new line. The result is renormalized.

    Intersection overrides refer to line ids, so callers must discard them
    after calling this.

    Args:
        lines: Current lines keyed by id.
        start: First grid point of the segment.
        end: Second grid point of the segment.
        id_factory: Generator for new line ids.

    Returns:
        The new normalized line set. A degenerate segment returns an
        unchanged copy.
    """
    if start == end:
        return dict(lines)

    updated = dict(lines)
    overlaps = compute_line_overlaps(lines.values(), start, end)

    if overlaps:
        for overlap in overlaps:
            line = overlap.line
            del updated[line.id]

            if overlap.t_start > ERASE_T_MIN:
                cut = point_at(line, overlap.t_start)
                before_id = id_factory()
                updated[before_id] = Line(
                    id=before_id, x1=line.x1, y1=line.y1, x2=cut.x, y2=cut.y
                )

            if overlap.t_end < ERASE_T_MAX:
                cut = point_at(line, overlap.t_end)
                after_id = id_factory()
                updated[after_id] = Line(
                    id=after_id, x1=cut.x, y1=cut.y, x2=line.x2, y2=line.y2
                )
        logger.debug(f"Erased segment overlapping {len(overlaps)} line(s)")
    else:
        line_id = id_factory()
        updated[line_id] = Line(
            id=line_id, x1=start.x, y1=start.y, x2=end.x, y2=end.y
        )
        logger.debug(f"Drew new line {line_id}")

    return normalize_lines(updated, id_factory=id_factory)


def find_line_ending_at(lines: Mapping[str, Line], point: Point) -> Line | None:
    """Find the first line whose end point is ``point``."""
    for line in lines.values():
        if line.x2 == point.x and line.y2 == point.y:
            return line
    return None
