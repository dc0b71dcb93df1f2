"""Intersection resolution: one canonical notch point per grid coordinate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from ..geometry import find_intersection, is_point_on_line_interior
from ..value_objects import Intersection, Line, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Candidate:
    id: str
    line1: Line
    line2: Line
    point: Point
    is_crossing: bool

    @property
    def rank(self) -> tuple[bool, str]:
        # Crossings sort before touches, then lowest composite id wins.
        return (not self.is_crossing, self.id)


def intersection_id(line1_id: str, line2_id: str) -> str:
    """Deterministic intersection id for an ordered line pair."""
    return f"int_{line1_id}_{line2_id}"


def default_line1_over(line1: Line, line2: Line) -> bool:
    """Default "line1 is on top" flag for a pair.

    Horizontal over vertical: a horizontal line1 crossing a vertical line2
    sits on top, and a vertical line1 crossing a horizontal line2 sits
    underneath. Every other combination defaults to line1 on top.
    """
    if line1.is_horizontal and line2.is_vertical:
        return True
    if line1.is_vertical and line2.is_horizontal:
        return False
    return True


def compute_intersections(
    lines: Mapping[str, Line],
    overrides: Mapping[str, bool] | None = None,
) -> dict[str, Intersection]:
    """Compute the unique intersections of a normalized line set.

    Every unordered pair of lines is intersected. When several pairs meet
    at the same grid coordinate only one Intersection is kept: a pair that
    genuinely crosses (the point is interior to both lines) is preferred
    over pairs that merely touch, and remaining ties go to the smallest
    composite id. Within a pair, line1 precedes line2 in ``lines`` order.

    Args:
        lines: Normalized lines keyed by id, in insertion order.
        overrides: Persisted ``line1_over`` choices keyed by intersection
            id. An entry replaces the orientation heuristic.

    Returns:
        Intersections keyed by id, ordered by first discovery of their
        coordinate.
    """
    overrides = overrides or {}
    line_list = list(lines.values())

    by_coordinate: dict[tuple[float, float], list[_Candidate]] = {}
    for i, line1 in enumerate(line_list):
        for line2 in line_list[i + 1 :]:
            point = find_intersection(line1, line2)
            if point is None:
                continue
            candidate = _Candidate(
                id=intersection_id(line1.id, line2.id),
                line1=line1,
                line2=line2,
                point=point,
                is_crossing=(
                    is_point_on_line_interior(point.x, point.y, line1)
                    and is_point_on_line_interior(point.x, point.y, line2)
                ),
            )
            by_coordinate.setdefault((point.x, point.y), []).append(candidate)

    intersections: dict[str, Intersection] = {}
    for candidates in by_coordinate.values():
        chosen = min(candidates, key=lambda c: c.rank)
        line1_over = overrides.get(
            chosen.id, default_line1_over(chosen.line1, chosen.line2)
        )
        intersections[chosen.id] = Intersection(
            id=chosen.id,
            x=chosen.point.x,
            y=chosen.point.y,
            line1_id=chosen.line1.id,
            line2_id=chosen.line2.id,
            line1_over=line1_over,
        )
        if len(candidates) > 1:
            logger.debug(
                f"{len(candidates)} line pairs meet at ({chosen.point.x}, {chosen.point.y}); "
                f"kept {chosen.id}"
            )

    return intersections


def toggle_intersection(
    intersections: Mapping[str, Intersection],
    overrides: Mapping[str, bool],
    target_id: str,
) -> dict[str, bool]:
    """Return a new override map with one intersection's stacking inverted.

    Unknown ids leave the overrides unchanged.
    """
    updated = dict(overrides)
    intersection = intersections.get(target_id)
    if intersection is None:
        return updated
    updated[target_id] = not intersection.line1_over
    return updated


def prune_overrides(
    overrides: Mapping[str, bool],
    intersections: Mapping[str, Intersection],
) -> dict[str, bool]:
    """Drop overrides whose ids no longer name a current intersection."""
    return {key: value for key, value in overrides.items() if key in intersections}
