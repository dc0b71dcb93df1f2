"""Geometry kernel: pure segment math on grid coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .constants import EPSILON
from .value_objects import Line, Point


@dataclass(frozen=True)
class LineOverlap:
    """Collinear overlap of a candidate segment with an existing line.

    ``t_start`` and ``t_end`` are in the line's own parametrization,
    clamped to [0, 1] with ``t_start <= t_end``.
    """

    line: Line
    t_start: float
    t_end: float


def gcd(a: float, b: float) -> float:
    """Greatest common divisor of two integer deltas.

    gcd(0, n) is n, and gcd(0, 0) is 1 so callers can always divide by it.
    """
    x = abs(a)
    y = abs(b)
    while y != 0:
        x, y = y, x % y
    return x or 1


def reduce_direction(dx: float, dy: float) -> tuple[float, float]:
    """Reduce a direction vector to its canonical representative.

    Both components are divided by their gcd, then the sign is fixed so
    that the vector points towards +x (or +y when vertical). Opposite
    directions along the same infinite line map to the same result.
    """
    divisor = gcd(dx, dy)
    rx = dx / divisor
    ry = dy / divisor
    if rx < 0 or (rx == 0 and ry < 0):
        rx, ry = -rx, -ry
    if float(rx).is_integer() and float(ry).is_integer():
        return int(rx), int(ry)
    return rx, ry


def find_intersection(line1: Line, line2: Line) -> Point | None:
    """Intersect two segments, returning the nearest grid point.

    Parallel and collinear segments return None; collinear overlap is
    handled by :func:`collinear_overlap` instead. Touching at an endpoint
    counts as an intersection.
    """
    x1, y1, x2, y2 = line1.x1, line1.y1, line1.x2, line1.y2
    x3, y3, x4, y4 = line2.x1, line2.y1, line2.x2, line2.y2

    den = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if den == 0:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / den
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / den

    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(
            x=snap_to_grid(x1 + t * (x2 - x1)),
            y=snap_to_grid(y1 + t * (y2 - y1)),
        )
    return None


def distance_point_to_segment(point: Point, segment: Line) -> float:
    """Distance from a point to a segment.

    Perpendicular distance when the projection falls inside the segment,
    otherwise the distance to the nearer endpoint.
    """
    vx = segment.x2 - segment.x1
    vy = segment.y2 - segment.y1
    wx = point.x - segment.x1
    wy = point.y - segment.y1

    c1 = vx * wx + vy * wy
    if c1 <= 0:
        return math.hypot(point.x - segment.x1, point.y - segment.y1)

    c2 = vx * vx + vy * vy
    if c2 <= c1:
        return math.hypot(point.x - segment.x2, point.y - segment.y2)

    t = c1 / c2
    return math.hypot(point.x - (segment.x1 + t * vx), point.y - (segment.y1 + t * vy))


def is_point_on_line_interior(px: float, py: float, line: Line) -> bool:
    """Check that (px, py) lies strictly between the line's endpoints."""
    if line.has_endpoint(px, py):
        return False

    dx = line.x2 - line.x1
    dy = line.y2 - line.y1
    if dx == 0 and dy == 0:
        return False

    dpx = px - line.x1
    dpy = py - line.y1
    if dx * dpy - dy * dpx != 0:
        return False

    t = dpx / dx if abs(dx) > abs(dy) else dpy / dy
    return 0 < t < 1


def collinear_overlap(line: Line, start: Point, end: Point) -> LineOverlap | None:
    """Overlap of the segment start-end with a collinear ``line``.

    Returns None when the segment is not collinear with the line, does not
    reach it, or only touches it at a single point (overlap shorter than
    EPSILON in the line's parametrization). Touching segments are left to
    the normalizer to merge.
    """
    dx1 = line.x2 - line.x1
    dy1 = line.y2 - line.y1
    if dx1 == 0 and dy1 == 0:
        return None

    dx2 = end.x - start.x
    dy2 = end.y - start.y
    if dx1 * dy2 - dy1 * dx2 != 0:
        return None

    dxs = start.x - line.x1
    dys = start.y - line.y1
    if dx1 * dys - dy1 * dxs != 0:
        return None

    dxe = end.x - line.x1
    dye = end.y - line.y1
    if dx1 * dye - dy1 * dxe != 0:
        return None

    if abs(dx1) > abs(dy1):
        t_start, t_end = dxs / dx1, dxe / dx1
    else:
        t_start, t_end = dys / dy1, dye / dy1

    if t_start > t_end:
        t_start, t_end = t_end, t_start

    if t_end < 0 or t_start > 1:
        return None

    t_start = max(0.0, t_start)
    t_end = min(1.0, t_end)

    if t_end - t_start < EPSILON:
        return None

    return LineOverlap(line=line, t_start=t_start, t_end=t_end)


def compute_line_overlaps(
    lines: Iterable[Line], start: Point, end: Point
) -> list[LineOverlap]:
    """Collect every collinear overlap of start-end with the given lines."""
    overlaps: list[LineOverlap] = []
    for line in lines:
        overlap = collinear_overlap(line, start, end)
        if overlap is not None:
            overlaps.append(overlap)
    return overlaps


def point_at(line: Line, t: float) -> Point:
    """Point at parameter ``t`` along the line, rounded to the grid."""
    return Point(
        x=snap_to_grid(line.x1 + t * (line.x2 - line.x1)),
        y=snap_to_grid(line.y1 + t * (line.y2 - line.y1)),
    )


def snap_to_grid(value: float) -> int:
    """Round a coordinate to the nearest grid line, halves rounding up."""
    return math.floor(value + 0.5)
