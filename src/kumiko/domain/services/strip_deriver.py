"""Strip derivation: physical notched strips from grid lines.

Each grid Line becomes one DesignStrip. Intersections on the line are
classified as

- butts: the line ends on another line that continues through the point,
  so the strip end is trimmed by half the bit width
- touches: the other line ends on this one (a T-joint seen from the
  through strip), or both lines end at the point; nothing is cut
- crossings: interior on both lines, producing a notch

The strip id is derived from its length and notch pattern so identical
strips share an id regardless of drawing direction or which face is up.
"""

from __future__ import annotations

import hashlib
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from ..constants import DEFAULT_BIT_SIZE, EDGE_NOTCH_EPS, MIN_STRIP_LENGTH_MM
from ..geometry import is_point_on_line_interior
from ..value_objects import DesignStrip, Intersection, Line, Notch, Piece

logger = logging.getLogger(__name__)

DISPLAY_CODE_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DISPLAY_CODE_LENGTH = 4


@dataclass
class _StripEnds:
    """Butt flags and notch candidates gathered for one line."""

    butt_start: bool = False
    butt_end: bool = False
    notches: list[Notch] = field(default_factory=list)


@dataclass(frozen=True)
class StripBankEntry:
    """One distinct strip with how many are needed and placed.

    Attributes:
        strip: Representative strip (first one derived).
        needed_count: Number of design lines producing this strip.
        placed_count: Number of pieces referencing the strip id.
        source_line_ids: Grid lines that produce this strip.
    """

    strip: DesignStrip
    needed_count: int
    placed_count: int
    source_line_ids: tuple[str, ...]

    @property
    def all_placed(self) -> bool:
        return self.placed_count >= self.needed_count

    @property
    def prefers_flip(self) -> bool:
        """True when most notches are on the bottom face."""
        bottom = sum(1 for n in self.strip.notches if not n.from_top)
        return bottom > len(self.strip.notches) - bottom


def compute_design_strips(
    lines: Mapping[str, Line],
    intersections: Mapping[str, Intersection],
    grid_cell_size: float,
    bit_size: float = DEFAULT_BIT_SIZE,
) -> list[DesignStrip]:
    """Derive the physical strips for a line set.

    Args:
        lines: Normalized lines keyed by id.
        intersections: Resolved intersections keyed by id.
        grid_cell_size: Physical size of one grid cell in millimeters.
        bit_size: Cutting tool diameter in millimeters; butt joints trim
            half of it from the strip end.

    Returns:
        Strips in line order. Strips of 1 mm or less are dropped.
    """
    strips: list[DesignStrip] = []
    half_bit = bit_size / 2

    for line in lines.values():
        dx_mm = (line.x2 - line.x1) * grid_cell_size
        dy_mm = (line.y2 - line.y1) * grid_cell_size
        raw_length = math.hypot(dx_mm, dy_mm)

        ends = _classify_intersections(line, lines, intersections, raw_length, grid_cell_size)

        trim_start = half_bit if ends.butt_start else 0.0
        trim_end = half_bit if ends.butt_end else 0.0
        length = raw_length - trim_start - trim_end

        if length <= MIN_STRIP_LENGTH_MM:
            logger.debug(f"Dropping degenerate strip for line {line.id} ({length:.3f} mm)")
            continue

        notches: list[Notch] = []
        for notch in ends.notches:
            dist = notch.dist - trim_start
            if dist < EDGE_NOTCH_EPS or dist > length - EDGE_NOTCH_EPS:
                continue
            notches.append(
                Notch(
                    id=notch.id,
                    other_line_id=notch.other_line_id,
                    dist=dist,
                    from_top=notch.from_top,
                )
            )
        notches.sort(key=lambda n: n.dist)

        strip_id = canonical_strip_id(length, notches)
        strips.append(
            DesignStrip(
                id=strip_id,
                x1=line.x1,
                y1=line.y1,
                x2=line.x2,
                y2=line.y2,
                length_mm=length,
                notches=tuple(notches),
                source_line_id=line.id,
                display_code=display_code_for(strip_id),
            )
        )

    logger.debug(f"Derived {len(strips)} strips from {len(lines)} lines")
    return strips


def _classify_intersections(
    line: Line,
    lines: Mapping[str, Line],
    intersections: Mapping[str, Intersection],
    length: float,
    grid_cell_size: float,
) -> _StripEnds:
    # Butts come from the line set, not from the pair kept for the point.
    ends = _StripEnds(
        butt_start=_ends_on_through_line(line, line.x1, line.y1, lines),
        butt_end=_ends_on_through_line(line, line.x2, line.y2, lines),
    )

    for intersection in intersections.values():
        if not intersection.involves(line.id):
            continue

        dist = math.hypot(
            (intersection.x - line.x1) * grid_cell_size,
            (intersection.y - line.y1) * grid_cell_size,
        )
        if dist < EDGE_NOTCH_EPS or abs(dist - length) < EDGE_NOTCH_EPS:
            continue

        other_id = intersection.other_line_id(line.id)
        other = lines.get(other_id)
        if other is not None and other.has_endpoint(intersection.x, intersection.y):
            continue

        is_line1 = intersection.line1_id == line.id
        ends.notches.append(
            Notch(
                id=f"{intersection.id}_{line.id}",
                other_line_id=other_id,
                dist=dist,
                from_top=intersection.line1_over != is_line1,
            )
        )

    return ends


def _ends_on_through_line(line: Line, x: float, y: float, lines: Mapping[str, Line]) -> bool:
    """True when another line continues through the end point (x, y)."""
    return any(
        other.id != line.id and is_point_on_line_interior(x, y, other)
        for other in lines.values()
    )


def _notch_pattern(
    length: float, notches: Sequence[Notch], reverse: bool, flip: bool
) -> str:
    entries = sorted(
        (length - n.dist if reverse else n.dist, n.from_top != flip) for n in notches
    )
    return "|".join(f"{dist:.2f}{'T' if top else 'B'}" for dist, top in entries)


def strip_config_key(length: float, notches: Sequence[Notch]) -> str:
    """Canonical key for a strip's length and notch layout.

    The notch pattern is written for all four ways the physical strip can
    be presented (either end first, either face up) and the smallest
    string is kept.
    """
    pattern = min(
        _notch_pattern(length, notches, reverse, flip)
        for reverse in (False, True)
        for flip in (False, True)
    )
    return f"{length:.2f}_{pattern}"


def get_strip_config_key(strip: DesignStrip) -> str:
    """Grouping key used by the strip bank."""
    return strip_config_key(strip.length_mm, strip.notches)


def canonical_strip_id(length: float, notches: Sequence[Notch]) -> str:
    """Geometry-derived strip id."""
    return f"strip_{strip_config_key(length, notches)}"


def display_code_for(strip_id: str) -> str:
    """Short, stable base-36 label for a strip id."""
    value = int(hashlib.md5(strip_id.encode()).hexdigest()[:8], 16)
    value %= len(DISPLAY_CODE_ALPHABET) ** DISPLAY_CODE_LENGTH
    chars: list[str] = []
    for _ in range(DISPLAY_CODE_LENGTH):
        value, remainder = divmod(value, len(DISPLAY_CODE_ALPHABET))
        chars.append(DISPLAY_CODE_ALPHABET[remainder])
    return "".join(reversed(chars))


def line_labels(strips: Iterable[DesignStrip]) -> dict[str, str]:
    """Map each source line id to the display code of its strip."""
    return {strip.source_line_id: strip.display_code for strip in strips}


def build_strip_bank(
    strips: Sequence[DesignStrip],
    pieces: Iterable[Piece] = (),
) -> list[StripBankEntry]:
    """Collapse identical strips into bank entries.

    Args:
        strips: Derived strips.
        pieces: Pieces already placed, used for the placed counts.

    Returns:
        One entry per distinct strip id, in order of first appearance.
    """
    placed: dict[str, int] = {}
    for piece in pieces:
        placed[piece.line_id] = placed.get(piece.line_id, 0) + 1

    grouped: dict[str, list[DesignStrip]] = {}
    for strip in strips:
        grouped.setdefault(strip.id, []).append(strip)

    return [
        StripBankEntry(
            strip=members[0],
            needed_count=len(members),
            placed_count=placed.get(strip_id, 0),
            source_line_ids=tuple(s.source_line_id for s in members),
        )
        for strip_id, members in grouped.items()
    ]
