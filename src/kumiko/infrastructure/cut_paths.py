"""Cut path generation for one layout group.

Pieces on each row are walked left to right with a running boundary. A
piece contributes a profile cut at the boundary and one at
``boundary + length + bit``; its notches sit at
``boundary + bit / 2 + dist``. Segments sharing an x coordinate (to three
decimals) are merged per kind so that cuts shared by adjacent rows become
single strokes.

Renderers (SVG, DXF) consume the resulting :class:`CutPathResult`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from kumiko.domain.constants import GRID_CELL_HEIGHT, SEGMENT_MERGE_EPS
from kumiko.domain.entities import Group
from kumiko.domain.value_objects import DesignStrip, ExportPass, Piece

logger = logging.getLogger(__name__)


class SegmentKind(str, Enum):
    """Kind of vertical stroke."""

    CUT = "cut"
    NOTCH = "notch"


@dataclass(frozen=True)
class CutSegment:
    """A vertical stroke at ``x`` from ``y1`` to ``y2`` (mm, y1 <= y2)."""

    x: float
    y1: float
    y2: float
    kind: SegmentKind


@dataclass(frozen=True)
class CutPathResult:
    """Merged strokes of one group and the drawing extents.

    Attributes:
        segments: Merged strokes, grouped by x in first-seen order with
            notches before cuts inside each x group.
        min_y: Top of the first occupied row in mm.
        max_y: Bottom of the last occupied row in mm.
        width: Drawing width in mm; at least the stock length.
        stock_length: Nominal stock length in mm.
    """

    segments: tuple[CutSegment, ...]
    min_y: float
    max_y: float
    width: float
    stock_length: float

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def cuts(self) -> tuple[CutSegment, ...]:
        return tuple(s for s in self.segments if s.kind == SegmentKind.CUT)

    @property
    def notches(self) -> tuple[CutSegment, ...]:
        return tuple(s for s in self.segments if s.kind == SegmentKind.NOTCH)


@dataclass(frozen=True)
class PassAnalysis:
    """Which notch faces occur among the pieces of a group."""

    has_top: bool
    has_bottom: bool

    @property
    def is_double_sided(self) -> bool:
        return self.has_top and self.has_bottom


@dataclass(frozen=True)
class PassPlan:
    """One export run of a group.

    Attributes:
        export_pass: Which cuts to include.
        flip: Treat every strip as turned over.
        suffix: File name suffix, empty for single-pass groups.
    """

    export_pass: ExportPass
    flip: bool = False
    suffix: str = ""


def _strip_index(strips: Sequence[DesignStrip]) -> dict[str, DesignStrip]:
    index: dict[str, DesignStrip] = {}
    for strip in strips:
        index.setdefault(strip.id, strip)
    return index


def build_group_cut_paths(
    group: Group | None,
    strips: Sequence[DesignStrip],
    bit_size: float,
    stock_length: float,
    export_pass: ExportPass | str = ExportPass.ALL,
    flip: bool = False,
    row_height: float = GRID_CELL_HEIGHT,
) -> CutPathResult | None:
    """Compute the merged cut and notch strokes for a group.

    Args:
        group: Group to export.
        strips: Current design strips; pieces without a strip are skipped.
        bit_size: Cutting tool diameter in mm.
        stock_length: Nominal board length in mm.
        export_pass: ``top`` keeps top notches and drops profile cuts,
            ``bottom`` keeps bottom notches, ``all`` keeps everything.
        flip: Invert every notch face before filtering.
        row_height: Height of one row in mm.

    Returns:
        The merged strokes, or None for a missing or empty group or when
        nothing is left to draw.
    """
    if group is None or not group.pieces:
        return None

    export_pass = ExportPass(export_pass)
    by_id = _strip_index(strips)

    by_x: dict[str, tuple[float, list[CutSegment]]] = {}

    def add_segment(x: float, y1: float, y2: float, kind: SegmentKind) -> None:
        key = f"{x:.3f}"
        if key not in by_x:
            by_x[key] = (x, [])
        by_x[key][1].append(CutSegment(x=x, y1=min(y1, y2), y2=max(y1, y2), kind=kind))

    rows: dict[int, list[Piece]] = {}
    for piece in group.pieces.values():
        rows.setdefault(piece.row_index, []).append(piece)

    for row_index, row_pieces in sorted(rows.items()):
        row_y1 = row_index * row_height
        row_y2 = row_y1 + row_height
        boundary = 0.0

        for piece in sorted(row_pieces, key=lambda p: p.x):
            strip = by_id.get(piece.line_id)
            if strip is None:
                logger.warning(
                    f"Group {group.id}: piece {piece.id} references unknown strip "
                    f"{piece.line_id}, skipping"
                )
                continue

            start_cut = boundary
            end_cut = boundary + strip.length_mm + bit_size

            # The top pass leaves pieces attached to the stock.
            if export_pass != ExportPass.TOP:
                add_segment(start_cut, row_y1, row_y2, SegmentKind.CUT)
                add_segment(end_cut, row_y1, row_y2, SegmentKind.CUT)

            left_face = start_cut + bit_size / 2
            for notch in strip.notches:
                is_top = notch.from_top != flip
                if export_pass == ExportPass.TOP and not is_top:
                    continue
                if export_pass == ExportPass.BOTTOM and is_top:
                    continue
                add_segment(left_face + notch.dist, row_y1, row_y2, SegmentKind.NOTCH)

            boundary = end_cut

    merged: list[CutSegment] = []
    for x, segments in by_x.values():
        for kind in (SegmentKind.NOTCH, SegmentKind.CUT):
            merged.extend(
                _merge_runs(x, [s for s in segments if s.kind == kind], kind)
            )

    if not merged:
        logger.debug(f"Group {group.id} has nothing to draw for the {export_pass.value} pass")
        return None

    row_indices = [p.row_index for p in group.pieces.values()]
    min_y = min(row_indices) * row_height
    max_y = (max(row_indices) + 1) * row_height
    width = max(max(s.x for s in merged), stock_length)

    return CutPathResult(
        segments=tuple(merged),
        min_y=min_y,
        max_y=max_y,
        width=width,
        stock_length=stock_length,
    )


def _merge_runs(x: float, segments: list[CutSegment], kind: SegmentKind) -> list[CutSegment]:
    merged: list[CutSegment] = []
    current: tuple[float, float] | None = None
    for segment in sorted(segments, key=lambda s: s.y1):
        if current is None:
            current = (segment.y1, segment.y2)
        elif segment.y1 <= current[1] + SEGMENT_MERGE_EPS:
            current = (current[0], max(current[1], segment.y2))
        else:
            merged.append(CutSegment(x=x, y1=current[0], y2=current[1], kind=kind))
            current = (segment.y1, segment.y2)
    if current is not None:
        merged.append(CutSegment(x=x, y1=current[0], y2=current[1], kind=kind))
    return merged


def analyze_group_passes(group: Group | None, strips: Sequence[DesignStrip]) -> PassAnalysis:
    """Report whether the group's pieces carry top and/or bottom notches."""
    if group is None:
        return PassAnalysis(has_top=False, has_bottom=False)

    by_id = _strip_index(strips)
    has_top = False
    has_bottom = False
    for piece in group.pieces.values():
        strip = by_id.get(piece.line_id)
        if strip is not None:
            has_top = has_top or strip.has_top_notches
            has_bottom = has_bottom or strip.has_bottom_notches
        if has_top and has_bottom:
            break
    return PassAnalysis(has_top=has_top, has_bottom=has_bottom)


def has_double_sided_strips(group: Group | None, strips: Sequence[DesignStrip]) -> bool:
    return analyze_group_passes(group, strips).is_double_sided


def plan_group_passes(group: Group | None, strips: Sequence[DesignStrip]) -> list[PassPlan]:
    """Choose the export runs for a group.

    Double-sided groups are cut as a top pass followed by a bottom pass.
    Groups with only bottom notches are flipped into one ``all`` pass.
    Everything else is a single ``all`` pass.
    """
    analysis = analyze_group_passes(group, strips)
    if analysis.is_double_sided:
        return [
            PassPlan(export_pass=ExportPass.TOP, suffix="top"),
            PassPlan(export_pass=ExportPass.BOTTOM, suffix="bottom"),
        ]
    if analysis.has_bottom:
        return [PassPlan(export_pass=ExportPass.ALL, flip=True)]
    return [PassPlan(export_pass=ExportPass.ALL)]
