"""Cut drawing rendering for layout groups.

Renders a :class:`CutPathResult` as a self-contained SVG document in
centimeters: a light bounding rectangle the size of the stock, then one
vertical line per merged stroke.
"""

from __future__ import annotations

from typing import Sequence

from kumiko.domain.constants import GRID_CELL_HEIGHT
from kumiko.domain.entities import Group
from kumiko.domain.value_objects import DesignStrip, ExportPass
from kumiko.infrastructure.cut_paths import CutPathResult, SegmentKind, build_group_cut_paths

MM_PER_CM = 10.0


def mm_to_cm(value: float) -> float:
    return value / MM_PER_CM


class CutDiagramRenderer:
    """Renders cut drawings in SVG format.

    Attributes:
        cut_stroke: Stroke color for profile cuts.
        notch_stroke: Stroke color for notches.
        bounding_stroke: Stroke color for the stock outline.
        bounding_stroke_width: Outline stroke width in mm.
    """

    def __init__(
        self,
        cut_stroke: str = "#000000",  # Black
        notch_stroke: str = "#808080",  # Gray
        bounding_stroke: str = "#E6E6E6",  # Light gray
        bounding_stroke_width: float = 0.5,
    ) -> None:
        self.cut_stroke = cut_stroke
        self.notch_stroke = notch_stroke
        self.bounding_stroke = bounding_stroke
        self.bounding_stroke_width = bounding_stroke_width

    def render_svg(self, result: CutPathResult) -> str:
        """Generate the SVG document for one group's strokes.

        Args:
            result: Merged strokes and extents.

        Returns:
            SVG string. Sizes and coordinates are centimeters with three
            decimals; y is measured from the first occupied row.
        """
        width_mm = result.width or 100.0
        height_mm = result.height or 100.0
        width_cm = mm_to_cm(width_mm)
        height_cm = mm_to_cm(height_mm)

        parts = [
            '<?xml version="1.0" encoding="utf-8"?>',
            (
                '<svg xmlns="http://www.w3.org/2000/svg" '
                'xmlns:xlink="http://www.w3.org/1999/xlink" '
                f'width="{width_cm:.3f}cm" height="{height_cm:.3f}cm" '
                'version="1.1" x="0cm" y="0cm" '
                f'viewBox="0 0 {width_cm:.3f} {height_cm:.3f}" xml:space="preserve">'
            ),
            (
                f'  <rect x="0" y="0" width="{mm_to_cm(result.stock_length):.3f}" '
                f'height="{mm_to_cm(result.height):.3f}" fill="none" '
                f'stroke="{self.bounding_stroke}" '
                f'stroke-width="{mm_to_cm(self.bounding_stroke_width):.3f}" />'
            ),
        ]

        for segment in result.segments:
            stroke = self.cut_stroke if segment.kind == SegmentKind.CUT else self.notch_stroke
            x_cm = mm_to_cm(segment.x)
            y1_cm = mm_to_cm(segment.y1 - result.min_y)
            y2_cm = mm_to_cm(segment.y2 - result.min_y)
            parts.append(
                f'  <line x1="{x_cm:.3f}" y1="{y1_cm:.3f}" x2="{x_cm:.3f}" y2="{y2_cm:.3f}" '
                f'stroke="{stroke}" stroke-linecap="round" stroke-linejoin="round" />'
            )

        parts.append("</svg>")
        return "\n".join(parts)


def generate_group_svg(
    group: Group | None,
    strips: Sequence[DesignStrip],
    bit_size: float,
    stock_length: float,
    export_pass: ExportPass | str = ExportPass.ALL,
    flip: bool = False,
    row_height: float = GRID_CELL_HEIGHT,
    renderer: CutDiagramRenderer | None = None,
) -> str | None:
    """Render a group's cut drawing, or None when there is nothing to cut."""
    result = build_group_cut_paths(
        group,
        strips,
        bit_size=bit_size,
        stock_length=stock_length,
        export_pass=export_pass,
        flip=flip,
        row_height=row_height,
    )
    if result is None:
        return None
    return (renderer or CutDiagramRenderer()).render_svg(result)
