"""DXF format exporter for group cut drawings.

Generates 2D DXF files (R2010 format) for CNC routers and laser cutters.
Profile cuts and notches go on separate layers so the machine can use a
different depth for each.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf
from ezdxf import units as dxf_units

from kumiko.domain.constants import MM_TO_INCH
from kumiko.infrastructure.cut_paths import CutPathResult, SegmentKind, build_group_cut_paths
from kumiko.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from kumiko.contracts.dtos import GroupExportJob


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "STOCK": {"color": 9},  # Light gray - board outline
    "CUTS": {"color": 7},  # White - through cuts
    "NOTCHES": {"color": 8},  # Gray - half-depth notches
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports group cut drawings to DXF.

    The drawing uses the same strokes as the SVG export, with y pointing
    up and the first occupied row at the top.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
        per_pass: One drawing per manufacturing pass.
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"
    per_pass: ClassVar[bool] = True

    def __init__(self, units: str = "mm", include_stock_outline: bool = True) -> None:
        """Initialize the DXF exporter.

        Args:
            units: Output units - "mm" or "inches".
            include_stock_outline: Draw the stock rectangle on the STOCK layer.
        """
        if units not in ("mm", "inches"):
            raise ValueError(f"Invalid units: {units}. Must be 'mm' or 'inches'")
        self.units = units
        self.scale = 1.0 if units == "mm" else MM_TO_INCH
        self.include_stock_outline = include_stock_outline

    def export(self, job: GroupExportJob, path: Path) -> bool:
        """Export a group to a DXF file.

        Returns:
            False when the pass has nothing to cut.
        """
        result = self._cut_paths(job)
        if result is None:
            return False
        doc = self._create_document()
        self._draw(doc.modelspace(), result)
        doc.saveas(path)
        logger.info(f"Exported DXF to {path}")
        return True

    def export_string(self, job: GroupExportJob) -> str | None:
        """Export a group as DXF text, or None when there is nothing to cut."""
        result = self._cut_paths(job)
        if result is None:
            return None

        doc = self._create_document()
        self._draw(doc.modelspace(), result)

        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def _cut_paths(self, job: GroupExportJob) -> CutPathResult | None:
        params = job.output.params
        return build_group_cut_paths(
            job.group,
            job.output.strips,
            bit_size=params.bit_size,
            stock_length=params.stock_length,
            export_pass=job.export_pass,
            flip=job.flip,
        )

    def _create_document(self) -> Drawing:
        """Create a new DXF document with layers and units configured."""
        doc = ezdxf.new("R2010")
        doc.units = dxf_units.MM if self.units == "mm" else dxf_units.IN
        for name, props in LAYERS.items():
            doc.layers.add(name, color=props["color"])
        return doc

    def _draw(self, msp: Modelspace, result: CutPathResult) -> None:
        height = result.height * self.scale

        if self.include_stock_outline:
            width = result.stock_length * self.scale
            points = [(0, 0), (width, 0), (width, height), (0, height), (0, 0)]
            msp.add_lwpolyline(points, dxfattribs={"layer": "STOCK"})

        for segment in result.segments:
            layer = "CUTS" if segment.kind == SegmentKind.CUT else "NOTCHES"
            x = segment.x * self.scale
            top = height - (segment.y1 - result.min_y) * self.scale
            bottom = height - (segment.y2 - result.min_y) * self.scale
            msp.add_line((x, top), (x, bottom), dxfattribs={"layer": layer})
