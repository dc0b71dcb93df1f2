"""JSON cut sheet exporter.

Exports, per group:
- the design parameters used for the cut
- every distinct strip placed in the group with its notches
- the kerf-adjusted rows and their occupied lengths
- placement warnings (rows running past the stock)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from kumiko.infrastructure.cut_paths import analyze_group_passes
from kumiko.infrastructure.exporters.base import ExporterRegistry
from kumiko.infrastructure.row_packing import KerfRowPacker, RowPackingConfig

if TYPE_CHECKING:
    from kumiko.contracts.dtos import GroupExportJob
    from kumiko.domain.value_objects import DesignStrip


logger = logging.getLogger(__name__)


# Current schema version for the JSON cut sheet
SCHEMA_VERSION = "1.0"


@ExporterRegistry.register("json")
class JsonCutSheetExporter:
    """JSON exporter with strips, notches and packed rows of one group.

    Attributes:
        format_name: "json"
        file_extension: "json"
        per_pass: False; the sheet lists both faces.
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"
    per_pass: ClassVar[bool] = False

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, job: GroupExportJob, path: Path) -> bool:
        content = self.export_string(job)
        if content is None:
            return False
        Path(path).write_text(content, encoding="utf-8")
        logger.info(f"Exported JSON cut sheet to {path}")
        return True

    def export_string(self, job: GroupExportJob) -> str | None:
        if not job.group.pieces:
            return None
        data = self._build_output(job)
        return json.dumps(data, indent=self.indent)

    def _build_output(self, job: GroupExportJob) -> dict[str, Any]:
        params = job.output.params
        strips = job.output.strips
        packer = KerfRowPacker(
            RowPackingConfig(bit_size=params.bit_size, stock_length=params.stock_length)
        )
        packed = packer.pack(job.group, strips)
        passes = analyze_group_passes(job.group, strips)

        placed_ids = {piece.line_id for piece in job.group.pieces.values()}
        placed_strips: dict[str, DesignStrip] = {}
        for strip in strips:
            if strip.id in placed_ids:
                placed_strips.setdefault(strip.id, strip)

        return {
            "schema_version": SCHEMA_VERSION,
            "group": {"id": job.group.id, "name": job.group.name},
            "parameters": {
                "units": params.units.value,
                "bit_size": params.bit_size,
                "cut_depth": params.cut_depth,
                "half_cut_depth": params.half_cut_depth,
                "grid_cell_size": params.grid_cell_size,
                "stock_length": params.stock_length,
            },
            "passes": {
                "has_top_notches": passes.has_top,
                "has_bottom_notches": passes.has_bottom,
                "double_sided": passes.is_double_sided,
            },
            "strips": [self._strip_to_dict(strip) for strip in placed_strips.values()],
            "rows": [
                {
                    "index": row_index,
                    "length": packed.row_lengths[row_index],
                    "pieces": [
                        {"id": piece.id, "strip_id": piece.line_id, "x": round(piece.x, 3)}
                        for piece in pieces
                    ],
                }
                for row_index, pieces in packed.rows.items()
            ],
            "total_strip_length": round(packed.total_strip_length, 3),
            "warnings": [
                f"Piece {o.piece_id} on row {o.row_index} ends at {o.end:.1f} mm, "
                f"past the {params.stock_length:.1f} mm stock"
                for o in packed.overflows
            ]
            + [f"Piece {piece_id} references an unknown strip" for piece_id in packed.orphaned_piece_ids],
        }

    def _strip_to_dict(self, strip: DesignStrip) -> dict[str, Any]:
        return {
            "id": strip.id,
            "display_code": strip.display_code,
            "length": round(strip.length_mm, 3),
            "notches": [
                {
                    "dist": round(notch.dist, 3),
                    "face": "top" if notch.from_top else "bottom",
                }
                for notch in strip.notches
            ],
        }
