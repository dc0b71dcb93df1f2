"""SVG exporter for group cut drawings.

This module provides an SVG exporter that wraps CutDiagramRenderer to
write one drawing per group and pass.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from kumiko.infrastructure.cut_diagram_renderer import CutDiagramRenderer, generate_group_svg
from kumiko.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from kumiko.contracts.dtos import GroupExportJob

logger = logging.getLogger(__name__)


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for cut drawings.

    Profile cuts are drawn black and notches gray. Groups or passes with
    nothing to cut produce no file.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
        per_pass: One drawing per manufacturing pass.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    per_pass: ClassVar[bool] = True

    def __init__(self, renderer: CutDiagramRenderer | None = None) -> None:
        self.renderer = renderer or CutDiagramRenderer()

    def export(self, job: GroupExportJob, path: Path) -> bool:
        """Write the group's drawing to ``path``.

        Returns:
            False when the pass has nothing to cut.
        """
        content = self.export_string(job)
        if content is None:
            return False
        Path(path).write_text(content, encoding="utf-8")
        logger.info(f"Exported SVG to {path}")
        return True

    def export_string(self, job: GroupExportJob) -> str | None:
        params = job.output.params
        return generate_group_svg(
            job.group,
            job.output.strips,
            bit_size=params.bit_size,
            stock_length=params.stock_length,
            export_pass=job.export_pass,
            flip=job.flip,
            renderer=self.renderer,
        )
