"""Application commands (use cases) for kumiko designs."""

from __future__ import annotations

import logging
from dataclasses import replace

from kumiko.contracts.dtos import DesignOutput, DesignState
from kumiko.domain.services import (
    build_strip_bank,
    compute_design_strips,
    compute_intersections,
    normalize_lines,
)

logger = logging.getLogger(__name__)


class AnalyzeDesignCommand:
    """Derive intersections, strips and the strip bank of a design.

    The design is not modified. Overrides that no longer name an
    intersection are ignored.
    """

    def execute(self, design: DesignState) -> DesignOutput:
        """Execute the analysis.

        Args:
            design: Design state loaded from a file or request.

        Returns:
            DesignOutput with the derived geometry.
        """
        intersections = compute_intersections(design.lines, design.overrides)
        strips = compute_design_strips(
            design.lines,
            intersections,
            design.params.grid_cell_size,
            design.params.bit_size,
        )
        pieces = [
            piece
            for group in design.layout.groups.values()
            for piece in group.pieces.values()
        ]
        bank = build_strip_bank(strips, pieces)

        logger.info(
            f"Analyzed design: {len(design.lines)} lines, {len(intersections)} intersections, "
            f"{len(strips)} strips ({len(bank)} distinct)"
        )
        return DesignOutput(
            design=design,
            intersections=intersections,
            strips=strips,
            strip_bank=bank,
        )


class NormalizeDesignCommand:
    """Merge collinear lines and drop intersection overrides.

    Normalization assigns fresh line ids, so every override would be
    stale afterwards.
    """

    def execute(self, design: DesignState) -> DesignState:
        lines = normalize_lines(design.lines)
        if design.overrides:
            logger.info(f"Cleared {len(design.overrides)} intersection override(s)")
        logger.info(f"Normalized {len(design.lines)} lines into {len(lines)}")
        return replace(design, lines=lines, overrides={})
