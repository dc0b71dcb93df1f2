"""Validation structures and design checks.

Errors block analysis and export; warnings flag designs that will still
export but probably not the way the user expects.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from kumiko.application.config.adapter import config_to_design
from kumiko.application.config.schema import DesignConfiguration
from kumiko.domain.services import (
    compute_design_strips,
    compute_intersections,
    normalize_lines,
)
from kumiko.infrastructure.row_packing import KerfRowPacker, RowPackingConfig


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "lines[3]")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the design has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def validate_design(config: DesignConfiguration) -> ValidationResult:
    """Run every structural and geometric check on a design.

    Args:
        config: A design that already passed schema validation

    Returns:
        ValidationResult with all errors and warnings found
    """
    result = ValidationResult()
    _check_structure(config, result)
    if not result.is_valid:
        return result
    _check_geometry(config, result)
    return result


def _check_structure(config: DesignConfiguration, result: ValidationResult) -> None:
    for line_id, count in Counter(line.id for line in config.lines).items():
        if count > 1:
            result.add_error("lines", f"Duplicate line id '{line_id}' ({count} times)", line_id)

    for i, line in enumerate(config.lines):
        if line.x1 == line.x2 and line.y1 == line.y2:
            result.add_error(
                f"lines[{i}]",
                f"Line '{line.id}' has zero length",
                [line.x1, line.y1],
            )

    group_ids = [group.id for group in config.groups]
    for group_id, count in Counter(group_ids).items():
        if count > 1:
            result.add_error("groups", f"Duplicate group id '{group_id}'", group_id)

    if config.groups and config.active_group_id not in group_ids:
        result.add_error(
            "activeGroupId",
            f"Active group '{config.active_group_id}' does not exist",
            config.active_group_id,
        )

    for g, group in enumerate(config.groups):
        for piece_id, count in Counter(piece.id for piece in group.pieces).items():
            if count > 1:
                result.add_error(
                    f"groups[{g}].pieces", f"Duplicate piece id '{piece_id}'", piece_id
                )


def _check_geometry(config: DesignConfiguration, result: ValidationResult) -> None:
    design = config_to_design(config)

    normalized = normalize_lines(design.lines)
    if _segment_set(normalized.values()) != _segment_set(design.lines.values()):
        result.add_warning(
            "lines",
            f"{len(design.lines)} lines contain overlapping or touching collinear "
            f"segments ({len(normalized)} after merging)",
            suggestion="Run 'kumiko normalize' to merge them",
        )

    intersections = compute_intersections(design.lines, design.overrides)
    stale = [key for key in design.overrides if key not in intersections]
    if stale:
        result.add_warning(
            "intersectionStates",
            f"{len(stale)} override(s) refer to intersections that no longer exist",
            suggestion="Stale overrides are ignored; 'kumiko normalize' clears them",
        )

    strips = compute_design_strips(
        design.lines,
        intersections,
        design.params.grid_cell_size,
        design.params.bit_size,
    )
    strip_ids = {strip.id for strip in strips}

    packer = KerfRowPacker(
        RowPackingConfig(
            bit_size=design.params.bit_size,
            stock_length=design.params.stock_length,
        )
    )
    for g, group in enumerate(design.layout.groups.values()):
        for p, piece in enumerate(group.pieces.values()):
            if piece.line_id not in strip_ids:
                result.add_warning(
                    f"groups[{g}].pieces[{p}].lineId",
                    f"Piece '{piece.id}' references strip '{piece.line_id}', "
                    "which the current lines do not produce",
                    suggestion="The piece is skipped on export",
                )

        packed = packer.pack(group, strips)
        for overflow in packed.overflows:
            result.add_warning(
                f"groups[{g}]",
                f"Group '{group.name}' row {overflow.row_index} ends at "
                f"{overflow.end:.1f} mm, past the {design.params.stock_length:.1f} mm stock",
                suggestion="Move pieces to another row or group",
            )


def _segment_set(lines) -> set[tuple[float, float, float, float]]:
    segments = set()
    for line in lines:
        a = (line.x1, line.y1)
        b = (line.x2, line.y2)
        start, end = sorted((a, b))
        segments.add((*start, *end))
    return segments
