"""Shared Data Transfer Objects for cross-layer communication.

The application layer builds these and the infrastructure exporters
consume them, so neither layer imports the other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kumiko.domain.constants import (
    DEFAULT_BIT_SIZE,
    DEFAULT_CUT_DEPTH,
    DEFAULT_GRID_CELL_SIZE,
    DEFAULT_HALF_CUT_DEPTH,
    DEFAULT_STOCK_LENGTH,
)
from kumiko.domain.entities import Group, Layout
from kumiko.domain.services.strip_deriver import StripBankEntry
from kumiko.domain.value_objects import (
    DesignStrip,
    DisplayUnit,
    ExportPass,
    Intersection,
    Line,
)


@dataclass
class DesignParameters:
    """Physical parameters of a design, all lengths in millimeters.

    Attributes:
        units: Unit used for display.
        bit_size: Cutting tool diameter.
        cut_depth: Full depth of the stock.
        half_cut_depth: Depth of a notch.
        grid_cell_size: Physical size of one grid cell.
        stock_length: Nominal board length.
    """

    units: DisplayUnit = DisplayUnit.MM
    bit_size: float = DEFAULT_BIT_SIZE
    cut_depth: float = DEFAULT_CUT_DEPTH
    half_cut_depth: float = DEFAULT_HALF_CUT_DEPTH
    grid_cell_size: float = DEFAULT_GRID_CELL_SIZE
    stock_length: float = DEFAULT_STOCK_LENGTH


@dataclass
class DesignState:
    """Everything a design file holds.

    Attributes:
        lines: Grid lines keyed by id.
        overrides: Intersection stacking overrides keyed by intersection id.
        layout: Groups of placed pieces and the active group.
        params: Physical parameters.
        name: Optional design name.
        view_state: Editor view settings, carried through unchanged.
    """

    lines: dict[str, Line] = field(default_factory=dict)
    overrides: dict[str, bool] = field(default_factory=dict)
    layout: Layout = field(default_factory=Layout)
    params: DesignParameters = field(default_factory=DesignParameters)
    name: str | None = None
    view_state: dict[str, Any] | None = None


@dataclass
class DesignOutput:
    """A design with its derived geometry.

    Attributes:
        design: The source design.
        intersections: Resolved intersections keyed by id.
        strips: Derived strips, one per line that survives filtering.
        strip_bank: Distinct strips with needed counts.
        errors: Problems that prevented derivation.
    """

    design: DesignState
    intersections: dict[str, Intersection] = field(default_factory=dict)
    strips: list[DesignStrip] = field(default_factory=list)
    strip_bank: list[StripBankEntry] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def params(self) -> DesignParameters:
        return self.design.params

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def project_name(self) -> str:
        return self.design.name or "kumiko"


@dataclass(frozen=True)
class GroupExportJob:
    """One group exported with one pass setting.

    Attributes:
        output: The analyzed design.
        group: Group to export.
        export_pass: Which cuts to include.
        flip: Treat every strip as turned over.
    """

    output: DesignOutput
    group: Group
    export_pass: ExportPass = ExportPass.ALL
    flip: bool = False
