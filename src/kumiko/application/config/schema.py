"""Pydantic models for kumiko design files.

A design file is the JSON document the designer saves: physical
parameters, grid lines, intersection overrides, view state and layout
groups. Keys are camelCase on disk and snake_case in Python; both are
accepted on input.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kumiko.domain.constants import (
    DEFAULT_BIT_SIZE,
    DEFAULT_CUT_DEPTH,
    DEFAULT_GRID_CELL_SIZE,
    DEFAULT_GROUP_ID,
    DEFAULT_HALF_CUT_DEPTH,
    DEFAULT_STOCK_LENGTH,
)
from kumiko.domain.value_objects import DisplayUnit


class LineConfig(BaseModel):
    """A grid line. Coordinates are integer grid positions."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    x1: int
    y1: int
    x2: int
    y2: int


class PieceConfig(BaseModel):
    """A strip placed on a layout row."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(..., min_length=1)
    line_id: str = Field(..., alias="lineId", min_length=1)
    x: float = 0.0
    y: float = 0.0
    row_index: int = Field(default=0, alias="rowIndex", ge=0)


class CutConfig(BaseModel):
    """A manual full-depth cut from legacy layouts."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    x1: float
    y1: float
    x2: float
    y2: float


class GroupConfig(BaseModel):
    """A layout group."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    pieces: list[PieceConfig] = Field(default_factory=list)
    full_cuts: list[CutConfig] = Field(default_factory=list, alias="fullCuts")


class GridViewStateConfig(BaseModel):
    """Designer view settings; carried through without interpretation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    zoom: float = Field(default=1.0, gt=0)
    pan_x: float = Field(default=0.0, alias="panX")
    pan_y: float = Field(default=0.0, alias="panY")
    show_notch_positions: bool = Field(default=True, alias="showNotchPositions")
    show_help_text: bool = Field(default=True, alias="showHelpText")
    show_line_ids: bool = Field(default=True, alias="showLineIds")


class DesignConfiguration(BaseModel):
    """Root model of a saved design.

    Attributes:
        version: File format version, currently always 1.
        units: Display unit; all stored values are millimeters.
        bit_size: Cutting tool diameter.
        cut_depth: Full stock depth.
        half_cut_depth: Notch depth.
        grid_cell_size: Physical size of one grid cell.
        stock_length: Board length used for layout and export.
        lines: Grid lines.
        intersection_states: Ordered ``[id, line1Over]`` override pairs.
        grid_view_state: Optional designer view state.
        groups: Layout groups.
        active_group_id: Group selected in the layout editor.
        design_name: Optional name, used as the export file prefix.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    version: Literal[1] = 1
    units: DisplayUnit = DisplayUnit.MM
    bit_size: float = Field(default=DEFAULT_BIT_SIZE, alias="bitSize", gt=0)
    cut_depth: float = Field(default=DEFAULT_CUT_DEPTH, alias="cutDepth", gt=0)
    half_cut_depth: float = Field(
        default=DEFAULT_HALF_CUT_DEPTH, alias="halfCutDepth", gt=0
    )
    grid_cell_size: float = Field(
        default=DEFAULT_GRID_CELL_SIZE, alias="gridCellSize", gt=0
    )
    stock_length: float = Field(
        default=DEFAULT_STOCK_LENGTH, alias="stockLength", gt=0
    )
    lines: list[LineConfig] = Field(default_factory=list)
    intersection_states: list[tuple[str, bool]] = Field(
        default_factory=list, alias="intersectionStates"
    )
    grid_view_state: GridViewStateConfig | None = Field(
        default=None, alias="gridViewState"
    )
    groups: list[GroupConfig] = Field(default_factory=list)
    active_group_id: str = Field(default=DEFAULT_GROUP_ID, alias="activeGroupId")
    design_name: str | None = Field(default=None, alias="designName")

    @field_validator("design_name")
    @classmethod
    def strip_design_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def check_depths(self) -> DesignConfiguration:
        """A notch cannot be deeper than the stock."""
        if self.half_cut_depth > self.cut_depth:
            raise ValueError(
                f"halfCutDepth ({self.half_cut_depth}) must not exceed cutDepth ({self.cut_depth})"
            )
        return self
