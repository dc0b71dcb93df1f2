"""Adapter between DesignConfiguration and the domain design state.

Design files store lists and camelCase keys; the domain works with
insertion-ordered, id-keyed dictionaries of value objects.
"""

from __future__ import annotations

from typing import Any

from kumiko.application.config.schema import (
    CutConfig,
    DesignConfiguration,
    GridViewStateConfig,
    GroupConfig,
    LineConfig,
    PieceConfig,
)
from kumiko.contracts.dtos import DesignParameters, DesignState
from kumiko.domain.entities import Group, Layout
from kumiko.domain.value_objects import Cut, Line, Piece


def config_to_design(config: DesignConfiguration) -> DesignState:
    """Convert a validated design file into the domain design state.

    Later duplicates of an id replace earlier ones, matching how the
    designer rebuilds its maps. An empty group list yields the default
    group.

    Args:
        config: A validated DesignConfiguration instance

    Returns:
        DesignState ready for analysis.
    """
    lines = {
        line.id: Line(id=line.id, x1=line.x1, y1=line.y1, x2=line.x2, y2=line.y2)
        for line in config.lines
    }

    groups: dict[str, Group] = {}
    for group_config in config.groups:
        groups[group_config.id] = Group(
            id=group_config.id,
            name=group_config.name,
            pieces={
                piece.id: Piece(
                    id=piece.id,
                    line_id=piece.line_id,
                    x=piece.x,
                    y=piece.y,
                    row_index=piece.row_index,
                )
                for piece in group_config.pieces
            },
            full_cuts={
                cut.id: Cut(id=cut.id, x1=cut.x1, y1=cut.y1, x2=cut.x2, y2=cut.y2)
                for cut in group_config.full_cuts
            },
        )

    layout = Layout(groups=groups, active_group_id=config.active_group_id)

    view_state = (
        config.grid_view_state.model_dump(by_alias=True)
        if config.grid_view_state is not None
        else None
    )

    return DesignState(
        lines=lines,
        overrides=dict(config.intersection_states),
        layout=layout,
        params=DesignParameters(
            units=config.units,
            bit_size=config.bit_size,
            cut_depth=config.cut_depth,
            half_cut_depth=config.half_cut_depth,
            grid_cell_size=config.grid_cell_size,
            stock_length=config.stock_length,
        ),
        name=config.design_name,
        view_state=view_state,
    )


def design_to_config(design: DesignState) -> DesignConfiguration:
    """Convert the domain design state back into a design file model."""
    params = design.params
    return DesignConfiguration(
        version=1,
        units=params.units,
        bit_size=params.bit_size,
        cut_depth=params.cut_depth,
        half_cut_depth=params.half_cut_depth,
        grid_cell_size=params.grid_cell_size,
        stock_length=params.stock_length,
        lines=[
            LineConfig(id=line.id, x1=line.x1, y1=line.y1, x2=line.x2, y2=line.y2)
            for line in design.lines.values()
        ],
        intersection_states=list(design.overrides.items()),
        grid_view_state=(
            GridViewStateConfig.model_validate(design.view_state)
            if design.view_state is not None
            else None
        ),
        groups=[
            GroupConfig(
                id=group.id,
                name=group.name,
                pieces=[
                    PieceConfig(
                        id=piece.id,
                        line_id=piece.line_id,
                        x=piece.x,
                        y=piece.y,
                        row_index=piece.row_index,
                    )
                    for piece in group.pieces.values()
                ],
                full_cuts=[
                    CutConfig(id=cut.id, x1=cut.x1, y1=cut.y1, x2=cut.x2, y2=cut.y2)
                    for cut in group.full_cuts.values()
                ],
            )
            for group in design.layout.groups.values()
        ],
        active_group_id=design.layout.active_group_id,
        design_name=design.name,
    )


def design_to_payload(design: DesignState) -> dict[str, Any]:
    """Serialize the design state as a camelCase JSON-ready dictionary.

    Overrides are written as an ordered list of ``[id, bool]`` pairs.
    """
    payload = design_to_config(design).model_dump(mode="json", by_alias=True, exclude_none=True)
    payload["intersectionStates"] = [list(pair) for pair in design.overrides.items()]
    return payload
