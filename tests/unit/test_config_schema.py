"""Unit tests for the design file schema models."""

import pytest
from pydantic import ValidationError

from kumiko.application.config import (
    DesignConfiguration,
    GridViewStateConfig,
    LineConfig,
    PieceConfig,
)
from kumiko.domain.constants import DEFAULT_BIT_SIZE, DEFAULT_GROUP_ID, DEFAULT_STOCK_LENGTH
from kumiko.domain.value_objects import DisplayUnit


class TestDesignConfiguration:
    def test_defaults(self) -> None:
        config = DesignConfiguration()
        assert config.version == 1
        assert config.units == DisplayUnit.MM
        assert config.bit_size == DEFAULT_BIT_SIZE
        assert config.stock_length == DEFAULT_STOCK_LENGTH
        assert config.lines == []
        assert config.groups == []
        assert config.active_group_id == DEFAULT_GROUP_ID

    def test_camel_case_aliases(self) -> None:
        config = DesignConfiguration.model_validate(
            {"bitSize": 3.175, "gridCellSize": 12.5, "activeGroupId": "g"}
        )
        assert config.bit_size == 3.175
        assert config.grid_cell_size == 12.5
        assert config.active_group_id == "g"

    def test_snake_case_accepted(self) -> None:
        assert DesignConfiguration(bit_size=4.0).bit_size == 4.0

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError, match="routerSpeed"):
            DesignConfiguration.model_validate({"routerSpeed": 18000})

    def test_unsupported_version(self) -> None:
        with pytest.raises(ValidationError):
            DesignConfiguration.model_validate({"version": 2})

    @pytest.mark.parametrize("field", ["bitSize", "cutDepth", "gridCellSize", "stockLength"])
    def test_positive_lengths(self, field: str) -> None:
        with pytest.raises(ValidationError):
            DesignConfiguration.model_validate({field: 0})

    def test_half_cut_deeper_than_stock(self) -> None:
        with pytest.raises(ValidationError, match="halfCutDepth"):
            DesignConfiguration.model_validate({"cutDepth": 10, "halfCutDepth": 12})

    def test_inch_units(self) -> None:
        assert DesignConfiguration.model_validate({"units": "in"}).units == DisplayUnit.IN

    def test_blank_design_name_becomes_none(self) -> None:
        assert DesignConfiguration(design_name="   ").design_name is None
        assert DesignConfiguration(design_name=" Asanoha ").design_name == "Asanoha"

    def test_intersection_states_pairs(self) -> None:
        config = DesignConfiguration.model_validate(
            {"intersectionStates": [["int_a_b", True], ["int_a_c", False]]}
        )
        assert config.intersection_states == [("int_a_b", True), ("int_a_c", False)]


class TestLineConfig:
    def test_integer_coordinates(self) -> None:
        line = LineConfig(id="a", x1=0, y1=1, x2=5, y2=1)
        assert (line.x2, line.y2) == (5, 1)

    def test_fractional_coordinates_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LineConfig(id="a", x1=0.5, y1=0, x2=5, y2=0)

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LineConfig(id="", x1=0, y1=0, x2=1, y2=0)


class TestPieceConfig:
    def test_aliases(self) -> None:
        piece = PieceConfig.model_validate({"id": "p", "lineId": "strip_1", "rowIndex": 2})
        assert piece.line_id == "strip_1"
        assert piece.row_index == 2

    def test_negative_row_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PieceConfig.model_validate({"id": "p", "lineId": "s", "rowIndex": -1})


class TestGridViewStateConfig:
    def test_extra_keys_kept(self) -> None:
        state = GridViewStateConfig.model_validate({"zoom": 2, "snap": True})
        assert state.model_dump(by_alias=True)["snap"] is True

    def test_zoom_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            GridViewStateConfig(zoom=0)
