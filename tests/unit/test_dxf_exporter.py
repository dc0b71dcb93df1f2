"""Tests for the DXF exporter."""

from io import StringIO

import ezdxf
import pytest
from ezdxf import units as dxf_units

from builders import make_group, make_output, make_strip
from kumiko.contracts import GroupExportJob
from kumiko.domain.constants import MM_TO_INCH
from kumiko.infrastructure.exporters import DxfExporter


@pytest.fixture
def output():
    strips = [
        make_strip("a", 100.0, [(20.0, True), (60.0, False)]),
        make_strip("b", 50.0, [(25.0, True)]),
    ]
    groups = [
        make_group([("a", 0, 0), ("b", 10, 0)], group_id="g1", name="Board"),
        make_group([], group_id="g2", name="Empty"),
    ]
    return make_output(strips, groups, bit_size=2.0, stock_length=600.0)


def job_for(output, group_id="g1", **kwargs) -> GroupExportJob:
    return GroupExportJob(output=output, group=output.design.layout.get_group(group_id), **kwargs)


def read(text: str):
    return ezdxf.read(StringIO(text))


class TestDxfExporter:
    def test_invalid_units(self) -> None:
        with pytest.raises(ValueError, match="Invalid units"):
            DxfExporter(units="feet")

    def test_layers_exist(self, output) -> None:
        doc = read(DxfExporter().export_string(job_for(output)))
        for name in ("STOCK", "CUTS", "NOTCHES"):
            assert doc.layers.has_entry(name)

    def test_line_counts_per_layer(self, output) -> None:
        msp = read(DxfExporter().export_string(job_for(output))).modelspace()
        assert len(msp.query('LINE[layer=="CUTS"]')) == 3
        assert len(msp.query('LINE[layer=="NOTCHES"]')) == 3
        assert len(msp.query('LWPOLYLINE[layer=="STOCK"]')) == 1

    def test_cut_positions(self, output) -> None:
        msp = read(DxfExporter().export_string(job_for(output))).modelspace()
        xs = sorted(round(line.dxf.start.x, 3) for line in msp.query('LINE[layer=="CUTS"]'))
        assert xs == [0.0, 102.0, 154.0]

    def test_without_stock_outline(self, output) -> None:
        text = DxfExporter(include_stock_outline=False).export_string(job_for(output))
        assert len(read(text).modelspace().query("LWPOLYLINE")) == 0

    def test_millimeter_units(self, output) -> None:
        doc = read(DxfExporter().export_string(job_for(output)))
        assert doc.units == dxf_units.MM

    def test_inch_units_scale_coordinates(self, output) -> None:
        doc = read(DxfExporter(units="inches").export_string(job_for(output)))
        assert doc.units == dxf_units.IN
        xs = sorted(line.dxf.start.x for line in doc.modelspace().query('LINE[layer=="CUTS"]'))
        assert xs[1] == pytest.approx(102.0 * MM_TO_INCH)

    def test_top_pass_has_no_cuts(self, output) -> None:
        text = DxfExporter().export_string(job_for(output, export_pass="top"))
        msp = read(text).modelspace()
        assert len(msp.query('LINE[layer=="CUTS"]')) == 0
        assert len(msp.query('LINE[layer=="NOTCHES"]')) == 2

    def test_empty_group_returns_none(self, output) -> None:
        assert DxfExporter().export_string(job_for(output, "g2")) is None

    def test_export_writes_readable_file(self, output, tmp_path) -> None:
        path = tmp_path / "board.dxf"
        assert DxfExporter().export(job_for(output), path) is True
        doc = ezdxf.readfile(path)
        assert len(doc.modelspace().query("LINE")) == 6

    def test_export_empty_group_writes_nothing(self, output, tmp_path) -> None:
        path = tmp_path / "empty.dxf"
        assert DxfExporter().export(job_for(output, "g2"), path) is False
        assert not path.exists()
