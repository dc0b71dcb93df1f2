"""Tests for the exporter protocol, registry and export manager."""

from pathlib import Path
from typing import ClassVar

import pytest

from builders import make_group, make_output, make_strip
from kumiko.contracts import GroupExportJob
from kumiko.infrastructure.exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonCutSheetExporter,
    SvgExporter,
    safe_name,
)


@pytest.fixture
def output():
    strips = [
        make_strip("a", 100.0, [(20.0, True), (60.0, False)]),
        make_strip("under", 40.0, [(10.0, False)]),
    ]
    groups = [
        make_group([("a", 0, 0)], group_id="g1", name="Board One"),
        make_group([("under", 0, 0)], group_id="g2", name="Posts"),
        make_group([], group_id="g3", name="Empty"),
    ]
    return make_output(strips, groups, bit_size=2.0, stock_length=600.0)


class TestExporterRegistry:
    def setup_method(self) -> None:
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        ExporterRegistry._exporters = self._original_exporters

    def test_builtin_formats(self) -> None:
        assert ExporterRegistry.available_formats() == ["dxf", "json", "svg"]
        assert ExporterRegistry.get("svg") is SvgExporter
        assert ExporterRegistry.get("dxf") is DxfExporter
        assert ExporterRegistry.get("json") is JsonCutSheetExporter

    def test_get_unknown_format_raises_key_error(self) -> None:
        with pytest.raises(KeyError) as exc_info:
            ExporterRegistry.get("gcode")
        assert "No exporter registered for format 'gcode'" in str(exc_info.value)

    def test_register_new_exporter(self) -> None:
        @ExporterRegistry.register("txt")
        class TextExporter:
            format_name: ClassVar[str] = "txt"
            file_extension: ClassVar[str] = "txt"
            per_pass: ClassVar[bool] = False

            def export(self, job, path: Path) -> bool:
                return False

        assert ExporterRegistry.is_registered("txt")
        assert ExporterRegistry.get("txt") is TextExporter

    def test_clear_removes_all_exporters(self) -> None:
        ExporterRegistry.clear()
        assert ExporterRegistry.available_formats() == []

    def test_exporters_implement_protocol(self) -> None:
        for name in ("svg", "dxf", "json"):
            assert isinstance(ExporterRegistry.get(name)(), Exporter)


class TestSafeName:
    def test_spaces_and_symbols(self) -> None:
        assert safe_name("Board One!") == "Board_One"

    def test_slashes(self) -> None:
        assert safe_name("a/b") == "a-b"

    def test_blank_falls_back(self) -> None:
        assert safe_name("  ") == "group"


class TestExportManager:
    def test_planned_passes(self, output, tmp_path) -> None:
        results = ExportManager(tmp_path).export_all(["svg"], output)
        names = sorted(p.name for p in results["svg"])
        assert names == ["test_Board_One_bottom.svg", "test_Board_One_top.svg", "test_Posts.svg"]
        assert all(p.exists() for p in results["svg"])

    def test_empty_group_is_skipped(self, output, tmp_path, caplog) -> None:
        ExportManager(tmp_path).export_all(["svg"], output)
        assert not (tmp_path / "test_Empty.svg").exists()
        assert "nothing to cut" in caplog.text

    def test_single_file_formats_run_once_per_group(self, output, tmp_path) -> None:
        results = ExportManager(tmp_path).export_all(["json"], output)
        assert sorted(p.name for p in results["json"]) == ["test_Board_One.json", "test_Posts.json"]

    def test_forced_pass(self, output, tmp_path) -> None:
        results = ExportManager(tmp_path).export_all(["svg"], output, export_pass="top")
        assert [p.name for p in results["svg"]] == ["test_Board_One_top.svg"]

    def test_forced_all_pass_has_no_suffix(self, output, tmp_path) -> None:
        results = ExportManager(tmp_path).export_all(["svg"], output, export_pass="all", flip=True)
        assert sorted(p.name for p in results["svg"]) == ["test_Board_One.svg", "test_Posts.svg"]

    def test_selected_groups(self, output, tmp_path) -> None:
        results = ExportManager(tmp_path).export_all(["svg", "dxf"], output, group_ids=["g2"])
        assert [p.name for p in results["svg"]] == ["test_Posts.svg"]
        assert [p.name for p in results["dxf"]] == ["test_Posts.dxf"]

    def test_project_name_override(self, output, tmp_path) -> None:
        results = ExportManager(tmp_path).export_all(
            ["json"], output, project_name="Shoji Panel", group_ids=["g1"]
        )
        assert [p.name for p in results["json"]] == ["Shoji_Panel_Board_One.json"]

    def test_creates_output_dir(self, output, tmp_path) -> None:
        target = tmp_path / "nested" / "out"
        ExportManager(target).export_all(["json"], output)
        assert target.is_dir()

    def test_unknown_format_writes_nothing(self, output, tmp_path) -> None:
        target = tmp_path / "out"
        with pytest.raises(KeyError):
            ExportManager(target).export_all(["svg", "gcode"], output)
        assert not target.exists()

    def test_unknown_group(self, output, tmp_path) -> None:
        with pytest.raises(KeyError, match="Unknown group"):
            ExportManager(tmp_path).export_all(["svg"], output, group_ids=["nope"])

    def test_export_single(self, output, tmp_path) -> None:
        paths = ExportManager(tmp_path).export_single("dxf", output)
        assert len(paths) == 3


class TestStringExport:
    def test_svg_string(self, output) -> None:
        job = GroupExportJob(output=output, group=output.design.layout.get_group("g2"))
        assert SvgExporter().export_string(job).startswith("<?xml")

    def test_svg_string_none_for_empty_group(self, output) -> None:
        job = GroupExportJob(output=output, group=output.design.layout.get_group("g3"))
        assert SvgExporter().export_string(job) is None
