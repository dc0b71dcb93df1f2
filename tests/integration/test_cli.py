"""End-to-end tests for the kumiko command line."""

import json
import logging
import shutil

import pytest
from typer.testing import CliRunner

from kumiko.cli.main import app

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("kumiko")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestValidate:
    def test_valid_design(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["validate", str(fixtures_path / "cross.json")])
        assert result.exit_code == 0
        assert "Validation passed. Design is valid." in result.output

    def test_warnings_exit_code(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["validate", str(fixtures_path / "with_warnings.json")])
        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "Suggestion:" in result.output
        assert "Validation passed with 4 warning(s)" in result.output

    def test_errors_exit_code(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["validate", str(fixtures_path / "duplicate_ids.json")])
        assert result.exit_code == 1
        assert "Duplicate line id 'a'" in result.output
        assert "Validation failed: 3 error(s)" in result.output

    def test_missing_file(self, runner, tmp_path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_json(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["validate", str(fixtures_path / "invalid_json.json")])
        assert result.exit_code == 1
        assert "Validation failed." in result.output

    def test_unknown_field(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["validate", str(fixtures_path / "unknown_field.json")])
        assert result.exit_code == 1
        assert "routerSpeed" in result.output

    def test_unsupported_version(self, runner, tmp_path) -> None:
        path = tmp_path / "future.json"
        path.write_text('{"version": 2}', encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Unsupported design version 2" in result.output

    def test_malformed_override_pair(self, runner, tmp_path) -> None:
        path = tmp_path / "pairs.json"
        path.write_text('{"intersectionStates": [["int_a_b", "yes"]]}', encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "intersectionStates[0]: line1Over must be true or false" in result.output


class TestStrips:
    def test_cross(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["strips", str(fixtures_path / "cross.json")])
        assert result.exit_code == 0
        assert "Strips (2 lines, 1 distinct):" in result.output
        assert "x2 (placed 2)" in result.output
        assert "All strips are placed." in result.output

    def test_unplaced_strips(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["strips", str(fixtures_path / "with_warnings.json")])
        assert result.exit_code == 0
        assert "not yet placed in a group" in result.output

    def test_empty_design(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["strips", str(fixtures_path / "empty.json")])
        assert result.exit_code == 0
        assert "No strips" in result.output

    def test_structural_errors_block(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["strips", str(fixtures_path / "duplicate_ids.json")])
        assert result.exit_code == 1
        assert "Errors:" in result.output


class TestExport:
    def test_default_svg(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app, ["export", str(fixtures_path / "cross.json"), "-o", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert "Exported files:" in result.output
        assert (tmp_path / "Simple_Cross_Default_Group.svg").exists()

    def test_planned_passes(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app, ["export", str(fixtures_path / "double_sided.json"), "-o", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "Two_Posts_Posts.svg",
            "Two_Posts_Rail_bottom.svg",
            "Two_Posts_Rail_top.svg",
        ]

    def test_all_formats_one_group(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app,
            [
                "export",
                str(fixtures_path / "double_sided.json"),
                "-o",
                str(tmp_path),
                "-f",
                "all",
                "-g",
                "group2",
                "--project-name",
                "Panel",
            ],
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "Panel_Posts.dxf",
            "Panel_Posts.json",
            "Panel_Posts.svg",
        ]

    def test_forced_pass(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app,
            [
                "export",
                str(fixtures_path / "double_sided.json"),
                "-o",
                str(tmp_path),
                "-g",
                "group1",
                "--pass",
                "bottom",
            ],
        )
        assert result.exit_code == 0, result.output
        assert [p.name for p in tmp_path.iterdir()] == ["Two_Posts_Rail_bottom.svg"]

    def test_bit_size_override_reaches_cut_sheet(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app,
            [
                "export",
                str(fixtures_path / "cross.json"),
                "-o",
                str(tmp_path),
                "-f",
                "json",
                "--bit-size",
                "3",
            ],
        )
        assert result.exit_code == 0, result.output
        sheet = json.loads((tmp_path / "Simple_Cross_Default_Group.json").read_text())
        assert sheet["parameters"]["bit_size"] == 3.0
        assert [p["x"] for p in sheet["rows"][0]["pieces"]] == [0.0, 103.0]

    def test_invalid_override(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app,
            ["export", str(fixtures_path / "cross.json"), "-o", str(tmp_path), "--bit-size", "-2"],
        )
        assert result.exit_code == 1
        assert "bit_size" in result.output

    def test_unknown_format(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app, ["export", str(fixtures_path / "cross.json"), "-o", str(tmp_path), "-f", "stl"]
        )
        assert result.exit_code == 1
        assert "Unknown formats: stl" in result.output

    def test_unknown_group(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app, ["export", str(fixtures_path / "cross.json"), "-o", str(tmp_path), "-g", "nope"]
        )
        assert result.exit_code == 1
        assert "Export error: Unknown group" in result.output

    def test_nothing_to_export(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app, ["export", str(fixtures_path / "empty.json"), "-o", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert "Nothing to export" in result.output

    def test_structural_errors_block(self, runner, fixtures_path, tmp_path) -> None:
        result = runner.invoke(
            app, ["export", str(fixtures_path / "duplicate_ids.json"), "-o", str(tmp_path)]
        )
        assert result.exit_code == 1
        assert list(tmp_path.iterdir()) == []


class TestNormalize:
    def test_writes_output_file(self, runner, fixtures_path, tmp_path) -> None:
        target = tmp_path / "normalized.json"
        result = runner.invoke(
            app, ["normalize", str(fixtures_path / "with_warnings.json"), "-o", str(target)]
        )
        assert result.exit_code == 0, result.output
        assert "Normalized 3 lines into 2; cleared 1 override(s)" in result.output

        data = json.loads(target.read_text(encoding="utf-8"))
        assert len(data["lines"]) == 2
        assert data["intersectionStates"] == []
        assert len(data["groups"][0]["pieces"]) == 4

    def test_overwrites_in_place(self, runner, fixtures_path, tmp_path) -> None:
        design = tmp_path / "design.json"
        shutil.copy(fixtures_path / "with_warnings.json", design)
        result = runner.invoke(app, ["normalize", str(design)])
        assert result.exit_code == 0
        assert f"Wrote {design}" in result.output

        validate = runner.invoke(app, ["validate", str(design)])
        assert "overlapping or touching collinear" not in validate.output
        assert "no longer exist" not in validate.output


class TestVerbose:
    def test_verbose_logs_debug(self, runner, fixtures_path) -> None:
        result = runner.invoke(app, ["-v", "strips", str(fixtures_path / "cross.json")])
        assert result.exit_code == 0
        assert "Analyzed design" in result.output
