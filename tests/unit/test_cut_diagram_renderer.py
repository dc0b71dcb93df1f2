"""Tests for the SVG cut drawing renderer."""

import re
import xml.etree.ElementTree as ET

import pytest

from builders import make_group, make_strip
from kumiko.infrastructure.cut_diagram_renderer import (
    CutDiagramRenderer,
    generate_group_svg,
    mm_to_cm,
)
from kumiko.infrastructure.cut_paths import build_group_cut_paths

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def strips():
    return [
        make_strip("a", 100.0, [(20.0, True), (60.0, False)]),
        make_strip("b", 50.0, [(25.0, True)]),
    ]


@pytest.fixture
def group():
    return make_group([("a", 0, 0), ("b", 10, 0)])


def parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.split("\n", 1)[1])


class TestGenerateGroupSvg:
    def test_three_cuts_and_three_notches(self, group, strips) -> None:
        svg = generate_group_svg(group, strips, bit_size=2.0, stock_length=600.0)
        root = parse(svg)
        lines = root.findall(f"{SVG_NS}line")

        cuts = [l for l in lines if l.get("stroke") == "#000000"]
        notches = [l for l in lines if l.get("stroke") == "#808080"]
        assert len(cuts) == 3
        assert len(notches) == 3

    def test_width_is_stock_length_in_cm(self, group, strips) -> None:
        svg = generate_group_svg(group, strips, bit_size=2.0, stock_length=600.0)
        root = parse(svg)
        assert root.get("width") == "60.000cm"
        assert root.get("height") == "2.000cm"
        assert root.get("viewBox") == "0 0 60.000 2.000"

    def test_bounding_rectangle(self, group, strips) -> None:
        svg = generate_group_svg(group, strips, bit_size=2.0, stock_length=600.0)
        rect = parse(svg).find(f"{SVG_NS}rect")
        assert rect.get("width") == "60.000"
        assert rect.get("height") == "2.000"
        assert rect.get("stroke") == "#E6E6E6"

    def test_coordinates_in_cm(self, group, strips) -> None:
        svg = generate_group_svg(group, strips, bit_size=2.0, stock_length=600.0)
        first = parse(svg).findall(f"{SVG_NS}line")[1]
        assert first.get("x1") == "10.200"
        assert first.get("y1") == "0.000"
        assert first.get("y2") == "2.000"

    def test_xml_header(self, group, strips) -> None:
        svg = generate_group_svg(group, strips, bit_size=2.0, stock_length=600.0)
        assert svg.startswith('<?xml version="1.0" encoding="utf-8"?>')

    def test_y_measured_from_first_row(self, strips) -> None:
        svg = generate_group_svg(make_group([("b", 0, 2)]), strips, bit_size=2.0, stock_length=600.0)
        y_values = set(re.findall(r'y1="([0-9.]+)"', svg))
        assert y_values == {"0.000"}

    def test_no_output_for_empty_group(self, strips) -> None:
        assert generate_group_svg(make_group([]), strips, bit_size=2.0, stock_length=600.0) is None

    def test_custom_renderer_colors(self, group, strips) -> None:
        renderer = CutDiagramRenderer(cut_stroke="red", notch_stroke="blue")
        svg = generate_group_svg(
            group, strips, bit_size=2.0, stock_length=600.0, renderer=renderer
        )
        assert 'stroke="red"' in svg
        assert 'stroke="blue"' in svg
        assert "#000000" not in svg


class TestRenderSvg:
    def test_render_from_cut_paths(self, group, strips) -> None:
        result = build_group_cut_paths(group, strips, bit_size=2.0, stock_length=600.0)
        svg = CutDiagramRenderer().render_svg(result)
        assert svg.count("<line ") == len(result.segments)
        assert svg.rstrip().endswith("</svg>")

    def test_mm_to_cm(self) -> None:
        assert mm_to_cm(25.0) == pytest.approx(2.5)
