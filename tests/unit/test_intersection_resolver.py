"""Tests for intersection resolution and stacking overrides."""

from builders import lines_map, make_line
from kumiko.domain.services import (
    compute_intersections,
    default_line1_over,
    intersection_id,
    prune_overrides,
    toggle_intersection,
)


class TestComputeIntersections:
    def test_single_crossing(self, cross_lines) -> None:
        result = compute_intersections(cross_lines)
        assert list(result) == ["int_h_v"]
        intersection = result["int_h_v"]
        assert (intersection.x, intersection.y) == (5, 5)
        assert intersection.line1_id == "h"
        assert intersection.line2_id == "v"

    def test_no_lines(self) -> None:
        assert compute_intersections({}) == {}

    def test_endpoint_touch_is_included(self) -> None:
        lines = lines_map(make_line("a", 0, 0, 5, 0), make_line("b", 5, 0, 5, 5))
        assert list(compute_intersections(lines)) == ["int_a_b"]

    def test_pair_order_follows_insertion_order(self) -> None:
        lines = lines_map(make_line("v", 5, 0, 5, 10), make_line("h", 0, 5, 10, 5))
        assert list(compute_intersections(lines)) == ["int_v_h"]

    def test_one_intersection_per_coordinate(self) -> None:
        lines = lines_map(
            make_line("a", 0, 5, 10, 5),
            make_line("b", 5, 0, 5, 10),
            make_line("c", 0, 0, 10, 10),
        )
        result = compute_intersections(lines)
        coordinates = {(i.x, i.y) for i in result.values()}
        assert len(result) == len(coordinates) == 1

    def test_count_never_exceeds_distinct_coordinates(self) -> None:
        lines = lines_map(
            make_line("h1", 0, 2, 10, 2),
            make_line("h2", 0, 6, 10, 6),
            make_line("v1", 3, 0, 3, 10),
            make_line("v2", 7, 0, 7, 10),
            make_line("d", 0, 0, 10, 10),
        )
        result = compute_intersections(lines)
        coordinates = {(i.x, i.y) for i in result.values()}
        assert len(result) == len(coordinates)

    def test_crossing_preferred_over_touch(self) -> None:
        lines = lines_map(
            make_line("a", 5, 5, 5, 10),  # ends at (5, 5)
            make_line("b", 0, 5, 10, 5),
            make_line("c", 5, 0, 5, 4),
            make_line("d", 2, 2, 8, 8),
        )
        result = compute_intersections(lines)
        at_center = [i for i in result.values() if (i.x, i.y) == (5, 5)]
        assert len(at_center) == 1
        assert at_center[0].id == "int_b_d"

    def test_tie_goes_to_lowest_id(self) -> None:
        lines = lines_map(
            make_line("z", 0, 5, 10, 5),
            make_line("m", 5, 0, 5, 10),
            make_line("a", 0, 0, 10, 10),
        )
        result = compute_intersections(lines)
        assert list(result) == ["int_m_a"]

    def test_deterministic(self) -> None:
        lines = lines_map(
            make_line("a", 0, 5, 10, 5),
            make_line("b", 5, 0, 5, 10),
            make_line("c", 0, 0, 10, 10),
        )
        assert compute_intersections(lines) == compute_intersections(lines)


class TestStacking:
    def test_horizontal_line1_is_over(self, cross_lines) -> None:
        assert compute_intersections(cross_lines)["int_h_v"].line1_over is True

    def test_vertical_line1_is_under(self) -> None:
        lines = lines_map(make_line("v", 5, 0, 5, 10), make_line("h", 0, 5, 10, 5))
        assert compute_intersections(lines)["int_v_h"].line1_over is False

    def test_diagonals_default_to_line1_over(self) -> None:
        a = make_line("a", 0, 0, 10, 10)
        b = make_line("b", 0, 10, 10, 0)
        assert default_line1_over(a, b) is True

    def test_override_replaces_default(self, cross_lines) -> None:
        result = compute_intersections(cross_lines, {"int_h_v": False})
        assert result["int_h_v"].line1_over is False

    def test_stale_override_is_ignored(self, cross_lines) -> None:
        result = compute_intersections(cross_lines, {"int_x_y": False})
        assert result["int_h_v"].line1_over is True


class TestOverrides:
    def test_intersection_id(self) -> None:
        assert intersection_id("a", "b") == "int_a_b"

    def test_toggle_inverts_current_state(self, cross_lines) -> None:
        intersections = compute_intersections(cross_lines)
        overrides = toggle_intersection(intersections, {}, "int_h_v")
        assert overrides == {"int_h_v": False}

        intersections = compute_intersections(cross_lines, overrides)
        assert toggle_intersection(intersections, overrides, "int_h_v") == {"int_h_v": True}

    def test_toggle_does_not_mutate_input(self, cross_lines) -> None:
        intersections = compute_intersections(cross_lines)
        original: dict[str, bool] = {}
        toggle_intersection(intersections, original, "int_h_v")
        assert original == {}

    def test_toggle_unknown_id_is_noop(self, cross_lines) -> None:
        intersections = compute_intersections(cross_lines)
        assert toggle_intersection(intersections, {"int_h_v": True}, "nope") == {"int_h_v": True}

    def test_prune_overrides(self, cross_lines) -> None:
        intersections = compute_intersections(cross_lines)
        overrides = {"int_h_v": False, "int_old_line": True}
        assert prune_overrides(overrides, intersections) == {"int_h_v": False}
