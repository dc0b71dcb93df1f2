"""Domain layer - lattice geometry and strip layouts."""

from .entities import Group, Layout
from .geometry import (
    LineOverlap,
    collinear_overlap,
    compute_line_overlaps,
    distance_point_to_segment,
    find_intersection,
    gcd,
    is_point_on_line_interior,
    reduce_direction,
)
from .services import (
    StripBankEntry,
    apply_segment,
    build_strip_bank,
    compute_design_strips,
    compute_intersections,
    get_strip_config_key,
    normalize_lines,
    toggle_intersection,
)
from .value_objects import (
    Cut,
    DesignStrip,
    DisplayUnit,
    ExportPass,
    Intersection,
    Line,
    Notch,
    Piece,
    Point,
    new_id,
)

__all__ = [
    "Cut",
    "DesignStrip",
    "DisplayUnit",
    "ExportPass",
    "Group",
    "Intersection",
    "Layout",
    "Line",
    "LineOverlap",
    "Notch",
    "Piece",
    "Point",
    "StripBankEntry",
    "apply_segment",
    "build_strip_bank",
    "collinear_overlap",
    "compute_design_strips",
    "compute_intersections",
    "compute_line_overlaps",
    "distance_point_to_segment",
    "find_intersection",
    "gcd",
    "get_strip_config_key",
    "is_point_on_line_interior",
    "new_id",
    "normalize_lines",
    "reduce_direction",
    "toggle_intersection",
]
