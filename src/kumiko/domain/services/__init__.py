"""Domain services: the pure geometry pipeline.

- line normalization and draw/erase edits
- intersection resolution with stacking overrides
- strip derivation and the strip bank
- unit conversion for display
"""

from .intersection_resolver import (
    compute_intersections,
    default_line1_over,
    intersection_id,
    prune_overrides,
    toggle_intersection,
)
from .line_editor import apply_segment, find_line_ending_at
from .line_normalizer import normalize_lines
from .strip_deriver import (
    StripBankEntry,
    build_strip_bank,
    canonical_strip_id,
    compute_design_strips,
    display_code_for,
    get_strip_config_key,
    line_labels,
    strip_config_key,
)
from .units import convert_unit, format_value

__all__ = [
    "StripBankEntry",
    "apply_segment",
    "build_strip_bank",
    "canonical_strip_id",
    "compute_design_strips",
    "compute_intersections",
    "convert_unit",
    "default_line1_over",
    "display_code_for",
    "find_line_ending_at",
    "format_value",
    "get_strip_config_key",
    "intersection_id",
    "line_labels",
    "normalize_lines",
    "prune_overrides",
    "strip_config_key",
    "toggle_intersection",
]
