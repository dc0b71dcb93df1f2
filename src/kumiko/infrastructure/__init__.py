"""Infrastructure layer - packing, cut paths and file exporters."""

from .cut_diagram_renderer import CutDiagramRenderer, generate_group_svg
from .cut_paths import (
    CutPathResult,
    CutSegment,
    PassAnalysis,
    PassPlan,
    SegmentKind,
    analyze_group_passes,
    build_group_cut_paths,
    has_double_sided_strips,
    plan_group_passes,
)
from .exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonCutSheetExporter,
    SvgExporter,
)
from .row_packing import (
    KerfRowPacker,
    PackedGroup,
    RowOverflow,
    RowPackingConfig,
    compute_kerfed_layout_rows,
    compute_row_lengths,
    next_row_position,
    validate_strip_placement,
)

__all__ = [
    # Row packing
    "KerfRowPacker",
    "PackedGroup",
    "RowOverflow",
    "RowPackingConfig",
    "compute_kerfed_layout_rows",
    "compute_row_lengths",
    "next_row_position",
    "validate_strip_placement",
    # Cut paths
    "CutPathResult",
    "CutSegment",
    "PassAnalysis",
    "PassPlan",
    "SegmentKind",
    "analyze_group_passes",
    "build_group_cut_paths",
    "has_double_sided_strips",
    "plan_group_passes",
    # Rendering
    "CutDiagramRenderer",
    "generate_group_svg",
    # Exporters
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonCutSheetExporter",
    "SvgExporter",
]
