"""Exporter framework for group cut outputs.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format, multi-pass export operations

Registered exporters:
- dxf: DXF drawing with CUTS and NOTCHES layers
- json: Cut sheet with strips, notches and packed rows
- svg: Cut drawing for the cutting machine

Usage:
    from kumiko.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["svg", "dxf"], design_output, project_name="panel")
"""

from kumiko.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
    safe_name,
)

# Import exporters to trigger registration
from kumiko.infrastructure.exporters.dxf import DxfExporter
from kumiko.infrastructure.exporters.json_export import JsonCutSheetExporter
from kumiko.infrastructure.exporters.svg import SvgExporter

__all__ = [
    # Framework
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "safe_name",
    # Registered exporters
    "DxfExporter",
    "JsonCutSheetExporter",
    "SvgExporter",
]
