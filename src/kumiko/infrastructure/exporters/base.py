"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
import re
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Iterable, Protocol, runtime_checkable

from kumiko.contracts.dtos import GroupExportJob
from kumiko.domain.value_objects import ExportPass
from kumiko.infrastructure.cut_paths import PassPlan, plan_group_passes

if TYPE_CHECKING:
    from kumiko.contracts.dtos import DesignOutput
    from kumiko.domain.entities import Group


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters turn one group of an analyzed design into a file. Exporters
    with ``per_pass`` set are run once for every planned manufacturing
    pass; the others once per group.

    Attributes:
        format_name: Registry name of the format (e.g., "svg", "dxf").
        file_extension: File extension without leading dot.
        per_pass: Whether the output depends on the pass and flip setting.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    per_pass: ClassVar[bool]

    @abstractmethod
    def export(self, job: GroupExportJob, path: Path) -> bool:
        """Export one group to a file.

        Args:
            job: Group, pass and design to export.
            path: Path where the file will be saved.

        Returns:
            False when there was nothing to draw and no file was written.
        """
        ...

    def export_string(self, job: GroupExportJob) -> str | None:
        """Export one group as a string, or None when there is no output.

        Raises:
            NotImplementedError: If the format does not support string export.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves using the @ExporterRegistry.register
    decorator.

    Example:
        @ExporterRegistry.register("svg")
        class SvgExporter:
            format_name = "svg"
            file_extension = "svg"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> type:
        """Decorator to register an exporter class.

        Args:
            format_name: The format name to register (e.g., "svg").

        Returns:
            Decorator function that registers the class.
        """

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        """Sorted list of registered format names."""
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        """Clear all registered exporters.

        This is primarily useful for testing.
        """
        cls._exporters.clear()


def safe_name(name: str) -> str:
    """Make a group or project name usable in a filename."""
    cleaned = re.sub(r"[^\w.-]+", "_", name.strip().replace("/", "-"))
    return cleaned.strip("_") or "group"


class ExportManager:
    """Manages export operations for every group of a design.

    Files are named ``{project}_{group}[_{pass}].{ext}``. The pass suffix
    is only used when a group is cut in more than one pass or a pass was
    requested explicitly.

    Attributes:
        output_dir: Directory where exported files will be saved.
    """

    def __init__(self, output_dir: Path) -> None:
        """Initialize the export manager.

        Args:
            output_dir: Directory where exported files will be saved.
                        Will be created if it doesn't exist.
        """
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        output: DesignOutput,
        project_name: str | None = None,
        group_ids: Iterable[str] | None = None,
        export_pass: ExportPass | str | None = None,
        flip: bool = False,
    ) -> dict[str, list[Path]]:
        """Export the design's groups to multiple formats.

        Args:
            formats: Format names to export (e.g., ["svg", "dxf"]).
            output: The analyzed design.
            project_name: Base name for output files; defaults to the
                design name.
            group_ids: Groups to export; all groups when omitted.
            export_pass: Force one pass instead of the planned passes.
            flip: Flip strips when a pass is forced.

        Returns:
            Written file paths per format name.

        Raises:
            KeyError: If any format or group is not known.
            OSError: If file operations fail.
        """
        # Unknown formats fail before anything is written
        exporters = [ExporterRegistry.get(name)() for name in formats]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        project = safe_name(project_name or output.project_name)

        layout = output.design.layout
        groups = (
            [layout.get_group(group_id) for group_id in group_ids]
            if group_ids is not None
            else list(layout.groups.values())
        )

        results: dict[str, list[Path]] = {name: [] for name in formats}
        for group in groups:
            plans = self._plans_for(group, output, export_pass, flip)
            for exporter in exporters:
                group_plans = plans if exporter.per_pass else [PassPlan(ExportPass.ALL)]
                for plan in group_plans:
                    path = self._path_for(project, group, plan, exporter.file_extension)
                    job = _make_job(output, group, plan)
                    logger.info(f"Exporting {exporter.format_name}: {path}")
                    if exporter.export(job, path):
                        results[exporter.format_name].append(path)
                    else:
                        logger.warning(
                            f"Group '{group.name}' has nothing to cut for the "
                            f"{plan.export_pass.value} pass; skipped {path.name}"
                        )
        return results

    def export_single(
        self,
        format_name: str,
        output: DesignOutput,
        project_name: str | None = None,
    ) -> list[Path]:
        """Export every group to a single format."""
        results = self.export_all([format_name], output, project_name)
        return results[format_name]

    @staticmethod
    def _plans_for(
        group: Group,
        output: DesignOutput,
        export_pass: ExportPass | str | None,
        flip: bool,
    ) -> list[PassPlan]:
        if export_pass is None:
            return plan_group_passes(group, output.strips)
        forced = ExportPass(export_pass)
        suffix = "" if forced == ExportPass.ALL else forced.value
        return [PassPlan(export_pass=forced, flip=flip, suffix=suffix)]

    def _path_for(self, project: str, group: Group, plan: PassPlan, extension: str) -> Path:
        stem = f"{project}_{safe_name(group.name)}"
        if plan.suffix:
            stem = f"{stem}_{plan.suffix}"
        return self.output_dir / f"{stem}.{extension}"


def _make_job(output: DesignOutput, group: Group, plan: PassPlan) -> GroupExportJob:
    return GroupExportJob(
        output=output,
        group=group,
        export_pass=plan.export_pass,
        flip=plan.flip,
    )
