"""Export format endpoints."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from kumiko.contracts import GroupExportJob
from kumiko.infrastructure.exporters import ExporterRegistry, safe_name
from kumiko.web.dependencies import AnalyzeCommandDep, analyze_design_payload
from kumiko.web.exceptions import UnsupportedFormatError
from kumiko.web.schemas.requests import ExportRequest
from kumiko.web.schemas.responses import ExportFormatsSchema

router = APIRouter(prefix="/export", tags=["export"])

MEDIA_TYPES = {
    "svg": "image/svg+xml",
    "dxf": "application/dxf",
    "json": "application/json",
}


def _export(format_name: str, request: ExportRequest, command: AnalyzeCommandDep) -> Response:
    """Export one group of the requested design, or 204 when nothing is cut."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    output = analyze_design_payload(request.design, command)
    layout = output.design.layout
    group_id = request.group_id or layout.active_group_id
    try:
        group = layout.get_group(group_id)
    except KeyError as e:
        raise HTTPException(
            status_code=404,
            detail={"error": e.args[0], "error_type": "not_found"},
        ) from e

    exporter = ExporterRegistry.get(format_name)()
    job = GroupExportJob(
        output=output,
        group=group,
        export_pass=request.export_pass,
        flip=request.flip,
    )
    content = exporter.export_string(job)
    if content is None:
        return Response(status_code=204)

    filename = f"{safe_name(output.project_name)}_{safe_name(group.name)}.{exporter.file_extension}"
    return Response(
        content=content,
        media_type=MEDIA_TYPES.get(format_name, "text/plain"),
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/svg")
async def export_svg(request: ExportRequest, command: AnalyzeCommandDep) -> Response:
    """Export a group's cut drawing as SVG."""
    return _export("svg", request, command)


@router.post("/dxf")
async def export_dxf(request: ExportRequest, command: AnalyzeCommandDep) -> Response:
    """Export a group's cut drawing as DXF."""
    return _export("dxf", request, command)


@router.post("/{format_name}")
async def export_generic(
    format_name: str,
    request: ExportRequest,
    command: AnalyzeCommandDep,
) -> Response:
    """Export a group to any registered format.

    Raises:
        UnsupportedFormatError: If format is not registered.
    """
    return _export(format_name, request, command)
