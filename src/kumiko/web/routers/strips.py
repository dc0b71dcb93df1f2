"""Strip derivation endpoint."""

from fastapi import APIRouter

from kumiko.web.dependencies import AnalyzeCommandDep, analyze_design_payload
from kumiko.web.schemas.requests import DesignRequest
from kumiko.web.schemas.responses import (
    IntersectionSchema,
    NotchSchema,
    StripBankEntrySchema,
    StripSchema,
    StripsResponseSchema,
)

router = APIRouter(prefix="/strips", tags=["strips"])


@router.post("", response_model=StripsResponseSchema)
async def derive_strips(
    request: DesignRequest,
    command: AnalyzeCommandDep,
) -> StripsResponseSchema:
    """Derive intersections, strips and the strip bank of a design.

    Args:
        request: Request containing the design document.
        command: Injected AnalyzeDesignCommand.

    Returns:
        Strips in line order, intersections and distinct strip counts.
    """
    output = analyze_design_payload(request.design, command)

    return StripsResponseSchema(
        strips=[
            StripSchema(
                id=strip.id,
                display_code=strip.display_code,
                source_line_id=strip.source_line_id,
                length=strip.length_mm,
                notches=[
                    NotchSchema(dist=n.dist, from_top=n.from_top) for n in strip.notches
                ],
            )
            for strip in output.strips
        ],
        intersections=[
            IntersectionSchema(
                id=i.id,
                x=i.x,
                y=i.y,
                line1_id=i.line1_id,
                line2_id=i.line2_id,
                line1_over=i.line1_over,
            )
            for i in output.intersections.values()
        ],
        strip_bank=[
            StripBankEntrySchema(
                strip_id=entry.strip.id,
                display_code=entry.strip.display_code,
                length=entry.strip.length_mm,
                needed=entry.needed_count,
                placed=entry.placed_count,
            )
            for entry in output.strip_bank
        ],
    )
