"""Design validation endpoint."""

from fastapi import APIRouter

from kumiko.application.config import load_design_from_dict, validate_design
from kumiko.web.schemas.requests import DesignRequest
from kumiko.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(request: DesignRequest) -> ValidationResultSchema:
    """Validate a design without deriving strips.

    Schema errors are reported by the ConfigError handler as 422.
    """
    config = load_design_from_dict(request.design)
    result = validate_design(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
