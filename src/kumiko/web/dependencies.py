"""FastAPI dependency injection for design analysis."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from kumiko.application.commands import AnalyzeDesignCommand
from kumiko.application.config import (
    config_to_design,
    load_design_from_dict,
    validate_design,
)
from kumiko.contracts import DesignOutput
from kumiko.web.exceptions import DesignValidationError


@lru_cache(maxsize=1)
def get_analyze_command() -> AnalyzeDesignCommand:
    """Get cached AnalyzeDesignCommand instance."""
    return AnalyzeDesignCommand()


def analyze_design_payload(data: dict, command: AnalyzeDesignCommand) -> DesignOutput:
    """Parse, check and analyze a design document.

    Raises:
        ConfigError: If the document fails schema validation.
        DesignValidationError: If the design has structural errors.
    """
    config = load_design_from_dict(data)
    result = validate_design(config)
    if not result.is_valid:
        raise DesignValidationError(
            [{"path": e.path, "message": e.message} for e in result.errors]
        )
    return command.execute(config_to_design(config))


# Type aliases for cleaner endpoint signatures
AnalyzeCommandDep = Annotated[AnalyzeDesignCommand, Depends(get_analyze_command)]
