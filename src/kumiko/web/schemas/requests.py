"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from kumiko.domain.value_objects import ExportPass


class DesignRequest(BaseModel):
    """Request carrying a full design document."""

    design: dict[str, Any] = Field(..., description="Design file JSON (version 1)")


class ExportRequest(BaseModel):
    """Request for exporting one group of a design."""

    design: dict[str, Any] = Field(..., description="Design file JSON (version 1)")
    group_id: str | None = Field(
        default=None, description="Group to export; the active group when omitted"
    )
    export_pass: ExportPass = Field(
        default=ExportPass.ALL, description="Which cuts to include"
    )
    flip: bool = Field(default=False, description="Treat every strip as turned over")
