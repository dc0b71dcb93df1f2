"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class NotchSchema(BaseModel):
    """A notch on a strip."""

    dist: float = Field(..., description="Distance from the strip start in mm")
    from_top: bool = Field(..., description="True when the top face is relieved")


class StripSchema(BaseModel):
    """A strip derived from one grid line."""

    id: str = Field(..., description="Geometry-derived strip id")
    display_code: str = Field(..., description="Short base-36 label")
    source_line_id: str = Field(..., description="Grid line the strip comes from")
    length: float = Field(..., description="Length after butt trimming in mm")
    notches: list[NotchSchema] = Field(default_factory=list)


class IntersectionSchema(BaseModel):
    """A resolved intersection between two lines."""

    id: str
    x: float
    y: float
    line1_id: str
    line2_id: str
    line1_over: bool


class StripBankEntrySchema(BaseModel):
    """A distinct strip with needed and placed counts."""

    strip_id: str
    display_code: str
    length: float
    needed: int
    placed: int


class StripsResponseSchema(BaseModel):
    """Response for strip derivation."""

    strips: list[StripSchema] = Field(default_factory=list)
    intersections: list[IntersectionSchema] = Field(default_factory=list)
    strip_bank: list[StripBankEntrySchema] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for design validation."""

    is_valid: bool = Field(..., description="Whether the design has no errors")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
