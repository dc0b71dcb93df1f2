"""Pydantic schemas for the REST API."""

from kumiko.web.schemas.requests import DesignRequest, ExportRequest
from kumiko.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    IntersectionSchema,
    NotchSchema,
    StripBankEntrySchema,
    StripSchema,
    StripsResponseSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "DesignRequest",
    "ExportRequest",
    # Responses
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "IntersectionSchema",
    "NotchSchema",
    "StripBankEntrySchema",
    "StripSchema",
    "StripsResponseSchema",
    "ValidationResultSchema",
]
