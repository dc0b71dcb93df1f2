"""FastAPI REST API for kumiko designs.

This module provides a REST API for deriving strips, validating designs
and exporting group cut files.

Usage:
    uvicorn kumiko.web:app --reload
"""

from kumiko.web.app import app, create_app

__all__ = ["app", "create_app"]
