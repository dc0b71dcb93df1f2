"""API routers for the REST API."""

from kumiko.web.routers.export import router as export_router
from kumiko.web.routers.strips import router as strips_router
from kumiko.web.routers.validate import router as validate_router

__all__ = [
    "export_router",
    "strips_router",
    "validate_router",
]
