"""API routes for Photobook."""

from fastapi import APIRouter

from photobook.api.routes.layouts import router as layouts_router
from photobook.api.routes.catalog import router as catalog_router

# Main API router
api_router = APIRouter()

api_router.include_router(layouts_router, prefix="/layouts", tags=["Layouts"])
api_router.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])

__all__ = ["api_router"]
