"""Health check routes for the FastAPI application."""

from fastapi import APIRouter, Request

from ... import __version__
from ...config.environment import IS_PRODUCTION_ENVIRONMENT

router = APIRouter(tags=["health"])

@router.get("/")
async def health_check(request: Request):
    """Health check endpoint."""
    backend = getattr(request.app.state, 'backend', None)
    return {
        "status": "healthy",
        "environment": "production" if IS_PRODUCTION_ENVIRONMENT else "development",
        "store": backend.name if backend else None,
        "version": __version__
    }
