"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT  # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..config.settings import DateConfig, StoreConfig
from ..errors import LoadFailure, NotFoundError, ValidationError
from ..stores import StoreBackend, create_backend
from ..utils.logging_config import setup_logging
from .. import __version__
from .routes import (
    auth,
    dashboard,
    events,
    health,
    registrations
)

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    DateConfig().validate()
    owns_backend = app.state.backend is None
    if owns_backend:
        try:
            config = StoreConfig()
            app.state.backend = create_backend(config)
            app.state.store_timeout = config.timeout
            logger.info("Store backend initialized successfully")
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise
    yield
    # Shutdown
    if owns_backend and app.state.backend is not None:
        app.state.backend.close()
        app.state.backend = None
        app.state.dashboard = None

def register_error_handlers(app: FastAPI) -> None:
    """Turn store errors into HTTP responses."""

    @app.exception_handler(NotFoundError)
    async def not_found_error(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(LoadFailure)
    async def load_failure(request: Request, exc: LoadFailure):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        detail = "Storage is unavailable"
        if request.method != "GET":
            detail += ", the change was not saved"
        return JSONResponse(status_code=503, content={"detail": detail})

def create_application(backend: Optional[StoreBackend] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        backend: Stores to serve. When omitted the backend is built from the
                 environment at startup and closed at shutdown.
    """
    app = FastAPI(
        title="BUC Events API",
        description="API for managing club events and rider registrations",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )
    app.state.backend = backend
    app.state.dashboard = None

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    register_error_handlers(app)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")
    app.include_router(registrations.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")

    return app

# Create the application instance
app = create_application()
