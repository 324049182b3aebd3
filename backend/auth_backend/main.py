"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from auth_backend.config import Settings, get_settings
from auth_backend.database import Database
from auth_backend.api import api_router
from auth_backend.exceptions import AuthError
from auth_backend.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    settings: Settings = app.state.settings
    database = Database(settings.database_url, echo=settings.debug)
    await database.create_all()
    app.state.db = database
    logger.info("Credential store opened")
    yield
    # Shutdown
    await database.dispose()


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Render auth errors as ``{"message": ...}`` with their status code."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (defaults to the environment)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="Credential-based authentication with signed session cookies",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthError, auth_error_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()

