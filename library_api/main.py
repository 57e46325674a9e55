"""
FastAPI main application for the Library Book Catalog API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_api.config import APIConfig, config as default_config
from library_api.database import DatabaseInitializer, SqliteConnectionFactory
from library_api.endpoints import router as books_router
from library_api.models import ErrorResponse, HealthResponse, ValidationFailure
from library_api.services import BookService
from library_api.validation import BookValidator

# Setup logging
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    api_config: APIConfig = app.state.config
    logger.info("Starting Library API")

    try:
        connection_factory = SqliteConnectionFactory(
            api_config.connection_string,
            timeout=api_config.database_timeout
        )
        DatabaseInitializer(connection_factory).initialize()

        app.state.book_service = BookService(connection_factory)
        app.state.validator = BookValidator()
        logger.info("Database connection established", database=connection_factory.database_path)

    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("Shutting down Library API")


def _property_name(location) -> str:
    """Last meaningful element of a pydantic error location."""
    parts = [str(part) for part in location if part not in ("body", "query", "path")]
    return parts[-1] if parts else ""


def create_app(api_config: Optional[APIConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        api_config: Configuration to use, defaults to the environment-driven one

    Returns:
        Configured FastAPI application
    """
    api_config = api_config or default_config

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=api_config.api_version,
        lifespan=lifespan
    )
    app.state.config = api_config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    # Exception handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail),
                status_code=exc.status_code
            ).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies in the same shape as validation failures."""
        failures = [
            ValidationFailure(
                property_name=_property_name(error.get("loc", ())),
                error_message=error.get("msg", "Invalid value")
            ).model_dump(by_alias=True)
            for error in exc.errors()
        ]
        logger.info("Malformed request rejected", path=request.url.path, errors=len(failures))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=failures)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                detail=str(exc) if api_config.debug else None,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            ).model_dump()
        )

    # Health check endpoint (no authentication required)
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(request: Request):
        """Health check endpoint."""
        book_service: Optional[BookService] = getattr(request.app.state, "book_service", None)
        db_status = "unknown"
        if book_service:
            db_status = book_service.health_check().get("status", "unknown")

        return HealthResponse(
            status="healthy" if db_status == "healthy" else "degraded",
            timestamp=datetime.now(timezone.utc),
            version=api_config.api_version,
            database_status=db_status
        )

    app.include_router(books_router)

    return app


app = create_app()
