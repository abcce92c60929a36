"""FastAPI application with async endpoints."""

import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import AppSettings, get_settings
from ..scraper import cleanup_scraping_orchestrator, get_scraping_orchestrator
from ..storage import cleanup_storage_manager, get_storage_manager
from ..utils.logging import (
    bind_request_context,
    clear_request_context,
    get_structured_logger,
    setup_logging,
)
from .routers import export_router, sessions_router, system_router
from .types import APIError, ErrorResponse

logger = get_structured_logger(__name__)

API_PREFIX = "/api"

_ERROR_CODES = {400: "BAD_REQUEST", 404: "NOT_FOUND", 500: "INTERNAL_ERROR"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events.

    Storage and orchestrator already placed on ``app.state`` are kept and
    left for their owner to clean up.
    """
    logger.info("Starting sitelens API application")
    owns_storage = getattr(app.state, "storage", None) is None
    owns_orchestrator = getattr(app.state, "orchestrator", None) is None

    try:
        if owns_storage:
            app.state.storage = await get_storage_manager()
        if owns_orchestrator:
            app.state.orchestrator = await get_scraping_orchestrator(app.state.storage)

        logger.info("sitelens API application started successfully")
        yield

    finally:
        logger.info("Shutting down sitelens API application")

        if owns_orchestrator:
            await cleanup_scraping_orchestrator()
            app.state.orchestrator = None
        if owns_storage:
            await cleanup_storage_manager()
            app.state.storage = None

        logger.info("sitelens API application shutdown complete")


def create_app(settings: AppSettings = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="sitelens API",
        description="Scrape images, colors, typography and content from web pages",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_middleware(app, settings)
    setup_exception_handlers(app)
    setup_routers(app)

    logger.info("FastAPI application created and configured")
    return app


def setup_middleware(app: FastAPI, settings: AppSettings) -> None:
    """Setup middleware for the FastAPI application."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        bind_request_context(request_id=str(uuid.uuid4())[:8])
        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time=time.perf_counter() - start_time,
            )
            return response

        except Exception as e:
            logger.error(
                "HTTP request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                process_time=time.perf_counter() - start_time,
            )
            raise

        finally:
            clear_request_context()


def _error_response(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup global exception handlers."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed request bodies as client errors with field details."""
        errors = jsonable_encoder(exc.errors())

        logger.warning(
            "Request validation failed",
            path=request.url.path,
            method=request.method,
            errors=len(errors),
        )

        return _error_response(
            400,
            ErrorResponse(
                error="VALIDATION_ERROR",
                message="Invalid request data",
                details={"errors": errors},
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized error format."""
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            method=request.method,
        )

        return _error_response(
            exc.status_code,
            ErrorResponse(
                error=_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        """Handle API-specific errors."""
        logger.warning(
            "API error", error=str(exc), path=request.url.path, method=request.method
        )

        return _error_response(
            400,
            ErrorResponse(
                error="API_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
            ),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "Unexpected error",
            error=str(exc),
            path=request.url.path,
            method=request.method,
            exc_info=True,
        )

        return _error_response(
            500,
            ErrorResponse(
                error="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        )


def setup_routers(app: FastAPI) -> None:
    """Setup API routers."""

    app.include_router(system_router, tags=["System"])

    app.include_router(
        sessions_router, prefix=f"{API_PREFIX}/sessions", tags=["Scraping Sessions"]
    )

    app.include_router(export_router, prefix=f"{API_PREFIX}/export", tags=["Export"])


def main(host: str = None, port: int = None, reload: bool = False) -> None:
    """Run the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=settings.json_logs)

    config = {
        "app": "sitelens.api.app:create_app",
        "factory": True,
        "host": host or settings.api.host,
        "port": port or settings.api.port,
        "reload": reload or settings.development,
        "log_level": settings.log_level.lower(),
        "access_log": True,
    }

    logger.info(f"Server will be available at http://{config['host']}:{config['port']}")
    logger.info(f"API documentation at http://{config['host']}:{config['port']}/docs")

    uvicorn.run(**config)


if __name__ == "__main__":
    main()
