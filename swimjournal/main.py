"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) makes it easy
to build apps with different settings in tests.

For local development:
    uvicorn swimjournal.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.routes import backups, exports, health
from .config.settings import get_settings

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=get_settings().log_level.upper(),
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    settings = get_settings()

    logger.info(
        "SwimJournal export API starting",
        extra={
            "version": __version__,
            "backup_directory": str(settings.backup_directory),
        }
    )

    yield

    logger.info("SwimJournal export API shutting down")


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=__version__,
        description="""
        Export and backup for the swim training journal.

        ## Endpoints

        - `POST /api/v1/exports/training.csv` - trainings as CSV
        - `POST /api/v1/exports/competitions.csv` - race results as CSV
        - `POST /api/v1/exports/export.json` - everything as JSON
        - `POST /api/v1/exports/bundle.zip` - all three files in one ZIP
        - `POST /api/v1/backups?format=zipBundle` - write a timestamped backup

        ## Authentication

        All export endpoints require an API key in the `X-API-Key` header.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        exports.router,
        prefix="/api/v1/exports",
        tags=["Exports"],
    )

    app.include_router(
        backups.router,
        prefix="/api/v1/backups",
        tags=["Backups"],
    )

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint - point at the docs."""
        return {
            "message": settings.api_title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Catch-all exception handler.

        Logs the full error server-side but returns a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error."}
        )

    logger.info(
        "FastAPI application created",
        extra={"title": settings.api_title, "version": __version__}
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "swimjournal.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
