"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Tests can pass their own Settings instead of the environment
- Explicit about initialization order

For local development:
    uvicorn src.main:app --reload --port 3001

Or run the module directly, which honours HOST and PORT:
    python -m src.main
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .api.routes import health, video
from .config.settings import REQUIRED_ENV_EXAMPLES, Settings, get_settings
from .core.videos import VideoURLError
from .infrastructure.datastore import create_datastore_connection
from .infrastructure.storage.client import create_storage_client

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

HEALTH_BANNER = "EastCulture backend is running."

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def configure_logging(log_level: str) -> str:
    """
    Configure root logging from the LOG_LEVEL setting.

    An unknown level name falls back to INFO with a warning instead of
    stopping the process. Returns the level name actually applied.
    """
    logging.basicConfig(format=LOG_FORMAT)

    level_name = (log_level or "").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logger.warning("Unknown LOG_LEVEL %r, using INFO", log_level)
        level_name, level = "INFO", logging.INFO

    logging.getLogger().setLevel(level)
    return level_name


def log_missing_configuration(missing_fields: list[str]) -> None:
    """Warn about missing settings, with an example .env to copy from."""
    example = "\n".join(f"{name}={value}" for name, value in REQUIRED_ENV_EXAMPLES.items())
    logger.warning(
        "Missing required configuration: %s\nAdd them to .env, for example:\n\n%s\n",
        ", ".join(missing_fields),
        example,
        extra={"missing_fields": missing_fields},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup never fails: missing configuration is logged and the MongoDB
    connection is attempted in the background. Shutdown cancels a
    still-pending connection attempt and closes the client.
    """
    settings: Settings = app.state.settings

    logger.info(
        "EastCulture API starting",
        extra={
            "version": settings.api_version,
            "mock_mode": {"storage": settings.storage_mock_mode},
        }
    )

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        # Keep serving; signing requests will fail individually
        log_missing_configuration(missing_fields)

    datastore = app.state.datastore
    connect_task = asyncio.create_task(datastore.connect())

    yield

    logger.info("EastCulture API shutting down")

    if not connect_task.done():
        connect_task.cancel()
        try:
            await connect_task
        except asyncio.CancelledError:
            pass
    datastore.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Builds the storage client and the datastore collaborator from the
    settings and keeps them on app.state. Neither does any I/O here.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Signed download URLs for EastCulture course videos.

        The frontend never holds bucket credentials. It asks
        `GET /api/video-url?key=<object key>` for a URL that is valid
        for 10 minutes and plays the video from S3 directly.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage_client = create_storage_client(
        config=settings.storage_config(),
        mock_mode=settings.storage_mock_mode,
    )
    app.state.datastore = create_datastore_connection(settings.datastore_config())

    # CORS middleware
    # Only the listed frontends may call the API. Authorization is
    # allowed for the upcoming purchase check even though no route reads it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        video.router,
        prefix="/api",
        tags=["Video"],
    )

    # Root endpoint
    @app.get("/", include_in_schema=False, response_class=PlainTextResponse)
    async def root():
        """Plain-text banner, independent of configuration."""
        return HEALTH_BANNER

    @app.exception_handler(VideoURLError)
    async def video_url_error_handler(request: Request, exc: VideoURLError):
        """Render service errors as {"error": ..., "detail": ...}."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        We log the full error server-side but return a generic message.
        Starlette sends this response from ServerErrorMiddleware, outside
        CORSMiddleware, so it carries no Access-Control-Allow-Origin and a
        browser frontend only sees a failed request. Expected failures are
        VideoURLError subclasses, which are rendered inside the CORS layer.
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
            content={"error": "Internal server error"}
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": settings.api_version,
            "cors_origins": settings.cors_origins_list,
        }
    )

    return app


# Create the application instance
# This is what uvicorn imports
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    level_name = configure_logging(settings.log_level)

    logger.info("Backend running at http://localhost:%s", settings.port)
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        log_level=level_name.lower(),
    )
