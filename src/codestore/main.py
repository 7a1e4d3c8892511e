"""FastAPI application entry point for Code Store."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api import router
from .config import Settings, get_settings
from .exceptions import CodeStoreException
from .logging_config import get_logger, setup_logging
from .models import ErrorResponse
from .models.image import URL_PREFIX
from .services import CodeStore
from .storage import FileStorage, TimestampStore

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def build_code_store(settings: Settings) -> CodeStore:
    """Create the code store and the directories it needs."""
    storage = FileStorage(settings.content_dir)
    storage.ensure_directories()

    timestamps = TimestampStore(settings.timestamp_dir)
    timestamps.ensure_directories()

    return CodeStore(
        storage,
        timestamps,
        max_upload_bytes=settings.max_upload_bytes,
        auto_code_attempts=settings.auto_code_attempts,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    code_store = build_code_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler for startup/shutdown events."""
        logger.info(
            "codestore_starting",
            version=__version__,
            content_dir=str(settings.content_dir.resolve()),
            persist_metadata=settings.persist_metadata,
        )
        yield
        logger.info("codestore_stopping")

    app = FastAPI(
        title="Code Store API",
        description="Image hosting keyed by 4-digit codes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.code_store = code_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with its outcome."""
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_completed",
            status=response.status_code,
            client=request.client.host if request.client else None,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response

    @app.exception_handler(CodeStoreException)
    async def code_store_exception_handler(
        request: Request,
        exc: CodeStoreException,
    ) -> JSONResponse:
        """Handle all CodeStoreException subclasses with proper error response."""
        logger.warning("request_failed", error=exc.message, code=exc.error_code.value)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                detail=exc.message,
                code=exc.error_code.value,
            ).model_dump(),
        )

    app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        """Serve the landing page."""
        return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    app.mount(URL_PREFIX, StaticFiles(directory=settings.content_dir), name="uploads")

    return app


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
