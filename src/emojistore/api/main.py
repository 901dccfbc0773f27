"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from emojistore.domain.exceptions import (
    Conflict,
    EmojiStoreError,
    InvalidInput,
    NotFound,
    UpstreamFailure,
)
from emojistore.infrastructure import Container, Settings, build_container, get_settings

ERROR_STATUS: dict[type[EmojiStoreError], int] = {
    InvalidInput: 400,
    NotFound: 404,
    Conflict: 409,
    UpstreamFailure: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build store clients on startup and close them on shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if app.state.container is None:
        app.state.container = build_container(settings)
    container: Container = app.state.container

    ensure_buckets = getattr(container.blobs, "ensure_buckets", None)
    if ensure_buckets is not None:
        try:
            ensure_buckets(container.layout.buckets.values())
            logger.info("Blob buckets ready")
        except UpstreamFailure as e:
            logger.warning(f"Bucket setup failed (non-fatal): {e}")

    if settings.reconcile_on_startup:
        try:
            result = container.reconcile.run()
            if result.already_initialized:
                logger.info("Hot index already initialized")
            else:
                logger.info(f"Startup reconciliation loaded {result.created_count} blobs")
        except EmojiStoreError as e:
            logger.warning(f"Startup reconciliation failed (non-fatal): {e}")

    yield

    logger.info("Shutting down...")
    container.close()
    logger.info("Shutdown complete")


async def handle_store_error(request: Request, exc: EmojiStoreError) -> JSONResponse:
    status = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
        500,
    )
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({status}): {exc.message}")
    return JSONResponse({"detail": exc.message}, status_code=status)


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    A prebuilt container can be passed in; otherwise the lifespan builds one
    from settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Emoji image store backed by S3 and served from Redis",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )
    app.add_exception_handler(EmojiStoreError, handle_store_error)

    from emojistore.api.routes import router

    app.include_router(router)

    return app


# Create app instance
app = create_app()
