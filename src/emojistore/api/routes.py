"""
HTTP routes for the emoji store.

Thin glue: each route resolves the process container and calls one asset
or reconcile operation. Errors propagate as EmojiStoreError and are mapped
to responses by the handlers registered in ``create_app``.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from pydantic import BaseModel

from emojistore.infrastructure import Container, Settings

router = APIRouter()

SECONDS_PER_DAY = 60 * 60 * 24


# ============================================================================
# Response Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response with store status."""

    status: str
    timestamp: str
    services: dict[str, str]


# ============================================================================
# Dependencies
# ============================================================================


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def cache_max_age() -> int:
    """Browser cache lifetime: 15 days, jittered by up to a day either way."""
    return round(SECONDS_PER_DAY * (15 + (random.random() * 2 - 1)))


# ============================================================================
# Emoji Endpoints
# ============================================================================


@router.get("/", response_class=PlainTextResponse)
def hello() -> str:
    return "Hello Emoji Users!!"


@router.post("/emoji/{filename}", response_class=PlainTextResponse)
async def create_emoji(
    filename: str,
    request: Request,
    size: str | None = Query(default=None, description="Rendition size: 24, 36, 48 or full"),
    container: Container = Depends(get_container),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Upload a raw ``image/*`` body as ``<name>.<extension>``."""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("image/"):
        return PlainTextResponse("Content-Type must be image/*", status_code=415)

    limit = settings.max_upload_bytes
    too_large = PlainTextResponse(f"Image larger than {limit} bytes", status_code=413)
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        return too_large

    # Chunked bodies carry no length; stop reading once past the limit.
    data = bytearray()
    async for chunk in request.stream():
        data.extend(chunk)
        if len(data) > limit:
            return too_large

    asset = await run_in_threadpool(
        container.assets.create_from_filename, filename, bytes(data), size
    )
    return PlainTextResponse(f"successfully inserted emoji {asset.name}")


@router.get("/emoji/{name}")
def get_emoji(
    name: str,
    size: str | None = Query(default=None),
    container: Container = Depends(get_container),
) -> Response:
    asset = container.assets.fetch(name, size)
    return Response(
        content=asset.data,
        media_type=asset.content_type,
        headers={"Cache-Control": f"public, max-age={cache_max_age()}"},
    )


@router.delete("/emoji/{name}", response_class=PlainTextResponse)
def delete_emoji(name: str, container: Container = Depends(get_container)) -> str:
    container.assets.delete(name)
    return f"deleted emoji {name}"


@router.get("/emojis")
def list_emojis(container: Container = Depends(get_container)) -> list[str]:
    return container.assets.list_names()


@router.get("/emoji-blobs")
def list_emoji_blobs(
    size: str | None = Query(default=None),
    container: Container = Depends(get_container),
) -> list[str]:
    return container.assets.list_blobs(size)


@router.post("/init")
def init_index(container: Container = Depends(get_container)) -> Response:
    """Load the hot index from blob storage unless it is already populated."""
    result = container.reconcile.run()
    if result.already_initialized:
        return Response(status_code=304)
    logger.info(f"/init loaded {result.created_count} blobs")
    return JSONResponse(list(result.created), status_code=201)


# ============================================================================
# Health Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse, tags=["health"])
def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
    )


@router.get("/health/ready", response_model=ReadinessResponse, tags=["health"])
def readiness_check(container: Container = Depends(get_container)) -> ReadinessResponse:
    """Readiness check with store connectivity status."""
    services = container.health()
    healthy = all(status == "healthy" for status in services.values())
    return ReadinessResponse(
        status="ready" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        services=services,
    )
