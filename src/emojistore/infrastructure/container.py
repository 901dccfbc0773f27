"""Builds store clients once and wires them into the use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from loguru import logger

from emojistore.application.layout import StoreLayout
from emojistore.application.ports import BlobStore, HotIndex, LocalCache
from emojistore.application.use_cases import AssetService, ReconcileUseCase
from emojistore.infrastructure.blobs import s3_store_from_settings
from emojistore.infrastructure.cache import TTLLocalCache
from emojistore.infrastructure.index import redis_index_from_settings
from emojistore.infrastructure.settings import Settings


@dataclass
class Container:
    """Process-wide store handles plus the use cases built on them."""

    blobs: BlobStore
    index: HotIndex
    cache: LocalCache
    layout: StoreLayout
    assets: AssetService
    reconcile: ReconcileUseCase

    @classmethod
    def wire(
        cls,
        blobs: BlobStore,
        index: HotIndex,
        cache: LocalCache,
        layout: StoreLayout,
    ) -> Container:
        return cls(
            blobs=blobs,
            index=index,
            cache=cache,
            layout=layout,
            assets=AssetService(blobs, index, cache, layout),
            reconcile=ReconcileUseCase(blobs, index, cache, layout),
        )

    def health(self) -> dict[str, str]:
        """Status per backing store; stores without a health check are skipped."""
        services: dict[str, str] = {}
        checks: dict[str, Callable[[], dict[str, Any]] | None] = {
            "redis": getattr(self.index, "health_check", None),
            "s3": self._s3_check(),
        }
        for name, check in checks.items():
            if check is None:
                continue
            try:
                services[name] = check().get("status", "unknown")
            except Exception as e:
                logger.warning(f"{name} health check failed: {e}")
                services[name] = f"error: {str(e)[:50]}"
        return services

    def _s3_check(self) -> Callable[[], dict[str, Any]] | None:
        check = getattr(self.blobs, "health_check", None)
        if check is None:
            return None
        return lambda: check(self.layout.buckets.values())

    def close(self) -> None:
        close = getattr(self.index, "close", None)
        if close is not None:
            close()


def layout_from_settings(settings: Settings) -> StoreLayout:
    return StoreLayout(
        buckets=settings.bucket_names,
        encoding=settings.index_encoding,
        sentinel_name=settings.sentinel_name,
    )


def build_container(settings: Settings) -> Container:
    """Create the Redis, S3 and local cache clients for this process."""
    layout = layout_from_settings(settings)
    logger.info(
        f"Store layout: sizes={[s.value for s in layout.sizes]} "
        f"encoding={layout.encoding.value} sentinel={layout.sentinel_key}"
    )
    return Container.wire(
        blobs=s3_store_from_settings(settings),
        index=redis_index_from_settings(settings),
        cache=TTLLocalCache(
            maxsize=settings.local_cache_maxsize,
            ttl=settings.local_cache_ttl_seconds,
        ),
        layout=layout,
    )
