"""Populate the hot index from the blob store when it is empty."""

from __future__ import annotations

from loguru import logger

from emojistore.application.layout import StoreLayout
from emojistore.application.ports import BlobStore, HotIndex, LocalCache
from emojistore.domain.exceptions import InvalidInput
from emojistore.domain.keys import encode_bytes, split_filename
from emojistore.domain.models import IndexEntry, ReconcileResult


class ReconcileUseCase:
    """One-pass sync of every bucket into the hot index.

    Flow:
    1. If the sentinel key is in the index, assume everything is loaded
    2. Otherwise walk each bucket, smallest size first and full last
    3. Download every object and put it into the index under its size key

    Any store error aborts the pass. Nothing is rolled back; index writes are
    unconditional so a rerun simply redoes the work.
    """

    def __init__(
        self,
        blobs: BlobStore,
        index: HotIndex,
        cache: LocalCache,
        layout: StoreLayout,
    ) -> None:
        self.blobs = blobs
        self.index = index
        self.cache = cache
        self.layout = layout

    def is_initialized(self) -> bool:
        return self.index.exists(self.layout.sentinel_key)

    def run(self) -> ReconcileResult:
        sentinel = self.layout.sentinel_key
        if self.index.exists(sentinel):
            logger.info(f"Sentinel {sentinel} present, index already initialized")
            return ReconcileResult(already_initialized=True)

        logger.info(f"Sentinel {sentinel} missing, loading index from blob store")
        created: list[str] = []
        for size in self.layout.sizes:
            bucket = self.layout.bucket(size)
            for filename in self.blobs.list(bucket):
                try:
                    name, extension = split_filename(filename)
                except InvalidInput:
                    logger.warning(f"Skipping {bucket}/{filename}: no name or extension")
                    continue

                data = self.blobs.get(bucket, filename)
                key = self.layout.key(name, size)
                self.index.put(
                    key,
                    IndexEntry(extension=extension, data=encode_bytes(data, self.layout.encoding)),
                )
                self.cache.invalidate(key)
                created.append(filename)
                logger.info(f"init loading: {bucket}/{filename}")

        if not self.index.exists(sentinel):
            logger.warning(
                f"Sentinel {sentinel} not found in blob store; the next init will resync again"
            )
        logger.info(f"Reconciliation loaded {len(created)} blobs")
        return ReconcileResult(already_initialized=False, created=tuple(created))

    def reset(self) -> None:
        """Drop the sentinel so the next run performs a full resync."""
        self.index.delete(self.layout.sentinel_key)
        self.cache.invalidate(self.layout.sentinel_key)
        logger.info(f"Removed sentinel {self.layout.sentinel_key}")
