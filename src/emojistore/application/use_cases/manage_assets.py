"""Create, fetch, delete and list emoji assets."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from emojistore.application.layout import StoreLayout
from emojistore.application.ports import BlobStore, HotIndex, LocalCache
from emojistore.domain.exceptions import Conflict, InvalidInput, NotFound, UpstreamFailure
from emojistore.domain.keys import (
    decode_bytes,
    encode_bytes,
    serve_extension,
    split_filename,
    strip_size_suffix,
)
from emojistore.domain.models import Asset, IndexEntry, Size


class AssetService:
    """Asset operations over the blob store, hot index and local cache.

    Writes are durable first: bytes go to the blob store before the index
    entry is created. Reads never touch the blob store.
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

    def create(
        self,
        name: str,
        extension: str,
        data: bytes,
        size: Optional[Size | str] = None,
    ) -> Asset:
        """Store a new asset. Existing keys are never overwritten."""
        if not name or not extension:
            raise InvalidInput("Name and extension required")
        if not data:
            raise InvalidInput("Image body required")
        resolved = self.layout.resolve_size(size)
        asset = Asset(name=name, extension=extension, size=resolved, data=data)
        key = self.layout.key(name, resolved)

        if self.index.exists(key):
            raise Conflict("emoji already exists")

        self.blobs.put(self.layout.bucket(resolved), asset.filename, data)

        entry = IndexEntry(
            extension=asset.extension,
            data=encode_bytes(data, self.layout.encoding),
        )
        try:
            created = self.index.put_if_absent(key, entry)
        except UpstreamFailure:
            logger.warning(f"Blob {asset.filename} stored but index write failed; left orphaned")
            raise
        if not created:
            # Lost a race with a concurrent create for the same key.
            raise Conflict("emoji already exists")

        self.cache.invalidate(key)
        logger.info(f"Inserted emoji {key} ({len(data)} bytes)")
        return asset

    def create_from_filename(
        self,
        filename: str,
        data: bytes,
        size: Optional[Size | str] = None,
    ) -> Asset:
        name, extension = split_filename(filename)
        return self.create(name, extension, data, size)

    def fetch(self, name: str, size: Optional[Size | str] = None) -> Asset:
        """Return the asset with its extension normalized for serving."""
        resolved = self.layout.resolve_size(size)
        key = self.layout.key(name, resolved)

        entry = self.cache.get(key)
        if entry is None:
            entry = self.index.get(key)
            if entry is None:
                raise NotFound("not found")
            self.cache.set(key, entry)
            logger.debug(f"Cache miss for {key}, populated from index")
        else:
            logger.debug(f"Cache hit for {key}")

        return Asset(
            name=name,
            extension=serve_extension(entry.extension),
            size=resolved,
            data=decode_bytes(entry.data, self.layout.encoding),
        )

    def delete(self, name: str) -> list[str]:
        """Remove an asset in every enabled size.

        Each size is attempted even if another fails; failures are reported
        together afterwards. Returns the blob filenames that were deleted.
        """
        if not name:
            raise InvalidInput("Name required")

        deleted: list[str] = []
        failures: list[str] = []
        for size in self.layout.sizes:
            key = self.layout.key(name, size)
            bucket = self.layout.bucket(size)
            try:
                filenames = self._blob_filenames(name, key, bucket)
                for filename in filenames:
                    self.blobs.delete(bucket, filename)
                    deleted.append(filename)
            except UpstreamFailure as e:
                logger.error(f"Failed to delete blobs for {key} in {bucket}: {e}")
                failures.append(f"{bucket}: {e.message}")
            try:
                self.index.delete(key)
            except UpstreamFailure as e:
                logger.error(f"Failed to delete index entry {key}: {e}")
                failures.append(f"index {key}: {e.message}")
            self.cache.invalidate(key)

        if failures:
            raise UpstreamFailure("Delete incomplete: " + "; ".join(failures))
        logger.info(f"Deleted emoji {name} ({len(deleted)} blobs)")
        return deleted

    def _blob_filenames(self, name: str, key: str, bucket: str) -> list[str]:
        entry = self.index.get(key)
        if entry is not None:
            return [f"{name}.{entry.extension}"]
        # No index entry: look for blobs left behind by a failed create.
        matches = []
        for filename in self.blobs.list(bucket, prefix=f"{name}."):
            stem, _, _ = filename.rpartition(".")
            if stem == name:
                matches.append(filename)
        return matches

    def list_names(self) -> list[str]:
        keys = self.index.list_keys("*")
        return sorted({strip_size_suffix(k, self.layout.multi_size) for k in keys})

    def list_blobs(self, size: Optional[Size | str] = None) -> list[str]:
        resolved = self.layout.resolve_size(size)
        return list(self.blobs.list(self.layout.bucket(resolved)))
