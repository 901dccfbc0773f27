"""Shared fixtures: in-memory stores behind the application ports."""

from __future__ import annotations

import pytest

from emojistore.application.layout import StoreLayout
from emojistore.application.use_cases import AssetService, ReconcileUseCase
from emojistore.infrastructure.cache import TTLLocalCache
from tests.fakes import MULTI_BUCKETS, SINGLE_BUCKETS, InMemoryBlobStore, InMemoryHotIndex


@pytest.fixture
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def index() -> InMemoryHotIndex:
    return InMemoryHotIndex()


@pytest.fixture
def cache() -> TTLLocalCache:
    return TTLLocalCache(maxsize=100, ttl=60)


@pytest.fixture
def single_layout() -> StoreLayout:
    return StoreLayout(buckets=SINGLE_BUCKETS)


@pytest.fixture
def multi_layout() -> StoreLayout:
    return StoreLayout(buckets=MULTI_BUCKETS)


@pytest.fixture
def single_service(blobs, index, cache, single_layout) -> AssetService:
    return AssetService(blobs, index, cache, single_layout)


@pytest.fixture
def multi_service(blobs, index, cache, multi_layout) -> AssetService:
    return AssetService(blobs, index, cache, multi_layout)


@pytest.fixture
def single_reconcile(blobs, index, cache, single_layout) -> ReconcileUseCase:
    return ReconcileUseCase(blobs, index, cache, single_layout)


@pytest.fixture
def multi_reconcile(blobs, index, cache, multi_layout) -> ReconcileUseCase:
    return ReconcileUseCase(blobs, index, cache, multi_layout)
