"""Application layer - asset use cases and the ports they depend on."""

from emojistore.application.layout import StoreLayout
from emojistore.application.use_cases import AssetService, ReconcileUseCase

__all__ = [
    "StoreLayout",
    "AssetService",
    "ReconcileUseCase",
]
