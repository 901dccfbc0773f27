"""Use cases composing the blob store, hot index and local cache."""

from emojistore.application.use_cases.manage_assets import AssetService
from emojistore.application.use_cases.reconcile import ReconcileUseCase

__all__ = [
    "AssetService",
    "ReconcileUseCase",
]
