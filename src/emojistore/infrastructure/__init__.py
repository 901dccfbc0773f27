# src/emojistore/infrastructure/__init__.py
"""Infrastructure layer - external stores, wiring and configuration."""

from emojistore.infrastructure.container import Container, build_container, layout_from_settings
from emojistore.infrastructure.logging_setup import configure_logging
from emojistore.infrastructure.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "configure_logging",
    # Wiring
    "Container",
    "build_container",
    "layout_from_settings",
]
