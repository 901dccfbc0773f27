"""Emoji store: blob-backed image assets served from a hot index."""

__version__ = "0.1.0"
