"""
Thumbmark v1 - Shared Utilities

Bookmark store and error types used across the CLI, pipelines and web UI.
"""

from .errors import (
    ThumbmarkError,
    ValidationError,
    DuplicateError,
    CaptureError,
    FormatError,
    ThumbnailIOError,
    NotFoundError,
    StoreError,
)
from .store import Bookmark, BookmarkStore

__all__ = [
    "ThumbmarkError",
    "ValidationError",
    "DuplicateError",
    "CaptureError",
    "FormatError",
    "ThumbnailIOError",
    "NotFoundError",
    "StoreError",
    "Bookmark",
    "BookmarkStore",
]
