"""
Thumbmark v1 - Capture Service

Headless-browser thumbnail capture and the on-disk thumbnail store.
"""

from .capture import BaseCapturer, PlaywrightCapturer
from .thumbnails import ThumbnailStore

__all__ = ["BaseCapturer", "PlaywrightCapturer", "ThumbnailStore"]
