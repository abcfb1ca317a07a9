"""
Thumbmark v1 - Web UI Routes
"""

from .bookmarks import router as bookmarks_router
from .transfer import router as transfer_router

__all__ = ["bookmarks_router", "transfer_router"]
