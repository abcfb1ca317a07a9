"""
Thumbmark v1 - Web UI Dependencies

Accessors for the collaborators the application was created with, plus the
index page renderer shared by the routes.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import HTMLResponse

from capture_service.capture import BaseCapturer
from capture_service.thumbnails import ThumbnailStore
from shared.store import BookmarkStore

from .models import BookmarkDisplay


def get_store(request: Request) -> BookmarkStore:
    return request.app.state.store


def get_thumbnails(request: Request) -> ThumbnailStore:
    return request.app.state.thumbnails


def get_capturer(request: Request) -> BaseCapturer:
    return request.app.state.capturer


def render_index(
    request: Request,
    status_code: int = 200,
    message: Optional[str] = None,
    error: Optional[str] = None,
    bookmarks: Optional[list[BookmarkDisplay]] = None,
) -> HTMLResponse:
    """Render the listing page with an optional flash message or error."""
    if bookmarks is None:
        bookmarks = [
            BookmarkDisplay.from_bookmark(b) for b in get_store(request).list_all()
        ]

    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "bookmarks": bookmarks,
            "message": message,
            "error": error,
        },
        status_code=status_code,
    )
