"""
Thumbmark v1 - Bookmark Routes

Routes for listing, adding and deleting bookmarks.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse

from capture_service.capture import BaseCapturer
from capture_service.thumbnails import ThumbnailStore
from ingest.pipeline import add_bookmark, delete_bookmark
from shared.errors import (
    CaptureError,
    DuplicateError,
    ThumbmarkError,
    ValidationError,
)
from shared.store import BookmarkStore

from ..dependencies import get_capturer, get_store, get_thumbnails, render_index
from ..models import AddBookmarkResponse, BookmarkDisplay, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


@router.get("", response_model=list[BookmarkDisplay])
def list_bookmarks(store: BookmarkStore = Depends(get_store)):
    """List all bookmarks with their thumbnail references."""
    return [BookmarkDisplay.from_bookmark(b) for b in store.list_all()]


@router.post(
    "",
    response_model=AddBookmarkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "URL missing"},
        409: {"model": ErrorResponse, "description": "URL already bookmarked"},
        500: {"model": ErrorResponse, "description": "Capture or storage failure"},
    },
)
def create_bookmark(
    url: str = Form(""),
    store: BookmarkStore = Depends(get_store),
    thumbnails: ThumbnailStore = Depends(get_thumbnails),
    capturer: BaseCapturer = Depends(get_capturer),
):
    """
    Capture a thumbnail for the URL and store the bookmark.

    Capture happens before the row is inserted, so a page that cannot be
    rendered never creates a bookmark.
    """
    try:
        bookmark = add_bookmark(url, store, thumbnails, capturer)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except DuplicateError:
        return JSONResponse(status_code=409, content={"error": "This URL is already bookmarked"})
    except CaptureError as e:
        logger.warning(f"Capture failed for {url}: {e.reason}")
        return JSONResponse(status_code=500, content={"error": "Failed to capture screenshot"})
    except ThumbmarkError as e:
        logger.error(f"Failed to add bookmark for {url}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to add bookmark"})

    return AddBookmarkResponse(
        message="Bookmark added successfully",
        bookmark=BookmarkDisplay.from_bookmark(bookmark),
    )


@router.post("/{bookmark_id}/delete")
def remove_bookmark(
    request: Request,
    bookmark_id: str,
    store: BookmarkStore = Depends(get_store),
    thumbnails: ThumbnailStore = Depends(get_thumbnails),
):
    """
    Delete a bookmark and its thumbnail.

    Redirects to the listing whether or not the bookmark existed.
    """
    try:
        numeric_id = int(bookmark_id)
    except ValueError:
        logger.info(f"Ignoring delete of non-numeric bookmark id {bookmark_id!r}")
        return RedirectResponse(url="/", status_code=303)

    try:
        delete_bookmark(numeric_id, store, thumbnails)
    except ThumbmarkError as e:
        logger.error(f"Failed to delete bookmark {bookmark_id}: {e}")
        return render_index(request, status_code=500, error="Failed to delete bookmark", bookmarks=[])

    return RedirectResponse(url="/", status_code=303)
