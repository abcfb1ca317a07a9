"""
Thumbmark v1 - Import/Export Routes

Routes for importing and exporting Netscape bookmark files.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response

from capture_service.capture import BaseCapturer
from capture_service.thumbnails import ThumbnailStore
from ingest.pipeline import ExportPipeline, ImportPipeline
from shared.errors import FormatError, StoreError
from shared.store import BookmarkStore

from ..dependencies import get_capturer, get_store, get_thumbnails, render_index

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Import/Export"])


@router.post("/import")
def import_bookmarks(
    request: Request,
    file: Optional[UploadFile] = File(None),
    store: BookmarkStore = Depends(get_store),
    thumbnails: ThumbnailStore = Depends(get_thumbnails),
    capturer: BaseCapturer = Depends(get_capturer),
):
    """
    Import an uploaded Netscape bookmark file.

    Links that cannot be captured or are already bookmarked are skipped; the
    page reports how many were imported. A file that cannot be parsed is
    rejected as a whole.
    """
    if file is None:
        return render_index(request, status_code=400, error="Failed to get file")

    data = file.file.read()
    logger.info(f"Received import file {file.filename!r} ({len(data)} bytes)")

    pipeline = ImportPipeline(store, thumbnails, capturer)
    try:
        summary = pipeline.run(data)
    except FormatError as e:
        logger.warning(f"Rejected import file {file.filename!r}: {e}")
        return render_index(
            request,
            status_code=400,
            error="Failed to parse Netscape bookmark file",
        )

    return render_index(
        request,
        message=f"Successfully imported {summary.imported_count} new bookmarks",
    )


@router.get("/export")
def export_bookmarks(
    request: Request,
    store: BookmarkStore = Depends(get_store),
):
    """Download all bookmarks as a Netscape bookmark file."""
    try:
        exported = ExportPipeline(store).run()
    except StoreError as e:
        logger.error(f"Export failed: {e}")
        return render_index(request, status_code=500, error="Failed to get bookmarks", bookmarks=[])

    return Response(
        content=exported.content,
        media_type=exported.content_type,
        headers={
            "Content-Disposition": f"attachment; filename={exported.filename}"
        },
    )
