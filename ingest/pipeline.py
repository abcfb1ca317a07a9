"""
Thumbmark v1 - Import and Export Pipelines

Orchestrates the codec, the capture service, the bookmark store and the
thumbnail store. Imports run one entry at a time; a failing entry is logged
and skipped without affecting the rest of the batch.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from capture_service.capture import BaseCapturer
from capture_service.thumbnails import ThumbnailStore
from shared.errors import (
    CaptureError,
    DuplicateError,
    NotFoundError,
    StoreError,
    ThumbnailIOError,
    ValidationError,
)
from shared.store import Bookmark, BookmarkStore

from . import netscape_codec
from .netscape_codec import InterchangeEntry

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "bookmarks.html"
EXPORT_CONTENT_TYPE = "text/html"


@dataclass
class ImportSummary:
    """Result of an import run"""
    total_processed: int = 0
    imported: int = 0
    skipped_duplicates: int = 0
    capture_failures: int = 0
    errors: int = 0
    error_messages: list[str] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        """Entries whose row and thumbnail were both persisted"""
        return self.imported

    def record_error(self, message: str) -> None:
        self.errors += 1
        self.error_messages.append(message)


@dataclass
class ExportFile:
    """A downloadable bookmark file"""
    content: bytes
    filename: str = EXPORT_FILENAME
    content_type: str = EXPORT_CONTENT_TYPE


class ImportPipeline:
    """
    Imports a Netscape bookmark file.

    For each decoded entry: capture a thumbnail, insert the bookmark row, save
    the image and backfill the row's thumbnail reference. Only entries that
    complete every step count as imported.
    """

    def __init__(
        self,
        store: BookmarkStore,
        thumbnails: ThumbnailStore,
        capturer: BaseCapturer,
    ):
        self.store = store
        self.thumbnails = thumbnails
        self.capturer = capturer

    def run(self, data: bytes) -> ImportSummary:
        """
        Decode and import a bookmark file.

        Args:
            data: Raw bookmark file contents

        Returns:
            ImportSummary with per-outcome counts

        Raises:
            FormatError: If the file cannot be decoded. Nothing is imported.
        """
        entries = netscape_codec.decode(data)
        logger.info(f"Importing {len(entries)} bookmarks")
        return self.import_entries(entries)

    def import_entries(self, entries: list[InterchangeEntry]) -> ImportSummary:
        summary = ImportSummary()
        for entry in entries:
            summary.total_processed += 1
            self._import_entry(entry, summary)

        logger.info(
            f"Import finished: {summary.imported}/{summary.total_processed} imported, "
            f"{summary.skipped_duplicates} duplicates, "
            f"{summary.capture_failures} capture failures, {summary.errors} errors"
        )
        return summary

    def _import_entry(self, entry: InterchangeEntry, summary: ImportSummary) -> None:
        url = entry.url

        try:
            image = self.capturer.capture(url)
        except CaptureError as e:
            logger.warning(f"Failed to capture screenshot for {url}: {e.reason}")
            summary.capture_failures += 1
            summary.error_messages.append(str(e))
            return

        try:
            bookmark_id = self.store.insert(url)
        except DuplicateError:
            logger.info(f"URL already exists: {url}")
            summary.skipped_duplicates += 1
            return
        except StoreError as e:
            logger.warning(f"Failed to add bookmark for {url}: {e}")
            summary.record_error(f"Error adding {url}: {e}")
            return

        try:
            backfill_thumbnail(self.store, self.thumbnails, bookmark_id, image)
        except (ThumbnailIOError, StoreError, NotFoundError) as e:
            # The row stays with an empty thumbnail reference
            logger.warning(f"Failed to store thumbnail for {url}: {e}")
            summary.record_error(f"Error storing thumbnail for {url}: {e}")
            return

        summary.imported += 1


class ExportPipeline:
    """Exports every stored bookmark as a Netscape bookmark file."""

    def __init__(self, store: BookmarkStore):
        self.store = store

    def run(self, now: Optional[datetime] = None) -> ExportFile:
        """
        Raises:
            StoreError: If the bookmarks cannot be read
        """
        bookmarks = self.store.list_all()
        logger.info(f"Exporting {len(bookmarks)} bookmarks")
        return ExportFile(content=netscape_codec.encode(bookmarks, now=now))


def backfill_thumbnail(
    store: BookmarkStore,
    thumbnails: ThumbnailStore,
    bookmark_id: int,
    image: bytes,
) -> str:
    """Save the image and point the bookmark row at it. Returns the reference."""
    thumbnail_ref = thumbnails.save(bookmark_id, image)
    store.update_thumbnail(bookmark_id, thumbnail_ref)
    return thumbnail_ref


def add_bookmark(
    url: Optional[str],
    store: BookmarkStore,
    thumbnails: ThumbnailStore,
    capturer: BaseCapturer,
) -> Bookmark:
    """
    Capture and store a single bookmark.

    Every failure is raised to the caller. If the thumbnail cannot be stored
    after the row was inserted, the row keeps an empty reference.

    Raises:
        ValidationError: If url is missing or blank
        CaptureError: If the page cannot be captured
        DuplicateError: If the URL is already bookmarked
        ThumbnailIOError: If the image cannot be written
        StoreError: On database failure
    """
    url = (url or "").strip()
    if not url:
        raise ValidationError("URL is required")

    image = capturer.capture(url)
    bookmark_id = store.insert(url)
    thumbnail_ref = backfill_thumbnail(store, thumbnails, bookmark_id, image)

    logger.info(f"Added bookmark {bookmark_id}: {url}")
    return Bookmark(id=bookmark_id, url=url, thumbnail_ref=thumbnail_ref)


def delete_bookmark(
    bookmark_id: int,
    store: BookmarkStore,
    thumbnails: ThumbnailStore,
) -> bool:
    """
    Delete a bookmark row and its thumbnail file. Unknown ids are ignored.

    Returns:
        True if a row was removed
    """
    removed = store.delete(bookmark_id)
    thumbnails.delete(bookmark_id)
    if removed:
        logger.info(f"Deleted bookmark {bookmark_id}")
    return removed


def recapture_missing(
    store: BookmarkStore,
    thumbnails: ThumbnailStore,
    capturer: BaseCapturer,
) -> ImportSummary:
    """
    Capture thumbnails for bookmarks whose backfill never succeeded.

    Runs only when explicitly requested; failures are logged and leave the
    reference empty.
    """
    summary = ImportSummary()
    for bookmark in store.list_missing_thumbnails():
        summary.total_processed += 1
        try:
            image = capturer.capture(bookmark.url)
        except CaptureError as e:
            logger.warning(f"Failed to capture screenshot for {bookmark.url}: {e.reason}")
            summary.capture_failures += 1
            summary.error_messages.append(str(e))
            continue

        try:
            backfill_thumbnail(store, thumbnails, bookmark.id, image)
        except (ThumbnailIOError, StoreError, NotFoundError) as e:
            logger.warning(f"Failed to store thumbnail for {bookmark.url}: {e}")
            summary.record_error(f"Error storing thumbnail for {bookmark.url}: {e}")
            continue

        summary.imported += 1

    return summary
