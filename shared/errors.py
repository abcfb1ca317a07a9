"""
Thumbmark v1 - Error Types

Exceptions shared by the capture service, the bookmark store, the
interchange codec and the import/export pipelines.
"""


class ThumbmarkError(Exception):
    """Base class for all Thumbmark errors"""


class ValidationError(ThumbmarkError):
    """A required input was missing or empty"""


class DuplicateError(ThumbmarkError):
    """The URL is already bookmarked"""

    def __init__(self, url: str):
        super().__init__(f"URL already bookmarked: {url}")
        self.url = url


class CaptureError(ThumbmarkError):
    """Navigation, timeout or render failure while capturing a thumbnail"""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to capture {url}: {reason}")
        self.url = url
        self.reason = reason


class FormatError(ThumbmarkError):
    """The uploaded document is not a Netscape bookmark file"""


class ThumbnailIOError(ThumbmarkError):
    """Reading or writing a thumbnail file failed"""


class NotFoundError(ThumbmarkError):
    """No bookmark exists with the given id"""

    def __init__(self, bookmark_id: int):
        super().__init__(f"Bookmark not found: {bookmark_id}")
        self.bookmark_id = bookmark_id


class StoreError(ThumbmarkError):
    """The storage engine reported a failure"""
