"""
Thumbmark v1 - Test Configuration and Fixtures

Shared fixtures for both unit and e2e tests.
"""

from pathlib import Path

import pytest

from capture_service.capture import BaseCapturer
from capture_service.thumbnails import ThumbnailStore
from shared.errors import CaptureError
from shared.store import BookmarkStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


SAMPLE_BOOKMARKS = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks Menu</H1>
<DL><p>
    <DT><A HREF="https://example.com/" ADD_DATE="1700000000">Example</A>
    <DT><H3 ADD_DATE="1700000100">Reading</H3>
    <DL><p>
        <DT><A HREF="https://python.org/" ADD_DATE="1700000200">Python</A>
        <DT><H3>Deep</H3>
        <DL><p>
            <DT><A HREF="https://docs.python.org/3/" ADD_DATE="1700000300">Docs</A>
        </DL><p>
    </DL><p>
    <DT><A HREF="https://news.ycombinator.com/">Hacker News</A>
</DL><p>
"""


class FakeCapturer(BaseCapturer):
    """Capturer that never starts a browser."""

    def __init__(self):
        self.calls: list[str] = []
        self.failing: set[str] = set()

    def capture(self, url: str) -> bytes:
        self.calls.append(url)
        if url in self.failing:
            raise CaptureError(url, "net::ERR_NAME_NOT_RESOLVED")
        return PNG_BYTES


def netscape_document(urls: list[str]) -> bytes:
    """Build a minimal bookmark file containing the given URLs"""
    links = "\n".join(
        f'    <DT><A HREF="{url}" ADD_DATE="1700000000">{url}</A>' for url in urls
    )
    return (
        "<!DOCTYPE NETSCAPE-Bookmark-file-1>\n"
        "<TITLE>Bookmarks</TITLE>\n"
        "<H1>Bookmarks</H1>\n"
        f"<DL><p>\n{links}\n</DL><p>\n"
    ).encode("utf-8")


@pytest.fixture
def store(tmp_path: Path) -> BookmarkStore:
    """Empty bookmark store backed by a temporary SQLite file."""
    bookmark_store = BookmarkStore(tmp_path / "bookmarks.db")
    bookmark_store.init_schema()
    return bookmark_store


@pytest.fixture
def thumbnails(tmp_path: Path) -> ThumbnailStore:
    """Thumbnail store in a directory that does not exist yet."""
    return ThumbnailStore(tmp_path / "thumbnails")


@pytest.fixture
def capturer() -> FakeCapturer:
    return FakeCapturer()


@pytest.fixture
def sample_file() -> bytes:
    return SAMPLE_BOOKMARKS.encode("utf-8")


@pytest.fixture
def make_document():
    """Factory for minimal bookmark files."""
    return netscape_document
