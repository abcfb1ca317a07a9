"""
Thumbmark v1 - Netscape Bookmark File Codec

Decodes and encodes the NETSCAPE-Bookmark-file-1 dialect that browsers use to
exchange bookmarks. The dialect is HTML with unclosed <DT> and <p> tags, so
decoding goes through BeautifulSoup's tolerant html.parser rather than a
strict XML parser.

Example document:
    <!DOCTYPE NETSCAPE-Bookmark-file-1>
    <TITLE>Bookmarks</TITLE>
    <H1>Bookmarks</H1>
    <DL><p>
        <DT><H3>Reading</H3>
        <DL><p>
            <DT><A HREF="https://example.com" ADD_DATE="1700000000">Example</A>
        </DL><p>
    </DL><p>
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional, Protocol

from bs4 import BeautifulSoup, Doctype, Tag
from jinja2 import Environment

from shared.errors import FormatError

DOCTYPE = "NETSCAPE-Bookmark-file-1"
DEFAULT_TITLE = "Bookmarks"

_TEMPLATE = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>{{ title }}</TITLE>
<H1>{{ title }}</H1>
<DL><p>
{% for link in links %}
    <DT><A HREF="{{ link.url }}" ADD_DATE="{{ add_date }}">{{ link.text }}</A>
{% endfor %}
</DL><p>
"""

_env = Environment(
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_template = _env.from_string(_TEMPLATE)


@dataclass
class InterchangeEntry:
    """A single link decoded from a bookmark file"""
    url: str
    add_date: Optional[datetime] = None
    title: Optional[str] = None
    # Nearest enclosing folder heading; folders are flattened on import
    folder: Optional[str] = None

    def __post_init__(self):
        self.url = self.url.strip()
        if self.title:
            self.title = self.title.strip() or None


class HasURL(Protocol):
    url: str


def decode(data: bytes | str) -> list[InterchangeEntry]:
    """
    Decode a Netscape bookmark file into a flat list of entries.

    Every link with a non-empty HREF is returned in document order, however
    deeply it is nested in folders.

    Args:
        data: Raw file contents (UTF-8, optionally with a BOM)

    Returns:
        List of InterchangeEntry objects, possibly empty

    Raises:
        FormatError: If the data is not text or not a bookmark document
    """
    soup = _parse(data)
    return list(_iter_entries(soup))


def encode(bookmarks: Iterable[HasURL], now: Optional[datetime] = None) -> bytes:
    """
    Encode bookmarks as a Netscape bookmark file.

    Original add dates are not stored, so every link is stamped with the
    encoding time.

    Args:
        bookmarks: Objects with a url attribute (and optionally title)
        now: Timestamp to use for ADD_DATE; defaults to the current time

    Returns:
        UTF-8 encoded document
    """
    stamp = now or datetime.now(timezone.utc)
    links = [
        {"url": b.url, "text": getattr(b, "title", None) or b.url}
        for b in bookmarks
    ]
    document = _template.render(
        title=DEFAULT_TITLE,
        links=links,
        add_date=int(stamp.timestamp()),
    )
    return document.encode("utf-8")


def get_stats(data: bytes | str) -> dict:
    """
    Summarize a bookmark file without importing it.

    Returns:
        Dictionary with total_bookmarks and a per-folder breakdown
    """
    entries = decode(data)
    folders: dict[str, int] = {}
    for entry in entries:
        label = entry.folder or "(top level)"
        folders[label] = folders.get(label, 0) + 1

    return {
        "total_bookmarks": len(entries),
        "folders": [{"label": label, "count": count} for label, count in folders.items()],
        "total_folders": len(folders),
    }


def _parse(data: bytes | str) -> BeautifulSoup:
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FormatError(f"Bookmark file is not valid UTF-8: {e}") from e
    else:
        text = data

    soup = BeautifulSoup(text, "html.parser")
    if not _has_netscape_doctype(soup) and soup.find("dl") is None:
        raise FormatError("Not a Netscape bookmark file: no doctype and no bookmark list")
    return soup


def _has_netscape_doctype(soup: BeautifulSoup) -> bool:
    for item in soup.contents:
        if isinstance(item, Doctype) and DOCTYPE.lower() in item.lower():
            return True
    return False


def _iter_entries(soup: BeautifulSoup) -> Iterator[InterchangeEntry]:
    for a_tag in soup.find_all("a", href=True):
        url = a_tag.get("href", "").strip()
        if not url:
            continue

        yield InterchangeEntry(
            url=url,
            add_date=_parse_add_date(a_tag.get("add_date")),
            title=a_tag.get_text(strip=True) or None,
            folder=_folder_for(a_tag),
        )


def _parse_add_date(value: Optional[str]) -> Optional[datetime]:
    """ADD_DATE is seconds since the epoch"""
    if not value:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def _folder_for(a_tag: Tag) -> Optional[str]:
    """
    Find the folder heading for a link.

    A folder is written as:
        <DT><H3>Folder Name</H3>
        <DL><p>
            ... links ...
        </DL><p>
    so the heading is the H3 sibling that precedes the link's enclosing DL.
    """
    dl = a_tag.find_parent("dl")
    if dl is None:
        return None
    h3 = dl.find_previous_sibling("h3")
    if h3 is None:
        return None
    return h3.get_text(strip=True) or None
