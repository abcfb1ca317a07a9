"""
Thumbmark v1 - Bookmark Store

SQLite-backed storage for bookmarks. URL uniqueness is enforced by the
table's UNIQUE constraint, so concurrent inserts of the same URL let exactly
one writer through.
"""

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from .errors import DuplicateError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


SCHEMA = """
    CREATE TABLE IF NOT EXISTS bookmarks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        url TEXT NOT NULL UNIQUE,
        thumbnail TEXT
    )
"""


@dataclass
class Bookmark:
    """A stored URL plus its thumbnail reference"""
    id: int
    url: str
    # None until a thumbnail has been captured and backfilled
    thumbnail_ref: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Bookmark":
        return cls(id=row["id"], url=row["url"], thumbnail_ref=row["thumbnail"] or None)

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail_ref is not None


class BookmarkStore:
    """
    Durable mapping from bookmark id to URL and thumbnail reference.

    Every operation opens its own connection, so one store object can be
    shared by the CLI, the pipelines and the web UI's worker threads.
    """

    def __init__(self, db_path: str | Path):
        """
        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections"""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create the bookmarks table if it does not exist yet"""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create database directory for {self.db_path}: {e}") from e
        with self.connection() as conn:
            try:
                conn.execute(SCHEMA)
                conn.commit()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to initialize schema: {e}") from e
        logger.info(f"Bookmark store ready at {self.db_path}")

    def insert(self, url: str) -> int:
        """
        Insert a bookmark with an empty thumbnail reference.

        Returns:
            The id assigned to the new row

        Raises:
            DuplicateError: If the URL is already stored
            StoreError: On any other database failure
        """
        with self.connection() as conn:
            try:
                cur = conn.execute(
                    "INSERT INTO bookmarks (url, thumbnail) VALUES (?, NULL)",
                    (url,),
                )
                conn.commit()
            except sqlite3.IntegrityError as e:
                if "UNIQUE" in str(e).upper():
                    raise DuplicateError(url) from e
                raise StoreError(f"Failed to add bookmark for {url}: {e}") from e
            except sqlite3.Error as e:
                raise StoreError(f"Failed to add bookmark for {url}: {e}") from e
            return cur.lastrowid

    def update_thumbnail(self, bookmark_id: int, thumbnail_ref: str) -> None:
        """
        Backfill the thumbnail reference of an existing bookmark.

        Raises:
            NotFoundError: If no bookmark has this id
            StoreError: On any other database failure
        """
        with self.connection() as conn:
            try:
                cur = conn.execute(
                    "UPDATE bookmarks SET thumbnail = ? WHERE id = ?",
                    (thumbnail_ref, bookmark_id),
                )
                conn.commit()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to update bookmark {bookmark_id}: {e}") from e
            if cur.rowcount == 0:
                raise NotFoundError(bookmark_id)

    def get(self, bookmark_id: int) -> Optional[Bookmark]:
        """Get a single bookmark by id"""
        row = self._fetchone(
            "SELECT id, url, thumbnail FROM bookmarks WHERE id = ?", (bookmark_id,)
        )
        return Bookmark.from_row(row) if row else None

    def list_all(self) -> list[Bookmark]:
        """Get all bookmarks in insertion order"""
        rows = self._fetchall("SELECT id, url, thumbnail FROM bookmarks ORDER BY id")
        return [Bookmark.from_row(row) for row in rows]

    def list_missing_thumbnails(self) -> list[Bookmark]:
        """Get bookmarks whose thumbnail was never backfilled"""
        rows = self._fetchall(
            """
            SELECT id, url, thumbnail FROM bookmarks
            WHERE thumbnail IS NULL OR thumbnail = ''
            ORDER BY id
            """
        )
        return [Bookmark.from_row(row) for row in rows]

    def count(self) -> int:
        """Get the total number of stored bookmarks"""
        row = self._fetchone("SELECT COUNT(*) AS count FROM bookmarks")
        return row["count"] if row else 0

    def delete(self, bookmark_id: int) -> bool:
        """
        Delete a bookmark. Deleting an unknown id is not an error.

        Returns:
            True if a row was removed
        """
        with self.connection() as conn:
            try:
                cur = conn.execute("DELETE FROM bookmarks WHERE id = ?", (bookmark_id,))
                conn.commit()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to delete bookmark {bookmark_id}: {e}") from e
            return cur.rowcount > 0

    def ping(self) -> bool:
        """Check that the database answers a trivial query"""
        try:
            self._fetchone("SELECT 1")
        except StoreError:
            return False
        return True

    def _fetchone(self, query: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        with self.connection() as conn:
            try:
                return conn.execute(query, params).fetchone()
            except sqlite3.Error as e:
                raise StoreError(f"Query failed: {e}") from e

    def _fetchall(self, query: str, params: tuple = ()) -> list[sqlite3.Row]:
        with self.connection() as conn:
            try:
                return conn.execute(query, params).fetchall()
            except sqlite3.Error as e:
                raise StoreError(f"Query failed: {e}") from e
