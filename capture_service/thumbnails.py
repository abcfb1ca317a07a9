"""
Thumbmark v1 - Thumbnail File Store

Filesystem storage of one PNG per bookmark. The file name is derived from
the bookmark id alone, so a reference can be computed before the file exists.
"""

import logging
import os
import tempfile
from pathlib import Path

from shared.errors import ThumbnailIOError

logger = logging.getLogger(__name__)


class ThumbnailStore:
    """Directory of thumbnail images named "<id>.png"."""

    SUFFIX = ".png"

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, bookmark_id: int) -> str:
        """Return the thumbnail reference for a bookmark id"""
        return f"{bookmark_id}{self.SUFFIX}"

    def full_path(self, bookmark_id: int) -> Path:
        """Return the filesystem path the reference points at"""
        return self.root / self.path_for(bookmark_id)

    def save(self, bookmark_id: int, data: bytes) -> str:
        """
        Write image bytes for a bookmark, replacing any existing file.

        The image is written to a temporary file in the same directory and
        moved into place, so a reader never sees a partial image.

        Returns:
            The thumbnail reference

        Raises:
            ThumbnailIOError: If the directory or file cannot be written
        """
        target = self.full_path(bookmark_id)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ThumbnailIOError(f"Failed to save thumbnail {target}: {e}") from e

        logger.debug(f"Saved thumbnail {target} ({len(data)} bytes)")
        return self.path_for(bookmark_id)

    def exists(self, bookmark_id: int) -> bool:
        return self.full_path(bookmark_id).is_file()

    def delete(self, bookmark_id: int) -> bool:
        """
        Remove the thumbnail for a bookmark if there is one.

        Returns:
            True if a file was removed
        """
        target = self.full_path(bookmark_id)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ThumbnailIOError(f"Failed to delete thumbnail {target}: {e}") from e
        return True
