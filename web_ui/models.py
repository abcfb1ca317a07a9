"""
Thumbmark v1 - Web UI Pydantic Models

Models for API responses and data display.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.store import Bookmark


class BookmarkDisplay(BaseModel):
    """Bookmark data for display in the UI"""
    id: int
    url: str
    thumbnail_ref: Optional[str] = Field(None, description="Thumbnail file name, empty until captured")

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkDisplay":
        return cls(id=bookmark.id, url=bookmark.url, thumbnail_ref=bookmark.thumbnail_ref)

    @property
    def thumbnail_url(self) -> Optional[str]:
        """Path the thumbnail is served from"""
        if not self.thumbnail_ref:
            return None
        return f"/thumbnails/{self.thumbnail_ref}"

    @property
    def display_url(self) -> str:
        """Shortened URL for display"""
        return self.url[:60] + "..." if len(self.url) > 60 else self.url


class AddBookmarkResponse(BaseModel):
    """Response for a successfully added bookmark"""
    message: str
    bookmark: BookmarkDisplay


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    database: str
