"""
Thumbmark v1 - Web UI Main Application

FastAPI application serving the bookmark listing, the add/delete forms,
import/export of Netscape bookmark files and the captured thumbnails.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from capture_service.capture import BaseCapturer, PlaywrightCapturer
from capture_service.thumbnails import ThumbnailStore
from config import configure_logging, get_config
from shared.errors import StoreError
from shared.store import BookmarkStore

from . import __version__
from .dependencies import render_index
from .models import HealthResponse
from .routes import bookmarks_router, transfer_router

logger = logging.getLogger(__name__)

# Paths
BASE_DIR = Path(__file__).parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Web UI starting...")

    app.state.store.init_schema()
    app.state.thumbnails.root.mkdir(parents=True, exist_ok=True)
    logger.info("Bookmark store ready")

    yield

    logger.info("Web UI shutting down")


def create_app(
    store: Optional[BookmarkStore] = None,
    thumbnails: Optional[ThumbnailStore] = None,
    capturer: Optional[BaseCapturer] = None,
) -> FastAPI:
    """
    Build the application around its collaborators.

    Anything not passed in is created from the environment configuration.
    """
    cfg = get_config()
    store = store or BookmarkStore(cfg.database.path)
    thumbnails = thumbnails or ThumbnailStore(cfg.storage.thumbnail_dir)
    capturer = capturer or PlaywrightCapturer.from_settings(cfg.capture)

    app = FastAPI(
        title="Thumbmark Web UI",
        description="Bookmark manager with page thumbnails",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.store = store
    app.state.thumbnails = thumbnails
    app.state.capturer = capturer
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    # Mount static files; the thumbnail directory is created at startup
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.mount(
        "/thumbnails",
        StaticFiles(directory=thumbnails.root, check_dir=False),
        name="thumbnails",
    )

    app.include_router(bookmarks_router)
    app.include_router(transfer_router)

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        """Render the main page."""
        try:
            return render_index(request)
        except StoreError as e:
            logger.error(f"Failed to get bookmarks: {e}")
            return render_index(request, status_code=500, error="Failed to get bookmarks", bookmarks=[])

    @app.get("/health", response_model=HealthResponse)
    def health_check(request: Request):
        """Health check endpoint."""
        db_status = "connected" if request.app.state.store.ping() else "disconnected"
        return HealthResponse(
            status="healthy" if db_status == "connected" else "degraded",
            version=__version__,
            database=db_status,
        )

    return app


configure_logging()
app = create_app()


# Run with: uvicorn web_ui.main:app --host 127.0.0.1 --port 8080
if __name__ == "__main__":
    import uvicorn
    cfg = get_config()
    uvicorn.run(app, host=cfg.app.host, port=cfg.app.port)
