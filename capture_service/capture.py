"""
Thumbmark v1 - Thumbnail Capture

Drives a headless browser to load a page and render a PNG screenshot of the
viewport. Each capture runs in its own browser process, which is torn down
before the call returns.
"""

import logging
from abc import ABC, abstractmethod

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from config import CaptureSettings
from shared.errors import CaptureError

logger = logging.getLogger(__name__)


class BaseCapturer(ABC):
    """
    Abstract base class for thumbnail capturers.

    Implementations must raise CaptureError for every failure mode so that
    callers only have one exception to handle per URL.
    """

    @abstractmethod
    def capture(self, url: str) -> bytes:
        """
        Render the page at url and return the image bytes.

        Args:
            url: The URL to capture. Not validated before navigation.

        Returns:
            PNG image bytes

        Raises:
            CaptureError: If navigation, loading or rendering fails
        """
        pass


class PlaywrightCapturer(BaseCapturer):
    """
    Capturer backed by Playwright's Chromium.

    Navigation and screenshot both get the configured timeout, so a capture
    never runs unbounded.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        viewport_width: int = 1280,
        viewport_height: int = 720,
        wait_until: str = "load",
    ):
        self.timeout = timeout
        self.viewport = {"width": viewport_width, "height": viewport_height}
        self.wait_until = wait_until

    @classmethod
    def from_settings(cls, settings: CaptureSettings) -> "PlaywrightCapturer":
        return cls(
            timeout=settings.timeout,
            viewport_width=settings.viewport_width,
            viewport_height=settings.viewport_height,
            wait_until=settings.wait_until,
        )

    @property
    def timeout_ms(self) -> float:
        return self.timeout * 1000

    def capture(self, url: str) -> bytes:
        logger.info(f"Capturing thumbnail for {url}")
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(headless=True)
                try:
                    page = browser.new_page(viewport=self.viewport)
                    page.goto(url, wait_until=self.wait_until, timeout=self.timeout_ms)
                    image = page.screenshot(type="png", timeout=self.timeout_ms)
                finally:
                    browser.close()
        except PlaywrightError as e:
            logger.warning(f"Capture failed for {url}: {e.message}")
            raise CaptureError(url, e.message) from e

        logger.debug(f"Captured {len(image)} bytes for {url}")
        return image

