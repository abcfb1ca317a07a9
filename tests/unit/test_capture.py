"""
Thumbmark v1 - Capture Service Unit Tests

Playwright is replaced with mocks; the real browser is covered by the e2e
suite.
"""

from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from capture_service import capture as capture_module
from capture_service.capture import PlaywrightCapturer
from config import CaptureSettings
from shared.errors import CaptureError


@pytest.fixture
def browser(monkeypatch):
    """Patch sync_playwright and return the fake browser it launches."""
    fake_browser = MagicMock()
    fake_browser.new_page.return_value.screenshot.return_value = b"\x89PNGdata"

    playwright = MagicMock()
    playwright.chromium.launch.return_value = fake_browser

    fake_sync_playwright = MagicMock()
    fake_sync_playwright.return_value.__enter__.return_value = playwright
    monkeypatch.setattr(capture_module, "sync_playwright", fake_sync_playwright)
    return fake_browser


class TestPlaywrightCapturer:
    """Tests for the Playwright-backed capturer."""

    def test_returns_screenshot_bytes(self, browser):
        capturer = PlaywrightCapturer(timeout=5, viewport_width=800, viewport_height=600)

        assert capturer.capture("https://example.com") == b"\x89PNGdata"

        browser.new_page.assert_called_once_with(viewport={"width": 800, "height": 600})
        page = browser.new_page.return_value
        page.goto.assert_called_once_with("https://example.com", wait_until="load", timeout=5000)
        page.screenshot.assert_called_once_with(type="png", timeout=5000)
        browser.close.assert_called_once()

    def test_navigation_failure_becomes_capture_error(self, browser):
        page = browser.new_page.return_value
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(CaptureError) as exc_info:
            PlaywrightCapturer().capture("https://no-such-host.invalid")

        assert exc_info.value.url == "https://no-such-host.invalid"
        assert "ERR_NAME_NOT_RESOLVED" in exc_info.value.reason
        browser.close.assert_called_once()

    def test_timeout_becomes_capture_error(self, browser):
        page = browser.new_page.return_value
        page.goto.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded")

        with pytest.raises(CaptureError):
            PlaywrightCapturer().capture("https://slow.example")

        browser.close.assert_called_once()

    def test_malformed_url_is_not_prevalidated(self, browser):
        page = browser.new_page.return_value
        page.goto.side_effect = PlaywrightError("Cannot navigate to invalid URL")

        with pytest.raises(CaptureError):
            PlaywrightCapturer().capture("not a url")

        page.goto.assert_called_once()

    def test_from_settings(self):
        settings = CaptureSettings(
            CAPTURE_TIMEOUT=12,
            CAPTURE_VIEWPORT_WIDTH=1024,
            CAPTURE_VIEWPORT_HEIGHT=768,
            CAPTURE_WAIT_UNTIL="domcontentloaded",
        )

        capturer = PlaywrightCapturer.from_settings(settings)

        assert capturer.timeout_ms == 12000
        assert capturer.viewport == {"width": 1024, "height": 768}
        assert capturer.wait_until == "domcontentloaded"
