"""
Tests for screenshot capture with a mocked Playwright browser.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeout

from design_auditor.capture import COOKIE_SELECTORS, ScreenshotCapturer
from design_auditor.errors import CaptureError


def _page(cookie_button=None):
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.screenshot = AsyncMock(return_value=b"png-bytes")
    page.content = AsyncMock(return_value="<html></html>")
    page.close = AsyncMock()

    async def query_selector(selector):
        return cookie_button if selector == COOKIE_SELECTORS[1] else None

    page.query_selector = AsyncMock(side_effect=query_selector)
    return page


def _capturer(tmp_path, page):
    capturer = ScreenshotCapturer(viewport={"width": 390, "height": 844}, output_dir=tmp_path)
    capturer._browser = MagicMock()
    capturer._browser.new_page = AsyncMock(return_value=page)
    return capturer


@pytest.mark.unit
class TestScreenshotCapturer:

    @pytest.mark.asyncio
    async def test_capture_saves_viewport_png(self, tmp_path):
        button = MagicMock()
        button.click = AsyncMock()
        page = _page(cookie_button=button)
        capturer = _capturer(tmp_path, page)

        captured = await capturer.capture("https://example.com/pricing")

        capturer._browser.new_page.assert_awaited_once_with(viewport={"width": 390, "height": 844})
        page.goto.assert_awaited_once_with("https://example.com/pricing", wait_until="domcontentloaded", timeout=30000)
        button.click.assert_awaited_once()
        assert page.screenshot.await_args.kwargs["full_page"] is False
        assert captured.png == b"png-bytes"
        assert captured.html == "<html></html>"
        assert captured.path.read_bytes() == b"png-bytes"
        assert captured.path.parent == tmp_path
        assert "example_com_pricing" in captured.path.name
        page.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_navigation_timeout_raises_capture_error(self, tmp_path):
        page = _page()
        page.goto = AsyncMock(side_effect=PlaywrightTimeout("Timeout 30000ms exceeded"))
        capturer = _capturer(tmp_path, page)

        with pytest.raises(CaptureError):
            await capturer.capture("https://slow.example.com")

        page.close.assert_awaited_once()
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_capture_requires_started_browser(self, tmp_path):
        capturer = ScreenshotCapturer(output_dir=tmp_path)
        with pytest.raises(CaptureError):
            await capturer.capture("https://example.com")
