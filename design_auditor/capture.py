"""
Screenshot Capture Module

Captures above-the-fold screenshots of web pages using Playwright.
Handles navigation, cookie banners and viewport configuration.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from loguru import logger
from playwright.async_api import Browser, Error as PlaywrightError, Playwright, async_playwright

from .errors import CaptureError


COOKIE_SELECTORS = [
    "#onetrust-accept-btn-handler",
    'button[aria-label="Accept"]',
    'button[aria-label="Accept all"]',
    ".cookie-accept",
    '[class*="cookie"] button[class*="accept"]',
    "#accept-cookies",
]


@dataclass
class CapturedPage:
    """Screenshot bytes, the saved PNG path and the rendered HTML of one page."""

    url: str
    png: bytes
    html: str
    path: Path


class ScreenshotCapturer:
    """
    Captures screenshots with one shared headless Chromium browser.

    The browser is launched when the context manager is entered and a fresh
    page is opened per capture, so captures can run concurrently.

    Example:
        async with ScreenshotCapturer(viewport={"width": 390, "height": 844}) as capturer:
            page = await capturer.capture("https://example.com")
    """

    def __init__(
        self,
        viewport: Optional[dict] = None,
        output_dir: Optional[Path] = None,
        navigation_timeout: int = 30000,
        settle_delay: int = 2000
    ):
        """
        Initialize screenshot capturer.

        Args:
            viewport: Viewport dimensions {"width": int, "height": int}
                     Defaults to 1920x1080
            output_dir: Directory to save screenshots
                       Defaults to ./screenshots/
            navigation_timeout: Milliseconds allowed for navigation and screenshot
            settle_delay: Milliseconds to wait for dynamic content after load
        """
        self.viewport = viewport or {"width": 1920, "height": 1080}
        self.output_dir = output_dir or Path("screenshots")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.navigation_timeout = navigation_timeout
        self.settle_delay = settle_delay
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> "ScreenshotCapturer":
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=True)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def capture(self, url: str) -> CapturedPage:
        """
        Capture the viewport of a web page.

        Workflow:
        1. Open a new page with the configured viewport
        2. Navigate and wait for DOMContentLoaded
        3. Wait for dynamic content to settle
        4. Dismiss a cookie banner if a known one is present
        5. Screenshot the viewport and save it

        Raises:
            CaptureError: If the browser is not started, or navigation or
                          the screenshot fails
        """
        if self._browser is None:
            raise CaptureError("Browser not started; use 'async with ScreenshotCapturer()'")

        page = await self._browser.new_page(viewport=self.viewport)
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout)
            await page.wait_for_timeout(self.settle_delay)

            await self._dismiss_cookie_banner(page)

            png = await page.screenshot(type="png", full_page=False, timeout=self.navigation_timeout)
            html = await page.content()
        except PlaywrightError as e:
            raise CaptureError(f"Screenshot capture failed for {url}: {e}") from e
        finally:
            await page.close()

        path = self._generate_path(url)
        path.write_bytes(png)
        logger.debug(f"Screenshot saved: {path}")

        return CapturedPage(url=url, png=png, html=html, path=path)

    async def _dismiss_cookie_banner(self, page) -> bool:
        for selector in COOKIE_SELECTORS:
            try:
                button = await page.query_selector(selector)
                if button:
                    await button.click(timeout=2000)
                    logger.debug(f"Dismissed cookie consent via {selector}")
                    await page.wait_for_timeout(1000)
                    return True
            except PlaywrightError:
                # Banner may detach while clicking; try the next selector
                continue
        return False

    def _generate_path(self, url: str) -> Path:
        """
        Generate unique screenshot path based on URL.

        Format: screenshot_{timestamp}_{host}_{path}.png
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

        parsed = urlparse(url)
        url_part = f"{parsed.netloc}{parsed.path}" or "page"
        url_part = re.sub(r"[^A-Za-z0-9_-]+", "_", url_part).strip("_")[:60] or "page"

        return self.output_dir / f"screenshot_{timestamp}_{url_part}.png"
