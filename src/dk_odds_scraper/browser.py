"""Headless browser sessions for loading client-rendered sportsbook pages.

This module wraps Playwright's Chromium so each scrape cycle can open a
fresh session and be sure it is torn down afterwards.

Requirements:
    pip install dk-odds-scraper
    playwright install chromium
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class BrowserConfig:
    """Configuration for a headless browser session."""

    headless: bool = True
    timeout: int = 120000  # Default per-operation timeout in ms
    viewport: dict[str, int] = field(
        default_factory=lambda: {"width": 1920, "height": 1080}
    )
    user_agent: str | None = DEFAULT_USER_AGENT
    locale: str = "en-US"
    timezone_id: str = "America/New_York"
    launch_args: list[str] = field(
        default_factory=lambda: ["--disable-dev-shm-usage", "--no-first-run"]
    )


class HeadlessBrowser:
    """Playwright Chromium session usable as an async context manager.

    Example:
        ```python
        async with HeadlessBrowser(headless=True) as browser:
            page = await browser.new_page()
            await page.goto("https://sportsbook.draftkings.com")
        ```
    """

    def __init__(self, config: BrowserConfig | None = None, **kwargs: Any) -> None:
        """Initialize the browser.

        Args:
            config: BrowserConfig instance. If not provided, creates one from kwargs.
            **kwargs: Arguments passed to BrowserConfig if config not provided.
        """
        self.config = config or BrowserConfig(**kwargs)
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None

    async def __aenter__(self) -> "HeadlessBrowser":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def start(self) -> None:
        """Launch Chromium and open a browser context."""
        try:
            from playwright.async_api import async_playwright
        except ImportError as e:
            raise ImportError(
                "Browser automation requires Playwright. "
                "Install with: pip install playwright && playwright install chromium"
            ) from e

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.config.headless,
            args=self.config.launch_args,
        )
        self._context = await self._browser.new_context(
            viewport=self.config.viewport,
            user_agent=self.config.user_agent,
            locale=self.config.locale,
            timezone_id=self.config.timezone_id,
        )
        self._context.set_default_timeout(self.config.timeout)

        logger.info(f"Browser started (headless={self.config.headless})")

    async def close(self) -> None:
        """Close the browser and cleanup.

        Every teardown step runs even if an earlier one raises; the first
        error is re-raised once all steps have finished.
        """
        context, self._context = self._context, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        try:
            if context:
                await context.close()
        finally:
            try:
                if browser:
                    await browser.close()
            finally:
                if playwright:
                    await playwright.stop()
                logger.debug("Browser closed")

    async def new_page(self) -> Any:
        """Open a new page in the browser context.

        Returns:
            Playwright Page object.
        """
        if not self._context:
            raise RuntimeError(
                "Browser not started. Call start() or use async context manager."
            )
        return await self._context.new_page()


@asynccontextmanager
async def create_browser(
    headless: bool = True,
    **kwargs: Any,
) -> AsyncGenerator[HeadlessBrowser, None]:
    """Create a headless browser as an async context manager.

    Args:
        headless: Run browser in headless mode.
        **kwargs: Additional arguments for BrowserConfig.

    Yields:
        Started HeadlessBrowser instance.
    """
    browser = HeadlessBrowser(headless=headless, **kwargs)
    try:
        await browser.start()
        yield browser
    finally:
        await browser.close()
