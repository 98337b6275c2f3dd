"""Deadline-bounded retrieval of fully rendered page markup."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .browser import create_browser
from .exceptions import FetchError

logger = logging.getLogger(__name__)

DEFAULT_WAIT_SELECTOR = ".cms-market-selector-content"


class PageFetcher:
    """Loads a page in a fresh headless browser and returns its rendered HTML.

    Each call opens its own browser session, navigates, waits until the
    content container is visible, and captures the outer HTML of the
    document root. The whole call is bounded by ``timeout`` seconds; when
    the deadline passes the in-flight browser work is cancelled and the
    session is closed before ``FetchError`` is raised. There is no retry.

    Example:
        ```python
        fetcher = PageFetcher("https://sportsbook.draftkings.com/leagues/football/nfl")
        html = await fetcher.fetch()
        ```
    """

    def __init__(
        self,
        url: str,
        wait_selector: str = DEFAULT_WAIT_SELECTOR,
        timeout: float = 120.0,
        headless: bool = True,
        browser_factory: Callable[..., Any] = create_browser,
    ) -> None:
        """Initialize the fetcher.

        Args:
            url: Default page to load.
            wait_selector: CSS selector that must become visible before capture.
            timeout: Overall deadline for one fetch, in seconds.
            headless: Run the browser without a window.
            browser_factory: Callable returning an async context manager that
                yields a started browser with ``new_page()``.
        """
        self.url = url
        self.wait_selector = wait_selector
        self.timeout = timeout
        self.headless = headless
        self._browser_factory = browser_factory

    async def fetch(self, url: str | None = None) -> str:
        """Return the rendered markup of ``url`` (or the default url).

        Raises:
            FetchError: On navigation, wait, capture or session failure, or
                when the overall deadline is exceeded (``timed_out=True``).
        """
        url = url or self.url
        logger.info(f"Loading {url} with headless Chrome...")

        try:
            return await asyncio.wait_for(self._load(url), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(
                f"Timed out after {self.timeout}s loading {url}",
                url=url,
                timed_out=True,
            ) from e
        except PlaywrightTimeoutError as e:
            raise FetchError(
                f"Timed out waiting for {self.wait_selector!r} on {url}: {e}",
                url=url,
                timed_out=True,
            ) from e
        except Exception as e:
            raise FetchError(f"Browser error loading {url}: {e}", url=url) from e

    async def _load(self, url: str) -> str:
        async with self._browser_factory(
            headless=self.headless,
            timeout=int(self.timeout * 1000),
        ) as browser:
            page = await browser.new_page()
            await page.goto(url, wait_until="domcontentloaded")
            await page.wait_for_selector(self.wait_selector, state="visible")
            html = await page.eval_on_selector("html", "el => el.outerHTML")
            logger.debug(f"Captured {len(html)} characters of markup")
            return html
