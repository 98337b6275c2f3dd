"""Periodic scrape loop: fetch, extract, report, wait, repeat."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from .exceptions import FetchError
from .extractor import MarketExtractor
from .fetcher import PageFetcher
from .models import Market
from .report import print_markets

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Whether a cycle is in flight."""

    IDLE = "idle"
    SCRAPING = "scraping"


class ScrapeLoop:
    """Runs one scrape cycle at a time on a fixed interval.

    The first cycle starts immediately. Cycles never overlap: the next one
    is scheduled ``interval`` seconds after the previous one started, or
    right away if the previous one overran. A ``FetchError`` is logged and
    the cycle skipped; the following cycles are unaffected.

    Example:
        ```python
        loop = ScrapeLoop(PageFetcher(NFL_URL), interval=30)
        stop = asyncio.Event()
        await loop.run(stop)
        ```
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        extractor: MarketExtractor | None = None,
        reporter: Callable[[list[Market]], None] = print_markets,
        interval: float = 30.0,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor or MarketExtractor()
        self.reporter = reporter
        self.interval = interval
        self.state = LoopState.IDLE
        self.cycles = 0

    async def run_cycle(self) -> list[Market] | None:
        """Run one fetch, extract and report cycle.

        Returns:
            The extracted markets, or None if the fetch failed.
        """
        self.state = LoopState.SCRAPING
        self.cycles += 1
        try:
            logger.info(f"=== Starting scrape (cycle {self.cycles}) ===")
            try:
                html = await self.fetcher.fetch()
            except FetchError as e:
                logger.error(f"Error scraping markets: {e}")
                return None

            logger.info("Parsing markets...")
            markets = self.extractor.extract(html)
            self.reporter(markets)
            return markets
        finally:
            self.state = LoopState.IDLE

    async def run(
        self,
        stop_event: asyncio.Event | None = None,
        max_cycles: int | None = None,
    ) -> None:
        """Run cycles until ``stop_event`` is set or ``max_cycles`` have run.

        Args:
            stop_event: Set to end the loop; an in-flight cycle is allowed to
                finish first, a pending wait is cut short.
            max_cycles: Stop after this many cycles. None runs forever.
        """
        stop_event = stop_event or asyncio.Event()
        clock = asyncio.get_running_loop()
        logger.info(f"Scraping every {self.interval}s")

        completed = 0
        while not stop_event.is_set():
            started = clock.time()
            await self.run_cycle()
            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                break

            delay = max(0.0, self.interval - (clock.time() - started))
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                continue

        logger.info(f"Scrape loop stopped after {completed} cycles")
