"""Tests for the periodic scrape loop."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from dk_odds_scraper.exceptions import FetchError
from dk_odds_scraper.loop import LoopState, ScrapeLoop


def make_fetcher(*results) -> MagicMock:
    """Fetcher whose successive fetch() calls return or raise ``results``."""
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(side_effect=list(results))
    return fetcher


class TestRunCycle:
    """Tests for a single fetch, extract, report cycle."""

    @pytest.mark.asyncio
    async def test_reports_extracted_markets(self, single_game_page):
        reporter = MagicMock()
        loop = ScrapeLoop(make_fetcher(single_game_page), reporter=reporter)

        markets = await loop.run_cycle()

        assert len(markets) == 6
        reporter.assert_called_once_with(markets)
        assert loop.state == LoopState.IDLE
        assert loop.cycles == 1

    @pytest.mark.asyncio
    async def test_fetch_error_logged_and_skipped(self, caplog):
        reporter = MagicMock()
        loop = ScrapeLoop(make_fetcher(FetchError("boom", timed_out=True)), reporter=reporter)

        with caplog.at_level(logging.ERROR):
            result = await loop.run_cycle()

        assert result is None
        reporter.assert_not_called()
        assert "Error scraping markets: boom" in caplog.text
        assert loop.state == LoopState.IDLE

    @pytest.mark.asyncio
    async def test_state_is_scraping_during_fetch(self):
        loop = ScrapeLoop(MagicMock(), reporter=MagicMock())
        seen = []

        async def fetch():
            seen.append(loop.state)
            return "<html></html>"

        loop.fetcher.fetch = fetch
        await loop.run_cycle()

        assert seen == [LoopState.SCRAPING]
        assert loop.state == LoopState.IDLE

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        loop = ScrapeLoop(make_fetcher(KeyError("bug")), reporter=MagicMock())

        with pytest.raises(KeyError):
            await loop.run_cycle()
        assert loop.state == LoopState.IDLE


class TestRun:
    """Tests for the repeating loop."""

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_later_cycles(self, single_game_page):
        reporter = MagicMock()
        fetcher = make_fetcher(FetchError("down"), single_game_page, single_game_page)
        loop = ScrapeLoop(fetcher, reporter=reporter, interval=0.01)

        await loop.run(max_cycles=3)

        assert fetcher.fetch.await_count == 3
        assert reporter.call_count == 2

    @pytest.mark.asyncio
    async def test_stop_event_ends_wait_early(self):
        fetcher = make_fetcher("<html></html>")
        loop = ScrapeLoop(fetcher, reporter=MagicMock(), interval=60)
        stop = asyncio.Event()

        task = asyncio.create_task(loop.run(stop))
        await asyncio.sleep(0.05)
        stop.set()
        await asyncio.wait_for(task, timeout=1)

        assert fetcher.fetch.await_count == 1
        assert loop.state == LoopState.IDLE

    @pytest.mark.asyncio
    async def test_preset_stop_event_runs_nothing(self):
        fetcher = make_fetcher()
        loop = ScrapeLoop(fetcher, reporter=MagicMock())
        stop = asyncio.Event()
        stop.set()

        await loop.run(stop)

        fetcher.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cycles_do_not_overlap(self):
        active = 0
        peak = 0

        async def slow_fetch():
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.02)
            active -= 1
            return "<html></html>"

        fetcher = MagicMock()
        fetcher.fetch = slow_fetch
        loop = ScrapeLoop(fetcher, reporter=MagicMock(), interval=0.001)

        await loop.run(max_cycles=3)

        assert peak == 1
        assert loop.cycles == 3
