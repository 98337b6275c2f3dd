"""Command-line entry point for the odds scraper.

Usage:
    # Scrape every 30 seconds until stopped. Ctrl-C lets the current
    # scrape finish (up to --timeout); a second Ctrl-C cancels it.
    dk-odds-scraper

    # One scrape, then exit
    dk-odds-scraper --once

    # Custom page, interval and timeout, with a visible browser
    dk-odds-scraper --url https://sportsbook.draftkings.com/leagues/basketball/nba \\
        --interval 60 --timeout 90 --headed
"""

import argparse
import asyncio
import contextlib
import logging
import signal
import sys

from . import __version__
from .config import ScraperConfig, load_config
from .exceptions import ConfigurationError
from .extractor import MarketExtractor
from .fetcher import PageFetcher
from .loop import ScrapeLoop
from .utils import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dk-odds-scraper",
        description="Periodically scrape sportsbook markets and print them",
        epilog=(
            "Ctrl-C stops after the in-flight scrape finishes, which can take up to "
            "--timeout seconds; press it again to cancel the scrape immediately."
        ),
    )
    parser.add_argument("--url", help="Sportsbook page to scrape")
    parser.add_argument(
        "--interval",
        "-i",
        type=float,
        help="Seconds between scrape starts (default: 30)",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        type=float,
        help="Maximum seconds for one page fetch (default: 120)",
    )
    parser.add_argument("--config", "-c", help="YAML config file")
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scrape and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_loop(config: ScraperConfig) -> ScrapeLoop:
    """Wire a ScrapeLoop from configuration."""
    fetcher = PageFetcher(
        url=config.url,
        wait_selector=config.wait_selector,
        timeout=config.timeout,
        headless=config.headless,
    )
    return ScrapeLoop(
        fetcher,
        extractor=MarketExtractor(selectors=config.selectors),
        interval=config.interval,
    )


def handle_stop_signal(stop_event: asyncio.Event, task: asyncio.Task) -> None:
    """First signal lets the current cycle finish; a second cancels it."""
    if stop_event.is_set():
        logger.warning("Second stop signal, cancelling in-flight scrape")
        task.cancel()
    else:
        logger.info("Stopping after the current scrape (signal again to cancel it)")
        stop_event.set()


async def run_forever(scrape_loop: ScrapeLoop) -> None:
    """Run the loop until SIGINT or SIGTERM."""
    stop_event = asyncio.Event()
    task = asyncio.create_task(scrape_loop.run(stop_event))
    event_loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is unavailable on Windows; Ctrl-C still raises KeyboardInterrupt there
        with contextlib.suppress(NotImplementedError):
            event_loop.add_signal_handler(sig, handle_stop_signal, stop_event, task)

    try:
        await task
    except asyncio.CancelledError:
        if not task.cancelled():
            raise
        logger.info("In-flight scrape cancelled")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            args.config,
            url=args.url,
            interval=args.interval,
            timeout=args.timeout,
            headless=False if args.headed else None,
            log_level=args.log_level,
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)
    logger.info(f"Starting sportsbook scraper for {config.url}")
    scrape_loop = build_loop(config)

    try:
        if args.once:
            markets = asyncio.run(scrape_loop.run_cycle())
            return 0 if markets else 1
        asyncio.run(run_forever(scrape_loop))
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
