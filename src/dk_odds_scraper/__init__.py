"""DraftKings odds scraper - periodic extraction of sportsbook markets.

Loads a client-rendered sportsbook page in headless Chromium, recovers
game, side, bet type, line and odds for every market button, and prints
a report on a fixed interval.
"""

__version__ = "0.1.0"

from .config import ScraperConfig, load_config
from .exceptions import (
    ConfigurationError,
    FetchError,
    MarkupParseError,
    OddsParseError,
    ScraperError,
)
from .extractor import MarketExtractor, MarketSelectors, classify_button, parse_markets
from .fetcher import PageFetcher
from .loop import LoopState, ScrapeLoop
from .models import BET_TYPES, BetType, Market, Side
from .odds import parse_odds
from .report import format_markets, print_markets
from .utils import setup_logging

__all__ = [
    "__version__",
    # Config
    "ScraperConfig",
    "load_config",
    # Errors
    "ScraperError",
    "FetchError",
    "MarkupParseError",
    "OddsParseError",
    "ConfigurationError",
    # Models
    "Market",
    "BetType",
    "Side",
    "BET_TYPES",
    # Pipeline
    "parse_odds",
    "MarketExtractor",
    "MarketSelectors",
    "classify_button",
    "parse_markets",
    "PageFetcher",
    "ScrapeLoop",
    "LoopState",
    # Output
    "format_markets",
    "print_markets",
    "setup_logging",
]
