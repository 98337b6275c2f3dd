"""Console report of extracted markets, grouped by game."""

import logging
import sys
from typing import TextIO

from .models import Market

logger = logging.getLogger(__name__)

NO_MARKETS_MESSAGE = "No markets found"


def group_by_game(markets: list[Market]) -> dict[str, list[Market]]:
    """Group markets by game, keeping games in first-appearance order."""
    games: dict[str, list[Market]] = {}
    for market in markets:
        games.setdefault(market.game, []).append(market)
    return games


def format_market(market: Market) -> str:
    """Format one market line; the line column is omitted when it is zero."""
    prefix = f"  {market.bet_type.value:<10} | {market.side.value:<8} | "
    if market.line != 0:
        return f"{prefix}Line: {market.line:6.1f} | Odds: {market.odds:+6.0f}"
    return f"{prefix}Odds: {market.odds:+6.0f}"


def format_markets(markets: list[Market]) -> str:
    """Render the full report for one scrape cycle."""
    if not markets:
        return NO_MARKETS_MESSAGE

    lines = [f"=== Found {len(markets)} Markets ===", ""]
    for game, game_markets in group_by_game(markets).items():
        lines.append(game)
        lines.append("-" * len(game))
        lines.extend(format_market(m) for m in game_markets)
        lines.append("")
    return "\n".join(lines)


def print_markets(markets: list[Market], file: TextIO | None = None) -> None:
    """Print the report for one scrape cycle."""
    if not markets:
        logger.info(NO_MARKETS_MESSAGE)
        return
    print("\n" + format_markets(markets), file=file or sys.stdout)
