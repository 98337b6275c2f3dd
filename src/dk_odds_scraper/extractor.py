"""Extraction of market records from rendered sportsbook markup.

The sportsbook page carries no explicit side or bet-type labels on its
buttons. Each game wrapper holds two team labels followed by a group of six
buttons laid out as::

    index:   0       1       2          3       4       5
             Spread  Total   Moneyline  Spread  Total   Moneyline
             over    over    over       under   under   under

so both the side and the bet type are recovered from a button's position.
That assumption lives in ``classify_button`` and nowhere else. A game with a
missing or extra button shifts every later assignment in that game; this is
not detected.
"""

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .exceptions import MarkupParseError
from .models import BET_TYPES, BetType, Market, Side
from .odds import parse_odds

logger = logging.getLogger(__name__)

# Buttons per side in one game's group
BUTTONS_PER_SIDE = len(BET_TYPES)


@dataclass(frozen=True)
class MarketSelectors:
    """CSS selectors locating market data in the rendered page."""

    game_wrapper: str = ".cb-market__template"
    team_label: str = ".cb-market__label-inner"
    button: str = ".cb-market__button"
    points: str = ".cb-market__button-points"
    odds: str = ".cb-market__button-odds"


def classify_button(index: int) -> tuple[Side, BetType]:
    """Map a button's 0-based position within its game to (side, bet type).

    Bet types cycle Spread, Total, Moneyline; the first three buttons are the
    "over" side and every later button is "under".

    Args:
        index: Position of the button among its game's buttons.

    Returns:
        Tuple of (side, bet_type).
    """
    if index < 0:
        raise ValueError(f"Button index must be non-negative, got {index}")
    side = Side.OVER if index < BUTTONS_PER_SIDE else Side.UNDER
    return side, BET_TYPES[index % BUTTONS_PER_SIDE]


def _select_text(node, selector: str) -> str:
    """Concatenated text of every node under ``node`` matching ``selector``."""
    return "".join(match.get_text() for match in node.select(selector))


class MarketExtractor:
    """Walks rendered markup and emits one Market per market button.

    Example:
        ```python
        extractor = MarketExtractor()
        markets = extractor.extract(html)
        for market in markets:
            print(market.game, market.bet_type.value, market.odds)
        ```
    """

    def __init__(self, selectors: MarketSelectors | None = None, parser: str = "lxml") -> None:
        self.selectors = selectors or MarketSelectors()
        self.parser = parser

    def parse_document(self, html: str) -> BeautifulSoup:
        """Parse markup into a queryable document.

        Raises:
            MarkupParseError: If the markup cannot be parsed at all.
        """
        try:
            return BeautifulSoup(html, self.parser)
        except (ParserRejectedMarkup, TypeError) as e:
            raise MarkupParseError(f"Could not parse markup: {e}") from e

    def extract(self, html: str) -> list[Market]:
        """Extract markets from rendered markup, in document order.

        Markup that cannot be parsed yields an empty list, the same as a page
        with no markets on it.
        """
        try:
            doc = self.parse_document(html)
        except MarkupParseError as e:
            logger.error(f"Error parsing HTML: {e}")
            return []

        markets: list[Market] = []
        for wrapper in doc.select(self.selectors.game_wrapper):
            markets.extend(self._extract_game(wrapper))
        return markets

    def _game_description(self, wrapper) -> str | None:
        labels = wrapper.select(self.selectors.team_label)
        if len(labels) < 2:
            return None

        team_a = labels[0].get_text().strip()
        team_b = labels[1].get_text().strip()
        if not team_a or not team_b:
            return None
        return f"{team_a} vs {team_b}"

    def _extract_game(self, wrapper) -> list[Market]:
        game = self._game_description(wrapper)
        if game is None:
            logger.debug("Skipping game wrapper without two team labels")
            return []

        markets = []
        for index, button in enumerate(wrapper.select(self.selectors.button)):
            side, bet_type = classify_button(index)
            markets.append(
                Market(
                    game=game,
                    side=side,
                    bet_type=bet_type,
                    line=parse_odds(_select_text(button, self.selectors.points)),
                    odds=parse_odds(_select_text(button, self.selectors.odds)),
                )
            )
        return markets


def parse_markets(html: str, selectors: MarketSelectors | None = None) -> list[Market]:
    """Extract markets from markup with a default extractor."""
    return MarketExtractor(selectors=selectors).extract(html)
