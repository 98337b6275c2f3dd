"""Tests for the console report."""

import io
import logging

from dk_odds_scraper.models import BetType, Market, Side
from dk_odds_scraper.report import (
    NO_MARKETS_MESSAGE,
    format_market,
    format_markets,
    group_by_game,
    print_markets,
)


def market(game="Chiefs vs Ravens", side=Side.OVER, bet_type=BetType.SPREAD, line=-3.5, odds=-110.0):
    return Market(game=game, side=side, bet_type=bet_type, line=line, odds=odds)


class TestFormatMarket:
    """Tests for single market lines."""

    def test_with_line(self):
        assert format_market(market()) == "  Spread     | over     | Line:   -3.5 | Odds:   -110"

    def test_zero_line_omitted(self):
        line = format_market(market(bet_type=BetType.MONEYLINE, line=0.0, odds=150.0))
        assert line == "  Moneyline  | over     | Odds:   +150"


class TestFormatMarkets:
    """Tests for the full report."""

    def test_empty(self):
        assert format_markets([]) == NO_MARKETS_MESSAGE

    def test_grouped_by_game(self):
        markets = [
            market(game="Chiefs vs Ravens"),
            market(game="Bills vs Jets", line=-6.0),
            market(game="Chiefs vs Ravens", side=Side.UNDER, line=3.5),
        ]
        report = format_markets(markets)

        assert report.splitlines() == [
            "=== Found 3 Markets ===",
            "",
            "Chiefs vs Ravens",
            "----------------",
            "  Spread     | over     | Line:   -3.5 | Odds:   -110",
            "  Spread     | under    | Line:    3.5 | Odds:   -110",
            "",
            "Bills vs Jets",
            "-------------",
            "  Spread     | over     | Line:   -6.0 | Odds:   -110",
        ]

    def test_group_by_game_keeps_first_appearance_order(self):
        markets = [market(game="B"), market(game="A"), market(game="B")]
        assert list(group_by_game(markets)) == ["B", "A"]


class TestPrintMarkets:
    """Tests for print_markets."""

    def test_prints_report(self):
        out = io.StringIO()
        print_markets([market()], file=out)
        assert "=== Found 1 Markets ===" in out.getvalue()

    def test_empty_logs_no_markets(self, caplog):
        out = io.StringIO()
        with caplog.at_level(logging.INFO):
            print_markets([], file=out)
        assert out.getvalue() == ""
        assert NO_MARKETS_MESSAGE in caplog.text
