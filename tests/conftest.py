"""Shared fixtures: synthetic sportsbook markup."""

import pytest


def button_html(points: str, odds: str) -> str:
    return (
        '<div class="cb-market__button">'
        f'<span class="cb-market__button-points">{points}</span>'
        f'<span class="cb-market__button-odds">{odds}</span>'
        "</div>"
    )


def game_html(teams: list[str], buttons: list[tuple[str, str]]) -> str:
    labels = "".join(
        f'<div class="cb-market__label"><span class="cb-market__label-inner"> {team} </span></div>'
        for team in teams
    )
    return (
        '<div class="cb-market__template">'
        f"{labels}"
        f'<div class="cb-market__buttons">{"".join(button_html(p, o) for p, o in buttons)}</div>'
        "</div>"
    )


def page_html(*games: str) -> str:
    return (
        "<html><head><title>NFL Odds</title></head><body>"
        f'<div class="cms-market-selector-content">{"".join(games)}</div>'
        "</body></html>"
    )


# Spread, Total, Moneyline for the over side, then the under side
CHIEFS_RAVENS_BUTTONS = [
    ("-3.5", "−110"),
    ("O 47.5", "-105"),
    ("", "-180"),
    ("+3.5", "-110"),
    ("U 47.5", "-115"),
    ("", "+150"),
]

BILLS_JETS_BUTTONS = [
    ("-6", "-112"),
    ("41", "+100"),
    ("", "−250"),
    ("+6", "-108"),
    ("41", "-120"),
    ("", "+205"),
]


@pytest.fixture
def single_game_page():
    """Page with one complete game."""
    return page_html(game_html(["Kansas City Chiefs", "Baltimore Ravens"], CHIEFS_RAVENS_BUTTONS))


@pytest.fixture
def two_game_page():
    """Page with two complete games."""
    return page_html(
        game_html(["Kansas City Chiefs", "Baltimore Ravens"], CHIEFS_RAVENS_BUTTONS),
        game_html(["Buffalo Bills", "New York Jets"], BILLS_JETS_BUTTONS),
    )
