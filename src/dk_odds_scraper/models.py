"""Data models for sportsbook market records."""

from dataclasses import asdict, dataclass
from enum import Enum


class BetType(Enum):
    """Category of wager."""

    SPREAD = "Spread"
    TOTAL = "Total"
    MONEYLINE = "Moneyline"


class Side(Enum):
    """Which of the two opposing selections a button represents."""

    OVER = "over"
    UNDER = "under"


# Column order of the bet types inside a game's button group
BET_TYPES: tuple[BetType, ...] = (BetType.SPREAD, BetType.TOTAL, BetType.MONEYLINE)


@dataclass(frozen=True)
class Market:
    """One bettable selection for a game.

    A ``line`` of 0.0 means "no line" (moneylines) and is also what an
    unparseable line resolves to; the two cases cannot be told apart.
    """

    game: str
    side: Side
    bet_type: BetType
    line: float
    odds: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["side"] = self.side.value
        data["bet_type"] = self.bet_type.value
        return data
