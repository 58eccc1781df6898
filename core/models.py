from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class GameState(str, Enum):
    INITIAL = "INITIAL"
    ANIMATING = "ANIMATING"
    SELECT = "SELECT"
    ANIMATING_ROLL = "ANIMATING_ROLL"
    RESULT = "RESULT"


class HandCategory(str, Enum):
    ROYAL_FLUSH = "Royal Flush"
    STRAIGHT_FLUSH = "Straight Flush"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "Three of a Kind"
    TWO_PAIR = "Two Pair"
    JACKS_OR_BETTER = "Jacks or Better"


@dataclass
class GameConfig:
    starting_balance: int = 200
    default_bet: int = 1
    bet_options: Tuple[int, ...] = (1, 2, 5, 10, 25)
    deal_base_ms: int = 600
    deal_stagger_ms: int = 80

    def __post_init__(self) -> None:
        if self.starting_balance < 0:
            raise ValueError("starting_balance must be non-negative")
        if not self.bet_options or any(option <= 0 for option in self.bet_options):
            raise ValueError("bet_options must be positive")
        if self.default_bet not in self.bet_options:
            raise ValueError(f"default_bet {self.default_bet} is not a bet option")
