"""Video poker engine: deck, evaluator, paytable, animation and round state machine."""

from .animation import AnimationBatch, AnimationEntry
from .cards import Card, RANKS, SUITS, create_deck, deal, draw_replacement, parse_cards
from .errors import GameError, InsufficientBalanceError
from .evaluator import evaluate
from .game import GameEngine, TableContext
from .layout import Layout, hit_test
from .loop import GameLoop
from .models import GameConfig, GameState, HandCategory
from .payouts import PAYOUTS, win_amount

__all__ = [
    "AnimationBatch",
    "AnimationEntry",
    "Card",
    "RANKS",
    "SUITS",
    "create_deck",
    "deal",
    "draw_replacement",
    "parse_cards",
    "GameError",
    "InsufficientBalanceError",
    "evaluate",
    "GameEngine",
    "TableContext",
    "Layout",
    "hit_test",
    "GameLoop",
    "GameConfig",
    "GameState",
    "HandCategory",
    "PAYOUTS",
    "win_amount",
]
