from __future__ import annotations

from typing import List, Sequence

from core.cards import Card, cards_to_labels, ordered_deck, parse_cards
from core.game import GameEngine
from core.models import GameConfig

ALL_LABELS = sorted(cards_to_labels(ordered_deck()))


def create_engine(*, starting_balance: int = 200, bet: int = 1, seed: int = 42) -> GameEngine:
    """Instantiate an engine with a reproducible shuffle."""
    engine = GameEngine(GameConfig(starting_balance=starting_balance), seed=seed)
    if bet != engine.context.bet:
        engine.select_bet(bet)
    return engine


def stacked_deck(front: Sequence[str], draws: Sequence[str] = ()) -> List[Card]:
    """A full deck whose head deals `front` and whose tail pops `draws` in order."""
    head = parse_cards(front)
    tail = parse_cards(draws)
    used = set(front) | set(draws)
    middle = [card for card in ordered_deck() if card.label not in used]
    return head + middle + list(reversed(tail))


def rig_deck(monkeypatch, front: Sequence[str], draws: Sequence[str] = ()) -> None:
    monkeypatch.setattr("core.game.create_deck", lambda seed=None, rng=None: stacked_deck(front, draws))


def finish_animation(engine: GameEngine, step_ms: float = 100, max_steps: int = 100) -> list:
    """Advance the clock until the running batch completes."""
    events: list = []
    for _ in range(max_steps):
        if not engine.is_animating:
            break
        events.extend(engine.advance(step_ms))
    assert not engine.is_animating
    return events


def deal_to_select(engine: GameEngine) -> None:
    engine.press_action()
    finish_animation(engine)


def table_labels(engine: GameEngine) -> List[str]:
    ctx = engine.context
    return sorted(cards_to_labels(ctx.deck + ctx.hand + ctx.discarded))
