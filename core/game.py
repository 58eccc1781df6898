from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Set, Union

from .animation import AnimationBatch
from .cards import Card, cards_to_labels, create_deck, deal, draw_replacement
from .errors import InsufficientBalanceError
from .evaluator import evaluate
from .layout import HAND_SIZE, HELD_OFFSET, Layout
from .models import GameConfig, GameState, HandCategory
from .payouts import paytable_rows, win_amount

LOGGER = logging.getLogger("video_poker")

# GameEngine owns one player's table: balance, deck, hand and the round state
# machine. Rendering and input plumbing live outside; they read
# snapshot_payload() and feed press_action()/toggle_hold()/advance().

Event = Dict[str, object]


# Round states. Each one carries only what is valid while it is current.


@dataclass
class Idle:
    phase: ClassVar[GameState] = GameState.INITIAL


@dataclass
class Dealing:
    batch: AnimationBatch
    phase: ClassVar[GameState] = GameState.ANIMATING


@dataclass
class Selecting:
    held: Set[int] = field(default_factory=set)
    phase: ClassVar[GameState] = GameState.SELECT


@dataclass
class Rolling:
    batch: AnimationBatch
    phase: ClassVar[GameState] = GameState.ANIMATING_ROLL


@dataclass
class Showing:
    category: Optional[HandCategory]
    win_amount: int
    phase: ClassVar[GameState] = GameState.RESULT


RoundState = Union[Idle, Dealing, Selecting, Rolling, Showing]

BUTTON_LABELS = {
    GameState.SELECT: "Roll",
    GameState.RESULT: "Next",
}


@dataclass
class TableContext:
    # All mutable info about the table between and during rounds.
    balance: int
    bet: int
    state: RoundState = field(default_factory=Idle)
    deck: List[Card] = field(default_factory=list)
    hand: List[Card] = field(default_factory=list)
    discarded: List[Card] = field(default_factory=list)
    round_id: int = 0
    notice: Optional[str] = None
    bet_menu_open: bool = False

    @property
    def phase(self) -> GameState:
        return self.state.phase


class GameEngine:
    """Single-player Jacks or Better video poker."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        layout: Optional[Layout] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.layout = layout or Layout()
        self.rng = random.Random(seed)
        self.context = TableContext(balance=self.config.starting_balance, bet=self.config.default_bet)

    @property
    def state(self) -> GameState:
        return self.context.phase

    @property
    def is_animating(self) -> bool:
        return isinstance(self.context.state, (Dealing, Rolling))

    # User actions ----------------------------------------------------

    def press_action(self) -> List[Event]:
        """The Play / Roll / Next button."""
        phase = self.state
        if phase == GameState.INITIAL:
            try:
                return self.start_round()
            except InsufficientBalanceError as exc:
                self.context.notice = exc.msg
                LOGGER.info("Play rejected: balance %s below bet %s", exc.balance, exc.bet)
                return [{"ev": "NOTICE", "code": exc.code, "msg": exc.msg, "balance": exc.balance, "bet": exc.bet}]
        if phase == GameState.SELECT:
            return self.roll()
        if phase == GameState.RESULT:
            return self.collect()
        LOGGER.debug("Ignoring action button during %s", phase.value)
        return []

    def toggle_hold(self, position: int) -> List[Event]:
        state = self.context.state
        if not isinstance(state, Selecting):
            LOGGER.debug("Ignoring card click during %s", self.state.value)
            return []
        if not 0 <= position < HAND_SIZE:
            return []
        if position in state.held:
            state.held.discard(position)
        else:
            state.held.add(position)
        return [{"ev": "HOLD", "position": position, "held": position in state.held}]

    def open_bet_menu(self) -> List[Event]:
        if self.state != GameState.INITIAL or self.context.bet_menu_open:
            return []
        self.context.bet_menu_open = True
        return [{"ev": "BET_MENU", "open": True}]

    def close_bet_menu(self) -> List[Event]:
        if not self.context.bet_menu_open:
            return []
        self.context.bet_menu_open = False
        return [{"ev": "BET_MENU", "open": False}]

    def select_bet(self, amount: int) -> List[Event]:
        if self.state != GameState.INITIAL:
            LOGGER.debug("Ignoring bet change during %s", self.state.value)
            return []
        if amount not in self.config.bet_options:
            raise ValueError(f"Unsupported bet: {amount}")
        self.context.bet = amount
        self.context.bet_menu_open = False
        return [{"ev": "BET", "bet": amount}]

    def dismiss_notice(self) -> List[Event]:
        if self.context.notice is None:
            return []
        self.context.notice = None
        return [{"ev": "NOTICE_CLEARED"}]

    # Round lifecycle -------------------------------------------------

    def start_round(self) -> List[Event]:
        ctx = self.context
        if not isinstance(ctx.state, Idle):
            raise RuntimeError("Round already in progress")
        if ctx.balance < ctx.bet:
            raise InsufficientBalanceError(ctx.balance, ctx.bet)

        ctx.balance -= ctx.bet
        ctx.deck = create_deck(rng=self.rng)
        ctx.hand = deal(ctx.deck, HAND_SIZE)
        ctx.discarded = []
        ctx.notice = None
        ctx.bet_menu_open = False
        ctx.round_id += 1
        ctx.state = Dealing(self._batch(ctx.hand, list(range(HAND_SIZE))))

        LOGGER.info("Round %s started: bet=%s balance=%s", ctx.round_id, ctx.bet, ctx.balance)
        return [
            {
                "ev": "DEAL",
                "round": ctx.round_id,
                "bet": ctx.bet,
                "balance": ctx.balance,
                "deck_remaining": len(ctx.deck),
            }
        ]

    def roll(self) -> List[Event]:
        ctx = self.context
        state = ctx.state
        if not isinstance(state, Selecting):
            raise RuntimeError("Nothing to roll")

        replaced = [position for position in range(HAND_SIZE) if position not in state.held]
        new_cards: List[Card] = []
        for position in replaced:
            card = draw_replacement(ctx.deck)
            ctx.discarded.append(ctx.hand[position])
            ctx.hand[position] = card
            new_cards.append(card)

        events: List[Event] = [
            {
                "ev": "DRAW",
                "round": ctx.round_id,
                "held": sorted(state.held),
                "replaced": replaced,
                "deck_remaining": len(ctx.deck),
            }
        ]
        if new_cards:
            ctx.state = Rolling(self._batch(new_cards, replaced))
        else:
            # Everything held: nothing to animate.
            events.extend(self._resolve())
        return events

    def advance(self, delta_ms: float) -> List[Event]:
        """Step the running animation; completes the transient states."""
        ctx = self.context
        state = ctx.state
        if not isinstance(state, (Dealing, Rolling)):
            return []
        if state.batch.advance(delta_ms):
            return []

        if isinstance(state, Dealing):
            ctx.state = Selecting()
            return [{"ev": "DEALT", "round": ctx.round_id, "cards": cards_to_labels(ctx.hand)}]
        return self._resolve()

    def collect(self) -> List[Event]:
        ctx = self.context
        state = ctx.state
        if not isinstance(state, Showing):
            raise RuntimeError("No result to collect")

        ctx.balance += state.win_amount
        ctx.hand = []
        ctx.state = Idle()
        LOGGER.info("Round %s closed: credited=%s balance=%s", ctx.round_id, state.win_amount, ctx.balance)
        return [{"ev": "COLLECT", "round": ctx.round_id, "credited": state.win_amount, "balance": ctx.balance}]

    def _resolve(self) -> List[Event]:
        ctx = self.context
        category = evaluate(ctx.hand)
        amount = win_amount(category, ctx.bet)
        ctx.state = Showing(category=category, win_amount=amount)
        LOGGER.info(
            "Round %s result: %s win=%s",
            ctx.round_id,
            category.value if category else "no win",
            amount,
        )
        return [
            {
                "ev": "RESULT",
                "round": ctx.round_id,
                "cards": cards_to_labels(ctx.hand),
                "hand": category.value if category else None,
                "win_amount": amount,
            }
        ]

    def _batch(self, cards: List[Card], positions: List[int]) -> AnimationBatch:
        return AnimationBatch.for_cards(
            cards,
            positions,
            self.layout,
            base_ms=self.config.deal_base_ms,
            stagger_ms=self.config.deal_stagger_ms,
        )

    # Payloads --------------------------------------------------------

    def winning_hand(self) -> Optional[HandCategory]:
        state = self.context.state
        return state.category if isinstance(state, Showing) else None

    def current_win(self) -> int:
        state = self.context.state
        return state.win_amount if isinstance(state, Showing) else 0

    def held_positions(self) -> Set[int]:
        state = self.context.state
        return set(state.held) if isinstance(state, Selecting) else set()

    def snapshot_payload(self) -> Dict[str, object]:
        ctx = self.context
        phase = self.state
        winning = self.winning_hand()
        return {
            "state": phase.value,
            "round": ctx.round_id,
            "balance": ctx.balance,
            "bet": ctx.bet,
            "bet_options": list(self.config.bet_options),
            "bet_menu_open": ctx.bet_menu_open,
            "button": BUTTON_LABELS.get(phase, "Play"),
            "deck_count": len(ctx.deck),
            "paytable": paytable_rows(ctx.bet, winning),
            "hand": self._hand_payload(),
            "messages": self._messages(),
            "notice": ctx.notice,
            "winning_hand": winning.value if winning else None,
            "win_amount": self.current_win(),
        }

    def _hand_payload(self) -> List[Dict[str, object]]:
        ctx = self.context
        state = ctx.state
        slots: List[Dict[str, object]] = []

        if not ctx.hand:
            for position in range(HAND_SIZE):
                x, y = self.layout.slot(position)
                slots.append({"position": position, "kind": "placeholder", "x": x, "y": y})
            return slots

        animating = {}
        if isinstance(state, (Dealing, Rolling)):
            animating = {entry.position: entry for entry in state.batch.entries}
        held = self.held_positions()

        for position, card in enumerate(ctx.hand):
            entry = animating.get(position)
            if entry is not None:
                slots.append({"kind": "animating", **entry.payload()})
                continue
            x, y = self.layout.slot(position)
            is_held = position in held
            slots.append(
                {
                    "position": position,
                    "kind": "card",
                    "x": x,
                    "y": y - HELD_OFFSET if is_held else y,
                    "held": is_held,
                    "face_up": True,
                    "card": card.payload(),
                }
            )
        return slots

    def _messages(self) -> List[str]:
        phase = self.state
        if phase == GameState.SELECT:
            return ["Click cards to HOLD"]
        if phase == GameState.RESULT:
            winning = self.winning_hand()
            if winning is not None:
                return [f"{winning.value}!", f"Win: ${self.current_win()}"]
            return ["No Win", f"Lost: -${self.context.bet}"]
        return []
