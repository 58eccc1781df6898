from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .models import GameState

# Screen geometry shared by the hit tester, the animation targets and the
# snapshot payload. Pixel values match the 1200x800 canvas the client draws.

HAND_SIZE = 5
HELD_OFFSET = 10


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    def payload(self) -> List[float]:
        return [self.x, self.y, self.width, self.height]


@dataclass(frozen=True)
class Layout:
    width: int = 1200
    height: int = 800
    card_width: int = 100
    card_height: int = 140
    card_spacing: int = 20
    button_width: int = 120
    button_height: int = 40

    @property
    def hand_origin(self) -> Tuple[float, float]:
        row_width = HAND_SIZE * self.card_width + (HAND_SIZE - 1) * self.card_spacing
        return (self.width - row_width) / 2, self.height / 2 - self.card_height / 2

    @property
    def deck_position(self) -> Tuple[float, float]:
        # Just below the middle card.
        return (
            self.width / 2 - self.card_width / 2,
            self.height / 2 + self.card_height / 2 + 30,
        )

    def slot(self, position: int) -> Tuple[float, float]:
        start_x, y = self.hand_origin
        return start_x + position * (self.card_width + self.card_spacing), y

    def card_rect(self, position: int) -> Rect:
        x, y = self.slot(position)
        return Rect(x, y, self.card_width, self.card_height)

    @property
    def bet_button(self) -> Rect:
        return Rect(self.width / 2 - 200, self.height - 50, self.button_width, self.button_height)

    @property
    def action_button(self) -> Rect:
        return Rect(self.width / 2 + 80, self.height - 50, self.button_width, self.button_height)

    def bet_option_rects(self, count: int) -> List[Rect]:
        gap = 20
        row_width = count * self.button_width + (count - 1) * gap
        start_x = (self.width - row_width) / 2
        y = self.height / 2 - self.button_height / 2
        return [
            Rect(start_x + idx * (self.button_width + gap), y, self.button_width, self.button_height)
            for idx in range(count)
        ]


@dataclass(frozen=True)
class Hit:
    # target is one of "bet_button", "action_button", "card", "bet_option"
    target: str
    index: Optional[int] = None


def hit_test(
    layout: Layout,
    x: float,
    y: float,
    state: GameState,
    *,
    menu_open: bool = False,
    bet_options: Sequence[int] = (),
) -> Optional[Hit]:
    if menu_open:
        for idx, rect in enumerate(layout.bet_option_rects(len(bet_options))):
            if rect.contains(x, y):
                return Hit("bet_option", idx)
        return None

    if state == GameState.INITIAL and layout.bet_button.contains(x, y):
        return Hit("bet_button")
    if layout.action_button.contains(x, y):
        return Hit("action_button")
    if state == GameState.SELECT:
        for position in range(HAND_SIZE):
            if layout.card_rect(position).contains(x, y):
                return Hit("card", position)
    return None
