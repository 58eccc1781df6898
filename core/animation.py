from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .cards import Card
from .layout import Layout

MOVE_PHASE = 0.4


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass
class AnimationEntry:
    """A card travelling from the deck to a hand slot, then flipping face up."""

    card: Card
    position: int
    start: Tuple[float, float]
    end: Tuple[float, float]
    duration: float
    progress: float = 0.0

    def advance(self, delta_ms: float) -> None:
        if self.progress >= 1:
            return
        self.progress = min(self.progress + delta_ms / self.duration, 1.0)

    @property
    def done(self) -> bool:
        return self.progress >= 1

    @property
    def xy(self) -> Tuple[float, float]:
        if self.progress >= MOVE_PHASE:
            return self.end
        eased = ease_out_cubic(self.progress / MOVE_PHASE)
        return (
            lerp(self.start[0], self.end[0], eased),
            lerp(self.start[1], self.end[1], eased),
        )

    @property
    def flip_progress(self) -> float:
        if self.progress < MOVE_PHASE:
            return 0.0
        return (self.progress - MOVE_PHASE) / (1 - MOVE_PHASE)

    @property
    def face_up(self) -> bool:
        return self.flip_progress >= 0.5

    @property
    def scale_x(self) -> float:
        # Horizontal squash: 1 -> 0 at the reveal -> 1.
        return abs(math.cos(self.flip_progress * math.pi))

    def payload(self) -> Dict[str, object]:
        x, y = self.xy
        return {
            "position": self.position,
            "x": x,
            "y": y,
            "progress": self.progress,
            "flip": self.flip_progress,
            "scale_x": self.scale_x,
            "face_up": self.face_up,
            "card": self.card.payload() if self.face_up else None,
        }


@dataclass
class AnimationBatch:
    entries: List[AnimationEntry] = field(default_factory=list)

    @classmethod
    def for_cards(
        cls,
        cards: Sequence[Card],
        positions: Sequence[int],
        layout: Layout,
        base_ms: float = 600,
        stagger_ms: float = 80,
    ) -> "AnimationBatch":
        if len(cards) != len(positions):
            raise ValueError("cards and positions must line up")
        start = layout.deck_position
        entries = [
            AnimationEntry(
                card=card,
                position=position,
                start=start,
                end=layout.slot(position),
                duration=base_ms + idx * stagger_ms,
            )
            for idx, (card, position) in enumerate(zip(cards, positions))
        ]
        return cls(entries)

    def advance(self, delta_ms: float) -> bool:
        """Step every entry; returns True while any entry is still moving."""
        for entry in self.entries:
            entry.advance(delta_ms)
        return not self.done

    @property
    def done(self) -> bool:
        return all(entry.done for entry in self.entries)

    @property
    def positions(self) -> List[int]:
        return [entry.position for entry in self.entries]

    def payload(self) -> List[Dict[str, object]]:
        return [entry.payload() for entry in self.entries]
