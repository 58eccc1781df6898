from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

SUITS = ("hearts", "spades", "clubs", "diamonds")
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

SUIT_LETTERS = {"hearts": "h", "spades": "s", "clubs": "c", "diamonds": "d"}
LETTER_SUITS = {letter: suit for suit, letter in SUIT_LETTERS.items()}


def rank_value(rank: str) -> int:
    # Ace plays high for evaluation; the wheel is handled by the evaluator.
    if rank == "A":
        return 14
    return RANKS.index(rank) + 1


@dataclass(frozen=True, eq=False)
class Card:
    """One physical card. Equality is identity: two decks never share cards."""

    suit: str
    rank: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def value(self) -> int:
        return rank_value(self.rank)

    @property
    def sprite_x(self) -> int:
        return RANKS.index(self.rank)

    @property
    def sprite_y(self) -> int:
        return SUITS.index(self.suit)

    @property
    def label(self) -> str:
        return f"{self.rank}{SUIT_LETTERS[self.suit]}"

    def payload(self) -> dict:
        return {
            "label": self.label,
            "suit": self.suit,
            "rank": self.rank,
            "sprite": [self.sprite_x, self.sprite_y],
        }


def ordered_deck() -> List[Card]:
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def shuffle(cards: Sequence[Card], rng: random.Random) -> List[Card]:
    """Fisher-Yates from the last index down to 1; returns a new list."""
    arr = list(cards)
    for i in range(len(arr) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def create_deck(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Card]:
    if rng is None:
        rng = random.Random(seed)
    return shuffle(ordered_deck(), rng)


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def draw_replacement(deck: List[Card]) -> Card:
    # Draws come off the tail so they can never collide with dealt cards.
    if not deck:
        raise ValueError("Not enough cards left in deck")
    return deck.pop()


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) not in (2, 3):
        raise ValueError(f"Invalid card label: {label}")
    suit = LETTER_SUITS.get(label[-1].lower())
    if suit is None:
        raise ValueError(f"Invalid suit: {label[-1]}")
    return Card(suit, label[:-1].upper())


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
