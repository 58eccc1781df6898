from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

from .cards import Card
from .models import HandCategory

WHEEL = [2, 3, 4, 5, 14]


def evaluate(hand: Sequence[Card]) -> Optional[HandCategory]:
    """Classify a five-card hand against the Jacks or Better paytable.

    Returns None for anything that does not pay, including pairs below jacks.
    """
    if len(hand) != 5:
        raise ValueError(f"Expected 5 cards, got {len(hand)}")

    values = sorted(card.value for card in hand)
    suits = [card.suit for card in hand]

    value_counts = Counter(values)
    counts = sorted(value_counts.values(), reverse=True)

    is_flush = len(set(suits)) == 1
    is_straight = _is_straight(values)
    is_royal = is_straight and values[0] == 10

    if is_royal and is_flush:
        return HandCategory.ROYAL_FLUSH
    if is_straight and is_flush:
        return HandCategory.STRAIGHT_FLUSH
    if counts[0] == 4:
        return HandCategory.FOUR_OF_A_KIND
    if counts == [3, 2]:
        return HandCategory.FULL_HOUSE
    if is_flush:
        return HandCategory.FLUSH
    if is_straight:
        return HandCategory.STRAIGHT
    if counts[0] == 3:
        return HandCategory.THREE_OF_A_KIND
    if counts == [2, 2, 1]:
        return HandCategory.TWO_PAIR
    if counts[0] == 2:
        pair_value = next(value for value, count in value_counts.items() if count == 2)
        if pair_value >= 11:
            return HandCategory.JACKS_OR_BETTER
    return None


def _is_straight(values: List[int]) -> bool:
    if values == WHEEL:
        return True
    return all(values[idx] == values[idx - 1] + 1 for idx in range(1, len(values)))
